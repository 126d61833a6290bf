"""
Atomic file writer for generated mappings.

Ensures that file writes are atomic so that an interrupted run never
leaves a half-written mapping file behind.
"""

from __future__ import annotations

import json
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from .backends.go_backend import RAW_STRING_BACKTICK
from .errors import OutputValidationError

_GO_CONSTANT = re.compile(r"^Mapping\w+ = `(.*?)`$", re.MULTILINE | re.DOTALL)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(
        self,
        validate_go: Callable[[str], None] | None = None,
        validate_json: Callable[[str], None] | None = None,
    ):
        """Initialize the atomic writer.

        Args:
            validate_go: Optional validation function for Go output
            validate_json: Optional validation function for JSON output
        """
        self._validate_go = validate_go or self._default_validate_go
        self._validate_json = validate_json or self._default_validate_json

    def write(
        self,
        path: Path,
        content: str,
        output_format: str,
        validate: bool = True,
    ) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            output_format: Output format for validation ("go" or "json")
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate_content(content, output_format)

            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(
        self,
        path: Path,
        content: str,
        output_format: str,
        validate: bool = True,
    ) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            OutputValidationError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")
        self.write(path, content, output_format, validate)

    def _validate_content(self, content: str, output_format: str) -> None:
        if output_format == "go":
            self._validate_go(content)
        elif output_format == "json":
            self._validate_json(content)

    def _default_validate_go(self, content: str) -> None:
        """Default Go validation.

        Raises:
            OutputValidationError: If the package clause is missing, a raw string
                is unterminated, or a mapping constant is not valid JSON
        """
        if not re.search(r"^package \w+$", content, re.MULTILINE):
            raise OutputValidationError("Generated Go code is missing its package clause")

        # comments may quote anything; spliced backquotes sit inside JSON strings
        code = "\n".join(line for line in content.split("\n") if not line.startswith("//"))
        code = code.replace(RAW_STRING_BACKTICK, "")

        if code.count("`") % 2:
            raise OutputValidationError("Generated Go code has an unterminated raw string")

        for match in _GO_CONSTANT.finditer(code):
            try:
                json.loads(match.group(1))
            except json.JSONDecodeError as e:
                raise OutputValidationError(f"Mapping constant is not valid JSON: {e}") from e

    def _default_validate_json(self, content: str) -> None:
        try:
            json.loads(content)
        except json.JSONDecodeError as e:
            raise OutputValidationError(f"Generated JSON is not valid: {e}") from e
