import json
import logging
from pathlib import Path

import click

from .pipeline import (
    AtomicWriter,
    GeneratorConfig,
    OutputMode,
    OutputValidationError,
    PipelineGenerator,
    SchemaResolutionError,
    load_schema,
)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--package", "-p", default=None, type=str, help="Go package of the generated constants")
@click.option("--format", "-f", "output_format", default="go", type=click.Choice(["go", "json"]))
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True), help="Output file (default: stdout)")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing output file")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, resolve_path=True))
def json_schema_to_mapping(config, package, output_format, output, force, verbose, paths):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if package is not None:
        config.package_name = package
    if force:
        config.output.mode = OutputMode.FORCE

    schemas = [load_schema(path) for path in paths]
    try:
        out = PipelineGenerator(schemas, config, output_format).generate()
    except SchemaResolutionError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(out, nl=False)
        return

    output_path = Path(output)
    validate = config.output.validate_before_write
    writer = AtomicWriter()
    try:
        if config.output.mode == OutputMode.ERROR_IF_EXISTS:
            writer.write_if_not_exists(output_path, out, output_format, validate=validate)
        elif config.output.atomic_write:
            writer.write(output_path, out, output_format, validate=validate)
        else:
            with open(output_path, "w") as f:
                f.write(out)
    except (FileExistsError, OutputValidationError) as e:
        raise click.ClickException(str(e)) from e
