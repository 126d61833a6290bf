from setuptools import find_packages, setup

setup(
    name="json_schema_to_mapping",
    version="0.1.0",
    description="Generate a typed model and matching Elasticsearch index mappings from JSON Schema definitions",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Database",
        "Intended Audience :: Developers",
    ],
    keywords="json schema elasticsearch mapping code generation go",
    author="François Lagunas",
    author_email="francois.lagunas@gmail.com",
    license="MIT",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "json_schema_to_mapping=json_schema_to_mapping.json_schema_to_mapping:json_schema_to_mapping",
        ],
    },
    include_package_data=True,
    package_data={
        "json_schema_to_mapping": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
