"""CLI entry point for openapi-helpers."""

from pathlib import Path

import click
import yaml

from openapi_helpers.config import GeneratorInfo
from openapi_helpers.document.base import Document, Operation
from openapi_helpers.document.loader import dump_document, load_document
from openapi_helpers.document.metadata import GenerationContext, load_endpoint_metadata
from openapi_helpers.errors import (
    DocumentLoadError,
    ExactlyOneExpectedError,
    UnsupportedGeneratorError,
)
from openapi_helpers.extensions import (
    register_default_filters,
    register_file_upload_filter,
    register_missing_schemas_filter,
)
from openapi_helpers.filters.base import FilterRegistry
from openapi_helpers.logger import configure_logging
from openapi_helpers.lookup import find_operation, operation_parameter, operation_response

FILTER_CHOICES = ("missing-schemas", "form-file")


def _load(doc_path: Path) -> Document:
    try:
        return load_document(doc_path)
    except DocumentLoadError as e:
        raise click.ClickException(str(e)) from e


def _operation(doc_path: Path, path: str, method: str) -> Operation:
    document = _load(doc_path)
    try:
        return find_operation(document, path, method)
    except ExactlyOneExpectedError as e:
        raise click.ClickException(f"Operation {e.key} not found") from e


def _echo_yaml(model) -> None:
    data = model.model_dump(mode="json", by_alias=True, exclude_none=True)
    click.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip())


def _build_registry(filters: tuple[str, ...], generator: GeneratorInfo) -> FilterRegistry:
    """Build the filter registry from explicit --filter options or generator defaults."""
    registry = FilterRegistry()
    if not filters:
        register_default_filters(registry, generator)
        return registry

    for name in filters:
        if name == "missing-schemas":
            try:
                register_missing_schemas_filter(registry, generator)
            except UnsupportedGeneratorError as e:
                raise click.ClickException(str(e)) from e
        else:
            register_file_upload_filter(registry)
    return registry


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """OpenAPI Helpers: post-process and query generated OpenAPI documents."""
    configure_logging(verbose)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the filtered document (.json or .yaml).")
@click.option("--metadata", "metadata_path", default=None, type=click.Path(exists=True, path_type=Path), help="Endpoint metadata file (YAML or JSON).")
@click.option("--generator-version", default="1.0", help="Version of the generator that produced the document.")
@click.option("--filter", "filters", multiple=True, type=click.Choice(FILTER_CHOICES), help="Filter to apply, in order. Defaults to what the generator needs.")
def apply(doc_path: Path, output: Path, metadata_path: Path | None, generator_version: str, filters: tuple[str, ...]):
    """Apply document filters and write the result."""
    click.echo(f"Loading {doc_path}...")
    document = _load(doc_path)

    endpoints = []
    if metadata_path is not None:
        try:
            endpoints = load_endpoint_metadata(metadata_path)
        except DocumentLoadError as e:
            raise click.ClickException(str(e)) from e
        click.echo(f"Loaded metadata for {len(endpoints)} endpoints.")

    try:
        generator = GeneratorInfo(version=generator_version)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--generator-version") from e

    registry = _build_registry(filters, generator)
    click.echo(f"Applying {len(registry)} filters...")
    registry.apply(document, GenerationContext.from_endpoints(endpoints))

    dump_document(document, output)
    click.echo(f"Filtered document saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.argument("path")
@click.argument("method")
@click.argument("name")
def parameter(doc_path: Path, path: str, method: str, name: str):
    """Print the parameter NAME of the METHOD PATH operation."""
    operation = _operation(doc_path, path, method)
    try:
        param = operation_parameter(operation, name)
    except ExactlyOneExpectedError as e:
        raise click.ClickException(f"Parameter {e.key!r}: expected exactly one match, found {e.matches}") from e
    _echo_yaml(param)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.argument("path")
@click.argument("method")
@click.argument("status_code", type=int)
def response(doc_path: Path, path: str, method: str, status_code: int):
    """Print the STATUS_CODE response of the METHOD PATH operation."""
    operation = _operation(doc_path, path, method)
    try:
        resp = operation_response(operation, status_code)
    except ExactlyOneExpectedError as e:
        raise click.ClickException(f"Response {e.key}: expected exactly one match, found {e.matches}") from e
    _echo_yaml(resp)
