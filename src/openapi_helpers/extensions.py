"""Registration helpers used by the host application's document setup."""

from openapi_helpers.config import GeneratorInfo
from openapi_helpers.errors import UnsupportedGeneratorError
from openapi_helpers.filters.base import FilterRegistry
from openapi_helpers.filters.form_file import FormFileFilter
from openapi_helpers.filters.missing_schemas import MissingSchemasFilter
from openapi_helpers.logger import get_logger

logger = get_logger("extensions")


def register_missing_schemas_filter(
    registry: FilterRegistry, generator: GeneratorInfo | None = None
) -> None:
    """Add the filter that supplies uuid, date-time, date and time schemas.

    Only generators older than ``generator.native_semantic_types_since`` need
    it; registering it for a newer generator raises UnsupportedGeneratorError.
    """
    if generator is not None and generator.handles_semantic_types:
        raise UnsupportedGeneratorError(
            f"{generator.name} {generator.version} already emits semantic type schemas"
        )
    registry.add(MissingSchemasFilter())


def register_file_upload_filter(registry: FilterRegistry) -> None:
    """Add the filter that fixes file upload parameters."""
    registry.add(FormFileFilter())


def register_default_filters(registry: FilterRegistry, generator: GeneratorInfo) -> None:
    """Register every filter the given generator needs."""
    if generator.handles_semantic_types:
        logger.info(
            "%s %s handles semantic types natively, skipping missing schemas filter",
            generator.name,
            generator.version,
        )
    else:
        register_missing_schemas_filter(registry)
    register_file_upload_filter(registry)
