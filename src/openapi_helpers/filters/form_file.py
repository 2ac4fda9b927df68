"""Multipart request bodies for file upload parameters.

Generators describe an uploaded file as an object-typed query parameter.
This filter moves such parameters into the ``multipart/form-data`` content
of the request body as ``string``/``binary`` schemas (an array of those for
file collections).
"""

from openapi_helpers.document.base import MediaType, Operation, RequestBody, Schema
from openapi_helpers.document.metadata import OperationFilterContext, ParameterDescriptor
from openapi_helpers.filters.base import OperationFilter
from openapi_helpers.logger import get_logger

logger = get_logger("form_file")

MULTIPART_FORM_DATA = "multipart/form-data"


def file_schema(descriptor: ParameterDescriptor) -> Schema:
    """The form schema of one file upload parameter."""
    binary = Schema(type="string", format="binary")
    if descriptor.is_collection:
        return Schema(type="array", items=binary)
    return binary


class FormFileFilter(OperationFilter):
    """Rewrites file upload parameters as multipart/form-data fields."""

    def apply(self, operation: Operation, context: OperationFilterContext) -> None:
        files = context.file_parameters
        if not files:
            return

        names = {f.name for f in files}
        operation.parameters = [p for p in operation.parameters if p.name not in names]

        if operation.request_body is None:
            operation.request_body = RequestBody()
        media = operation.request_body.content.setdefault(MULTIPART_FORM_DATA, MediaType())
        existing = media.schema_

        form = _form_object(existing)
        if form is not None:
            _add_files(form, files)
        elif existing is None or existing.is_untyped or _is_file_schema(existing):
            if len(files) == 1:
                media.schema_ = file_schema(files[0])
            else:
                media.schema_ = _add_files(Schema(type="object", properties={}), files)
        else:
            # A referenced form model keeps its fields; the files are added alongside
            media.schema_ = Schema(all_of=[existing, _add_files(Schema(type="object", properties={}), files)])

        if any(f.required for f in files):
            operation.request_body.required = True

        logger.debug(
            "Moved file parameters %s of %s %s into %s",
            sorted(names),
            context.method,
            context.path,
            MULTIPART_FORM_DATA,
        )


def _form_object(schema: Schema | None) -> Schema | None:
    """The object schema file fields can be merged into, if there is one."""
    if schema is None:
        return None
    if schema.type == "object" and schema.properties:
        return schema
    if schema.all_of:
        last = schema.all_of[-1]
        if last.type == "object" and last.properties:
            return last
    return None


def _is_file_schema(schema: Schema) -> bool:
    if schema.type == "array" and schema.items is not None:
        schema = schema.items
    return schema.type == "string" and schema.format == "binary"


def _add_files(form: Schema, files: list[ParameterDescriptor]) -> Schema:
    for f in files:
        form.properties[f.name] = file_schema(f)
    required = [f.name for f in files if f.required and f.name not in (form.required or [])]
    if required:
        form.required = (form.required or []) + required
    return form
