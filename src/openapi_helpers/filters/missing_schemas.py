"""Named schemas for semantic scalar types older generators leave out.

Generators before ``config.NATIVE_SEMANTIC_TYPES_SINCE`` emit either a
dangling reference or an empty object schema for uuid, date-time, date and
time values. This filter adds the missing component definitions and points
such values at them: operation and path-level parameters, and properties of
request body object schemas, matched by name against the endpoint metadata.
Response schemas carry no endpoint metadata, so there only dangling
references are resolved.
"""

from openapi_helpers.document.base import Document, Schema
from openapi_helpers.document.metadata import GenerationContext, ParameterDescriptor, SemanticKind
from openapi_helpers.filters.base import DocumentFilter
from openapi_helpers.logger import get_logger

logger = get_logger("missing_schemas")

SEMANTIC_SCHEMA_NAMES = {
    SemanticKind.UUID: "UUID",
    SemanticKind.DATE_TIME: "DateTime",
    SemanticKind.DATE: "Date",
    SemanticKind.TIME: "Time",
}


def canonical_schema(kind: SemanticKind) -> Schema:
    """The component definition used for a semantic kind."""
    return Schema(type="string", format=kind.value)


class MissingSchemasFilter(DocumentFilter):
    """Ensures component schemas exist for uuid, date-time, date and time."""

    def apply(self, document: Document, context: GenerationContext) -> None:
        for kind in SEMANTIC_SCHEMA_NAMES:
            if kind in context.semantic_types:
                self._ensure_schema(document, kind)

        kinds_by_name = {name: kind for kind, name in SEMANTIC_SCHEMA_NAMES.items()}
        dangling = {
            schema.ref_name
            for schema in document.iter_schemas()
            if schema.ref_name in kinds_by_name
        }
        for name in sorted(dangling):
            self._ensure_schema(document, kinds_by_name[name])

        for path, method, operation in document.iter_operations():
            descriptors = {p.name: p for p in context.for_operation(method, path).parameters}
            if not descriptors:
                continue
            path_params = document.paths[path].parameters or []
            for param in operation.parameters + path_params:
                descriptor = descriptors.get(param.name)
                resolved = self._resolve(document, param.schema_, descriptor)
                if resolved is not None:
                    param.schema_ = resolved
                    logger.debug("Pointed %s %s parameter %r at %s", method.upper(), path, param.name, descriptor.kind.value)

            if operation.request_body is None:
                continue
            for media in operation.request_body.content.values():
                body = media.schema_
                if body is None or body.type != "object" or not body.properties:
                    continue
                for prop_name, prop in body.properties.items():
                    resolved = self._resolve(document, prop, descriptors.get(prop_name))
                    if resolved is not None:
                        body.properties[prop_name] = resolved
                        logger.debug("Pointed %s %s body field %r at %s", method.upper(), path, prop_name, descriptors[prop_name].kind.value)

    def _resolve(
        self, document: Document, schema: Schema | None, descriptor: ParameterDescriptor | None
    ) -> Schema | None:
        """Return the schema to use instead of ``schema``, or None to keep it."""
        if descriptor is None or descriptor.kind not in SEMANTIC_SCHEMA_NAMES:
            return None
        if not _needs_schema(schema, descriptor.is_collection):
            return None
        name = self._ensure_schema(document, descriptor.kind)
        if not descriptor.is_collection:
            return Schema.reference(name)
        if schema is not None and schema.type == "array":
            schema.items = Schema.reference(name)
            return schema
        return Schema(type="array", items=Schema.reference(name))

    def _ensure_schema(self, document: Document, kind: SemanticKind) -> str:
        name = SEMANTIC_SCHEMA_NAMES[kind]
        if name not in document.components.schemas:
            document.components.schemas[name] = canonical_schema(kind)
            logger.debug("Added schema %s", name)
        return name


def _needs_schema(schema: Schema | None, is_collection: bool) -> bool:
    if schema is None:
        return True
    if is_collection and schema.type == "array":
        return schema.items is None or schema.items.is_untyped
    return schema.is_untyped
