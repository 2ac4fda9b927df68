"""In-memory OpenAPI document model.

Generated documents are validated into these models so that filters and
lookups work on typed objects. Field aliases follow the OpenAPI wire names;
unknown keys are kept as extras so a load/dump cycle does not lose them.
"""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

SCHEMA_REF_PREFIX = "#/components/schemas/"


class OpenApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Schema(OpenApiModel):
    """A schema object, either inline or a reference to a named component."""

    ref: str | None = Field(None, alias="$ref")
    type: str | None = None
    format: str | None = None
    items: "Schema | None" = None
    properties: "dict[str, Schema] | None" = None
    required: list[str] | None = None
    additional_properties: "Schema | bool | None" = Field(None, alias="additionalProperties")
    all_of: "list[Schema] | None" = Field(None, alias="allOf")
    one_of: "list[Schema] | None" = Field(None, alias="oneOf")
    any_of: "list[Schema] | None" = Field(None, alias="anyOf")
    nullable: bool | None = None
    description: str | None = None

    @classmethod
    def reference(cls, name: str) -> "Schema":
        return cls(ref=f"{SCHEMA_REF_PREFIX}{name}")

    @property
    def ref_name(self) -> str | None:
        """Name of the referenced component schema, if this is a local reference."""
        if self.ref and self.ref.startswith(SCHEMA_REF_PREFIX):
            return self.ref[len(SCHEMA_REF_PREFIX):]
        return None

    @property
    def is_untyped(self) -> bool:
        """True for schemas that carry no usable type information."""
        if self.ref or self.all_of or self.one_of or self.any_of:
            return False
        if self.type is None:
            return True
        return self.type == "object" and not self.properties and self.additional_properties is None

    def iter_schemas(self) -> Iterator["Schema"]:
        """Yield this schema and every nested schema, depth-first."""
        yield self
        if self.items is not None:
            yield from self.items.iter_schemas()
        for prop in (self.properties or {}).values():
            yield from prop.iter_schemas()
        if isinstance(self.additional_properties, Schema):
            yield from self.additional_properties.iter_schemas()
        for group in (self.all_of, self.one_of, self.any_of):
            for sub in group or []:
                yield from sub.iter_schemas()


class Parameter(OpenApiModel):
    """A single parameter (query, path, header, or cookie), or a ``$ref`` to one.

    Reference-only parameters have no name and never match a lookup by name.
    """

    ref: str | None = Field(None, alias="$ref")
    name: str | None = None
    location: str | None = Field(None, alias="in")  # query / path / header / cookie
    required: bool | None = None
    schema_: Schema | None = Field(None, alias="schema")
    description: str | None = None


class MediaType(OpenApiModel):
    schema_: Schema | None = Field(None, alias="schema")


class RequestBody(OpenApiModel):
    description: str | None = None
    content: dict[str, MediaType] = {}
    required: bool | None = None


class Response(OpenApiModel):
    description: str = ""
    content: dict[str, MediaType] | None = None


class Operation(OpenApiModel):
    """One HTTP method on one path."""

    operation_id: str | None = Field(None, alias="operationId")
    summary: str | None = None
    tags: list[str] | None = None
    parameters: list[Parameter] = []
    request_body: RequestBody | None = Field(None, alias="requestBody")
    responses: dict[str, Response] = {}

    @field_validator("responses", mode="before")
    @classmethod
    def _status_codes_as_strings(cls, value):
        # YAML loads bare status codes (200:) as integers
        if isinstance(value, dict):
            return {str(code): resp for code, resp in value.items()}
        return value

    def iter_schemas(self) -> Iterator[Schema]:
        """Yield every schema used by parameters, request body and responses."""
        for param in self.parameters:
            if param.schema_ is not None:
                yield from param.schema_.iter_schemas()
        if self.request_body is not None:
            for media in self.request_body.content.values():
                if media.schema_ is not None:
                    yield from media.schema_.iter_schemas()
        for response in self.responses.values():
            for media in (response.content or {}).values():
                if media.schema_ is not None:
                    yield from media.schema_.iter_schemas()


class PathItem(OpenApiModel):
    """The operations of one path, plus the parameters they share.

    Other path-level keys (summary, servers, ...) are kept as extras.
    """

    parameters: list[Parameter] | None = None
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None

    @model_validator(mode="before")
    @classmethod
    def _lowercase_methods(cls, value):
        if isinstance(value, dict):
            return {
                key.lower() if isinstance(key, str) and key.lower() in HTTP_METHODS else key: item
                for key, item in value.items()
            }
        return value

    def operations(self) -> Iterator[tuple[str, Operation]]:
        """Yield ``(method, operation)`` for every method defined on the path."""
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation

    def __getitem__(self, method: str) -> Operation:
        method = method.lower()
        operation = getattr(self, method) if method in HTTP_METHODS else None
        if operation is None:
            raise KeyError(method)
        return operation


class Components(OpenApiModel):
    schemas: dict[str, Schema] = {}


class Document(OpenApiModel):
    """Root of a generated API description.

    ``openapi`` stays unset for Swagger 2.0 documents, whose ``swagger`` key
    is kept as an extra.
    """

    openapi: str | None = None
    info: dict = {}
    paths: dict[str, PathItem] = {}
    components: Components = Field(default_factory=Components)

    @field_validator("paths", mode="before")
    @classmethod
    def _empty_path_items(cls, value):
        # "/health:" with no body loads as None
        if isinstance(value, dict):
            return {path: {} if item is None else item for path, item in value.items()}
        return value

    def iter_operations(self) -> Iterator[tuple[str, str, Operation]]:
        """Yield ``(path, method, operation)``, paths in document order."""
        for path, item in self.paths.items():
            for method, operation in item.operations():
                yield path, method, operation

    def iter_schemas(self) -> Iterator[Schema]:
        """Yield every schema reachable from paths, operations and component schemas."""
        for item in self.paths.values():
            for param in item.parameters or []:
                if param.schema_ is not None:
                    yield from param.schema_.iter_schemas()
        for _, _, operation in self.iter_operations():
            yield from operation.iter_schemas()
        for schema in self.components.schemas.values():
            yield from schema.iter_schemas()

    def to_dict(self) -> dict:
        """Serialize using OpenAPI key names, omitting unset optional fields.

        Empty operation parameter lists and empty components are left out so
        that a load/dump cycle does not add keys the source did not have.
        """
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        for item in data.get("paths", {}).values():
            for method in HTTP_METHODS:
                if method in item and item[method].get("parameters") == []:
                    del item[method]["parameters"]

        components = data.get("components")
        if components is not None:
            if components.get("schemas") == {}:
                del components["schemas"]
            if not components:
                del data["components"]
        return data


Schema.model_rebuild()
