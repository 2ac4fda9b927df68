"""Endpoint metadata handed to filters by the document generator.

The generator knows what each endpoint parameter was bound to (a uuid, a
date, an uploaded file, ...). Filters receive that knowledge through a
``GenerationContext`` for whole-document filters and an
``OperationFilterContext`` for per-operation filters.
"""

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from openapi_helpers.errors import DocumentLoadError


class SemanticKind(str, Enum):
    """Domain-level data kind of a bound parameter."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    UUID = "uuid"
    DATE_TIME = "date-time"
    DATE = "date"
    TIME = "time"
    FILE = "file"
    OBJECT = "object"


class ParameterDescriptor(BaseModel):
    """What the framework bound a single endpoint parameter to."""

    name: str
    kind: SemanticKind = SemanticKind.STRING
    is_collection: bool = False
    is_file_upload: bool = False
    required: bool = True


class EndpointMetadata(BaseModel):
    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /api/users/{id}
    parameters: list[ParameterDescriptor] = []

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()


class OperationFilterContext(BaseModel):
    """Source metadata for the one operation an operation filter is applied to."""

    method: str
    path: str
    parameters: list[ParameterDescriptor] = []

    @property
    def file_parameters(self) -> list[ParameterDescriptor]:
        return [p for p in self.parameters if p.is_file_upload]


class GenerationContext(BaseModel):
    """Everything the generator discovered while building a document."""

    semantic_types: set[SemanticKind] = set()
    endpoints: list[EndpointMetadata] = []

    @classmethod
    def from_endpoints(cls, endpoints: list[EndpointMetadata]) -> "GenerationContext":
        kinds = {p.kind for endpoint in endpoints for p in endpoint.parameters}
        return cls(semantic_types=kinds, endpoints=endpoints)

    def for_operation(self, method: str, path: str) -> OperationFilterContext:
        """Return the metadata of one operation; empty when the endpoint is unknown."""
        method = method.upper()
        for endpoint in self.endpoints:
            if endpoint.method == method and endpoint.path == path:
                return OperationFilterContext(
                    method=method, path=path, parameters=endpoint.parameters
                )
        return OperationFilterContext(method=method, path=path)


def load_endpoint_metadata(file_path: Path) -> list[EndpointMetadata]:
    """Read an ``endpoints:`` list from a YAML or JSON file."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"{file_path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("endpoints"), list):
        raise DocumentLoadError(f"{file_path}: expected a mapping with an 'endpoints' list")

    try:
        return [EndpointMetadata.model_validate(item) for item in data["endpoints"]]
    except ValidationError as e:
        raise DocumentLoadError(f"{file_path}: {e}") from e
