"""OpenAPI / Swagger document reading and writing.

Documents are read with PyYAML (which also accepts JSON) and validated
into the ``Document`` model.
"""

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from openapi_helpers.document.base import Document
from openapi_helpers.errors import DocumentLoadError
from openapi_helpers.logger import get_logger

logger = get_logger("loader")


def detect_format(file_path: Path) -> str:
    """Detect whether a document file is JSON or YAML.

    Returns: 'json' or 'yaml'.
    """
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"

    # No telling suffix: sniff the content
    if file_path.exists():
        try:
            json.loads(file_path.read_text(encoding="utf-8"))
            return "json"
        except (json.JSONDecodeError, ValueError):
            pass
    return "yaml"


def load_document(file_path: Path) -> Document:
    """Load an OpenAPI/Swagger file into a Document."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"{file_path}: {e}") from e

    if not isinstance(data, dict) or not ("openapi" in data or "swagger" in data):
        raise DocumentLoadError(f"{file_path}: not an OpenAPI or Swagger document")

    try:
        document = Document.model_validate(data)
    except ValidationError as e:
        raise DocumentLoadError(f"{file_path}: {e}") from e

    logger.debug(
        "Loaded %s with %d operations",
        file_path,
        sum(1 for _ in document.iter_operations()),
    )
    return document


def dump_document(document: Document, file_path: Path) -> None:
    """Write a Document as JSON or YAML, based on the file's format."""
    data = document.to_dict()
    if detect_format(file_path) == "json":
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    else:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(text, encoding="utf-8")
    logger.debug("Wrote %s", file_path)
