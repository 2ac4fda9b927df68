"""Exactly-one lookups over a generated document.

Every lookup goes through ``single`` so that a missing key and a duplicated
key fail the same way everywhere. Callers, usually tests asserting on a
generated document, get an ``ExactlyOneExpectedError`` carrying the key.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from openapi_helpers.document.base import Document, Operation, Parameter, Response
from openapi_helpers.errors import AmbiguousMatchError, NotFoundError

T = TypeVar("T")


def single(items: Iterable[T], predicate: Callable[[T], bool], key) -> T:
    """Return the only item matching ``predicate``.

    Raises NotFoundError for zero matches and AmbiguousMatchError for more
    than one; both carry ``key``.
    """
    matches = [item for item in items if predicate(item)]
    if not matches:
        raise NotFoundError(key)
    if len(matches) > 1:
        raise AmbiguousMatchError(key, len(matches))
    return matches[0]


def find_parameter_by_name(parameters: Iterable[Parameter], name: str) -> Parameter:
    """Get the parameter with the given name."""
    return single(parameters, lambda p: p.name == name, name)


def find_response_by_status_code(responses: Mapping[str, Response], status_code: int) -> Response:
    """Get the response registered under the given HTTP status code."""
    code = str(status_code)
    _, response = single(responses.items(), lambda item: item[0] == code, status_code)
    return response


def operation_parameter(operation: Operation, name: str) -> Parameter:
    """Get a parameter of the operation by name."""
    return find_parameter_by_name(operation.parameters, name)


def operation_response(operation: Operation, status_code: int) -> Response:
    """Get a response of the operation by status code."""
    return find_response_by_status_code(operation.responses, status_code)


def find_operation(document: Document, path: str, method: str) -> Operation:
    """Get the operation for a path and HTTP method."""
    method = method.lower()
    _, _, operation = single(
        document.iter_operations(),
        lambda item: item[0] == path and item[1] == method,
        f"{method.upper()} {path}",
    )
    return operation
