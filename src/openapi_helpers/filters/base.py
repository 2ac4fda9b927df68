"""Filter interfaces and the ordered registry that runs them.

A filter post-processes a generated document in place. Document filters
run once per pass with the whole document; operation filters run once per
operation with that operation's endpoint metadata. Filters run in the order
they were registered, so later filters see the edits of earlier ones.
"""

from abc import ABC, abstractmethod

from openapi_helpers.document.base import Document, Operation
from openapi_helpers.document.metadata import GenerationContext, OperationFilterContext
from openapi_helpers.logger import get_logger

logger = get_logger("filters")


class DocumentFilter(ABC):
    """Filter applied once to the whole document."""

    @abstractmethod
    def apply(self, document: Document, context: GenerationContext) -> None: ...


class OperationFilter(ABC):
    """Filter applied to each operation of the document."""

    @abstractmethod
    def apply(self, operation: Operation, context: OperationFilterContext) -> None: ...


class FilterRegistry:
    """Ordered collection of document and operation filters."""

    def __init__(self):
        self._filters: list[DocumentFilter | OperationFilter] = []

    @property
    def filters(self) -> tuple[DocumentFilter | OperationFilter, ...]:
        return tuple(self._filters)

    def add(self, filter_: DocumentFilter | OperationFilter) -> None:
        if not isinstance(filter_, (DocumentFilter, OperationFilter)):
            raise TypeError(
                f"{type(filter_).__name__} is neither a DocumentFilter nor an OperationFilter"
            )
        self._filters.append(filter_)
        logger.debug("Registered %s", type(filter_).__name__)

    def apply(self, document: Document, context: GenerationContext | None = None) -> None:
        """Run every registered filter over the document, in registration order."""
        context = context or GenerationContext()
        for filter_ in self._filters:
            name = type(filter_).__name__
            if isinstance(filter_, DocumentFilter):
                logger.debug("Applying %s to document", name)
                filter_.apply(document, context)
            else:
                for path, method, operation in document.iter_operations():
                    logger.debug("Applying %s to %s %s", name, method.upper(), path)
                    filter_.apply(operation, context.for_operation(method, path))

    def __len__(self) -> int:
        return len(self._filters)
