"""Exceptions raised by openapi-helpers."""


class OpenApiHelpersError(Exception):
    """Base class for all errors raised by this package."""


class ExactlyOneExpectedError(OpenApiHelpersError, LookupError):
    """A lookup expected exactly one match and found zero or several."""

    def __init__(self, key, matches: int):
        self.key = key
        self.matches = matches
        super().__init__(f"Expected exactly one match for {key!r}, found {matches}")


class NotFoundError(ExactlyOneExpectedError):
    """No item matched the lookup key."""

    def __init__(self, key):
        super().__init__(key, 0)


class AmbiguousMatchError(ExactlyOneExpectedError):
    """More than one item matched the lookup key."""


class UnsupportedGeneratorError(OpenApiHelpersError):
    """A filter was registered for a generator version that does not need it."""


class DocumentLoadError(OpenApiHelpersError):
    """A file could not be read as an OpenAPI/Swagger document."""
