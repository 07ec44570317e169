"""Errors raised by the content repository services."""


class RepositoryError(Exception):
    """Base class for content repository failures."""

    pass


class NotFoundError(RepositoryError):
    """Raised when a content item, content type or location does not exist."""

    def __init__(self, kind: str, identifier: object):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Could not find '{kind}' with identifier '{identifier}'")


class UnauthorizedError(RepositoryError):
    """Raised when the caller may not read a content item or its versions."""

    def __init__(self, module: str, function: str, identifier: object):
        self.module = module
        self.function = function
        self.identifier = identifier
        super().__init__(
            f"User does not have access to '{function}' '{module}' with identifier '{identifier}'"
        )
