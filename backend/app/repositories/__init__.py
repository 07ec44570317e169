"""Repository layer for content access.

Repositories encapsulate database reads and return detached value objects,
raising NotFoundError or UnauthorizedError when content cannot be served.
"""

from app.repositories.content import (
    ReadPolicy,
    SqlContentService,
    SqlContentTypeService,
    SqlLocationService,
)
from app.repositories.exceptions import NotFoundError, RepositoryError, UnauthorizedError
from app.repositories.search import SqlSearchService

__all__ = [
    "NotFoundError",
    "ReadPolicy",
    "RepositoryError",
    "SqlContentService",
    "SqlContentTypeService",
    "SqlLocationService",
    "SqlSearchService",
    "UnauthorizedError",
]
