"""Product domain exceptions.

Raised by the repository layer when the datastore fails.  The Service Layer
catches these at every call site and converts them into a ``ServiceResult``,
so nothing propagates to the HTTP layer.
"""

from __future__ import annotations

from catalog.core.repositories.interfaces import RepositoryError


class ProductRepositoryError(RepositoryError):
    """A products table operation failed (connection, constraint, lock...)."""
