"""Persistence errors shared by every repository implementation."""

from __future__ import annotations


class StorageFailure(Exception):
    """The underlying storage engine failed to read or write an entity.

    Concrete repositories wrap engine-specific errors (e.g. Django's
    ``DatabaseError``) in this exception so the Service Layer never
    depends on the ORM's exception hierarchy.
    """
