"""Identifier helpers shared by the profile and post services."""

import uuid

from devconnect.exceptions import NotFoundError


def parse_resource_id(value: str, message: str, resource: str) -> uuid.UUID:
    """
    Parse a path identifier, treating an ill-formed value as a missing resource.

    An id that is not a UUID can never match a row, so callers get the same
    not-found response they would get for a well-formed unknown id.
    """
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        raise NotFoundError(
            message=message,
            resource=resource,
            resource_id=str(value),
            context={"reason": "malformed_id"},
        )


def new_subdocument_id() -> str:
    """Fresh id for an embedded like, comment, experience or education entry."""
    return str(uuid.uuid4())
