#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the ScoBro logbook.

Every error raised by the store, the managers, the aggregator, the export
formatters and the command layer belongs to one of these classes, so that a
front end can branch on the type instead of parsing English messages.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all store-related errors
    │   ├── StoreError - Wrapped lower-level failure (I/O, constraint)
    │   ├── ReferentialError - Reference to a nonexistent parent row
    │   ├── NotFoundError - Update/lookup target does not exist
    │   └── ExportError - Export serialization or writing failures
    └── ValidationError - Malformed input at the boundary

Usage:
    from scobro.core.exceptions import NotFoundError, ValidationError

    try:
        commands.update_entry_item(item_id, {"content": "new"})
    except NotFoundError:
        render_not_found()
    except ValidationError as e:
        render_invalid(e)
"""


class DatabaseError(Exception):
    """
    Base exception for store-related errors.

    Catch this to handle any store error, or catch specific subclasses
    for more granular handling.

    Examples:
        >>> raise DatabaseError("TagManager requires active session")

    See Also:
        StoreError, ReferentialError, NotFoundError, ExportError
    """

    pass


class StoreError(DatabaseError):
    """
    Exception for lower-level store failures.

    Wraps SQLAlchemy errors (I/O, locking, constraint violations other
    than foreign keys). The message names the logical step that failed.

    Examples:
        >>> raise StoreError("Failed to create tag: database is locked")
    """

    pass


class ReferentialError(DatabaseError):
    """
    Exception for operations that reference a nonexistent parent row.

    Raised before inserting a child row whose foreign key target is
    missing (an item for an unknown entry, an attendee for an unknown
    meeting), or when the store itself rejects the insert.

    Examples:
        >>> raise ReferentialError("Entry not found: 7f0c...")
    """

    pass


class NotFoundError(DatabaseError):
    """
    Exception for update or lookup targets that do not exist.

    Kept distinct from other store errors so callers can render
    "not found" rather than a generic failure.

    Examples:
        >>> raise NotFoundError("Project not found: 7f0c...")
    """

    pass


class ExportError(DatabaseError):
    """
    Exception for export failures.

    Raised when the CSV or Markdown export cannot be produced or written.

    Examples:
        >>> raise ExportError("Cannot write export: permission denied")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input fails validation at the boundary, before any
    state is written:
    - Unparsable or timezone-less timestamps
    - Missing or empty required fields (names, titles, content)
    - Duplicate unique names on explicit create/rename

    Examples:
        >>> raise ValidationError("Invalid timestamp: 'yesterday'")
        >>> raise ValidationError("Required field 'name' missing or empty")
    """

    pass
