#!/usr/bin/env python3
"""
ScoBro Logbook Store
--------------------
SQLite-backed data-access layer for the logbook.

Modules:
- manager: LogbookDB, the serialized store handle
- models: SQLAlchemy ORM models
- managers: per-entity CRUD managers
- relationship_manager: item tags, people and Jira refs
- aggregator: entry tree assembly
- export_manager: CSV and Markdown export
"""

from .manager import LogbookDB
from scobro.core.exceptions import (
    DatabaseError,
    ExportError,
    NotFoundError,
    ReferentialError,
    StoreError,
    ValidationError,
)
from .aggregator import EntryAggregator
from .export_manager import ExportManager
from .relationship_manager import RelationshipManager
from .decorators import handle_db_errors, log_database_operation, validate_metadata

__all__ = [
    # Main manager
    "LogbookDB",
    # Exceptions
    "DatabaseError",
    "StoreError",
    "ReferentialError",
    "NotFoundError",
    "ExportError",
    "ValidationError",
    # Core modules
    "EntryAggregator",
    "ExportManager",
    "RelationshipManager",
    # Decorators
    "log_database_operation",
    "handle_db_errors",
    "validate_metadata",
]
