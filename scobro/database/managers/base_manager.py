#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common store utilities.
All entity managers inherit from this class.

Key Features:
    - Generic get-or-create by unique lookup fields
    - Lookup helpers that raise NotFoundError / ReferentialError
    - Partial scalar updates driven by metadata-dict key presence
    - Consistent logging through an optional LogbookLogger

Partial updates:
    Managers receive update payloads as plain dicts. A key that is absent
    leaves the field untouched; a key present with None clears a nullable
    field. `_update_scalar_fields` implements that rule once for everyone.

Usage:
    class ProjectManager(BaseManager):
        @handle_db_errors
        @log_database_operation("update_project")
        def update(self, project_id: str, metadata: Dict[str, Any]) -> Project:
            project = self._require(Project, project_id)
            self._update_scalar_fields(project, metadata, [...])
            ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from scobro.core.exceptions import NotFoundError, ReferentialError, ValidationError
from scobro.core.logging_manager import LogbookLogger, safe_logger

T = TypeVar("T")


class BaseManager(ABC):
    """
    Abstract base manager providing common store operations.

    Attributes:
        session: SQLAlchemy session for store operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[LogbookLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _get_or_create(
        self,
        model_class: Type[T],
        lookup_fields: Dict[str, Any],
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Get an existing row by its lookup fields or create it.

        Race freedom comes from the store's single-writer lock: the lookup
        and the insert run inside the same serialized session scope, so no
        other writer can slip a duplicate in between.

        Args:
            model_class: ORM model class to query or create
            lookup_fields: Dictionary of field_name: value to filter/create
            extra_fields: Additional fields for new object creation only

        Returns:
            ORM instance of the model class (flushed)
        """
        obj = self.session.query(model_class).filter_by(**lookup_fields).first()
        if obj:
            return obj

        fields = lookup_fields.copy()
        if extra_fields:
            fields.update(extra_fields)

        obj = model_class(**fields)
        self.session.add(obj)
        self.session.flush()

        safe_logger(self.logger).log_debug(
            f"Created {model_class.__name__}",
            {"id": getattr(obj, "id", None), **lookup_fields},
        )
        return obj

    def _get_by_id(self, model_class: Type[T], entity_id: str) -> Optional[T]:
        """Get an entity by id, or None."""
        if not entity_id:
            return None
        return self.session.get(model_class, entity_id)

    def _require(self, model_class: Type[T], entity_id: str) -> T:
        """
        Get an entity by id that must exist.

        Raises:
            NotFoundError: If no row has that id
        """
        entity = self._get_by_id(model_class, entity_id)
        if entity is None:
            raise NotFoundError(f"{model_class.__name__} not found: {entity_id}")
        return entity

    def _require_parent(self, model_class: Type[T], entity_id: str) -> T:
        """
        Get the parent of a row about to be inserted.

        Raises:
            ReferentialError: If the parent does not exist
        """
        entity = self._get_by_id(model_class, entity_id)
        if entity is None:
            raise ReferentialError(f"{model_class.__name__} not found: {entity_id}")
        return entity

    def _get_all(self, model_class: Type[T], *order_by: Any) -> List[T]:
        """Get every row of a model, in the given order."""
        return self.session.query(model_class).order_by(*order_by).all()

    def _delete_by_id(self, model_class: Type[T], entity_id: str) -> bool:
        """
        Delete a row by id; missing ids are a no-op.

        Returns:
            True if a row was deleted
        """
        entity = self._get_by_id(model_class, entity_id)
        if entity is None:
            safe_logger(self.logger).log_debug(
                f"Delete skipped, {model_class.__name__} not found",
                {"id": entity_id},
            )
            return False

        self.session.delete(entity)
        self.session.flush()
        return True

    def _ensure_unique_name(
        self,
        model_class: Type[T],
        name: str,
        exclude_id: Optional[str] = None,
    ) -> None:
        """
        Reject a name already held by another row.

        Raises:
            ValidationError: If the name is taken
        """
        existing = self.session.query(model_class).filter_by(name=name).first()
        if existing is not None and getattr(existing, "id") != exclude_id:
            raise ValidationError(f"{model_class.__name__} already exists: {name}")

    # -------------------------------------------------------------------------
    # Scalar Field Update Helpers
    # -------------------------------------------------------------------------

    def _update_scalar_fields(
        self,
        entity: Any,
        metadata: Dict[str, Any],
        field_configs: List[tuple],
    ) -> List[str]:
        """
        Update scalar fields present in metadata, using normalizers.

        Args:
            entity: Entity to update
            metadata: Dictionary containing field values
            field_configs: List of tuples:
                - (field_name, normalizer) for required fields; a None
                  result is rejected
                - (field_name, normalizer, True) for nullable fields; a
                  None result clears the field

        Returns:
            Names of the fields that were written

        Raises:
            ValidationError: If a required field would become empty

        Example:
            self._update_scalar_fields(tag, metadata, [
                ("name", DataValidator.normalize_string),
                ("description", DataValidator.normalize_string, True),
            ])
        """
        written: List[str] = []
        for config in field_configs:
            field_name: str = config[0]
            normalizer: Callable[[Any], Any] = config[1]
            allow_none: bool = config[2] if len(config) > 2 else False

            if field_name not in metadata:
                continue

            value = normalizer(metadata[field_name])
            if value is None and not allow_none:
                raise ValidationError(f"Field '{field_name}' cannot be empty")

            setattr(entity, field_name, value)
            written.append(field_name)

        return written
