#!/usr/bin/env python3
"""
person_manager.py
--------------------
Manages Person entities.

People are unique-name rows linked to entry items. They have no mutable
metadata: they are created on first mention and looked up by name.

Usage:
    person_mgr = PersonManager(session, logger)
    alice = person_mgr.get_or_create("alice")
"""
from typing import List, Optional

from scobro.core.validators import DataValidator
from scobro.database.decorators import handle_db_errors, log_database_operation
from scobro.database.models import Person, utc_now
from .base_manager import BaseManager


class PersonManager(BaseManager):
    """Manages Person table operations."""

    @handle_db_errors
    @log_database_operation("get_or_create_person")
    def get_or_create(self, name: str) -> Person:
        """
        Get an existing person by name or create them.

        Raises:
            ValidationError: If name is blank
        """
        normalized = DataValidator.require_name(name)
        return self._get_or_create(Person, {"name": normalized}, {"created_at": utc_now()})

    @handle_db_errors
    @log_database_operation("get_person")
    def get(self, name: str) -> Optional[Person]:
        """Retrieve a person by name, or None."""
        normalized = DataValidator.normalize_string(name)
        if not normalized:
            return None
        return self.session.query(Person).filter_by(name=normalized).first()

    @handle_db_errors
    @log_database_operation("get_person_by_id")
    def get_by_id(self, person_id: str) -> Optional[Person]:
        return self._get_by_id(Person, person_id)

    @handle_db_errors
    @log_database_operation("get_all_people")
    def get_all(self) -> List[Person]:
        """Retrieve all people, ordered by name."""
        return self._get_all(Person, Person.name)

    @handle_db_errors
    @log_database_operation("delete_person")
    def delete(self, person_id: str) -> None:
        """Delete a person and their item links; missing ids are a no-op."""
        self._delete_by_id(Person, person_id)
