#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manages Entry, EntryItem and JiraRef rows.

Entries are timestamped containers; items are the typed notes, actions,
decisions and meeting references inside them; Jira refs are issue keys
attached to items. Tags and people are linked through the
RelationshipManager.

Key Features:
    - Factory methods that always stamp a fresh id and created == updated
    - Item creation checks the owning entry exists (ReferentialError)
    - Targeted item updates (content, project) that refresh updated_at
    - Deletes that rely on cascade rules for descendants

Usage:
    entries = EntryManager(session, logger)

    entry = entries.create_entry(timestamp)
    item = entries.create_entry_item(entry.id, "Note", "stand-up", project=None)
    entries.create_jira_ref(item.id, "OPS-12")
    entries.update_entry_item_content(item.id, "stand-up (moved)")
"""
from datetime import datetime
from typing import List, Optional

from scobro.core.exceptions import ValidationError
from scobro.core.validators import DataValidator
from scobro.database.decorators import handle_db_errors, log_database_operation
from scobro.database.models import Entry, EntryItem, JiraRef, utc_now
from .base_manager import BaseManager


class EntryManager(BaseManager):
    """
    Manages entries, their items and the items' Jira references.
    """

    # -------------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_entry")
    def create_entry(self, timestamp: datetime) -> Entry:
        """
        Create a new entry at a user-supplied event time.

        Args:
            timestamp: Aware datetime of the event

        Returns:
            Created Entry (flushed)

        Raises:
            ValidationError: If timestamp is not a timezone-aware datetime
        """
        if not isinstance(timestamp, datetime) or timestamp.tzinfo is None:
            raise ValidationError("Entry timestamp must be a timezone-aware datetime")

        now = utc_now()
        entry = Entry(timestamp=timestamp, created_at=now, updated_at=now)
        self.session.add(entry)
        self.session.flush()

        if self.logger:
            self.logger.log_debug("Created entry", {"entry_id": entry.id})

        return entry

    @handle_db_errors
    @log_database_operation("get_entry")
    def get_entry(self, entry_id: str) -> Optional[Entry]:
        """Get an entry by id, or None."""
        return self._get_by_id(Entry, entry_id)

    @handle_db_errors
    @log_database_operation("get_all_entries")
    def get_all_entries(self) -> List[Entry]:
        """Get all entries, most recent event first."""
        return self._get_all(Entry, Entry.timestamp.desc(), Entry.created_at.desc())

    @handle_db_errors
    @log_database_operation("delete_entry")
    def delete_entry(self, entry_id: str) -> None:
        """
        Delete an entry and everything below it.

        Items, their Jira refs and their tag/person links go with it.
        Deleting a missing id is a no-op.
        """
        self._delete_by_id(Entry, entry_id)

    # -------------------------------------------------------------------------
    # Entry items
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_entry_item")
    def create_entry_item(
        self,
        entry_id: str,
        item_type: str,
        content: str,
        project: Optional[str] = None,
    ) -> EntryItem:
        """
        Create an item inside an existing entry.

        Args:
            entry_id: Owning entry
            item_type: Note, Action, Decision, Meeting or any free-form type
            content: Item text
            project: Optional project name (free text, not checked
                against the projects table)

        Returns:
            Created EntryItem (flushed)

        Raises:
            ReferentialError: If entry_id does not exist
            ValidationError: If item_type is blank
        """
        item_type_value = DataValidator.require_name(item_type, "item_type")
        entry = self._require_parent(Entry, entry_id)

        now = utc_now()
        item = EntryItem(
            entry_id=entry.id,
            item_type=item_type_value,
            content=content if content is not None else "",
            project=DataValidator.normalize_string(project),
            created_at=now,
            updated_at=now,
        )
        self.session.add(item)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(
                "Created entry item",
                {"entry_id": entry.id, "item_id": item.id, "item_type": item.item_type},
            )

        return item

    @handle_db_errors
    @log_database_operation("get_entry_item")
    def get_entry_item(self, item_id: str) -> Optional[EntryItem]:
        """Get an entry item by id, or None."""
        return self._get_by_id(EntryItem, item_id)

    @handle_db_errors
    @log_database_operation("update_entry_item_content")
    def update_entry_item_content(self, item_id: str, content: str) -> EntryItem:
        """
        Replace an item's content.

        Raises:
            NotFoundError: If item_id does not exist
        """
        item = self._require(EntryItem, item_id)
        item.content = content if content is not None else ""
        item.updated_at = utc_now()
        self.session.flush()
        return item

    @handle_db_errors
    @log_database_operation("update_entry_item_project")
    def update_entry_item_project(self, item_id: str, project: Optional[str]) -> EntryItem:
        """
        Set or clear an item's project name.

        A blank or None project clears the field.

        Raises:
            NotFoundError: If item_id does not exist
        """
        item = self._require(EntryItem, item_id)
        item.project = DataValidator.normalize_string(project)
        item.updated_at = utc_now()
        self.session.flush()
        return item

    @handle_db_errors
    @log_database_operation("touch_entry_item")
    def touch_entry_item(self, item_id: str) -> EntryItem:
        """
        Refresh an item's updated_at (after its relations were replaced).

        Raises:
            NotFoundError: If item_id does not exist
        """
        item = self._require(EntryItem, item_id)
        item.updated_at = utc_now()
        self.session.flush()
        return item

    @handle_db_errors
    @log_database_operation("delete_entry_item")
    def delete_entry_item(self, item_id: str) -> None:
        """
        Delete an item.

        Its Jira refs and tag/person links are removed; meeting actions
        pointing at it keep existing with entry_item_id cleared.
        Deleting a missing id is a no-op.
        """
        self._delete_by_id(EntryItem, item_id)

    # -------------------------------------------------------------------------
    # Jira references
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_jira_ref")
    def create_jira_ref(self, item_id: str, jira_key: str) -> JiraRef:
        """
        Attach an issue key to an item.

        No deduplication: the same key may be attached more than once.

        Raises:
            ReferentialError: If item_id does not exist
            ValidationError: If jira_key is blank
        """
        key = DataValidator.require_name(jira_key, "jira_key")
        item = self._require_parent(EntryItem, item_id)

        jira_ref = JiraRef(entry_item_id=item.id, jira_key=key, created_at=utc_now())
        self.session.add(jira_ref)
        self.session.flush()
        return jira_ref
