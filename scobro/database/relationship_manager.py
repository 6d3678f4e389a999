#!/usr/bin/env python3
"""
relationship_manager.py
-----------------------
Handles entry item relations: item↔tag and item↔person join rows, and the
item's Jira references.

Linking is an idempotent set-union: inserting a pair that already exists
is ignored (SQLite INSERT ... ON CONFLICT DO NOTHING), so the join tables
never hold duplicates. Removal clears every relation of one kind for an
item. Replacement is remove-all then re-link, run inside the caller's
session scope so a reader never observes the empty intermediate state.

Key Features:
    - Endpoint checks before linking (ReferentialError on unknown ids)
    - Bulk removal returning the number of rows removed
    - Ordered lookups (tags/people by name, Jira refs by creation)
    - Full replacement from plain name/key lists, creating tags and
      people on first use

Usage:
    relations = RelationshipManager(session, logger)

    relations.link_item_tag(item.id, tag.id)
    relations.replace_item_tags(item.id, ["team-b", "team-c"])
    relations.replace_item_jira_refs(item.id, ["OPS-1", "OPS-1"])

Notes:
    - Join-table statements bypass the ORM unit of work, so the item's
      cached collections are expired after every change
    - Untagging never deletes Tag or Person rows
"""
from typing import Iterable, List

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert

from scobro.core.validators import DataValidator
from scobro.database.decorators import handle_db_errors, log_database_operation
from scobro.database.managers.base_manager import BaseManager
from scobro.database.managers.entry_manager import EntryManager
from scobro.database.managers.person_manager import PersonManager
from scobro.database.managers.tag_manager import TagManager
from scobro.database.models import (
    EntryItem,
    JiraRef,
    Person,
    Tag,
    item_people,
    item_tags,
)


class RelationshipManager(BaseManager):
    """
    Manages the many-to-many and attachment relations of entry items.
    """

    def _expire(self, item_id: str, *attributes: str) -> None:
        item = self.session.get(EntryItem, item_id)
        if item is not None:
            self.session.expire(item, list(attributes))

    # -------------------------------------------------------------------------
    # Linking
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("link_item_tag")
    def link_item_tag(self, item_id: str, tag_id: str) -> None:
        """
        Link a tag to an item; an existing link is left as is.

        Raises:
            ReferentialError: If the item or the tag does not exist
        """
        self._require_parent(EntryItem, item_id)
        self._require_parent(Tag, tag_id)

        self.session.flush()
        self.session.execute(
            insert(item_tags)
            .values(entry_item_id=item_id, tag_id=tag_id)
            .on_conflict_do_nothing()
        )
        self._expire(item_id, "tags")

    @handle_db_errors
    @log_database_operation("link_item_person")
    def link_item_person(self, item_id: str, person_id: str) -> None:
        """
        Link a person to an item; an existing link is left as is.

        Raises:
            ReferentialError: If the item or the person does not exist
        """
        self._require_parent(EntryItem, item_id)
        self._require_parent(Person, person_id)

        self.session.flush()
        self.session.execute(
            insert(item_people)
            .values(entry_item_id=item_id, person_id=person_id)
            .on_conflict_do_nothing()
        )
        self._expire(item_id, "people")

    # -------------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("remove_item_tags")
    def remove_item_tags(self, item_id: str) -> int:
        """Unlink every tag from an item. Returns the number of links removed."""
        self.session.flush()
        result = self.session.execute(
            delete(item_tags).where(item_tags.c.entry_item_id == item_id)
        )
        self._expire(item_id, "tags")
        return result.rowcount

    @handle_db_errors
    @log_database_operation("remove_item_people")
    def remove_item_people(self, item_id: str) -> int:
        """Unlink every person from an item. Returns the number of links removed."""
        self.session.flush()
        result = self.session.execute(
            delete(item_people).where(item_people.c.entry_item_id == item_id)
        )
        self._expire(item_id, "people")
        return result.rowcount

    @handle_db_errors
    @log_database_operation("remove_item_jira_refs")
    def remove_item_jira_refs(self, item_id: str) -> int:
        """Delete every Jira ref of an item. Returns the number of refs removed."""
        refs = self.session.query(JiraRef).filter_by(entry_item_id=item_id).all()
        for ref in refs:
            self.session.delete(ref)
        self.session.flush()
        self._expire(item_id, "jira_refs")
        return len(refs)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_item_tags")
    def get_item_tags(self, item_id: str) -> List[Tag]:
        """Tags linked to an item, ordered by name."""
        stmt = (
            select(Tag)
            .join(item_tags, item_tags.c.tag_id == Tag.id)
            .where(item_tags.c.entry_item_id == item_id)
            .order_by(Tag.name)
        )
        return list(self.session.scalars(stmt))

    @handle_db_errors
    @log_database_operation("get_item_people")
    def get_item_people(self, item_id: str) -> List[Person]:
        """People linked to an item, ordered by name."""
        stmt = (
            select(Person)
            .join(item_people, item_people.c.person_id == Person.id)
            .where(item_people.c.entry_item_id == item_id)
            .order_by(Person.name)
        )
        return list(self.session.scalars(stmt))

    @handle_db_errors
    @log_database_operation("get_item_jira_refs")
    def get_item_jira_refs(self, item_id: str) -> List[JiraRef]:
        """Jira refs of an item, in creation order."""
        return (
            self.session.query(JiraRef)
            .filter_by(entry_item_id=item_id)
            .order_by(JiraRef.created_at)
            .all()
        )

    # -------------------------------------------------------------------------
    # Replacement
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("replace_item_tags")
    def replace_item_tags(self, item_id: str, names: Iterable[str]) -> List[Tag]:
        """
        Make the item's tag set exactly `names`.

        Unknown names are created; tags dropped from the set keep existing.

        Raises:
            NotFoundError: If the item does not exist
        """
        self._require(EntryItem, item_id)
        tag_mgr = TagManager(self.session, self.logger)

        self.remove_item_tags(item_id)
        for name in DataValidator.normalize_string_list(names):
            self.link_item_tag(item_id, tag_mgr.get_or_create(name).id)
        return self.get_item_tags(item_id)

    @handle_db_errors
    @log_database_operation("replace_item_people")
    def replace_item_people(self, item_id: str, names: Iterable[str]) -> List[Person]:
        """
        Make the item's people set exactly `names`.

        Raises:
            NotFoundError: If the item does not exist
        """
        self._require(EntryItem, item_id)
        person_mgr = PersonManager(self.session, self.logger)

        self.remove_item_people(item_id)
        for name in DataValidator.normalize_string_list(names):
            self.link_item_person(item_id, person_mgr.get_or_create(name).id)
        return self.get_item_people(item_id)

    @handle_db_errors
    @log_database_operation("replace_item_jira_refs")
    def replace_item_jira_refs(self, item_id: str, keys: Iterable[str]) -> List[JiraRef]:
        """
        Replace the item's Jira refs with `keys`, in order.

        Keys are not deduplicated; blank keys are skipped.

        Raises:
            NotFoundError: If the item does not exist
        """
        self._require(EntryItem, item_id)
        entry_mgr = EntryManager(self.session, self.logger)

        self.remove_item_jira_refs(item_id)
        for key in keys or []:
            normalized = DataValidator.normalize_string(key)
            if normalized:
                entry_mgr.create_jira_ref(item_id, normalized)
        self._expire(item_id, "jira_refs")
        return self.get_item_jira_refs(item_id)
