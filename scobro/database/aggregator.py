#!/usr/bin/env python3
"""
aggregator.py
-------------
Reassembles entry trees: Entry → EntryItem → {tags, people, Jira refs}.

Relations are preloaded with selectinload, one query per relation kind
for the whole result set rather than three lookups per item, and then
flattened into detached EntryWithItems views.

Orderings:
    - entries: timestamp descending (creation descending on ties)
    - items: created_at ascending
    - tags and people: name ascending
    - Jira refs: created_at ascending

Usage:
    aggregator = EntryAggregator(session, logger)

    for entry in aggregator.get_all_entries_with_items():
        print(entry.timestamp, [item.content for item in entry.items])

    view = aggregator.get_entry_with_items(item_id)  # after a partial update
"""
from typing import List

from sqlalchemy.orm import selectinload

from scobro.core.exceptions import NotFoundError
from scobro.dataclasses.aggregates import EntryWithItems
from scobro.database.decorators import handle_db_errors, log_database_operation
from scobro.database.managers.base_manager import BaseManager
from scobro.database.models import Entry, EntryItem


def _item_relations():
    return (
        selectinload(EntryItem.tags),
        selectinload(EntryItem.people),
        selectinload(EntryItem.jira_refs),
    )


class EntryAggregator(BaseManager):
    """
    Read-side assembly of entries with their items and item metadata.
    """

    @handle_db_errors
    @log_database_operation("get_all_entries_with_items")
    def get_all_entries_with_items(self) -> List[EntryWithItems]:
        """
        Load every entry with its full item tree.

        Returns:
            EntryWithItems list, most recent event first
        """
        self.session.flush()
        entries = (
            self.session.query(Entry)
            .options(
                selectinload(Entry.items).options(*_item_relations()),
            )
            .order_by(Entry.timestamp.desc(), Entry.created_at.desc())
            .execution_options(populate_existing=True)
            .all()
        )

        result = [EntryWithItems.from_database(entry) for entry in entries]
        if self.logger:
            self.logger.log_debug(
                "Aggregated entries",
                {
                    "entries": len(result),
                    "items": sum(len(entry.items) for entry in result),
                },
            )
        return result

    @handle_db_errors
    @log_database_operation("get_entry_tree")
    def get_entry(self, entry_id: str) -> EntryWithItems:
        """
        Load one entry with its full item tree.

        Raises:
            NotFoundError: If the entry does not exist
        """
        self.session.flush()
        entry = (
            self.session.query(Entry)
            .filter(Entry.id == entry_id)
            .options(selectinload(Entry.items).options(*_item_relations()))
            .execution_options(populate_existing=True)
            .first()
        )
        if entry is None:
            raise NotFoundError(f"Entry not found: {entry_id}")
        return EntryWithItems.from_database(entry)

    @handle_db_errors
    @log_database_operation("get_entry_with_items")
    def get_entry_with_items(self, entry_item_id: str) -> EntryWithItems:
        """
        Load the entry owning an item, with only that item in `items`.

        Used to return a fresh view of an item right after it was
        updated.

        Args:
            entry_item_id: Item to look up

        Returns:
            EntryWithItems whose items list holds exactly the requested item

        Raises:
            NotFoundError: If the item does not exist
        """
        self.session.flush()
        item = (
            self.session.query(EntryItem)
            .filter(EntryItem.id == entry_item_id)
            .options(*_item_relations())
            .execution_options(populate_existing=True)
            .first()
        )
        if item is None:
            raise NotFoundError(f"Entry item not found: {entry_item_id}")

        entry = self.session.get(Entry, item.entry_id)
        if entry is None:
            raise NotFoundError(f"Entry not found: {item.entry_id}")

        return EntryWithItems.from_database(entry, [item])
