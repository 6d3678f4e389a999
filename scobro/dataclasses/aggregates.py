#!/usr/bin/env python3
"""
aggregates.py
-------------
Dataclasses for the assembled entry tree.

An EntryWithItems is an entry with its items, each item carrying the names
of its tags and people and its Jira keys. These are the values returned by
the aggregator, rendered by the export formatters and sent back by the
command surface. They are detached from the session: building one reads
every attribute it needs up front.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional


def iso(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 text for an optional datetime."""
    return value.isoformat() if value is not None else None


@dataclass
class EntryItemWithMetadata:
    """
    One entry item with its related metadata flattened to strings.

    Attributes:
        id: Item id
        entry_id: Owning entry id
        item_type: Note, Action, Decision, Meeting or a free-form type
        content: Item text
        project: Optional project name
        created_at / updated_at: Row timestamps (aware UTC)
        tags: Tag names, ordered by name
        people: Person names, ordered by name
        jira: Jira keys, in creation order (duplicates kept)
    """

    id: str
    entry_id: str
    item_type: str
    content: str
    project: Optional[str]
    created_at: datetime
    updated_at: datetime
    tags: List[str] = field(default_factory=list)
    people: List[str] = field(default_factory=list)
    jira: List[str] = field(default_factory=list)

    @classmethod
    def from_database(cls, db_item: Any) -> EntryItemWithMetadata:
        """
        Build from an EntryItem ORM row with its relations loaded.

        Args:
            db_item: EntryItem instance

        Returns:
            Detached EntryItemWithMetadata
        """
        return cls(
            id=db_item.id,
            entry_id=db_item.entry_id,
            item_type=db_item.item_type,
            content=db_item.content,
            project=db_item.project,
            created_at=db_item.created_at,
            updated_at=db_item.updated_at,
            tags=[tag.name for tag in db_item.tags],
            people=[person.name for person in db_item.people],
            jira=[ref.jira_key for ref in db_item.jira_refs],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "entry_id": self.entry_id,
            "item_type": self.item_type,
            "content": self.content,
            "project": self.project,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
            "tags": list(self.tags),
            "people": list(self.people),
            "jira": list(self.jira),
        }


@dataclass
class EntryWithItems:
    """
    An entry with its items, ordered by item creation.

    Attributes:
        id: Entry id
        timestamp: User-supplied event time (aware UTC)
        created_at / updated_at: Row timestamps
        items: EntryItemWithMetadata list
    """

    id: str
    timestamp: datetime
    created_at: datetime
    updated_at: datetime
    items: List[EntryItemWithMetadata] = field(default_factory=list)

    @classmethod
    def from_database(
        cls, db_entry: Any, db_items: Optional[Iterable[Any]] = None
    ) -> EntryWithItems:
        """
        Build from an Entry ORM row.

        Args:
            db_entry: Entry instance
            db_items: Items to include (default: all of the entry's items)

        Returns:
            Detached EntryWithItems
        """
        items = db_entry.items if db_items is None else db_items
        return cls(
            id=db_entry.id,
            timestamp=db_entry.timestamp,
            created_at=db_entry.created_at,
            updated_at=db_entry.updated_at,
            items=[EntryItemWithMetadata.from_database(item) for item in items],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": iso(self.timestamp),
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
            "items": [item.to_dict() for item in self.items],
        }
