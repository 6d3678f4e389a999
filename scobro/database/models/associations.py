"""
Association Tables
-------------------

Many-to-many join tables between entry items and their metadata.

    item_tags    (entry_item_id, tag_id)
    item_people  (entry_item_id, person_id)

The composite primary key makes each pair unique, which is what lets
linking be an idempotent insert-or-ignore. Both sides cascade on delete.
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, String, Table

# --- Local imports ---
from .base import Base

item_tags = Table(
    "item_tags",
    Base.metadata,
    Column(
        "entry_item_id",
        String(36),
        ForeignKey("entry_items.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        String(36),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

item_people = Table(
    "item_people",
    Base.metadata,
    Column(
        "entry_item_id",
        String(36),
        ForeignKey("entry_items.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "person_id",
        String(36),
        ForeignKey("people.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)
