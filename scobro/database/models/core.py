"""
Core Models
------------

Central models for the logbook database.

Models:
    - Entry: A timestamped container for one or more logbook items
    - EntryItem: A single typed note/action/decision/meeting reference
    - JiraRef: An issue-tracker key attached to an item

Ownership and delete rules:
    Entry ─1:N─> EntryItem ─1:N─> JiraRef          (cascade)
    EntryItem ─M:N─> Tag, Person                    (join rows cascade)
    EntryItem <─N:1─ MeetingAction.entry_item_id    (set null)

Deletes are enforced by the store (ON DELETE clauses with foreign keys
switched on); the ORM relationships use passive_deletes so both paths
agree.
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import item_people, item_tags
from .base import Base, UTCDateTime, new_id, utc_now

if TYPE_CHECKING:
    from .entities import Person, Tag
    from .meetings import MeetingAction


# ----- Entry Model -----
class Entry(Base):
    """
    A timestamped logbook entry.

    Attributes:
        id: Opaque identifier (UUID4 string)
        timestamp: User-supplied event time (aware UTC)
        created_at: When the row was created
        updated_at: When the row was last modified

    Relationships:
        items: One-to-many with EntryItem, ordered by creation
    """

    __tablename__ = "entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    timestamp: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    items: Mapped[List["EntryItem"]] = relationship(
        "EntryItem",
        back_populates="entry",
        order_by="EntryItem.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, timestamp={self.timestamp})>"


# ----- EntryItem Model -----
class EntryItem(Base):
    """
    A single typed item within an entry.

    Attributes:
        id: Opaque identifier
        entry_id: Owning entry (cascade delete)
        item_type: Note, Action, Decision, Meeting or any free-form type
        content: Item text
        project: Optional project name; a denormalized string, not a
            foreign key to Project
        created_at / updated_at: Row timestamps

    Relationships:
        tags: Many-to-many with Tag, ordered by name
        people: Many-to-many with Person, ordered by name
        jira_refs: One-to-many with JiraRef, ordered by creation
        meeting_actions: MeetingActions pointing here (set null on delete)
    """

    __tablename__ = "entry_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    entry_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_type: Mapped[str] = mapped_column(String(64), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    project: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    entry: Mapped["Entry"] = relationship("Entry", back_populates="items")
    tags: Mapped[List["Tag"]] = relationship(
        "Tag",
        secondary=item_tags,
        back_populates="items",
        order_by="Tag.name",
        passive_deletes=True,
    )
    people: Mapped[List["Person"]] = relationship(
        "Person",
        secondary=item_people,
        back_populates="items",
        order_by="Person.name",
        passive_deletes=True,
    )
    jira_refs: Mapped[List["JiraRef"]] = relationship(
        "JiraRef",
        back_populates="entry_item",
        order_by="JiraRef.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    meeting_actions: Mapped[List["MeetingAction"]] = relationship(
        "MeetingAction",
        back_populates="entry_item",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<EntryItem(id={self.id}, type={self.item_type})>"


# ----- JiraRef Model -----
class JiraRef(Base):
    """
    Issue-tracker key attached to an entry item.

    A pure attachment: an item may reference the same key more than once.
    """

    __tablename__ = "jira_refs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    entry_item_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("entry_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    jira_key: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    entry_item: Mapped["EntryItem"] = relationship("EntryItem", back_populates="jira_refs")

    def __repr__(self) -> str:
        return f"<JiraRef(id={self.id}, key={self.jira_key})>"
