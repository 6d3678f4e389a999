"""
Entity Models
--------------

Named metadata attached to entry items, plus projects.

Models:
    - Tag: Unique-name label with display metadata (upsert-by-name)
    - Person: Unique-name person mentioned in items (upsert-by-name)
    - Project: Categorization dimension with display metadata

EntryItem.project stores a project *name*; there is deliberately no
foreign key between that column and Project.name.
"""

# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

# --- Third party imports ---
from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .associations import item_people, item_tags
from .base import DEFAULT_COLOR, Base, UTCDateTime, new_id, utc_now

if TYPE_CHECKING:
    from .core import EntryItem


class Tag(Base):
    """
    Keyword tag for entry items.

    Attributes:
        id: Opaque identifier
        name: Tag text (unique)
        description: Optional free text
        color: Display swatch (default '#6c757d')
        category: Optional grouping label
        created_at / updated_at: Row timestamps

    Relationships:
        items: Many-to-many with EntryItem
    """

    __tablename__ = "tags"
    __table_args__ = (CheckConstraint("name != ''", name="ck_tag_non_empty_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_COLOR)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    items: Mapped[List["EntryItem"]] = relationship(
        "EntryItem",
        secondary=item_tags,
        back_populates="tags",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


class Person(Base):
    """
    A person mentioned in entry items.

    Same upsert-by-name pattern as Tag, without mutable metadata.
    """

    __tablename__ = "people"
    __table_args__ = (CheckConstraint("name != ''", name="ck_person_non_empty_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    items: Mapped[List["EntryItem"]] = relationship(
        "EntryItem",
        secondary=item_people,
        back_populates="people",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, name='{self.name}')>"


class Project(Base):
    """
    Project used to categorize entry items.

    Independent entity: items refer to projects by name only.
    """

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("name != ''", name="ck_project_non_empty_name"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_COLOR)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}')>"
