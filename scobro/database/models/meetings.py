"""
Meeting Models
---------------

Meetings with their attendees and action items.

Models:
    - Meeting: Title, optional time window and location, type and status
    - MeetingAttendee: Someone invited to a meeting (cascade on meeting delete)
    - MeetingAction: Follow-up owned by a meeting (cascade on meeting delete),
      optionally pointing at an entry item (set null on item delete)
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UTCDateTime, new_id, utc_now
from .enums import (
    DEFAULT_ACTION_PRIORITY,
    DEFAULT_ACTION_STATUS,
    DEFAULT_ATTENDEE_ROLE,
    DEFAULT_ATTENDEE_STATUS,
    DEFAULT_MEETING_STATUS,
    DEFAULT_MEETING_TYPE,
)

if TYPE_CHECKING:
    from .core import EntryItem


class Meeting(Base):
    """
    A meeting.

    Attributes:
        id: Opaque identifier
        title: Meeting title
        description: Optional free text
        start_time / end_time: Optional aware UTC instants
        location: Optional free text
        meeting_type: Free-form type (default 'meeting')
        status: Free-form status (default 'scheduled')
        created_at / updated_at: Row timestamps

    Relationships:
        attendees: One-to-many with MeetingAttendee (cascade)
        actions: One-to-many with MeetingAction (cascade)
    """

    __tablename__ = "meetings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    end_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meeting_type: Mapped[str] = mapped_column(
        String(64), nullable=False, default=DEFAULT_MEETING_TYPE
    )
    status: Mapped[str] = mapped_column(
        String(64), nullable=False, default=DEFAULT_MEETING_STATUS
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    attendees: Mapped[List["MeetingAttendee"]] = relationship(
        "MeetingAttendee",
        back_populates="meeting",
        order_by="MeetingAttendee.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    actions: Mapped[List["MeetingAction"]] = relationship(
        "MeetingAction",
        back_populates="meeting",
        order_by="MeetingAction.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Meeting(id={self.id}, title='{self.title}')>"


class MeetingAttendee(Base):
    """Someone attending a meeting."""

    __tablename__ = "meeting_attendees"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    meeting_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("meetings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_ATTENDEE_ROLE)
    status: Mapped[str] = mapped_column(
        String(64), nullable=False, default=DEFAULT_ATTENDEE_STATUS
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    meeting: Mapped["Meeting"] = relationship("Meeting", back_populates="attendees")

    def __repr__(self) -> str:
        return f"<MeetingAttendee(id={self.id}, name='{self.name}')>"


class MeetingAction(Base):
    """
    Follow-up action from a meeting.

    entry_item_id optionally links the action to the logbook item that
    recorded it; deleting that item clears the link but keeps the action.
    """

    __tablename__ = "meeting_actions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    meeting_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("meetings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    entry_item_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("entry_items.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    assignee: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    due_date: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    status: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_ACTION_STATUS)
    priority: Mapped[str] = mapped_column(
        String(64), nullable=False, default=DEFAULT_ACTION_PRIORITY
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utc_now)

    meeting: Mapped["Meeting"] = relationship("Meeting", back_populates="actions")
    entry_item: Mapped[Optional["EntryItem"]] = relationship(
        "EntryItem", back_populates="meeting_actions"
    )

    def __repr__(self) -> str:
        return f"<MeetingAction(id={self.id}, title='{self.title}')>"
