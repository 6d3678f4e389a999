#!/usr/bin/env python3
"""
responses.py
------------
Response views returned by the command surface for projects, tags,
people and meetings.

Each view is a detached snapshot of one ORM row with a `to_dict()` that
renders datetimes as ISO-8601 text, ready for a JSON front end. Entry
responses use the aggregate views in aggregates.py.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from scobro.dataclasses.aggregates import iso


class _ResponseMixin:
    """Shared to_dict for flat response views."""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)  # type: ignore[call-overload]
        return {
            key: iso(value) if isinstance(value, datetime) else value
            for key, value in data.items()
        }


@dataclass
class ProjectResponse(_ResponseMixin):
    id: str
    name: str
    description: Optional[str]
    color: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_database(cls, db_project: Any) -> ProjectResponse:
        return cls(
            id=db_project.id,
            name=db_project.name,
            description=db_project.description,
            color=db_project.color,
            created_at=db_project.created_at,
            updated_at=db_project.updated_at,
        )


@dataclass
class TagResponse(_ResponseMixin):
    id: str
    name: str
    description: Optional[str]
    color: str
    category: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_database(cls, db_tag: Any) -> TagResponse:
        return cls(
            id=db_tag.id,
            name=db_tag.name,
            description=db_tag.description,
            color=db_tag.color,
            category=db_tag.category,
            created_at=db_tag.created_at,
            updated_at=db_tag.updated_at,
        )


@dataclass
class PersonResponse(_ResponseMixin):
    id: str
    name: str
    created_at: datetime

    @classmethod
    def from_database(cls, db_person: Any) -> PersonResponse:
        return cls(id=db_person.id, name=db_person.name, created_at=db_person.created_at)


@dataclass
class MeetingResponse(_ResponseMixin):
    """A meeting without its attendees and actions (fetched separately)."""

    id: str
    title: str
    description: Optional[str]
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    location: Optional[str]
    meeting_type: str
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_database(cls, db_meeting: Any) -> MeetingResponse:
        return cls(
            id=db_meeting.id,
            title=db_meeting.title,
            description=db_meeting.description,
            start_time=db_meeting.start_time,
            end_time=db_meeting.end_time,
            location=db_meeting.location,
            meeting_type=db_meeting.meeting_type,
            status=db_meeting.status,
            created_at=db_meeting.created_at,
            updated_at=db_meeting.updated_at,
        )


@dataclass
class AttendeeResponse(_ResponseMixin):
    id: str
    meeting_id: str
    name: str
    email: Optional[str]
    role: str
    status: str
    created_at: datetime

    @classmethod
    def from_database(cls, db_attendee: Any) -> AttendeeResponse:
        return cls(
            id=db_attendee.id,
            meeting_id=db_attendee.meeting_id,
            name=db_attendee.name,
            email=db_attendee.email,
            role=db_attendee.role,
            status=db_attendee.status,
            created_at=db_attendee.created_at,
        )


@dataclass
class ActionResponse(_ResponseMixin):
    id: str
    meeting_id: str
    entry_item_id: Optional[str]
    title: str
    description: Optional[str]
    assignee: Optional[str]
    due_date: Optional[datetime]
    status: str
    priority: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_database(cls, db_action: Any) -> ActionResponse:
        return cls(
            id=db_action.id,
            meeting_id=db_action.meeting_id,
            entry_item_id=db_action.entry_item_id,
            title=db_action.title,
            description=db_action.description,
            assignee=db_action.assignee,
            due_date=db_action.due_date,
            status=db_action.status,
            priority=db_action.priority,
            created_at=db_action.created_at,
            updated_at=db_action.updated_at,
        )
