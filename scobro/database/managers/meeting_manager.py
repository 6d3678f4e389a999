#!/usr/bin/env python3
"""
meeting_manager.py
--------------------
Manages Meeting, MeetingAttendee and MeetingAction entities.

Meetings own their attendees and actions: deleting a meeting removes
both. An action can point at the entry item that recorded it; deleting
that item clears the pointer and keeps the action.

Date-time fields (start_time, end_time, due_date) are optional. They
accept aware datetimes or ISO-8601 strings; a value that does not
parse is stored as None.

Usage:
    meetings = MeetingManager(session, logger)

    meeting = meetings.create_meeting({"title": "Sprint review"})
    meetings.add_attendee(meeting.id, {"name": "alice", "role": "host"})
    meetings.create_action(meeting.id, {"title": "Send notes", "assignee": "bob"})
"""
from typing import Any, Dict, List, Optional

from scobro.core.validators import DataValidator
from scobro.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from scobro.database.models import (
    EntryItem,
    Meeting,
    MeetingAction,
    MeetingAttendee,
    utc_now,
)
from scobro.database.models.enums import (
    DEFAULT_ACTION_PRIORITY,
    DEFAULT_ACTION_STATUS,
    DEFAULT_ATTENDEE_ROLE,
    DEFAULT_ATTENDEE_STATUS,
    DEFAULT_MEETING_STATUS,
    DEFAULT_MEETING_TYPE,
)
from .base_manager import BaseManager


def _with_default(default: str):
    def normalize(value: Any) -> str:
        return DataValidator.normalize_string(value) or default

    return normalize


_optional = DataValidator.normalize_string
_optional_datetime = DataValidator.parse_optional_datetime

MEETING_FIELDS = [
    ("title", DataValidator.normalize_string),
    ("description", _optional, True),
    ("start_time", _optional_datetime, True),
    ("end_time", _optional_datetime, True),
    ("location", _optional, True),
    ("meeting_type", _with_default(DEFAULT_MEETING_TYPE)),
    ("status", _with_default(DEFAULT_MEETING_STATUS)),
]

ATTENDEE_FIELDS = [
    ("name", DataValidator.normalize_string),
    ("email", _optional, True),
    ("role", _with_default(DEFAULT_ATTENDEE_ROLE)),
    ("status", _with_default(DEFAULT_ATTENDEE_STATUS)),
]

ACTION_FIELDS = [
    ("title", DataValidator.normalize_string),
    ("description", _optional, True),
    ("assignee", _optional, True),
    ("due_date", _optional_datetime, True),
    ("status", _with_default(DEFAULT_ACTION_STATUS)),
    ("priority", _with_default(DEFAULT_ACTION_PRIORITY)),
]


class MeetingManager(BaseManager):
    """
    Manages meetings with their attendees and actions.
    """

    # -------------------------------------------------------------------------
    # Meetings
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_meeting")
    @validate_metadata(["title"])
    def create_meeting(self, metadata: Dict[str, Any]) -> Meeting:
        """
        Create a meeting.

        Args:
            metadata: Dictionary with keys:
                - title (required)
                - description, location (optional)
                - start_time, end_time (optional date-times)
                - meeting_type (default 'meeting'), status (default 'scheduled')

        Returns:
            Created Meeting

        Raises:
            ValidationError: If title is blank
        """
        title = DataValidator.require_name(metadata.get("title"), "title")

        now = utc_now()
        meeting = Meeting(
            title=title,
            description=_optional(metadata.get("description")),
            start_time=_optional_datetime(metadata.get("start_time")),
            end_time=_optional_datetime(metadata.get("end_time")),
            location=_optional(metadata.get("location")),
            meeting_type=_with_default(DEFAULT_MEETING_TYPE)(metadata.get("meeting_type")),
            status=_with_default(DEFAULT_MEETING_STATUS)(metadata.get("status")),
            created_at=now,
            updated_at=now,
        )
        self.session.add(meeting)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(f"Created meeting: {title}", {"meeting_id": meeting.id})

        return meeting

    @handle_db_errors
    @log_database_operation("get_meeting")
    def get_meeting(self, meeting_id: str) -> Optional[Meeting]:
        return self._get_by_id(Meeting, meeting_id)

    @handle_db_errors
    @log_database_operation("get_all_meetings")
    def get_all_meetings(self) -> List[Meeting]:
        """
        Retrieve all meetings.

        Ordered by start_time ascending with unscheduled meetings last,
        then by creation.
        """
        return self._get_all(
            Meeting,
            Meeting.start_time.is_(None),
            Meeting.start_time,
            Meeting.created_at,
        )

    @handle_db_errors
    @log_database_operation("update_meeting")
    def update_meeting(self, meeting_id: str, metadata: Dict[str, Any]) -> Meeting:
        """
        Partially update a meeting.

        Raises:
            NotFoundError: If meeting_id does not exist
            ValidationError: If title is present but blank
        """
        meeting = self._require(Meeting, meeting_id)
        self._update_scalar_fields(meeting, metadata, MEETING_FIELDS)
        meeting.updated_at = utc_now()
        self.session.flush()
        return meeting

    @handle_db_errors
    @log_database_operation("delete_meeting")
    def delete_meeting(self, meeting_id: str) -> None:
        """Delete a meeting with its attendees and actions."""
        self._delete_by_id(Meeting, meeting_id)

    # -------------------------------------------------------------------------
    # Attendees
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("add_attendee")
    @validate_metadata(["name"])
    def add_attendee(self, meeting_id: str, metadata: Dict[str, Any]) -> MeetingAttendee:
        """
        Add an attendee to a meeting.

        Raises:
            ReferentialError: If meeting_id does not exist
            ValidationError: If name is blank
        """
        name = DataValidator.require_name(metadata.get("name"))
        meeting = self._require_parent(Meeting, meeting_id)

        attendee = MeetingAttendee(
            meeting_id=meeting.id,
            name=name,
            email=_optional(metadata.get("email")),
            role=_with_default(DEFAULT_ATTENDEE_ROLE)(metadata.get("role")),
            status=_with_default(DEFAULT_ATTENDEE_STATUS)(metadata.get("status")),
            created_at=utc_now(),
        )
        self.session.add(attendee)
        self.session.flush()
        return attendee

    @handle_db_errors
    @log_database_operation("get_attendees")
    def get_attendees(self, meeting_id: str) -> List[MeetingAttendee]:
        """Attendees of a meeting in the order they were added."""
        return (
            self.session.query(MeetingAttendee)
            .filter_by(meeting_id=meeting_id)
            .order_by(MeetingAttendee.created_at)
            .all()
        )

    @handle_db_errors
    @log_database_operation("update_attendee")
    def update_attendee(self, attendee_id: str, metadata: Dict[str, Any]) -> MeetingAttendee:
        """
        Partially update an attendee.

        Attendees carry no updated_at column; only the given fields change.

        Raises:
            NotFoundError: If attendee_id does not exist
        """
        attendee = self._require(MeetingAttendee, attendee_id)
        self._update_scalar_fields(attendee, metadata, ATTENDEE_FIELDS)
        self.session.flush()
        return attendee

    @handle_db_errors
    @log_database_operation("remove_attendee")
    def remove_attendee(self, attendee_id: str) -> None:
        self._delete_by_id(MeetingAttendee, attendee_id)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _linked_item_id(self, value: Any) -> Optional[str]:
        """Validate an optional entry item link (None clears it)."""
        item_id = DataValidator.normalize_string(value)
        if item_id is None:
            return None
        return self._require_parent(EntryItem, item_id).id

    @handle_db_errors
    @log_database_operation("create_action")
    @validate_metadata(["title"])
    def create_action(self, meeting_id: str, metadata: Dict[str, Any]) -> MeetingAction:
        """
        Create a follow-up action for a meeting.

        Args:
            meeting_id: Owning meeting
            metadata: Dictionary with keys:
                - title (required)
                - description, assignee (optional)
                - due_date (optional date-time)
                - status (default 'open'), priority (default 'medium')
                - entry_item_id (optional link to an entry item)

        Raises:
            ReferentialError: If the meeting or the linked item does not exist
            ValidationError: If title is blank
        """
        title = DataValidator.require_name(metadata.get("title"), "title")
        meeting = self._require_parent(Meeting, meeting_id)
        entry_item_id = self._linked_item_id(metadata.get("entry_item_id"))

        now = utc_now()
        action = MeetingAction(
            meeting_id=meeting.id,
            entry_item_id=entry_item_id,
            title=title,
            description=_optional(metadata.get("description")),
            assignee=_optional(metadata.get("assignee")),
            due_date=_optional_datetime(metadata.get("due_date")),
            status=_with_default(DEFAULT_ACTION_STATUS)(metadata.get("status")),
            priority=_with_default(DEFAULT_ACTION_PRIORITY)(metadata.get("priority")),
            created_at=now,
            updated_at=now,
        )
        self.session.add(action)
        self.session.flush()
        return action

    @handle_db_errors
    @log_database_operation("get_actions")
    def get_actions(self, meeting_id: str) -> List[MeetingAction]:
        """Actions of a meeting in creation order."""
        return (
            self.session.query(MeetingAction)
            .filter_by(meeting_id=meeting_id)
            .order_by(MeetingAction.created_at)
            .all()
        )

    @handle_db_errors
    @log_database_operation("update_action")
    def update_action(self, action_id: str, metadata: Dict[str, Any]) -> MeetingAction:
        """
        Partially update an action.

        entry_item_id may be set to another existing item or None.

        Raises:
            NotFoundError: If action_id does not exist
            ReferentialError: If entry_item_id names an unknown item
        """
        action = self._require(MeetingAction, action_id)

        if "entry_item_id" in metadata:
            action.entry_item_id = self._linked_item_id(metadata["entry_item_id"])

        self._update_scalar_fields(action, metadata, ACTION_FIELDS)
        action.updated_at = utc_now()
        self.session.flush()
        return action

    @handle_db_errors
    @log_database_operation("delete_action")
    def delete_action(self, action_id: str) -> None:
        self._delete_by_id(MeetingAction, action_id)
