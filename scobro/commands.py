#!/usr/bin/env python3
"""
commands.py
-----------
Command surface of the logbook: one call, one logical operation.

A front end sends plain dict requests (its JSON payloads) and receives
dataclass responses with `to_dict()`. Every command runs inside a single
LogbookDB.session_scope, so commands are serialized against each other
and each one either completes entirely or leaves the store untouched.

Errors propagate as the typed exceptions of scobro.core.exceptions:
ValidationError for malformed input, NotFoundError for unknown update
targets, ReferentialError for unknown parents, StoreError for anything
the store itself rejects.

Usage:
    commands = LogbookCommands(LogbookDB(DB_PATH))

    entry = commands.create_entry({
        "timestamp": "2024-01-01T09:00:00Z",
        "items": [{"item_type": "Note", "content": "stand-up",
                   "tags": ["team-a"], "people": ["alice"]}],
    })
    commands.update_entry_item(entry.items[0].id, {"tags": []})
    csv_text = commands.export_entries_csv()
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from scobro.core.logging_manager import safe_logger
from scobro.core.validators import DataValidator
from scobro.dataclasses.aggregates import EntryItemWithMetadata, EntryWithItems
from scobro.dataclasses.responses import (
    ActionResponse,
    AttendeeResponse,
    MeetingResponse,
    PersonResponse,
    ProjectResponse,
    TagResponse,
)
from scobro.database.export_manager import ExportManager
from scobro.database.manager import LogbookDB

MEETING_DATETIME_FIELDS = ("start_time", "end_time")
ACTION_DATETIME_FIELDS = ("due_date",)


class LogbookCommands:
    """
    Request/response operations over an injected LogbookDB.

    Attributes:
        db: The store handle every command runs against
    """

    def __init__(self, db: LogbookDB) -> None:
        self.db = db

    @property
    def logger(self):
        return safe_logger(self.db.logger)

    def _lenient_datetimes(
        self, request: Mapping[str, Any], fields: tuple
    ) -> Dict[str, Any]:
        """
        Copy a request, parsing optional date-time fields.

        Values that do not parse are dropped (treated as absent) with a
        warning. An explicit None or empty string stays, meaning "clear".
        """
        metadata = dict(request)
        for field in fields:
            if field not in metadata:
                continue
            raw = metadata[field]
            if raw is None or (isinstance(raw, str) and not raw.strip()):
                metadata[field] = None
                continue
            parsed = DataValidator.parse_optional_datetime(raw)
            if parsed is None:
                self.logger.log_warning(
                    f"Ignoring unparsable {field}", {"field": field, "value": raw}
                )
                del metadata[field]
            else:
                metadata[field] = parsed
        return metadata

    # -------------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------------

    def create_entry(self, request: Mapping[str, Any]) -> EntryWithItems:
        """
        Create an entry with its items, tags, people and Jira refs.

        Args:
            request: {"timestamp": RFC 3339 text, "items": [{"item_type",
                "content", "project"?, "tags"?, "jira"?, "people"?}, ...]}

        Returns:
            The created entry with its items, in creation order

        Raises:
            ValidationError: If the timestamp is missing or invalid (nothing
                is written), or an item has no type
        """
        timestamp = DataValidator.parse_datetime(request.get("timestamp"))
        items: List[Mapping[str, Any]] = list(request.get("items") or [])

        with self.db.session_scope():
            entry = self.db.entries.create_entry(timestamp)

            for item_request in items:
                item = self.db.entries.create_entry_item(
                    entry.id,
                    item_request.get("item_type"),
                    item_request.get("content", ""),
                    item_request.get("project"),
                )
                for name in DataValidator.normalize_string_list(item_request.get("tags")):
                    tag = self.db.tags.get_or_create(name)
                    self.db.relations.link_item_tag(item.id, tag.id)
                for name in DataValidator.normalize_string_list(item_request.get("people")):
                    person = self.db.people.get_or_create(name)
                    self.db.relations.link_item_person(item.id, person.id)
                for key in item_request.get("jira") or []:
                    if DataValidator.normalize_string(key):
                        self.db.entries.create_jira_ref(item.id, key)

            created = self.db.aggregator.get_entry(entry.id)

        self.logger.log_info(
            "Entry created", {"entry_id": created.id, "items": len(created.items)}
        )
        return created

    def get_all_entries(self) -> List[EntryWithItems]:
        """All entries with their items, most recent event first."""
        with self.db.session_scope():
            return self.db.aggregator.get_all_entries_with_items()

    def update_entry_item(
        self, item_id: str, request: Mapping[str, Any]
    ) -> EntryItemWithMetadata:
        """
        Partially update an item.

        Args:
            item_id: Item to update
            request: Any of "content", "project", "tags", "jira", "people".
                Present list fields fully replace the item's current set.

        Returns:
            Fresh view of the updated item

        Raises:
            NotFoundError: If the item does not exist
        """
        with self.db.session_scope():
            self.db.entries.touch_entry_item(item_id)

            if "content" in request:
                self.db.entries.update_entry_item_content(item_id, request["content"])
            if "project" in request:
                self.db.entries.update_entry_item_project(item_id, request["project"])
            if "tags" in request:
                self.db.relations.replace_item_tags(item_id, request["tags"] or [])
            if "people" in request:
                self.db.relations.replace_item_people(item_id, request["people"] or [])
            if "jira" in request:
                self.db.relations.replace_item_jira_refs(item_id, request["jira"] or [])

            view = self.db.aggregator.get_entry_with_items(item_id)

        return view.items[0]

    def delete_entry(self, entry_id: str) -> None:
        with self.db.session_scope():
            self.db.entries.delete_entry(entry_id)

    def delete_entry_item(self, item_id: str) -> None:
        with self.db.session_scope():
            self.db.entries.delete_entry_item(item_id)

    def export_entries_csv(self) -> str:
        """All entries as CSV text."""
        return ExportManager.to_csv(self.get_all_entries())

    def export_entries_markdown(self) -> str:
        """All entries as a Markdown report."""
        return ExportManager.to_markdown(self.get_all_entries())

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def create_project(self, request: Mapping[str, Any]) -> ProjectResponse:
        with self.db.session_scope():
            return ProjectResponse.from_database(self.db.projects.create(dict(request)))

    def get_all_projects(self) -> List[ProjectResponse]:
        with self.db.session_scope():
            return [ProjectResponse.from_database(p) for p in self.db.projects.get_all()]

    def update_project(self, project_id: str, request: Mapping[str, Any]) -> ProjectResponse:
        with self.db.session_scope():
            project = self.db.projects.update(project_id, dict(request))
            return ProjectResponse.from_database(project)

    def delete_project(self, project_id: str) -> None:
        with self.db.session_scope():
            self.db.projects.delete(project_id)

    # -------------------------------------------------------------------------
    # Tags and people
    # -------------------------------------------------------------------------

    def create_tag(self, request: Mapping[str, Any]) -> TagResponse:
        with self.db.session_scope():
            return TagResponse.from_database(self.db.tags.create(dict(request)))

    def get_all_tags(self) -> List[TagResponse]:
        with self.db.session_scope():
            return [TagResponse.from_database(t) for t in self.db.tags.get_all()]

    def update_tag(self, tag_id: str, request: Mapping[str, Any]) -> TagResponse:
        with self.db.session_scope():
            return TagResponse.from_database(self.db.tags.update(tag_id, dict(request)))

    def delete_tag(self, tag_id: str) -> None:
        with self.db.session_scope():
            self.db.tags.delete(tag_id)

    def get_all_people(self) -> List[PersonResponse]:
        with self.db.session_scope():
            return [PersonResponse.from_database(p) for p in self.db.people.get_all()]

    # -------------------------------------------------------------------------
    # Meetings
    # -------------------------------------------------------------------------

    def create_meeting(self, request: Mapping[str, Any]) -> MeetingResponse:
        """
        Create a meeting.

        start_time and end_time are optional; unparsable values are
        ignored rather than rejected.
        """
        metadata = self._lenient_datetimes(request, MEETING_DATETIME_FIELDS)
        with self.db.session_scope():
            return MeetingResponse.from_database(self.db.meetings.create_meeting(metadata))

    def get_all_meetings(self) -> List[MeetingResponse]:
        with self.db.session_scope():
            return [
                MeetingResponse.from_database(m)
                for m in self.db.meetings.get_all_meetings()
            ]

    def update_meeting(self, meeting_id: str, request: Mapping[str, Any]) -> MeetingResponse:
        metadata = self._lenient_datetimes(request, MEETING_DATETIME_FIELDS)
        with self.db.session_scope():
            meeting = self.db.meetings.update_meeting(meeting_id, metadata)
            return MeetingResponse.from_database(meeting)

    def delete_meeting(self, meeting_id: str) -> None:
        with self.db.session_scope():
            self.db.meetings.delete_meeting(meeting_id)

    # ---- Attendees ----

    def add_meeting_attendee(self, request: Mapping[str, Any]) -> AttendeeResponse:
        """
        Add an attendee.

        Args:
            request: {"meeting_id", "name", "email"?, "role"?, "status"?}
        """
        metadata = dict(request)
        meeting_id = metadata.pop("meeting_id", None)
        with self.db.session_scope():
            attendee = self.db.meetings.add_attendee(meeting_id, metadata)
            return AttendeeResponse.from_database(attendee)

    def get_meeting_attendees(self, meeting_id: str) -> List[AttendeeResponse]:
        with self.db.session_scope():
            return [
                AttendeeResponse.from_database(a)
                for a in self.db.meetings.get_attendees(meeting_id)
            ]

    def update_meeting_attendee(
        self, attendee_id: str, request: Mapping[str, Any]
    ) -> AttendeeResponse:
        with self.db.session_scope():
            attendee = self.db.meetings.update_attendee(attendee_id, dict(request))
            return AttendeeResponse.from_database(attendee)

    def remove_meeting_attendee(self, attendee_id: str) -> None:
        with self.db.session_scope():
            self.db.meetings.remove_attendee(attendee_id)

    # ---- Actions ----

    def create_meeting_action(self, request: Mapping[str, Any]) -> ActionResponse:
        """
        Create a meeting action.

        Args:
            request: {"meeting_id", "title", "description"?, "assignee"?,
                "due_date"?, "priority"?, "status"?, "entry_item_id"?}
        """
        metadata = self._lenient_datetimes(request, ACTION_DATETIME_FIELDS)
        meeting_id = metadata.pop("meeting_id", None)
        with self.db.session_scope():
            action = self.db.meetings.create_action(meeting_id, metadata)
            return ActionResponse.from_database(action)

    def get_meeting_actions(self, meeting_id: str) -> List[ActionResponse]:
        with self.db.session_scope():
            return [
                ActionResponse.from_database(a)
                for a in self.db.meetings.get_actions(meeting_id)
            ]

    def update_meeting_action(
        self, action_id: str, request: Mapping[str, Any]
    ) -> ActionResponse:
        metadata = self._lenient_datetimes(request, ACTION_DATETIME_FIELDS)
        with self.db.session_scope():
            action = self.db.meetings.update_action(action_id, metadata)
            return ActionResponse.from_database(action)

    def delete_meeting_action(self, action_id: str) -> None:
        with self.db.session_scope():
            self.db.meetings.delete_action(action_id)

