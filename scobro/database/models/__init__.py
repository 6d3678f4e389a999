"""
Database Models Package
------------------------

SQLAlchemy ORM models for the logbook database.

Modules:
- base: Base class, UTC datetime type, id/timestamp helpers
- associations: item_tags / item_people join tables
- enums: Item types and meeting defaults
- core: Entry, EntryItem, JiraRef
- entities: Tag, Person, Project
- meetings: Meeting, MeetingAttendee, MeetingAction

Usage:
    from scobro.database.models import Entry, EntryItem, Tag
"""
# Base classes
from .base import DEFAULT_COLOR, Base, UTCDateTime, new_id, utc_now

# Enumerations
from .enums import ItemType

# Association tables
from .associations import item_people, item_tags

# Core models
from .core import Entry, EntryItem, JiraRef

# Entity models
from .entities import Person, Project, Tag

# Meetings
from .meetings import Meeting, MeetingAction, MeetingAttendee

__all__ = [
    # Base
    "Base",
    "UTCDateTime",
    "DEFAULT_COLOR",
    "new_id",
    "utc_now",
    # Enums
    "ItemType",
    # Association tables
    "item_tags",
    "item_people",
    # Core
    "Entry",
    "EntryItem",
    "JiraRef",
    # Entities
    "Tag",
    "Person",
    "Project",
    # Meetings
    "Meeting",
    "MeetingAttendee",
    "MeetingAction",
]
