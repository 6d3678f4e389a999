"""
Entity Managers
----------------

One manager per aggregate, each built around a SQLAlchemy session and an
optional LogbookLogger.

Managers:
    - EntryManager: entries, entry items, Jira refs
    - TagManager: tags (get-or-create and explicit CRUD)
    - PersonManager: people (get-or-create)
    - ProjectManager: projects
    - MeetingManager: meetings, attendees, actions
"""
from .base_manager import BaseManager
from .entry_manager import EntryManager
from .meeting_manager import MeetingManager
from .person_manager import PersonManager
from .project_manager import ProjectManager
from .tag_manager import TagManager

__all__ = [
    "BaseManager",
    "EntryManager",
    "TagManager",
    "PersonManager",
    "ProjectManager",
    "MeetingManager",
]
