"""
Enumeration Types
------------------

Well-known values for the logbook models.

Enums:
    - ItemType: Built-in entry item kinds (the column itself is free-form)

Constants:
    Defaults for meeting, attendee and action status fields.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class ItemType(str, Enum):
    """
    Built-in entry item types.

    EntryItem.item_type is a free-form string; these are the kinds the
    front end offers and the Markdown export knows how to decorate.
    """

    NOTE = "Note"
    ACTION = "Action"
    DECISION = "Decision"
    MEETING = "Meeting"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all built-in item type values."""
        return [item_type.value for item_type in cls]

    @property
    def emoji(self) -> str:
        """Marker used in Markdown exports."""
        emoji_map = {
            self.ACTION: "🔴",
            self.DECISION: "🔵",
            self.NOTE: "🟢",
            self.MEETING: "🟣",
        }
        return emoji_map[self]

    @classmethod
    def emoji_for(cls, item_type: str) -> str:
        """Marker for any item type string; unknown types get a memo."""
        try:
            return cls(item_type).emoji
        except ValueError:
            return "📝"


# ---- Meeting defaults ----
DEFAULT_MEETING_TYPE = "meeting"
DEFAULT_MEETING_STATUS = "scheduled"
DEFAULT_ATTENDEE_ROLE = "attendee"
DEFAULT_ATTENDEE_STATUS = "invited"
DEFAULT_ACTION_STATUS = "open"
DEFAULT_ACTION_PRIORITY = "medium"
