"""
test_entry_manager.py
---------------------
Unit tests for EntryManager: entries, items and Jira refs.
"""
import pytest
from datetime import datetime, timezone

from sqlalchemy import func, select

from scobro.core.exceptions import NotFoundError, ReferentialError, ValidationError
from scobro.database.models import EntryItem, JiraRef, MeetingAction, item_tags

STAMP = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


class TestEntryManagerCreateEntry:
    """Test EntryManager.create_entry()."""

    def test_create_entry(self, entry_manager):
        entry = entry_manager.create_entry(STAMP)

        assert len(entry.id) == 36
        assert entry.timestamp == STAMP
        assert entry.created_at == entry.updated_at

    def test_ids_are_unique(self, entry_manager):
        first = entry_manager.create_entry(STAMP)
        second = entry_manager.create_entry(STAMP)
        assert first.id != second.id

    def test_naive_timestamp_raises(self, entry_manager):
        with pytest.raises(ValidationError):
            entry_manager.create_entry(datetime(2024, 1, 1, 9, 0))

    def test_get_all_entries_descending(self, entry_manager):
        old = entry_manager.create_entry(datetime(2023, 6, 1, tzinfo=timezone.utc))
        new = entry_manager.create_entry(STAMP)

        assert [e.id for e in entry_manager.get_all_entries()] == [new.id, old.id]


class TestEntryManagerItems:
    """Test entry item creation and updates."""

    def test_create_item(self, entry_manager):
        entry = entry_manager.create_entry(STAMP)

        item = entry_manager.create_entry_item(entry.id, "Decision", "ship it", project="Apollo")

        assert item.entry_id == entry.id
        assert item.item_type == "Decision"
        assert item.project == "Apollo"
        assert item.created_at == item.updated_at

    def test_free_form_type_allowed(self, entry_manager):
        entry = entry_manager.create_entry(STAMP)
        item = entry_manager.create_entry_item(entry.id, "Idea", "maybe")
        assert item.item_type == "Idea"

    def test_unknown_entry_raises(self, entry_manager):
        with pytest.raises(ReferentialError, match="Entry not found"):
            entry_manager.create_entry_item("missing-entry-id", "Note", "orphan")

    def test_blank_type_raises(self, entry_manager):
        entry = entry_manager.create_entry(STAMP)
        with pytest.raises(ValidationError):
            entry_manager.create_entry_item(entry.id, "  ", "x")

    def test_update_content_refreshes_updated_at(self, entry_manager, sample_item):
        before = sample_item.updated_at

        updated = entry_manager.update_entry_item_content(sample_item.id, "retro")

        assert updated.content == "retro"
        assert updated.updated_at > before
        assert updated.created_at == sample_item.created_at

    def test_update_project_blank_clears(self, entry_manager, sample_item):
        entry_manager.update_entry_item_project(sample_item.id, "Apollo")
        updated = entry_manager.update_entry_item_project(sample_item.id, "   ")
        assert updated.project is None

    def test_update_missing_item_raises(self, entry_manager):
        with pytest.raises(NotFoundError):
            entry_manager.update_entry_item_content("missing-item-id", "x")

    def test_touch_refreshes_updated_at(self, entry_manager, sample_item):
        before = sample_item.updated_at
        assert entry_manager.touch_entry_item(sample_item.id).updated_at > before


class TestEntryManagerJiraRefs:
    """Test EntryManager.create_jira_ref()."""

    def test_duplicate_keys_allowed(self, entry_manager, sample_item, db_session):
        entry_manager.create_jira_ref(sample_item.id, "OPS-1")
        entry_manager.create_jira_ref(sample_item.id, "OPS-1")

        assert db_session.query(JiraRef).filter_by(entry_item_id=sample_item.id).count() == 2

    def test_unknown_item_raises(self, entry_manager):
        with pytest.raises(ReferentialError):
            entry_manager.create_jira_ref("missing-item-id", "OPS-1")

    def test_blank_key_raises(self, entry_manager, sample_item):
        with pytest.raises(ValidationError):
            entry_manager.create_jira_ref(sample_item.id, " ")


class TestEntryManagerDelete:
    """Test cascading deletes."""

    def test_delete_entry_removes_descendants(
        self, entry_manager, relationship_manager, sample_item, db_session
    ):
        relationship_manager.replace_item_tags(sample_item.id, ["team-a"])
        relationship_manager.replace_item_people(sample_item.id, ["alice"])
        entry_manager.create_jira_ref(sample_item.id, "OPS-1")

        entry_manager.delete_entry(sample_item.entry_id)

        assert db_session.query(EntryItem).count() == 0
        assert db_session.query(JiraRef).count() == 0
        assert db_session.execute(select(func.count()).select_from(item_tags)).scalar() == 0

    def test_delete_item_keeps_siblings(self, entry_manager, db_session):
        entry = entry_manager.create_entry(STAMP)
        keep = entry_manager.create_entry_item(entry.id, "Note", "keep")
        drop = entry_manager.create_entry_item(entry.id, "Note", "drop")

        entry_manager.delete_entry_item(drop.id)

        remaining = db_session.query(EntryItem).all()
        assert [item.id for item in remaining] == [keep.id]

    def test_delete_item_nulls_meeting_action(
        self, entry_manager, meeting_manager, sample_item, db_session
    ):
        meeting = meeting_manager.create_meeting({"title": "Sprint review"})
        action = meeting_manager.create_action(
            meeting.id, {"title": "Follow up", "entry_item_id": sample_item.id}
        )

        entry_manager.delete_entry_item(sample_item.id)
        db_session.expire_all()

        survivor = db_session.get(MeetingAction, action.id)
        assert survivor is not None
        assert survivor.entry_item_id is None

    def test_delete_missing_is_noop(self, entry_manager):
        entry_manager.delete_entry("missing-entry-id")
        entry_manager.delete_entry_item("missing-item-id")
