"""
test_relationship_manager.py
----------------------------
Unit tests for item↔tag, item↔person and Jira ref management.
"""
import pytest

from sqlalchemy import func, select

from scobro.core.exceptions import NotFoundError, ReferentialError
from scobro.database.models import Tag, item_people, item_tags


def count_tag_links(session, item_id):
    return session.execute(
        select(func.count()).select_from(item_tags).where(item_tags.c.entry_item_id == item_id)
    ).scalar()


def count_people_links(session, item_id):
    return session.execute(
        select(func.count())
        .select_from(item_people)
        .where(item_people.c.entry_item_id == item_id)
    ).scalar()


class TestLinking:
    """Test link_item_tag() and link_item_person()."""

    def test_link_tag_twice_leaves_one_row(
        self, relationship_manager, tag_manager, sample_item, db_session
    ):
        tag = tag_manager.get_or_create("team-a")

        relationship_manager.link_item_tag(sample_item.id, tag.id)
        relationship_manager.link_item_tag(sample_item.id, tag.id)

        assert count_tag_links(db_session, sample_item.id) == 1

    def test_link_person_twice_leaves_one_row(
        self, relationship_manager, person_manager, sample_item, db_session
    ):
        alice = person_manager.get_or_create("alice")

        relationship_manager.link_item_person(sample_item.id, alice.id)
        relationship_manager.link_item_person(sample_item.id, alice.id)

        assert count_people_links(db_session, sample_item.id) == 1

    def test_link_unknown_tag_raises(self, relationship_manager, sample_item):
        with pytest.raises(ReferentialError, match="Tag not found"):
            relationship_manager.link_item_tag(sample_item.id, "missing-tag-id")

    def test_link_unknown_item_raises(self, relationship_manager, person_manager):
        alice = person_manager.get_or_create("alice")
        with pytest.raises(ReferentialError, match="EntryItem not found"):
            relationship_manager.link_item_person("missing-item-id", alice.id)

    def test_linked_collection_is_visible_on_item(
        self, relationship_manager, tag_manager, sample_item
    ):
        tag = tag_manager.get_or_create("team-a")
        relationship_manager.link_item_tag(sample_item.id, tag.id)

        assert [t.name for t in sample_item.tags] == ["team-a"]


class TestRemoval:
    """Test remove_item_* methods."""

    def test_remove_tags_returns_count(
        self, relationship_manager, tag_manager, sample_item, db_session
    ):
        for name in ("a", "b"):
            relationship_manager.link_item_tag(sample_item.id, tag_manager.get_or_create(name).id)

        assert relationship_manager.remove_item_tags(sample_item.id) == 2
        assert count_tag_links(db_session, sample_item.id) == 0

    def test_remove_keeps_tag_rows(self, relationship_manager, tag_manager, sample_item):
        relationship_manager.link_item_tag(sample_item.id, tag_manager.get_or_create("a").id)

        relationship_manager.remove_item_tags(sample_item.id)

        assert tag_manager.exists("a") is True

    def test_remove_people_on_item_without_links(self, relationship_manager, sample_item):
        assert relationship_manager.remove_item_people(sample_item.id) == 0

    def test_remove_jira_refs(self, relationship_manager, entry_manager, sample_item):
        entry_manager.create_jira_ref(sample_item.id, "OPS-1")
        entry_manager.create_jira_ref(sample_item.id, "OPS-2")

        assert relationship_manager.remove_item_jira_refs(sample_item.id) == 2
        assert relationship_manager.get_item_jira_refs(sample_item.id) == []


class TestLookup:
    """Test get_item_* ordering."""

    def test_tags_ordered_by_name(self, relationship_manager, tag_manager, sample_item):
        for name in ("zeta", "alpha", "mid"):
            relationship_manager.link_item_tag(sample_item.id, tag_manager.get_or_create(name).id)

        names = [t.name for t in relationship_manager.get_item_tags(sample_item.id)]
        assert names == ["alpha", "mid", "zeta"]

    def test_people_ordered_by_name(self, relationship_manager, person_manager, sample_item):
        for name in ("carol", "alice", "bob"):
            relationship_manager.link_item_person(
                sample_item.id, person_manager.get_or_create(name).id
            )

        names = [p.name for p in relationship_manager.get_item_people(sample_item.id)]
        assert names == ["alice", "bob", "carol"]

    def test_jira_refs_in_creation_order(self, relationship_manager, entry_manager, sample_item):
        for key in ("OPS-9", "OPS-1", "OPS-5"):
            entry_manager.create_jira_ref(sample_item.id, key)

        keys = [r.jira_key for r in relationship_manager.get_item_jira_refs(sample_item.id)]
        assert keys == ["OPS-9", "OPS-1", "OPS-5"]


class TestReplacement:
    """Test replace_item_* methods."""

    def test_replace_tags_exact_set(self, relationship_manager, sample_item, db_session):
        relationship_manager.replace_item_tags(sample_item.id, ["A", "B"])
        result = relationship_manager.replace_item_tags(sample_item.id, ["B", "C"])

        assert [t.name for t in result] == ["B", "C"]
        assert count_tag_links(db_session, sample_item.id) == 2
        assert db_session.query(Tag).filter_by(name="A").count() == 1

    def test_replace_tags_reuses_existing_rows(
        self, relationship_manager, tag_manager, sample_item
    ):
        existing = tag_manager.get_or_create("team-a")

        result = relationship_manager.replace_item_tags(sample_item.id, ["team-a"])

        assert result[0].id == existing.id

    def test_replace_tags_with_empty_list(self, relationship_manager, sample_item, db_session):
        relationship_manager.replace_item_tags(sample_item.id, ["team-a"])

        assert relationship_manager.replace_item_tags(sample_item.id, []) == []
        assert count_tag_links(db_session, sample_item.id) == 0
        assert db_session.query(Tag).filter_by(name="team-a").count() == 1

    def test_replace_people_dedupes_names(self, relationship_manager, sample_item):
        result = relationship_manager.replace_item_people(sample_item.id, ["bob", " bob ", "alice"])
        assert [p.name for p in result] == ["alice", "bob"]

    def test_replace_jira_keeps_duplicates_and_order(self, relationship_manager, sample_item):
        result = relationship_manager.replace_item_jira_refs(
            sample_item.id, ["OPS-2", "OPS-1", "OPS-2", ""]
        )
        assert [r.jira_key for r in result] == ["OPS-2", "OPS-1", "OPS-2"]

    def test_replace_on_unknown_item_raises(self, relationship_manager):
        with pytest.raises(NotFoundError):
            relationship_manager.replace_item_tags("missing-item-id", ["a"])
