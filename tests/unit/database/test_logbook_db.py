"""
test_logbook_db.py
------------------
Unit tests for LogbookDB: schema, sessions, serialization and column types.
"""
import threading

import pytest
from datetime import datetime, timedelta, timezone

from sqlalchemy import inspect, text

from scobro.core.exceptions import DatabaseError, ValidationError
from scobro.database.manager import LogbookDB
from scobro.commands import LogbookCommands
from scobro.database.models import Entry, Person, Tag, utc_now

TABLES = {
    "entries",
    "entry_items",
    "tags",
    "people",
    "item_tags",
    "item_people",
    "jira_refs",
    "projects",
    "meetings",
    "meeting_attendees",
    "meeting_actions",
}


class TestSchema:
    """Test schema creation."""

    def test_creates_all_tables(self, test_db):
        assert TABLES <= set(inspect(test_db.engine).get_table_names())

    def test_initialize_schema_is_idempotent(self, test_db):
        test_db.initialize_schema()
        test_db.initialize_schema()
        assert TABLES <= set(inspect(test_db.engine).get_table_names())

    def test_reopening_existing_file_keeps_data(self, test_db_path):
        with LogbookDB(test_db_path) as first:
            with first.session_scope():
                first.tags.get_or_create("kept")

        with LogbookDB(test_db_path) as second:
            with second.session_scope():
                assert second.tags.get("kept") is not None

    def test_foreign_keys_enabled(self, test_db):
        with test_db.engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1


class TestSessionScope:
    """Test session_scope transactions and manager access."""

    def test_managers_require_session(self, test_db):
        with pytest.raises(DatabaseError, match="requires active session"):
            test_db.tags

    def test_managers_available_inside_scope(self, test_db):
        with test_db.session_scope():
            assert test_db.entries is not None
            assert test_db.relations is not None
            assert test_db.aggregator is not None

        with pytest.raises(DatabaseError):
            test_db.entries

    def test_commits_on_success(self, test_db):
        with test_db.session_scope():
            test_db.tags.get_or_create("committed")

        with test_db.session_scope() as session:
            assert session.query(Tag).filter_by(name="committed").count() == 1

    def test_rolls_back_on_error(self, test_db):
        with pytest.raises(RuntimeError):
            with test_db.session_scope():
                test_db.tags.get_or_create("discarded")
                raise RuntimeError("abort")

        with test_db.session_scope() as session:
            assert session.query(Tag).count() == 0

    def test_nested_scope_joins_outer_transaction(self, test_db):
        with pytest.raises(RuntimeError):
            with test_db.session_scope() as outer:
                with test_db.session_scope() as inner:
                    assert inner is outer
                    test_db.tags.get_or_create("nested")
                raise RuntimeError("abort outer")

        with test_db.session_scope() as session:
            assert session.query(Tag).count() == 0


class TestConcurrentWriters:
    """Session scopes serialize writers sharing one LogbookDB."""

    WORKERS = 20

    def test_parallel_entries_share_one_tag_and_person(self, test_db):
        commands = LogbookCommands(test_db)
        start = threading.Barrier(self.WORKERS)
        errors = []

        def record(index):
            try:
                start.wait()
                commands.create_entry(
                    {
                        "timestamp": f"2024-01-01T09:{index:02d}:00Z",
                        "items": [
                            {
                                "item_type": "Note",
                                "content": f"note {index}",
                                "tags": ["shared"],
                                "people": ["bob"],
                            }
                        ],
                    }
                )
            except Exception as e:  # collected for the assertion below
                errors.append(e)

        threads = [
            threading.Thread(target=record, args=(i,)) for i in range(self.WORKERS)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert not any(thread.is_alive() for thread in threads)
        assert errors == []
        with test_db.session_scope() as session:
            assert session.query(Tag).filter_by(name="shared").count() == 1
            assert session.query(Person).filter_by(name="bob").count() == 1
            assert session.query(Entry).count() == self.WORKERS

        entries = commands.get_all_entries()
        assert all(entry.items[0].tags == ["shared"] for entry in entries)
        assert all(entry.items[0].people == ["bob"] for entry in entries)


class TestInMemoryStore:
    """Test the ':memory:' store."""

    def test_data_survives_between_scopes(self):
        with LogbookDB(":memory:") as db:
            with db.session_scope():
                db.tags.get_or_create("in-memory")
            with db.session_scope():
                assert [t.name for t in db.tags.get_all()] == ["in-memory"]


class TestDatetimes:
    """Test timezone handling of stored datetimes."""

    def test_timestamp_round_trips_as_aware_utc(self, test_db):
        local = datetime(2024, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=1)))

        with test_db.session_scope():
            entry_id = test_db.entries.create_entry(local).id

        with test_db.session_scope() as session:
            stored = session.get(Entry, entry_id)
            assert stored.timestamp == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
            assert stored.timestamp.tzinfo == timezone.utc

    def test_naive_timestamp_rejected(self, test_db):
        with test_db.session_scope():
            with pytest.raises(ValidationError):
                test_db.entries.create_entry(datetime(2024, 1, 1, 9, 0))

    def test_utc_now_is_strictly_increasing(self):
        values = [utc_now() for _ in range(200)]
        assert all(a < b for a, b in zip(values, values[1:]))
        assert values[0].tzinfo == timezone.utc


class TestLogging:
    """Test that operations reach the log files."""

    def test_operations_logged(self, test_db_path, test_log_dir):
        with LogbookDB(test_db_path, log_dir=test_log_dir) as db:
            with db.session_scope():
                db.tags.get_or_create("logged")

        content = (test_log_dir / "database.log").read_text(encoding="utf-8")
        assert "get_or_create_tag_completed" in content
        assert "session_commit" in content
