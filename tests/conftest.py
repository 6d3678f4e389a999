"""
conftest.py
-----------
Shared pytest fixtures for ScoBro logbook tests.

Provides fixtures for:
- Database setup and teardown
- Manager instances bound to a test session
- The command surface over a test database
- Small data factories
"""
import pytest
from datetime import datetime, timezone
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_log_dir(tmp_dir):
    """Temporary log directory."""
    return tmp_dir / "logs"


# ----- Data Factories -----

def utc(year, month, day, hour=0, minute=0, second=0):
    """Aware UTC datetime shortcut."""
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


# ----- Database Fixtures -----

@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Returns a LogbookDB backed by a temporary SQLite file.
    The engine is disposed after the test.
    """
    from scobro.database.manager import LogbookDB

    db = LogbookDB(db_path=test_db_path)

    yield db

    db.close()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Provides a session with automatic rollback after test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def entry_manager(db_session):
    """Create EntryManager instance for testing."""
    from scobro.database.managers.entry_manager import EntryManager
    return EntryManager(db_session)


@pytest.fixture
def tag_manager(db_session):
    """Create TagManager instance for testing."""
    from scobro.database.managers.tag_manager import TagManager
    return TagManager(db_session)


@pytest.fixture
def person_manager(db_session):
    """Create PersonManager instance for testing."""
    from scobro.database.managers.person_manager import PersonManager
    return PersonManager(db_session)


@pytest.fixture
def project_manager(db_session):
    """Create ProjectManager instance for testing."""
    from scobro.database.managers.project_manager import ProjectManager
    return ProjectManager(db_session)


@pytest.fixture
def meeting_manager(db_session):
    """Create MeetingManager instance for testing."""
    from scobro.database.managers.meeting_manager import MeetingManager
    return MeetingManager(db_session)


@pytest.fixture
def relationship_manager(db_session):
    """Create RelationshipManager instance for testing."""
    from scobro.database.relationship_manager import RelationshipManager
    return RelationshipManager(db_session)


@pytest.fixture
def aggregator(db_session):
    """Create EntryAggregator instance for testing."""
    from scobro.database.aggregator import EntryAggregator
    return EntryAggregator(db_session)


@pytest.fixture
def sample_item(entry_manager):
    """An entry at 2024-01-01 09:00 UTC holding one Note item."""
    entry = entry_manager.create_entry(utc(2024, 1, 1, 9))
    return entry_manager.create_entry_item(entry.id, "Note", "stand-up")


# ----- Command Surface -----

@pytest.fixture
def commands(test_db):
    """
    LogbookCommands over the test database.

    Do not combine with db_session: each command opens its own scope.
    """
    from scobro.commands import LogbookCommands
    return LogbookCommands(test_db)
