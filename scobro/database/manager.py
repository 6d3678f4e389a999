#!/usr/bin/env python3
"""
manager.py
--------------------
Store manager for the ScoBro logbook.

Provides the LogbookDB class, the single handle through which every
read and write reaches the SQLite store.

Handles:
    - Engine and session factory setup (file or in-memory store)
    - Foreign-key enforcement on every connection
    - Idempotent schema creation on startup
    - Serialized, transactional session scopes
    - Per-session entity managers exposed as properties

Concurrency:
    One re-entrant lock per LogbookDB guards every session scope. Only one
    logical operation runs against the store at a time, and each scope is
    a single transaction: it commits when the block completes and rolls
    back when it raises, so a compound operation (entry with items, tags,
    people and Jira refs; relation replacement) is never half-written.
    A scope opened while the same thread already holds one joins the
    outer transaction.

Usage:
    db = LogbookDB("~/.scobro/logbook.db", log_dir="~/.scobro/logs")

    with db.session_scope():
        entry = db.entries.create_entry(timestamp)
        item = db.entries.create_entry_item(entry.id, "Note", "stand-up")
        db.relations.replace_item_tags(item.id, ["team-a"])

    with db.session_scope():
        views = db.aggregator.get_all_entries_with_items()

Notes
==============
- There is no migration tooling: tables are created if missing
- All datetime columns are stored as UTC and read back timezone-aware
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from scobro.core.exceptions import DatabaseError
from scobro.core.logging_manager import LogbookLogger
from .aggregator import EntryAggregator
from .export_manager import ExportManager
from .managers import (
    EntryManager,
    MeetingManager,
    PersonManager,
    ProjectManager,
    TagManager,
)
from .models import Base
from .relationship_manager import RelationshipManager

MEMORY_DB = ":memory:"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ----- Main Store Manager -----
class LogbookDB:
    """
    Main store manager for the logbook.

    Attributes:
        - db_path (Path | None): Path to the SQLite file (None in memory)
        - engine (Engine): SQLAlchemy engine instance
        - SessionLocal (sessionmaker): SQLAlchemy session factory
        - logger (LogbookLogger | None): Optional operation logger
        - export_manager (ExportManager): CSV/Markdown exporter
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path] = MEMORY_DB,
        log_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        """
        Initialize the engine, the session factory and the schema.

        Args:
            db_path (str | Path): SQLite file, or ':memory:' for a
                private in-memory store
            log_dir (str | Path): Directory for log files (optional)
        """
        self.in_memory = str(db_path) == MEMORY_DB
        self.db_path: Optional[Path] = (
            None if self.in_memory else Path(db_path).expanduser().resolve()
        )

        # --- Logging ---
        if log_dir:
            self.log_dir: Optional[Path] = Path(log_dir).expanduser().resolve()
            self.logger: Optional[LogbookLogger] = LogbookLogger(
                self.log_dir, component_name="database"
            )
        else:
            self.log_dir = None
            self.logger = None

        self.export_manager = ExportManager(self.logger)

        # --- Serialization ---
        self._lock = threading.RLock()
        self._local = threading.local()

        # Per-session managers (set inside session_scope)
        self._entry_manager: Optional[EntryManager] = None
        self._tag_manager: Optional[TagManager] = None
        self._person_manager: Optional[PersonManager] = None
        self._project_manager: Optional[ProjectManager] = None
        self._meeting_manager: Optional[MeetingManager] = None
        self._relationship_manager: Optional[RelationshipManager] = None
        self._aggregator: Optional[EntryAggregator] = None

        self._setup_engine()
        self.initialize_schema()

    def _setup_engine(self) -> None:
        """Initialize the engine and the session factory."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_init_start",
                    {"db_path": str(self.db_path) if self.db_path else MEMORY_DB},
                )

            if self.in_memory:
                self.engine: Engine = create_engine(
                    "sqlite://",
                    echo=False,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self.engine = create_engine(
                    f"sqlite:///{self.db_path}",
                    echo=False,
                    pool_pre_ping=True,
                )

            event.listen(self.engine, "connect", _enable_foreign_keys)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    def initialize_schema(self) -> None:
        """Create every table that does not exist yet (idempotent)."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "initialize_schema"})
            raise DatabaseError(f"Schema initialization failed: {e}") from e

        if self.logger:
            self.logger.log_operation(
                "schema_initialized",
                {"tables": sorted(Base.metadata.tables.keys())},
            )

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a serialized, transactional scope around store operations.

        Managers are available via properties (db.entries, db.tags, ...)
        for the duration of the scope.

        Usage:
            with db.session_scope() as session:
                tag = db.tags.get_or_create("team-a")
                db.relations.link_item_tag(item_id, tag.id)
        """
        with self._lock:
            outer: Optional[Session] = getattr(self._local, "session", None)
            if outer is not None:
                yield outer
                return

            session = self.SessionLocal()
            session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            self._local.session = session
            self._bind_managers(session)

            if self.logger:
                self.logger.log_debug("session_start", {"session_id": session_id})

            try:
                yield session
                session.commit()
                if self.logger:
                    self.logger.log_debug("session_commit", {"session_id": session_id})
            except Exception as e:
                session.rollback()
                if self.logger:
                    self.logger.log_error(
                        e, {"operation": "session_rollback", "session_id": session_id}
                    )
                raise
            finally:
                self._bind_managers(None)
                self._local.session = None
                session.close()
                if self.logger:
                    self.logger.log_debug("session_close", {"session_id": session_id})

    def _bind_managers(self, session: Optional[Session]) -> None:
        if session is None:
            self._entry_manager = None
            self._tag_manager = None
            self._person_manager = None
            self._project_manager = None
            self._meeting_manager = None
            self._relationship_manager = None
            self._aggregator = None
            return

        self._entry_manager = EntryManager(session, self.logger)
        self._tag_manager = TagManager(session, self.logger)
        self._person_manager = PersonManager(session, self.logger)
        self._project_manager = ProjectManager(session, self.logger)
        self._meeting_manager = MeetingManager(session, self.logger)
        self._relationship_manager = RelationshipManager(session, self.logger)
        self._aggregator = EntryAggregator(session, self.logger)

    @staticmethod
    def _require_manager(manager, name: str):
        if manager is None:
            raise DatabaseError(
                f"{name} requires active session. "
                "Use within session_scope: with db.session_scope(): ..."
            )
        return manager

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entries, items and Jira refs.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_manager(self._entry_manager, "EntryManager")

    @property
    def tags(self) -> TagManager:
        """
        Access TagManager for tag operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_manager(self._tag_manager, "TagManager")

    @property
    def people(self) -> PersonManager:
        return self._require_manager(self._person_manager, "PersonManager")

    @property
    def projects(self) -> ProjectManager:
        return self._require_manager(self._project_manager, "ProjectManager")

    @property
    def meetings(self) -> MeetingManager:
        return self._require_manager(self._meeting_manager, "MeetingManager")

    @property
    def relations(self) -> RelationshipManager:
        """
        Access RelationshipManager for item tags, people and Jira refs.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_manager(self._relationship_manager, "RelationshipManager")

    @property
    def aggregator(self) -> EntryAggregator:
        return self._require_manager(self._aggregator, "EntryAggregator")

    # ---- Lifecycle ----
    def close(self) -> None:
        """Dispose of the engine and release the log files."""
        self.engine.dispose()
        if self.logger:
            self.logger.close()

    def __enter__(self) -> LogbookDB:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
