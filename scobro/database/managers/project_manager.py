#!/usr/bin/env python3
"""
project_manager.py
--------------------
Manages Project entities.

Projects are a categorization dimension with a unique name, an optional
description and a display color. Entry items refer to projects by name
only, so renaming or deleting a project never touches items.

Usage:
    project_mgr = ProjectManager(session, logger)

    project = project_mgr.create({"name": "Apollo", "color": "#0d6efd"})
    project_mgr.update(project.id, {"description": None})
"""
from typing import Any, Dict, List, Optional

from scobro.core.validators import DataValidator
from scobro.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from scobro.database.models import DEFAULT_COLOR, Project, utc_now
from .base_manager import BaseManager


def _normalize_color(value: Any) -> str:
    return DataValidator.normalize_string(value) or DEFAULT_COLOR


class ProjectManager(BaseManager):
    """Manages Project table operations."""

    @handle_db_errors
    @log_database_operation("create_project")
    @validate_metadata(["name"])
    def create(self, metadata: Dict[str, Any]) -> Project:
        """
        Create a project.

        Args:
            metadata: Dictionary with keys:
                - name (required, unique)
                - description (optional)
                - color (optional, defaults to the standard swatch)

        Returns:
            Created Project

        Raises:
            ValidationError: If name is blank or already taken
        """
        name = DataValidator.require_name(metadata.get("name"))
        self._ensure_unique_name(Project, name)

        now = utc_now()
        project = Project(
            name=name,
            description=DataValidator.normalize_string(metadata.get("description")),
            color=_normalize_color(metadata.get("color")),
            created_at=now,
            updated_at=now,
        )
        self.session.add(project)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(f"Created project: {name}", {"project_id": project.id})

        return project

    @handle_db_errors
    @log_database_operation("get_project_by_id")
    def get_by_id(self, project_id: str) -> Optional[Project]:
        return self._get_by_id(Project, project_id)

    @handle_db_errors
    @log_database_operation("get_project_by_name")
    def get_by_name(self, name: str) -> Optional[Project]:
        normalized = DataValidator.normalize_string(name)
        if not normalized:
            return None
        return self.session.query(Project).filter_by(name=normalized).first()

    @handle_db_errors
    @log_database_operation("get_all_projects")
    def get_all(self) -> List[Project]:
        """Retrieve all projects, ordered by name."""
        return self._get_all(Project, Project.name)

    @handle_db_errors
    @log_database_operation("update_project")
    def update(self, project_id: str, metadata: Dict[str, Any]) -> Project:
        """
        Partially update a project.

        Only keys present in metadata are written; updated_at is always
        refreshed.

        Raises:
            NotFoundError: If project_id does not exist
            ValidationError: If the new name is blank or taken
        """
        project = self._require(Project, project_id)

        if "name" in metadata:
            name = DataValidator.require_name(metadata["name"])
            self._ensure_unique_name(Project, name, exclude_id=project.id)

        self._update_scalar_fields(
            project,
            metadata,
            [
                ("name", DataValidator.normalize_string),
                ("description", DataValidator.normalize_string, True),
                ("color", _normalize_color),
            ],
        )
        project.updated_at = utc_now()
        self.session.flush()
        return project

    @handle_db_errors
    @log_database_operation("delete_project")
    def delete(self, project_id: str) -> None:
        """Delete a project; missing ids are a no-op."""
        self._delete_by_id(Project, project_id)
