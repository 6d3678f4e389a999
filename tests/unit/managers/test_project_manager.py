"""
test_project_manager.py
-----------------------
Unit tests for ProjectManager CRUD operations.
"""
import pytest

from scobro.core.exceptions import NotFoundError, ValidationError
from scobro.database.models import DEFAULT_COLOR


class TestProjectManagerCreate:
    """Test ProjectManager.create() method."""

    def test_create_with_defaults(self, project_manager):
        project = project_manager.create({"name": "Apollo"})

        assert project.name == "Apollo"
        assert project.description is None
        assert project.color == DEFAULT_COLOR
        assert project.created_at == project.updated_at

    def test_create_with_metadata(self, project_manager):
        project = project_manager.create(
            {"name": " Apollo ", "description": "Moon shot", "color": "#0d6efd"}
        )

        assert project.name == "Apollo"
        assert project.description == "Moon shot"
        assert project.color == "#0d6efd"

    def test_duplicate_name_raises(self, project_manager):
        project_manager.create({"name": "Apollo"})
        with pytest.raises(ValidationError, match="already exists"):
            project_manager.create({"name": "Apollo"})

    def test_blank_name_raises(self, project_manager):
        with pytest.raises(ValidationError):
            project_manager.create({"name": "  "})


class TestProjectManagerUpdate:
    """Test ProjectManager.update() method."""

    def test_partial_update(self, project_manager):
        project = project_manager.create({"name": "Apollo", "description": "Moon shot"})
        before = project.updated_at

        updated = project_manager.update(project.id, {"color": "#198754"})

        assert updated.color == "#198754"
        assert updated.description == "Moon shot"
        assert updated.updated_at > before

    def test_none_clears_description(self, project_manager):
        project = project_manager.create({"name": "Apollo", "description": "Moon shot"})
        assert project_manager.update(project.id, {"description": None}).description is None

    def test_rename_keeps_own_name_allowed(self, project_manager):
        project = project_manager.create({"name": "Apollo"})
        assert project_manager.update(project.id, {"name": "Apollo"}).name == "Apollo"

    def test_rename_to_taken_name_raises(self, project_manager):
        project_manager.create({"name": "Gemini"})
        project = project_manager.create({"name": "Apollo"})

        with pytest.raises(ValidationError):
            project_manager.update(project.id, {"name": "Gemini"})

    def test_missing_project_raises(self, project_manager):
        with pytest.raises(NotFoundError):
            project_manager.update("missing-project-id", {"name": "x"})


class TestProjectManagerQueriesAndDelete:
    """Test lookups and deletion."""

    def test_get_all_ordered_by_name(self, project_manager):
        for name in ("Gemini", "Apollo", "Mercury"):
            project_manager.create({"name": name})

        assert [p.name for p in project_manager.get_all()] == ["Apollo", "Gemini", "Mercury"]

    def test_get_by_name(self, project_manager):
        project = project_manager.create({"name": "Apollo"})

        assert project_manager.get_by_name("Apollo").id == project.id
        assert project_manager.get_by_name("Zeus") is None

    def test_delete_leaves_item_project_name(self, project_manager, entry_manager, sample_item):
        project = project_manager.create({"name": "Apollo"})
        entry_manager.update_entry_item_project(sample_item.id, "Apollo")

        project_manager.delete(project.id)

        assert project_manager.get_by_id(project.id) is None
        assert entry_manager.get_entry_item(sample_item.id).project == "Apollo"

    def test_delete_missing_is_noop(self, project_manager):
        project_manager.delete("missing-project-id")
