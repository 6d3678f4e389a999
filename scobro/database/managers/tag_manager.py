#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages Tag entities.

Tags are unique-name labels linked to entry items. They are usually
created implicitly, the first time an item is tagged with a new name
(get-or-create), and can also be created and edited explicitly with
description, color and category metadata.

Key Features:
    - Get-or-create by name (the implicit creation path)
    - Explicit create that rejects existing names
    - Partial update of name/description/color/category
    - Untagging never deletes tags; delete() does, and unlinks everywhere

Usage:
    tag_mgr = TagManager(session, logger)

    tag = tag_mgr.get_or_create("team-a")
    tag_mgr.update(tag.id, {"color": "#ff0000", "category": "teams"})
    all_tags = tag_mgr.get_all()
"""
from typing import Any, Dict, List, Optional

from scobro.core.validators import DataValidator
from scobro.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from scobro.database.models import DEFAULT_COLOR, Tag, utc_now
from .base_manager import BaseManager


def _normalize_color(value: Any) -> str:
    return DataValidator.normalize_string(value) or DEFAULT_COLOR


class TagManager(BaseManager):
    """
    Manages Tag table operations.
    """

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("tag_exists")
    def exists(self, tag_name: str) -> bool:
        """
        Check whether a tag with this name exists.

        Args:
            tag_name: The tag text to check

        Returns:
            True if the tag exists, False otherwise (blank names included)
        """
        return self.get(tag_name) is not None

    @handle_db_errors
    @log_database_operation("get_tag")
    def get(self, tag_name: str) -> Optional[Tag]:
        """
        Retrieve a tag by name.

        Returns:
            Tag if found, None otherwise
        """
        normalized = DataValidator.normalize_string(tag_name)
        if not normalized:
            return None
        return self.session.query(Tag).filter_by(name=normalized).first()

    @handle_db_errors
    @log_database_operation("get_tag_by_id")
    def get_by_id(self, tag_id: str) -> Optional[Tag]:
        """Retrieve a tag by id."""
        return self._get_by_id(Tag, tag_id)

    @handle_db_errors
    @log_database_operation("get_all_tags")
    def get_all(self) -> List[Tag]:
        """Retrieve all tags, ordered by name."""
        return self._get_all(Tag, Tag.name)

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("get_or_create_tag")
    def get_or_create(self, tag_name: str) -> Tag:
        """
        Get an existing tag or create it with default metadata.

        Calling it twice with the same name returns the same row.

        Args:
            tag_name: The tag text (surrounding whitespace is ignored)

        Returns:
            Tag object (existing or newly created)

        Raises:
            ValidationError: If tag_name is blank
        """
        name = DataValidator.require_name(tag_name)
        now = utc_now()
        return self._get_or_create(
            Tag,
            {"name": name},
            {"color": DEFAULT_COLOR, "created_at": now, "updated_at": now},
        )

    @handle_db_errors
    @log_database_operation("create_tag")
    @validate_metadata(["name"])
    def create(self, metadata: Dict[str, Any]) -> Tag:
        """
        Explicitly create a tag.

        Args:
            metadata: Dictionary with keys:
                - name (required)
                - description, color, category (optional)

        Returns:
            Created Tag

        Raises:
            ValidationError: If name is blank or already taken
        """
        name = DataValidator.require_name(metadata.get("name"))
        self._ensure_unique_name(Tag, name)

        now = utc_now()
        tag = Tag(
            name=name,
            description=DataValidator.normalize_string(metadata.get("description")),
            color=_normalize_color(metadata.get("color")),
            category=DataValidator.normalize_string(metadata.get("category")),
            created_at=now,
            updated_at=now,
        )
        self.session.add(tag)
        self.session.flush()

        if self.logger:
            self.logger.log_debug(f"Created tag: {name}", {"tag_id": tag.id})

        return tag

    # -------------------------------------------------------------------------
    # Update / Delete
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("update_tag")
    def update(self, tag_id: str, metadata: Dict[str, Any]) -> Tag:
        """
        Partially update a tag.

        Only keys present in metadata are written; updated_at is always
        refreshed, even when nothing else changes.

        Args:
            tag_id: Tag to update
            metadata: Any of name, description, color, category

        Returns:
            The updated Tag

        Raises:
            NotFoundError: If tag_id does not exist
            ValidationError: If the new name is blank or taken
        """
        tag = self._require(Tag, tag_id)

        if "name" in metadata:
            name = DataValidator.require_name(metadata["name"])
            self._ensure_unique_name(Tag, name, exclude_id=tag.id)

        self._update_scalar_fields(
            tag,
            metadata,
            [
                ("name", DataValidator.normalize_string),
                ("description", DataValidator.normalize_string, True),
                ("color", _normalize_color),
                ("category", DataValidator.normalize_string, True),
            ],
        )
        tag.updated_at = utc_now()
        self.session.flush()
        return tag

    @handle_db_errors
    @log_database_operation("delete_tag")
    def delete(self, tag_id: str) -> None:
        """
        Delete a tag; its item links are removed with it.

        Deleting a missing id is a no-op.
        """
        self._delete_by_id(Tag, tag_id)
