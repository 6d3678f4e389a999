#!/usr/bin/env python3
"""
export_manager.py
-----------------
Export of assembled entry trees to CSV and Markdown text.

Export Formats:
    1. **CSV**: one row per item (not per entry)
       - Header: Date,Time,Type,Content,Project,Tags,Jira,People
       - Date and Time split from the entry timestamp (UTC)
       - Tags, Jira and People joined with ';'
       - Content, Project, Tags, Jira and People are always quoted;
         Date, Time and Type only when they need it. Embedded double
         quotes are doubled
    2. **Markdown**: human-readable report
       - One '##' heading per entry ('YYYY-MM-DD HH:MM:SS')
       - One '###' block per item, marked with an emoji for its type
       - Optional Project/Tags/Jira/People lines, then a horizontal rule

Both formatters are pure functions over EntryWithItems sequences; they
never touch the store. write_export stages the text in a temporary file
next to the destination and moves it into place.

Usage:
    from scobro.database.export_manager import ExportManager

    with db.session_scope():
        entries = db.aggregator.get_all_entries_with_items()

    exporter = ExportManager(logger=db.logger)
    exporter.write_export(ExportManager.to_csv(entries), Path("logbook.csv"))
"""
# --- Standard library imports ---
import csv
import io
import os
import shutil
import tempfile
from datetime import timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

# --- Local imports ---
from scobro.core.exceptions import ExportError
from scobro.core.logging_manager import LogbookLogger, safe_logger
from scobro.dataclasses.aggregates import EntryWithItems
from scobro.database.models import ItemType

CSV_HEADER = ["Date", "Time", "Type", "Content", "Project", "Tags", "Jira", "People"]
MULTI_VALUE_SEPARATOR = ";"


def _split_timestamp(entry: EntryWithItems) -> List[str]:
    moment = entry.timestamp.astimezone(timezone.utc)
    return [moment.strftime("%Y-%m-%d"), moment.strftime("%H:%M:%S")]


class ExportManager:
    """
    Renders entry trees as CSV or Markdown and writes them to disk.
    """

    def __init__(self, logger: Optional[LogbookLogger] = None) -> None:
        """
        Initialize export manager.

        Args:
            logger: Optional logger for export operations
        """
        self.logger = logger

    # -------------------------------------------------------------------------
    # Formatters
    # -------------------------------------------------------------------------

    @staticmethod
    def to_csv(entries: Sequence[EntryWithItems]) -> str:
        """
        Render entries as CSV text, one data row per item.

        Args:
            entries: Aggregated entries, in the order to export

        Returns:
            CSV text with '\\n' line endings
        """
        buffer = io.StringIO()
        header = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        # Leading columns end with the delimiter; text columns close the row.
        leading = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator=",")
        text = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        header.writerow(CSV_HEADER)

        for entry in entries:
            date_text, time_text = _split_timestamp(entry)
            for item in entry.items:
                leading.writerow([date_text, time_text, item.item_type])
                text.writerow(
                    [
                        item.content,
                        item.project or "",
                        MULTI_VALUE_SEPARATOR.join(item.tags),
                        MULTI_VALUE_SEPARATOR.join(item.jira),
                        MULTI_VALUE_SEPARATOR.join(item.people),
                    ]
                )

        return buffer.getvalue()

    @staticmethod
    def to_markdown(entries: Sequence[EntryWithItems]) -> str:
        """
        Render entries as a Markdown report.

        Args:
            entries: Aggregated entries, in the order to export

        Returns:
            Markdown text
        """
        lines: List[str] = ["# ScoBro Logbook Export\n\n"]

        for entry in entries:
            date_text, time_text = _split_timestamp(entry)
            lines.append(f"## {date_text} {time_text}\n\n")

            for item in entry.items:
                emoji = ItemType.emoji_for(item.item_type)
                lines.append(f"### {emoji} {item.item_type}\n")
                lines.append(f"{item.content}\n\n")

                if item.project:
                    lines.append(f"**Project:** 📂 {item.project}\n\n")
                if item.tags:
                    lines.append(f"**Tags:** 🏷 {', '.join(item.tags)}\n\n")
                if item.jira:
                    lines.append(f"**Jira:** 🧩 {', '.join(item.jira)}\n\n")
                if item.people:
                    lines.append(f"**People:** 👤 {', '.join(item.people)}\n\n")

                lines.append("---\n\n")

        return "".join(lines)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def write_export(self, text: str, export_file: Union[str, Path]) -> Path:
        """
        Write export text to a file, replacing it if it exists.

        Args:
            text: Rendered export
            export_file: Destination path (parent directories are created)

        Returns:
            Path of the written file

        Raises:
            ExportError: If the file cannot be written
        """
        logger = safe_logger(self.logger)
        export_file = Path(export_file).expanduser()

        try:
            export_file.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=export_file.parent, prefix=".export-", suffix=export_file.suffix
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                    handle.write(text)
                shutil.move(temp_name, export_file)
            except BaseException:
                if os.path.exists(temp_name):
                    os.unlink(temp_name)
                raise
        except OSError as e:
            logger.log_error(e, {"operation": "write_export", "file": str(export_file)})
            raise ExportError(f"Cannot write export to {export_file}: {e}") from e

        logger.log_operation(
            "write_export_completed",
            {"file": str(export_file), "bytes": len(text.encode("utf-8"))},
        )
        return export_file
