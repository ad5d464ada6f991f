"""SQLite store for saved analyses."""

import logging
import re
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from nextcandle.models import AnalysisResult, CandleInput, SavedAnalysis

logger = logging.getLogger(__name__)


class AnalysisStore:
    """SQLite-based store for saved analyses.

    Only the raw candle input and the analyst's result are kept; predicted
    candles and layouts are recomputed whenever a record is loaded.
    """

    REQUIRED_TABLES = [
        "saved_analyses",
    ]

    def __init__(self, db_path: Path):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS saved_analyses (
                    id TEXT PRIMARY KEY,
                    timestamp TEXT NOT NULL,
                    input_json TEXT NOT NULL,
                    result_json TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_to_analysis(row: sqlite3.Row) -> SavedAnalysis:
        return SavedAnalysis(
            id=row["id"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            data=CandleInput.model_validate_json(row["input_json"]),
            result=AnalysisResult.model_validate_json(row["result_json"]),
        )

    def save_analysis(
        self, data: CandleInput, result: AnalysisResult
    ) -> SavedAnalysis:
        """Save an analysis.

        Args:
            data: Raw candle input the analysis was made from.
            result: The analyst's result.

        Returns:
            The saved record, with its generated id and timestamp.
        """
        saved = SavedAnalysis(
            id=str(uuid.uuid4()),
            timestamp=datetime.now(),
            data=data,
            result=result,
        )

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO saved_analyses (id, timestamp, input_json, result_json)
                VALUES (?, ?, ?, ?)
                """,
                (
                    saved.id,
                    saved.timestamp.isoformat(),
                    data.model_dump_json(),
                    result.model_dump_json(),
                ),
            )
            conn.commit()
        finally:
            conn.close()

        logger.debug("Saved analysis %s", saved.id)
        return saved

    def list_analyses(self) -> list[SavedAnalysis]:
        """Get all saved analyses, newest first."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, timestamp, input_json, result_json
                FROM saved_analyses
                ORDER BY timestamp DESC, rowid DESC
                """
            )
            return [self._row_to_analysis(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_analysis(self, analysis_id: str) -> Optional[SavedAnalysis]:
        """Get a saved analysis by id.

        Args:
            analysis_id: Record id. A unique prefix of the id is accepted.

        Returns:
            The saved analysis, or None if no single record matches.
        """
        if not analysis_id:
            return None

        pattern = re.sub(r"([\\%_])", r"\\\1", analysis_id) + "%"

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, timestamp, input_json, result_json
                FROM saved_analyses
                WHERE id = ? OR id LIKE ? ESCAPE '\\'
                """,
                (analysis_id, pattern),
            )
            rows = cursor.fetchall()
        finally:
            conn.close()

        exact = [row for row in rows if row["id"] == analysis_id]
        if exact:
            return self._row_to_analysis(exact[0])
        if len(rows) == 1:
            return self._row_to_analysis(rows[0])
        return None

    def delete_analysis(self, analysis_id: str) -> bool:
        """Delete a saved analysis.

        Args:
            analysis_id: Full record id.

        Returns:
            True if a record was deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM saved_analyses WHERE id = ?",
                (analysis_id,),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
