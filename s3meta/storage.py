"""
DuckDB storage for finished scan reports.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import duckdb

from .report import Report, Section


class Storage:
    """Keeps a history of completed reports, one row per run."""

    def __init__(self, db_path: str, read_only: bool = False):
        self.db_path = db_path
        self.conn = duckdb.connect(db_path, read_only=read_only)
        if not read_only:
            self._init_schema()

    def _init_schema(self):
        """Initialize database schema."""
        self.conn.execute("""
            CREATE SEQUENCE IF NOT EXISTS run_seq START 1
        """)

        # One row per completed scan
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS runs (
                run_id INTEGER PRIMARY KEY,
                location VARCHAR,
                started_at TIMESTAMP,
                duration_seconds DOUBLE,
                pages INTEGER,
                total_files BIGINT,
                total_bytes BIGINT
            )
        """)

        # Report lines, in output order
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS report_pairs (
                run_id INTEGER,
                section VARCHAR,
                position INTEGER,
                label VARCHAR,
                value VARCHAR,
                PRIMARY KEY (run_id, position)
            )
        """)

        self.conn.execute("CREATE INDEX IF NOT EXISTS idx_runs_location ON runs(location)")

        self.conn.commit()

    def save_report(self, location: str, report: Report,
                    summary: Dict[str, Any]) -> int:
        """
        Save a finished report.

        `summary` carries the run level numbers: started_at, duration,
        pages, total_files and total_bytes.
        """
        run_id = self.conn.execute("SELECT nextval('run_seq')").fetchone()[0]

        self.conn.execute("""
            INSERT INTO runs VALUES (?, ?, ?, ?, ?, ?, ?)
        """, [
            run_id, location,
            summary.get('started_at') or datetime.now(timezone.utc).replace(tzinfo=None),
            summary.get('duration', 0.0),
            summary.get('pages', 0),
            summary.get('total_files', 0),
            summary.get('total_bytes', 0)
        ])

        position = 0
        for section in report.sections:
            # Empty sections still need a row to keep their header
            if not section.pairs:
                self.conn.execute("""
                    INSERT INTO report_pairs VALUES (?, ?, ?, NULL, NULL)
                """, [run_id, section.name, position])
                position += 1
                continue

            for label, value in section.pairs:
                self.conn.execute("""
                    INSERT INTO report_pairs VALUES (?, ?, ?, ?, ?)
                """, [run_id, section.name, position, label, value])
                position += 1

        self.conn.commit()
        return run_id

    def recent_runs(self, location: Optional[str] = None, limit: int = 20) -> List[Dict]:
        """Most recent runs, newest first."""
        if location:
            rows = self.conn.execute("""
                SELECT run_id, location, started_at, duration_seconds, pages,
                       total_files, total_bytes
                FROM runs WHERE location = ?
                ORDER BY run_id DESC LIMIT ?
            """, [location, limit]).fetchall()
        else:
            rows = self.conn.execute("""
                SELECT run_id, location, started_at, duration_seconds, pages,
                       total_files, total_bytes
                FROM runs ORDER BY run_id DESC LIMIT ?
            """, [limit]).fetchall()

        return [{'run_id': r[0], 'location': r[1], 'started_at': r[2],
                 'duration': r[3], 'pages': r[4], 'total_files': r[5],
                 'total_bytes': r[6]} for r in rows]

    def get_report(self, run_id: int) -> Optional[Report]:
        """Rebuild a stored report."""
        rows = self.conn.execute("""
            SELECT section, label, value FROM report_pairs
            WHERE run_id = ? ORDER BY position
        """, [run_id]).fetchall()

        if not rows:
            return None

        report = Report()
        for section_name, label, value in rows:
            if not report.sections or report.sections[-1].name != section_name:
                report.sections.append(Section(section_name))
            if label is not None:
                report.sections[-1].pairs.append((label, value))

        return report

    def close(self):
        """Close connection."""
        self.conn.close()
