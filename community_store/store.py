"""Community ratings, download counters and submissions stored in SQLite"""

import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from .models import (
    CommunityTemplate,
    DownloadCount,
    RatingAggregate,
    RatingSummary,
    RecentRating,
    Submission,
    SubmissionStatus,
    TemplateRatings,
)

logger = logging.getLogger(__name__)

# Millisecond precision keeps "newest first" ordering stable for quick successive writes
NOW = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"


class DuplicateSubmissionError(ValueError):
    """A submission with the requested id already exists"""


class CommunityStore:
    """Persists ratings, rating aggregates, download counters and submissions.

    Every public method opens its own connection and closes it before
    returning; nothing is cached in-process between calls. Writes that must
    stay consistent with each other run inside one ``BEGIN IMMEDIATE``
    transaction so concurrent writers are serialized by SQLite itself.
    """

    def __init__(
        self,
        db_path: str = ".data/community.db",
        busy_timeout: float = 30.0,
        recent_ratings_limit: int = 20,
    ):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.busy_timeout = busy_timeout
        self.recent_ratings_limit = recent_ratings_limit

        self._init_database()

    def _connect(self) -> sqlite3.Connection:
        # Autocommit mode: transactions are opened explicitly in _write()
        conn = sqlite3.connect(
            self.db_path, timeout=self.busy_timeout, isolation_level=None
        )
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _read(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def _snapshot(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection whose reads all see the same committed state"""
        conn = self._connect()
        try:
            conn.execute("BEGIN")
            try:
                yield conn
            finally:
                conn.execute("COMMIT")
        finally:
            conn.close()

    @contextmanager
    def _write(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection holding the write lock until the block commits"""
        conn = self._connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except Exception:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        finally:
            conn.close()

    def _init_database(self):
        """Create tables and indexes if missing"""
        with self._read() as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS ratings (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    template_id TEXT NOT NULL,
                    user_hash TEXT NOT NULL,
                    rating INTEGER NOT NULL CHECK (rating >= 1 AND rating <= 5),
                    comment TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    UNIQUE(template_id, user_hash)
                );

                CREATE INDEX IF NOT EXISTS idx_ratings_template_id ON ratings(template_id);
                CREATE INDEX IF NOT EXISTS idx_ratings_user_hash ON ratings(user_hash);

                -- Derived from ratings, rewritten on every rating write
                CREATE TABLE IF NOT EXISTS rating_aggregates (
                    template_id TEXT PRIMARY KEY,
                    average_rating REAL NOT NULL DEFAULT 0,
                    rating_count INTEGER NOT NULL DEFAULT 0,
                    updated_at TEXT
                );

                CREATE TABLE IF NOT EXISTS downloads (
                    template_id TEXT PRIMARY KEY,
                    download_count INTEGER NOT NULL DEFAULT 0
                );

                CREATE TABLE IF NOT EXISTS submissions (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    category TEXT NOT NULL,
                    description TEXT NOT NULL,
                    content TEXT NOT NULL,
                    tags TEXT DEFAULT '[]',
                    author TEXT NOT NULL,
                    license_type TEXT DEFAULT 'MIT',
                    status TEXT DEFAULT 'pending'
                        CHECK (status IN ('pending', 'approved', 'rejected')),
                    created_at TEXT NOT NULL,
                    approved_at TEXT
                );

                CREATE INDEX IF NOT EXISTS idx_submissions_status ON submissions(status);
            """
            )
        logger.debug(f"Schema ready at {self.db_path}")

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------

    def list_aggregates(self) -> List[RatingSummary]:
        """All rating aggregates, with download counts (0 when none recorded)"""
        with self._read() as conn:
            rows = conn.execute(
                """
                SELECT ra.template_id, ra.average_rating, ra.rating_count,
                       COALESCE(d.download_count, 0) AS download_count
                FROM rating_aggregates ra
                LEFT JOIN downloads d ON ra.template_id = d.template_id
                ORDER BY ra.template_id
            """
            ).fetchall()

        return [
            RatingSummary(
                template_id=row["template_id"],
                average_rating=row["average_rating"],
                rating_count=row["rating_count"],
                download_count=row["download_count"],
            )
            for row in rows
        ]

    def get_template_ratings(
        self, template_id: str, user_hash: Optional[str] = None
    ) -> TemplateRatings:
        """Aggregate, caller's own rating and recent comments for one template.

        A template nobody has rated yet yields zeros rather than an error.
        The three queries share one read transaction, so the aggregate and
        the comment list never straddle a concurrent rating write.
        """
        with self._snapshot() as conn:
            aggregate = conn.execute(
                """
                SELECT average_rating, rating_count
                FROM rating_aggregates
                WHERE template_id = ?
            """,
                (template_id,),
            ).fetchone()

            own = None
            if user_hash:
                own = conn.execute(
                    """
                    SELECT rating, comment FROM ratings
                    WHERE template_id = ? AND user_hash = ?
                """,
                    (template_id, user_hash),
                ).fetchone()

            recent = conn.execute(
                """
                SELECT rating, comment, created_at, updated_at
                FROM ratings
                WHERE template_id = ? AND comment IS NOT NULL AND comment != ''
                ORDER BY created_at DESC, id DESC
                LIMIT ?
            """,
                (template_id, self.recent_ratings_limit),
            ).fetchall()

        return TemplateRatings(
            template_id=template_id,
            average_rating=aggregate["average_rating"] if aggregate else 0.0,
            rating_count=aggregate["rating_count"] if aggregate else 0,
            user_rating=own["rating"] if own else None,
            user_comment=(own["comment"] or None) if own else None,
            recent_ratings=[
                RecentRating(
                    rating=row["rating"],
                    comment=row["comment"],
                    created_at=row["created_at"],
                    updated_at=row["updated_at"],
                )
                for row in recent
            ],
        )

    def submit_rating(
        self,
        template_id: str,
        user_hash: str,
        rating: int,
        comment: Optional[str] = None,
    ) -> RatingAggregate:
        """Insert or overwrite a user's rating and recompute the template aggregate.

        Both writes share one transaction, so the aggregate always reflects
        every committed rating even when submissions for the same template
        race each other.
        """
        with self._write() as conn:
            conn.execute(
                f"""
                INSERT INTO ratings (template_id, user_hash, rating, comment, created_at, updated_at)
                VALUES (?, ?, ?, ?, {NOW}, {NOW})
                ON CONFLICT(template_id, user_hash)
                DO UPDATE SET rating = excluded.rating,
                              comment = excluded.comment,
                              updated_at = excluded.updated_at
            """,
                (template_id, user_hash, rating, comment or None),
            )

            # WHERE is required here: it disambiguates ON CONFLICT from a join
            conn.execute(
                f"""
                INSERT INTO rating_aggregates (template_id, average_rating, rating_count, updated_at)
                SELECT ?, AVG(rating), COUNT(*), {NOW}
                FROM ratings
                WHERE template_id = ?
                ON CONFLICT(template_id)
                DO UPDATE SET average_rating = excluded.average_rating,
                              rating_count = excluded.rating_count,
                              updated_at = excluded.updated_at
            """,
                (template_id, template_id),
            )

            row = conn.execute(
                """
                SELECT average_rating, rating_count
                FROM rating_aggregates
                WHERE template_id = ?
            """,
                (template_id,),
            ).fetchone()

        logger.info(
            f"Rating stored for {template_id}: avg={row['average_rating']:.2f} "
            f"count={row['rating_count']}"
        )
        return RatingAggregate(
            template_id=template_id,
            average_rating=row["average_rating"],
            rating_count=row["rating_count"],
        )

    # ------------------------------------------------------------------
    # Downloads
    # ------------------------------------------------------------------

    def list_downloads(self) -> List[DownloadCount]:
        with self._read() as conn:
            rows = conn.execute(
                """
                SELECT template_id, download_count
                FROM downloads
                ORDER BY template_id
            """
            ).fetchall()

        return [
            DownloadCount(
                template_id=row["template_id"], download_count=row["download_count"]
            )
            for row in rows
        ]

    def increment_download(self, template_id: str) -> int:
        """Record one download and return the new count"""
        with self._write() as conn:
            conn.execute(
                """
                INSERT INTO downloads (template_id, download_count)
                VALUES (?, 1)
                ON CONFLICT(template_id)
                DO UPDATE SET download_count = download_count + 1
            """,
                (template_id,),
            )
            row = conn.execute(
                "SELECT download_count FROM downloads WHERE template_id = ?",
                (template_id,),
            ).fetchone()

        return row["download_count"]

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def _deserialize_tags(self, json_str: Optional[str]) -> List[str]:
        if not json_str:
            return []
        try:
            tags = json.loads(json_str)
        except (json.JSONDecodeError, TypeError):
            return []
        return tags if isinstance(tags, list) else []

    def create_submission(
        self,
        title: str,
        category: str,
        description: str,
        content: str,
        author: str,
        tags: Optional[List[str]] = None,
        license_type: Optional[str] = None,
        submission_id: Optional[str] = None,
    ) -> str:
        """Queue a template for moderation and return its id"""
        submission_id = submission_id or uuid.uuid4().hex[:12]

        try:
            with self._write() as conn:
                conn.execute(
                    f"""
                    INSERT INTO submissions
                    (id, title, category, description, content, tags, author,
                     license_type, status, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, 'pending', {NOW})
                """,
                    (
                        submission_id,
                        title,
                        category,
                        description,
                        content,
                        json.dumps(tags or []),
                        author,
                        license_type or "MIT",
                    ),
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateSubmissionError(submission_id) from e

        logger.info(f"Submission {submission_id} queued for review")
        return submission_id

    def _submission_from_row(self, row: sqlite3.Row) -> Submission:
        return Submission(
            id=row["id"],
            title=row["title"],
            category=row["category"],
            description=row["description"],
            content=row["content"],
            tags=self._deserialize_tags(row["tags"]),
            author=row["author"],
            license_type=row["license_type"] or "MIT",
            status=SubmissionStatus(row["status"]),
            submitted_date=row["created_at"],
            last_updated=row["approved_at"],
        )

    def list_approved_submissions(self) -> List[CommunityTemplate]:
        """Approved templates, most recently approved first"""
        with self._read() as conn:
            rows = conn.execute(
                """
                SELECT s.*, COALESCE(d.download_count, 0) AS download_count
                FROM submissions s
                LEFT JOIN downloads d ON s.id = d.template_id
                WHERE s.status = 'approved'
                ORDER BY s.approved_at DESC
            """
            ).fetchall()

        return [
            CommunityTemplate(
                **self._submission_from_row(row).model_dump(),
                download_count=row["download_count"],
            )
            for row in rows
        ]

    def list_pending_submissions(self) -> List[Submission]:
        """Submissions awaiting moderation, oldest first"""
        with self._read() as conn:
            rows = conn.execute(
                """
                SELECT * FROM submissions
                WHERE status = 'pending'
                ORDER BY created_at ASC
            """
            ).fetchall()

        return [self._submission_from_row(row) for row in rows]

    def approve_submission(self, submission_id: str) -> bool:
        """Approve a pending submission. False if none is pending under that id."""
        with self._write() as conn:
            cursor = conn.execute(
                f"""
                UPDATE submissions
                SET status = 'approved', approved_at = {NOW}
                WHERE id = ? AND status = 'pending'
            """,
                (submission_id,),
            )
            changed = cursor.rowcount
        return changed > 0

    def reject_submission(self, submission_id: str) -> bool:
        """Reject a pending submission. False if none is pending under that id."""
        with self._write() as conn:
            cursor = conn.execute(
                """
                UPDATE submissions
                SET status = 'rejected'
                WHERE id = ? AND status = 'pending'
            """,
                (submission_id,),
            )
            changed = cursor.rowcount
        return changed > 0
