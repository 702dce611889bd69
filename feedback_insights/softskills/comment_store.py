"""
Mentor Comment Stores
======================

Where the API keeps and reads mentor comments. The analysis engine never
touches a store; it only receives lists of Comment.

    InMemoryCommentStore — process-local list, for development and tests
    PostgresCommentStore — `mentor_comments` table via psycopg2

Table (PostgreSQL):
    CREATE TABLE mentor_comments (
        comment_id  TEXT PRIMARY KEY,
        session_id  TEXT,
        mentor_id   TEXT,
        mentee      TEXT,
        body        TEXT NOT NULL,
        created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
    );
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, ContextManager, List, Optional

from .skill_models import Comment

logger = logging.getLogger(__name__)


def new_comment(
    text: str,
    session_id: str = "",
    mentor_id: str = "",
    mentee_identifier: str = "",
    timestamp: Optional[datetime] = None,
) -> Comment:
    """Create a Comment with a fresh id. Raises ValueError on empty text."""
    text = (text or "").strip()
    if not text:
        raise ValueError("El comentario no puede estar vacío")
    return Comment(
        id=f"comment_{uuid.uuid4().hex[:12]}",
        session_id=session_id or "",
        mentor_id=mentor_id or "",
        mentee_identifier=mentee_identifier or "",
        text=text,
        timestamp=timestamp or datetime.now(timezone.utc),
    )


class InMemoryCommentStore:
    """Thread-safe in-process comment list."""

    def __init__(self, comments: Optional[List[Comment]] = None):
        self._comments: List[Comment] = list(comments or [])
        self._lock = threading.Lock()

    def add(self, comment: Comment) -> Comment:
        with self._lock:
            self._comments.append(comment)
        return comment

    def list_comments(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Comment]:
        """All comments, optionally limited to start <= timestamp < end."""
        with self._lock:
            comments = list(self._comments)
        return [
            c for c in comments
            if (start is None or c.timestamp >= start) and (end is None or c.timestamp < end)
        ]

    def __len__(self) -> int:
        return len(self._comments)


class PostgresCommentStore:
    """
    Comment store backed by the mentor_comments table.

    `connection_factory` returns a context manager yielding a psycopg2
    connection (see api.db.get_connection).
    """

    def __init__(self, connection_factory: Callable[[], ContextManager]):
        self.connection_factory = connection_factory

    def add(self, comment: Comment) -> Comment:
        with self.connection_factory() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute("""
                        INSERT INTO mentor_comments (
                            comment_id, session_id, mentor_id, mentee, body, created_at
                        ) VALUES (%s, %s, %s, %s, %s, %s)
                    """, (
                        comment.id, comment.session_id, comment.mentor_id,
                        comment.mentee_identifier, comment.text, comment.timestamp,
                    ))
                conn.commit()
                logger.info(f"Saved mentor comment {comment.id}", extra={"comment_id": comment.id})
            except Exception as e:
                conn.rollback()
                logger.error(f"Failed to save mentor comment {comment.id}: {e}")
                raise
        return comment

    def list_comments(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Comment]:
        """Load comments, optionally limited to start <= created_at < end."""
        with self.connection_factory() as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    SELECT comment_id, session_id, mentor_id, mentee, body, created_at
                    FROM mentor_comments
                    WHERE body IS NOT NULL AND body != ''
                      AND (%s::timestamptz IS NULL OR created_at >= %s)
                      AND (%s::timestamptz IS NULL OR created_at < %s)
                    ORDER BY created_at ASC
                """, (start, start, end, end))
                rows = cur.fetchall()

        return [
            Comment(
                id=r[0],
                session_id=r[1] or "",
                mentor_id=r[2] or "",
                mentee_identifier=r[3] or "",
                text=r[4],
                timestamp=r[5],
            )
            for r in rows
        ]
