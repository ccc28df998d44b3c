"""Persistence helpers for completed interviews."""
from __future__ import annotations

import datetime as dt
from typing import Any, List

from pydantic import BaseModel, Field

from interview.models import Category, CompletedInterview

from .sqlite import get_conn


class InterviewPayload(BaseModel):
    user_id: str
    title: str
    category: Category
    score: int = Field(ge=0, le=100)
    question_count: int = Field(ge=1)


def insert_interview(**data: Any) -> CompletedInterview:
    """Insert a completed interview row and return the stored record."""

    payload = InterviewPayload(**data)
    timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        cur = conn.cursor()
        cur.execute(
            """INSERT INTO interviews
               (user_id, title, category, score, question_count, created_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                payload.user_id,
                payload.title,
                payload.category.value,
                payload.score,
                payload.question_count,
                timestamp,
            ),
        )
        row_id = int(cur.lastrowid)
    return CompletedInterview(id=row_id, created_at=timestamp, **payload.model_dump())


def list_interviews(user_id: str) -> List[CompletedInterview]:
    """Completed interviews for ``user_id``, newest first."""

    with get_conn() as conn:
        rows = conn.execute(
            """SELECT id, user_id, title, category, score, question_count, created_at
               FROM interviews WHERE user_id = ?
               ORDER BY created_at DESC, id DESC""",
            (user_id,),
        ).fetchall()
    return [CompletedInterview(**dict(row)) for row in rows]
