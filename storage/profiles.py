"""Persistence helpers for analysed resume profiles."""
from __future__ import annotations

import datetime as dt
import json
import sqlite3
from typing import Any, Optional

from interview.models import Profile

from .sqlite import get_conn


def upsert_profile(**data: Any) -> Profile:
    """Insert or replace the profile owned by ``user_id``."""

    profile = Profile(**data)
    timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        conn.execute(
            """INSERT INTO profiles
               (user_id, target_role, target_company, experience_level, interview_mode, status,
                skills_json, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(user_id) DO UPDATE SET
                 target_role=excluded.target_role,
                 target_company=excluded.target_company,
                 experience_level=excluded.experience_level,
                 interview_mode=excluded.interview_mode,
                 status=excluded.status,
                 skills_json=excluded.skills_json,
                 updated_at=excluded.updated_at""",
            (
                profile.user_id,
                profile.target_role,
                profile.target_company,
                profile.experience_level,
                profile.interview_mode.value,
                profile.status.value,
                json.dumps(profile.skills),
                timestamp,
            ),
        )
    return profile


def get_profile(user_id: str) -> Optional[Profile]:
    """Return the stored profile for ``user_id`` or ``None``."""

    with get_conn() as conn:
        row = conn.execute(
            """SELECT user_id, target_role, target_company, experience_level, interview_mode, status, skills_json
               FROM profiles WHERE user_id = ?""",
            (user_id,),
        ).fetchone()
    if row is None:
        return None
    return _row_to_profile(row)


def _row_to_profile(row: sqlite3.Row) -> Profile:
    return Profile(
        user_id=row["user_id"],
        target_role=row["target_role"],
        target_company=row["target_company"],
        experience_level=row["experience_level"],
        interview_mode=row["interview_mode"],
        status=row["status"],
        skills=json.loads(row["skills_json"] or "[]"),
    )
