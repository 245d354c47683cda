"""Quiz Arena data access.

Every function takes an open psycopg2 cursor. Opening the connection,
committing and rolling back stay with the caller so a route can group several
calls into one transaction.
"""

from datetime import datetime, timezone


def _user_from_row(row):
    if row is None:
        return None

    (id, username, hashed_pin, points, level, created_at) = row
    return {
        "id": id,
        "username": username,
        "hashed_pin": hashed_pin,
        "points": points,
        "level": level,
        "created_at": created_at,
    }


def _progress_from_row(row):
    (
        id,
        user_id,
        level,
        score,
        passed,
        current_question,
        session_id,
        session_step,
        updated_at,
    ) = row
    return {
        "id": id,
        "user_id": user_id,
        "level": level,
        "score": score,
        "passed": passed,
        "current_question": current_question,
        "session_id": session_id,
        "session_step": session_step,
        "updated_at": updated_at,
    }


def public_user(user: dict) -> dict:
    """User fields that are safe to hand back to a client."""
    return {
        "id": user["id"],
        "username": user["username"],
        "points": user["points"],
        "level": user["level"],
        "has_pin": bool(user.get("hashed_pin")),
    }


def get_user_by_username(cursor, username: str):
    cursor.execute(
        """
        SELECT id, username, hashed_pin, points, level, created_at
        FROM users
        WHERE LOWER(username) = LOWER(%s)
        """,
        (username,),
    )
    return _user_from_row(cursor.fetchone())


def get_user_by_id(cursor, user_id: int):
    cursor.execute(
        """
        SELECT id, username, hashed_pin, points, level, created_at
        FROM users
        WHERE id = %s
        """,
        (user_id,),
    )
    return _user_from_row(cursor.fetchone())


def create_user(cursor, username: str, hashed_pin: str | None = None):
    """Insert a user, returning None when the name is already taken."""
    insert_user_query = """
        INSERT INTO users (username, hashed_pin, created_at)
        VALUES (%s, %s, %s)
        ON CONFLICT (LOWER(username)) DO NOTHING
        RETURNING id, username, hashed_pin, points, level, created_at
    """
    cursor.execute(
        insert_user_query, (username, hashed_pin, datetime.now(timezone.utc))
    )
    return _user_from_row(cursor.fetchone())


def get_or_create_user(cursor, username: str):
    """Return ``(user, created)`` for ``username``.

    Looking a name up twice never inserts twice: the unique index on
    ``LOWER(username)`` turns a racing insert into a no-op, after which the
    winner's row is read back.
    """
    user = get_user_by_username(cursor, username)
    if user:
        return user, False

    user = create_user(cursor, username)
    if user:
        return user, True

    return get_user_by_username(cursor, username), False


def save_progress(
    cursor,
    user_id: int,
    level: int,
    score: int,
    passed: bool,
    current_question: int,
    session_id: str | None = None,
    session_step: int = 0,
):
    upsert_progress_query = """
        INSERT INTO quiz_progress
            (user_id, level, score, passed, current_question, session_id,
             session_step, updated_at)
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
        ON CONFLICT (user_id, level) DO UPDATE SET
            score = EXCLUDED.score,
            passed = EXCLUDED.passed,
            current_question = EXCLUDED.current_question,
            session_id = EXCLUDED.session_id,
            session_step = EXCLUDED.session_step,
            updated_at = EXCLUDED.updated_at
        RETURNING id
    """
    cursor.execute(
        upsert_progress_query,
        (
            user_id,
            level,
            score,
            passed,
            current_question,
            session_id,
            session_step,
            datetime.now(timezone.utc),
        ),
    )
    return cursor.fetchone()[0]


def get_progress(cursor, user_id: int):
    cursor.execute(
        """
        SELECT id, user_id, level, score, passed, current_question, session_id,
               session_step, updated_at
        FROM quiz_progress
        WHERE user_id = %s
        ORDER BY level ASC
        """,
        (user_id,),
    )
    return [_progress_from_row(row) for row in cursor.fetchall()]


def get_level_progress(cursor, user_id: int, level: int):
    cursor.execute(
        """
        SELECT id, user_id, level, score, passed, current_question, session_id,
               session_step, updated_at
        FROM quiz_progress
        WHERE user_id = %s AND level = %s
        """,
        (user_id, level),
    )
    row = cursor.fetchone()
    return _progress_from_row(row) if row else None


def add_leaderboard_points(cursor, user_id: int, points: int, level: int):
    """Credit ``points`` to a user and raise their level to at least ``level``.

    Returns the user's leaderboard totals, or None when the user is unknown.
    """
    if points < 0:
        raise ValueError("Points cannot be negative")

    cursor.execute(
        """
        UPDATE users
        SET points = points + %s, level = GREATEST(level, %s)
        WHERE id = %s
        RETURNING id
        """,
        (points, level, user_id),
    )
    if cursor.fetchone() is None:
        return None

    upsert_leaderboard_query = """
        INSERT INTO leaderboard (user_id, total_score, max_level, updated_at)
        VALUES (%s, %s, %s, %s)
        ON CONFLICT (user_id) DO UPDATE SET
            total_score = leaderboard.total_score + EXCLUDED.total_score,
            max_level = GREATEST(leaderboard.max_level, EXCLUDED.max_level),
            updated_at = EXCLUDED.updated_at
        RETURNING total_score, max_level
    """
    cursor.execute(
        upsert_leaderboard_query,
        (user_id, points, level, datetime.now(timezone.utc)),
    )
    (total_score, max_level) = cursor.fetchone()

    return {"total_score": total_score, "max_level": max_level}


def fetch_leaderboard(cursor, limit: int):
    leaderboard_query = """
        SELECT l.user_id, u.username, l.total_score, l.max_level
        FROM leaderboard AS l
        JOIN users AS u ON u.id = l.user_id
        ORDER BY l.total_score DESC, l.updated_at ASC, l.user_id ASC
        LIMIT %s
    """
    cursor.execute(leaderboard_query, (limit,))

    return [
        {
            "user_id": user_id,
            "username": username,
            "total_score": total_score,
            "max_level": max_level,
        }
        for (user_id, username, total_score, max_level) in cursor.fetchall()
    ]


def fetch_user_stats(cursor, user_id: int):
    cursor.execute(
        "SELECT total_score, max_level FROM leaderboard WHERE user_id = %s",
        (user_id,),
    )
    row = cursor.fetchone()

    if row is None:
        return {"total_score": 0, "max_level": 0, "rank": None}

    (total_score, max_level) = row

    cursor.execute(
        "SELECT COUNT(*) FROM leaderboard WHERE total_score > %s", (total_score,)
    )
    higher_count = cursor.fetchone()[0]

    return {
        "total_score": total_score,
        "max_level": max_level,
        "rank": higher_count + 1,
    }


def reset_user_progress(cursor, user_id: int) -> int:
    """Wipe a user's quiz history and totals. Returns deleted progress rows."""
    now = datetime.now(timezone.utc)

    cursor.execute("DELETE FROM quiz_progress WHERE user_id = %s", (user_id,))
    deleted_rows = cursor.rowcount

    cursor.execute(
        """
        UPDATE leaderboard
        SET total_score = 0, max_level = 0, updated_at = %s
        WHERE user_id = %s
        """,
        (now, user_id),
    )
    cursor.execute(
        "UPDATE users SET points = 0, level = 0 WHERE id = %s", (user_id,)
    )

    return deleted_rows


def record_scramble_round(
    cursor, round_id: str, user_id: int, word: str, points: int
) -> bool:
    cursor.execute(
        """
        INSERT INTO scramble_rounds (round_id, user_id, word, points, solved_at)
        VALUES (%s, %s, %s, %s, %s)
        ON CONFLICT (round_id) DO NOTHING
        """,
        (round_id, user_id, word, points, datetime.now(timezone.utc)),
    )
    return cursor.rowcount == 1
