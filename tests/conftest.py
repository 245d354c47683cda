import copy
import importlib
import os
import re
from datetime import datetime, timezone

from cryptography.fernet import Fernet

os.environ.setdefault("ENCRYPTION_KEY", Fernet.generate_key().decode())
os.environ.setdefault("JWT_SECRET_KEY", "quiz-arena-test-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("EMAIL_HOST", "smtp.quiz.test")
os.environ.setdefault("EMAIL_USERNAME", "arena@quiz.test")
os.environ.setdefault("EMAIL_PASSWORD", "secret")
os.environ.setdefault("FEEDBACK_TO_EMAIL", "team@quiz.test")

import pytest
from fastapi.testclient import TestClient

from api.index import app
from crud import queries
from services.jwt_handler import get_access_token

ROUTE_MODULES = [
    "app.authentication.main",
    "app.quiz.main",
    "app.users.main",
    "app.leaderboard.main",
    "app.features.main",
    "app.scramble.main",
]

QUERY_FUNCTIONS = [
    "get_user_by_username",
    "get_user_by_id",
    "create_user",
    "get_or_create_user",
    "save_progress",
    "get_progress",
    "get_level_progress",
    "add_leaderboard_points",
    "fetch_leaderboard",
    "fetch_user_stats",
    "reset_user_progress",
    "record_scramble_round",
]


class FakeCursor:
    """Records SQL and hands back scripted fetch results in order."""

    def __init__(self, results=None):
        self.executed = []
        self.results = list(results or [])
        self.rowcount = 0
        self.closed = False

    def execute(self, query, params=None):
        self.executed.append((" ".join(query.split()), params))

    def fetchone(self):
        return self.results.pop(0) if self.results else None

    def fetchall(self):
        return self.results.pop(0) if self.results else []

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor=None, store=None):
        self.cursor_obj = cursor or FakeCursor()
        self.store = store
        self.snapshot = store.snapshot() if store else None
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self):
        return self.cursor_obj

    def commit(self):
        self.commits += 1
        if self.store:
            self.snapshot = self.store.snapshot()

    def rollback(self):
        self.rollbacks += 1
        if self.store:
            self.store.restore(self.snapshot)

    def close(self):
        self.closed = True


class StoreCursor(FakeCursor):
    """Handles the raw SQL the generic CRUD class sends for user_feedback."""

    def __init__(self, store):
        super().__init__()
        self.store = store

    def execute(self, query, params=None):
        super().execute(query, params)
        query = " ".join(query.split())

        insert = re.match(r"INSERT INTO user_feedback \((.+?)\) VALUES", query)
        if insert:
            if self.store.fail_feedback_insert:
                raise RuntimeError("connection to server was lost")
            row = dict(zip(insert.group(1).split(","), params))
            row["id"] = len(self.store.feedback) + 1
            row["created_at"] = datetime.now(timezone.utc)
            self.store.feedback.append(row)
            self.results.append((row["id"],))
            return

        select = re.match(r"SELECT (.+?) FROM user_feedback WHERE id=%s", query)
        if select:
            columns = select.group(1).split(",")
            for row in self.store.feedback:
                if row["id"] == params[0]:
                    self.results.append(tuple(row.get(c) for c in columns))
                    return
            self.results.append(None)


class FakeStore:
    """In-memory stand-in for the functions in crud.queries."""

    def __init__(self):
        self.users = {}
        self.progress = {}
        self.leaderboard = {}
        self.scramble_rounds = {}
        self.feedback = []
        self.fail_feedback_insert = False
        self.tick = 0

    def snapshot(self):
        return copy.deepcopy(
            (self.users, self.progress, self.leaderboard, self.scramble_rounds, self.tick)
        )

    def restore(self, snapshot):
        (
            self.users,
            self.progress,
            self.leaderboard,
            self.scramble_rounds,
            self.tick,
        ) = copy.deepcopy(snapshot)

    def connect(self):
        return FakeConnection(StoreCursor(self), store=self)

    def _next_tick(self):
        self.tick += 1
        return self.tick

    def get_user_by_username(self, cursor, username):
        for user in self.users.values():
            if user["username"].lower() == username.lower():
                return dict(user)
        return None

    def get_user_by_id(self, cursor, user_id):
        user = self.users.get(int(user_id))
        return dict(user) if user else None

    def create_user(self, cursor, username, hashed_pin=None):
        if self.get_user_by_username(cursor, username):
            return None
        user_id = len(self.users) + 1
        self.users[user_id] = {
            "id": user_id,
            "username": username,
            "hashed_pin": hashed_pin,
            "points": 0,
            "level": 0,
            "created_at": datetime.now(timezone.utc),
        }
        return dict(self.users[user_id])

    def get_or_create_user(self, cursor, username):
        user = self.get_user_by_username(cursor, username)
        if user:
            return user, False
        return self.create_user(cursor, username), True

    def save_progress(
        self,
        cursor,
        user_id,
        level,
        score,
        passed,
        current_question,
        session_id=None,
        session_step=0,
    ):
        key = (int(user_id), level)
        row = self.progress.get(key, {"id": len(self.progress) + 1})
        row.update(
            {
                "user_id": int(user_id),
                "level": level,
                "score": score,
                "passed": passed,
                "current_question": current_question,
                "session_id": session_id,
                "session_step": session_step,
                "updated_at": self._next_tick(),
            }
        )
        self.progress[key] = row
        return row["id"]

    def get_progress(self, cursor, user_id):
        rows = [row for key, row in self.progress.items() if key[0] == int(user_id)]
        return [dict(row) for row in sorted(rows, key=lambda row: row["level"])]

    def get_level_progress(self, cursor, user_id, level):
        row = self.progress.get((int(user_id), level))
        return dict(row) if row else None

    def add_leaderboard_points(self, cursor, user_id, points, level):
        if points < 0:
            raise ValueError("Points cannot be negative")
        user = self.users.get(int(user_id))
        if user is None:
            return None
        user["points"] += points
        user["level"] = max(user["level"], level)

        entry = self.leaderboard.setdefault(
            int(user_id), {"total_score": 0, "max_level": 0}
        )
        entry["total_score"] += points
        entry["max_level"] = max(entry["max_level"], level)
        entry["updated_at"] = self._next_tick()
        return {"total_score": entry["total_score"], "max_level": entry["max_level"]}

    def fetch_leaderboard(self, cursor, limit):
        ordered = sorted(
            self.leaderboard.items(),
            key=lambda item: (-item[1]["total_score"], item[1]["updated_at"], item[0]),
        )
        return [
            {
                "user_id": user_id,
                "username": self.users[user_id]["username"],
                "total_score": entry["total_score"],
                "max_level": entry["max_level"],
            }
            for user_id, entry in ordered[:limit]
        ]

    def fetch_user_stats(self, cursor, user_id):
        entry = self.leaderboard.get(int(user_id))
        if entry is None:
            return {"total_score": 0, "max_level": 0, "rank": None}
        higher = sum(
            1
            for other in self.leaderboard.values()
            if other["total_score"] > entry["total_score"]
        )
        return {
            "total_score": entry["total_score"],
            "max_level": entry["max_level"],
            "rank": higher + 1,
        }

    def reset_user_progress(self, cursor, user_id):
        keys = [key for key in self.progress if key[0] == int(user_id)]
        for key in keys:
            del self.progress[key]
        if int(user_id) in self.leaderboard:
            self.leaderboard[int(user_id)].update({"total_score": 0, "max_level": 0})
        if int(user_id) in self.users:
            self.users[int(user_id)].update({"points": 0, "level": 0})
        return len(keys)

    def record_scramble_round(self, cursor, round_id, user_id, word, points):
        if round_id in self.scramble_rounds:
            return False
        self.scramble_rounds[round_id] = {
            "user_id": int(user_id),
            "word": word,
            "points": points,
        }
        return True


@pytest.fixture
def store(monkeypatch):
    fake_store = FakeStore()

    for name in QUERY_FUNCTIONS:
        monkeypatch.setattr(queries, name, getattr(fake_store, name))

    for module_name in ROUTE_MODULES:
        module = importlib.import_module(module_name)
        monkeypatch.setattr(module, "connect_database", fake_store.connect)

    return fake_store


@pytest.fixture
def client(store):
    return TestClient(app)


@pytest.fixture
def make_user(store):
    def _make_user(username="billions_fan", level=0, hashed_pin=None):
        user = store.create_user(None, username, hashed_pin)
        store.users[user["id"]]["level"] = level
        token = get_access_token({"id": user["id"], "username": username})
        return user, {"Authorization": f"Bearer {token}"}

    return _make_user
