"""Quiz session state machine.

A session walks one level's drawn questions through four states::

    intro -> answering -> feedback -> answering -> ... -> summary

The whole session serializes to a plain dict so it can travel to the client
inside a sealed token between requests.
"""

import math
import random
import time
import uuid
from enum import Enum

# Project Imports
from .questions import LAST_LEVEL_INDEX, QUESTIONS_BY_ID, get_level

# Allowance for request latency when checking the per-question deadline
DEADLINE_GRACE_SECONDS = 1.0


class SessionState(str, Enum):
    intro = "intro"
    answering = "answering"
    feedback = "feedback"
    summary = "summary"


class SessionError(Exception):
    """Raised when an action is not allowed in the session's current state."""


def pick_random(items, count: int, rng=random):
    """Fisher-Yates shuffle a copy of ``items`` and keep the first ``count``."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled[:count]


def points_multiplier(level_index: int) -> int:
    return 2**level_index + 2 + level_index * 2


def points_for_level(level_index: int, correct_count: int) -> int:
    return correct_count * points_multiplier(level_index)


def score_percent(score: int, total: int) -> float:
    if total <= 0:
        raise ValueError("A session needs at least one question")
    if not 0 <= score <= total:
        raise ValueError("Score must be between 0 and the number of questions")
    return score / total * 100


def level_result(level_index: int, score: int, total: int) -> dict:
    """Pass/fail, points and unlock outcome for a finished level."""
    level = get_level(level_index)
    if level is None:
        raise ValueError(f"Unknown level {level_index}")

    percent = score_percent(score, total)
    passed = percent >= level.pass_mark
    points = points_for_level(level_index, score)

    if passed and level_index < LAST_LEVEL_INDEX:
        next_level = level_index + 1
    else:
        next_level = level_index

    return {
        "level": level_index,
        "title": level.title,
        "score": score,
        "total": total,
        "percent": round(percent, 2),
        "pass_mark": level.pass_mark,
        "passed": passed,
        "points": points,
        # Only a passed level pays out to the leaderboard
        "points_awarded": points if passed else 0,
        "next_level": next_level,
        "completed_all": passed and level_index == LAST_LEVEL_INDEX,
    }


def describe_level(level_index: int) -> dict:
    level = get_level(level_index)
    return {
        "level": level_index,
        "title": level.title,
        "pass_mark": level.pass_mark,
        "per_session": level.per_session,
        "time_per_question": level.time_per_question,
        "pool_size": len(level.pool),
        "points_per_correct": points_multiplier(level_index),
    }


class QuizSession:
    def __init__(
        self,
        session_id: str,
        user_id: int,
        level: int,
        question_ids: list,
        state: SessionState = SessionState.intro,
        index: int = 0,
        score: int = 0,
        deadline: float | None = None,
        last_answer: dict | None = None,
        result: dict | None = None,
    ):
        self.session_id = session_id
        self.user_id = user_id
        self.level = level
        self.question_ids = question_ids
        self.state = SessionState(state)
        self.index = index
        self.score = score
        self.deadline = deadline
        self.last_answer = last_answer
        self.result = result

    @classmethod
    def new(cls, user_id: int, level_index: int, rng=random):
        level = get_level(level_index)
        if level is None:
            raise SessionError(f"Unknown level {level_index}")

        drawn = pick_random(level.pool, level.per_session, rng=rng)
        return cls(
            session_id=uuid.uuid4().hex,
            user_id=user_id,
            level=level_index,
            question_ids=[question.id for question in drawn],
        )

    @property
    def total(self) -> int:
        return len(self.question_ids)

    @property
    def time_per_question(self) -> int:
        return get_level(self.level).time_per_question

    def current_question(self):
        return QUESTIONS_BY_ID[self.question_ids[self.index]]

    def time_left(self, now: float | None = None) -> int:
        if self.deadline is None:
            return 0
        now = time.time() if now is None else now
        return max(0, math.ceil(self.deadline - now))

    def _require(self, state: SessionState):
        if self.state != state:
            raise SessionError(
                f"Cannot do that while the session is in '{self.state.value}'"
            )

    def begin(self, now: float | None = None):
        self._require(SessionState.intro)
        now = time.time() if now is None else now

        self.state = SessionState.answering
        self.deadline = now + self.time_per_question

    def answer(self, option: str | None, now: float | None = None) -> dict:
        """Grade the current question. ``None`` means the timer ran out."""
        self._require(SessionState.answering)
        now = time.time() if now is None else now
        question = self.current_question()

        timed_out = option is None or now > self.deadline + DEADLINE_GRACE_SECONDS
        if not timed_out and option not in question.options:
            raise ValueError("That option does not belong to this question")

        is_correct = not timed_out and option == question.answer
        if is_correct:
            self.score += 1

        if is_correct:
            message = "Correct, nice one!"
        elif timed_out:
            message = f"Time's up! Correct answer: {question.answer}"
        else:
            message = f"Wrong! Correct answer: {question.answer}"

        self.last_answer = {
            "question_id": question.id,
            "selected": None if timed_out else option,
            "correct": is_correct,
            "timed_out": timed_out,
            "correct_answer": question.answer,
            "message": message,
        }
        self.state = SessionState.feedback
        self.deadline = None

        return self.last_answer

    @property
    def answered(self) -> int:
        """Number of questions graded so far."""
        if self.state in (SessionState.feedback, SessionState.summary):
            return self.index + 1
        return self.index

    @property
    def step(self) -> int:
        """Count of transitions since the intro. Every request moves it forward."""
        if self.state == SessionState.intro:
            return 0
        if self.state == SessionState.answering:
            return self.index * 2 + 1
        if self.state == SessionState.feedback:
            return self.index * 2 + 2
        return self.total * 2 + 1

    def advance(self, now: float | None = None) -> SessionState:
        self._require(SessionState.feedback)
        now = time.time() if now is None else now

        if self.index + 1 < self.total:
            self.index += 1
            self.state = SessionState.answering
            self.deadline = now + self.time_per_question
            self.last_answer = None
        else:
            self.state = SessionState.summary
            self.result = level_result(self.level, self.score, self.total)

        return self.state

    def view(self, now: float | None = None) -> dict:
        """What the client should render for the current state."""
        payload = {
            "state": self.state.value,
            "level": self.level,
            "question_number": self.index + 1,
            "total": self.total,
            "score": self.score,
        }

        if self.state == SessionState.intro:
            payload["intro"] = describe_level(self.level)

        elif self.state == SessionState.answering:
            question = self.current_question()
            payload["question"] = {
                "id": question.id,
                "question": question.question,
                "options": question.options,
            }
            payload["time_left"] = self.time_left(now)
            payload["time_per_question"] = self.time_per_question

        elif self.state == SessionState.feedback:
            payload["feedback"] = self.last_answer
            payload["is_last_question"] = self.index + 1 >= self.total

        else:
            payload["summary"] = self.result

        return payload

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "level": self.level,
            "question_ids": self.question_ids,
            "state": self.state.value,
            "index": self.index,
            "score": self.score,
            "deadline": self.deadline,
            "last_answer": self.last_answer,
            "result": self.result,
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(**data)
