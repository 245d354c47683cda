import pytest

from app.quiz.questions import LEVELS, LAST_LEVEL_INDEX, QUESTIONS_BY_ID, get_level


@pytest.mark.parametrize("level", LEVELS, ids=lambda level: level.title)
def test_level_pool_is_playable(level):
    assert len(level.pool) >= level.per_session
    assert 0 < level.pass_mark <= 100

    for question in level.pool:
        assert question.answer in question.options
        assert len(set(question.options)) == len(question.options)


def test_question_ids_are_unique_across_levels():
    total = sum(len(level.pool) for level in LEVELS)
    assert len(QUESTIONS_BY_ID) == total


def test_level_settings():
    beginner, pro = LEVELS

    assert (beginner.pass_mark, beginner.per_session, beginner.time_per_question) == (60, 10, 10)
    assert (pro.pass_mark, pro.per_session, pro.time_per_question) == (70, 10, 15)
    assert LAST_LEVEL_INDEX == 1


def test_get_level_out_of_range():
    assert get_level(0) is LEVELS[0]
    assert get_level(-1) is None
    assert get_level(len(LEVELS)) is None
