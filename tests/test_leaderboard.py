import pytest

from app.leaderboard.main import rank_entries


def seed(store, make_user, scores):
    for username, score in scores:
        user, _ = make_user(username)
        store.add_leaderboard_points(None, user["id"], score, 0)


def test_rank_entries_shares_rank_on_ties():
    rows = [{"total_score": score} for score in (90, 70, 70, 10)]

    assert [row["rank"] for row in rank_entries(rows)] == [1, 2, 2, 4]


def test_leaderboard_is_ordered_by_score(client, store, make_user):
    seed(store, make_user, [("ana", 30), ("bo", 90), ("cy", 60), ("di", 60)])

    entries = client.get("/leaderboard").json()["data"]

    scores = [entry["total_score"] for entry in entries]
    assert scores == sorted(scores, reverse=True)
    assert [entry["username"] for entry in entries] == ["bo", "cy", "di", "ana"]
    assert [entry["rank"] for entry in entries] == [1, 2, 2, 4]


def test_leaderboard_limit(client, store, make_user):
    seed(store, make_user, [("ana", 30), ("bo", 90), ("cy", 60)])

    entries = client.get("/leaderboard", params={"limit": 2}).json()["data"]

    assert [entry["username"] for entry in entries] == ["bo", "cy"]


@pytest.mark.parametrize("limit", [0, 501])
def test_leaderboard_limit_bounds(client, limit):
    assert client.get("/leaderboard", params={"limit": limit}).status_code == 422


def test_submit_passing_score(client, store, make_user):
    user, headers = make_user()

    response = client.post(
        "/leaderboard", json={"level": 0, "score": 9, "total": 10}, headers=headers
    )

    data = response.json()["data"]
    assert response.status_code == 200
    assert data["passed"] is True
    assert data["points_awarded"] == 27
    assert store.users[user["id"]]["level"] == 1
    assert store.progress[(user["id"], 0)]["passed"] is True


def test_submit_score_above_total(client, make_user):
    _, headers = make_user()

    response = client.post(
        "/leaderboard", json={"level": 0, "score": 11, "total": 10}, headers=headers
    )

    assert response.status_code == 422


def test_submit_wrong_total(client, make_user):
    _, headers = make_user()

    response = client.post(
        "/leaderboard", json={"level": 0, "score": 3, "total": 3}, headers=headers
    )

    assert response.status_code == 400


def test_submit_locked_level(client, store, make_user):
    user, headers = make_user()

    response = client.post(
        "/leaderboard", json={"level": 1, "score": 10, "total": 10}, headers=headers
    )

    assert response.status_code == 403
    assert user["id"] not in store.leaderboard


def test_sync_applies_entries_in_order(client, store, make_user):
    user, headers = make_user()

    response = client.post(
        "/leaderboard/sync",
        json={
            "entries": [
                {"level": 1, "score": 10, "total": 10},
                {"level": 0, "score": 4, "total": 10},
                {"level": 0, "score": 10, "total": 10},
                {"level": 1, "score": 8, "total": 10},
            ]
        },
        headers=headers,
    )

    results = response.json()["data"]
    assert results[0]["error"] == "Level is locked"
    assert results[1]["passed"] is False
    assert results[2]["points_awarded"] == 30
    assert results[3]["points_awarded"] == 56
    assert store.leaderboard[user["id"]]["total_score"] == 86


def test_sync_requires_entries(client, make_user):
    _, headers = make_user()

    response = client.post("/leaderboard/sync", json={"entries": []}, headers=headers)

    assert response.status_code == 422


def test_submit_while_session_running(client, store, make_user):
    user, headers = make_user()
    client.post("/quiz/levels/0/start", headers=headers)

    response = client.post(
        "/leaderboard", json={"level": 0, "score": 10, "total": 10}, headers=headers
    )

    assert response.status_code == 409
    assert store.progress[(user["id"], 0)]["session_id"] is not None
    assert user["id"] not in store.leaderboard
