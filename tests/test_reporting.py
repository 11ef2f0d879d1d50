from __future__ import annotations
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError

from teamboard import db, reporting
from teamboard.models import Event, Exercise, News

NOW = datetime(2025, 3, 10, 15, 30)


def _event(title, days, type_):
    db.session.add(Event(title=title, date=NOW + timedelta(days=days), location="Gym", type=type_))


# ------------------------------
# get_dashboard
# ------------------------------
def test_dashboard_defaults_for_user_without_data(make_user):
    user = make_user("ana", notifications=4)

    data = reporting.get_dashboard(user.id, now=NOW)

    assert data["stats"]["completedWorkouts"] == 0
    assert data["stats"]["nextGameDays"] == 0
    assert data["stats"]["nextGame"] is None
    assert data["stats"]["notifications"] == 4
    assert data["stats"]["totalWorkouts"] == 30
    assert data["todayTraining"] is None
    assert data["activities"] == []
    assert data["events"] == []
    assert data["news"] == []


def test_dashboard_unknown_user_returns_none(app):
    assert reporting.get_dashboard(9999, now=NOW) is None


def test_next_game_days_rounds_up_and_skips_other_event_types(make_user):
    user = make_user("ana")
    _event("Practice", 1, "training")
    _event("Game vs Rivals", 3, "game")
    _event("Scrimmage", 7, "training")
    db.session.commit()

    stats = reporting.get_dashboard(user.id, now=NOW)["stats"]

    assert stats["nextGameDays"] == 3
    assert stats["nextGame"]["type"] == "game"
    assert stats["nextGame"]["title"] == "Game vs Rivals"


def test_next_game_partial_day_counts_as_full_day(make_user):
    user = make_user("ana")
    db.session.add(Event(title="Game", date=NOW + timedelta(hours=5), location="Gym", type="game"))
    db.session.commit()

    assert reporting.get_dashboard(user.id, now=NOW)["stats"]["nextGameDays"] == 1


def test_next_game_found_beyond_the_five_listed_events(make_user):
    user = make_user("ana")
    for i in range(6):
        _event(f"Practice {i}", i + 1, "training")
    _event("Final", 20, "game")
    db.session.commit()

    data = reporting.get_dashboard(user.id, now=NOW)

    assert len(data["events"]) == 5
    assert data["stats"]["nextGameDays"] == 20


def test_events_are_upcoming_only_ascending(make_user):
    user = make_user("ana")
    _event("Past", -1, "game")
    _event("Later", 4, "other")
    _event("Sooner", 2, "other")
    db.session.commit()

    titles = [e["title"] for e in reporting.get_dashboard(user.id, now=NOW)["events"]]

    assert titles == ["Sooner", "Later"]


def test_news_visibility_and_order(make_user):
    user = make_user("ana")
    other = make_user("bruno", role="coach")
    db.session.add_all(
        [
            News(title="Public", content="c" * 10, is_public=True, created_at=NOW - timedelta(days=3)),
            News(title="Mine", content="c" * 10, is_public=False, author_id=user.id, created_at=NOW - timedelta(days=2)),
            News(title="Private other", content="c" * 10, is_public=False, author_id=other.id, created_at=NOW - timedelta(days=1)),
        ]
    )
    db.session.commit()

    titles = [n["title"] for n in reporting.get_dashboard(user.id, now=NOW)["news"]]

    assert titles == ["Mine", "Public"]


def test_news_limited_to_three(make_user):
    user = make_user("ana")
    for i in range(5):
        db.session.add(News(title=f"N{i}", content="c" * 10, is_public=True, created_at=NOW - timedelta(hours=i)))
    db.session.commit()

    titles = [n["title"] for n in reporting.get_dashboard(user.id, now=NOW)["news"]]

    assert titles == ["N0", "N1", "N2"]


def test_activities_last_five_newest_first(make_user, make_training, log_attempt):
    user = make_user("ana")
    training = make_training("Shooting", NOW, users=[user], exercises=1)
    exercise = training.exercises[0]
    for i in range(7):
        log_attempt(user, exercise, NOW - timedelta(days=i), completion=10 * i)

    data = reporting.get_dashboard(user.id, now=NOW)

    assert data["stats"]["completedWorkouts"] == 7
    assert len(data["activities"]) == 5
    first = data["activities"][0]
    assert first["type"] == "workoutCompleted"
    assert "0%" in first["description"]
    assert "40%" in data["activities"][4]["description"]


def test_failed_section_degrades_without_hiding_others(make_user, monkeypatch):
    user = make_user("ana")
    _event("Game", 2, "game")
    db.session.add(News(title="Public", content="c" * 10, is_public=True))
    db.session.commit()

    def boom(*args, **kwargs):
        raise SQLAlchemyError("activities down")

    monkeypatch.setattr(reporting, "_recent_activities", boom)

    data = reporting.get_dashboard(user.id, now=NOW)

    assert data["activities"] == []
    assert [e["title"] for e in data["events"]] == ["Game"]
    assert [n["title"] for n in data["news"]] == ["Public"]
    assert data["stats"]["nextGameDays"] == 2


def test_failed_user_lookup_propagates(make_user, monkeypatch):
    user = make_user("ana")

    def boom(*args, **kwargs):
        raise SQLAlchemyError("db down")

    monkeypatch.setattr(db.session, "get", boom)

    with pytest.raises(SQLAlchemyError):
        reporting.get_dashboard(user.id, now=NOW)


def test_dashboard_today_training_omits_instructions(make_user, make_training):
    user = make_user("ana")
    training = make_training("Day one", NOW + timedelta(days=1), users=[user])
    training.instructions = "Warm up for ten minutes"
    db.session.commit()

    summary = reporting.get_dashboard(user.id, now=NOW)["todayTraining"]
    standalone = reporting.get_today_training(user.id, now=NOW)

    assert "instructions" not in summary
    assert standalone["instructions"] == "Warm up for ten minutes"
    assert {k: v for k, v in standalone.items() if k != "instructions"} == summary


# ------------------------------
# today's training
# ------------------------------
def test_today_training_is_nearest_upcoming_assignment(make_user, make_training):
    user = make_user("ana")
    make_training("Day five", NOW + timedelta(days=5), users=[user])
    make_training("Day one", NOW + timedelta(days=1), users=[user])

    result = reporting.get_today_training(user.id, now=NOW)

    assert result["name"] == "Day one"
    assert len(result["exercises"]) == 2


def test_today_training_includes_earlier_today(make_user, make_training):
    user = make_user("ana")
    make_training("Morning", NOW.replace(hour=7), users=[user])

    assert reporting.get_today_training(user.id, now=NOW)["name"] == "Morning"


def test_today_training_ignores_past_unassigned_and_templates(make_user, make_training):
    user = make_user("ana")
    other = make_user("bruno")
    make_training("Yesterday", NOW - timedelta(days=1), users=[user])
    make_training("Someone else", NOW + timedelta(days=1), users=[other])
    make_training("Template", None, users=[user])

    assert reporting.get_today_training(user.id, now=NOW) == {"exercises": []}
    assert reporting.get_dashboard(user.id, now=NOW)["todayTraining"] is None


# ------------------------------
# exercise history
# ------------------------------
@pytest.fixture
def history_rows(make_user, make_training, log_attempt):
    user = make_user("ana")
    training = make_training("Shooting", NOW, users=[user], exercises=2)
    first, second = training.exercises
    log_attempt(user, first, NOW - timedelta(days=3), completion=90, weight=20)
    log_attempt(user, second, NOW - timedelta(days=10), completion=70)
    log_attempt(user, first, NOW - timedelta(days=400), completion=50)
    return user, first, second


def test_history_period_filters(history_rows):
    user, _, _ = history_rows

    def count(period):
        return len(reporting.get_exercise_history(user.id, period=period, now=NOW)["logs"])

    assert count("7days") == 1
    assert count("30days") == 2
    assert count("90days") == 2
    assert count("year") == 2
    assert count("all") == 3
    assert count("bogus") == 2


def test_history_logs_and_progress_share_descending_order(history_rows):
    user, first, _ = history_rows

    data = reporting.get_exercise_history(user.id, period="all", now=NOW)

    dates = [log["date"] for log in data["logs"]]
    assert dates == sorted(dates, reverse=True)
    assert [p["date"] for p in data["progress"]] == dates
    assert data["logs"][0]["exercise"]["name"] == first.name
    assert data["progress"][0] == {
        "date": dates[0],
        "accuracy": 70,
        "completion": 90,
        "weight": 20.0,
    }
    assert data["progress"][1]["weight"] == 0


def test_history_exercise_filter(history_rows):
    user, first, second = history_rows

    data = reporting.get_exercise_history(user.id, period="all", exercise=str(second.id), now=NOW)

    assert [log["exercise"]["id"] for log in data["logs"]] == [second.id]


def test_history_day_filter(history_rows):
    user, _, _ = history_rows
    day = (NOW - timedelta(days=10)).date().isoformat()

    data = reporting.get_exercise_history(user.id, period="all", day=day, now=NOW)

    assert len(data["logs"]) == 1
    assert data["logs"][0]["completion"] == 70


def test_history_rejects_non_numeric_exercise(history_rows):
    user, _, _ = history_rows

    with pytest.raises(ValueError):
        reporting.get_exercise_history(user.id, exercise="squats", now=NOW)


def test_history_only_returns_own_rows(history_rows, make_user):
    other = make_user("bruno")

    assert reporting.get_exercise_history(other.id, period="all", now=NOW) == {"logs": [], "progress": []}


def test_year_period_on_leap_day():
    assert reporting.period_start("year", datetime(2024, 2, 29, 12)) == datetime(2023, 2, 28, 12)


# ------------------------------
# admin report
# ------------------------------
def test_admin_report_aggregates(make_user, make_training, log_attempt):
    coach = make_user("coach", role="coach")
    ana = make_user("ana", name="Ana")
    bruno = make_user("bruno", name="Bruno")
    training = make_training("Shooting", NOW, users=[ana, bruno], exercises=2)
    first, second = training.exercises
    log_attempt(ana, first, NOW, completion=80, accuracy=60)
    log_attempt(ana, first, NOW, completion=100, accuracy=90)
    log_attempt(ana, second, NOW, completion=50, accuracy=40)
    log_attempt(coach, second, NOW, completion=10, accuracy=10)

    report = reporting.get_admin_report()

    assert report["statistics"] == {"totalAthletes": 2, "totalExercises": 4}

    perf = {p["username"]: p for p in report["athletePerformance"]}
    assert [p["name"] for p in report["athletePerformance"]] == ["Ana", "Bruno"]
    assert perf["ana"]["exercises"] == 3
    assert perf["ana"]["avgCompletion"] == pytest.approx(230 / 3)
    assert perf["ana"]["avgAccuracy"] == pytest.approx(190 / 3)
    assert perf["bruno"]["exercises"] == 0
    assert perf["bruno"]["avgCompletion"] is None
    assert perf["bruno"]["avgAccuracy"] is None

    popular = report["popularExercises"]
    assert [p["id"] for p in popular] == [first.id, second.id]
    assert popular[0]["count"] == 2
    assert popular[0]["avgCompletion"] == pytest.approx(90.0)
    assert popular[1]["avgAccuracy"] == pytest.approx(25.0)


def test_admin_report_top_five_only(app):
    for i in range(7):
        db.session.add(Exercise(name=f"Library {i}", description="library drill"))
    db.session.commit()

    popular = reporting.get_admin_report()["popularExercises"]

    assert len(popular) == 5
    assert all(p["count"] == 0 and p["avgCompletion"] is None for p in popular)
