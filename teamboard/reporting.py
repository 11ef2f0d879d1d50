# teamboard/reporting.py
"""
Read-only aggregation queries behind the dashboard, today's training,
exercise history and the coach report.

Every function here must run inside an app context. Nothing is written;
the only session interaction besides SELECTs is a rollback after a failed
dashboard section so the following sections get a usable session.
"""
import math
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from flask import current_app
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError

from . import db
from .models import CompletedExercise, Event, Exercise, News, Training, User, UserTraining

PERIOD_DAYS = {
    "7days": 7,
    "30days": 30,
    "90days": 90,
}
DEFAULT_PERIOD = "30days"

ACTIVITY_TYPE = "workoutCompleted"
ACTIVITY_TITLE = "Workout completed"


# ------------------------------
# Helpers
# ------------------------------
def _utcnow() -> datetime:
    return datetime.utcnow()


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def days_until(target: datetime, now: datetime) -> int:
    """Whole days from now to target, rounded up (0.2 days -> 1)."""
    return math.ceil((target - now).total_seconds() / 86400)


def _avg(value) -> Optional[float]:
    # AVG over zero rows is NULL; Decimal on MySQL, float on SQLite
    return float(value) if value is not None else None


def _section(name: str, default: Any, loader: Callable[[], Any]) -> Any:
    try:
        return loader()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"[dashboard] section '{name}' failed, using default")
        return default


def period_start(period: str, now: datetime) -> Optional[datetime]:
    """
    Lower bound on created_at for a history period.
    Returns None for "all"; unknown periods behave like 30days.
    """
    if period == "all":
        return None
    if period == "year":
        try:
            return now.replace(year=now.year - 1)
        except ValueError:
            # Feb 29 -> Feb 28
            return now.replace(year=now.year - 1, day=28)
    return now - timedelta(days=PERIOD_DAYS.get(period, PERIOD_DAYS[DEFAULT_PERIOD]))


# ------------------------------
# Today's training
# ------------------------------
def resolve_today_training(user_id: int, now: Optional[datetime] = None) -> Optional[Training]:
    """
    Nearest training assigned to the user scheduled at or after the start
    of today. A training next week qualifies when nothing earlier exists.
    """
    now = now or _utcnow()
    return (
        Training.query.join(UserTraining, UserTraining.training_id == Training.id)
        .filter(
            UserTraining.user_id == user_id,
            Training.scheduled_date >= start_of_day(now),
        )
        .order_by(Training.scheduled_date.asc(), Training.id.asc())
        .first()
    )


def _training_exercises(training_id: int) -> List[Dict[str, Any]]:
    rows = (
        Exercise.query.filter_by(training_id=training_id)
        .order_by(Exercise.id.asc())
        .all()
    )
    return [e.to_dict() for e in rows]


def _training_payload(training: Training) -> Dict[str, Any]:
    return {
        "id": training.id,
        "name": training.name,
        "focus": training.focus,
        "description": training.description,
        "scheduledDate": training.scheduled_date.isoformat(),
        "exercises": _training_exercises(training.id),
    }


def _today_training_summary(user_id: int, now: datetime) -> Optional[Dict[str, Any]]:
    training = resolve_today_training(user_id, now)
    return _training_payload(training) if training is not None else None


def get_today_training(user_id: int, now: Optional[datetime] = None) -> Dict[str, Any]:
    training = resolve_today_training(user_id, now)
    if training is None:
        return {"exercises": []}

    payload = _training_payload(training)
    payload["instructions"] = training.instructions
    return payload


# ------------------------------
# Dashboard sections
# ------------------------------
def _completed_count(user_id: int) -> int:
    count = (
        db.session.query(func.count(CompletedExercise.id))
        .filter(CompletedExercise.user_id == user_id)
        .scalar()
    )
    return int(count or 0)


def _next_game(now: datetime) -> Optional[Event]:
    return (
        Event.query.filter(Event.date >= now, Event.type == "game")
        .order_by(Event.date.asc(), Event.id.asc())
        .first()
    )


def _next_game_stats(now: datetime):
    game = _next_game(now)
    if game is None:
        return None, 0
    return game.to_dict(), days_until(game.date, now)


def _upcoming_events(now: datetime, limit: int) -> List[Dict[str, Any]]:
    rows = (
        Event.query.filter(Event.date >= now)
        .order_by(Event.date.asc(), Event.id.asc())
        .limit(limit)
        .all()
    )
    return [e.to_dict() for e in rows]


def _recent_activities(user_id: int, limit: int) -> List[Dict[str, Any]]:
    rows = (
        CompletedExercise.query.filter_by(user_id=user_id)
        .order_by(CompletedExercise.created_at.desc(), CompletedExercise.id.desc())
        .limit(limit)
        .all()
    )
    return [
        {
            "id": ce.id,
            "type": ACTIVITY_TYPE,
            "title": ACTIVITY_TITLE,
            "description": f"You completed {ce.completion}% of the proposed exercises",
            "date": ce.created_at.isoformat(),
        }
        for ce in rows
    ]


def _visible_news(user_id: int, limit: int) -> List[Dict[str, Any]]:
    rows = (
        News.query.filter(or_(News.is_public.is_(True), News.author_id == user_id))
        .order_by(News.created_at.desc(), News.id.desc())
        .limit(limit)
        .all()
    )
    return [n.to_dict() for n in rows]


def get_dashboard(user_id: int, now: Optional[datetime] = None) -> Optional[Dict[str, Any]]:
    """
    Dashboard payload for one user, or None when the user does not exist.

    Loading the user is the primary query and its failure propagates. Each
    section after it degrades to its empty default on a database error so one
    broken section never hides the others.
    """
    now = now or _utcnow()
    cfg = current_app.config

    user = db.session.get(User, user_id)
    if user is None:
        return None
    notifications = int(user.notifications or 0)

    completed = _section("completedWorkouts", 0, lambda: _completed_count(user_id))
    next_game, next_game_days = _section(
        "nextGame", (None, 0), lambda: _next_game_stats(now)
    )
    today_training = _section(
        "todayTraining", None, lambda: _today_training_summary(user_id, now)
    )
    activities = _section(
        "activities",
        [],
        lambda: _recent_activities(user_id, cfg["DASHBOARD_ACTIVITY_LIMIT"]),
    )
    events = _section(
        "events", [], lambda: _upcoming_events(now, cfg["DASHBOARD_EVENT_LIMIT"])
    )
    news = _section(
        "news", [], lambda: _visible_news(user_id, cfg["DASHBOARD_NEWS_LIMIT"])
    )

    return {
        "stats": {
            "completedWorkouts": completed,
            "totalWorkouts": cfg["MONTHLY_WORKOUT_GOAL"],
            "nextGameDays": next_game_days,
            "nextGame": next_game,
            "notifications": notifications,
        },
        "todayTraining": today_training,
        "activities": activities,
        "events": events,
        "news": news,
    }


# ------------------------------
# Exercise history
# ------------------------------
def get_exercise_history(
    user_id: int,
    period: str = DEFAULT_PERIOD,
    exercise: str = "all",
    day: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Completed exercises for the user, newest first, plus a chart series in
    the same order.

    Raises ValueError for a non-numeric exercise filter or a malformed day.
    """
    now = now or _utcnow()

    filters = [CompletedExercise.user_id == user_id]

    start = period_start(period, now)
    if start is not None:
        filters.append(CompletedExercise.created_at >= start)

    if exercise and exercise != "all":
        filters.append(CompletedExercise.exercise_id == int(exercise))

    if day:
        day_start = datetime.combine(date.fromisoformat(day), datetime.min.time())
        filters.append(CompletedExercise.created_at >= day_start)
        filters.append(CompletedExercise.created_at < day_start + timedelta(days=1))

    rows = (
        db.session.query(CompletedExercise, Exercise)
        .join(Exercise, CompletedExercise.exercise_id == Exercise.id)
        .filter(*filters)
        .order_by(CompletedExercise.created_at.desc(), CompletedExercise.id.desc())
        .all()
    )

    logs = []
    progress = []
    for ce, ex in rows:
        weight = float(ce.weight) if ce.weight is not None else None
        logs.append(
            {
                "id": ce.id,
                "date": ce.created_at.isoformat(),
                "sets": ce.sets,
                "reps": ce.reps,
                "weight": weight,
                "completion": ce.completion,
                "effort": ce.effort,
                "accuracy": ce.accuracy,
                "notes": ce.notes,
                "exercise": {
                    "id": ex.id,
                    "name": ex.name,
                    "description": ex.description,
                },
            }
        )
        progress.append(
            {
                "date": ce.created_at.isoformat(),
                "accuracy": ce.accuracy,
                "completion": ce.completion,
                "weight": weight or 0,
            }
        )

    return {"logs": logs, "progress": progress}


# ------------------------------
# Coach report
# ------------------------------
def get_admin_report() -> Dict[str, Any]:
    limit = current_app.config["REPORT_POPULAR_EXERCISE_LIMIT"]

    total_athletes = (
        db.session.query(func.count(User.id)).filter(User.role == "athlete").scalar()
    )
    total_exercises = db.session.query(func.count(CompletedExercise.id)).scalar()

    # correlated per-athlete aggregates
    by_user = CompletedExercise.user_id == User.id
    athlete_count = select(func.count(CompletedExercise.id)).where(by_user).scalar_subquery()
    athlete_completion = select(func.avg(CompletedExercise.completion)).where(by_user).scalar_subquery()
    athlete_accuracy = select(func.avg(CompletedExercise.accuracy)).where(by_user).scalar_subquery()

    athlete_rows = (
        db.session.query(
            User.id,
            User.name,
            User.username,
            athlete_count.label("exercises"),
            athlete_completion.label("avg_completion"),
            athlete_accuracy.label("avg_accuracy"),
        )
        .filter(User.role == "athlete")
        .order_by(User.name.asc(), User.id.asc())
        .all()
    )

    # correlated per-exercise aggregates
    by_exercise = CompletedExercise.exercise_id == Exercise.id
    exercise_count = select(func.count(CompletedExercise.id)).where(by_exercise).scalar_subquery()
    exercise_completion = select(func.avg(CompletedExercise.completion)).where(by_exercise).scalar_subquery()
    exercise_accuracy = select(func.avg(CompletedExercise.accuracy)).where(by_exercise).scalar_subquery()

    popular_rows = (
        db.session.query(
            Exercise.id,
            Exercise.name,
            exercise_count.label("completions"),
            exercise_completion.label("avg_completion"),
            exercise_accuracy.label("avg_accuracy"),
        )
        .order_by(exercise_count.desc(), Exercise.id.asc())
        .limit(limit)
        .all()
    )

    return {
        "statistics": {
            "totalAthletes": int(total_athletes or 0),
            "totalExercises": int(total_exercises or 0),
        },
        "athletePerformance": [
            {
                "id": row.id,
                "name": row.name,
                "username": row.username,
                "exercises": int(row.exercises or 0),
                "avgCompletion": _avg(row.avg_completion),
                "avgAccuracy": _avg(row.avg_accuracy),
            }
            for row in athlete_rows
        ],
        "popularExercises": [
            {
                "id": row.id,
                "name": row.name,
                "count": int(row.completions or 0),
                "avgCompletion": _avg(row.avg_completion),
                "avgAccuracy": _avg(row.avg_accuracy),
            }
            for row in popular_rows
        ],
    }
