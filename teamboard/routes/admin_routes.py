# teamboard/routes/admin_routes.py
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from .. import db, reporting
from ..decorators import coach_required
from ..models.completed_exercise import CompletedExercise
from ..models.training import Exercise, Training, UserTraining
from ..models.user import User, UserProfile
from ..timeutils import parse_client_datetime

admin_bp = Blueprint("admin", __name__)


# ---------------------------------------------------------------------------
# Athletes
# ---------------------------------------------------------------------------

@admin_bp.route("/athletes", methods=["GET"])
@coach_required
def list_athletes():
    completed = (
        select(func.count(CompletedExercise.id))
        .where(CompletedExercise.user_id == User.id)
        .scalar_subquery()
    )

    try:
        rows = (
            db.session.query(User, UserProfile, completed.label("completed"))
            .outerjoin(UserProfile, UserProfile.user_id == User.id)
            .filter(User.role == "athlete")
            .order_by(User.name.asc(), User.id.asc())
            .all()
        )
    except SQLAlchemyError:
        current_app.logger.exception("[admin/athletes] failed to list athletes")
        return jsonify({"message": "Failed to load athletes"}), 500

    payload = []
    for user, profile, completed_count in rows:
        item = user.to_dict()
        item.update(
            {
                "position": profile.position if profile else None,
                "height": profile.height if profile else None,
                "weight": profile.weight if profile else None,
                "birthdate": profile.birthdate if profile else None,
                "completedWorkouts": int(completed_count or 0),
            }
        )
        payload.append(item)

    return jsonify(payload), 200


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

@admin_bp.route("/reports", methods=["GET"])
@coach_required
def reports():
    try:
        return jsonify(reporting.get_admin_report()), 200
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("[admin/reports] failed to generate report")
        return jsonify({"message": "Failed to generate reports"}), 500


# ---------------------------------------------------------------------------
# Trainings
# ---------------------------------------------------------------------------

@admin_bp.route("/training", methods=["POST"])
@coach_required
def create_training():
    """
    Body:
    {
      "name": "Shooting drills",
      "description": "...",
      "focus": "Shooting",
      "instructions": "...",              # optional
      "scheduledDate": "2025-03-01T18:00", # optional, template when omitted
      "exercises": [{"name": ..., "description": ..., "sets": 3, "reps": 10, "category": ...}],
      "athletes": [2, 3]
    }
    """
    data = request.get_json(silent=True) or {}

    name = (data.get("name") or "").strip()
    description = (data.get("description") or "").strip()
    focus = (data.get("focus") or "").strip()

    if len(name) < 3 or len(focus) < 3:
        return jsonify({"message": "name and focus must be at least 3 characters"}), 400
    if len(description) < 10:
        return jsonify({"message": "description must be at least 10 characters"}), 400

    scheduled_date = None
    if data.get("scheduledDate"):
        try:
            scheduled_date = parse_client_datetime(data["scheduledDate"])
        except (TypeError, ValueError):
            return jsonify({"message": "invalid scheduledDate"}), 400

    exercises = data.get("exercises") or []
    athlete_ids = data.get("athletes") or []
    if not isinstance(exercises, list) or not isinstance(athlete_ids, list):
        return jsonify({"message": "exercises and athletes must be lists"}), 400
    if not all(isinstance(a, int) and not isinstance(a, bool) for a in athlete_ids):
        return jsonify({"message": "athletes must be user ids"}), 400

    for ex in exercises:
        if not isinstance(ex, dict) or not (ex.get("name") and ex.get("description")):
            return jsonify({"message": "every exercise needs a name and description"}), 400

    try:
        training = Training(
            name=name,
            description=description,
            focus=focus,
            instructions=data.get("instructions") or "",
            scheduled_date=scheduled_date,
            created_by=current_user.id,
        )
        db.session.add(training)
        db.session.flush()

        for ex in exercises:
            db.session.add(
                Exercise(
                    training_id=training.id,
                    name=ex["name"],
                    description=ex["description"],
                    instructions=ex.get("instructions") or "",
                    sets=ex.get("sets") or 3,
                    reps=ex.get("reps") or 10,
                    category=ex.get("category") or "Essencial",
                )
            )

        # one assignment per athlete, first occurrence wins
        athlete_ids = list(dict.fromkeys(athlete_ids))
        if athlete_ids:
            known = {
                uid
                for (uid,) in db.session.query(User.id).filter(
                    User.id.in_(athlete_ids), User.role == "athlete"
                )
            }
            unknown = [a for a in athlete_ids if a not in known]
            if unknown:
                db.session.rollback()
                return jsonify({"message": f"unknown athletes: {unknown}"}), 400

            for athlete_id in athlete_ids:
                db.session.add(UserTraining(user_id=athlete_id, training_id=training.id))

        db.session.commit()

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("[admin/training] failed to create training")
        return jsonify({"message": "Failed to create training"}), 500

    return jsonify(training.to_dict()), 201
