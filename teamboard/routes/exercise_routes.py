# teamboard/routes/exercise_routes.py
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from sqlalchemy.exc import SQLAlchemyError

from .. import db, reporting
from ..models.completed_exercise import EFFORT_LEVELS, CompletedExercise
from ..models.training import Exercise

exercises_bp = Blueprint("exercises", __name__)

REQUIRED_LOG_FIELDS = ("exerciseId", "sets", "reps", "completion", "effort", "accuracy")


# ------------------------------
# Helpers
# ------------------------------
def _safe_int(v: Any, default: int = 0) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def _int_or_none(v: Any) -> Optional[int]:
    if v is None or v == "":
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def _weight_or_none(v: Any) -> Optional[Decimal]:
    if v is None or v == "":
        return None
    try:
        return Decimal(str(v)).quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValueError("weight must be a number")


def _build_completed_exercise(
    user_id: int, exercise_id: int, fields: Dict[str, Any]
) -> Tuple[Optional[CompletedExercise], Optional[str]]:
    """
    Validates a logged attempt. Returns (row, None) or (None, error message).
    """
    sets = _int_or_none(fields.get("sets"))
    reps = _int_or_none(fields.get("reps"))
    completion = _int_or_none(fields.get("completion"))
    accuracy = _int_or_none(fields.get("accuracy"))
    effort = fields.get("effort")

    if sets is None or sets < 0 or reps is None or reps < 0:
        return None, "sets and reps must be non-negative integers"
    if completion is None or not 0 <= completion <= 100:
        return None, "completion must be an integer between 0 and 100"
    if accuracy is None or not 0 <= accuracy <= 100:
        return None, "accuracy must be an integer between 0 and 100"
    if effort not in EFFORT_LEVELS:
        return None, f"effort must be one of: {', '.join(EFFORT_LEVELS)}"

    try:
        weight = _weight_or_none(fields.get("weight"))
    except ValueError as e:
        return None, str(e)

    row = CompletedExercise(
        user_id=user_id,
        exercise_id=exercise_id,
        sets=sets,
        reps=reps,
        weight=weight,
        completion=completion,
        effort=effort,
        accuracy=accuracy,
        notes=fields.get("notes") or "",
    )
    return row, None


def _save_completed_exercise(user_id: int, exercise_id: Optional[int], fields: Dict[str, Any]):
    if exercise_id is None:
        return jsonify({"message": "exerciseId must be an integer"}), 400

    try:
        if db.session.get(Exercise, exercise_id) is None:
            return jsonify({"message": "Exercise not found"}), 404

        row, error = _build_completed_exercise(user_id, exercise_id, fields)
        if error:
            return jsonify({"message": error}), 400

        db.session.add(row)
        db.session.commit()
        return jsonify(row.to_dict()), 201

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(
            f"[exercises] failed to log exercise_id={exercise_id} user_id={user_id}"
        )
        return jsonify({"message": "Failed to log exercise"}), 500


# ------------------------------
# GET /api/exercises
# ------------------------------
@exercises_bp.route("", methods=["GET"])
@jwt_required()
def list_exercises():
    try:
        rows = Exercise.query.order_by(Exercise.id.asc()).all()
    except SQLAlchemyError:
        current_app.logger.exception("[exercises] failed to list exercises")
        return jsonify({"message": "Failed to load exercises"}), 500

    return jsonify([e.to_dict() for e in rows]), 200


# ------------------------------
# POST /api/exercises/log
# ------------------------------
@exercises_bp.route("/log", methods=["POST"])
@jwt_required()
def log_exercise():
    """
    Expected body:
    {
      "exerciseId": 4,
      "sets": 3,
      "reps": 10,
      "weight": 22.5,        # optional
      "completion": 90,      # 0..100
      "effort": "Moderado",  # Fácil | Moderado | Difícil
      "accuracy": 75,        # 0..100
      "notes": "..."         # optional
    }
    """
    user_id = int(get_jwt_identity())
    data = request.get_json(silent=True) or {}

    missing = [f for f in REQUIRED_LOG_FIELDS if data.get(f) in (None, "")]
    if missing:
        return jsonify({"message": f"{', '.join(missing)} required"}), 400

    return _save_completed_exercise(user_id, _int_or_none(data.get("exerciseId")), data)


# ------------------------------
# POST /api/exercises/<exercise_id>/register
# ------------------------------
@exercises_bp.route("/<int:exercise_id>/register", methods=["POST"])
@jwt_required()
def register_exercise(exercise_id):
    """Quick log from the training page; omitted fields fall back to defaults."""
    user_id = int(get_jwt_identity())
    data = request.get_json(silent=True) or {}

    fields = {
        "sets": _safe_int(data.get("sets"), 0),
        "reps": _safe_int(data.get("reps"), 0),
        "weight": data.get("weight"),
        "completion": _safe_int(data.get("completion"), 0),
        "effort": data.get("effort") or "Moderado",
        "accuracy": _safe_int(data.get("accuracy"), 0),
        "notes": data.get("notes") or "",
    }
    return _save_completed_exercise(user_id, exercise_id, fields)


# ------------------------------
# GET /api/exercises/history?period=30days&exercise=all&date=YYYY-MM-DD
# ------------------------------
@exercises_bp.route("/history", methods=["GET"])
@jwt_required()
def exercise_history():
    user_id = int(get_jwt_identity())

    period = request.args.get("period", reporting.DEFAULT_PERIOD)
    exercise = request.args.get("exercise", "all")
    day = request.args.get("date") or None

    try:
        return jsonify(
            reporting.get_exercise_history(user_id, period=period, exercise=exercise, day=day)
        ), 200
    except ValueError:
        return jsonify({"message": "invalid exercise or date filter"}), 400
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"[exercises/history] failed for user_id={user_id}")
        return jsonify({"message": "Failed to load exercise history"}), 500
