# teamboard/routes/training_routes.py

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required
from sqlalchemy.exc import SQLAlchemyError

from .. import db, reporting
from ..models.completed_exercise import CompletedExercise
from ..models.training import Exercise

training_bp = Blueprint("training", __name__)

AUTO_COMPLETION = 100
AUTO_ACCURACY = 80
AUTO_EFFORT = "Moderado"
AUTO_NOTES = "Completed automatically"


# ------------------------------
# GET /api/training/today
# ------------------------------
@training_bp.route("/today", methods=["GET"])
@jwt_required()
def today_training():
    user_id = int(get_jwt_identity())

    try:
        return jsonify(reporting.get_today_training(user_id)), 200
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"[training/today] failed for user_id={user_id}")
        return jsonify({"message": "Failed to load today's training"}), 500


# ------------------------------
# POST /api/training/today/complete
# ------------------------------
@training_bp.route("/today/complete", methods=["POST"])
@jwt_required()
def complete_today_training():
    """
    Appends one fully completed row per exercise of today's training.
    Previously logged attempts are left untouched.
    """
    user_id = int(get_jwt_identity())

    try:
        training = reporting.resolve_today_training(user_id)
        if training is None:
            return jsonify({"message": "No training found for today"}), 404

        exercises = (
            Exercise.query.filter_by(training_id=training.id)
            .order_by(Exercise.id.asc())
            .all()
        )

        rows = [
            CompletedExercise(
                user_id=user_id,
                exercise_id=ex.id,
                sets=ex.sets,
                reps=ex.reps,
                completion=AUTO_COMPLETION,
                effort=AUTO_EFFORT,
                accuracy=AUTO_ACCURACY,
                notes=AUTO_NOTES,
            )
            for ex in exercises
        ]
        db.session.add_all(rows)
        db.session.commit()

        return jsonify(
            {
                "message": "All exercises marked as completed",
                "trainingId": training.id,
                "completed": len(rows),
            }
        ), 200

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"[training/today/complete] failed for user_id={user_id}")
        return jsonify({"message": "Failed to complete exercises"}), 500
