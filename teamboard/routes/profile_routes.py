# teamboard/routes/profile_routes.py
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_current_user, jwt_required
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..models.completed_exercise import CompletedExercise
from ..models.user import UserProfile

profile_bp = Blueprint("profile", __name__)

PROFILE_FIELDS = ("avatar", "position", "height", "weight", "birthdate")


def _profile_payload(user):
    payload = user.to_dict()
    profile = user.profile.to_dict() if user.profile else {f: None for f in PROFILE_FIELDS}
    payload.update(profile)
    return payload


@profile_bp.route("", methods=["GET"])
@jwt_required()
def get_profile():
    user = get_current_user()
    user_id = user.id
    try:
        completed = (
            db.session.query(func.count(CompletedExercise.id))
            .filter(CompletedExercise.user_id == user_id)
            .scalar()
        )
        payload = _profile_payload(user)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"[profile] failed to load user_id={user_id}")
        return jsonify({"message": "Failed to load profile"}), 500

    payload["completedWorkouts"] = int(completed or 0)
    return jsonify(payload), 200


@profile_bp.route("", methods=["PATCH"])
@jwt_required()
def update_profile():
    user = get_current_user()
    data = request.get_json(silent=True) or {}

    # created lazily on first write
    profile = user.profile
    if profile is None:
        profile = UserProfile(user_id=user.id)
        db.session.add(profile)

    for field in PROFILE_FIELDS:
        if field in data:
            setattr(profile, field, data[field])

    name = (data.get("name") or "").strip()
    if name:
        user.name = name
    email = (data.get("email") or "").strip().lower()
    if email:
        user.email = email

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"[profile] failed to update user_id={user.id}")
        return jsonify({"message": "Failed to update profile"}), 500

    return jsonify(_profile_payload(user)), 200
