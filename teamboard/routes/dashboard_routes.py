# teamboard/routes/dashboard_routes.py
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required
from sqlalchemy.exc import SQLAlchemyError

from .. import db, reporting

dashboard_bp = Blueprint("dashboard", __name__)


# -------------------------
# DASHBOARD OVERVIEW
# -------------------------
@dashboard_bp.route("", methods=["GET"])
@jwt_required()
def dashboard_overview():
    user_id = int(get_jwt_identity())

    try:
        payload = reporting.get_dashboard(user_id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"[dashboard] failed for user_id={user_id}")
        return jsonify({"message": "Failed to load dashboard data"}), 500

    if payload is None:
        return jsonify({"message": "user not found"}), 404

    return jsonify(payload), 200
