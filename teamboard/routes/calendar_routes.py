# teamboard/routes/calendar_routes.py
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..decorators import coach_required
from ..models.club import EVENT_TYPES, Event
from ..timeutils import parse_client_datetime

events_bp = Blueprint("events", __name__)


@events_bp.route("", methods=["GET"])
@jwt_required()
def list_events():
    try:
        rows = Event.query.order_by(Event.date.asc(), Event.id.asc()).all()
    except SQLAlchemyError:
        current_app.logger.exception("[events] failed to list events")
        return jsonify({"message": "Failed to load events"}), 500

    return jsonify([e.to_dict() for e in rows]), 200


@events_bp.route("", methods=["POST"])
@coach_required
def create_event():
    data = request.get_json(silent=True) or {}

    title = (data.get("title") or "").strip()
    location = (data.get("location") or "").strip()
    raw_date = data.get("date")
    event_type = data.get("type") or "other"

    if len(title) < 3 or len(location) < 3:
        return jsonify({"message": "title and location must be at least 3 characters"}), 400

    if event_type not in EVENT_TYPES:
        return jsonify({"message": "type must be game, training or other"}), 400

    try:
        when = parse_client_datetime(raw_date)
    except (TypeError, ValueError):
        return jsonify({"message": "invalid date"}), 400

    event = Event(
        title=title,
        date=when,
        location=location,
        description=data.get("description") or "",
        type=event_type,
    )

    try:
        db.session.add(event)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("[events] failed to create event")
        return jsonify({"message": "Failed to create event"}), 500

    return jsonify(event.to_dict()), 201
