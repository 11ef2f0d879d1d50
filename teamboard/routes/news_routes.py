# teamboard/routes/news_routes.py
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..decorators import coach_required
from ..models.club import News

news_bp = Blueprint("news", __name__)


@news_bp.route("", methods=["GET"])
@jwt_required()
def list_news():
    """News the current user may read: public items and their own."""
    try:
        rows = (
            News.query.filter(
                or_(News.is_public.is_(True), News.author_id == current_user.id)
            )
            .order_by(News.created_at.desc(), News.id.desc())
            .all()
        )
    except SQLAlchemyError:
        current_app.logger.exception("[news] failed to list news")
        return jsonify({"message": "Failed to load news"}), 500

    return jsonify([n.to_dict() for n in rows]), 200


@news_bp.route("/public", methods=["GET"])
def public_news():
    try:
        rows = (
            News.query.filter(News.is_public.is_(True))
            .order_by(News.created_at.desc(), News.id.desc())
            .all()
        )
    except SQLAlchemyError:
        current_app.logger.exception("[news] failed to list public news")
        return jsonify({"message": "Failed to load public news"}), 500

    return jsonify([n.to_dict() for n in rows]), 200


@news_bp.route("", methods=["POST"])
@coach_required
def create_news():
    data = request.get_json(silent=True) or {}

    title = (data.get("title") or "").strip()
    content = (data.get("content") or "").strip()

    if len(title) < 3:
        return jsonify({"message": "title must be at least 3 characters"}), 400
    if len(content) < 10:
        return jsonify({"message": "content must be at least 10 characters"}), 400

    item = News(
        title=title,
        content=content,
        image_url=data.get("imageUrl") or None,
        is_public=bool(data.get("isPublic", False)),
        author_id=current_user.id,
    )

    try:
        db.session.add(item)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("[news] failed to create news")
        return jsonify({"message": "Failed to create news"}), 500

    return jsonify(item.to_dict()), 201
