# teamboard/routes/auth_routes.py

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, current_user, jwt_required
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from .. import db
from ..models.user import ROLES, User

auth_bp = Blueprint("auth", __name__)


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}

    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""  # do NOT strip passwords
    role = data.get("role") or "athlete"

    if not name or not email or not username or not password:
        return jsonify({"message": "name, email, username and password are required"}), 400

    if len(name) < 3 or len(username) < 3:
        return jsonify({"message": "name and username must be at least 3 characters"}), 400

    if len(password) < 6:
        return jsonify({"message": "password must be at least 6 characters"}), 400

    if role not in ROLES:
        return jsonify({"message": "role must be athlete or coach"}), 400

    if User.query.filter_by(username=username).first():
        return jsonify({"message": "username already in use"}), 400

    user = User(name=name, email=email, username=username, role=role)
    user.set_password(password)

    try:
        db.session.add(user)
        db.session.commit()

        access_token = create_access_token(identity=str(user.id))
        return jsonify({"token": access_token, "user": user.to_dict()}), 201

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception(f"Registration Error: {e}")
        return jsonify({"message": "Internal server error"}), 500


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Accepts:
      - { "username": "...", "password": "..." }
      - { "email": "...", "password": "..." }
      - { "identifier": "...", "password": "..." }  # email or username
    """
    data = request.get_json(silent=True) or {}

    identifier = (data.get("identifier") or data.get("username") or data.get("email") or "").strip()
    password = data.get("password") or ""

    if not identifier or not password:
        return jsonify({"message": "identifier and password are required"}), 400

    user = User.query.filter(
        or_(
            User.username == identifier,
            User.email == identifier.lower(),
        )
    ).first()

    if not user or not user.check_password(password):
        current_app.logger.info(f"[auth/login] rejected login for '{identifier}'")
        return jsonify({"message": "invalid credentials"}), 401

    access_token = create_access_token(identity=str(user.id))
    return jsonify({"token": access_token, "user": user.to_dict()}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify({"user": current_user.to_dict()}), 200
