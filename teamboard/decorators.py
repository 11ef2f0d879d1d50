# teamboard/decorators.py
from functools import wraps

from flask import jsonify
from flask_jwt_extended import current_user, jwt_required


def coach_required(view_func):
    """
    Requires a valid JWT whose user has the coach role.
    Missing/invalid tokens are answered with 401 by the JWT loaders,
    authenticated non-coaches get 403.
    """
    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        if not current_user.is_coach:
            return jsonify({"message": "Access denied"}), 403
        return view_func(*args, **kwargs)
    return wrapper
