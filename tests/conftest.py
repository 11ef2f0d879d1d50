from __future__ import annotations
from datetime import datetime

import pytest
from flask_jwt_extended import create_access_token

from config import TestingConfig
from teamboard import create_app, db
from teamboard.models import CompletedExercise, Exercise, Training, User, UserTraining


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Factory: make_user("ana", role="coach") -> committed User."""
    def _mk(username: str, role: str = "athlete", name: str | None = None, notifications: int = 0) -> User:
        user = User(
            name=name or username.capitalize(),
            username=username,
            email=f"{username}@example.com",
            role=role,
            notifications=notifications,
        )
        user.set_password("secret123")
        db.session.add(user)
        db.session.commit()
        return user
    return _mk


@pytest.fixture
def auth_headers(app):
    def _mk(user: User) -> dict:
        token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}"}
    return _mk


@pytest.fixture
def make_training(app):
    """Factory: training scheduled at `when`, assigned to `users`, with n exercises."""
    def _mk(name: str, when: datetime | None, users=(), exercises: int = 2) -> Training:
        training = Training(
            name=name,
            description=f"{name} description",
            focus="Conditioning",
            scheduled_date=when,
        )
        db.session.add(training)
        db.session.flush()
        for i in range(exercises):
            db.session.add(
                Exercise(
                    training_id=training.id,
                    name=f"{name} drill {i + 1}",
                    description="drill",
                    sets=3,
                    reps=10,
                )
            )
        for user in users:
            db.session.add(UserTraining(user_id=user.id, training_id=training.id))
        db.session.commit()
        return training
    return _mk


@pytest.fixture
def log_attempt(app):
    """Factory: append a CompletedExercise row with an explicit created_at."""
    def _mk(user: User, exercise: Exercise, created_at: datetime, completion: int = 80, accuracy: int = 70, weight=None) -> CompletedExercise:
        row = CompletedExercise(
            user_id=user.id,
            exercise_id=exercise.id,
            sets=3,
            reps=10,
            weight=weight,
            completion=completion,
            effort="Moderado",
            accuracy=accuracy,
            created_at=created_at,
        )
        db.session.add(row)
        db.session.commit()
        return row
    return _mk
