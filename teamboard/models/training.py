# teamboard/models/training.py
from datetime import datetime
from .. import db


def _iso(dt):
    return dt.isoformat() if dt else None


class Training(db.Model):
    __tablename__ = "trainings"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    focus = db.Column(db.String(100), nullable=False)
    instructions = db.Column(db.Text)
    # template when NULL
    scheduled_date = db.Column(db.DateTime, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"))

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    creator = db.relationship("User", backref="authored_trainings")
    exercises = db.relationship(
        "Exercise", backref="training", order_by="Exercise.id"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "focus": self.focus,
            "instructions": self.instructions,
            "scheduledDate": _iso(self.scheduled_date),
            "createdBy": self.created_by,
            "createdAt": _iso(self.created_at),
        }


class Exercise(db.Model):
    __tablename__ = "exercises"

    id = db.Column(db.Integer, primary_key=True)
    # NULL -> shared library exercise
    training_id = db.Column(db.Integer, db.ForeignKey("trainings.id"))
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    instructions = db.Column(db.Text)
    sets = db.Column(db.Integer, nullable=False, default=3)
    reps = db.Column(db.Integer, nullable=False, default=10)
    category = db.Column(db.String(50), nullable=False, default="Essencial")

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def to_dict(self):
        return {
            "id": self.id,
            "trainingId": self.training_id,
            "name": self.name,
            "description": self.description,
            "instructions": self.instructions,
            "sets": self.sets,
            "reps": self.reps,
            "category": self.category,
        }


class UserTraining(db.Model):
    __tablename__ = "user_trainings"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    training_id = db.Column(
        db.Integer, db.ForeignKey("trainings.id"), nullable=False
    )
    is_completed = db.Column(db.Boolean, default=False)
    completion_date = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", backref="training_assignments")
    training = db.relationship("Training", backref="assignments")
