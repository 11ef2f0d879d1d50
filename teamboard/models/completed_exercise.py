# teamboard/models/completed_exercise.py
from datetime import datetime
from .. import db

EFFORT_LEVELS = ("Fácil", "Moderado", "Difícil")


class CompletedExercise(db.Model):
    """One logged attempt at an exercise. Rows are append-only."""

    __tablename__ = "completed_exercises"
    __table_args__ = (
        db.CheckConstraint(
            "completion >= 0 AND completion <= 100", name="ck_completion_range"
        ),
        db.CheckConstraint(
            "accuracy >= 0 AND accuracy <= 100", name="ck_accuracy_range"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    exercise_id = db.Column(
        db.Integer, db.ForeignKey("exercises.id"), nullable=False, index=True
    )
    sets = db.Column(db.Integer, nullable=False)
    reps = db.Column(db.Integer, nullable=False)
    weight = db.Column(db.Numeric(5, 2))
    completion = db.Column(db.Integer, nullable=False)
    effort = db.Column(db.String(20), nullable=False)
    accuracy = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", backref="completed_exercises")
    exercise = db.relationship("Exercise", backref="completions")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "exerciseId": self.exercise_id,
            "sets": self.sets,
            "reps": self.reps,
            "weight": float(self.weight) if self.weight is not None else None,
            "completion": self.completion,
            "effort": self.effort,
            "accuracy": self.accuracy,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
