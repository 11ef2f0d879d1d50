from .user import User, UserProfile
from .training import Training, Exercise, UserTraining
from .completed_exercise import CompletedExercise
from .club import Event, News

__all__ = [
    "User",
    "UserProfile",
    "Training",
    "Exercise",
    "UserTraining",
    "CompletedExercise",
    "Event",
    "News",
]
