"""
seed_demo_data.py

Populates an empty database with a demo club:
1) One coach and three athletes (password = username + "123").
2) Two trainings scheduled from tomorrow, each assigned to every athlete.
3) Upcoming games / training sessions on the calendar.
4) A few news items, public and coach-only.

Run from the repository root:

    DATABASE_URL=sqlite:///teamboard.db python script/seed_demo_data.py

Does nothing when users already exist.
"""

from datetime import datetime, timedelta

from teamboard import create_app, db
from teamboard.models import Event, Exercise, News, Training, User, UserProfile, UserTraining

ATHLETES = [
    {"name": "Marcus Silva", "username": "marcus", "position": "Forward", "height": "185", "weight": "80"},
    {"name": "Pedro Oliveira", "username": "pedro", "position": "Center", "height": "198", "weight": "95"},
    {"name": "João Santos", "username": "joao", "position": "Guard", "height": "180", "weight": "75"},
]

TRAININGS = [
    {
        "name": "Shooting session",
        "description": "Shooting technique and conditioning work.",
        "focus": "Shooting and conditioning",
        "days_ahead": 1,
        "exercises": [
            {"name": "Three-point shots", "description": "Shots from five spots around the arc", "sets": 5, "reps": 10, "category": "Essencial"},
            {"name": "Dribble and finish", "description": "Drive to the basket finishing with a layup", "sets": 4, "reps": 8, "category": "Essencial"},
            {"name": "Interval running", "description": "Sprints alternated with light jogging", "sets": 6, "reps": 1, "category": "Condicionamento"},
        ],
    },
    {
        "name": "Passing session",
        "description": "Passing accuracy and off-ball movement.",
        "focus": "Passing and movement",
        "days_ahead": 3,
        "exercises": [
            {"name": "Chest passes", "description": "Chest passes in pairs", "sets": 3, "reps": 20, "category": "Essencial"},
            {"name": "Bounce passes", "description": "Bounce passes in pairs", "sets": 3, "reps": 20, "category": "Essencial"},
            {"name": "Passing on the move", "description": "Passes while running the full court", "sets": 4, "reps": 10, "category": "Avançado"},
        ],
    },
]

EVENTS = [
    {"title": "Game vs Rivals FC", "days_ahead": 3, "location": "Central Gym", "type": "game"},
    {"title": "Tactical practice", "days_ahead": 5, "location": "Training Center", "type": "training"},
    {"title": "Friendly match", "days_ahead": 10, "location": "Municipal Arena", "type": "game"},
]

NEWS = [
    {"title": "Training intensifies for the playoffs", "content": "Extra sessions start next week ahead of the playoffs.", "is_public": True},
    {"title": "New uniforms for the season", "content": "The new uniforms arrive before the first home game.", "is_public": True},
    {"title": "Lineup notes for the coaching staff", "content": "Rotation changes to discuss before Saturday's game.", "is_public": False},
]


def seed() -> None:
    if User.query.first() is not None:
        print("Database already has users, skipping seed.")
        return

    now = datetime.utcnow()

    coach = User(name="Carlos Silva", username="coach", email="coach@teamboard.local", role="coach", notifications=5)
    coach.set_password("coach123")
    db.session.add(coach)
    db.session.flush()
    db.session.add(UserProfile(user_id=coach.id, position="Head coach"))

    athletes = []
    for data in ATHLETES:
        athlete = User(
            name=data["name"],
            username=data["username"],
            email=f"{data['username']}@teamboard.local",
            role="athlete",
        )
        athlete.set_password(data["username"] + "123")
        db.session.add(athlete)
        db.session.flush()
        db.session.add(
            UserProfile(
                user_id=athlete.id,
                position=data["position"],
                height=data["height"],
                weight=data["weight"],
            )
        )
        athletes.append(athlete)

    for data in TRAININGS:
        training = Training(
            name=data["name"],
            description=data["description"],
            focus=data["focus"],
            scheduled_date=now + timedelta(days=data["days_ahead"]),
            created_by=coach.id,
        )
        db.session.add(training)
        db.session.flush()

        for ex in data["exercises"]:
            db.session.add(Exercise(training_id=training.id, **ex))
        for athlete in athletes:
            db.session.add(UserTraining(user_id=athlete.id, training_id=training.id))

    for data in EVENTS:
        db.session.add(
            Event(
                title=data["title"],
                date=now + timedelta(days=data["days_ahead"]),
                location=data["location"],
                type=data["type"],
            )
        )

    for data in NEWS:
        db.session.add(News(author_id=coach.id, **data))

    db.session.commit()
    print(f"Seeded 1 coach, {len(athletes)} athletes, {len(TRAININGS)} trainings.")


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        seed()
