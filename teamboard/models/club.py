# teamboard/models/club.py
from datetime import datetime
from .. import db

EVENT_TYPES = ("game", "training", "other")


# -----------------------------
# Calendar
# -----------------------------
class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(150), nullable=False)
    date = db.Column(db.DateTime, nullable=False, index=True)
    location = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    type = db.Column(
        db.Enum(*EVENT_TYPES, name="event_type_enum"),
        nullable=False,
        default="other",
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat() if self.date else None,
            "location": self.location,
            "description": self.description,
            "type": self.type,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


# -----------------------------
# News feed
# -----------------------------
class News(db.Model):
    __tablename__ = "news"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(255))
    is_public = db.Column(db.Boolean, nullable=False, default=False)
    author_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    author = db.relationship("User", backref="authored_news")

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "imageUrl": self.image_url,
            "isPublic": bool(self.is_public),
            "authorId": self.author_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
