from datetime import datetime
from flask_login import UserMixin
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

DEFAULT_DISPLAY_NAME = "Anonymous"


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    subject_id = db.Column(db.String(255), unique=True, nullable=False, index=True)  # Identity provider "sub" claim
    display_name = db.Column(db.String(255), nullable=True, default=DEFAULT_DISPLAY_NAME)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def has_default_name(self) -> bool:
        return self.display_name == DEFAULT_DISPLAY_NAME

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "subjectId": self.subject_id,
            "displayName": self.display_name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class Video(db.Model):
    __tablename__ = "videos"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    thumbnail_url = db.Column(db.String(1024), nullable=True)
    video_url = db.Column(db.String(1024), nullable=False)
    view_count = db.Column(db.Integer, default=0, nullable=False)
    upload_date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    uploader_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    uploader = db.relationship("User", backref=db.backref("videos", lazy=True))
    comments = db.relationship(
        "Comment",
        back_populates="video",
        cascade="all, delete-orphan",
        order_by=lambda: [Comment.likes.desc(), Comment.dislikes.asc(), Comment.id.asc()],
    )
    favorites = db.relationship("Favorite", back_populates="video", cascade="all, delete-orphan")

    def increment_views(self):
        # Incremented in SQL, not in Python
        self.view_count = Video.view_count + 1

    def to_dict(self, is_favorite: bool = False, include_comments: bool = True) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "thumbnail": self.thumbnail_url,
            "videoUrl": self.video_url,
            "views": self.view_count,
            "uploadDate": self.upload_date.isoformat() if self.upload_date else None,
            "uploader": {
                "id": self.uploader.id,
                "displayName": self.uploader.display_name,
            } if self.uploader else None,
            "isFavorite": is_favorite,
        }
        if include_comments:
            data["comments"] = [comment.to_dict() for comment in self.comments]
        return data


class Comment(db.Model):
    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    likes = db.Column(db.Integer, default=0, nullable=False)
    dislikes = db.Column(db.Integer, default=0, nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    video_id = db.Column(db.Integer, db.ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    author = db.relationship("User", backref=db.backref("comments", lazy=True))
    video = db.relationship("Video", back_populates="comments")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "likes": self.likes,
            "dislikes": self.dislikes,
            "videoId": self.video_id,
            "userId": self.user_id,
            "displayName": self.author.display_name if self.author else None,
            "authorSubjectId": self.author.subject_id if self.author else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Favorite(db.Model):
    __tablename__ = "favorites"
    __table_args__ = (
        db.UniqueConstraint("user_id", "video_id", name="unique_user_video_favorite"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    video_id = db.Column(db.Integer, db.ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", backref=db.backref("favorites", lazy=True))
    video = db.relationship("Video", back_populates="favorites")
