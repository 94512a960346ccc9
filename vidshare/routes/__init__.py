from vidshare.routes.videos import videos_bp
from vidshare.routes.comments import comments_bp
from vidshare.routes.users import users_bp

__all__ = ["videos_bp", "comments_bp", "users_bp"]
