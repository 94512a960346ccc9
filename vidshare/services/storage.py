import logging
import uuid
from pathlib import Path

from flask import url_for
from werkzeug.utils import secure_filename

from vidshare.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {
    "videos": {"mp4", "mkv", "webm", "mov"},
    "thumbnails": {"jpg", "jpeg", "png", "webp"},
}


def allowed_file(filename: str, kind: str) -> bool:
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS[kind]


class MediaStorage:
    """Local-disk media store. Only the returned URL is persisted."""

    def __init__(self, app=None):
        self.root = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.root = Path(app.config["MEDIA_FOLDER"])
        for kind in ALLOWED_EXTENSIONS:
            (self.root / kind).mkdir(parents=True, exist_ok=True)

    def folder(self, kind: str) -> Path:
        if kind not in ALLOWED_EXTENSIONS:
            raise ValidationError(f"Unknown media kind '{kind}'")
        return self.root / kind

    def save(self, file, kind: str) -> str:
        """Store an uploaded file and return its public URL."""
        if file is None or not file.filename:
            raise ValidationError("No file selected")

        if not allowed_file(file.filename, kind):
            allowed = ", ".join(sorted(ALLOWED_EXTENSIONS[kind]))
            raise ValidationError(f"Unsupported file type, accepted: {allowed}")

        extension = file.filename.rsplit('.', 1)[1].lower()
        stored_name = secure_filename(f"{uuid.uuid4().hex}.{extension}")
        destination = self.folder(kind) / stored_name
        file.save(destination)
        logger.info(f"Stored {kind[:-1]} '{file.filename}' as {destination}")

        return url_for('videos.serve_media', kind=kind, filename=stored_name, _external=True)

    def delete(self, url: str | None, kind: str) -> None:
        """Remove a stored file given its public URL, ignoring unknown files."""
        if not url:
            return
        path = self.folder(kind) / secure_filename(url.rsplit('/', 1)[-1])
        if path.exists():
            path.unlink()
            logger.info(f"Deleted file: {path}")


media_storage = MediaStorage()
