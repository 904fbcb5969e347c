from pathlib import Path
from typing import Optional

from .config import settings
from .logging_utils import get_logger

logger = get_logger(__name__)


class ImageStore:
    """Recipe images on disk, one ``<recipe id>.jpg`` per recipe."""

    def __init__(self, directory: Optional[str] = None):
        self.directory = Path(directory or settings.image_dir)

    def path_for(self, recipe_id: str) -> Path:
        return self.directory / f"{recipe_id}.jpg"

    def image_path(self, recipe_id: str) -> Optional[str]:
        path = self.path_for(recipe_id)
        return str(path) if path.exists() else None

    def save(self, data: bytes, recipe_id: str) -> Optional[str]:
        """Write image bytes and return the file path, or None on failure."""
        path = self.path_for(recipe_id)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            logger.error("Failed to save image for %s: %s", recipe_id, exc)
            return None
        return str(path)

    def move(self, from_id: str, to_id: str) -> Optional[str]:
        """Hand the image of ``from_id`` over to ``to_id``.

        Any image ``to_id`` already had is replaced, or removed when
        ``from_id`` has none.
        """
        source = self.path_for(from_id)
        if not source.exists():
            self.delete(to_id)
            return None
        target = self.path_for(to_id)
        source.replace(target)
        return str(target)

    def delete(self, recipe_id: str) -> None:
        self.path_for(recipe_id).unlink(missing_ok=True)
