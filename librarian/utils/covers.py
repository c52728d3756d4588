# librarian/utils/covers.py
import logging
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class CoverStore:
    """Stores book covers as ``<base_dir>/<owner id>/<book id>.jpg``"""

    def __init__(self, base_dir: Path, max_height: int = 800):
        self.base_dir = Path(base_dir)
        self.max_height = max_height

    def path_for(self, owner_id: uuid.UUID, book_id: uuid.UUID) -> Path:
        return self.base_dir / str(owner_id) / f"{book_id}.jpg"

    def _process_image(self, image_data: bytes) -> bytes:
        """Convert the image to an RGB JPEG no taller than ``max_height``"""
        img = Image.open(BytesIO(image_data))

        if img.mode != 'RGB':
            img = img.convert('RGB')

        if img.height > self.max_height:
            ratio = self.max_height / img.height
            new_width = int(img.width * ratio)
            img = img.resize((new_width, self.max_height), Image.Resampling.LANCZOS)

        output = BytesIO()
        img.save(output, format='JPEG', quality=85, optimize=True)
        return output.getvalue()

    def save(self, owner_id: uuid.UUID, book_id: uuid.UUID, image_data: bytes) -> Optional[Path]:
        """Save a cover, returning its path, or None if the data is not an image"""
        try:
            processed = self._process_image(image_data)
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Ignoring invalid cover for book {book_id}: {e}")
            return None

        path = self.path_for(owner_id, book_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(processed)
        return path

    def load(self, owner_id: uuid.UUID, book_id: uuid.UUID) -> Optional[bytes]:
        path = self.path_for(owner_id, book_id)
        if not path.exists():
            return None
        return path.read_bytes()

    def exists(self, owner_id: uuid.UUID, book_id: uuid.UUID) -> bool:
        return self.path_for(owner_id, book_id).exists()
