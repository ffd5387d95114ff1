import io
import logging
from pathlib import Path

from PIL import Image

from room_designer.config import MAX_THUMBNAIL_SIZE

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ['jpg', 'jpeg', 'png', 'webp']


def cleanup_image_files(directory: Path, file_id: str):
    """Remove all image files for a given ID from a directory."""
    for ext in IMAGE_EXTENSIONS:
        (directory / f"{file_id}.{ext}").unlink(missing_ok=True)


def cleanup_entity_files(file_id: str, image_dirs: list, other_files: list = None):
    """Clean up all files associated with an entity.

    Args:
        file_id: The entity ID used in filenames
        image_dirs: List of Path directories containing image files
        other_files: List of specific Path objects to delete
    """
    for directory in image_dirs:
        cleanup_image_files(directory, file_id)
    if other_files:
        for path in other_files:
            path.unlink(missing_ok=True)


def resize_thumbnail(image_bytes: bytes, max_size: int = MAX_THUMBNAIL_SIZE) -> bytes:
    """Downscale an image so neither side exceeds max_size. Output is PNG."""
    img = Image.open(io.BytesIO(image_bytes))
    w, h = img.size

    if max(w, h) > max_size:
        if w > h:
            new_w = max_size
            new_h = max(1, int(h * max_size / w))
        else:
            new_h = max_size
            new_w = max(1, int(w * max_size / h))

        logger.info(f"Resizing thumbnail from {w}x{h} to {new_w}x{new_h}")
        img = img.resize((new_w, new_h), Image.LANCZOS)

    buffer = io.BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()
