"""Image checks for uploaded product photos."""

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from boutique.errors import ValidationError


def is_valid_image(content: bytes) -> bool:
    """Check if bytes are an image that can be opened by PIL."""
    try:
        with Image.open(BytesIO(content)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return False
    else:
        return True


def ensure_size(field: str, size: int, max_size: int) -> None:
    """Raise ValidationError if a file of 'size' bytes is over the upload limit."""
    if size > max_size:
        raise ValidationError(f"File for '{field}' exceeds {max_size // (1024 * 1024)} MB")


def ensure_image(field: str, content: bytes, max_size: int) -> None:
    """Validate an uploaded photo.

    Raises:
        ValidationError: If the file is too large or not an image
    """
    ensure_size(field, len(content), max_size)
    if not is_valid_image(content):
        raise ValidationError(f"File for '{field}' is not a valid image")
