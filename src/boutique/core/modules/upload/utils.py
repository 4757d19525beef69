"""Utility functions for uploaded file naming."""

import re
import secrets
import time
from pathlib import Path


def build_stored_name(filename: str, timestamp_ms: int | None = None, token: str | None = None) -> str:
    """Prefix a sanitized filename with the upload time in epoch milliseconds and a random token.

    The token keeps two uploads of the same file within one millisecond apart.
    """
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    if token is None:
        token = secrets.token_hex(4)
    return f"{timestamp_ms}-{token}-{sanitize_filename(filename)}"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe filesystem storage on Unix-like systems.

    Removes dangerous characters, prevents path traversal, and handles edge cases
    while preserving readability and file extensions.
    """
    # Remove path components to prevent traversal attacks
    filename = Path(filename).name

    # Remove leading dots to prevent hidden files
    filename = filename.lstrip(".")

    # Allow only word characters, dots, and hyphens; spaces become hyphens for URLs
    sanitized = re.sub(r"\s+", "-", filename.strip())
    sanitized = re.sub(r"[^\w.-]", "_", sanitized)
    sanitized = re.sub(r"_+", "_", sanitized)

    # Limit length to 100 characters while preserving extension
    if len(sanitized) > 100:
        parts = sanitized.rsplit(".", 1)
        if len(parts) == 2:
            name, ext = parts
            max_name_len = 96 - len(ext)
            sanitized = f"{name[:max_name_len]}.{ext}" if max_name_len > 0 else f"file.{ext}"
        else:
            sanitized = sanitized[:100]

    if not sanitized or not re.sub(r"[._-]", "", sanitized):
        sanitized = "unnamed_file"

    return sanitized
