from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

from eventsystem.errors import InvalidSizeError, InvalidTypeError

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5 MiB
ALLOWED_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")
SIGNED_URL_TTL = timedelta(hours=1)


@dataclass(frozen=True, slots=True)
class ImagePolicy:
    """Acceptance rules for venue images.

    Size is checked before type, so an oversized file is always reported as
    a size problem whatever its extension.
    """

    max_bytes: int = MAX_IMAGE_BYTES
    allowed_extensions: tuple[str, ...] = ALLOWED_IMAGE_EXTENSIONS

    def extension_of(self, file_name: str) -> str:
        return os.path.splitext(file_name or "")[1].lower()

    def check(self, *, file_name: str, size: int) -> str:
        """Validate an upload and return its normalized extension."""
        if size <= 0:
            raise InvalidSizeError("An image is required.")
        if size > self.max_bytes:
            raise InvalidSizeError(
                f"The image file size must not exceed {self.max_bytes // (1024 * 1024)}MB."
            )
        extension = self.extension_of(file_name)
        if extension not in self.allowed_extensions:
            raise InvalidTypeError(
                "Only .jpg, .jpeg, .png, and .gif files are allowed."
            )
        return extension
