"""Input image checks and size labels.

An --input-image must pass three checks, in order, before anything is
sent: allowed extension, file exists, leading bytes match the signature
for that extension. Any failure stops the run.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path

from imagegen.errors import InputValidationError

ALLOWED_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif")

IMAGE_MAGIC_BYTES: dict[str, bytes] = {
    ".png": b"\x89PNG",
    ".jpg": b"\xff\xd8\xff",
    ".jpeg": b"\xff\xd8\xff",
    ".webp": b"RIFF",  # container only, WEBP tag sits at offset 8
    ".gif": b"GIF",
}

MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
}
DEFAULT_MIME_TYPE = "image/png"

_SIZE_LABELS = {
    "1K": "1K",
    "1024": "1K",
    "2K": "2K",
    "2048": "2K",
    "4K": "4K",
    "4096": "4K",
}
DEFAULT_SIZE_LABEL = "2K"

_HEADER_LEN = 8


@dataclass(frozen=True)
class ImagePayload:
    """Raw bytes of a validated input image plus its MIME type."""

    data: bytes
    mime_type: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


def mime_type_for(path: str | Path) -> str:
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


def has_image_signature(header: bytes, extension: str) -> bool:
    """True if header starts with the magic bytes expected for extension."""
    signature = IMAGE_MAGIC_BYTES.get(extension.lower())
    return signature is not None and header.startswith(signature)


def validate_input_image(path: str | Path) -> ImagePayload:
    """Validate an input image and read it into an ImagePayload."""
    path = Path(path)
    ext = path.suffix.lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise InputValidationError(
            f"--input-image must be an image file ({', '.join(ALLOWED_IMAGE_EXTENSIONS)}). "
            f"Got: {ext or 'no extension'}"
        )

    if not path.is_file():
        raise InputValidationError(f"Input image not found: {path}")

    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputValidationError(f"Could not read input image {path}: {e.strerror or e}") from e
    if not has_image_signature(data[:_HEADER_LEN], ext):
        raise InputValidationError(
            "--input-image does not appear to be a valid image file (magic bytes mismatch)."
        )

    return ImagePayload(data=data, mime_type=mime_type_for(path))


def normalize_size(size: str | None) -> str:
    """Map a size label or pixel count to 1K/2K/4K. Unknown values give 2K."""
    if size is None:
        return DEFAULT_SIZE_LABEL
    return _SIZE_LABELS.get(str(size).strip().upper(), DEFAULT_SIZE_LABEL)
