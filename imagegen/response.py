"""Pick the generated image out of a generateContent response."""

from __future__ import annotations

import base64
import binascii

from imagegen.errors import (
    EmptyResponseError,
    NoCandidatesError,
    NoImageError,
    RefusalError,
    ResponseError,
)
from imagegen.schema import GenerateContentResponse


def extract_image(response: GenerateContentResponse) -> bytes:
    """Return the decoded bytes of the first image part of the first candidate.

    Raises a distinct ResponseError subclass for each way this can fail so
    the caller can tell "no output" apart from "refused".
    """
    if not response.candidates:
        raise NoCandidatesError(response.prompt_feedback)

    content = response.candidates[0].content
    parts = (content.parts if content is not None else None) or []
    if not parts:
        raise EmptyResponseError()

    image_part = next((p for p in parts if p.is_image), None)
    if image_part is None:
        text_part = next((p for p in parts if p.text), None)
        if text_part is not None:
            raise RefusalError(text_part.text)
        raise NoImageError()

    try:
        return base64.b64decode(image_part.inline_data.data)
    except (binascii.Error, ValueError) as e:
        raise ResponseError(f"Image data could not be decoded: {e}") from e
