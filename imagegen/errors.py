"""Error taxonomy for the image-gen skill.

Library code raises; only ``imagegen.generate.main`` turns these into an
exit code and a stderr diagnostic.
"""

from __future__ import annotations

import json
from typing import Any


class ImageGenError(Exception):
    """Base class for every failure the CLI reports."""

    exit_code = 1


class ConfigError(ImageGenError):
    """Missing secret or missing prompt source."""


class InputValidationError(ImageGenError):
    """Bad input image, empty prompt, missing prompt file."""


class TransportError(ImageGenError):
    """DNS / connection / timeout failure before a response arrived."""


class APIError(ImageGenError):
    """Non-2xx response from the generation endpoint."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"API returned {status_code}")
        self.status_code = status_code
        self.body = body


class OutputError(ImageGenError):
    """The generated image could not be written to --output."""


class ResponseError(ImageGenError):
    """The response arrived but holds no usable image."""


class NoCandidatesError(ResponseError):
    def __init__(self, prompt_feedback: dict[str, Any] | None = None):
        message = "No candidates returned from API."
        if prompt_feedback:
            message += "\nPrompt feedback: " + json.dumps(prompt_feedback, indent=2)
        super().__init__(message)
        self.prompt_feedback = prompt_feedback


class EmptyResponseError(ResponseError):
    def __init__(self) -> None:
        super().__init__("Response contained no parts.")


class RefusalError(ResponseError):
    """Model answered with text only (safety refusal, clarification, ...)."""

    def __init__(self, text: str):
        super().__init__(f"Model returned text instead of an image:\n{text}")
        self.text = text


class NoImageError(ResponseError):
    def __init__(self) -> None:
        super().__init__("No image data found in the response.")
