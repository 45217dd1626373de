"""image-gen — Gemini image generation for coding assistants.

Entry point: imagegen/generate.py (``image-gen`` console script)
Request:     imagegen/payload.py + imagegen/schema.py (pydantic envelopes)
Transport:   imagegen/clients/gemini.py (httpx, one call, no retry)
"""

from imagegen.errors import (
    APIError,
    ConfigError,
    EmptyResponseError,
    ImageGenError,
    InputValidationError,
    NoCandidatesError,
    NoImageError,
    OutputError,
    RefusalError,
    ResponseError,
    TransportError,
)
from imagegen.prompt import PromptKind, PromptSource

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "ConfigError",
    "EmptyResponseError",
    "ImageGenError",
    "InputValidationError",
    "NoCandidatesError",
    "NoImageError",
    "OutputError",
    "PromptKind",
    "PromptSource",
    "RefusalError",
    "ResponseError",
    "TransportError",
]
