"""Gemini generateContent envelopes.

Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``). Unknown response fields are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Parts ────────────────────────────────────────────────────────────


class InlineData(_WireModel):
    mime_type: str = Field(default="", alias="mimeType")
    data: str = ""


class Part(_WireModel):
    """One unit of content: text or inline base64 data."""

    text: str | None = None
    inline_data: InlineData | None = Field(default=None, alias="inlineData")

    @property
    def is_image(self) -> bool:
        return self.inline_data is not None and self.inline_data.mime_type.startswith("image/")


class Content(_WireModel):
    role: str | None = None
    parts: list[Part] | None = None


# ── Request ──────────────────────────────────────────────────────────


class ImageConfig(_WireModel):
    aspect_ratio: str = Field(alias="aspectRatio")
    image_size: str = Field(alias="imageSize")


class GenerationConfig(_WireModel):
    response_modalities: list[str] = Field(
        default_factory=lambda: ["TEXT", "IMAGE"], alias="responseModalities"
    )
    image_config: ImageConfig | None = Field(default=None, alias="imageConfig")


class GenerateContentRequest(_WireModel):
    contents: list[Content]
    generation_config: GenerationConfig = Field(
        default_factory=GenerationConfig, alias="generationConfig"
    )

    def to_wire(self) -> dict[str, Any]:
        """JSON body as the API expects it."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ── Response ─────────────────────────────────────────────────────────


class Candidate(_WireModel):
    content: Content | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")


class GenerateContentResponse(_WireModel):
    candidates: list[Candidate] | None = None
    prompt_feedback: dict[str, Any] | None = Field(default=None, alias="promptFeedback")
