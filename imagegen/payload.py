"""Request assembly for one generateContent call."""

from __future__ import annotations

from imagegen.inputs import ImagePayload, normalize_size
from imagegen.schema import (
    Content,
    GenerateContentRequest,
    GenerationConfig,
    ImageConfig,
    InlineData,
    Part,
)

# imageConfig is rejected by this model family; matched by substring.
LEGACY_MODEL_MARKER = "gemini-2.0-flash-exp"

RESPONSE_MODALITIES = ["TEXT", "IMAGE"]


def supports_image_config(model: str) -> bool:
    return LEGACY_MODEL_MARKER not in model


def build_payload(
    prompt: str,
    image: ImagePayload | None,
    model: str,
    size: str,
    aspect_ratio: str,
) -> GenerateContentRequest:
    """Build the request: optional image part first, prompt text last."""
    parts: list[Part] = []
    if image is not None:
        parts.append(
            Part(inline_data=InlineData(mime_type=image.mime_type, data=image.to_base64()))
        )
    parts.append(Part(text=prompt))

    config = GenerationConfig(response_modalities=list(RESPONSE_MODALITIES))
    if supports_image_config(model):
        config.image_config = ImageConfig(
            aspect_ratio=aspect_ratio,
            image_size=normalize_size(size),
        )

    return GenerateContentRequest(contents=[Content(parts=parts)], generation_config=config)
