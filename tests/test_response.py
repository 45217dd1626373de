"""Tests for response interpretation."""

from __future__ import annotations

import pytest

from imagegen.errors import (
    EmptyResponseError,
    NoCandidatesError,
    NoImageError,
    RefusalError,
    ResponseError,
)
from imagegen.response import extract_image
from imagegen.schema import GenerateContentResponse
from tests.mocks.mock_gemini import (
    EMPTY_CANDIDATES_RESPONSE,
    IMAGE_BYTES,
    IMAGE_RESPONSE,
    NO_CANDIDATES_RESPONSE,
    NO_CONTENT_RESPONSE,
    NO_PARTS_RESPONSE,
    NON_IMAGE_RESPONSE,
    REFUSAL_RESPONSE,
    TEXT_THEN_IMAGE_RESPONSE,
)


def _parse(data: dict) -> GenerateContentResponse:
    return GenerateContentResponse.model_validate(data)


class TestImageFound:
    def test_single_image_part(self):
        assert extract_image(_parse(IMAGE_RESPONSE)) == IMAGE_BYTES

    def test_text_before_image_is_skipped(self):
        assert extract_image(_parse(TEXT_THEN_IMAGE_RESPONSE)) == IMAGE_BYTES

    def test_only_first_candidate_is_used(self):
        data = {
            "candidates": [
                {"content": {"parts": [{"text": "refused"}]}},
                IMAGE_RESPONSE["candidates"][0],
            ]
        }
        with pytest.raises(RefusalError):
            extract_image(_parse(data))

    def test_first_image_part_wins(self):
        data = {
            "candidates": [
                {
                    "content": {
                        "parts": [
                            {"inlineData": {"mimeType": "image/png", "data": "AAA="}},
                            {"inlineData": {"mimeType": "image/png", "data": "AQID"}},
                        ]
                    }
                }
            ]
        }
        assert extract_image(_parse(data)) == b"\x00\x00"


class TestFailures:
    def test_no_candidates_key(self):
        with pytest.raises(NoCandidatesError, match="No candidates") as exc:
            extract_image(_parse(NO_CANDIDATES_RESPONSE))
        assert exc.value.prompt_feedback == {"blockReason": "SAFETY"}
        assert "blockReason" in str(exc.value)

    def test_empty_candidates_list(self):
        with pytest.raises(NoCandidatesError) as exc:
            extract_image(_parse(EMPTY_CANDIDATES_RESPONSE))
        assert "Prompt feedback" not in str(exc.value)

    def test_no_parts(self):
        with pytest.raises(EmptyResponseError, match="no parts"):
            extract_image(_parse(NO_PARTS_RESPONSE))

    def test_no_content(self):
        with pytest.raises(EmptyResponseError):
            extract_image(_parse(NO_CONTENT_RESPONSE))

    def test_text_only_is_a_refusal(self):
        with pytest.raises(RefusalError) as exc:
            extract_image(_parse(REFUSAL_RESPONSE))
        assert exc.value.text == "I can't create images of real people."
        assert "text instead of an image" in str(exc.value)

    def test_non_image_inline_data(self):
        with pytest.raises(NoImageError, match="No image data"):
            extract_image(_parse(NON_IMAGE_RESPONSE))

    def test_undecodable_base64(self):
        data = {
            "candidates": [
                {"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": "A"}}]}}
            ]
        }
        with pytest.raises(ResponseError, match="could not be decoded"):
            extract_image(_parse(data))

    def test_failures_are_distinguishable(self):
        kinds = {
            type(e)
            for e in _collect_errors(
                [NO_CANDIDATES_RESPONSE, NO_PARTS_RESPONSE, REFUSAL_RESPONSE, NON_IMAGE_RESPONSE]
            )
        }
        assert kinds == {NoCandidatesError, EmptyResponseError, RefusalError, NoImageError}


def _collect_errors(bodies: list[dict]) -> list[ResponseError]:
    errors = []
    for body in bodies:
        try:
            extract_image(_parse(body))
        except ResponseError as e:
            errors.append(e)
    return errors
