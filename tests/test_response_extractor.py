import base64
import json
import os

import pytest

from tryon.services.response_extractor import (
    ExtractionFailure,
    InlineImage,
    extract_inline_image,
    first_present,
)

PIXEL = base64.b64encode(b"\x89PNG\r\n\x1a\nfake-pixel").decode()


def image_part(inline_key="inlineData", mime_key="mimeType", mime="image/jpeg", data=PIXEL):
    return {inline_key: {mime_key: mime, "data": data}}


def response(*candidates, **extra) -> str:
    return json.dumps({"candidates": list(candidates), **extra})


def test_empty_candidates_reports_missing_candidates():
    result = extract_inline_image(response())
    assert result == ExtractionFailure(reason="No candidates array or empty.")


def test_absent_candidates_reports_missing_candidates():
    assert extract_inline_image("{}") == ExtractionFailure(reason="No candidates array or empty.")


def test_blocked_prompt_reports_block_reason():
    raw = json.dumps({"promptFeedback": {"blockReason": "SAFETY"}})
    assert extract_inline_image(raw) == ExtractionFailure(reason="Blocked: SAFETY")


@pytest.mark.parametrize(
    "inline_key, mime_key",
    [("inlineData", "mimeType"), ("inline_data", "mime_type"), ("inline_data", "mimeType")],
)
def test_inline_image_found_under_either_spelling(inline_key, mime_key):
    raw = response({"content": {"parts": [{"text": "here"}, image_part(inline_key, mime_key)]}})

    result = extract_inline_image(raw)

    assert isinstance(result, InlineImage)
    assert result.media_type == "image/jpeg"
    assert result.data == b"\x89PNG\r\n\x1a\nfake-pixel"


def test_scan_continues_past_candidates_without_parts():
    raw = response(
        {"finishReason": "OTHER"},
        {"content": {"parts": [image_part(mime="image/webp")]}},
    )
    result = extract_inline_image(raw)
    assert result == InlineImage(data=base64.b64decode(PIXEL), media_type="image/webp")


def test_first_image_wins():
    first = base64.b64encode(b"first").decode()
    second = base64.b64encode(b"second").decode()
    raw = response(
        {"content": {"parts": [image_part(data=first), image_part(data=second)]}},
        {"content": {"parts": [image_part(data=second)]}},
    )
    assert extract_inline_image(raw).data == b"first"


def test_empty_payload_is_skipped():
    raw = response({"content": {"parts": [image_part(data=""), image_part(mime="image/gif")]}})
    assert extract_inline_image(raw).media_type == "image/gif"


def test_missing_mime_type_is_left_unset():
    raw = response({"content": {"parts": [{"inline_data": {"data": PIXEL}}]}})
    assert extract_inline_image(raw).media_type is None


def test_no_image_reports_first_finish_reason():
    raw = response(
        {"finishReason": "IMAGE_SAFETY", "content": {"parts": [{"text": "sorry"}]}},
        {"finishReason": "STOP"},
    )
    assert extract_inline_image(raw) == ExtractionFailure(reason="finishReason=IMAGE_SAFETY")


def test_no_image_without_finish_reason_reports_missing_inline_data():
    raw = response({"content": {"parts": [{"text": "only text"}]}})
    assert extract_inline_image(raw) == ExtractionFailure(reason="No inline_data part found.")


def test_invalid_json_propagates():
    with pytest.raises(json.JSONDecodeError):
        extract_inline_image("<html>oops</html>")


def test_arbitrary_bytes_survive_the_decode_step():
    payload = os.urandom(512)
    raw = response({"content": {"parts": [image_part(data=base64.b64encode(payload).decode())]}})
    assert extract_inline_image(raw).data == payload


def test_first_present_prefers_earlier_keys():
    node = {"inline_data": 1, "inlineData": 2}
    assert first_present(node, "inline_data", "inlineData") == 1
    assert first_present(node, "inlineData", "inline_data") == 2
    assert first_present(node, "missing") is None
    assert first_present(["not", "an", "object"], "inline_data") is None


def test_non_string_mime_type_is_left_unset():
    raw = response({"content": {"parts": [{"inlineData": {"mimeType": 42, "data": PIXEL}}]}})
    result = extract_inline_image(raw)
    assert result.media_type is None
    assert result.data == base64.b64decode(PIXEL)
