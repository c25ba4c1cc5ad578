import base64
import json
from typing import Any

from pydantic.dataclasses import dataclass

INLINE_DATA_KEYS = ("inline_data", "inlineData")
MIME_TYPE_KEYS = ("mime_type", "mimeType")
DATA_KEYS = ("data",)

NO_CANDIDATES = "No candidates array or empty."
NO_INLINE_DATA = "No inline_data part found."


@dataclass(frozen=True)
class InlineImage:
    data: bytes
    media_type: str | None = None


@dataclass(frozen=True)
class ExtractionFailure:
    reason: str


def first_present(node: Any, *keys: str) -> Any:
    """
    Returns the value under the first of `keys` present in `node`, \
    or None when `node` is not a JSON object or carries none of them.
    """
    if not isinstance(node, dict):
        return None
    for key in keys:
        if key in node:
            return node[key]
    return None


def extract_inline_image(raw: str) -> InlineImage | ExtractionFailure:
    root = json.loads(raw)

    candidates = first_present(root, "candidates")
    if not isinstance(candidates, list) or not candidates:
        block_reason = first_present(first_present(root, "promptFeedback"), "blockReason")
        if block_reason is not None:
            return ExtractionFailure(reason=f"Blocked: {block_reason}")
        return ExtractionFailure(reason=NO_CANDIDATES)

    reason: str | None = None
    for candidate in candidates:
        finish_reason = first_present(candidate, "finishReason")
        if isinstance(finish_reason, str) and reason is None:
            reason = f"finishReason={finish_reason}"

        parts = first_present(first_present(candidate, "content"), "parts")
        if not isinstance(parts, list):
            continue

        for part in parts:
            inline_data = first_present(part, *INLINE_DATA_KEYS)
            payload = first_present(inline_data, *DATA_KEYS)
            if isinstance(payload, str) and payload:
                media_type = first_present(inline_data, *MIME_TYPE_KEYS)
                return InlineImage(
                    data=base64.b64decode(payload),
                    media_type=media_type if isinstance(media_type, str) else None,
                )

    return ExtractionFailure(reason=reason or NO_INLINE_DATA)
