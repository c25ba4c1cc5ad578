import base64

from .multipart_decoder import DecodedRequest, ImagePart

TEMPERATURE = 0.7


def to_inline_data(image: ImagePart) -> dict:
    return {
        "inline_data": {
            "mime_type": image.media_type,
            "data": base64.b64encode(image.data).decode("ascii"),
        }
    }


def build_generate_content_request(request: DecodedRequest) -> dict:
    """
    Prompt text first, then the subject image, then the garment image.
    """
    parts = [
        {"text": (request.prompt or "").strip()},
        to_inline_data(request.subject_image),
        to_inline_data(request.garment_image),
    ]
    return {
        "contents": [{"parts": parts}],
        "generationConfig": {"temperature": TEMPERATURE},
    }
