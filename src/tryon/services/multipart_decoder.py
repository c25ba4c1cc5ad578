from __future__ import annotations

import codecs
import dataclasses

from pydantic.dataclasses import dataclass
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header
from starlette.requests import Request

from .errors import (
    MalformedMultipart,
    MissingBoundary,
    MissingContentType,
    MissingRequiredImage,
    UnsupportedMediaType,
)

MULTIPART_FORM_DATA = b"multipart/form-data"
DEFAULT_PART_MEDIA_TYPE = "application/octet-stream"

SUBJECT_IMAGE_FIELD = "userimage"
GARMENT_IMAGE_FIELD = "clothingimage"
PROMPT_FIELD = "prompt"

# UTF-32 LE has to be tried before UTF-16 LE, its mark starts with the same bytes
BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


@dataclass(frozen=True)
class ImagePart:
    data: bytes
    media_type: str


@dataclass(frozen=True)
class DecodedRequest:
    subject_image: ImagePart  # userImage
    garment_image: ImagePart  # clothingImage
    prompt: str | None = None


def decode_text(data: bytes) -> str:
    for mark, encoding in BYTE_ORDER_MARKS:
        if data.startswith(mark):
            return data[len(mark):].decode(encoding, errors="replace")
    return data.decode("utf-8", errors="replace")


def boundary_of(content_type: str | None) -> bytes:
    if content_type is None:
        raise MissingContentType()
    media_type, params = parse_options_header(content_type)
    if media_type.lower() != MULTIPART_FORM_DATA:
        raise UnsupportedMediaType()
    boundary = next(
        (value for name, value in params.items() if name.lower() == b"boundary"), b""
    )
    if not boundary.strip():
        raise MissingBoundary()
    return boundary


@dataclasses.dataclass
class Section:
    headers: dict[str, str] = dataclasses.field(default_factory=dict)
    body: bytearray = dataclasses.field(default_factory=bytearray)

    @property
    def disposition(self) -> tuple[bytes, dict[bytes, bytes]]:
        return parse_options_header(self.headers.get("content-disposition"))


class SectionReader:
    """
    Collects the raw headers and body of every multipart section \
    from MultipartParser callbacks.
    """

    def __init__(self) -> None:
        self.sections: list[Section] = []
        self._header_field = bytearray()
        self._header_value = bytearray()

    def callbacks(self) -> dict:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
        }

    def on_part_begin(self) -> None:
        self.sections.append(Section())

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self.sections[-1].body += data[start:end]

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        name = self._header_field.decode("latin-1").strip().lower()
        self.sections[-1].headers[name] = self._header_value.decode("latin-1").strip()
        self._header_field.clear()
        self._header_value.clear()


@dataclasses.dataclass
class TryOnForm:
    prompt: str | None = None
    subject_image: ImagePart | None = None
    garment_image: ImagePart | None = None

    def accept(self, section: Section) -> None:
        disposition, options = section.disposition
        if disposition.lower() != b"form-data":
            return
        field = options.get(b"name", b"").decode("utf-8", errors="replace").lower()

        if b"filename" in options or b"filename*" in options:
            if field not in (SUBJECT_IMAGE_FIELD, GARMENT_IMAGE_FIELD):
                return
            part = ImagePart(
                data=bytes(section.body),
                media_type=section.headers.get("content-type") or DEFAULT_PART_MEDIA_TYPE,
            )
            if field == SUBJECT_IMAGE_FIELD:
                self.subject_image = part
            else:
                self.garment_image = part
        elif field == PROMPT_FIELD:
            self.prompt = decode_text(bytes(section.body))

    def resolve(self) -> DecodedRequest:
        if self.subject_image is None or self.garment_image is None:
            raise MissingRequiredImage()
        return DecodedRequest(
            subject_image=self.subject_image,
            garment_image=self.garment_image,
            prompt=self.prompt,
        )


async def decode_try_on_form(request: Request) -> DecodedRequest:
    boundary = boundary_of(request.headers.get("content-type"))

    reader = SectionReader()
    parser = MultipartParser(boundary, reader.callbacks())
    try:
        async for chunk in request.stream():
            parser.write(chunk)
        parser.finalize()
    except MultipartParseError as e:
        raise MalformedMultipart() from e

    form = TryOnForm()
    for section in reader.sections:
        form.accept(section)
    return form.resolve()
