import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from injector import Binder, Injector

from tryon.module import ProductionModule, wire
from tryon.services.generation_client import GenerationClient
from tryon.services.settings import GenerationSettings

BOUNDARY = "----tryon-test-boundary"


class FakeGenerationClient:
    def __init__(self) -> None:
        self.payloads: list[dict] = []
        self.response = '{"candidates": []}'
        self.error: Exception | None = None

    def generate_content(self, payload: dict) -> str:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.response


def encode_multipart(*sections: tuple[str, str | None, str | None, bytes]) -> bytes:
    """
    Each section is (name, filename, content_type, body); a None filename \
    makes it a text field.
    """
    chunks = []
    for name, filename, content_type, body in sections:
        disposition = f'form-data; name="{name}"'
        if filename is not None:
            disposition += f'; filename="{filename}"'
        head = f"--{BOUNDARY}\r\nContent-Disposition: {disposition}\r\n"
        if content_type is not None:
            head += f"Content-Type: {content_type}\r\n"
        chunks.append(head.encode() + b"\r\n" + body + b"\r\n")
    chunks.append(f"--{BOUNDARY}--\r\n".encode())
    return b"".join(chunks)


@pytest.fixture
def multipart():
    return encode_multipart


@pytest.fixture
def fake_client():
    return FakeGenerationClient()


@pytest.fixture
def settings():
    return GenerationSettings(api_key="test-key", model="test-model")


@pytest.fixture
def injector(fake_client, settings):
    def wire_test(binder: Binder):
        binder.bind(GenerationClient, to=fake_client)  # type: ignore
        binder.bind(GenerationSettings, to=settings)

    return Injector([wire, ProductionModule, wire_test])


@pytest.fixture
def client(injector):
    return TestClient(injector.get(FastAPI))
