from typing import Protocol, runtime_checkable


@runtime_checkable
class GenerationClient(Protocol):
    def generate_content(self, payload: dict) -> str:
        """
        Sends one generateContent request and returns the raw response body. \
        Raises UpstreamError when the provider answers with a non-success status.
        """
        ...
