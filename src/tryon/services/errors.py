class ClientInputError(Exception): ...


class MissingContentType(ClientInputError):
    def __init__(self, *args: object) -> None:
        super().__init__("Missing Content-Type.", *args)


class UnsupportedMediaType(ClientInputError):
    def __init__(self, *args: object) -> None:
        super().__init__("Content-Type must be multipart/form-data.", *args)


class MissingBoundary(ClientInputError):
    def __init__(self, *args: object) -> None:
        super().__init__("Missing multipart boundary.", *args)


class MalformedMultipart(ClientInputError):
    def __init__(self, *args: object) -> None:
        super().__init__("Malformed multipart body.", *args)


class MissingRequiredImage(ClientInputError):
    def __init__(self, *args: object) -> None:
        super().__init__("Both userImage and clothingImage are required.", *args)


class UpstreamError(Exception):
    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Provider responded with status {status_code}")
        self.status_code = status_code
        self.body = body


class ExtractionError(Exception):
    def __init__(self, reason: str, raw: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.raw = raw
