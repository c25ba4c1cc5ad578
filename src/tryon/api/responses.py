from pydantic import BaseModel


class ExtractionFailureResponse(BaseModel):
    error: str = "No image returned from Gemini."
    reason: str
    raw: str  # truncated provider body


class HealthResponse(BaseModel):
    status: str = "UP"
    model: str
    apiKeyConfigured: bool
