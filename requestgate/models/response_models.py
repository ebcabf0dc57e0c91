from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class GateResponse(BaseModel):
    """Response model for a visitor that passed the bot check."""

    message: str
    location: str | None = None


class ErrorResponse(BaseModel):
    """Error payload returned for refused or failed bot checks."""

    code: str
    message: str
