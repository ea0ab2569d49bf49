from pydantic import BaseModel, Field
from typing import Optional, Literal


class Settings(BaseModel):
    listen_addr: str = "localhost"
    port: int = 8080
    google_sheet_id: str = ""
    sheet_name: str = ""
    cache_ttl_seconds: float = Field(default=5.0, ge=0)
    provider_timeout_seconds: float = Field(default=10.0, gt=0)
    google_sheets_api_key: Optional[str] = None
    google_token_file: str = "token.json"
    log_level: str = "INFO"
    health_path: Optional[str] = None


class RedirectOutcome(BaseModel):
    status: Literal["found", "not_found", "error"]
    location: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def found(cls, location: str) -> "RedirectOutcome":
        return cls(status="found", location=location)

    @classmethod
    def not_found(cls) -> "RedirectOutcome":
        return cls(status="not_found")

    @classmethod
    def error(cls, detail: str) -> "RedirectOutcome":
        return cls(status="error", detail=detail)


class HealthResponse(BaseModel):
    status: str
    shortcuts: int
    last_refresh_age: Optional[float] = None
