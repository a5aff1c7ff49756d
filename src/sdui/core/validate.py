"""Input validation with strong typing."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success


MAX_ID_LENGTH = 256
MAX_FIELD_LENGTH = 128


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class ScreenRequest(RequestValidator):
    """Parameters that personalise a composed screen."""

    screen_id: str = Field(min_length=1, max_length=MAX_ID_LENGTH)
    user_id: str = Field(default="", max_length=MAX_ID_LENGTH)
    route_id: str = Field(default="", max_length=MAX_ID_LENGTH)
    service_date: datetime | None = None
    device_model: str = Field(default="", max_length=MAX_FIELD_LENGTH)
    app_version: str = Field(default="", max_length=MAX_FIELD_LENGTH)
    locale: str = Field(default="", max_length=MAX_FIELD_LENGTH)

    @field_validator("screen_id")
    @classmethod
    def validate_screen_id(cls, v: str) -> str:
        """Ensure screen id is non-empty after stripping."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("screenId cannot be empty")
        return stripped

    def query_params(self) -> dict[str, str]:
        """Render as the composer's query string parameters (screen id excluded)."""
        params = {
            "userId": self.user_id,
            "routeId": self.route_id,
            "deviceModel": self.device_model,
            "appVersion": self.app_version,
            "locale": self.locale,
        }
        if self.service_date is not None:
            params["serviceDate"] = self.service_date.isoformat()
        return {k: v for k, v in params.items() if v}


def parse_rfc3339(value: str | None) -> datetime | None:
    """Parse an RFC3339 timestamp; unparsable or empty input yields None."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def validate_screen_request(**fields: Any) -> Result[ScreenRequest, ValidationResult]:
    """
    Validate composer request parameters (Result pattern version).

    Returns:
        Success with the request, or Failure describing the first problem
    """
    try:
        return Success(ScreenRequest(**fields))
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        return Failure(ValidationResult(first.get("msg", str(e)), field=location or None))
