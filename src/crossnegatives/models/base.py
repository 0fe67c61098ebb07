"""Base model with common configuration."""

from datetime import datetime, timezone

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


class BaseCrossNegModel(PydanticBaseModel):
    """Base model for all crossnegatives models."""

    model_config = ConfigDict(
        # Validate on assignment
        validate_assignment=True,
        # Allow population by field name
        populate_by_name=True,
    )


class FrozenModel(BaseCrossNegModel):
    """Immutable snapshot of platform data, taken once per run."""

    model_config = ConfigDict(frozen=True)
