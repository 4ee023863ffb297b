"""Pydantic models for internal helper ratings."""

from pydantic import Field

from caselink.models.common import CamelModel


class HelperRatingSet(CamelModel):
    stars: int = Field(ge=1, le=5)
    notes: str | None = Field(None, max_length=2000)


class HelperRatingResponse(CamelModel):
    stars: int | None = None
    notes: str | None = None
