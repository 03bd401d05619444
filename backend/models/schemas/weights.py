"""Per-attribute weight table for the match aggregator."""

from pydantic import BaseModel, ConfigDict, Field


class MatchWeights(BaseModel):
    """Relative importance of each compared attribute family.

    Defaults sum to 1.00. Weights are renormalized over the components
    both profiles actually have, so they only need to be non-negative.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    subjects: float = Field(default=0.24, ge=0)
    interests: float = Field(default=0.15, ge=0)
    goals: float = Field(default=0.12, ge=0)
    available_days: float = Field(default=0.09, ge=0)
    available_hours: float = Field(default=0.06, ge=0)
    skill_level: float = Field(default=0.06, ge=0)
    location: float = Field(default=0.06, ge=0)
    languages: float = Field(default=0.06, ge=0)
    role: float = Field(default=0.04, ge=0)
    study_style: float = Field(default=0.04, ge=0)
    strengths_weaknesses: float = Field(default=0.03, ge=0)
    school: float = Field(default=0.03, ge=0)
    timezone: float = Field(default=0.02, ge=0)

    def with_overrides(self, overrides: dict[str, float] | None) -> "MatchWeights":
        """Return a new table with the given attributes replaced."""
        if not overrides:
            return self
        return MatchWeights(**{**self.model_dump(), **overrides})


DEFAULT_WEIGHTS = MatchWeights()
