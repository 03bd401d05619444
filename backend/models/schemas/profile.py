"""Input contract: a study partner profile as loaded by the caller."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _alias(name: str) -> AliasChoices:
    """Accept snake_case, camelCase and the raw column name for a field."""
    return AliasChoices(name, to_camel(name))


class ProfileData(BaseModel):
    """A user's partner-matching profile.

    Every attribute is optional. Presence rules (non-blank strings,
    at least one non-blank list element) are applied by the scorers,
    never by validation, so sparse profiles always load.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    user_id: str | None = Field(default=None, validation_alias=_alias("user_id"))

    # Set-valued
    subjects: list[str] | None = None
    interests: list[str] | None = None
    goals: list[str] | None = None
    available_days: list[str] | None = Field(default=None, validation_alias=_alias("available_days"))
    available_hours: list[str] | None = Field(default=None, validation_alias=_alias("available_hours"))
    languages: list[str] | None = None
    strengths: list[str] | None = None
    weaknesses: list[str] | None = None

    # Categorical
    skill_level: str | None = Field(default=None, validation_alias=_alias("skill_level"))
    study_style: str | None = Field(default=None, validation_alias=_alias("study_style"))
    role: str | None = None

    # Scalar text
    school: str | None = None
    timezone: str | None = None
    bio: str | None = None
    about_yourself: str | None = Field(default=None, validation_alias=_alias("about_yourself"))

    age: int | None = None

    # Geographic (stored under these literal column names)
    location_lat: float | None = Field(default=None, validation_alias=_alias("location_lat"))
    location_lng: float | None = Field(default=None, validation_alias=_alias("location_lng"))
    location_city: str | None = Field(default=None, validation_alias=_alias("location_city"))
    location_country: str | None = Field(default=None, validation_alias=_alias("location_country"))

    last_study_date: str | None = Field(default=None, validation_alias=_alias("last_study_date"))
    is_looking_for_partner: bool | None = Field(
        default=None, validation_alias=_alias("is_looking_for_partner")
    )

    @field_validator("languages", mode="before")
    @classmethod
    def _split_languages(cls, value):
        # Stored as a free-text column ("English, Spanish") in the profile table
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @property
    def identity(self) -> str | None:
        return self.user_id or self.id


def is_present(value) -> bool:
    """Check the presence invariant for a single profile attribute."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(isinstance(v, str) and v.strip() for v in value)
    return True


def clean_list(values: list[str] | None) -> list[str]:
    """Drop blank entries from a set-valued attribute."""
    if not values:
        return []
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]
