"""Search engine contracts: scored entities and per-query results."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SearchableEntity(BaseModel):
    """A profile or study group flattened into rankable text fields."""
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    subject: str | None = None
    description: str | None = None
    subject_custom_description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("subject_custom_description", "subjectCustomDescription"),
    )
    skill_level: str | None = Field(
        default=None, validation_alias=AliasChoices("skill_level", "skillLevel")
    )
    tags: list[str] = []

    def text_fields(self) -> list[str]:
        fields = [
            self.name,
            self.subject,
            self.description,
            self.subject_custom_description,
            self.skill_level,
        ]
        return [f for f in fields if f] + [t for t in self.tags if t]


class SmartSearchResult(BaseModel):
    matches: bool = False
    score: int = 0  # 0-100
    matched_terms: list[str] = []
