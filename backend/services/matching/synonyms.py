"""Static domain thesauri for subject, skill-level and study-style tags.

Each thesaurus maps a canonical term to the abbreviations, variants and
closely related terms users type into their profiles. The three tables
are merged into one lookup by SynonymIndex.expand(), so a term can pull
in families from more than one thesaurus (e.g. "programming" contains the
EXPERT synonym "pro", so it expands into both the computer science and the
expert families).
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


# ---------------------------------------------------------------------------
# Subjects
# ---------------------------------------------------------------------------
SUBJECT_SYNONYMS: dict[str, list[str]] = {
    "mathematics": [
        "math", "maths", "calculus", "algebra", "geometry", "trigonometry",
        "statistics", "stats", "precalculus", "pre-calc", "linear algebra",
        "discrete math", "differential equations", "arithmetic",
    ],
    "computer science": [
        "cs", "compsci", "comp sci", "programming", "coding", "software engineering",
        "software development", "algorithms", "data structures", "computing",
        "web development", "python", "javascript", "java",
    ],
    "physics": [
        "mechanics", "thermodynamics", "electromagnetism", "quantum physics",
        "astrophysics", "optics", "ap physics",
    ],
    "chemistry": [
        "chem", "organic chemistry", "ochem", "orgo", "biochemistry",
        "inorganic chemistry", "physical chemistry", "ap chem",
    ],
    "biology": [
        "bio", "life science", "genetics", "microbiology", "anatomy",
        "physiology", "ecology", "molecular biology", "ap bio",
    ],
    "english": [
        "english literature", "literature", "lit", "writing", "composition",
        "creative writing", "grammar", "essay writing", "ela",
    ],
    "history": [
        "world history", "us history", "american history", "european history",
        "apush", "social studies", "civics",
    ],
    "economics": [
        "econ", "microeconomics", "macroeconomics", "finance", "accounting",
        "business", "business administration",
    ],
    "psychology": [
        "psych", "psy", "cognitive science", "behavioral science", "neuroscience",
    ],
    "languages": [
        "foreign language", "spanish", "french", "german", "chinese", "mandarin",
        "japanese", "korean", "esl", "linguistics",
    ],
    "engineering": [
        "mechanical engineering", "electrical engineering", "civil engineering",
        "chemical engineering", "ee", "mech e",
    ],
    "data science": [
        "machine learning", "ml", "artificial intelligence", "ai", "data analysis",
        "data analytics", "deep learning",
    ],
    "test prep": [
        "sat", "act", "gre", "gmat", "mcat", "lsat", "exam prep", "standardized testing",
    ],
    "art": [
        "fine arts", "drawing", "painting", "design", "art history", "music",
    ],
}

# ---------------------------------------------------------------------------
# Skill levels (canonical keys are the lowercase enum values)
# ---------------------------------------------------------------------------
SKILL_LEVEL_SYNONYMS: dict[str, list[str]] = {
    "beginner": ["novice", "newbie", "starter", "entry level", "just starting", "new learner"],
    "intermediate": ["medium", "moderate", "average", "some experience", "mid level"],
    "advanced": ["proficient", "skilled", "experienced", "upper level", "strong"],
    "expert": ["master", "mastery", "professional", "pro", "specialist", "guru"],
}

# ---------------------------------------------------------------------------
# Study styles (canonical keys are the lowercase enum values)
# ---------------------------------------------------------------------------
STUDY_STYLE_SYNONYMS: dict[str, list[str]] = {
    "visual": ["diagrams", "charts", "videos", "mind maps", "flashcards", "visual learner"],
    "auditory": ["listening", "lectures", "podcasts", "discussion", "audio"],
    "kinesthetic": ["hands-on", "hands on", "practice problems", "labs", "learning by doing"],
    "reading_writing": ["reading", "note taking", "notes", "textbooks", "summaries"],
    "collaborative": ["group study", "study group", "teamwork", "peer learning", "together"],
    "independent": ["self-study", "self study", "self-paced", "alone", "on my own"],
    "solo": ["individual", "quiet study", "by myself"],
    "mixed": ["flexible", "hybrid", "combination", "any style", "varied"],
}


def _freeze(table: Mapping[str, Iterable[str]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({
        key.lower().strip(): tuple(s.lower().strip() for s in synonyms)
        for key, synonyms in table.items()
    })


def _related(term: str, candidate: str) -> bool:
    return term == candidate or term in candidate or candidate in term


@dataclass(frozen=True)
class SynonymIndex:
    """Immutable merged thesaurus.

    Build one per process (DEFAULT_SYNONYM_INDEX) and pass it wherever
    synonym lookups happen; tests can build a smaller one.
    """

    subjects: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    skill_levels: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    study_styles: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        subjects: Mapping[str, Iterable[str]] | None = None,
        skill_levels: Mapping[str, Iterable[str]] | None = None,
        study_styles: Mapping[str, Iterable[str]] | None = None,
    ) -> "SynonymIndex":
        return cls(
            subjects=_freeze(subjects or {}),
            skill_levels=_freeze(skill_levels or {}),
            study_styles=_freeze(study_styles or {}),
        )

    def families(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        """Yield (canonical, synonyms) across all three thesauri."""
        for table in (self.subjects, self.skill_levels, self.study_styles):
            yield from table.items()

    def __len__(self) -> int:
        return len(self.subjects) + len(self.skill_levels) + len(self.study_styles)

    def expand(self, term: str) -> set[str]:
        """Expand a free-text term to itself plus every related family.

        A family is related when the term equals, contains, or is contained
        by its canonical key or any of its synonyms. Blank terms expand to
        nothing.
        """
        normalized = (term or "").lower().strip()
        if not normalized:
            return set()

        expanded = {normalized}
        for canonical, synonyms in self.families():
            if _related(normalized, canonical) or any(_related(normalized, s) for s in synonyms):
                expanded.add(canonical)
                expanded.update(synonyms)
        return expanded

    def expand_many(self, terms: Iterable[str]) -> set[str]:
        expanded: set[str] = set()
        for term in terms:
            expanded |= self.expand(term)
        return expanded


DEFAULT_SYNONYM_INDEX = SynonymIndex.build(
    subjects=SUBJECT_SYNONYMS,
    skill_levels=SKILL_LEVEL_SYNONYMS,
    study_styles=STUDY_STYLE_SYNONYMS,
)
