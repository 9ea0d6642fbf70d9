"""
Parsed CV domain model.

Each CV section is an explicit variant that knows how to flatten itself
into plain text for chunking. Input from the upstream parser is loosely
shaped: unknown fields are kept as extras, and known fields holding an
unexpected type are coerced or dropped instead of failing the whole CV.
Only allow-listed string fields contribute text.

Dependencies: pydantic
System role: Input model for CV ingestion
"""

import re
from collections.abc import Iterator, Mapping
from typing import Annotated, Any, ClassVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from cvportal.models.chunk import ChunkSection

# Field names whose string values contribute text, in extraction order.
TEXT_FIELDS: tuple[str, ...] = (
    "title",
    "name",
    "summary",
    "description",
    "content",
    "company",
    "position",
    "role",
    "institution",
    "degree",
    "field",
    "skill",
    "technology",
    "achievement",
    "responsibility",
    "issuer",
    "location",
    "duration",
    "start_date",
    "end_date",
    "email",
    "phone",
    "website",
    "linkedin",
    "github",
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _lenient_text(value: Any) -> str | None:
    """Strings pass, numbers become strings, anything else is dropped."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (str, Mapping)):
        return [value]
    return []


LenientText = Annotated[str | None, BeforeValidator(_lenient_text)]
LenientList = Annotated[list[Any], BeforeValidator(_as_list)]


def extract_text(obj: Any, _depth: int = 0) -> str:
    """
    Flatten an arbitrarily shaped section object into text.

    Collects non-empty allow-listed string fields, then string members of
    list-valued fields, recursing one level into lists of objects.

    Args:
        obj: String, mapping or pydantic model
        _depth: Recursion depth (internal)

    Returns:
        str: Space-joined text parts, empty when nothing qualifies
    """
    if isinstance(obj, str):
        return obj
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(exclude_none=True)
    if not isinstance(obj, Mapping):
        return ""

    normalized = {_snake(str(key)): value for key, value in obj.items()}
    parts: list[str] = []

    for field in TEXT_FIELDS:
        value = normalized.get(field)
        if isinstance(value, str):
            parts.append(value)

    for value in normalized.values():
        if not isinstance(value, list):
            continue
        for item in value:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Mapping) and _depth < 1:
                parts.append(extract_text(item, _depth + 1))

    return " ".join(part for part in parts if part and part.strip())


class CVSection(BaseModel):
    """Base for all CV section variants."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    chunk_section: ClassVar[ChunkSection] = ChunkSection.OTHER

    @model_validator(mode="before")
    @classmethod
    def _coerce_item(cls, data: Any) -> Any:
        # A bare string item is its own content; other scalars carry no text.
        if isinstance(data, (BaseModel, Mapping)):
            return data
        if isinstance(data, str):
            return {"content": data}
        return {}

    def extract_text(self) -> str:
        """Plain text for this section item."""
        return extract_text(self)


class PersonalInfo(CVSection):
    chunk_section: ClassVar[ChunkSection] = ChunkSection.SUMMARY

    name: LenientText = None
    title: LenientText = None
    email: LenientText = None
    phone: LenientText = None
    address: LenientText = None
    summary: LenientText = None
    linkedin: LenientText = None
    github: LenientText = None
    website: LenientText = None


class ExperienceEntry(CVSection):
    chunk_section: ClassVar[ChunkSection] = ChunkSection.EXPERIENCE

    company: LenientText = None
    position: LenientText = None
    role: LenientText = None
    duration: LenientText = None
    start_date: LenientText = None
    end_date: LenientText = None
    description: LenientText = None
    achievements: LenientList = Field(default_factory=list)
    technologies: LenientList = Field(default_factory=list)


class EducationEntry(CVSection):
    chunk_section: ClassVar[ChunkSection] = ChunkSection.EDUCATION

    institution: LenientText = None
    degree: LenientText = None
    field: LenientText = None
    graduation_date: LenientText = None
    start_date: LenientText = None
    end_date: LenientText = None
    gpa: LenientText = None
    honors: LenientList = Field(default_factory=list)
    description: LenientText = None


class SkillEntry(CVSection):
    """One item of a skills array."""

    chunk_section: ClassVar[ChunkSection] = ChunkSection.SKILLS

    name: LenientText = None
    skill: LenientText = None
    level: LenientText = None
    category: LenientText = None


class SkillsSection(CVSection):
    """Skills given as one object: a flat list, a category map, free text, or a mix."""

    chunk_section: ClassVar[ChunkSection] = ChunkSection.SKILLS

    items: LenientList = Field(default_factory=list)
    categories: dict[str, list[Any]] = Field(default_factory=dict)
    description: LenientText = None

    @field_validator("categories", mode="before")
    @classmethod
    def _coerce_categories(cls, value: Any) -> dict[str, list[Any]]:
        if not isinstance(value, Mapping):
            return {}
        return {str(key): _as_list(items) for key, items in value.items()}

    def extract_text(self) -> str:
        parts: list[str] = []
        if self.description and self.description.strip():
            parts.append(self.description)
        if self.items:
            parts.append(_join_members(self.items))
        for category, values in self.categories.items():
            joined = _join_members(values)
            if joined:
                parts.append(f"{category}: {joined}")
        if self.model_extra:
            parts.append(extract_text(self.model_extra))
        return " ".join(part for part in parts if part and part.strip())


def _join_members(values: list[Any]) -> str:
    members = [extract_text(value) if isinstance(value, Mapping) else value for value in values]
    return ", ".join(member for member in members if isinstance(member, str) and member.strip())


class ProjectEntry(CVSection):
    chunk_section: ClassVar[ChunkSection] = ChunkSection.PROJECTS

    name: LenientText = None
    description: LenientText = None
    technologies: LenientList = Field(default_factory=list)
    url: LenientText = None


class CertificationEntry(CVSection):
    chunk_section: ClassVar[ChunkSection] = ChunkSection.CERTIFICATIONS

    name: LenientText = None
    issuer: LenientText = None
    date: LenientText = None
    credential_id: LenientText = None


SectionValue = str | CVSection | list[CVSection]

_SKILLS_OBJECT_KEYS = frozenset({"items", "categories", "description"})


class ParsedCV(BaseModel):
    """
    A parsed résumé as produced by the upstream CV parser.

    Accepts both snake_case and the parser's camelCase keys.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str = Field(min_length=1, description="CV identifier (namespace key)")
    summary: str | None = None
    personal_info: PersonalInfo | None = None
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[SkillEntry] | SkillsSection | None = Field(default=None, union_mode="left_to_right")
    projects: list[ProjectEntry] = Field(default_factory=list)
    certifications: list[CertificationEntry] = Field(default_factory=list)

    # Fixed chunking order; personal_info is folded into the summary section.
    SECTION_ORDER: ClassVar[tuple[tuple[str, ChunkSection], ...]] = (
        ("summary", ChunkSection.SUMMARY),
        ("personal_info", ChunkSection.SUMMARY),
        ("experience", ChunkSection.EXPERIENCE),
        ("education", ChunkSection.EDUCATION),
        ("skills", ChunkSection.SKILLS),
        ("projects", ChunkSection.PROJECTS),
        ("certifications", ChunkSection.CERTIFICATIONS),
    )

    @field_validator("summary", mode="before")
    @classmethod
    def _flatten_summary(cls, value: Any) -> str | None:
        if isinstance(value, str):
            return value
        if isinstance(value, Mapping):
            return extract_text(value) or None
        if isinstance(value, list):
            return " ".join(text for text in map(extract_text, value) if text.strip()) or None
        return None

    @field_validator("personal_info", mode="before")
    @classmethod
    def _coerce_personal_info(cls, value: Any) -> Any:
        if value is None or isinstance(value, (str, Mapping, BaseModel)):
            return value
        return None

    @field_validator("experience", "education", "projects", "certifications", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> Any:
        if value is None or isinstance(value, (SkillsSection, list)):
            return value
        if isinstance(value, tuple):
            return list(value)
        if isinstance(value, str):
            return SkillsSection(description=value)
        if isinstance(value, Mapping):
            return SkillsSection.model_validate(cls._skills_object(value))
        return None

    @staticmethod
    def _skills_object(value: Mapping[str, Any]) -> dict[str, Any]:
        """Fold list-of-string members of a skills object into categories."""
        data: dict[str, Any] = {key: value[key] for key in _SKILLS_OBJECT_KEYS if key in value}
        raw_categories = data.get("categories")
        categories = dict(raw_categories) if isinstance(raw_categories, Mapping) else {}
        for key, members in value.items():
            if key in _SKILLS_OBJECT_KEYS:
                continue
            if isinstance(members, list) and all(isinstance(member, str) for member in members):
                categories[str(key)] = members
            else:
                data[key] = members
        data["categories"] = categories
        return data

    @classmethod
    def from_raw(cls, data: Mapping[str, Any]) -> "ParsedCV":
        """Build from a loosely shaped parser payload."""
        return cls.model_validate(dict(data))

    def sections(self) -> Iterator[tuple[str, ChunkSection, SectionValue]]:
        """Yield populated sections in chunking order."""
        for key, chunk_section in self.SECTION_ORDER:
            value = getattr(self, key)
            if value is None:
                continue
            if isinstance(value, list) and not value:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            yield key, chunk_section, value
