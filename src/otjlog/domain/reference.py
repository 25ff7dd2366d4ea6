"""Reference lookup tables for categories and KSBs."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from otjlog.domain.entities import KSBTag, KSBType

# Learning-activity categories with the hint shown next to each
DEFAULT_CATEGORIES = {
    "Attending webinars on key industry topics": "Online seminars and industry events",
    "Being mentored by a senior colleague": "One-on-one mentorship sessions",
    "Classroom session/theory or lectures": "Formal training and education sessions",
    "Research and self-study": "Independent learning and research",
    "Skills workshops and practical training": "Hands-on skill development sessions",
    "Team training sessions": "Group learning activities",
}

DEFAULT_KSBS = (
    KSBTag("K1", KSBType.KNOWLEDGE, "Understanding of software development lifecycle"),
    KSBTag("K2", KSBType.KNOWLEDGE, "Knowledge of version control systems"),
    KSBTag("K3", KSBType.KNOWLEDGE, "Understanding of testing methodologies"),
    KSBTag("K4", KSBType.KNOWLEDGE, "Knowledge of agile practices"),
    KSBTag("S1", KSBType.SKILL, "Ability to write clean, maintainable code"),
    KSBTag("S2", KSBType.SKILL, "Problem-solving and debugging skills"),
    KSBTag("S3", KSBType.SKILL, "Communication and collaboration"),
    KSBTag("S4", KSBType.SKILL, "Time management and prioritization"),
    KSBTag("B1", KSBType.BEHAVIOUR, "Professional attitude and work ethic"),
    KSBTag("B2", KSBType.BEHAVIOUR, "Continuous learning mindset"),
    KSBTag("B3", KSBType.BEHAVIOUR, "Attention to detail"),
)

ALL_TYPES = "All"


@dataclass(frozen=True)
class ReferenceData:
    """Category and KSB tables used to validate and build entries."""

    categories: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CATEGORIES))
    ksbs: tuple[KSBTag, ...] = DEFAULT_KSBS

    def has_category(self, name: str) -> bool:
        return name in self.categories

    def category_description(self, name: str) -> Optional[str]:
        return self.categories.get(name)

    def resolve_category(self, value: str) -> str:
        """Resolve a category given by name, case-insensitive name or 1-based number.

        Unresolvable values are returned unchanged for validation to reject.
        """
        names = list(self.categories)
        if value in self.categories:
            return value
        if value.strip().isdigit():
            index = int(value.strip()) - 1
            if 0 <= index < len(names):
                return names[index]
        for name in names:
            if name.lower() == value.strip().lower():
                return name
        return value

    def get_ksb(self, ksb_id: str) -> Optional[KSBTag]:
        """Find a KSB by id, ignoring case."""
        wanted = ksb_id.strip().upper()
        for ksb in self.ksbs:
            if ksb.id.upper() == wanted:
                return ksb
        return None


def filter_ksbs(
    ksbs: Iterable[KSBTag], search: str = "", ksb_type: Optional[str] = ALL_TYPES
) -> list[KSBTag]:
    """Filter KSBs by a search term and a type.

    The search matches the id or the description, case-insensitively. A
    type of None or "All" disables type filtering.
    """
    term = (search or "").lower()
    results = []
    for ksb in ksbs:
        matches_search = term in ksb.id.lower() or term in ksb.description.lower()
        matches_type = ksb_type in (None, ALL_TYPES) or ksb.type.value == ksb_type
        if matches_search and matches_type:
            results.append(ksb)
    return results


def toggle_ksb(selected: Sequence[KSBTag], ksb: KSBTag) -> list[KSBTag]:
    """Return a new selection with ``ksb`` added, or removed if present."""
    if any(k.id == ksb.id for k in selected):
        return [k for k in selected if k.id != ksb.id]
    return [*selected, ksb]


def remove_ksb(selected: Sequence[KSBTag], ksb_id: str) -> list[KSBTag]:
    """Return a new selection without the KSB with ``ksb_id``."""
    return [k for k in selected if k.id != ksb_id]
