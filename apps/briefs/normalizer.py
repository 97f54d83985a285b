"""Brief normalizer: reconcile legacy and current brief field names.

Every schema difference between brief versions is resolved here, through the
tables below. Code downstream only ever sees a ``CanonicalBrief``.
"""
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field

from apps.core.utils import normalize_keywords, normalize_text
from apps.matching.exceptions import MissingBriefFieldsError

# canonical name -> source fields, first non-empty wins.
# The canonical name itself is always checked first.
FIELD_SOURCES = {
    "category": ["design_category", "project_type"],
    "timeline_bucket": ["timeline_type", "timeline"],
    "budget_bucket": ["budget_range", "budget"],
    "description": ["project_description", "requirements"],
    "style_keywords": ["design_style_keywords", "styles"],
    "industry": ["industry", "industry_sector"],
    "involvement_level": ["involvement_level"],
    "communication_preference": ["communication_preference"],
    "target_audience": ["target_audience"],
    "project_goal": ["project_goal"],
    "avoid": ["avoid_colors_styles"],
}

# canonical name -> {legacy value: current value}
VALUE_ALIASES = {
    "timeline_bucket": {
        "asap": "urgent",
        "1-2 weeks": "urgent",
        "2-4 weeks": "standard",
        "1-2 months": "flexible",
        "2-3 months": "flexible",
    },
    "budget_bucket": {
        "$500-1000": "entry",
        "$1000-2500": "entry",
        "$2500-5000": "mid",
        "$5000-10000": "mid",
        "$10000+": "premium",
    },
}

REQUIRED_FIELDS = ["category", "timeline_bucket", "budget_bucket", "description"]


@dataclass(frozen=True)
class CanonicalBrief:
    category: str
    timeline_bucket: str
    budget_bucket: str
    description: str
    style_keywords: list[str] = field(default_factory=list)
    industry: str = ""
    involvement_level: str = ""
    communication_preference: str = ""
    target_audience: str = ""
    project_goal: str = ""
    avoid: str = ""
    brief_id: str = ""
    client_id: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


def _first_present(raw: Mapping, names: list[str]):
    for name in names:
        value = raw.get(name)
        if value not in (None, "", [], ()):
            return value
    return None


def _clean_scalar(name: str, value) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    aliases = VALUE_ALIASES.get(name)
    if aliases:
        text = aliases.get(text.lower(), text.lower())
    return text


def normalize_brief(raw: Mapping) -> CanonicalBrief:
    """Map a raw brief (legacy or current field set) onto the canonical shape.

    Raises ``MissingBriefFieldsError`` when category, timeline, budget or
    description cannot be resolved.
    """
    values = {}
    for name, sources in FIELD_SOURCES.items():
        value = _first_present(raw, [name, *sources])
        if name == "style_keywords":
            if isinstance(value, str):
                value = value.split(",")
            values[name] = normalize_keywords(value)
        else:
            values[name] = _clean_scalar(name, value)

    missing = [name for name in REQUIRED_FIELDS if not values[name]]
    if missing:
        raise MissingBriefFieldsError(missing)

    values["industry"] = normalize_text(values["industry"])
    values["brief_id"] = str(raw.get("brief_id") or raw.get("id") or "")
    values["client_id"] = str(raw.get("client_id") or "")
    return CanonicalBrief(**values)


def brief_record(brief) -> dict:
    """Raw mapping of a ``Brief`` instance, as the normalizer expects it."""
    record = {
        "id": str(brief.pk),
        "client_id": str(brief.client_id) if brief.client_id else "",
    }
    for sources in FIELD_SOURCES.values():
        for name in sources:
            if hasattr(brief, name):
                record[name] = getattr(brief, name)
    return record
