"""Rule-based scorer: weighted sum over six fit dimensions.

Weights (out of 100):

    category 30 | style 25 | budget 15 | timeline 15 | industry 10 | working style 5

Category is a precondition: a designer offering the brief's category neither
as a primary nor as a secondary specialty is disqualified and never ranked.
"""
from dataclasses import dataclass, field

from apps.core.utils import normalize_keywords, normalize_text
from apps.designers.models import DesignerProfile

from . import catalog

WEIGHTS = {
    "category": 30,
    "style": 25,
    "budget": 15,
    "timeline": 15,
    "industry": 10,
    "working_style": 5,
}

SECONDARY_CATEGORY_FRACTION = 0.5
UNSPECIFIED_STYLE_FRACTION = 0.5
ADJACENT_BUDGET_FRACTION = 0.5
INDUSTRY_PARTIAL = 4


@dataclass
class ScoreResult:
    """Outcome of scoring one designer against one brief."""

    designer: DesignerProfile
    score: float
    breakdown: dict[str, float]
    reasons: list[str]
    confidence: str
    personalized_reasons: list[str] = field(default_factory=list)
    summary: str = ""
    ai_analyzed: bool = False
    scorer: str = "rule"


def confidence_for(score: float) -> str:
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"


def clamp_score(value: float) -> float:
    return round(min(100.0, max(0.0, value)), 2)


def rank_key(result: ScoreResult):
    """Sort key: score desc, rating desc, projects desc, oldest profile, id."""
    d = result.designer
    return (
        -result.score,
        -float(d.rating or 0),
        -(d.total_projects or 0),
        d.created_at,
        str(d.pk),
    )


def category_points(brief, designer: DesignerProfile) -> float | None:
    """Category sub-score, or None when the designer is disqualified."""
    if not brief.category:
        return None
    if brief.category in (designer.primary_categories or []):
        return float(WEIGHTS["category"])
    if brief.category in (designer.secondary_categories or []):
        return WEIGHTS["category"] * SECONDARY_CATEGORY_FRACTION
    return None


def style_points(brief, designer: DesignerProfile) -> tuple[float, list[str]]:
    wanted = brief.style_keywords
    if not wanted:
        return WEIGHTS["style"] * UNSPECIFIED_STYLE_FRACTION, []
    offered = set(normalize_keywords(designer.style_keywords))
    shared = [kw for kw in wanted if kw in offered]
    return WEIGHTS["style"] * len(shared) / len(wanted), shared


def budget_points(brief, designer: DesignerProfile) -> float:
    preferred = [s for s in designer.preferred_project_sizes or [] if s in catalog.PROJECT_SIZES]
    if not preferred:
        return float(WEIGHTS["budget"])
    size = catalog.BUDGET_TO_PROJECT_SIZE.get(brief.budget_bucket)
    if size is None:
        return 0.0
    if size in preferred:
        return float(WEIGHTS["budget"])
    index = catalog.PROJECT_SIZES.index(size)
    distance = min(abs(index - catalog.PROJECT_SIZES.index(p)) for p in preferred)
    if distance == 1:
        return WEIGHTS["budget"] * ADJACENT_BUDGET_FRACTION
    return 0.0


def turnaround_days(brief, designer: DesignerProfile) -> int | None:
    """Designer's own turnaround for the category, else the catalog average.

    Entries that are not a positive whole number of days are ignored.
    """
    table = designer.turnaround_times
    days = table.get(brief.category) if isinstance(table, dict) else None
    if isinstance(days, bool):
        days = None
    try:
        days = int(days)
    except (TypeError, ValueError):
        days = 0
    if days > 0:
        return days
    return catalog.average_turnaround(brief.category)


def timeline_points(brief, designer: DesignerProfile) -> tuple[float, int | None]:
    allotment = catalog.TIMELINE_DAYS.get(brief.timeline_bucket)
    days = turnaround_days(brief, designer)
    if allotment is None or days is None:
        return 0.0, days
    if days <= allotment:
        return float(WEIGHTS["timeline"]), days
    return WEIGHTS["timeline"] * allotment / days, days


def industry_points(brief, designer: DesignerProfile) -> float:
    if brief.industry and brief.industry in normalize_keywords(designer.preferred_industries):
        return float(WEIGHTS["industry"])
    return float(INDUSTRY_PARTIAL)


def working_style_points(brief, designer: DesignerProfile) -> float:
    wanted = catalog.INVOLVEMENT_TO_COLLABORATION.get(brief.involvement_level)
    if wanted and wanted == normalize_text(designer.collaboration_style or ""):
        return float(WEIGHTS["working_style"])
    return 0.0


def score_designer(brief, designer: DesignerProfile) -> ScoreResult | None:
    """Score ``designer`` against a canonical brief; None if disqualified."""
    category = category_points(brief, designer)
    if category is None:
        return None

    style, shared_styles = style_points(brief, designer)
    timeline, days = timeline_points(brief, designer)
    breakdown = {
        "category": category,
        "style": style,
        "budget": budget_points(brief, designer),
        "timeline": timeline,
        "industry": industry_points(brief, designer),
        "working_style": working_style_points(brief, designer),
    }
    breakdown = {key: round(value, 2) for key, value in breakdown.items()}
    score = clamp_score(sum(breakdown.values()))

    reasons = _reasons(brief, designer, breakdown, shared_styles, days)
    return ScoreResult(
        designer=designer,
        score=score,
        breakdown=breakdown,
        reasons=reasons,
        confidence=confidence_for(score),
        summary=f"{designer.first_name} scored {score:.0f}/100 for your {catalog.category_name(brief.category)} project",
    )


def _reasons(brief, designer, breakdown, shared_styles, days) -> list[str]:
    name = catalog.category_name(brief.category)
    reasons = []
    if breakdown["category"] == WEIGHTS["category"]:
        reasons.append(f"Specializes in {name}")
    else:
        reasons.append(f"Also works on {name} projects")
    if shared_styles:
        reasons.append(f"Matching design styles: {', '.join(shared_styles)}")
    if breakdown["budget"] == WEIGHTS["budget"]:
        reasons.append("Comfortable with your budget range")
    if breakdown["timeline"] == WEIGHTS["timeline"] and days:
        reasons.append(f"Typically delivers in {days} days, within your timeline")
    if breakdown["industry"] == WEIGHTS["industry"]:
        reasons.append(f"Experienced in the {brief.industry} industry")
    if breakdown["working_style"] == WEIGHTS["working_style"]:
        reasons.append("Collaboration style fits how you like to work")
    return reasons
