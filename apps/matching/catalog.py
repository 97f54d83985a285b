"""Reference vocabularies for briefs and designer profiles."""

# ── Design categories ──────────────────────────────────
# average_days: typical turnaround per timeline bucket
DESIGN_CATEGORIES = {
    "branding-logo": {
        "name": "Branding & Logo Design",
        "average_days": {"urgent": 3, "standard": 14, "flexible": 30},
    },
    "web-mobile": {
        "name": "Web & Mobile Design (UI/UX)",
        "average_days": {"urgent": 5, "standard": 21, "flexible": 45},
    },
    "social-media": {
        "name": "Social Media Design",
        "average_days": {"urgent": 2, "standard": 7, "flexible": 14},
    },
    "motion-graphics": {
        "name": "Motion Graphics & Animation",
        "average_days": {"urgent": 7, "standard": 21, "flexible": 60},
    },
    "photography-video": {
        "name": "Photography & Video",
        "average_days": {"urgent": 3, "standard": 10, "flexible": 21},
    },
    "presentations": {
        "name": "Presentations Design",
        "average_days": {"urgent": 2, "standard": 7, "flexible": 14},
    },
}

# ── Timeline buckets (day allotment) ───────────────────
TIMELINE_DAYS = {
    "urgent": 7,
    "standard": 28,
    "flexible": 60,
}

TIMELINE_LABELS = {
    "urgent": "Less than 1 week",
    "standard": "2-4 weeks",
    "flexible": "1+ months",
}

# ── Budget buckets ─────────────────────────────────────
BUDGET_LABELS = {
    "entry": "$500-$2,000",
    "mid": "$2,000-$10,000",
    "premium": "$10,000+",
}

PROJECT_SIZES = ["small", "medium", "large"]

BUDGET_TO_PROJECT_SIZE = {
    "entry": "small",
    "mid": "medium",
    "premium": "large",
}

# ── Working style ──────────────────────────────────────
# client involvement level -> designer collaboration style
INVOLVEMENT_TO_COLLABORATION = {
    "highly-collaborative": "high-touch",
    "milestone-based": "milestone-based",
    "hands-off": "independent",
}

COLLABORATION_STYLES = list(INVOLVEMENT_TO_COLLABORATION.values())


def category_name(category: str) -> str:
    return DESIGN_CATEGORIES.get(category, {}).get("name", category)


def average_turnaround(category: str, bucket: str = "standard") -> int | None:
    """Catalog turnaround (days) for a category, or None if unknown."""
    return DESIGN_CATEGORIES.get(category, {}).get("average_days", {}).get(bucket)
