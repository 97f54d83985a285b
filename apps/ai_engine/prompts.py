"""
PromptPack: versioned prompts for designer matching.

Policy: the model only judges what the profiles declare. Never invent skills.
"""

PROMPT_VERSION = "v2.0"

# ── Matching (Brief x Designer) ───────────────────────────

MATCHING_SYSTEM = """You are an expert design-industry matchmaker who pairs clients with freelance designers.
Evaluate how well ONE designer fits ONE client brief.

RULES:
1. Category is a hard requirement: if the designer does not offer the brief's category
   (primary or secondary), set "categoryMatch" to false and "score" to 0.
2. Score 0-100 using this rubric:
   - category fit (30): primary specialty 30, secondary specialty 15
   - style alignment (25): share of the client's style keywords the designer works in
   - budget fit (15): project size the designer prefers vs. the client's budget
   - timeline fit (15): designer's typical turnaround vs. the client's timeline
   - industry fit (10): experience in the client's industry
   - working style (5): collaboration style vs. the client's involvement level
3. Be calibrated: 80+ means a clearly excellent fit, below 60 means a weak fit.
4. Do not credit skills, styles or industries the designer has not declared."""

MATCHING_USER = """Evaluate the fit and return JSON:

{{
  "score": int,
  "confidence": "high|medium|low",
  "categoryMatch": bool,
  "reasons": ["string, short factual reason", "..."],
  "personalizedReasons": ["string, addressed to the client in second person", "..."],
  "scoreBreakdown": {{
    "category": number,
    "style": number,
    "budget": number,
    "timeline": number,
    "industry": number,
    "working_style": number
  }}
}}

CLIENT BRIEF:
{brief}

DESIGNER PROFILE:
{designer}
"""

JSON_ONLY = "IMPORTANT: Reply ONLY with valid JSON, no markdown or extra text."


def build_matching_prompt(brief: str, designer: str) -> str:
    user_prompt = MATCHING_USER.format(brief=brief, designer=designer)
    return f"{MATCHING_SYSTEM}\n\n---\n\n{user_prompt}\n\n{JSON_ONLY}"
