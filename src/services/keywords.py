"""Keywords that mark informative sentences in project documents."""

IMPORTANT_KEYWORDS: tuple[str, ...] = (
    "project",
    "goal",
    "objective",
    "target",
    "aim",
    "purpose",
    "requirement",
    "specification",
    "feature",
    "functionality",
    "timeline",
    "deadline",
    "milestone",
    "deliverable",
    "budget",
    "cost",
    "resource",
    "team",
    "stakeholder",
    "risk",
    "challenge",
    "constraint",
    "assumption",
    "success",
    "outcome",
    "result",
    "impact",
    "technology",
    "tool",
    "platform",
    "framework",
    "methodology",
    "approach",
    "strategy",
    "plan",
)

# Keyword matches counted per sentence before the score cap applies
MAX_KEYWORD_MATCHES = 5

# Verbs that tend to start declarative, informative statements
LINKING_VERBS = ("is", "are", "will", "should", "must", "can")

ELLIPSIS = "..."
