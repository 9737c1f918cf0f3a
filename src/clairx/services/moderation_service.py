"""Content moderation stand-in.

A case-insensitive denylist match. It keeps the response shape of a real
moderation service so one can be swapped in behind :func:`moderate`.
"""

import logging

from clairx.models.responses import ModerationCategories, ModerationResult

logger = logging.getLogger(__name__)

FLAGGED_TERMS = ("explicit", "offensive", "harmful", "illegal", "violence", "violent")

FLAGGED_SCORE = 0.85
CLEAN_SCORE = 0.05


def moderate(text: str, content_type: str = "prompt") -> ModerationResult:
    """Check ``text`` against the denylist."""
    lowered = text.lower()
    if any(term in lowered for term in FLAGGED_TERMS):
        logger.info(f"🚫 [Moderation] Flagged {content_type} content")
        return ModerationResult(
            safe=False,
            categories=ModerationCategories(harmful=True, offensive=True),
            score=FLAGGED_SCORE,
            message="Content may violate community guidelines",
        )
    return ModerationResult(
        safe=True,
        categories=ModerationCategories(harmful=False, offensive=False),
        score=CLEAN_SCORE,
        message="Content appears to be safe",
    )
