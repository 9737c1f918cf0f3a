"""Tests for content moderation."""

import pytest

from clairx.services.moderation_service import CLEAN_SCORE, FLAGGED_SCORE, moderate


def test_violent_content_flagged():
    result = moderate("this is violent content")

    assert result.safe is False
    assert result.categories.harmful is True
    assert result.categories.offensive is True
    assert result.score == FLAGGED_SCORE
    assert result.message == "Content may violate community guidelines"


@pytest.mark.parametrize("text", ["EXPLICIT scene", "an Illegal act", "harmful advice", "graphic violence"])
def test_denylist_is_case_insensitive(text):
    assert moderate(text).safe is False


def test_clean_content():
    result = moderate("a red fox in the snow", content_type="edit-prompt")

    assert result.safe is True
    assert result.categories.harmful is False
    assert result.categories.offensive is False
    assert result.score == CLEAN_SCORE
    assert result.message == "Content appears to be safe"


def test_serialized_shape():
    assert moderate("a calm lake").model_dump(by_alias=True) == {
        "safe": True,
        "categories": {"harmful": False, "offensive": False},
        "score": 0.05,
        "message": "Content appears to be safe",
    }
