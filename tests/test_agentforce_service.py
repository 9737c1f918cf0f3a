"""Tests for CRM-based prompt enhancement."""

from clairx.services.agentforce_service import UNKNOWN_CUSTOMER, enhance_prompt, lookup_customer


def test_lookup_known_customer():
    customer = lookup_customer("SF-10042")

    assert customer.name == "Alex Johnson"
    assert customer.marketing_segment == "Tech Professional"


def test_lookup_unknown_customer():
    assert lookup_customer("SF-99999") is UNKNOWN_CUSTOMER
    assert lookup_customer("") is UNKNOWN_CUSTOMER


def test_enhance_prompt_for_known_customer():
    response = enhance_prompt("SF-10043", "a product banner")

    assert response.enhanced_prompt == (
        "a product banner with Minimalist, Pastel colors, Nature style, tailored for a Marketing Executive"
    )
    assert "Sarah Williams" in response.agent_response
    assert response.customer_data.recent_purchases == ["Marketing Analytics", "CRM Premium"]


def test_enhance_prompt_for_unknown_customer():
    response = enhance_prompt("nobody", "a logo")

    assert response.enhanced_prompt == "a logo with Default style style, tailored for a General"
    assert response.customer_data.name == "Unknown Customer"


def test_response_uses_camel_case():
    payload = enhance_prompt("SF-10042", "a poster").model_dump(by_alias=True)

    assert set(payload) == {"enhancedPrompt", "agentResponse", "customerData"}
    assert set(payload["customerData"]) == {"name", "preferences", "recentPurchases", "marketingSegment"}
