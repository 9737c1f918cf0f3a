"""Prompt enhancement from mocked CRM ("Agentforce") customer records."""

import logging

from clairx.models.responses import AgentforceResponse, CustomerProfile

logger = logging.getLogger(__name__)

CUSTOMERS: dict[str, CustomerProfile] = {
    "SF-10042": CustomerProfile(
        name="Alex Johnson",
        preferences=["Modern design", "Vibrant colors", "Technology"],
        recent_purchases=["Cloud Services", "AI Development Tools"],
        marketing_segment="Tech Professional",
    ),
    "SF-10043": CustomerProfile(
        name="Sarah Williams",
        preferences=["Minimalist", "Pastel colors", "Nature"],
        recent_purchases=["Marketing Analytics", "CRM Premium"],
        marketing_segment="Marketing Executive",
    ),
}

UNKNOWN_CUSTOMER = CustomerProfile(
    name="Unknown Customer",
    preferences=["Default style"],
    recent_purchases=[],
    marketing_segment="General",
)


def lookup_customer(customer_id: str) -> CustomerProfile:
    """CRM record for ``customer_id``, or the generic profile when unknown."""
    return CUSTOMERS.get(customer_id, UNKNOWN_CUSTOMER)


def enhance_prompt(customer_id: str, prompt: str) -> AgentforceResponse:
    """Tailor ``prompt`` to the customer's preferences and marketing segment."""
    customer = lookup_customer(customer_id)
    preferences = ", ".join(customer.preferences)
    logger.debug(f"[Agentforce] Enhancing prompt for segment {customer.marketing_segment}")

    return AgentforceResponse(
        enhanced_prompt=f"{prompt} with {preferences} style, tailored for a {customer.marketing_segment}",
        agent_response=(
            f"I've enhanced your prompt based on {customer.name}'s preferences ({preferences}) "
            f"and their segment ({customer.marketing_segment})."
        ),
        customer_data=customer,
    )
