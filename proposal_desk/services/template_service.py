"""
Built-in proposal templates. Prices are whole CZK, excluding tax;
the tax rate is filled in from settings when a template is requested.
"""

from __future__ import annotations

from proposal_desk.models.enums import ProposalStatus
from proposal_desk.models.schemas import PriceItemInput, ProposalPayload, ProposalTemplate
from proposal_desk.services.errors import ProposalNotFoundError

_TEMPLATES: list[dict] = [
    {
        "id": "web-redesign",
        "title": "Web Redesign",
        "description": "Complete redesign of the marketing website",
        "scope_md": (
            "## Scope\n"
            "- Audit of the current website\n"
            "- UX/UI redesign\n"
            "- Implementation\n"
            "- Testing and deployment"
        ),
        "timeline_md": (
            "## Timeline\n"
            "- Weeks 1–2: analysis and design\n"
            "- Weeks 3–4: implementation\n"
            "- Week 5: testing\n"
            "- Week 6: deployment and handover"
        ),
        "price_items": [
            ("UX/UI design", 1, 65000),
            ("Frontend development", 1, 92000),
            ("Testing and QA", 1, 18000),
        ],
    },
    {
        "id": "crm-implementation",
        "title": "CRM Implementation",
        "description": "CRM rollout and team onboarding",
        "scope_md": (
            "## Scope\n"
            "- Audit of the current sales process\n"
            "- CRM configuration\n"
            "- E-mail and calendar integration\n"
            "- Team training"
        ),
        "timeline_md": (
            "## Timeline\n"
            "- Week 1: audit and plan\n"
            "- Week 2: CRM configuration\n"
            "- Week 3: integrations\n"
            "- Week 4: training and handover"
        ),
        "price_items": [
            ("Analysis and planning", 1, 38000),
            ("Implementation", 1, 54000),
            ("Training", 1, 22000),
        ],
    },
    {
        "id": "support-retainer",
        "title": "Monthly Support Retainer",
        "description": "Monthly development and support package",
        "scope_md": (
            "## Scope\n"
            "- Task prioritisation\n"
            "- 40 hours of development per month\n"
            "- Incident support\n"
            "- Reporting and recommendations"
        ),
        "timeline_md": (
            "## Timeline\n"
            "- Start within 1 week of signature\n"
            "- Monthly review\n"
            "- Hours usage overview"
        ),
        "price_items": [
            ("Retainer (40h)", 1, 75000),
        ],
    },
]


def _build(raw: dict, tax_rate: float) -> ProposalTemplate:
    return ProposalTemplate(
        id=raw["id"],
        title=raw["title"],
        description=raw["description"],
        scope_md=raw["scope_md"],
        timeline_md=raw["timeline_md"],
        price_items=[
            PriceItemInput(label=label, quantity=qty, unit_price_minor=price, tax_rate=tax_rate)
            for label, qty, price in raw["price_items"]
        ],
    )


def list_templates(tax_rate: float) -> list[ProposalTemplate]:
    return [_build(raw, tax_rate) for raw in _TEMPLATES]


def get_template(template_id: str, tax_rate: float) -> ProposalTemplate:
    for raw in _TEMPLATES:
        if raw["id"] == template_id:
            return _build(raw, tax_rate)
    raise ProposalNotFoundError(f"Template {template_id} not found")


def payload_from_template(template_id: str, tax_rate: float) -> ProposalPayload:
    """A new DRAFT proposal pre-filled from a template."""
    template = get_template(template_id, tax_rate)
    return ProposalPayload(
        title=template.title,
        scope_md=template.scope_md,
        timeline_md=template.timeline_md,
        status=ProposalStatus.DRAFT,
        price_items=template.price_items,
    )
