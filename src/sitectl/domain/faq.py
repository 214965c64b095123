"""FAQ entries rendered on the landing page.

The list is presentational data only: order is preserved, nothing is
fetched or persisted.
"""

from __future__ import annotations

from pydantic import BaseModel


class FaqItem(BaseModel):
    """A single question/answer pair."""

    model_config = {"frozen": True}

    question: str
    answer: str


DEFAULT_FAQ: tuple[FaqItem, ...] = (
    FaqItem(
        question="How much does the app cost?",
        answer=(
            "TrakkyFood is completely free for users! You can download it and start "
            "searching for food trucks without any subscription fees."
        ),
    ),
    FaqItem(
        question="Is the location tracking really live?",
        answer=(
            "Yes! We provide real-time GPS tracking for registered food trucks, so you "
            "see their exact spot as they move or park."
        ),
    ),
    FaqItem(
        question="Can I see the menus before going?",
        answer=(
            "Absolutely. Each truck profile includes a full digital menu with prices "
            "and photos to help you decide."
        ),
    ),
    FaqItem(
        question="How do I register my own food truck?",
        answer=(
            'You can contact our support team through the "For Business" link in the '
            "footer or directly from the app's settings."
        ),
    ),
)
