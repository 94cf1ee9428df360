"""Multi-signal relevance scoring for a page of search results."""

from typing import Sequence

from search_service.schemas import Product, RankedProduct
from search_service.services.signal_store import SignalStore


class RelevanceScorer:
    """Scores products against expanded search terms and user signals.

    Field bonuses are presence bonuses: each field contributes at most once
    per product however many terms match it. Quality, popularity and
    availability signals are added on top, followed by the requesting
    user's view and click counts. Cart adds are tracked but not scored.
    """

    NAME_MATCH = 100.0
    DESCRIPTION_MATCH = 50.0
    CATEGORY_MATCH = 30.0
    TAG_MATCH = 20.0

    RATING_WEIGHT = 10.0
    REVIEW_WEIGHT = 2.0
    SALES_WEIGHT = 5.0
    VIEW_WEIGHT = 1.0

    IN_STOCK_BONUS = 20.0
    FEATURED_BONUS = 30.0
    NEW_BONUS = 15.0
    SALE_BONUS = 10.0

    USER_VIEW_WEIGHT = 5.0
    USER_CLICK_WEIGHT = 10.0

    def __init__(self, signal_store: SignalStore):
        self.signal_store = signal_store

    def score(
        self,
        products: Sequence[Product],
        terms: Sequence[str],
        user_id: str | None = None,
    ) -> list[RankedProduct]:
        """Return products ranked by descending score; ties keep input order."""
        lowered = [t.lower() for t in terms if t]
        ranked = [
            RankedProduct.from_product(p, relevance_score=self.score_product(p, lowered, user_id))
            for p in products
        ]
        ranked.sort(key=lambda r: r.relevance_score, reverse=True)
        return ranked

    def score_product(self, product: Product, terms: Sequence[str], user_id: str | None = None) -> float:
        score = self._text_score(product, terms)

        score += product.average_rating * self.RATING_WEIGHT
        score += product.total_reviews * self.REVIEW_WEIGHT
        score += product.sales_count * self.SALES_WEIGHT
        score += product.view_count * self.VIEW_WEIGHT

        if product.stock_quantity > 0:
            score += self.IN_STOCK_BONUS
        if product.is_featured:
            score += self.FEATURED_BONUS
        if product.is_new:
            score += self.NEW_BONUS
        if product.is_sale:
            score += self.SALE_BONUS

        if user_id:
            interaction = self.signal_store.get_interaction(user_id, product.id)
            if interaction:
                score += interaction.views * self.USER_VIEW_WEIGHT
                score += interaction.clicks * self.USER_CLICK_WEIGHT

        return score

    def _text_score(self, product: Product, terms: Sequence[str]) -> float:
        if not terms:
            return 0.0

        name = product.name.lower()
        description = product.description.lower()
        category = product.category.lower()
        tags = [t.lower() for t in product.tags]

        score = 0.0
        if any(t in name for t in terms):
            score += self.NAME_MATCH
        if any(t in description for t in terms):
            score += self.DESCRIPTION_MATCH
        if any(t in category for t in terms):
            score += self.CATEGORY_MATCH
        if any(t in tag for t in terms for tag in tags):
            score += self.TAG_MATCH
        return score
