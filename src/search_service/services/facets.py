"""Facet and price-bucket suggestions derived from a result page."""

from typing import Sequence

import numpy as np

from search_service.schemas import FacetSummary, PriceRange, Product
from shared.constants import PRICE_BUCKET_COUNT


class FacetSummarizer:
    """Collects refinable attribute values and a price histogram for a page."""

    def __init__(self, bucket_count: int = PRICE_BUCKET_COUNT):
        self.bucket_count = bucket_count

    def suggest_facets(self, products: Sequence[Product]) -> FacetSummary:
        categories: dict[str, None] = {}
        brands: dict[str, None] = {}
        colors: dict[str, None] = {}
        sizes: dict[str, None] = {}

        for product in products:
            if product.category:
                categories[product.category] = None
            if product.brand:
                brands[product.brand] = None
            colors.update(dict.fromkeys(c for c in product.colors if c))
            sizes.update(dict.fromkeys(s for s in product.sizes if s))

        return FacetSummary(
            categories=list(categories),
            brands=list(brands),
            colors=list(colors),
            sizes=list(sizes),
            price_ranges=self.price_ranges([float(p.price) for p in products]),
        )

    def price_ranges(self, prices: Sequence[float]) -> list[PriceRange]:
        """
        Split [min, max] into equal-width buckets.

        Every bucket is half-open except the last, which also includes the
        maximum price, so the counts always add up to ``len(prices)``.
        Bounds are rounded to cents.
        """
        if not prices:
            return []

        values = np.sort(np.asarray(prices, dtype=np.float64))
        low, high = float(values[0]), float(values[-1])
        edges = np.linspace(low, high, self.bucket_count + 1)

        if high == low:
            counts = np.zeros(self.bucket_count, dtype=np.int64)
            counts[-1] = values.size
        else:
            counts, _ = np.histogram(values, bins=edges)

        return [
            PriceRange(
                min=round(float(edges[i]), 2),
                max=round(float(edges[i + 1]), 2),
                count=int(counts[i]),
            )
            for i in range(self.bucket_count)
        ]
