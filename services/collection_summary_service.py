"""
Collection summaries.

Counts variant rows across collections; zero rows disables submission.
"""

from typing import Iterable

from models.catalog import Collection, CollectionSummary


def summarize(collections: Iterable[Collection]) -> CollectionSummary:
    """
    Aggregate counts for a set of collections.

    Args:
        collections: Usually the selected collections

    Returns:
        CollectionSummary with total_products = number of variant rows
    """
    summary = CollectionSummary()
    for collection in collections:
        summary.total_collections += 1
        for row in collection.products:
            summary.total_products += 1
            if row.has_weight:
                summary.weighted_variants += 1
            else:
                summary.unweighted_variants += 1
    return summary
