"""Batch enrichment of track CSVs with original-album data."""

from spotify_suite.enrichment.engine import EnrichmentEngine
from spotify_suite.enrichment.models import EnrichedRow, EnrichmentResult, InputRow

__all__ = [
    "EnrichmentEngine",
    "EnrichedRow",
    "EnrichmentResult",
    "InputRow",
]
