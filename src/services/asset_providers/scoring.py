"""Confidence scoring for asset search results.

A fixed linear weighted sum of five match predicates. The weights and
predicates are part of the API contract: the same (result, criteria) pair
must always produce the same score.
"""

from models.asset import AssetSearchResult, VisualSearchCriteria

CONFIDENCE_WEIGHTS = {
    "keywords": 0.3,
    "style": 0.2,
    "elements": 0.3,
    "mood": 0.1,
    "technical": 0.1,
}

# Result duration must be within this many seconds of the requested duration
DURATION_TOLERANCE_SECONDS = 2.0


def extract_keywords(criteria: VisualSearchCriteria) -> list[str]:
    """Lowercase words from every element description, in element order."""
    return [
        word
        for element in criteria.elements
        for word in element.description.lower().split()
    ]


def calculate_confidence(
    result: AssetSearchResult, criteria: VisualSearchCriteria
) -> float:
    """Score how well ``result`` matches ``criteria``, in [0, 1].

    Args:
        result: Unscored (or previously scored) search result
        criteria: Criteria the search was issued with

    Returns:
        Confidence score capped at 1.0
    """
    score = 0.0
    metadata = result.metadata

    # Keyword overlap with the result's tags
    keywords = extract_keywords(criteria)
    if keywords:
        result_tags = {str(tag).lower() for tag in metadata.get("tags") or []}
        matches = sum(1 for keyword in keywords if keyword in result_tags)
        score += (matches / len(keywords)) * CONFIDENCE_WEIGHTS["keywords"]

    # Declared style, exact match
    result_style = metadata.get("style")
    if result_style and criteria.style is not None and result_style == criteria.style.value:
        score += CONFIDENCE_WEIGHTS["style"]

    # Any element description contained in the result description
    description = str(metadata.get("description") or "").lower()
    if description and any(
        element.description.lower() in description
        for element in criteria.elements
        if element.description
    ):
        score += CONFIDENCE_WEIGHTS["elements"]

    if criteria.mood and metadata.get("mood") == criteria.mood:
        score += CONFIDENCE_WEIGHTS["mood"]

    result_duration = metadata.get("duration")
    if criteria.duration is not None and result_duration is not None:
        try:
            difference = abs(criteria.duration - float(result_duration))
        except (TypeError, ValueError):
            difference = None
        if difference is not None and difference < DURATION_TOLERANCE_SECONDS:
            score += CONFIDENCE_WEIGHTS["technical"]

    return min(1.0, score)
