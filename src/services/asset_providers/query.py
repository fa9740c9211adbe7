"""Search-query construction shared by all asset providers."""

from models.asset import ElementType, SceneElement, VisualSearchCriteria

# Only the most important elements drive the query
MAX_QUERY_ELEMENTS = 3


def build_character_query(element: SceneElement) -> str:
    """Gender, then age, then the description."""
    attributes = element.attributes
    parts = []
    if attributes.get("gender"):
        parts.append(str(attributes["gender"]))
    if attributes.get("age"):
        parts.append(str(attributes["age"]))
    parts.append(element.description)
    return " ".join(parts)


def build_location_query(element: SceneElement) -> str:
    return element.description


def build_object_query(element: SceneElement) -> str:
    """Size, then color, then the description."""
    attributes = element.attributes
    parts = []
    if attributes.get("size"):
        parts.append(str(attributes["size"]))
    if attributes.get("color"):
        parts.append(str(attributes["color"]))
    parts.append(element.description)
    return " ".join(parts)


ELEMENT_QUERY_BUILDERS = {
    ElementType.CHARACTER: build_character_query,
    ElementType.LOCATION: build_location_query,
    ElementType.OBJECT: build_object_query,
}


def build_search_query(criteria: VisualSearchCriteria) -> str:
    """Build a free-text search query from structured criteria.

    Takes the top elements by importance (the input list is not modified),
    renders each according to its type, then appends style and mood.

    Args:
        criteria: Criteria to render

    Returns:
        Space-joined query string (may be empty)
    """
    top_elements = sorted(criteria.elements, key=lambda e: e.importance, reverse=True)
    parts = [
        ELEMENT_QUERY_BUILDERS[element.type](element)
        for element in top_elements[:MAX_QUERY_ELEMENTS]
    ]

    if criteria.style is not None:
        parts.append(criteria.style.value.lower())
    if criteria.mood:
        parts.append(criteria.mood.lower())

    return " ".join(part for part in parts if part)
