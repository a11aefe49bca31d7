"""Place and date heuristics used to route and project person queries.

These are fixed-list substring scans, not geocoding. False positives (such as
"BE" inside "Berlin") are accepted behaviour.
"""
from __future__ import annotations

US_STATES: tuple[str, ...] = (
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado", "Connecticut",
    "Delaware", "Florida", "Georgia", "Hawaii", "Idaho", "Illinois", "Indiana", "Iowa",
    "Kansas", "Kentucky", "Louisiana", "Maine", "Maryland", "Massachusetts", "Michigan",
    "Minnesota", "Mississippi", "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire",
    "New Jersey", "New Mexico", "New York", "North Carolina", "North Dakota", "Ohio",
    "Oklahoma", "Oregon", "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington", "West Virginia",
    "Wisconsin", "Wyoming",
)

# Regions covered by Open Archives
EUROPEAN_KEYWORDS: tuple[str, ...] = (
    "Netherlands", "Belgium", "France", "Amsterdam", "Rotterdam", "Brussels", "Paris",
    "NL", "BE", "FR",
)


def extract_state(place: str | None) -> str | None:
    """Return the first US state name found verbatim in ``place``.

    Case-sensitive, in list order, so "West Virginia" yields "Virginia".
    """
    if not place:
        return None
    for state in US_STATES:
        if state in place:
            return state
    return None


def is_european_location(birth_place: str | None, death_place: str | None) -> bool:
    """Check whether either place mentions a region Open Archives covers."""
    places = " ".join([birth_place or "", death_place or ""]).lower()
    return any(keyword.lower() in places for keyword in EUROPEAN_KEYWORDS)


def year_start(year: str | None) -> str | None:
    """Expand ``YYYY`` to the first day of that year."""
    return f"{year}-01-01" if year else None


def year_end(year: str | None) -> str | None:
    """Expand ``YYYY`` to the last day of that year."""
    return f"{year}-12-31" if year else None
