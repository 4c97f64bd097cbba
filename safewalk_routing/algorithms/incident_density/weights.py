"""
Severity tiers for free-text incident categories.
"""

from enum import Enum
from typing import Optional


class IncidentWeight(Enum):
    """Severity multiplier applied to an incident within the density radius."""
    HIGH = 8
    MEDIUM = 5
    LOW = 1


# Checked in order; the first tier with a matching keyword wins.
CATEGORY_TIERS = (
    (IncidentWeight.HIGH, ('assault', 'robbery')),
    (IncidentWeight.MEDIUM, ('burglary', 'theft')),
)


def classify_incident_category(category: Optional[str]) -> IncidentWeight:
    """
    Classify a category by case-insensitive substring match.

    Unmatched or missing categories fall to the lowest tier, never to zero.

    Examples:
        >>> classify_incident_category("FELONY ASSAULT")
        <IncidentWeight.HIGH: 8>
        >>> classify_incident_category("PETIT LARCENY")
        <IncidentWeight.LOW: 1>
    """
    description = (category or "").lower()
    for tier, keywords in CATEGORY_TIERS:
        if any(keyword in description for keyword in keywords):
            return tier
    return IncidentWeight.LOW


def incident_weight(category: Optional[str]) -> int:
    """Numeric weight for a category."""
    return classify_incident_category(category).value
