"""
Boundary diagnostics.

Rings that are not closed or that cross themselves are still measured;
these helpers only report what looks suspicious so it can be logged.
"""
import logging
from typing import Sequence

from shapely.errors import GEOSException
from shapely.geometry import LineString, Polygon
from shapely.validation import explain_validity

logger = logging.getLogger(__name__)


def is_closed(coordinates: Sequence[tuple[float, float]]) -> bool:
    """Check whether the first and last vertices coincide."""
    return len(coordinates) > 0 and tuple(coordinates[0]) == tuple(coordinates[-1])


def is_self_intersecting(coordinates: Sequence[tuple[float, float]]) -> bool:
    """
    Check whether the boundary path crosses itself.

    The path is treated as planar lon/lat segments, which is good enough
    to flag bow-tie shapes drawn on a map.

    Args:
        coordinates: Sequence of (longitude, latitude) pairs

    Returns:
        True if the closed boundary is not simple
    """
    path = list(coordinates)
    if not is_closed(path):
        path.append(path[0])
    return not LineString(path).is_simple


def describe_ring_issues(coordinates: Sequence[tuple[float, float]]) -> list[str]:
    """
    Collect human-readable warnings about a ring.

    Args:
        coordinates: Sequence of (longitude, latitude) pairs

    Returns:
        List of warning messages (empty when the ring looks fine)
    """
    issues = []
    if not is_closed(coordinates):
        issues.append("ring is not closed (first vertex differs from last)")

    try:
        if is_self_intersecting(coordinates):
            issues.append("ring crosses itself")
        else:
            polygon = Polygon(coordinates)
            if not polygon.is_valid:
                issues.append(f"invalid polygon: {explain_validity(polygon)}")
    except (GEOSException, ValueError) as e:
        issues.append(f"geometry could not be checked: {e}")

    for issue in issues:
        logger.warning(f"Boundary diagnostic: {issue}")
    return issues
