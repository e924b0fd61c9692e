"""
Spherical geometry helpers for longitude/latitude coordinates.

All functions take coordinates in decimal degrees as (longitude, latitude)
and a sphere radius in meters.
"""
from typing import Sequence
import numpy as np


def to_radians(coordinates: Sequence[tuple[float, float]]) -> tuple[np.ndarray, np.ndarray]:
    """
    Split (lon, lat) pairs into longitude and latitude arrays in radians.

    Args:
        coordinates: Sequence of (longitude, latitude) pairs in degrees

    Returns:
        Tuple of (longitudes, latitudes) as float arrays in radians
    """
    points = np.radians(np.asarray(coordinates, dtype=float).reshape(-1, 2))
    return points[:, 0], points[:, 1]


def haversine_distances(
    lon1: np.ndarray,
    lat1: np.ndarray,
    lon2: np.ndarray,
    lat2: np.ndarray,
    radius: float,
) -> np.ndarray:
    """
    Vectorized great-circle distance between paired points (radians in, meters out).

    The haversine term is clamped to 1 so that floating-point overshoot
    near antipodal points cannot push asin out of its domain.
    """
    d_lat = lat2 - lat1
    d_lon = lon2 - lon1
    a = np.sin(d_lat / 2.0) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(d_lon / 2.0) ** 2
    return 2.0 * radius * np.arcsin(np.minimum(1.0, np.sqrt(a)))


def haversine_m(
    point1: tuple[float, float],
    point2: tuple[float, float],
    radius: float,
) -> float:
    """
    Great-circle distance in meters between two (lon, lat) points in degrees.

    Args:
        point1: First (longitude, latitude) pair
        point2: Second (longitude, latitude) pair
        radius: Sphere radius in meters

    Returns:
        Distance in meters
    """
    lon1, lat1 = np.radians(point1)
    lon2, lat2 = np.radians(point2)
    return float(haversine_distances(lon1, lat1, lon2, lat2, radius))


def ring_edge_lengths_m(coordinates: Sequence[tuple[float, float]], radius: float) -> np.ndarray:
    """
    Great-circle length of every edge along a ring, in traversal order.

    The last entry is the closing edge (last -> first), which has zero
    length when the ring already repeats its first vertex.
    """
    lon, lat = to_radians(coordinates)
    if lon.size < 2:
        return np.zeros(0)
    return haversine_distances(lon, lat, np.roll(lon, -1), np.roll(lat, -1), radius)


def ring_area_m2(coordinates: Sequence[tuple[float, float]], radius: float) -> float:
    """
    Absolute area enclosed by a ring on a sphere, in square meters.

    Each vertex contributes (lon[i+1] - lon[i-1]) * sin(lat[i]) with
    indices wrapping modulo n, so an explicit closing duplicate of the
    first vertex contributes nothing extra.

    Reference:
        Chamberlain and Duquette, "Some Algorithms for Polygons on a
        Sphere", JPL Publication 07-03, 2007.
    """
    lon, lat = to_radians(coordinates)
    if lon.size < 3:
        return 0.0
    lower = np.roll(lon, 1)
    upper = np.roll(lon, -1)
    total = np.sum((upper - lower) * np.sin(lat))
    return float(abs(total) * radius ** 2 / 2.0)
