"""
Distance and offset measurement on the WGS84 ellipsoid, relying on pyproj.
"""

from typing import Dict, Iterable, Union

from pyproj import Geod

from coordshift.engine.transform import convert
from coordshift.shared.constants import CoordinateSystem

# Initialize Geod once to avoid overhead
GEOD = Geod(ellps="WGS84")


def geodesic_m(lng1: float, lat1: float, lng2: float, lat2: float) -> float:
    """
    Ellipsoidal distance in meters between two (lng, lat) points.
    """
    _, _, dist = GEOD.inv(lng1, lat1, lng2, lat2)
    return dist


def displacement(lng1: float, lat1: float, lng2: float, lat2: float) -> Dict[str, float]:
    """
    Distance and forward azimuth (degrees clockwise from north, 0~360)
    from the first point to the second.
    """
    az12, _, dist = GEOD.inv(lng1, lat1, lng2, lat2)
    return {"distance_m": dist, "azimuth_deg": az12 % 360.0}


def roundtrip_error_m(lng: float, lat: float, source: Union[str, CoordinateSystem],
                      via: Union[str, CoordinateSystem]) -> float:
    """
    source → via → source 왕복 변환 후 원점과의 거리 (m).
    GCJ02/BD09 역변환 공식의 근사 오차를 확인하는 용도입니다.
    """
    x, y = convert(lng, lat, source, via)
    rt_lng, rt_lat = convert(x, y, via, source)
    return geodesic_m(lng, lat, rt_lng, rt_lat)


def summarize_distances(distances: Iterable[float]) -> Dict[str, float]:
    """
    Count / mean / max / min of a sequence of distances in meters.
    """
    values = list(distances)
    if not values:
        raise ValueError("Distance list must be non-empty")

    return {
        "count": len(values),
        "avg_m": sum(values) / len(values),
        "max_m": max(values),
        "min_m": min(values),
    }
