"""
coordshift: WGS84 / GCJ02 / BD09 coordinate conversion for Chinese map data.

    from coordshift import wgs84_to_bd09

    lng, lat = wgs84_to_bd09(116.404, 39.915)
"""

from coordshift.engine.transform import (
    bd09_to_gcj02,
    bd09_to_wgs84,
    convert,
    gcj02_to_bd09,
    gcj02_to_wgs84,
    is_out_of_china,
    parse_system,
    wgs84_to_bd09,
    wgs84_to_gcj02,
)
from coordshift.shared.constants import CoordinateSystem

__version__ = "1.0.0"

__all__ = [
    "CoordinateSystem",
    "bd09_to_gcj02",
    "bd09_to_wgs84",
    "convert",
    "gcj02_to_bd09",
    "gcj02_to_wgs84",
    "is_out_of_china",
    "parse_system",
    "wgs84_to_bd09",
    "wgs84_to_gcj02",
]
