"""
Coordinate Transformation Utilities for Chinese map coordinate systems.
Converts between WGS84 (GPS), GCJ02 ("Mars" coordinates) and BD09 (Baidu).

All functions take and return (lng, lat) in decimal degrees and are pure:
no state, no I/O, safe to call from any thread.
"""

import math
from typing import Callable, Dict, Tuple, Union

from coordshift.shared.constants import (
    A,
    BD_LAT_OFFSET,
    BD_LNG_OFFSET,
    CHINA_LAT_RANGE,
    CHINA_LNG_RANGE,
    EE,
    ORIGIN_LAT,
    ORIGIN_LNG,
    PI,
    X_PI,
    CoordinateSystem,
)

Coordinate = Tuple[float, float]


def is_out_of_china(lng: float, lat: float) -> bool:
    """
    중국 영역(사각형 근사) 밖이면 True. 밖에서는 GCJ02 오프셋을 적용하지 않습니다.
    """
    return (
        lng < CHINA_LNG_RANGE[0]
        or lng > CHINA_LNG_RANGE[1]
        or lat < CHINA_LAT_RANGE[0]
        or lat > CHINA_LAT_RANGE[1]
    )


def _transform_lat(x: float, y: float) -> float:
    ret = -100.0 + 2.0 * x + 3.0 * y + 0.2 * y * y + 0.1 * x * y + 0.2 * math.sqrt(abs(x))
    ret += (20.0 * math.sin(6.0 * x * PI) + 20.0 * math.sin(2.0 * x * PI)) * 2.0 / 3.0
    ret += (20.0 * math.sin(y * PI) + 40.0 * math.sin(y / 3.0 * PI)) * 2.0 / 3.0
    ret += (160.0 * math.sin(y / 12.0 * PI) + 320 * math.sin(y * PI / 30.0)) * 2.0 / 3.0
    return ret


def _transform_lng(x: float, y: float) -> float:
    ret = 300.0 + x + 2.0 * y + 0.1 * x * x + 0.1 * x * y + 0.1 * math.sqrt(abs(x))
    ret += (20.0 * math.sin(6.0 * x * PI) + 20.0 * math.sin(2.0 * x * PI)) * 2.0 / 3.0
    ret += (20.0 * math.sin(x * PI) + 40.0 * math.sin(x / 3.0 * PI)) * 2.0 / 3.0
    ret += (150.0 * math.sin(x / 12.0 * PI) + 300.0 * math.sin(x / 30.0 * PI)) * 2.0 / 3.0
    return ret


def _gcj02_delta(lng: float, lat: float) -> Coordinate:
    """(dLng, dLat) GCJ02 offset evaluated at the given point."""
    d_lat = _transform_lat(lng - ORIGIN_LNG, lat - ORIGIN_LAT)
    d_lng = _transform_lng(lng - ORIGIN_LNG, lat - ORIGIN_LAT)
    rad_lat = lat / 180.0 * PI
    magic = math.sin(rad_lat)
    magic = 1 - EE * magic * magic
    sqrt_magic = math.sqrt(magic)
    d_lat = (d_lat * 180.0) / ((A * (1 - EE)) / (magic * sqrt_magic) * PI)
    d_lng = (d_lng * 180.0) / (A / sqrt_magic * math.cos(rad_lat) * PI)
    return d_lng, d_lat


def wgs84_to_gcj02(lng: float, lat: float) -> Coordinate:
    """WGS84 → GCJ02"""
    if is_out_of_china(lng, lat):
        return lng, lat
    d_lng, d_lat = _gcj02_delta(lng, lat)
    return lng + d_lng, lat + d_lat


def gcj02_to_wgs84(lng: float, lat: float) -> Coordinate:
    """
    GCJ02 → WGS84 (first-order approximation).

    The forward offset is evaluated at the GCJ02 point itself and reflected
    back across it, so a WGS84 → GCJ02 → WGS84 round trip is off by up to a
    couple of metres. Other tools implementing the same scheme produce the
    same numbers; keep it that way.
    """
    if is_out_of_china(lng, lat):
        return lng, lat
    d_lng, d_lat = _gcj02_delta(lng, lat)
    mg_lng = lng + d_lng
    mg_lat = lat + d_lat
    return lng * 2 - mg_lng, lat * 2 - mg_lat


def gcj02_to_bd09(lng: float, lat: float) -> Coordinate:
    """GCJ02 → BD09 (Amap/Tencent → Baidu)"""
    z = math.sqrt(lng * lng + lat * lat) + 0.00002 * math.sin(lat * X_PI)
    theta = math.atan2(lat, lng) + 0.000003 * math.cos(lng * X_PI)
    return z * math.cos(theta) + BD_LNG_OFFSET, z * math.sin(theta) + BD_LAT_OFFSET


def bd09_to_gcj02(lng: float, lat: float) -> Coordinate:
    """BD09 → GCJ02 (Baidu → Amap/Tencent)"""
    x = lng - BD_LNG_OFFSET
    y = lat - BD_LAT_OFFSET
    z = math.sqrt(x * x + y * y) - 0.00002 * math.sin(y * X_PI)
    theta = math.atan2(y, x) - 0.000003 * math.cos(x * X_PI)
    return z * math.cos(theta), z * math.sin(theta)


def bd09_to_wgs84(lng: float, lat: float) -> Coordinate:
    """BD09 → GCJ02 → WGS84"""
    gcj_lng, gcj_lat = bd09_to_gcj02(lng, lat)
    return gcj02_to_wgs84(gcj_lng, gcj_lat)


def wgs84_to_bd09(lng: float, lat: float) -> Coordinate:
    """WGS84 → GCJ02 → BD09"""
    gcj_lng, gcj_lat = wgs84_to_gcj02(lng, lat)
    return gcj02_to_bd09(gcj_lng, gcj_lat)


# ─── 좌표계 이름 기반 변환 ────────────────────────────────

_CONVERTERS: Dict[Tuple[CoordinateSystem, CoordinateSystem], Callable[[float, float], Coordinate]] = {
    (CoordinateSystem.WGS84, CoordinateSystem.GCJ02): wgs84_to_gcj02,
    (CoordinateSystem.GCJ02, CoordinateSystem.WGS84): gcj02_to_wgs84,
    (CoordinateSystem.GCJ02, CoordinateSystem.BD09): gcj02_to_bd09,
    (CoordinateSystem.BD09, CoordinateSystem.GCJ02): bd09_to_gcj02,
    (CoordinateSystem.WGS84, CoordinateSystem.BD09): wgs84_to_bd09,
    (CoordinateSystem.BD09, CoordinateSystem.WGS84): bd09_to_wgs84,
}


def parse_system(value: Union[str, CoordinateSystem]) -> CoordinateSystem:
    """
    'wgs84', 'GCJ-02', 'bd09' 등 대소문자/하이픈을 무시하고 CoordinateSystem으로 변환.
    지원하지 않는 이름이면 ValueError.
    """
    if isinstance(value, CoordinateSystem):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported coordinate system: {value!r}")
    name = value.strip().upper().replace("-", "")
    try:
        return CoordinateSystem(name)
    except ValueError:
        raise ValueError(f"Unsupported coordinate system: {value!r}") from None


def convert(lng: float, lat: float, source: Union[str, CoordinateSystem],
            target: Union[str, CoordinateSystem]) -> Coordinate:
    """Convert (lng, lat) from `source` to `target`. Same system returns the input."""
    src = parse_system(source)
    dst = parse_system(target)
    if src is dst:
        return lng, lat
    return _CONVERTERS[(src, dst)](lng, lat)
