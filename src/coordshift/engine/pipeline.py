from typing import Any, Dict, Union

from coordshift.engine.metrics import geodesic_m
from coordshift.engine.transform import convert, is_out_of_china, parse_system
from coordshift.shared.constants import CoordinateSystem


def run_transformation_pipeline(lng: float, lat: float,
                                source: Union[str, CoordinateSystem] = CoordinateSystem.WGS84) -> Dict[str, Any]:
    """
    Takes input lng/lat in `source`, expresses it in all three systems, and
    then converts each of the other two back to `source` to verify
    round-trip accuracy.
    """
    src = parse_system(source)
    coordinates = {}
    roundtrip = {}

    for system in CoordinateSystem:
        x, y = convert(lng, lat, src, system)
        coordinates[system.value] = {"lng": x, "lat": y}
        if system is src:
            continue

        rt_lng, rt_lat = convert(x, y, system, src)
        roundtrip[system.value] = {
            "lng": rt_lng,
            "lat": rt_lat,
            "error_m": geodesic_m(lng, lat, rt_lng, rt_lat),
        }

    return {
        "source": src.value,
        "out_of_china": is_out_of_china(lng, lat),
        "coordinates": coordinates,
        "roundtrip": roundtrip,
    }
