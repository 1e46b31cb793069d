"""
Unit tests for coordshift core engines (transform, metrics, pipeline).
"""

import pytest

from coordshift.engine.metrics import displacement, geodesic_m, roundtrip_error_m, summarize_distances
from coordshift.engine.pipeline import run_transformation_pipeline
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

BEIJING = (116.404, 39.915)
PARIS = (2.3522, 48.8566)


# --- is_out_of_china -------------------------------------------------------

def test_out_of_china_basic():
    assert is_out_of_china(0, 0) is True
    assert is_out_of_china(*BEIJING) is False
    assert is_out_of_china(*PARIS) is True


@pytest.mark.parametrize("lng, lat, expected", [
    (72.004, 30.0, False),
    (72.0039, 30.0, True),
    (137.8347, 30.0, False),
    (137.8348, 30.0, True),
    (110.0, 0.8293, False),
    (110.0, 0.8292, True),
    (110.0, 55.8271, False),
    (110.0, 55.8272, True),
])
def test_out_of_china_thresholds(lng, lat, expected):
    assert is_out_of_china(lng, lat) is expected


# --- WGS84 <-> GCJ02 -------------------------------------------------------

def test_wgs84_gcj02_identity_outside_china():
    assert wgs84_to_gcj02(*PARIS) == PARIS
    assert gcj02_to_wgs84(*PARIS) == PARIS
    assert wgs84_to_gcj02(0.0, 0.0) == (0.0, 0.0)


def test_wgs84_to_gcj02_reference_value():
    # Reference output published with the community coordtransform implementation
    lng, lat = wgs84_to_gcj02(*BEIJING)
    assert lng == pytest.approx(116.41024449916938, abs=1e-8)
    assert lat == pytest.approx(39.91640428150164, abs=1e-8)


def test_gcj02_to_wgs84_reflects_forward_offset():
    lng, lat = gcj02_to_wgs84(*BEIJING)
    assert lng == pytest.approx(116.39775550083061, abs=1e-8)
    assert lat == pytest.approx(39.91359571849836, abs=1e-8)

    # Offset evaluated at the input point and mirrored across it
    fwd_lng, fwd_lat = wgs84_to_gcj02(*BEIJING)
    assert lng == pytest.approx(BEIJING[0] * 2 - fwd_lng, abs=1e-12)
    assert lat == pytest.approx(BEIJING[1] * 2 - fwd_lat, abs=1e-12)


def test_wgs84_gcj02_roundtrip_is_approximate():
    gcj = wgs84_to_gcj02(*BEIJING)
    lng, lat = gcj02_to_wgs84(*gcj)
    assert abs(lng - BEIJING[0]) < 2e-5
    assert abs(lat - BEIJING[1]) < 2e-5
    assert (lng, lat) != BEIJING


# --- GCJ02 <-> BD09 --------------------------------------------------------

def test_gcj02_to_bd09_reference_value():
    lng, lat = gcj02_to_bd09(*BEIJING)
    assert lng == pytest.approx(116.41036949371029, abs=1e-8)
    assert lat == pytest.approx(39.92133699351021, abs=1e-8)


def test_bd09_to_gcj02_reference_value():
    lng, lat = bd09_to_gcj02(*BEIJING)
    assert lng == pytest.approx(116.39762729119315, abs=1e-8)
    assert lat == pytest.approx(39.90865673957631, abs=1e-8)


def test_bd09_applies_outside_china():
    lng, lat = gcj02_to_bd09(*PARIS)
    assert lng != PARIS[0]
    assert lat != PARIS[1]


@pytest.mark.parametrize("point", [BEIJING, (121.4737, 31.2304), (113.2644, 23.1291), PARIS])
def test_gcj02_bd09_roundtrip(point):
    lng, lat = bd09_to_gcj02(*gcj02_to_bd09(*point))
    assert lng == pytest.approx(point[0], abs=1e-5)
    assert lat == pytest.approx(point[1], abs=1e-5)


def test_bd09_leg_offset_magnitude():
    lng, lat = gcj02_to_bd09(*BEIJING)
    assert 0.005 < lng - BEIJING[0] < 0.007
    assert 0.005 < lat - BEIJING[1] < 0.007


# --- composed entry points -------------------------------------------------

@pytest.mark.parametrize("point", [BEIJING, (121.4737, 31.2304), PARIS])
def test_composition_is_bit_identical(point):
    assert bd09_to_wgs84(*point) == gcj02_to_wgs84(*bd09_to_gcj02(*point))
    assert wgs84_to_bd09(*point) == gcj02_to_bd09(*wgs84_to_gcj02(*point))


def test_wgs84_to_bd09_moves_north_east():
    lng, lat = wgs84_to_bd09(*BEIJING)
    assert lng > BEIJING[0]
    assert lat > BEIJING[1]
    assert 1000 < geodesic_m(BEIJING[0], BEIJING[1], lng, lat) < 1600


def test_bd09_to_wgs84_close_to_inverse():
    lng, lat = bd09_to_wgs84(*wgs84_to_bd09(*BEIJING))
    assert geodesic_m(BEIJING[0], BEIJING[1], lng, lat) < 2.0


# --- name based dispatch ---------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    ("WGS84", CoordinateSystem.WGS84),
    ("wgs84", CoordinateSystem.WGS84),
    ("GCJ-02", CoordinateSystem.GCJ02),
    (" bd09 ", CoordinateSystem.BD09),
    (CoordinateSystem.BD09, CoordinateSystem.BD09),
])
def test_parse_system(value, expected):
    assert parse_system(value) is expected


@pytest.mark.parametrize("value", ["EPSG:4326", "", None, 84])
def test_parse_system_rejects_unknown(value):
    with pytest.raises(ValueError):
        parse_system(value)


@pytest.mark.parametrize("source, target, func", [
    ("WGS84", "GCJ02", wgs84_to_gcj02),
    ("GCJ02", "WGS84", gcj02_to_wgs84),
    ("GCJ02", "BD09", gcj02_to_bd09),
    ("BD09", "GCJ02", bd09_to_gcj02),
    ("WGS84", "BD09", wgs84_to_bd09),
    ("BD09", "WGS84", bd09_to_wgs84),
])
def test_convert_dispatch(source, target, func):
    assert convert(*BEIJING, source, target) == func(*BEIJING)


def test_convert_same_system_is_identity():
    for system in CoordinateSystem:
        assert convert(*BEIJING, system, system) == BEIJING


def test_convert_unknown_system():
    with pytest.raises(ValueError):
        convert(*BEIJING, "WGS84", "CGCS2000")


# --- metrics ---------------------------------------------------------------

def test_geodesic_distance():
    # 0.001 degree of latitude is roughly 111 meters
    distance = geodesic_m(127.02764, 37.49794, 127.02764, 37.49894)
    assert 110 < distance < 112


def test_displacement_azimuth():
    east = displacement(116.404, 39.915, 116.405, 39.915)
    assert east["azimuth_deg"] == pytest.approx(90.0, abs=0.01)
    west = displacement(116.405, 39.915, 116.404, 39.915)
    assert west["azimuth_deg"] == pytest.approx(270.0, abs=0.01)
    assert 0 <= west["azimuth_deg"] < 360


def test_roundtrip_error_m():
    assert roundtrip_error_m(*BEIJING, "WGS84", "GCJ02") < 2.0
    assert roundtrip_error_m(*BEIJING, "GCJ02", "BD09") < 2.0
    assert roundtrip_error_m(*PARIS, "WGS84", "GCJ02") == pytest.approx(0.0, abs=1e-9)


def test_summarize_distances():
    summary = summarize_distances([1.0, 2.0, 3.0])
    assert summary == {"count": 3, "avg_m": 2.0, "max_m": 3.0, "min_m": 1.0}

    with pytest.raises(ValueError):
        summarize_distances([])


# --- pipeline --------------------------------------------------------------

def test_transformation_pipeline():
    result = run_transformation_pipeline(*BEIJING)

    assert result["source"] == "WGS84"
    assert result["out_of_china"] is False
    assert set(result["coordinates"]) == {"WGS84", "GCJ02", "BD09"}
    assert result["coordinates"]["WGS84"] == {"lng": BEIJING[0], "lat": BEIJING[1]}

    gcj = wgs84_to_gcj02(*BEIJING)
    assert result["coordinates"]["GCJ02"] == {"lng": gcj[0], "lat": gcj[1]}

    assert set(result["roundtrip"]) == {"GCJ02", "BD09"}
    for rt in result["roundtrip"].values():
        assert rt["error_m"] < 2.0


def test_transformation_pipeline_outside_china():
    result = run_transformation_pipeline(*PARIS, source="gcj02")

    assert result["source"] == "GCJ02"
    assert result["out_of_china"] is True
    assert result["coordinates"]["WGS84"] == {"lng": PARIS[0], "lat": PARIS[1]}
    assert result["roundtrip"]["WGS84"]["error_m"] == pytest.approx(0.0, abs=1e-9)
