"""
coordshift Transform API

요청 좌표(lng, lat)를 WGS84 / GCJ02 / BD09 사이에서 변환하고,
변환 전후 이동 거리(m)를 함께 반환합니다.

엔드포인트:
    GET  /api/v1/systems
    GET  /api/v1/out-of-china
    POST /api/v1/transform
    POST /api/v1/transform/batch
    POST /api/v1/pipeline
"""

import logging
import math
import time
from typing import Any, Dict, Tuple

from fastapi import APIRouter, Body, HTTPException, Query

from coordshift.engine.metrics import displacement, summarize_distances
from coordshift.engine.pipeline import run_transformation_pipeline
from coordshift.engine.transform import convert, is_out_of_china, parse_system
from coordshift.shared.config import settings
from coordshift.shared.constants import LAT_RANGE, CoordinateSystem

logger = logging.getLogger("TransformAPI")

router = APIRouter(prefix="/api/v1", tags=["transform"])


def _is_number(value: Any) -> bool:
    # bool은 int의 하위 클래스라 별도로 제외
    return isinstance(value, (float, int)) and not isinstance(value, bool)


def _check_point(lng: float, lat: float) -> Tuple[float, float]:
    # NaN/Infinity, |lat| > 90 은 Geod 거리 계산 결과가 NaN이 되어 JSON 직렬화 불가
    if not math.isfinite(lng) or not math.isfinite(lat):
        raise HTTPException(status_code=400, detail="INVALID_COORDINATES: longitude and latitude must be finite")
    if not (LAT_RANGE[0] <= lat <= LAT_RANGE[1]):
        raise HTTPException(status_code=400, detail=f"INVALID_COORDINATES: latitude {lat} outside {LAT_RANGE}")
    return lng, lat


def _parse_point(payload: Dict[str, Any]) -> Tuple[float, float]:
    lng = payload.get("longitude")
    lat = payload.get("latitude")
    if not _is_number(lng) or not _is_number(lat):
        raise HTTPException(status_code=400, detail="INVALID_COORDINATES: longitude and latitude must be numbers")
    return _check_point(float(lng), float(lat))


def _parse_system(payload: Dict[str, Any], key: str, default: CoordinateSystem) -> CoordinateSystem:
    try:
        return parse_system(payload.get(key, default))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"UNSUPPORTED_SYSTEM: {e}")


def _parse_systems(payload: Dict[str, Any]) -> Tuple[CoordinateSystem, CoordinateSystem]:
    source = _parse_system(payload, "source", CoordinateSystem.WGS84)
    target = _parse_system(payload, "target", CoordinateSystem.BD09)
    return source, target


def _elapsed_ms(start_ms: float) -> int:
    return int(time.time() * 1000 - start_ms)


@router.get("/systems")
def list_systems():
    """지원 좌표계 목록"""
    return {"success": True, "data": [system.value for system in CoordinateSystem]}


@router.get("/out-of-china")
def out_of_china(longitude: float = Query(...), latitude: float = Query(...)):
    """중국 영역 밖 여부 (밖이면 GCJ02 오프셋 미적용)"""
    _check_point(longitude, latitude)
    return {
        "success": True,
        "data": {
            "longitude": longitude,
            "latitude": latitude,
            "out_of_china": is_out_of_china(longitude, latitude),
        },
    }


@router.post("/transform")
def transform_endpoint(payload: Dict[str, Any] = Body(...)):
    """
    단일 좌표 변환

    Request:
        { "longitude": 116.404, "latitude": 39.915, "source": "WGS84", "target": "BD09" }
    """
    start_ms = time.time() * 1000
    lng, lat = _parse_point(payload)
    source, target = _parse_systems(payload)

    try:
        out_lng, out_lat = convert(lng, lat, source, target)
        moved = displacement(lng, lat, out_lng, out_lat)
    except Exception as e:
        logger.error(f"Transform Error: {e}")
        raise HTTPException(status_code=500, detail=f"TRANSFORM_ERROR: {str(e)}")

    logger.debug(f"{source.value} ({lng}, {lat}) -> {target.value} ({out_lng}, {out_lat})")
    return {
        "success": True,
        "data": {
            "input": {"longitude": lng, "latitude": lat, "system": source.value},
            "output": {"longitude": out_lng, "latitude": out_lat, "system": target.value},
            "out_of_china": is_out_of_china(lng, lat),
            "displacement": moved,
        },
        "meta": {"processing_time_ms": _elapsed_ms(start_ms)},
    }


@router.post("/transform/batch")
def transform_batch_endpoint(payload: Dict[str, Any] = Body(...)):
    """
    좌표 목록 일괄 변환 + 이동 거리 요약

    Request:
        { "points": [{ "longitude": 116.404, "latitude": 39.915 }, ...], "source": "BD09", "target": "WGS84" }
    """
    start_ms = time.time() * 1000
    points = payload.get("points")
    if not isinstance(points, list) or not points:
        raise HTTPException(status_code=400, detail="INVALID_COORDINATES: points must be a non-empty list")
    if len(points) > settings.BATCH_MAX_POINTS:
        raise HTTPException(
            status_code=422,
            detail=f"BATCH_TOO_LARGE: {len(points)} points exceeds limit of {settings.BATCH_MAX_POINTS}",
        )

    parsed = []
    for point in points:
        if not isinstance(point, dict):
            raise HTTPException(status_code=400, detail="INVALID_COORDINATES: each point must be an object")
        parsed.append(_parse_point(point))
    source, target = _parse_systems(payload)

    try:
        results = []
        for lng, lat in parsed:
            out_lng, out_lat = convert(lng, lat, source, target)
            moved = displacement(lng, lat, out_lng, out_lat)
            results.append({
                "input": {"longitude": lng, "latitude": lat},
                "output": {"longitude": out_lng, "latitude": out_lat},
                "out_of_china": is_out_of_china(lng, lat),
                "distance_m": moved["distance_m"],
            })
        summary = summarize_distances(r["distance_m"] for r in results)
    except Exception as e:
        logger.error(f"Batch Transform Error: {e}")
        raise HTTPException(status_code=500, detail=f"TRANSFORM_ERROR: {str(e)}")

    summary["out_of_china"] = sum(1 for r in results if r["out_of_china"])
    logger.info(f"Batch {source.value} -> {target.value}: {len(results)} points")

    return {
        "success": True,
        "data": {
            "source": source.value,
            "target": target.value,
            "results": results,
            "summary": summary,
        },
        "meta": {"processing_time_ms": _elapsed_ms(start_ms)},
    }


@router.post("/pipeline")
def pipeline_endpoint(payload: Dict[str, Any] = Body(...)):
    """
    한 좌표를 세 좌표계로 모두 표현하고 원 좌표계로의 왕복 오차(m)를 반환
    """
    start_ms = time.time() * 1000
    lng, lat = _parse_point(payload)
    source = _parse_system(payload, "source", CoordinateSystem.WGS84)

    try:
        result = run_transformation_pipeline(lng, lat, source)
    except Exception as e:
        logger.error(f"Pipeline Error: {e}")
        raise HTTPException(status_code=500, detail=f"TRANSFORM_ERROR: {str(e)}")

    return {
        "success": True,
        "data": result,
        "meta": {"processing_time_ms": _elapsed_ms(start_ms)},
    }
