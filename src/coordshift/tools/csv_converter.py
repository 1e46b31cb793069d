"""
coordshift CSV Batch Converter

목적:
경도/위도 컬럼을 가진 CSV 파일의 모든 행을 다른 좌표계로 변환하여
`<target>_lng`, `<target>_lat` 컬럼을 추가한 CSV로 저장합니다.
(예: Baidu POI 덤프 BD09 → WGS84)

사용법:
    coordshift-csv data/baidu_poi.csv output/poi_wgs84.csv --source BD09 --target WGS84
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from coordshift.engine.transform import convert, parse_system
from coordshift.shared.config import settings
from coordshift.shared.constants import CoordinateSystem

logger = logging.getLogger("CSVConverter")


def convert_dataframe(df: pd.DataFrame, source: Union[str, CoordinateSystem],
                      target: Union[str, CoordinateSystem],
                      lng_col: str = "lng", lat_col: str = "lat") -> pd.DataFrame:
    """
    Returns a copy of `df` with `<target>_lng` / `<target>_lat` appended.
    Rows go through the scalar functions one by one so results are identical
    to single-point calls.
    """
    missing = [col for col in (lng_col, lat_col) if col not in df.columns]
    if missing:
        raise ValueError(f"Missing coordinate columns: {missing} (available: {list(df.columns)})")

    src = parse_system(source)
    dst = parse_system(target)
    prefix = dst.value.lower()

    converted = [
        convert(float(lng), float(lat), src, dst)
        for lng, lat in zip(df[lng_col], df[lat_col])
    ]

    out = df.copy()
    out[f"{prefix}_lng"] = [p[0] for p in converted]
    out[f"{prefix}_lat"] = [p[1] for p in converted]
    return out


def convert_csv(input_path: Union[str, Path], output_path: Union[str, Path],
                source: Union[str, CoordinateSystem], target: Union[str, CoordinateSystem],
                lng_col: str = "lng", lat_col: str = "lat") -> int:
    """CSV 읽기 → 변환 → 저장. 변환한 행 수를 반환합니다."""
    input_path = Path(input_path)
    output_path = Path(output_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input CSV not found: {input_path}")

    logger.info(f"[1/3] Loading {input_path}...")
    df = pd.read_csv(input_path)
    logger.info(f"Loaded {len(df)} rows. Columns: {list(df.columns)}")

    logger.info(f"[2/3] Converting {parse_system(source).value} -> {parse_system(target).value}...")
    result = convert_dataframe(df, source, target, lng_col=lng_col, lat_col=lat_col)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    result.to_csv(output_path, index=False)
    logger.info(f"[3/3] Saved {len(result)} rows to {output_path}")
    return len(result)


def build_parser() -> argparse.ArgumentParser:
    systems = [system.value for system in CoordinateSystem]
    parser = argparse.ArgumentParser(description="Convert CSV coordinates between WGS84, GCJ02 and BD09.")
    parser.add_argument("input", help="input CSV path")
    parser.add_argument("output", help="output CSV path")
    parser.add_argument("--source", default="BD09", help=f"source system ({', '.join(systems)})")
    parser.add_argument("--target", default="WGS84", help=f"target system ({', '.join(systems)})")
    parser.add_argument("--lng-col", default="lng", help="longitude column name")
    parser.add_argument("--lat-col", default="lat", help="latitude column name")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        convert_csv(args.input, args.output, args.source, args.target,
                    lng_col=args.lng_col, lat_col=args.lat_col)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Conversion failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
