"""
coordshift 공유 상수 정의

좌표계 코드, 타원체 파라미터, 중국 영역 경계, API 제한 등
프로젝트 전역에서 사용되는 불변 값들을 중앙 관리합니다.
"""

from enum import Enum


# ─── 좌표계 (Coordinate Systems) ──────────────────────────
class CoordinateSystem(str, Enum):
    WGS84 = "WGS84"    # GPS 표준
    GCJ02 = "GCJ02"    # 중국 국가측회국 "화성" 좌표 (Amap, Tencent)
    BD09 = "BD09"      # Baidu 지도


# ─── Krasovsky 타원체 (GCJ02 오프셋 계산용) ─────────────
PI = 3.1415926535897932384626
X_PI = 3.14159265358979324 * 3000.0 / 180.0
A = 6378245.0                     # 장반경 (m)
EE = 0.00669342162296594323       # 이심률 제곱

# GCJ02 다항식 기준점 (중국 지리적 중심 부근)
ORIGIN_LNG = 105.0
ORIGIN_LAT = 35.0

# ─── BD09 고정 오프셋 ─────────────────────────────────────
BD_LNG_OFFSET = 0.0065
BD_LAT_OFFSET = 0.006

# ─── 중국 영역 경계 (GCJ02 적용 여부 판정) ────────────────
CHINA_LNG_RANGE = (72.004, 137.8347)
CHINA_LAT_RANGE = (0.8293, 55.8271)

# ─── 유효 위도 범위 (API 입력 검증용) ─────────────────────
LAT_RANGE = (-90.0, 90.0)

# ─── API 제한 ─────────────────────────────────────────────
BATCH_MAX_POINTS = 10_000

# ─── 서버 설정 ────────────────────────────────────────────
DEV_PORT = 8000                    # 로컬 개발 포트
