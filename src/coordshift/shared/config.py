from typing import List

from pydantic_settings import BaseSettings

from coordshift.shared.constants import BATCH_MAX_POINTS, DEV_PORT


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = DEV_PORT
    CORS_ORIGINS: List[str] = ["*"]           # JSON 배열로 지정 (예: '["https://a.com"]')
    BATCH_MAX_POINTS: int = BATCH_MAX_POINTS   # /transform/batch 요청당 최대 좌표 수

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "COORDSHIFT_"}


settings = Settings()
