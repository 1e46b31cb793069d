import logging
import os

import uvicorn
from dotenv import load_dotenv

from coordshift import __version__
from coordshift.shared.config import settings


def main():
    load_dotenv()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Cloud Run 등 플랫폼이 주입하는 PORT가 있으면 우선
    port = int(os.environ.get("PORT", settings.PORT))
    logging.getLogger("coordshift").info(f"Starting coordshift Transform API v{__version__} on port {port}...")
    uvicorn.run("coordshift.api.server:app", host=settings.HOST, port=port)


if __name__ == "__main__":
    main()
