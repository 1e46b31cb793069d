from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coordshift import __version__
from coordshift.api.routes import router as transform_router
from coordshift.shared.config import settings

app = FastAPI(title="coordshift Coordinate Transform API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(transform_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "version": __version__}
