import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from api.app.config import settings
from api.app.routers.records import router as records_router
from api.app.routers.meta import router as meta_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    yield

app = FastAPI(lifespan=lifespan, title="AdminDesk Views API", version="0.1.0")

app.include_router(records_router)
app.include_router(meta_router)

@app.get("/health")
def health():
    return {
        "status": "OK",
        "version": app.version,
        "env": settings.app_env,
        "services": {
            "admin_api": "configured" if settings.admin_api_url else "missing",
        },
    }
