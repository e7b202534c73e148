import uvicorn
from fastapi import FastAPI

from whichcard.api.routes.health import router as health_router
from whichcard.api.routes.log_request import router as log_request_router
from whichcard.api.routes.recommend import router as recommend_router
from whichcard.api.routes.settings import router as settings_router
from whichcard.config import settings
from whichcard.logging import setup_logging

app = FastAPI(title="WhichCard API", version="0.1.0")
app.include_router(health_router)
app.include_router(recommend_router)
app.include_router(settings_router)
app.include_router(log_request_router)


def run() -> None:
    setup_logging(settings.log_level, settings.log_format)
    uvicorn.run("whichcard.api.app:app", host=settings.app_host, port=settings.app_port, reload=False)
