import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from .core.config import settings
from .core.cors import setup_cors
from .core.http_client import close_http_client
from .core.logging_config import setup_logging
from .api.v1.routers import game as game_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("%s starting (env=%s, target language=%s)", settings.APP_NAME, settings.APP_ENV, settings.TARGET_LANG)
    yield
    game_router.reset_service()
    await close_http_client()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
setup_cors(app)

app.include_router(game_router.router, prefix=settings.API_V1_PREFIX)

@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
