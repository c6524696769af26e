import logging
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()

from .core.config import settings  # noqa: E402  settings read the environment loaded above
from .core.env import get_env_name  # noqa: E402
from .db import init_db  # noqa: E402
from .exception_handlers import register_exception_handlers  # noqa: E402
from .routers import answers, questions, users  # noqa: E402

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("answerboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting answerboard (ENV={get_env_name()}, reputation backend={settings.REPUTATION_BACKEND})")
    init_db()
    yield
    logger.info("answerboard shutting down")


def create_app() -> FastAPI:
    app = FastAPI(title="answerboard", version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(questions.router)
    app.include_router(answers.router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
