import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

import flashquiz.models  # registers every table on Base.metadata
from flashquiz.api.routes import auth, flashcards, marathons, quizzes
from flashquiz.core.config import settings
from flashquiz.core.exceptions import FlashquizError, Unauthorized
from flashquiz.core.logging import configure_logging
from flashquiz.db.base import Base
from flashquiz.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    logger.info("Flashquiz API ready")
    yield
    engine.dispose()
    logger.info("Flashquiz API shutdown complete")


app = FastAPI(title="Flashquiz API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FlashquizError)
async def flashquiz_error_handler(request: Request, exc: FlashquizError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=headers)


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(flashcards.router, prefix="/api/flashcards", tags=["flashcards"])
app.include_router(flashcards.categories_router, prefix="/api/categories", tags=["categories"])
app.include_router(quizzes.router, prefix="/api/quizzes", tags=["quizzes"])
app.include_router(marathons.router, prefix="/api/marathons", tags=["marathons"])


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
