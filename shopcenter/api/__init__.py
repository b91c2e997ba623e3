# shopcenter/api/__init__.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from shopcenter.api.routers import (
    admin,
    assistant,
    carts,
    categories,
    health,
    orders,
    products,
    reviews,
    users,
    wishlist,
)
from shopcenter.data.database import create_db_engine, create_session_factory, init_db
from shopcenter.services.assistant import TextGenerator
from shopcenter.services.llm_client import GeminiClient
from shopcenter.utils.logging import get_logger
from shopcenter.utils.settings import Settings, load_settings

logger = get_logger(__name__)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Constraint violation on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=409, content={"detail": "Conflicts with existing data"})


def create_app(settings: Settings | None = None, generator: TextGenerator | None = None) -> FastAPI:
    """
    Builds the application. Configuration is validated here, so a missing
    required setting stops the process before it serves anything.
    """
    settings = settings or load_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    engine = create_db_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="ShopCenter", version="1.0.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.generator = generator or GeminiClient(settings)

    app.add_exception_handler(IntegrityError, integrity_error_handler)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(reviews.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(wishlist.router)
    app.include_router(admin.router)
    app.include_router(assistant.router)

    return app
