import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file before app config is read
load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from app import config  # noqa: E402
from app.database.config import Base, create_engine_for, create_session_factory  # noqa: E402
from app.errors import register_exception_handlers  # noqa: E402
from app.middleware.timing import timing_middleware  # noqa: E402
from app.routes import auth_router, health_router, issues_router  # noqa: E402

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(levelname)s | %(name)s | %(message)s",
)


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Build the API. Each app owns its own engine and session factory."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: Create engine and tables
        engine = create_engine_for(database_url or config.DATABASE_URL)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        yield

        # Shutdown: Dispose of the engine
        await engine.dispose()

    app = FastAPI(title="Issue Tracker API", lifespan=lifespan)

    app.middleware("http")(timing_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(issues_router)
    return app


app = create_app()
