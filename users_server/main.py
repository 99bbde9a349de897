"""Main FastAPI application for the users server."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from users_server.db import DATABASE_PATH, build_engines, build_session_maker, startup_database
from users_server.endpoints.user_endpoints import database_error_handler, user_router

HOST = "0.0.0.0"
PORT = 8080


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database before serving and close it afterwards."""
    try:
        startup_database(app.state.sync_engine)
        print(f"Server started at http://localhost:{PORT}")
        yield
    finally:
        app.state.sync_engine.dispose()
        await app.state.async_engine.dispose()


def create_app(db_path: str = DATABASE_PATH) -> FastAPI:
    """Build the application around one SQLite file."""
    app = FastAPI(
        title="Users API",
        description="Lists the users stored in a local SQLite file as plain text",
        version="0.1.0",
        lifespan=lifespan,
    )

    sync_engine, async_engine = build_engines(db_path)
    async_session_local = build_session_maker(async_engine)
    app.state.sync_engine = sync_engine
    app.state.async_engine = async_engine
    app.state.async_session_local = async_session_local

    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # Add middleware to disable caching
    @app.middleware("http")
    async def no_cache_middleware(request, call_next):
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response

    # Catch-all route, must stay last
    app.include_router(user_router)

    return app


app = create_app()


def run() -> None:
    """Serve the application on all interfaces."""
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
