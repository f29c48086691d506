from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dotenv import load_dotenv

from persistence.errors import PersonStoreError
from persistence.repositories import AsyncDiskPersonRepository, AsyncPersonRepository
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "person_repo", None) is None:
        settings: Settings = app.state.settings
        app.state.person_repo = await asyncio.to_thread(
            AsyncDiskPersonRepository.open, settings.person_db_path
        )
    yield


async def _person_store_error_handler(request: Request, exc: PersonStoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("PERSON %s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse({"detail": "Error trying to access people storage"}, status_code=exc.status_code)
    return JSONResponse({"detail": str(exc)}, status_code=exc.status_code)


async def _request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Undecodable bodies and bad path params are client errors; report 400, not 422.
    logger.info("PERSON %s %s bad request: %s", request.method, request.url.path, exc.errors())
    return JSONResponse({"detail": "Request body should be a json person object"}, status_code=400)


def create_app(settings: Settings | None = None, person_repo: AsyncPersonRepository | None = None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.person_endpoints import router as person_router

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings or get_settings()
    # Tests may inject a ready repository; otherwise lifespan opens the file.
    app.state.person_repo = person_repo

    app.add_exception_handler(PersonStoreError, _person_store_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_error_handler)

    if app.state.settings.debug_log_requests:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            response = await call_next(request)
            logger.info("REQUEST %s %s -> %s", request.method, request.url.path, response.status_code)
            return response

    app.include_router(person_router)

    return app


def main() -> None:
    import uvicorn

    load_dotenv("local.env")
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


app = create_app()


if __name__ == "__main__":
    main()
