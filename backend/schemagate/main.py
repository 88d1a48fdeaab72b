import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schemagate.api.routes import router
from schemagate.core.config import settings
from schemagate.core.logging import configure_logging
from schemagate.services.migration_source import load_migrations
from schemagate.use_cases.startup import StartupSequence

log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="schemagate")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


def serve() -> None:
    app = create_app()
    log.info("Started server at %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


def main() -> None:
    configure_logging(settings.log_level)
    sequence = StartupSequence(settings.database_url, load_migrations())
    result = sequence.start(serve=serve)
    if not result.ok:
        log.error("Startup aborted: %s", result.message)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
