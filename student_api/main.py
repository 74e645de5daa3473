import argparse
import errno
import logging
import socket
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Response

from student_api.api.router import api_router
from student_api.core.config import Settings, log_config, settings
from student_api.core.database import init_storage
from student_api.core.exceptions import PortInUseError, StorageError
from student_api.core.handlers import register_exception_handlers
from student_api.core.logging import setup_logging
from student_api.services.student.store import StudentStore

logger = logging.getLogger(__name__)

SWAGGER_PATH = Path(__file__).parent / "static" / "swagger.yaml"
SWAGGER_URL = "/swagger"


def create_app(store: StudentStore, config: Settings = settings) -> FastAPI:
    """
    Build the application around an already initialized record store.
    """
    app = FastAPI(
        title=config.PROJECT_NAME,
        version=config.APP_VERSION,
        debug=config.DEBUG
    )
    app.state.store = store

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router)

    @app.get("/")
    def root():
        """
        Welcome endpoint
        """
        return {
            "message": f"Welcome to {config.PROJECT_NAME}",
            "description": "CRUD service for student records: name, email, LinkedIn profile and phone",
            "swagger_url": SWAGGER_URL,
            "version": config.APP_VERSION
        }

    if config.SERVE_SWAGGER:
        swagger_document = SWAGGER_PATH.read_bytes()

        @app.get(SWAGGER_URL, include_in_schema=False)
        def swagger():
            return Response(content=swagger_document, media_type="application/yaml")

    return app


# =============================================================================
# SERVER STARTUP
# =============================================================================

def bind_socket(host: str, port: int) -> socket.socket:
    """
    Bind the listening socket before the server starts, so an occupied
    port is reported as PortInUseError instead of a generic startup failure.
    """
    sock = socket.socket(socket.AF_INET6 if ":" in host else socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        if e.errno == errno.EADDRINUSE:
            raise PortInUseError(host, port) from e
        raise
    sock.set_inheritable(True)
    return sock


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the student records API")
    parser.add_argument("--host", default=None, help="Host interface to bind")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default 8080)")
    parser.add_argument("--db", default=None, help="Path to SQLite database file (default ./students.db)")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    """Layer command line flags over environment and .env settings."""
    overrides = {}
    if args.host is not None:
        overrides["HOST"] = args.host
    if args.port is not None:
        overrides["PORT"] = args.port
    if args.db is not None:
        overrides["DATABASE_PATH"] = args.db
    return Settings(**overrides)


def run(argv: Optional[List[str]] = None) -> None:
    config = load_settings(parse_args(argv))
    setup_logging(config.LOG_LEVEL)
    log_config(config)

    try:
        engine = init_storage(
            config.DATABASE_PATH,
            strict=config.STRICT_STORAGE_CHECKS,
            echo=config.DB_ECHO_SQL,
        )
    except StorageError as e:
        logger.critical(f"❌ Failed to initialize database: {e}")
        sys.exit(1)

    store = StudentStore(engine)
    try:
        try:
            sock = bind_socket(config.HOST, config.PORT)
        except PortInUseError as e:
            logger.critical(
                f"❌ Port {e.port} is already in use. Stop the process holding it "
                f"or start the server on another port with --port <number>."
            )
            sys.exit(1)
        except OSError as e:
            logger.critical(f"❌ Failed to start server: {e}")
            sys.exit(1)

        logger.info(f"Server starting on {config.HOST}:{config.PORT}...")
        server = uvicorn.Server(
            uvicorn.Config(
                create_app(store, config),
                log_level=config.LOG_LEVEL.lower(),
            )
        )
        server.run(sockets=[sock])
    finally:
        store.close()


if __name__ == "__main__":
    run()
