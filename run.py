"""Entry point for the Pokedex API.

Launches the FastAPI application with Uvicorn.  Intended to be executed
from the project root, for example under Docker, where you only specify
a single Python file to run.

Configuration such as MONGODB_URL, DEFAULT_LIMIT, HOST and PORT is read
from environment variables; see ``pokedex_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from pokedex_api.app.core.config import settings
from pokedex_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
