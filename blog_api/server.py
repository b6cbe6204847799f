import logging
import threading
import time
from typing import Optional

import uvicorn

from blog_api.core.config import Settings, get_settings
from blog_api.main import create_app

logger = logging.getLogger(__name__)


class ServerHandle:
    """A uvicorn server running in a background thread"""

    def __init__(self, server: uvicorn.Server, thread: threading.Thread):
        self.server = server
        self.thread = thread

    @property
    def port(self) -> int:
        return self.server.config.port

    @property
    def running(self) -> bool:
        return self.thread.is_alive() and self.server.started


def run_server(
    database_url: Optional[str] = None,
    port: Optional[int] = None,
    settings: Optional[Settings] = None,
    startup_timeout: float = 10.0
) -> ServerHandle:
    """Start the API on a port and wait until it accepts connections"""
    settings = settings or get_settings()
    overrides = {}
    if database_url is not None:
        overrides["database_url"] = database_url
    if port is not None:
        overrides["port"] = port
    if overrides:
        settings = settings.model_copy(update=overrides)

    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on"
    )
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name="blog-api-server", daemon=True)
    thread.start()

    deadline = time.monotonic() + startup_timeout
    while not server.started:
        if not thread.is_alive():
            raise RuntimeError(f"Server failed to start on port {settings.port}")
        if time.monotonic() > deadline:
            server.should_exit = True
            thread.join()
            raise TimeoutError(f"Server did not start within {startup_timeout}s")
        time.sleep(0.05)

    logger.info(f"Server listening on {settings.host}:{settings.port}")
    return ServerHandle(server, thread)


def close_server(handle: ServerHandle, timeout: float = 10.0) -> None:
    """Stop a server started with run_server"""
    handle.server.should_exit = True
    handle.thread.join(timeout)
    if handle.thread.is_alive():
        raise TimeoutError(f"Server on port {handle.port} did not stop within {timeout}s")
    logger.info(f"Server on port {handle.port} stopped")


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
