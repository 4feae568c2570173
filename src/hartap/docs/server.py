"""
HarTap Docs Preview Server

Serves a generated documentation directory (HTML pages plus the OpenAPI
document) over HTTP for local browsing.
"""

import logging
from pathlib import Path
from typing import Optional

try:
    from fastapi import FastAPI
    from fastapi.staticfiles import StaticFiles
    import uvicorn
    FASTAPI_AVAILABLE = True
except ImportError:
    FASTAPI_AVAILABLE = False


class DocsServer:
    """
    Static file server for generated documentation.

    Usage:
        server = DocsServer('./docs')
        server.start(port=8000)
    """

    def __init__(
        self,
        output_dir: str,
        host: str = "127.0.0.1",
        port: int = 8000,
        log_level: str = "info"
    ):
        """
        Initialize docs server.

        Args:
            output_dir: Directory produced by the convert command
            host: Default host to bind to
            port: Default port to bind to
            log_level: Logging level for the server

        Raises:
            ImportError: If FastAPI is not installed
            FileNotFoundError: If output_dir does not exist
        """
        if not FASTAPI_AVAILABLE:
            raise ImportError("FastAPI is required for the docs server. Install with: pip install fastapi uvicorn")

        self.output_dir = Path(output_dir)
        if not self.output_dir.is_dir():
            raise FileNotFoundError(f"Docs directory not found: {self.output_dir}")

        self.host = host
        self.port = port
        self.log_level = log_level

        self.logger = logging.getLogger("hartap.docs")
        self.logger.setLevel(getattr(logging, self.log_level.upper()))

        self.app = self._create_app()

    def _create_app(self) -> 'FastAPI':
        app = FastAPI(
            title="HarTap Docs Preview",
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
        )

        @app.get("/__health__")
        async def health():
            return {"status": "ok", "directory": str(self.output_dir)}

        # html=True serves index.html for "/"
        app.mount("/", StaticFiles(directory=str(self.output_dir), html=True), name="docs")

        self.logger.debug(f"Serving {self.output_dir}")
        return app

    def start(self, host: Optional[str] = None, port: Optional[int] = None, access_log: bool = True):
        """
        Start the server (blocks until interrupted).

        Args:
            host: Host to bind to (overrides constructor value)
            port: Port to bind to (overrides constructor value)
            access_log: Enable access logging
        """
        actual_host = host or self.host
        actual_port = port or self.port

        print(f"🚀 HarTap docs server starting...")
        print(f"   Directory: {self.output_dir}")
        print(f"   Open: http://{actual_host}:{actual_port}/")
        print()

        uvicorn.run(
            self.app,
            host=actual_host,
            port=actual_port,
            log_level=self.log_level,
            access_log=access_log,
        )

    def get_app(self) -> 'FastAPI':
        """
        Get the FastAPI app instance for testing or custom deployment.

        Returns:
            FastAPI application instance
        """
        return self.app
