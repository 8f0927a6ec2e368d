"""ExportServer: start/stop lifecycle for the HTTP export API under uvicorn."""

from __future__ import annotations

import asyncio
import logging
import signal
import socket

import uvicorn

from vaultdoc.config.models import ServerConfig
from vaultdoc.errors import ServerStateError
from vaultdoc.export.exporter import VaultExporter
from vaultdoc.server.app import ExportAPI
from vaultdoc.vault.paths import DEFAULT_EXPORT_FOLDER

logger = logging.getLogger(__name__)

_STARTUP_POLL = 0.05


class ExportServer:
    """A process-local listener. start() twice is an error, stop() when stopped is a no-op."""

    def __init__(
        self,
        exporter: VaultExporter,
        config: ServerConfig | None = None,
        default_path: str | None = None,
    ) -> None:
        self.config = config or ServerConfig()
        self.app = ExportAPI(exporter, default_path or DEFAULT_EXPORT_FOLDER)
        self._server: uvicorn.Server | None = None
        self._task: asyncio.Task | None = None
        self._socket: socket.socket | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def url(self) -> str:
        return f"http://{self.config.host}:{self.config.port}"

    def _bind(self) -> socket.socket:
        """Bind the listening socket. A taken port raises ServerStateError."""
        family = socket.AF_INET6 if ":" in self.config.host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.config.host, self.config.port))
        except OSError as exc:
            sock.close()
            raise ServerStateError(f"Export server cannot bind {self.url}: {exc}") from exc
        return sock

    async def start(self) -> None:
        if self.is_running:
            raise ServerStateError(f"Export server already running on {self.url}")
        config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            lifespan="off",
            log_config=None,
            timeout_graceful_shutdown=int(self.config.shutdown_timeout),
        )
        sock = self._bind()
        server = uvicorn.Server(config)
        task = asyncio.create_task(server.serve(sockets=[sock]))
        while not server.started:
            if task.done():
                sock.close()
                exc = task.exception()
                raise ServerStateError(f"Export server failed to start on {self.url}") from exc
            await asyncio.sleep(_STARTUP_POLL)
        self._server, self._task, self._socket = server, task, sock
        logger.info(f"Export API listening on {self.url}")

    async def stop(self) -> None:
        if not self.is_running or self._server is None or self._task is None:
            return
        self._server.should_exit = True
        await self._task
        if self._socket is not None:
            self._socket.close()
        self._server, self._task, self._socket = None, None, None
        logger.info("Export API stopped")

    async def serve_forever(self) -> None:
        """Start, then block until SIGINT/SIGTERM, then stop."""
        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop_event.set)
            except NotImplementedError:
                # Windows event loops: fall back to KeyboardInterrupt
                pass
        await self.start()
        try:
            await stop_event.wait()
        finally:
            await self.stop()
