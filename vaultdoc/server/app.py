"""ExportAPI: the ASGI application behind the HTTP export endpoint.

Routes match on exact (method, path). OPTIONS short-circuits for every path, and
every response carries permissive CORS headers.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Awaitable, Callable, Iterator, Mapping
from datetime import datetime, timezone
from itertools import chain
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse, Response, StreamingResponse
from starlette.types import Receive, Scope, Send

from vaultdoc.errors import ConfigurationError
from vaultdoc.export.exporter import VaultExporter
from vaultdoc.server.archive import ArchiveStreamer
from vaultdoc.vault.models import ExportSettings
from vaultdoc.vault.paths import DEFAULT_EXPORT_FOLDER

logger = logging.getLogger(__name__)

SERVICE_NAME = "Vault AsciiDoc Export API"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

Handler = Callable[[Request], Awaitable[Response]]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message, "timestamp": _now_iso()}, status_code=status_code)


def settings_from_json(data: Any, default_path: str = DEFAULT_EXPORT_FOLDER) -> ExportSettings:
    """POST body -> settings. Attachments are on unless literally false."""
    if not isinstance(data, dict):
        raise ConfigurationError("Request body must be a JSON object")
    export_path = data.get("exportPath")
    if export_path is not None and not isinstance(export_path, str):
        raise ConfigurationError("exportPath must be a string")
    return ExportSettings(
        target_location=export_path or default_path,
        include_assets=data.get("includeAttachments") is not False,
        preserve_diagram_source=data.get("renderDiagrams") is not True,
    )


def settings_from_query(params: Mapping[str, str], default_path: str = DEFAULT_EXPORT_FOLDER) -> ExportSettings:
    """Query string -> settings. Flags are on only for the exact string "true"."""
    return ExportSettings(
        target_location=params.get("exportPath") or default_path,
        include_assets=params.get("includeAttachments") == "true",
        preserve_diagram_source=params.get("renderDiagrams") != "true",
    )


def _logged(chunks: Iterator[bytes], filename: str) -> Iterator[bytes]:
    try:
        yield from chunks
    except Exception:
        # Headers are gone already; the connection is dropped mid-archive.
        logger.exception(f"Archive stream {filename} failed after response start")
        raise


class ExportAPI:
    """ASGI app serving /health and /export for one VaultExporter."""

    def __init__(self, exporter: VaultExporter, default_path: str = DEFAULT_EXPORT_FOLDER) -> None:
        self.exporter = exporter
        self.default_path = default_path
        self._routes: dict[tuple[str, str], Handler] = {
            ("GET", "/health"): self.health,
            ("POST", "/export"): self.export_post,
            ("GET", "/export"): self.export_get,
        }

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return
        request = Request(scope, receive)
        response = await self.dispatch(request)
        response.headers.update(CORS_HEADERS)
        await response(scope, receive, send)

    async def dispatch(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return error_response(404, f"Endpoint not found: {request.method} {request.url.path}")
        try:
            return await handler(request)
        except ConfigurationError as exc:
            return error_response(400, str(exc))
        except Exception as exc:
            logger.exception(f"Request {request.method} {request.url.path} failed")
            return error_response(500, f"Export failed: {exc}")

    async def health(self, request: Request) -> Response:
        return JSONResponse({"status": "ok", "timestamp": _now_iso(), "service": SERVICE_NAME})

    async def export_post(self, request: Request) -> Response:
        body = await request.body()
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid JSON body: {exc}") from exc
        return await self._stream_export(settings_from_json(data, self.default_path))

    async def export_get(self, request: Request) -> Response:
        return await self._stream_export(settings_from_query(request.query_params, self.default_path))

    async def _stream_export(self, settings: ExportSettings) -> Response:
        logger.info(f"Starting export with settings: {settings.model_dump()}")
        bundle = await self.exporter.export_to_memory(settings)
        filename = f"vault-export-{int(time.time() * 1000)}.tar"

        chunks = iter(ArchiveStreamer(bundle))
        # Produce the first chunk now so failures up to here still become a 500.
        first = next(chunks, b"")
        logger.info(f"Streaming {len(bundle.entries)} entries as {filename}")
        return StreamingResponse(
            _logged(chain([first], chunks), filename),
            media_type="application/x-tar",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
