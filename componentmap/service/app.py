"""FastAPI application serving the component manifest to inspection clients."""

from __future__ import annotations

from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import MalformedRequestError
from ..logging import get_logger
from ..models import Manifest, manifest_payload
from ..routes import RouteTable, find_route

GREETING = "connected"


class ManifestRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    routeId: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    error: str


def parse_request(message: str | bytes) -> ManifestRequest:
    """Validate an inbound socket message, raising ``MalformedRequestError``."""
    if isinstance(message, bytes):
        try:
            message = message.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedRequestError("Request must be UTF-8 encoded JSON") from exc
    try:
        return ManifestRequest.model_validate_json(message)
    except ValidationError as exc:
        raise MalformedRequestError(f"Request must be a JSON object: {exc.errors()[0]['msg']}") from exc


def create_app(manifest: Manifest, routes: RouteTable | None = None) -> FastAPI:
    """Create the FastAPI application serving a pre-built manifest.

    Every request receives the complete manifest; the requested ``routeId`` is
    only cross-referenced against the route table for logging.
    """
    logger = get_logger("service")
    route_table: RouteTable = routes if routes is not None else {}
    payload: Dict[str, Any] = manifest_payload(manifest)

    app = FastAPI(title="Component Manifest Service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/manifest")
    async def get_manifest() -> Dict[str, Any]:
        return payload

    @app.websocket("/")
    async def manifest_socket(websocket: WebSocket) -> None:
        await websocket.accept()
        await websocket.send_text(GREETING)
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    logger.debug("Inspection client disconnected")
                    return
                # Binary frames carry the same JSON payload as text frames.
                data = message.get("text")
                if data is None:
                    data = message.get("bytes") or b""
                try:
                    request = parse_request(data)
                except MalformedRequestError as exc:
                    logger.warning("Rejected manifest request: %s", exc)
                    await websocket.send_json(ErrorResponse(error=str(exc)).model_dump())
                    continue
                logger.debug("Received manifest request for route %s", request.routeId)
                route = find_route(route_table, request.routeId)
                logger.debug("Route metadata: %s", route)
                await websocket.send_json(payload)
        except WebSocketDisconnect:
            logger.debug("Inspection client disconnected")

    return app


def run_service(
    manifest: Manifest,
    routes: RouteTable | None = None,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
) -> None:  # pragma: no cover - integration path
    app = create_app(manifest, routes)
    # Logging is configured by the CLI; keep uvicorn from replacing it.
    uvicorn.run(app, host=host, port=port, log_config=None)
