"""JLC Parts Engine MCP Server - find JLCPCB parts for circuit components."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from .client import CatalogError
from .config import HTTP_PORT, LOG_LEVEL, RATE_LIMIT_REQUESTS
from .engine import JLCPartsEngine
from .footprints import normalize_footprint

logger = logging.getLogger(__name__)

# Global state
_engine: JLCPartsEngine | None = None


@asynccontextmanager
async def lifespan(app):
    """Create the parts engine (and its result cache) for the server's lifetime."""
    global _engine
    _engine = JLCPartsEngine()
    logger.info("Parts engine initialized")

    yield

    if _engine:
        await _engine.close()
        _engine = None


mcp = FastMCP(
    name="jlc-parts-engine",
    instructions="Find JLCPCB/LCSC part numbers for circuit-json source components. Basic parts are listed first.",
    lifespan=lifespan,
)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP sliding window rate limit (requests per minute)."""

    MAX_TRACKED_IPS = 10_000

    def __init__(self, app, requests_per_minute: int = RATE_LIMIT_REQUESTS):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.request_counts: dict[str, list[float]] = {}

    def _get_client_ip(self, request) -> str:
        """Client IP, taking the rightmost X-Forwarded-For entry (set by our proxy)."""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[-1].strip() or "unknown"
        return request.client.host if request.client else "unknown"

    def _check_rate_limit(self, client_ip: str, now: float | None = None) -> bool:
        """Record a request and return True if the IP is over its limit."""
        now = time.time() if now is None else now
        window_start = now - 60

        if client_ip not in self.request_counts and len(self.request_counts) >= self.MAX_TRACKED_IPS:
            self.request_counts = {
                ip: ts for ip, ts in self.request_counts.items() if ts and ts[-1] > window_start
            }
            if len(self.request_counts) >= self.MAX_TRACKED_IPS:
                return True

        recent = [t for t in self.request_counts.get(client_ip, []) if t > window_start]
        if len(recent) >= self.requests_per_minute:
            self.request_counts[client_ip] = recent
            return True
        recent.append(now)
        self.request_counts[client_ip] = recent
        return False

    async def dispatch(self, request, call_next):
        if request.url.path == "/health":
            return await call_next(request)

        if self._check_rate_limit(self._get_client_ip(request)):
            return JSONResponse(
                status_code=429,
                content={"error": "Rate limit exceeded", "retry_after": 60},
                headers={"Retry-After": "60"},
            )
        return await call_next(request)


# Tools

@mcp.tool(
    annotations=ToolAnnotations(
        title="Find JLCPCB Part",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    )
)
async def find_part(
    source_component: dict[str, Any],
    footprinter_string: str | None = None,
) -> dict:
    """Find up to 3 JLCPCB part numbers for a circuit-json source component.

    Args:
        source_component: source_component object, e.g.
            {"type": "source_component", "ftype": "simple_resistor", "resistance": 10000}
        footprinter_string: Footprint, e.g. "0603", "0603cap", "2x4_p2.54",
            or "kicad:Resistor_SMD:R_0603_1608Metric"

    Returns:
        {"jlcpcb": ["C25804", ...]}, or {} for unsupported component types
    """
    if not _engine:
        raise RuntimeError("Engine not initialized")

    try:
        return await _engine.find_part(source_component, footprinter_string)
    except CatalogError as e:
        logger.error(f"Catalog lookup failed: {e}")
        return {"error": str(e)}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Normalize Footprint",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def normalize_package(footprint: str) -> dict:
    """Convert a KiCad or footprinter footprint to the JLCPCB package name.

    Examples: "kicad:Package_SO:SOIC-8_3.9x4.9mm_P1.27mm" -> "SOIC-8", "0603cap" -> "0603"
    """
    return {"footprint": footprint, "package": normalize_footprint(footprint)}


# Health check endpoint
async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "jlc-parts-engine",
        "version": __version__,
    })


def create_app():
    """Create the ASGI application."""
    middleware = [
        Middleware(RateLimitMiddleware, requests_per_minute=RATE_LIMIT_REQUESTS),
    ]

    app = mcp.http_app(
        path="/mcp",
        middleware=middleware,
        transport="streamable-http",
        stateless_http=True,
    )
    app.routes.append(Route("/health", health))
    return app


app = create_app()


def main():
    """Run the server."""
    import uvicorn

    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "jlc_parts_engine.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
