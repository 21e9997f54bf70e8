"""FastAPI application serving the visitor-count proxy.

Run with:
    uvicorn photometa.api:app
or:
    photometa --serve
"""

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from photometa._version import __version__
from photometa.analytics import AnalyticsReporter, mock_visitor_count
from photometa.errors import AnalyticsError

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = [
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
]

app = FastAPI(
    title="photometa",
    description="Image metadata viewer backend: visitor-count analytics proxy",
    version=__version__,
)

# Open to all origins; the counter is embedded on third-party pages
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=ALLOWED_HEADERS,
)


@lru_cache(maxsize=1)
def get_reporter() -> AnalyticsReporter:
    """Analytics reporter built once from configuration."""
    return AnalyticsReporter.from_config()


@app.get("/health")
def health() -> dict:
    """Basic health check."""
    return {"status": "healthy", "version": __version__}


@app.options("/api/visitor-count")
def visitor_count_options() -> Response:
    return Response(status_code=200)


@app.get("/api/visitor-count")
def visitor_count(reporter: AnalyticsReporter = Depends(get_reporter)):
    """Active users over the last 30 days.

    Serves a mock payload when analytics is not configured, and HTTP 500
    when the report itself fails.
    """
    if not reporter.is_configured():
        logger.warning("Missing GA credentials or Property ID")
        return mock_visitor_count().to_payload()

    try:
        return reporter.active_users().to_payload()
    except AnalyticsError as e:
        logger.error(f"Error fetching GA data: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch analytics data"})
