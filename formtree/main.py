"""FastAPI app wiring for the order form.

This module owns the public ASGI `app` instance and the router wiring.
"""

import logging
import os

from fastapi import FastAPI

from formtree.routes.api import router as api_router
from formtree.routes.pages import router as pages_router

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="formtree: check group demo")


def create_application() -> FastAPI:
    """Return the configured FastAPI app for external servers/importers."""
    return app

# Pages + API
app.include_router(pages_router)
app.include_router(api_router)
