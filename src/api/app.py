"""
FastAPI application factory.

* Registers routes for dispatch, dashboards, emergency contacts and admin.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import admin, contacts, requests, sos

logging.basicConfig(level=logging.INFO)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Lifesaver Emergency Dispatch API",
        description=(
            "Routes SOS and emergency requests to the nearest available "
            "hospital within 5 km, falling back to the nearest verified "
            "on-duty responder.  Hospitals and responders work the "
            "resulting requests through their dashboards."
        ),
        version="1.0.0",
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(sos.router, prefix="/api/v1")
    app.include_router(requests.router, prefix="/api/v1")
    app.include_router(contacts.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
