from fastapi import FastAPI

from . import gate, health, workflow


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(workflow.router)
    app.include_router(gate.router)
