# routes.py
from fastapi import FastAPI
from controller.namespace_controller import mutating_router, namespace_router
from controller.presentation_controller import presentation_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here. Presentation goes last: its
    single-segment catch-all must not shadow the API routes."""
    app.include_router(namespace_router)
    app.include_router(mutating_router)
    app.include_router(presentation_router)
