"""
Main application module for the gradient stroke backend.

This file sets up the FastAPI application, configures CORS so browser
clients can call the API from any origin, and exposes a simple health
check endpoint.  The gradient router is included under the ``/api``
namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_gradients import router as gradients_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="Gradient Stroke")

    # Allow all origins by default.  Restrict this when deploying next to
    # a known frontend.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint for monitoring and deployment probes.
    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(gradients_router, prefix="/api", tags=["gradients"])

    return app


# Create the application instance.  Uvicorn imports this when running
# `uvicorn gradient_stroke.main:app` from within backend/
app = create_app()
