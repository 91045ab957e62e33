"""
Entry point for the gradient stroke service.

Running this script with ``python run.py`` starts the FastAPI server
defined in ``backend/gradient_stroke/main.py``.  The ``backend``
directory is added to the Python path first so the package imports
without being installed.

Environment variables:
    GRADIENT_HOST: Interface to bind (default ``0.0.0.0``).
    GRADIENT_PORT: Port to listen on (default ``8000``).
    LOG_LEVEL: Root logging level (default ``INFO``).
    STROKE_DEBUG: When set, log every computed line join.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import uvicorn

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "DEBUG" if os.getenv("STROKE_DEBUG") else "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the gradient stroke API."""
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    # Import inside main() to avoid modifying sys.path at module import time.
    from gradient_stroke.main import app  # type: ignore

    uvicorn.run(
        app,
        host=os.getenv("GRADIENT_HOST", "0.0.0.0"),
        port=int(os.getenv("GRADIENT_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
