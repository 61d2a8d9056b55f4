"""
Main application entry point for the skill assessment service.

Usage:
    - Direct: python -m skillassess.main
    - ASGI server: uvicorn skillassess.main:app
"""

import os

from skillassess import create_app
from skillassess.common.logger import app_logger

logger = app_logger.getChild("main")

app = create_app()

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 8000))
    reload_enabled = os.environ.get("RELOAD", "false").lower() == "true"

    logger.info(f"Starting server on {host}:{port} (reload: {reload_enabled})")

    uvicorn.run(
        "skillassess.main:app",
        host=host,
        port=port,
        reload=reload_enabled,
        log_level="info"
    )
