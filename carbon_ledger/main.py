"""
Main FastAPI application entry point.
"""
import logging
import os

import uvicorn

from carbon_ledger.create_app import get_app
from carbon_ledger.utils.constants import ConfigFile

logging.basicConfig(level=logging.DEBUG)

app = get_app(os.environ.get("CARBON_LEDGER_CONFIG", ConfigFile.DEVELOPMENT))


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Carbon Ledger API",
        "version": app.version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "carbon-ledger"}


if __name__ == "__main__":
    try:
        uvicorn.run(
            app,
            host="0.0.0.0",
            port=int(os.environ.get("PORT", 8000)),
            log_level="debug",
            loop="asyncio",
        )
    except Exception as e:
        logging.error(f"Error running FastAPI: {e}")
