"""Main application entry point."""

import logging
import os

import uvicorn
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from rentledger.config import settings  # noqa: E402
from rentledger.services.logging import setup_server_logging  # noqa: E402

setup_server_logging(settings.log_file, settings.log_level)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run the API server (and the in-process daily sweep) with uvicorn."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    from rentledger.api.app import app

    logger.info("Starting rent ledger API on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
