# app.py
import os

import uvicorn
from dotenv import load_dotenv
from shiny import App

# Load environment variables from .env before the config module reads them
load_dotenv()

from txlens.logging_config import setup_logging
from txlens.ui import app_ui
from txlens.server import server
from txlens.config.blockchain_config import RPC_URL

logger = setup_logging()

HOST = os.environ.get("TXLENS_HOST", "127.0.0.1")
PORT = int(os.environ.get("TXLENS_PORT", "8001"))

app = App(app_ui, server)


def main():
    """Main entry point when running app.py directly"""
    logger.info("=" * 60)
    logger.info(">> STARTING TXLENS")
    logger.info("=" * 60)
    logger.info(f">> RPC endpoint: {RPC_URL}")
    logger.info(f">> Application will be available at http://{HOST}:{PORT}")

    try:
        uvicorn.run(app, host=HOST, port=PORT, log_level="warning")
    except KeyboardInterrupt:
        logger.info("[STOP] Application shutting down...")


if __name__ == "__main__":
    main()
