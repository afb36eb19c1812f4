import logging

import uvicorn

import config
from utils.logging_config import setup_logging

# Initialize centralized logging configuration
setup_logging()

from app import app


def main() -> None:
    logging.info(f"🔧 [run.py] Serving storefront API on {config.WEBAPP_HOST}:{config.WEBAPP_PORT}")
    # log_config=None keeps the handlers installed by setup_logging()
    uvicorn.run(app, host=config.WEBAPP_HOST, port=config.WEBAPP_PORT, log_config=None)


if __name__ == '__main__':
    main()
