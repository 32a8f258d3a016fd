import sys

import uvicorn
from loguru import logger

from paystack_relay.app import create_app
from paystack_relay.config import MissingConfigurationError, load_settings

try:
    settings = load_settings()
except MissingConfigurationError as e:
    logger.error(f"[APP_STARTUP_ERROR] {e}")
    sys.exit(1)

app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
