import logging

import uvicorn

from config import load_config
from src.api.app import create_app

config = load_config()

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(config)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=not config.is_production,
        log_level=config.LOG_LEVEL.lower(),
    )
