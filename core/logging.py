# core/logging.py
"""
Logging configuration for the advisory backend
"""
import logging
import sys
from typing import Optional

from .config import get_settings

# Chatty client libraries kept at WARNING unless debugging
NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "langchain_google_genai")

def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging from settings; `level` overrides LOG_LEVEL"""
    settings = get_settings()
    level_name = (level or settings.log_level.value).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=settings.log_format,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)

    if level_name != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    # advisory rule decisions stay visible at INFO
    logging.getLogger("agents.advisory").setLevel(
        logging.DEBUG if level_name == "DEBUG" else logging.INFO
    )
