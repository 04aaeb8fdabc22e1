"""Runtime configuration read from the environment."""
import os
import sys
from pathlib import Path

from loguru import logger

DEFAULT_DB_PATH = os.getenv(
    "PATENTE_TUTOR_DB", str(Path.home() / ".patente_tutor" / "tutor.db")
)

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
GEMINI_MODEL = os.getenv("PATENTE_TUTOR_MODEL", "gemini-2.5-flash")
EXPLAIN_TIMEOUT = float(os.getenv("PATENTE_TUTOR_EXPLAIN_TIMEOUT", "15"))

LOG_LEVEL = os.getenv("PATENTE_TUTOR_LOG_LEVEL", "WARNING").upper()
LOG_FILE = os.getenv("PATENTE_TUTOR_LOG_FILE", "")

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}"


def configure_logging(level: str = LOG_LEVEL, log_file: str = LOG_FILE) -> None:
    """Replace loguru's default sink with ours."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level="DEBUG", rotation="1 MB", retention=3)
