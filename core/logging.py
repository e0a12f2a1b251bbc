import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure logging for the whole app.
    Call this once at FastAPI startup.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

