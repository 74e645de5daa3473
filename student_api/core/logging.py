# student_api/core/logging.py
import logging
import sys


# Configure standard Python logging
def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)  # Print logs to console
        ],
        force=True,
    )
    return logging.getLogger("student_api")


logger = logging.getLogger("student_api")
