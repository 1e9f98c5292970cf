"""
Logging Configuration
Routes the pipeline stages, the mesh workers and the preview window to one
'insolepreview' logger.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the 'insolepreview' logger.

    At INFO the log shows one line per built mesh and every rejected set of
    dimensions; DEBUG adds per-stage vertex, face and cache details.

    Args:
        level: Logging level (e.g. logging.DEBUG for `--debug`)
        log_file: Optional path (`--log-file`); the file is overwritten per run.
    """
    logger = logging.getLogger("insolepreview")
    logger.setLevel(level)

    # main() may be called more than once in-process (tests, --summary runs)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized (level={logging.getLevelName(level)}, file={log_file}).")
