import logging
import os

from config import LOG_PATH


def setup_logging(log_path=LOG_PATH, verbose=False):
    """Sets up console output and the run log for the 'kmp' loggers."""

    # Create logs directory if it doesn't exist
    os.makedirs(log_path, exist_ok=True)

    # Clear all existing handlers to prevent duplication
    logging.getLogger().handlers.clear()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(console_handler)

    # Run log captures everything under 'kmp', console only shows what passes its level
    run_log_handler = logging.FileHandler(os.path.join(log_path, "run.log"), encoding="utf-8")
    run_log_handler.setLevel(logging.DEBUG)
    run_log_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )

    kmp_logger = logging.getLogger("kmp")
    kmp_logger.setLevel(logging.DEBUG)
    kmp_logger.handlers.clear()
    kmp_logger.addHandler(run_log_handler)
    kmp_logger.propagate = True

    return kmp_logger
