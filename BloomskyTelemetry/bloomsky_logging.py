"""Logger construction for the station client."""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FILE = "bloomsky.log"

FILE = "file"
STREAM = "stream"
DESTINATIONS = (FILE, STREAM)


def build_logger(
    destination: str = FILE,
    log_file: str = DEFAULT_LOG_FILE,
    verbose: bool = False,
    name: str = "bloomsky",
) -> logging.Logger:
    """
    Build a logger writing to a file or to stdout.

    A log file that cannot be opened degrades to stdout instead of failing.
    Only the named logger is configured; the root logger is left alone.

    Args:
        destination: FILE (append to log_file) or STREAM (stdout)
        log_file: Path of the log file
        verbose: Log at DEBUG instead of INFO
        name: Logger name

    Returns:
        logging.Logger: The configured logger
    """
    if destination not in DESTINATIONS:
        raise ValueError(f"Unknown log destination {destination!r}, expected one of {DESTINATIONS}")

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = None
    fallback_reason = None
    if destination == FILE:
        try:
            handler = logging.FileHandler(log_file, mode="a")
        except OSError as e:
            fallback_reason = e
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    if fallback_reason is not None:
        logger.info("Failed to log to file %s, using default stdout: %s", log_file, fallback_reason)
    return logger
