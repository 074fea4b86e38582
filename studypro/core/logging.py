import logging
import sys


def configure_logging(level: str, force: bool = False) -> None:
    """Send application logs to stdout with a single consistent format.

    Without ``force`` this leaves an already configured root logger alone.
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=force,
    )
