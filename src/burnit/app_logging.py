"""Logging configuration helpers."""

import logging


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach one stream handler to the ``burnit`` logger.

    Repeated calls only adjust the level. ``level`` accepts a number or a
    name such as ``"DEBUG"``.
    """
    logger = logging.getLogger("burnit")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
