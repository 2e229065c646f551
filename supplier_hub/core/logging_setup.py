import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(settings) -> logging.Handler:
    """Configure root logging on stdout at LOG_LEVEL and wire the uvicorn loggers to it"""
    level = getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    handler.set_name("supplier_hub")

    logger = logging.getLogger()  # root
    logger.setLevel(level)
    # avoid duplicate handlers on reload
    if not any(h.get_name() == "supplier_hub" for h in logger.handlers):
        logger.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = False
        if not any(h.get_name() == "supplier_hub" for h in lg.handlers):
            lg.addHandler(handler)

    return handler
