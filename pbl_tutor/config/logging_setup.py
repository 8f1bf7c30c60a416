"""Process-wide logging setup, called once by the entry points."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Re-configuration replaces our handler instead of stacking another one
    for handler in list(root.handlers):
        if getattr(handler, "_pbl_tutor", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._pbl_tutor = True  # type: ignore[attr-defined]
    root.addHandler(handler)
