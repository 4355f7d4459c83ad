from __future__ import annotations

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_OWNED_ATTR = "_task_tracker_handler"


# PUBLIC_INTERFACE
def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure the root logger with a single stderr handler.

    A handler installed by an earlier call is replaced, so calling this again
    (e.g. once per created app in tests) never duplicates output. Handlers
    owned by someone else (pytest, uvicorn) are left alone. Unknown level
    names fall back to INFO.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        if getattr(h, _OWNED_ATTR, False):
            root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _OWNED_ATTR, True)
    root.addHandler(handler)
