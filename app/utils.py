"""
Logging helpers shared by every feature module.
"""
import logging

from app.core import config


_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter(_FORMAT))

_root = logging.getLogger("app")
_root.setLevel(config.LOG_LEVEL)
if not _root.handlers:
    _root.addHandler(_handler)

for name in ["uvicorn", "uvicorn.error"]:
    logging.getLogger(name).setLevel(config.LOG_LEVEL)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger namespaced under the application root logger.

    Modules outside the `app` package (server.py, scripts) are attached to it
    too so they share the handler and level.
    """
    if name != "app" and not name.startswith("app."):
        name = f"app.{name}"
    return logging.getLogger(name)
