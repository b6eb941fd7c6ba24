from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable


def log_collection_load(
    logger_name: str | None = None, *, level: int = logging.DEBUG
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator for loaders taking a path first and returning a collection registry.

    Logs the path being loaded, then the names of the collections the
    registry holds afterwards. A failing load is logged with its path and
    the exception is re-raised.
    """

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def _wrapper(path: str, *args: Any, **kwargs: Any) -> Any:
            logger.log(level, "Loading collections from %s", path)
            try:
                registry = func(path, *args, **kwargs)
            except Exception:
                logger.exception("Loading collections from %s failed", path)
                raise
            names = list(registry.names())
            logger.log(
                level,
                "Loaded %d collection(s) from %s: %s",
                len(names),
                path,
                ", ".join(names) or "<none>",
            )
            return registry

        return _wrapper

    return _decorator
