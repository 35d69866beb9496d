import logging
from functools import wraps

logger = logging.getLogger(__name__)


def best_effort(func):
    """
    Wrap a side effect scheduled with BackgroundTasks.

    The wrapped call never raises: failures go to the log and the request
    that scheduled it has already been answered.
    """
    @wraps(func)
    def runner(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception:
            logger.exception("Background task %s failed", func.__name__)
            return None

    return runner
