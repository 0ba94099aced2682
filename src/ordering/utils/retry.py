"""Optimistic-concurrency retry for ledger operations.

Every aggregate carries a ``_version``. When two units of work load the same
product and both try to save it, the second save raises
``ExpectedVersionError`` and its unit of work rolls back. Re-running the
operation reloads fresh stock, so the retry either succeeds or fails with a
proper domain error. Stock is never oversold.
"""

import time
from functools import wraps

from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain
from shared.errors import Internal
from shared.logging import get_logger


logger = get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF = 0.05


def _ledger_setting(key, default):
    custom = current_domain.config.get("custom") or {}
    return custom.get(key, default)


def retry_on_conflict(max_attempts=None, backoff=None):
    """Re-run the decorated operation when its unit of work lost a version race.

    Only wrap operations that are safe to repeat from scratch: each attempt
    must be a complete, independent unit of work.
    """

    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            attempts = max_attempts or int(_ledger_setting("LEDGER_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))
            delay = backoff if backoff is not None else float(_ledger_setting("LEDGER_RETRY_BACKOFF", DEFAULT_BACKOFF))
            attempt = 0
            while True:
                attempt += 1
                try:
                    return fn(*args, **kwargs)
                except ExpectedVersionError as exc:
                    if attempt >= attempts:
                        logger.error("ledger_conflict_exhausted", operation=fn.__name__, attempts=attempt)
                        raise Internal("The operation conflicted with a concurrent update. Please retry.") from exc
                    logger.warning("ledger_conflict_retry", operation=fn.__name__, attempt=attempt)
                    time.sleep(delay * attempt)

        return wrapper

    return deco
