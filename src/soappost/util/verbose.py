import logging
import os
import sys

from soappost.settings import POSTER_SETTINGS
from soappost.util.logging import get_logger

log = get_logger("soappost.verbose")

VERBOSE = "verbose"


def is_verbose(verbosity: str | bool | None = None) -> bool:
    """
    Resolve the verbosity switch.

    An explicit value wins; otherwise the environment variable named by
    ``SETTINGS.http.client.poster.verbosity_env`` is read on every call.
    """
    if verbosity is None:
        verbosity = os.environ.get(POSTER_SETTINGS.verbosity_env, "")
    if isinstance(verbosity, bool):
        return verbosity
    return str(verbosity).strip().lower() == VERBOSE


def verbose(message: str, verbosity: str | bool | None = None, **ctx) -> None:
    if not is_verbose(verbosity):
        return

    if log.logger.hasHandlers() and log.logger.isEnabledFor(logging.INFO):
        log.info(message, extra=ctx)
    else:
        # Logging is unconfigured or filters INFO; the switch alone must still reach stderr
        print(message, file=sys.stderr)
