"""Logging setup.

The rest of the code gets the logger through this module rather than
``logging.getLogger`` to make sure that it is configured.

Logging levels are used for specific purposes:

- warnings are used in ``LOGGER`` for failed configuration trials, exhausted
  searches, unusable background images and unknown options;
- infos are used in ``PROGRESS_LOGGER`` to advertise fitting steps;
- debug messages are used in ``PROGRESS_LOGGER`` for each divide point.

"""

import contextlib
import logging

LOGGER = logging.getLogger('wallfit')
if not LOGGER.handlers:  # pragma: no cover
    LOGGER.setLevel(logging.WARNING)
    LOGGER.addHandler(logging.NullHandler())

PROGRESS_LOGGER = logging.getLogger('wallfit.progress')


class CallbackHandler(logging.Handler):
    """A logging handler that calls a function for every message."""
    def __init__(self, callback):
        logging.Handler.__init__(self)
        self.emit = callback


@contextlib.contextmanager
def capture_logs(level=logging.INFO):
    """Collect the ``'LEVEL: message'`` strings logged to ``LOGGER``.

    Progress messages are not collected. Other handlers of ``LOGGER`` are
    detached meanwhile.

    """
    messages = []

    def emit(record):
        if record.levelno >= level and record.name != PROGRESS_LOGGER.name:
            messages.append(f'{record.levelname}: {record.getMessage()}')

    handlers, previous_level = LOGGER.handlers, LOGGER.level
    LOGGER.handlers = [CallbackHandler(emit)]
    LOGGER.setLevel(level)
    try:
        yield messages
    finally:
        LOGGER.handlers = handlers
        LOGGER.setLevel(previous_level)
