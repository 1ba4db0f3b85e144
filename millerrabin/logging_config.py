"""
Logging setup shared by library callers and the test suite
"""

import logging
import time
import warnings

import dask


VERBOSE_LEVEL = 15  # Between INFO (20) and DEBUG (10)
logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")

# Loggers that are noisy while a local distributed cluster starts and stops
DASK_LOGGERS = [
    "distributed",
    "distributed.core",
    "distributed.scheduler",
    "distributed.worker",
    "distributed.client",
    "distributed.comm",
    "distributed.nanny",
    "distributed.deploy",
    "distributed.deploy.local",
    "distributed.http.proxy",
    "dask",
    "dask.bag",
    "tornado",
    "asyncio",
]


class ElapsedMsFormatter(logging.Formatter):
    """Formatter that shows milliseconds since setup, right-aligned for up to 9999 seconds."""

    def __init__(self, fmt=None, datefmt=None, *args, **kwargs):
        super().__init__(fmt, datefmt, *args, **kwargs)
        self.start_time = time.monotonic()
        self.width = 8

    def format(self, record):
        elapsed_ms = int((time.monotonic() - self.start_time) * 1000)
        if elapsed_ms < 10**7:
            elapsed = f"[{elapsed_ms:>{self.width}}ms]"
        else:
            elapsed = f"[{elapsed_ms}ms]"
        record.elapsed = elapsed
        return super().format(record)


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    """Set up logging configuration"""
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = VERBOSE_LEVEL
    else:
        log_level = logging.INFO
    formatter = ElapsedMsFormatter("%(elapsed)s %(name)s %(message)s")
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(log_level)

    dask.config.set({"distributed.worker.redirect_stdouts": True})

    for logger_name in DASK_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.DEBUG if debug else logging.WARNING)

    if not debug:
        logging.getLogger("distributed.scheduler").setLevel(logging.CRITICAL)
        warnings.filterwarnings("ignore", category=UserWarning, module="distributed")
        warnings.filterwarnings("ignore", category=UserWarning, module="dask")
