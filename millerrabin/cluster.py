"""
Shared in-process Dask cluster used by the parallel short-circuit strategy.
"""

import logging
import threading
from typing import Optional

from dask import config
from dask.distributed import Client

logger = logging.getLogger("millerrabin.cluster")

# Global shared Dask client for all strategy calls
_shared_client: Optional[Client] = None
_shared_client_lock = threading.Lock()


def get_shared_client(workers: int = 4) -> Optional[Client]:
    """
    Get or create the shared Dask client.

    The client runs a single threaded worker in this process so witness
    batches see the same interpreter state as the caller.

    Args:
        workers: Number of worker threads for a newly created client

    Returns:
        Shared Dask client or None if creation fails
    """
    global _shared_client

    with _shared_client_lock:
        if _shared_client is None:
            try:
                config.set({"distributed.diagnostics.enabled": False})

                proxy_logger = logging.getLogger("distributed.http.proxy")
                original_level = proxy_logger.level
                proxy_logger.setLevel(logging.WARNING)
                try:
                    _shared_client = Client(
                        processes=False,
                        threads_per_worker=workers,
                        n_workers=1,
                        silence_logs=logging.WARNING,
                        dashboard_address=None,
                    )
                finally:
                    proxy_logger.setLevel(original_level)

                logger.debug(f"Created shared Dask client: {_shared_client.scheduler_info()['address']}")
            except Exception as e:
                logger.warning(f"Failed to create shared Dask client, using local threads: {e}")
                _shared_client = None

        return _shared_client


def close_shared_client() -> None:
    """Close the shared Dask client if it exists."""
    global _shared_client
    with _shared_client_lock:
        if _shared_client is not None:
            _shared_client.close()
            _shared_client = None
            logger.debug("Closed shared Dask client")
