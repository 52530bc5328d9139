"""
Maintenance Service - potpuni reset baze i ponovno punjenje demo podacima.

Reset ne sme da se preklopi sa korisnickim saobracajem: drzi ekskluzivni
lock, a dok traje postavljen je maintenance flag na koji API odgovara
sa 503.
"""

import logging
import threading
from typing import Callable

from .exceptions import ConflictError

logger = logging.getLogger(__name__)


class MaintenanceService:

    def __init__(self, storage, seed: Callable[[], dict]):
        self.storage = storage
        self.seed = seed
        self._lock = threading.Lock()
        self._active = threading.Event()

    @property
    def in_maintenance(self) -> bool:
        return self._active.is_set()

    def reset_and_seed(self) -> dict:
        """
        Brise sve entitete i upisuje demo podatke.

        Raises:
            ConflictError: Ako je reset vec u toku
        """
        if not self._lock.acquire(blocking=False):
            raise ConflictError('Reset baze je vec u toku')

        self._active.set()
        try:
            logger.info('Maintenance reset started')
            self.storage.reset()
            summary = self.seed()
            logger.info('Maintenance reset finished: %s', summary)
            return summary
        finally:
            self._active.clear()
            self._lock.release()
