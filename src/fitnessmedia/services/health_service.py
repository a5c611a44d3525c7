"""
Health data service for the FitnessMedia application.

The service asks the health data source for read access once, then issues
three independent queries for today: date of birth, step count and active
energy burned. Queries run on a worker pool and hand their results to the
UI-thread queue; the observable snapshot is only replaced when the UI
thread drains that queue.

Classes:
    HealthDataService: Asynchronous health queries with UI-thread delivery

Functions:
    today_range: Local start of day and now
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime, time
from typing import Any, Callable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from ..models.health import READ_TYPES, HealthDataType, HealthSnapshot
from ..utils.dispatch import MainThreadQueue
from ..utils.events import EventEmitter
from .health_sources import HealthDataSource

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    return datetime.now().astimezone()


def today_range(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Return (start of the current local day, now).

    Midnight is resolved with the zone's daylight-saving rules. A ZoneInfo
    on now is used as is; any other offset is treated as the system local
    time zone, whose rules come from the platform.

    Args:
        now: Optional timezone-aware reference time
    """
    now = now or local_now()
    if isinstance(now.tzinfo, ZoneInfo):
        start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    else:
        start = datetime.combine(now.astimezone().date(), time.min).astimezone()
    return start, now


class HealthDataService:
    """
    Service that reads today's health values.

    Nothing is cancelled and no timeouts are applied; a query either
    completes or delivers its default. Overlapping authorization requests
    each deliver their results and the last delivery per field wins.

    Attributes:
        source: Health data source to query
        main_queue: Queue drained by the UI thread
        snapshot: Current health values, replaced on the UI thread only
        changed: Emitter notified with (field name, snapshot) per update

    Example:
        >>> service = HealthDataService(source, main_queue)
        >>> service.request_authorization()
        >>> service.wait_idle()
        >>> main_queue.process_pending()
        >>> service.snapshot.steps
        4200
    """

    def __init__(
        self,
        source: HealthDataSource,
        main_queue: MainThreadQueue,
        executor: Optional[ThreadPoolExecutor] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            source: Health data source
            main_queue: UI-thread delivery queue
            executor: Optional worker pool, a private pool if omitted
            clock: Optional callable returning the current aware datetime
        """
        self.source = source
        self.main_queue = main_queue
        self.snapshot = HealthSnapshot()
        self.changed = EventEmitter("health")
        self._clock = clock or local_now
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=3, thread_name_prefix="health-query"
        )
        self._lock = threading.Lock()
        self._pending: List[Future] = []

    def request_authorization(self) -> "Future[bool]":
        """
        Request read access and, once granted, query today's values.

        Returns:
            Future resolving to whether access was granted. The queries
            have been issued by the time it resolves.
        """
        return self._submit(self._authorize)

    def refresh(self) -> List[Future]:
        """
        Issue the three queries for today without re-authorizing.

        Returns:
            Futures for the date of birth, steps and active energy queries
        """
        start, end = today_range(self._clock())
        return [
            self._submit(self._read_date_of_birth),
            self._submit(self._read_steps, start, end),
            self._submit(self._read_active_energy, start, end),
        ]

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Block until authorization and every issued query have finished.

        Results still have to be delivered by draining the main queue.

        Returns:
            True if everything finished within the timeout
        """
        while True:
            with self._lock:
                pending = [f for f in self._pending if not f.done()]
                self._pending = pending
            if not pending:
                return True
            _, not_done = wait(pending, timeout=timeout)
            if not_done:
                return False

    def shutdown(self, wait: bool = True) -> None:
        """Stop the private worker pool, if the service created one."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def _submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        future = self._executor.submit(fn, *args)
        with self._lock:
            self._pending.append(future)
        return future

    def _authorize(self) -> bool:
        if not self.source.is_available():
            logger.info("Health data is not available on this device")
            return False

        try:
            granted = self.source.request_authorization(READ_TYPES)
        except Exception as e:
            logger.warning("Health authorization request failed: %s", e)
            return False

        if not granted:
            logger.info("Health data read access was denied")
            return False

        try:
            self.refresh()
        except RuntimeError as e:
            logger.warning("Health queries were not issued: %s", e)
        return True

    def _read_date_of_birth(self) -> Any:
        try:
            value = self.source.date_of_birth()
        except Exception as e:
            logger.warning("Error reading date of birth: %s", e)
            value = None
        self.main_queue.post(self._apply, "date_of_birth", value)
        return value

    def _read_steps(self, start: datetime, end: datetime) -> int:
        total = self._cumulative_sum(HealthDataType.STEP_COUNT, start, end)
        steps = int(total) if total is not None else 0
        self.main_queue.post(self._apply, "steps", steps)
        return steps

    def _read_active_energy(self, start: datetime, end: datetime) -> float:
        total = self._cumulative_sum(HealthDataType.ACTIVE_ENERGY_BURNED, start, end)
        energy = float(total) if total is not None else 0.0
        self.main_queue.post(self._apply, "active_energy_burned", energy)
        return energy

    def _cumulative_sum(
        self, data_type: HealthDataType, start: datetime, end: datetime
    ) -> Optional[float]:
        try:
            return self.source.cumulative_sum(data_type, start, end)
        except Exception as e:
            logger.warning("Error reading %s: %s", data_type.name, e)
            return None

    def _apply(self, field: str, value: Any) -> None:
        self.snapshot = self.snapshot.model_copy(update={field: value})
        self.changed.emit(field, self.snapshot)
