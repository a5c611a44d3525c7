"""
Health data sources for the FitnessMedia application.

A health data source is the provider behind the health service: it grants
or denies read access and answers date-of-birth and cumulative-sum queries.
Sources are called from worker threads.

Classes:
    HealthDataSource: Abstract source interface
    InMemoryHealthSource: Source over a list of samples
    AppleHealthExportSource: Source over an Apple Health export.xml

Functions:
    parse_export: Read date of birth and samples from an export file
"""

import logging
import threading
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from ..exceptions import HealthDataUnavailableError
from ..models.health import QUANTITY_TYPES, HealthDataType, HealthSample

logger = logging.getLogger(__name__)

EXPORT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"
KILOJOULES_PER_KILOCALORIE = 4.184

# Units accepted per quantity type, with the factor to the canonical unit
UNIT_FACTORS = {
    HealthDataType.STEP_COUNT: {"count": 1.0},
    HealthDataType.ACTIVE_ENERGY_BURNED: {
        "kcal": 1.0,
        "Cal": 1.0,
        "kJ": 1.0 / KILOJOULES_PER_KILOCALORIE,
    },
}


class HealthDataSource(ABC):
    """Interface to an authorization-gated health data provider."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return whether health data exists on this device at all."""

    @abstractmethod
    def request_authorization(self, read_types: FrozenSet[HealthDataType]) -> bool:
        """
        Ask for read access to the given types.

        Returns:
            True if access was granted
        """

    @abstractmethod
    def date_of_birth(self) -> Optional[date]:
        """
        Return the user's date of birth, or None if it is not recorded.

        Raises:
            HealthDataUnavailableError: If access has not been granted
        """

    @abstractmethod
    def cumulative_sum(
        self, data_type: HealthDataType, start: datetime, end: datetime
    ) -> Optional[float]:
        """
        Sum the samples of a quantity type that start within [start, end).

        Returns:
            The sum in the canonical unit, or None if no samples match

        Raises:
            HealthDataUnavailableError: If access has not been granted
        """


class InMemoryHealthSource(HealthDataSource):
    """
    Health data source over samples held in memory.

    Attributes:
        authorized: Whether the last authorization request was granted
        authorization_requests: Number of authorization requests received

    Example:
        >>> source = InMemoryHealthSource(date_of_birth=date(1990, 5, 17))
        >>> source.request_authorization(READ_TYPES)
        True
        >>> source.date_of_birth()
        datetime.date(1990, 5, 17)
    """

    def __init__(
        self,
        samples: Optional[Iterable[HealthSample]] = None,
        date_of_birth: Optional[date] = None,
        available: bool = True,
        grant: bool = True,
    ):
        """
        Args:
            samples: Initial quantity samples
            date_of_birth: Recorded date of birth, if any
            available: Whether the source reports health data as available
            grant: Whether authorization requests are granted
        """
        self._lock = threading.Lock()
        self._samples: List[HealthSample] = list(samples or [])
        self._date_of_birth = date_of_birth
        self._available = available
        self._grant = grant
        self.authorized = False
        self.authorization_requests = 0

    def add_sample(self, sample: HealthSample) -> None:
        with self._lock:
            self._samples.append(sample)

    def is_available(self) -> bool:
        return self._available

    def request_authorization(self, read_types: FrozenSet[HealthDataType]) -> bool:
        with self._lock:
            self.authorization_requests += 1
            self.authorized = self._available and self._grant
        logger.debug(
            "Authorization for %s %s",
            sorted(t.name for t in read_types),
            "granted" if self.authorized else "denied",
        )
        return self.authorized

    def _require_authorization(self) -> None:
        if not self.authorized:
            raise HealthDataUnavailableError("Health data read access has not been granted")

    def date_of_birth(self) -> Optional[date]:
        self._require_authorization()
        return self._date_of_birth

    def cumulative_sum(
        self, data_type: HealthDataType, start: datetime, end: datetime
    ) -> Optional[float]:
        self._require_authorization()
        if data_type not in QUANTITY_TYPES:
            raise ValueError(f"{data_type.value} is not a quantity type")

        with self._lock:
            values = [
                sample.value
                for sample in self._samples
                if sample.data_type == data_type and start <= sample.start_date < end
            ]

        if not values:
            return None
        return sum(values)


def _parse_record(elem: ET.Element) -> Optional[HealthSample]:
    try:
        data_type = HealthDataType(elem.get("type"))
    except ValueError:
        return None
    if data_type not in QUANTITY_TYPES:
        return None

    factor = UNIT_FACTORS[data_type].get(elem.get("unit", ""))
    if factor is None:
        logger.debug("Skipping %s record with unit %r", data_type.name, elem.get("unit"))
        return None

    try:
        return HealthSample(
            data_type=data_type,
            value=float(elem.get("value")) * factor,
            start_date=datetime.strptime(elem.get("startDate"), EXPORT_DATE_FORMAT),
            end_date=datetime.strptime(elem.get("endDate"), EXPORT_DATE_FORMAT),
        )
    except (TypeError, ValueError, ValidationError):
        return None


def parse_export(path: Union[str, Path]) -> Tuple[Optional[date], List[HealthSample]]:
    """
    Read an Apple Health export.xml.

    Only step count and active energy records are kept. Records with
    unknown units or unparsable values are skipped.

    Args:
        path: Path to export.xml

    Returns:
        Tuple of (date of birth or None, samples in file order)

    Raises:
        OSError: If the file cannot be opened
        xml.etree.ElementTree.ParseError: If the file is not well-formed XML
    """
    date_of_birth = None
    samples: List[HealthSample] = []
    skipped = 0

    root = None
    depth = 0

    for event, elem in ET.iterparse(str(path), events=("start", "end")):
        if event == "start":
            if root is None:
                root = elem
            depth += 1
            continue

        depth -= 1
        if elem.tag == "Me":
            raw = elem.get(HealthDataType.DATE_OF_BIRTH.value)
            if raw:
                try:
                    date_of_birth = date.fromisoformat(raw)
                except ValueError:
                    logger.warning("Ignoring unparsable date of birth %r", raw)
        elif elem.tag == "Record":
            sample = _parse_record(elem)
            if sample is not None:
                samples.append(sample)
            elif elem.get("type") in (t.value for t in QUANTITY_TYPES):
                skipped += 1
            elem.clear()

        # Finished top-level children are detached so the tree stays small
        if depth == 1:
            root.clear()

    if skipped:
        logger.info("Skipped %d unparsable records in %s", skipped, path)
    return date_of_birth, samples


class AppleHealthExportSource(InMemoryHealthSource):
    """
    Health data source over an Apple Health export.

    The export is parsed on the first granted authorization request. A
    missing export file makes the source unavailable.

    Attributes:
        path: Location of export.xml
    """

    def __init__(self, path: Union[str, Path], grant: bool = True):
        super().__init__(grant=grant)
        self.path = Path(path).expanduser()
        self._loaded = False

    def is_available(self) -> bool:
        return self.path.is_file()

    def request_authorization(self, read_types: FrozenSet[HealthDataType]) -> bool:
        self._available = self.is_available()
        if not super().request_authorization(read_types):
            return False

        if not self._loaded:
            try:
                date_of_birth, samples = parse_export(self.path)
            except (OSError, ET.ParseError):
                self.authorized = False
                raise
            with self._lock:
                self._date_of_birth = date_of_birth
                self._samples = samples
                self._loaded = True
            logger.info("Loaded %d samples from %s", len(samples), self.path)
        return True
