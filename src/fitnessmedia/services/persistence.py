"""
Key-value persistence for the FitnessMedia application.

The application keeps its state under a handful of string keys mapped to
opaque byte blobs. One store instance is constructed at startup and passed
to every service that needs it.

Classes:
    KeyValueStore: Abstract store interface
    InMemoryStore: Process-local store, lost on exit
    FileStore: Single JSON file store that survives restarts
"""

import base64
import binascii
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from ..exceptions import StoreError, StoreInitializationError

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "~/.fitnessmedia/store.json"


class KeyValueStore(ABC):
    """
    Synchronous string-to-bytes store.

    There are no transactions and no coordination between writers; the UI
    thread is the only writer.
    """

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """
        Store value under key, replacing any previous value.

        Raises:
            StoreError: If the value could not be written
        """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Return the value stored under key, or None if absent.

        Raises:
            StoreError: If the store could not be read
        """

    def set_string(self, key: str, value: str) -> None:
        """Store a UTF-8 string."""
        self.set(key, value.encode("utf-8"))

    def get_string(self, key: str) -> Optional[str]:
        """
        Return a UTF-8 string value, or None if absent or not valid UTF-8.
        """
        data = self.get(key)
        if data is None:
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Value for key '%s' is not valid UTF-8", key)
            return None


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store, used for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class FileStore(KeyValueStore):
    """
    Store backed by one JSON file of base64-encoded values.

    The whole file is loaded at construction and rewritten atomically on
    every set.

    Attributes:
        path: Location of the JSON file

    Example:
        >>> store = FileStore("/tmp/fitnessmedia.json")
        >>> store.set_string("UserName", "Sam")
        >>> FileStore("/tmp/fitnessmedia.json").get_string("UserName")
        'Sam'
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Open or create the store file.

        Args:
            path: File path, FITNESSMEDIA_DATA_FILE or the default if omitted

        Raises:
            StoreInitializationError: If an existing file cannot be read
        """
        raw_path = path or os.getenv("FITNESSMEDIA_DATA_FILE") or DEFAULT_DATA_FILE
        self.path = Path(raw_path).expanduser()
        self._data: Dict[str, bytes] = self._load()

    def _load(self) -> Dict[str, bytes]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError, RecursionError) as e:
            raise StoreInitializationError(f"Cannot read store file {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise StoreInitializationError(f"Store file {self.path} is not a JSON object")

        data = {}
        for key, encoded in raw.items():
            try:
                data[key] = base64.b64decode(encoded, validate=True)
            except (binascii.Error, TypeError, ValueError) as e:
                raise StoreInitializationError(
                    f"Store file {self.path} has an invalid value for '{key}': {e}"
                ) from e
        return data

    def _flush(self) -> None:
        payload = {
            key: base64.b64encode(value).decode("ascii") for key, value in self._data.items()
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def set(self, key: str, value: bytes) -> None:
        previous = self._data.get(key)
        self._data[key] = bytes(value)
        try:
            self._flush()
        except OSError as e:
            if previous is None:
                self._data.pop(key, None)
            else:
                self._data[key] = previous
            raise StoreError(f"Cannot write store file {self.path}: {e}") from e

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)
