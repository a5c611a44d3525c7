"""
Application bootstrap for FitnessMedia.

Builds the configured store once per process and wires the repository,
profile, health service and main view together.

Classes:
    FitnessMediaApp: The running application

Functions:
    build_store: Construct the configured key-value store
"""

import logging
import os
from typing import Optional

from .exceptions import StoreInitializationError
from .services.box_repository import BoxRepository
from .services.dynamodb_store import DynamoDBStore
from .services.health_service import HealthDataService
from .services.health_sources import HealthDataSource, InMemoryHealthSource
from .services.persistence import FileStore, InMemoryStore, KeyValueStore
from .services.profile_service import ProfileService
from .utils.dispatch import MainThreadQueue
from .utils.log import configure_logging
from .views.content_view import ContentView

logger = logging.getLogger(__name__)

STORE_KINDS = ("memory", "file", "dynamodb")
DEFAULT_STORE_KIND = "file"


def build_store(kind: Optional[str] = None) -> KeyValueStore:
    """
    Construct the key-value store selected by kind or FITNESSMEDIA_STORE.

    Raises:
        StoreInitializationError: If the kind is unknown or the store
            cannot be opened
    """
    kind = (kind or os.getenv("FITNESSMEDIA_STORE") or DEFAULT_STORE_KIND).strip().lower()

    if kind == "memory":
        return InMemoryStore()
    if kind == "file":
        return FileStore()
    if kind == "dynamodb":
        return DynamoDBStore()

    raise StoreInitializationError(
        f"Unknown store kind '{kind}', expected one of: {', '.join(STORE_KINDS)}"
    )


class FitnessMediaApp:
    """
    The running application.

    Attributes:
        store: The process-wide key-value store
        main_queue: UI-thread delivery queue
        repository: Box list owner
        profile: User name service
        health: Health data service
        content_view: Main screen projection
    """

    def __init__(
        self,
        store: KeyValueStore,
        health_source: HealthDataSource,
        main_queue: Optional[MainThreadQueue] = None,
    ):
        self.store = store
        self.main_queue = main_queue if main_queue is not None else MainThreadQueue()
        self.repository = BoxRepository(store)
        self.profile = ProfileService(store)
        self.health = HealthDataService(health_source, self.main_queue)
        self.content_view = ContentView(self.repository, self.profile, self.health)

    @classmethod
    def launch(
        cls,
        store: Optional[KeyValueStore] = None,
        health_source: Optional[HealthDataSource] = None,
        log_level: Optional[str] = None,
    ) -> "FitnessMediaApp":
        """
        Start the application.

        Loads the saved boxes and user name, then requests health data
        access once.

        Raises:
            StoreInitializationError: If the store cannot be created; this
                aborts startup
        """
        configure_logging(log_level)

        if store is None:
            try:
                store = build_store()
            except StoreInitializationError:
                logger.critical("Could not create the local data store")
                raise

        app = cls(store, health_source or InMemoryHealthSource())
        app.repository.load_from_store()
        app.profile.load()
        app.health.request_authorization()
        logger.info("FitnessMedia started with %d boxes", len(app.repository))
        return app

    def process_events(self, block: bool = False, timeout: Optional[float] = None) -> int:
        """Drain the UI queue on the calling (UI) thread."""
        return self.main_queue.process_pending(block=block, timeout=timeout)

    def shutdown(self) -> None:
        self.health.shutdown()
