"""Process-lifetime coordinator for the searchable registry.

The coordinator is the handle callers use to query searchables. It builds
the registry lazily on the first query, subscribes to package change events,
rebuilds on every install, uninstall or update, and tells listeners that the
searchables changed.

Lifecycle:
    Uninitialized -> Ready on the first query (subscribe, then rebuild until
    no package changed during the scan).
    Ready stays Ready; each package event performs a full synchronous rebuild
    on the event thread followed by an asynchronous change notification.

Locking:
    One ``RLock`` guards the initialization check-and-build and every
    rebuild-and-swap; the registry shares it. Queries after initialization
    read the current snapshot reference without taking the lock.
"""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import AbstractContextManager
from threading import Lock, RLock

from src.config import get_logger, settings
from src.domain.entities import ComponentName, PackageEvent, SearchableInfo
from src.domain.packages import (
    PackageEventStreamProtocol,
    PackageInspectorProtocol,
    Unsubscribe,
)

from .searchable_registry import SearchableRegistry

logger = get_logger(__name__)

SearchablesChangedListener = Callable[[], None]
RegistryFactory = Callable[[AbstractContextManager], SearchableRegistry]


class RegistryCoordinator:
    """Lazily built, event-driven owner of the searchable registry.

    Args:
        inspector: Package inspector supplying components and metadata
        event_stream: Source of package change events
        registry_factory: Builds the registry on first use; receives the
            coordinator lock. Defaults to ``SearchableRegistry(lock=lock)``.
        notify_workers: Threads delivering change notifications. Defaults to
            ``settings.registry.notify_workers``.
    """

    def __init__(
        self,
        inspector: PackageInspectorProtocol,
        event_stream: PackageEventStreamProtocol,
        *,
        registry_factory: RegistryFactory | None = None,
        notify_workers: int | None = None,
    ) -> None:
        self._inspector = inspector
        self._event_stream = event_stream
        self._registry_factory = registry_factory or (
            lambda lock: SearchableRegistry(lock)
        )
        self._lock = RLock()
        self._registry: SearchableRegistry | None = None
        self._unsubscribe: Unsubscribe | None = None
        # Set while the first scan runs; events seen then force one more
        self._init_state_lock = Lock()
        self._initializing = False
        self._pending_rebuild = False

        self._listeners: list[SearchablesChangedListener] = []
        self._listeners_lock = Lock()
        self._notifier = ThreadPoolExecutor(
            max_workers=notify_workers or settings.registry.notify_workers,
            thread_name_prefix="searchables-notify",
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._registry is not None

    @property
    def generation(self) -> int:
        """Number of completed rebuilds, 0 while uninitialized."""
        registry = self._registry
        return registry.generation if registry is not None else 0

    def ensure_ready(self) -> SearchableRegistry:
        """Build the registry and subscribe to events if not done yet.

        The subscription is made before the first scan so that a package
        changing mid-scan is never missed: such events only mark the scan
        stale, and it repeats until one completes with no event seen. The
        registry is published after that.
        """
        registry = self._registry
        if registry is not None:
            return registry

        with self._lock:
            if self._registry is None:
                with logger.contextualize(operation="initialize_searchables"):
                    self._registry = self._initialize()
                    logger.debug("Searchables registry ready")
            return self._registry

    def _initialize(self) -> SearchableRegistry:
        with self._init_state_lock:
            self._initializing = True
            self._pending_rebuild = False

        registry = self._registry_factory(self._lock)
        self._unsubscribe = self._event_stream.subscribe(self.handle_package_event)
        try:
            while True:
                registry.rebuild(
                    self._inspector.list_searchable_components(), self._inspector
                )
                with self._init_state_lock:
                    if not self._pending_rebuild:
                        self._initializing = False
                        return registry
                    self._pending_rebuild = False
                logger.debug("Packages changed during the first scan, rescanning")
        except Exception:
            with self._init_state_lock:
                self._initializing = False
            self._unsubscribe()
            self._unsubscribe = None
            raise

    def close(self) -> None:
        """Tear down at process exit: unsubscribe and drain notifications."""
        with self._lock:
            if self._unsubscribe is not None:
                self._unsubscribe()
                self._unsubscribe = None
        self._notifier.shutdown(wait=True)

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def handle_package_event(self, event: PackageEvent) -> None:
        """Rebuild after a package change and notify listeners.

        The carried package name is used for logging only; every event
        triggers a full rescan. Events arriving during the first scan only
        flag it for a repeat.
        """
        with self._init_state_lock:
            if self._initializing:
                self._pending_rebuild = True
                logger.debug(f"Package {event.package_name} changed during the first scan")
                return

        registry = self.ensure_ready()

        with logger.contextualize(
            operation="package_changed", kind=str(event.kind), package=event.package_name
        ):
            logger.debug(f"Got package {event.kind} for {event.package_name}")
            with self._lock:
                try:
                    components = self._inspector.list_searchable_components()
                except Exception:
                    logger.exception("Could not list components, keeping current searchables")
                    return
                registry.rebuild(components, self._inspector)

        self._broadcast_searchables_changed()

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, listener: SearchablesChangedListener) -> None:
        with self._listeners_lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: SearchablesChangedListener) -> None:
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _broadcast_searchables_changed(self) -> None:
        """Deliver the change signal to every listener on the worker pool."""
        with self._listeners_lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                future = self._notifier.submit(listener)
            except RuntimeError:
                logger.debug("Notifier shut down, dropping searchables changed signal")
                return
            future.add_done_callback(self._log_listener_failure)

    @staticmethod
    def _log_listener_failure(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.opt(exception=error).error("Searchables changed listener failed")

    # -------------------------------------------------------------------------
    # Query API
    # -------------------------------------------------------------------------

    def get_searchable_info(
        self, component: ComponentName | None, use_global: bool = False
    ) -> SearchableInfo | None:
        """Return the searchable record for a component.

        The platform-wide default searchable and the default web search
        target are one record here: no separate default searchable is kept,
        so ``use_global`` always answers with the web search default.

        Args:
            component: Component the search is launched from
            use_global: Return the platform-wide default web search target
                instead of the component's own record

        Returns:
            The record, or None if no searchable metadata is available
        """
        registry = self.ensure_ready()
        if use_global:
            return registry.default_web_search_target()
        if component is None:
            logger.error("get_searchable_info() called without a component")
            return None
        return registry.lookup_by_component(component)

    def get_global_search_candidates(self) -> list[SearchableInfo]:
        return self.ensure_ready().global_search_candidates()

    def get_web_search_candidates(self) -> list[SearchableInfo]:
        return self.ensure_ready().web_search_candidates()

    def get_default_web_search_target(self) -> SearchableInfo | None:
        return self.ensure_ready().default_web_search_target()

    def set_default_web_search_target(self, component: ComponentName | None) -> None:
        """Pin the default web search target and notify listeners.

        Raises:
            UnknownSearchableError: If the component is not registered.
        """
        self.ensure_ready().set_default_web_search_target(component)
        self._broadcast_searchables_changed()
