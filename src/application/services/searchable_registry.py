"""Registry of searchable components and their derived candidate views.

The registry owns the mapping from component identity to ``SearchableInfo``
plus three derived views: global search candidates, web search candidates
and the default web search target. All four live in one immutable
``RegistrySnapshot``. A rebuild assembles a complete new snapshot off to the
side and swaps the single reference under the registry lock, so readers
always see either the fully old or the fully new state without locking.
"""

from collections.abc import Iterable, Mapping
from contextlib import AbstractContextManager
from threading import RLock
from types import MappingProxyType

import attrs
from attrs import define, field

from src.config import get_logger, settings
from src.domain.entities import ComponentName, SearchableInfo
from src.domain.errors import MetadataUnavailableError, UnknownSearchableError
from src.domain.packages import PackageInspectorProtocol
from src.domain.parsing import ConfigurationParser

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class RegistrySnapshot:
    """One consistent generation of registry state."""

    searchables: Mapping[ComponentName, SearchableInfo] = field(
        factory=dict, converter=lambda m: MappingProxyType(dict(m)), hash=False
    )
    global_search: tuple[SearchableInfo, ...] = ()
    web_search: tuple[SearchableInfo, ...] = ()
    default_web_search: SearchableInfo | None = None
    generation: int = 0


class SearchableRegistry:
    """Authoritative component to ``SearchableInfo`` mapping.

    Args:
        lock: Lock guarding rebuilds and swaps. The coordinator passes its own
            lock so that initialization and swaps share one lock.
        web_search_action: Suggestion intent action marking web search
            components. Defaults to ``settings.registry.web_search_action``.
        web_search_authorities: Suggestion authorities that also mark web
            search components. Defaults to
            ``settings.registry.web_search_authorities``.
        inhibit_suggestions: Forwarded to the configuration parser.
    """

    def __init__(
        self,
        lock: AbstractContextManager | None = None,
        *,
        web_search_action: str | None = None,
        web_search_authorities: Iterable[str] | None = None,
        inhibit_suggestions: bool | None = None,
    ) -> None:
        self._lock = lock or RLock()
        self._web_search_action = web_search_action or settings.registry.web_search_action
        self._web_search_authorities = frozenset(
            settings.registry.web_search_authorities
            if web_search_authorities is None
            else web_search_authorities
        )
        self._inhibit_suggestions = inhibit_suggestions
        self._snapshot = RegistrySnapshot()
        # Explicit administrative default, kept across rebuilds
        self._pinned_default: ComponentName | None = None
        # Pinned default was uninstalled; no default until the next explicit set
        self._default_reverted = False

    # -------------------------------------------------------------------------
    # Rebuild
    # -------------------------------------------------------------------------

    def rebuild(
        self,
        component_list: Iterable[ComponentName],
        package_inspector: PackageInspectorProtocol,
    ) -> RegistrySnapshot:
        """Rescan every component and atomically replace the registry state.

        Components whose metadata is missing, unreadable or invalid are
        skipped; the rest of the rebuild continues.

        Args:
            component_list: Components to scan, in the order to keep
            package_inspector: Source of raw metadata and provider owners

        Returns:
            The snapshot now visible to readers
        """
        with self._lock, logger.contextualize(operation="rebuild_searchables"):
            parser = ConfigurationParser(
                package_inspector, inhibit_suggestions=self._inhibit_suggestions
            )
            searchables: dict[ComponentName, SearchableInfo] = {}
            scanned = 0

            for component in component_list:
                scanned += 1
                if component in searchables:
                    logger.debug(f"Ignoring duplicate component {component}")
                    continue
                info = self._load(component, package_inspector, parser)
                if info is not None:
                    searchables[component] = info

            snapshot = self._derive(searchables, self._snapshot.generation + 1)
            self._snapshot = snapshot

            logger.info(
                f"Registered {len(snapshot.searchables)} of {scanned} components "
                f"({len(snapshot.global_search)} global, {len(snapshot.web_search)} web)"
            )
            return snapshot

    def _load(
        self,
        component: ComponentName,
        inspector: PackageInspectorProtocol,
        parser: ConfigurationParser,
    ) -> SearchableInfo | None:
        try:
            raw = inspector.get_raw_metadata(component)
            if raw is None:
                logger.debug(f"No searchable metadata for {component}")
                return None
            info = parser.parse(raw, component)
        except MetadataUnavailableError as e:
            logger.warning(f"Skipping {component}: {e}")
            return None
        except Exception:
            logger.exception(f"Skipping {component}: metadata lookup failed")
            return None

        if info is None or not info.is_valid:
            return None
        return info

    def _derive(
        self,
        searchables: dict[ComponentName, SearchableInfo],
        generation: int,
    ) -> RegistrySnapshot:
        records = list(searchables.values())
        global_search = tuple(info for info in records if info.include_in_global_search)
        web_search = tuple(info for info in records if self._is_web_search(info))

        if self._pinned_default is not None:
            default = searchables.get(self._pinned_default)
            if default is None:
                logger.info(
                    f"Default web search {self._pinned_default} is no longer installed"
                )
                self._pinned_default = None
                self._default_reverted = True
        elif self._default_reverted:
            default = None
        else:
            default = web_search[0] if web_search else None

        return RegistrySnapshot(
            searchables=searchables,
            global_search=global_search,
            web_search=web_search,
            default_web_search=default,
            generation=generation,
        )

    def _is_web_search(self, info: SearchableInfo) -> bool:
        return (
            info.suggest_intent_action == self._web_search_action
            or info.suggest_authority in self._web_search_authorities
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def snapshot(self) -> RegistrySnapshot:
        """Current registry state; a single consistent generation."""
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._snapshot.generation

    def lookup_by_component(self, identity: ComponentName) -> SearchableInfo | None:
        return self._snapshot.searchables.get(identity)

    def global_search_candidates(self) -> list[SearchableInfo]:
        """Components included in global search, in last rebuild order."""
        return list(self._snapshot.global_search)

    def web_search_candidates(self) -> list[SearchableInfo]:
        """Components handling web search, in last rebuild order."""
        return list(self._snapshot.web_search)

    def default_web_search_target(self) -> SearchableInfo | None:
        return self._snapshot.default_web_search

    def components(self) -> list[ComponentName]:
        return list(self._snapshot.searchables)

    def __len__(self) -> int:
        return len(self._snapshot.searchables)

    def __contains__(self, identity: object) -> bool:
        return identity in self._snapshot.searchables

    # -------------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------------

    def set_default_web_search_target(self, identity: ComponentName | None) -> None:
        """Pin the default web search target until the next explicit set.

        Passing None removes the pin and falls back to the first web search
        candidate. If a pinned component is uninstalled the default becomes
        None and stays None across later rebuilds until this is called again.

        Raises:
            UnknownSearchableError: If ``identity`` is not registered.
        """
        with self._lock:
            current = self._snapshot
            if identity is None:
                self._pinned_default = None
                default = current.web_search[0] if current.web_search else None
            else:
                default = current.searchables.get(identity)
                if default is None:
                    raise UnknownSearchableError(identity)
                self._pinned_default = identity
            self._default_reverted = False

            self._snapshot = attrs.evolve(current, default_web_search=default)
            logger.info(f"Default web search set to {identity}")
