#!/usr/bin/env python3
"""
Service registry for the summarizer.

Commands never construct pipeline stages themselves; they ask the container.
Stages that are safe to share (config, validator, extractor, analyzer,
renderer, blocking fetcher) are built once. The async fetcher and the
pipeline are built per request so concurrent runs never share a session.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

Factory = Callable[[], Any]


class Container:
    """Name -> factory registry with optional instance sharing."""

    def __init__(self):
        self._registry: Dict[str, Tuple[Factory, bool]] = {}
        self._instances: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register(self, name: str, factory: Factory, shared: bool) -> None:
        with self._lock:
            self._registry[name] = (factory, shared)
            self._instances.pop(name, None)

    def register_singleton(self, name: str, factory: Factory) -> None:
        """Build on first use, then hand out the same object."""
        self.register(name, factory, shared=True)

    def register_factory(self, name: str, factory: Factory) -> None:
        """Build a fresh object on every lookup."""
        self.register(name, factory, shared=False)

    def register_instance(self, name: str, instance: Any) -> None:
        with self._lock:
            self._registry.pop(name, None)
            self._instances[name] = instance

    def get(self, name: str) -> Any:
        """
        Resolve a service.

        Raises:
            KeyError: If nothing is registered under ``name``
        """
        with self._lock:
            if name in self._instances:
                return self._instances[name]

            try:
                factory, shared = self._registry[name]
            except KeyError:
                raise KeyError(f"No service registered as '{name}'") from None

            instance = factory()
            if shared:
                self._instances[name] = instance
            logger.debug(f"Built {'shared' if shared else 'per-request'} service '{name}'")
            return instance

    def has(self, name: str) -> bool:
        return name in self._registry or name in self._instances

    def clear(self) -> None:
        with self._lock:
            self._registry.clear()
            self._instances.clear()


_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Process-wide container with the default wiring."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                container = Container()
                register_default_services(container)
                _container = container
    return _container


def reset_container() -> None:
    """Forget the process-wide container (tests)."""
    global _container
    with _container_lock:
        if _container is not None:
            _container.clear()
        _container = None


def register_default_services(container: Container) -> None:
    """Wire every pipeline stage from the loaded configuration."""
    from core.analysis import StructuralAnalyzer
    from core.config import get_config
    from core.content import AsyncContentFetcher, ContentExtractor, ContentFetcher, MetadataExtractor
    from core.pipeline import ArticlePipeline
    from core.rendering import DocumentRenderer
    from core.security import SecurityValidator

    def settings():
        return container.get('config')

    def pipeline():
        app = settings().app
        return ArticlePipeline(
            validator=container.get('security_validator'),
            fetcher=container.get('fetcher'),
            async_fetcher=container.get('async_fetcher'),
            extractor=container.get('extractor'),
            analyzer=container.get('analyzer'),
            renderer=container.get('renderer'),
            metadata_extractor=MetadataExtractor() if app.extract_metadata else None
        )

    shared = {
        'config': get_config,
        'security_validator': lambda: SecurityValidator(trusted_domains=settings().app.allowed_hosts),
        'fetcher': lambda: ContentFetcher(gateway_endpoint=settings().gateway.endpoint,
                                          user_agent=settings().gateway.user_agent),
        'extractor': lambda: ContentExtractor(min_length=settings().app.min_content_length),
        'analyzer': lambda: StructuralAnalyzer(timezone=settings().app.timezone),
        'renderer': DocumentRenderer,
    }
    per_request = {
        'async_fetcher': lambda: AsyncContentFetcher(gateway_endpoint=settings().gateway.endpoint,
                                                     user_agent=settings().gateway.user_agent),
        'pipeline': pipeline,
    }

    for name, factory in shared.items():
        container.register_singleton(name, factory)
    for name, factory in per_request.items():
        container.register_factory(name, factory)

    logger.debug(f"Registered {len(shared) + len(per_request)} default services")
