"""
Dependency Injection Container.

Wires configuration, logging, the configured lesson store and the
lifecycle manager for hosts such as the command line.
"""

import logging
from typing import Dict, Type, Callable, Any


logger = logging.getLogger(__name__)


class DIContainer:
    """
    Simple dependency injection container.

    Supports:
    - Service registration with factory functions
    - Lazily created singletons
    - Clear error messages for missing services

    Examples:
        >>> container = DIContainer()
        >>> container.register(Config, Config, singleton=True)
        >>> config = container.resolve(Config)
    """

    def __init__(self):
        """Initialize empty container."""
        self._services: Dict[Type, Callable] = {}
        self._singletons: Dict[Type, Any] = {}
        self._singleton_flags: Dict[Type, bool] = {}

    def register(
        self,
        interface: Type,
        implementation: Callable,
        singleton: bool = False
    ):
        """
        Register a service in the container.

        Args:
            interface: Service interface or type
            implementation: Factory function that creates the service
            singleton: Whether to create a single shared instance
        """
        self._services[interface] = implementation
        self._singleton_flags[interface] = singleton
        self._singletons.pop(interface, None)

        logger.debug(
            f"Registered service: {interface.__name__} "
            f"(singleton={singleton})"
        )

    def resolve(self, interface: Type) -> Any:
        """
        Resolve a service from the container.

        Raises:
            ValueError: If service is not registered
        """
        if interface not in self._services:
            raise ValueError(
                f"Service not registered: {interface.__name__}. "
                f"Available services: {', '.join(self.get_registered_services())}"
            )

        if self._singleton_flags.get(interface, False):
            if interface not in self._singletons:
                logger.debug(f"Creating singleton instance: {interface.__name__}")
                self._singletons[interface] = self._services[interface]()
            return self._singletons[interface]

        return self._services[interface]()

    def is_registered(self, interface: Type) -> bool:
        """Check if a service is registered."""
        return interface in self._services

    def clear(self):
        """Clear all registered services."""
        self._services.clear()
        self._singletons.clear()
        self._singleton_flags.clear()

    def get_registered_services(self) -> list:
        """Names of all registered service types."""
        return [service.__name__ for service in self._services.keys()]


def create_store(config) -> Any:
    """
    Build the lesson store selected by LESSON_STORE_BACKEND.

    Args:
        config: Validated Config

    Returns:
        LessonStore implementation
    """
    from ..store.json_store import JsonFileLessonStore
    from ..store.memory import InMemoryLessonStore
    from ..store.supabase import SupabaseLessonStore

    backend = config.store_backend
    if backend == "supabase":
        return SupabaseLessonStore.from_config(config)
    if backend == "memory":
        return InMemoryLessonStore()
    return JsonFileLessonStore(config.store_path)


def configure_default_services(container: DIContainer, config=None):
    """
    Register Config, the root logger, LessonStore and LessonLifecycleManager.

    Args:
        container: DI container to configure
        config: Config to use (a fresh one is loaded if omitted)

    Examples:
        >>> container = DIContainer()
        >>> configure_default_services(container)
        >>> manager = container.resolve(LessonLifecycleManager)
    """
    from .config import Config
    from .logger import setup_logger
    from ..lifecycle.manager import LessonLifecycleManager
    from ..store.interfaces import LessonStore

    container.register(Config, lambda: config or Config(), singleton=True)

    container.register(
        logging.Logger,
        lambda: setup_logger(
            "lesson_trash",
            level=container.resolve(Config).log_level,
            log_file=container.resolve(Config).log_file
        ),
        singleton=True
    )

    container.register(
        LessonStore,
        lambda: create_store(container.resolve(Config)),
        singleton=True
    )

    container.register(
        LessonLifecycleManager,
        lambda: LessonLifecycleManager(container.resolve(LessonStore)),
        singleton=True
    )

    logger.debug("Default services configured")
