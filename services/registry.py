"""
Service Registry - central lookup for the calculation services
Services are registered as factories and built on first use
"""
from typing import Dict, Any, Callable


class ServiceRegistry:
    """
    Lazily instantiating service container attached to the Flask app
    as ``app.services``.
    """

    def __init__(self):
        self._services: Dict[str, Any] = {}
        self._factories: Dict[str, Callable] = {}

    def register_factory(self, name: str, factory: Callable) -> None:
        """
        Register a factory function for lazy service instantiation.

        Args:
            name: Service identifier
            factory: Callable that returns a service instance
        """
        self._factories[name] = factory

    def get(self, name: str) -> Any:
        """
        Get a service by name, building it from its factory on first use.

        Raises:
            ValueError: If service is not registered
        """
        if name not in self._services:
            if name not in self._factories:
                raise ValueError(f"Service '{name}' is not registered")
            self._services[name] = self._factories[name]()
        return self._services[name]

    def list_services(self) -> list:
        return sorted(self._factories)
