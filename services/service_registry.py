"""
Service Registry with lazy loading
Factories are registered at app start-up and only invoked on first use,
with dependencies resolved by name. Every service is built once per
application.
"""
from typing import Dict, Any, Callable, Optional, Set, List
import threading
from logging_config import get_logger

logger = get_logger(__name__)


class ServiceDescriptor:
    """Describes a service registration"""

    def __init__(
        self,
        name: str,
        factory: Optional[Callable] = None,
        instance: Optional[Any] = None,
        dependencies: Optional[List[str]] = None
    ):
        self.name = name
        self.factory = factory
        self.instance = instance
        self.dependencies = dependencies or []
        self.lock = threading.Lock()


class ServiceRegistry:
    """
    Service registry with dependency resolution.

    Features:
    - Lazy loading with factory functions
    - Dependencies passed to factories as keyword arguments
    - Circular dependency detection
    """

    def __init__(self):
        self._descriptors: Dict[str, ServiceDescriptor] = {}
        self._thread_local = threading.local()
        self._lock = threading.Lock()

    def register_factory(
        self,
        name: str,
        factory: Callable,
        dependencies: Optional[List[str]] = None
    ) -> None:
        """
        Register a factory function for lazy service instantiation.

        Args:
            name: Service identifier
            factory: Callable that returns a service instance
            dependencies: Services this factory depends on, passed by name
        """
        descriptor = ServiceDescriptor(name=name, factory=factory, dependencies=dependencies)
        with self._lock:
            self._descriptors[name] = descriptor

    def register_instance(self, name: str, instance: Any) -> None:
        """Register an already-built object, such as the scoped db.session"""
        with self._lock:
            self._descriptors[name] = ServiceDescriptor(name=name, instance=instance)

    def get(self, name: str) -> Any:
        """
        Get a service by name, building it and its dependencies on first use.

        Raises:
            ValueError: If service is not registered
            RuntimeError: If circular dependency detected
        """
        if name not in self._descriptors:
            raise ValueError(f"Service '{name}' is not registered")

        descriptor = self._descriptors[name]
        if descriptor.instance is not None:
            return descriptor.instance

        stack = self._initialization_stack()
        if name in stack:
            cycle = " -> ".join(stack + [name])
            raise RuntimeError(f"Circular dependency detected: {cycle}")

        with descriptor.lock:
            # Double-check pattern
            if descriptor.instance is None:
                descriptor.instance = self._create_instance(descriptor)
            return descriptor.instance

    def _initialization_stack(self) -> List[str]:
        if not hasattr(self._thread_local, 'initialization_stack'):
            self._thread_local.initialization_stack = []
        return self._thread_local.initialization_stack

    def _create_instance(self, descriptor: ServiceDescriptor) -> Any:
        stack = self._initialization_stack()
        stack.append(descriptor.name)
        try:
            deps = {dep: self.get(dep) for dep in descriptor.dependencies}
            instance = descriptor.factory(**deps)
            logger.debug("Created service instance", service=descriptor.name)
            return instance
        finally:
            stack.pop()

    def validate_dependencies(self) -> List[str]:
        """
        Validate all service dependencies are registered.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        for name, descriptor in self._descriptors.items():
            for dep in descriptor.dependencies:
                if dep not in self._descriptors:
                    errors.append(f"Service '{name}' depends on unregistered service '{dep}'")
        return errors

    def get_initialization_order(self) -> List[str]:
        """
        Topologically sorted service names, dependencies first.

        Raises:
            RuntimeError: If circular dependency exists
        """
        graph = {name: list(d.dependencies) for name, d in self._descriptors.items()}
        visited: Set[str] = set()
        order: List[str] = []

        def visit(node: str, path: List[str]):
            if node in path:
                cycle = " -> ".join(path + [node])
                raise RuntimeError(f"Circular dependency detected: {cycle}")
            if node in visited:
                return
            for dep in graph.get(node, []):
                visit(dep, path + [node])
            visited.add(node)
            order.append(node)

        for service in graph:
            visit(service, [])

        return order
