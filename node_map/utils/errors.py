from typing import Any, Optional


class NodeMapException(Exception):
    """Base class for all node map exceptions."""
    def __init__(self, message: str, key: Any = None):
        super().__init__(message)
        self.message = message
        self.key = key


class InvalidNodeContext(NodeMapException, TypeError):
    def __init__(self, node: Any = None, key: Any = None):
        self.node_type = type(node).__name__
        super().__init__(
            f"El primer argumento debe ser un contexto de nodo (Mapping) o None, recibido: {self.node_type}",
            key,
        )


class ConflictingFilterOptions(NodeMapException, ValueError):
    def __init__(self, message: str = "No se puede combinar un MatcherFilters con filtros sueltos", key: Any = None):
        super().__init__(message, key)


class InvalidVersionConstraint(NodeMapException, ValueError):
    def __init__(self, constraint: Any, message: Optional[str] = None):
        self.constraint = constraint
        super().__init__(message or f"Constraint de versión inválido: {constraint!r}")


class InvalidPlatformVersion(NodeMapException, ValueError):
    def __init__(self, version: Any, message: Optional[str] = None):
        self.version = version
        super().__init__(message or f"'{version}' no coincide con 'x.y.z', 'x.y' o 'x'")
