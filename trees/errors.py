class RTreeError(Exception):
    """Error base del índice."""


class ConfigurationError(RTreeError, ValueError):
    """Parámetros de construcción inválidos (capacidades, reinserción)."""
