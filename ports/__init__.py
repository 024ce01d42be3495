from .backend import BackendPort

__all__ = [
    "BackendPort",
]
