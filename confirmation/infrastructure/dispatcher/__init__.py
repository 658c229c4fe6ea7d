from .dispatcher import SequentialRunner

__all__ = ["SequentialRunner"]
