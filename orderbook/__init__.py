"""Price-time priority order matching engine: order types and the engine."""

__version__ = "0.1.0"
__all__ = ["engine", "orders"]