"""
Order ID Service — Merchant order / transaction identifier generation.
"""
import threading
import time


class OrderIdService:
    """Generates PREFIX_<epoch-millis> identifiers, strictly increasing per process."""

    _lock = threading.Lock()
    _last_millis: int = 0

    @classmethod
    def generate(cls, prefix: str = "ORD") -> str:
        """Generate an order identifier.

        Two calls within the same millisecond get consecutive values instead
        of colliding, so the numeric part may run slightly ahead of the clock.

        Args:
            prefix: Identifier prefix (e.g. ORD, MT).

        Returns:
            Identifier like "ORD_1760000000000".
        """
        with cls._lock:
            millis = int(time.time() * 1000)
            if millis <= cls._last_millis:
                millis = cls._last_millis + 1
            cls._last_millis = millis
        return f"{prefix}_{millis}"

    @staticmethod
    def timestamp_of(order_id: str) -> str:
        """Numeric part of an identifier."""
        return order_id.rsplit("_", 1)[-1]
