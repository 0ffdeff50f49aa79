"""Section id generation.

Every node-creating entry point accepts an ``id_factory``: a zero-argument
callable returning a fresh string id. Random UUIDs are the default; a counter
is available where ids must be reproducible (tests, fixtures, diffs).
"""

import itertools
import uuid
from typing import Callable, Optional


IdFactory = Callable[[], str]


def generate_random_id() -> str:
    """
    Generate random UUID v4.

    Used for new sections when no factory is supplied.

    Returns:
        UUID string in standard format

    Example:
        >>> generate_random_id()
        "f47ac10b-58cc-4372-a567-0e02b2c3d479"
    """
    return str(uuid.uuid4())


class CounterIdFactory:
    """Monotonically increasing ids: ``s1``, ``s2``, ...

    Example:
        >>> ids = CounterIdFactory()
        >>> ids(), ids()
        ('s1', 's2')
    """

    def __init__(self, prefix: str = "s", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


def resolve_id_factory(id_factory: Optional[IdFactory]) -> IdFactory:
    """Return ``id_factory`` or the random default."""
    return id_factory if id_factory is not None else generate_random_id
