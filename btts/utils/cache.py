"""Single-value cache invalidated by a version key.

Derived views (team stats, rankings) are recomputed only when the match
history they came from changes:

    _cache = KeyedCache()

    # Read
    hit, data = _cache.get(key=history.version)
    if hit:
        return data

    # Write
    data = expensive_aggregation()
    _cache.set(data, key=history.version)

    # Invalidate
    _cache.invalidate()
"""

_UNSET = object()


class KeyedCache:
    """Holds one value together with the key it was computed for."""

    __slots__ = ("data", "key", "hits", "misses")

    def __init__(self):
        self.data = _UNSET
        self.key = None
        self.hits = 0
        self.misses = 0

    def get(self, *, key) -> tuple[bool, object]:
        """Return (hit, data). A hit requires a stored value for the same key."""
        if self.data is _UNSET or self.key != key:
            self.misses += 1
            return False, None
        self.hits += 1
        return True, self.data

    def set(self, data: object, *, key) -> None:
        self.data = data
        self.key = key

    def invalidate(self) -> None:
        """Clear cached data."""
        self.data = _UNSET
        self.key = None
