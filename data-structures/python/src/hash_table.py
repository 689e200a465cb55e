import logging
import math
from numbers import Real

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 16
DEFAULT_LOAD_FACTOR = 0.75
HASH_MULTIPLIER = 31


def _code_units(key):
    for ch in key:
        code = ord(ch)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def hash_with_capacity(key, capacity):
    """Polynomial rolling hash of key's UTF-16 code units, reduced into [0, capacity).

    The accumulator is taken modulo capacity at every step, so the same key
    lands in unrelated buckets under different capacities.
    """
    if not isinstance(key, str):
        raise TypeError(f"HashTable keys must be str, got {type(key).__name__}")
    code = 0
    for unit in _code_units(key):
        code = (HASH_MULTIPLIER * code + unit) % capacity
    return code


class HashTable:
    def __init__(self, initial_capacity=DEFAULT_CAPACITY, load_factor=DEFAULT_LOAD_FACTOR):
        if isinstance(initial_capacity, bool) or not isinstance(initial_capacity, int) or initial_capacity <= 0:
            raise ValueError("initial_capacity must be a positive integer")
        if (
            isinstance(load_factor, bool)
            or not isinstance(load_factor, Real)
            or not math.isfinite(load_factor)
            or load_factor <= 0
        ):
            raise ValueError("load_factor must be a positive real number")
        self._capacity = initial_capacity
        self._load_factor = load_factor
        self._size = 0
        self._buckets = [[] for _ in range(initial_capacity)]

    def hash(self, key):
        return hash_with_capacity(key, self._capacity)

    def _find(self, key):
        bucket = self._buckets[self.hash(key)]
        for i, (k, _) in enumerate(bucket):
            if k == key:
                return bucket, i
        return bucket, -1

    def _resize(self):
        new_capacity = self._capacity * 2
        new_buckets = [[] for _ in range(new_capacity)]
        for bucket in self._buckets:
            for key, value in bucket:
                new_buckets[hash_with_capacity(key, new_capacity)].append((key, value))
        logger.debug(
            "HashTable resized from %d to %d buckets (%d entries)",
            self._capacity, new_capacity, self._size,
        )
        # swap both together so no caller sees old buckets with the new capacity
        self._buckets, self._capacity = new_buckets, new_capacity

    def set(self, key, value):
        bucket, i = self._find(key)
        if i >= 0:
            bucket[i] = (key, value)
            return
        bucket.append((key, value))
        self._size += 1
        if self._size / self._capacity > self._load_factor:
            self._resize()

    def lookup(self, key):
        """Return ``(found, value)``; value is None when found is False.

        Unlike a sentinel return, a stored None is reported as ``(True, None)``.
        """
        bucket, i = self._find(key)
        if i < 0:
            return False, None
        return True, bucket[i][1]

    def get(self, key):
        found, value = self.lookup(key)
        if not found:
            raise KeyError(key)
        return value

    def get_or(self, key, default):
        found, value = self.lookup(key)
        return value if found else default

    def has(self, key):
        return self.lookup(key)[0]

    def remove(self, key):
        bucket, i = self._find(key)
        if i < 0:
            return False
        del bucket[i]
        self._size -= 1
        return True

    def length(self):
        return self._size

    def is_empty(self):
        return self._size == 0

    def capacity(self):
        return self._capacity

    def load_factor_threshold(self):
        return self._load_factor

    def load_factor(self):
        return self._size / self._capacity

    def bucket_sizes(self):
        return [len(bucket) for bucket in self._buckets]

    def clear(self):
        # capacity is kept; tables never shrink
        self._buckets = [[] for _ in range(self._capacity)]
        self._size = 0

    def keys(self):
        return [k for bucket in self._buckets for k, _ in bucket]

    def values(self):
        return [v for bucket in self._buckets for _, v in bucket]

    def entries(self):
        return [(k, v) for bucket in self._buckets for k, v in bucket]

    def copy(self):
        """Create a copy of this HashTable with the same capacity and threshold.

        Note: This performs a shallow copy of values. The bucket lists are new,
        so mutating either table leaves the other untouched.
        """
        clone = HashTable(self._capacity, self._load_factor)
        clone._buckets = [list(bucket) for bucket in self._buckets]
        clone._size = self._size
        return clone

    def __len__(self):
        return self._size

    def __contains__(self, key):
        if not isinstance(key, str):
            return False
        return self.has(key)

    def __getitem__(self, key):
        return self.get(key)

    def __setitem__(self, key, value):
        self.set(key, value)

    def __delitem__(self, key):
        if not self.remove(key):
            raise KeyError(key)

    def __iter__(self):
        for bucket in self._buckets:
            for k, _ in bucket:
                yield k

    def __repr__(self):
        return f"HashTable(size={self._size}, capacity={self._capacity}, load_factor={self._load_factor})"
