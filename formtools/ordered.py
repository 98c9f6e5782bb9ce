#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Mapping ordered by the chronological insertion of its keys.

Updating the value of an existing key keeps its place. Erased keys cannot be
reinserted at their old place: they go to the end, like new keys.

    >>> m = InsertionOrderMap([('b', 1), ('a', 2)])
    >>> m['c'] = 3; m.erase('b'); m['b'] = 4
    1
    >>> list(m)
    ['a', 'c', 'b']
"""


from collections.abc import MutableMapping
from enum import Enum


class Ordering(Enum):
    PLAIN_INSERTION_ORDER = 'plain'
    EMPTY_KEY_FIRST = 'empty_first'  # The empty key always iterates first.


class InsertionOrderMap(MutableMapping):
    """Dict-like container with a fixed ordering policy.

    If `default_factory` is given, indexing a missing key inserts
    `default_factory()` at the end and returns it (like `defaultdict`).
    """
    def __init__(self, items=(), ordering=Ordering.PLAIN_INSERTION_ORDER,
                 default_factory=None, empty_key=''):
        self.ordering = Ordering(ordering)
        self.default_factory = default_factory
        self.empty_key = empty_key
        self._data = {}  # Python dicts keep the insertion order.
        self.update(items)

    def __getitem__(self, key):
        try:
            return self._data[key]
        except KeyError:
            if self.default_factory is None:
                raise
            value = self._data[key] = self.default_factory()
            return value

    def __setitem__(self, key, value):
        self._data[key] = value

    def __delitem__(self, key):
        del self._data[key]

    def __contains__(self, key):
        return key in self._data

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        if self.ordering is Ordering.EMPTY_KEY_FIRST and self.empty_key in self._data:
            yield self.empty_key
            for key in self._data:
                if key != self.empty_key:
                    yield key
        else:
            yield from self._data

    def get(self, key, default=None):
        # Never calls default_factory.
        return self._data.get(key, default)

    def insert(self, key, value):
        """Insert only if `key` is absent. Return (stored value, inserted)."""
        try:
            return self._data[key], False
        except KeyError:
            self._data[key] = value
            return value, True

    def erase(self, key):
        """Remove `key` if present. Return the number of removed elements."""
        try:
            del self._data[key]
        except KeyError:
            return 0
        return 1

    def clear(self):
        self._data.clear()

    def copy(self):
        return self.__class__(self.items(), self.ordering, self.default_factory,
                              self.empty_key)

    def __eq__(self, other):
        if isinstance(other, InsertionOrderMap):
            return list(self.items()) == list(other.items())
        return super().__eq__(other)

    def __repr__(self):
        return '%s([%s])' % (self.__class__.__name__,
                             ', '.join('(%r, %r)' % item for item in self.items()))
