"""
Grouped processing of sorted record streams.

The grade aggregations read every assessment of a workshop through a single
forward-only cursor. The rows come sorted by the grouping key, so each group
can be reduced as soon as the key changes and memory use stays bounded by the
size of one group.
"""

from itertools import groupby
from operator import itemgetter


def iter_batches(rows, key):
    """
    Split a stream of rows sorted by `key` into batches of consecutive rows
    sharing the same key.

    Args:
        rows (iterable): Rows sorted by the grouping key.
        key (str or callable): Name of the dict item holding the key,
            or a function returning the key of a row.

    Yields:
        tuple of (key value, list of rows)

    Example usage:
        >>> rows = [{'id': 1, 'grade': 50}, {'id': 1, 'grade': 70}, {'id': 2, 'grade': 10}]
        >>> list(iter_batches(rows, 'id'))
        [(1, [{'id': 1, 'grade': 50}, {'id': 1, 'grade': 70}]), (2, [{'id': 2, 'grade': 10}])]

    """
    if not callable(key):
        key = itemgetter(key)
    for value, batch in groupby(rows, key=key):
        yield value, list(batch)


def process_batches(rows, key, reducer):
    """
    Call `reducer` with every batch of `rows`, including the last one.

    An empty stream produces no call at all.

    Returns:
        int: The number of batches processed.

    """
    processed = 0
    for __, batch in iter_batches(rows, key):
        reducer(batch)
        processed += 1
    return processed
