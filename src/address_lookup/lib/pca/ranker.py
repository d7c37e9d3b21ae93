"""Find result ranking — surface rows that still need drilling down."""

from collections.abc import Iterable
from functools import cmp_to_key
from typing import Protocol, TypeVar

from address_lookup.lib.pca.base import NextOperation


class _HasNextOperation(Protocol):
    @property
    def next_operation(self) -> str: ...


RowT = TypeVar("RowT", bound=_HasNextOperation)


def compare_next_operation(a: _HasNextOperation, b: _HasNextOperation) -> int:
    """Order two rows by their next operation.

    Find sorts before Retrieve. Equal operations compare equal, and any
    pairing involving an unrecognized value is treated as equal precedence
    so the original relative order is kept.
    """
    if a.next_operation == b.next_operation:
        return 0
    if a.next_operation == NextOperation.FIND and b.next_operation == NextOperation.RETRIEVE:
        return -1
    if a.next_operation == NextOperation.RETRIEVE and b.next_operation == NextOperation.FIND:
        return 1
    return 0


def rank_results(rows: Iterable[RowT]) -> list[RowT]:
    """Stable-sort Find result rows so Find rows precede Retrieve rows.

    Args:
        rows: Rows exposing a ``next_operation`` attribute.

    Returns:
        A new list; relative order within each group is preserved.
    """
    return sorted(rows, key=cmp_to_key(compare_next_operation))
