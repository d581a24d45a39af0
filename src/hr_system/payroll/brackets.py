"""Progressive income-tax bracket table.

Brackets are ``(lower_bound, rate)`` pairs in ascending order. Income between
one lower bound and the next is taxed at the first one's rate; income above
the last lower bound is taxed at the top rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Sequence, Union


@dataclass(frozen=True)
class TaxBracket:
    lower_bound: Decimal
    rate: Decimal


def validate_brackets(brackets: Iterable[TaxBracket]) -> tuple[TaxBracket, ...]:
    table = tuple(brackets)
    if not table:
        raise ValueError("Tax bracket table is empty")
    if table[0].lower_bound != 0:
        raise ValueError("First tax bracket must start at 0")
    for prev, cur in zip(table, table[1:]):
        if cur.lower_bound <= prev.lower_bound:
            raise ValueError("Tax bracket lower bounds must be strictly increasing")
    for b in table:
        if not Decimal(0) <= b.rate <= Decimal(1):
            raise ValueError(f"Tax rate {b.rate} is outside [0, 1]")
    return table


def parse_brackets(source: Union[str, Sequence[Sequence]]) -> tuple[TaxBracket, ...]:
    """Build a validated table from ``"0:0.15,110000:0.20"`` or ``[(0, "0.15"), ...]``."""
    if isinstance(source, str):
        pairs = []
        for chunk in source.split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            bound, sep, rate = chunk.partition(":")
            if not sep:
                raise ValueError(f"Tax bracket {chunk!r} must look like lower_bound:rate")
            pairs.append((bound.strip(), rate.strip()))
    else:
        pairs = [tuple(p) for p in source]

    table = []
    for pair in pairs:
        if len(pair) != 2:
            raise ValueError(f"Tax bracket {pair!r} must have a lower bound and a rate")
        bound, rate = pair
        try:
            table.append(TaxBracket(lower_bound=Decimal(str(bound)), rate=Decimal(str(rate))))
        except InvalidOperation:
            raise ValueError(f"Tax bracket {pair!r} is not numeric")
    return validate_brackets(table)
