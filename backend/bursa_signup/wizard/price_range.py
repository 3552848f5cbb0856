"""Price-range co-constraint: min's rank never exceeds max's rank."""

from typing import Literal

from bursa_signup.catalog import PriceTier

Bound = Literal["min", "max"]


def adjust_price_range(
    changed: Bound,
    new_value: PriceTier,
    other: PriceTier,
) -> tuple[PriceTier, PriceTier]:
    """Return the resulting ``(min, max)`` after one bound changes.

    Raising min past max drags max up with it; lowering max below min
    drags min down with it. The unchanged bound is otherwise kept.
    """
    if changed == "min":
        if new_value.rank > other.rank:
            return new_value, new_value
        return new_value, other
    if changed == "max":
        if new_value.rank < other.rank:
            return new_value, new_value
        return other, new_value
    raise ValueError(f"Unknown price bound: {changed}")
