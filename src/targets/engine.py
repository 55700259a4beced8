"""Progress rules for employee targets.

The status stored on a target is always derived from its values by
:func:`compute_target_status`; it is recomputed on every save rather than
trusted from the caller. Comparisons are done on ``Decimal`` by
cross-multiplying, so 80 % and 100 % boundaries are exact.
"""
from __future__ import annotations

from decimal import Decimal

ACHIEVED = "achieved"
IN_PROGRESS = "in_progress"
PENDING = "pending"

# in_progress starts at 4/5 of the target.
IN_PROGRESS_NUMERATOR = 4
IN_PROGRESS_DENOMINATOR = 5


def _as_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute_target_status(current_value, target_value) -> str:
    """``achieved`` at 100 % or more, ``in_progress`` from 80 %, else ``pending``.

    A zero target counts as ``achieved`` once anything was done, ``pending``
    otherwise.
    """
    current = _as_decimal(current_value)
    target = _as_decimal(target_value)

    if target <= 0:
        return ACHIEVED if current > 0 else PENDING
    if current >= target:
        return ACHIEVED
    if current * IN_PROGRESS_DENOMINATOR >= target * IN_PROGRESS_NUMERATOR:
        return IN_PROGRESS
    return PENDING


def progress_percent(current_value, target_value) -> Decimal:
    """Progress as a percentage rounded to 2 decimals; not capped at 100."""
    current = _as_decimal(current_value)
    target = _as_decimal(target_value)
    if target <= 0:
        return Decimal("100.00") if current > 0 else Decimal("0.00")
    return (current / target * 100).quantize(Decimal("0.01"))
