import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext

from .errors import EmptyInputError, InvalidPercentageError, AllocationInvariantError

logger = logging.getLogger(__name__)

# 1e6 basis points == 100%
TOTAL_UNITS = 1_000_000

PRECISION = 50


def _as_decimal(value, name):
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidPercentageError(f"Invalid percentage for {name}: {value!r}")
    if not d.is_finite() or d <= 0:
        raise InvalidPercentageError(f"Invalid percentage for {name}: {value!r}")
    return d


def compute_allocations(records, total_units=TOTAL_UNITS):
    """
    Split total_units across records in proportion to their vote percentage.

      1) raw_i   = pct_i * total_units / sum(pct)
      2) alloc_i = raw_i truncated toward zero
      3) whatever flooring lost goes to the largest allocation
         (first one in input order on ties)

    Returns a list of ints in input order that sums to exactly total_units.
    """
    if not records:
        raise EmptyInputError("No projects provided for allocation calculation")

    percentages = [_as_decimal(r.vote_percentage, r.name) for r in records]

    with localcontext() as ctx:
        ctx.prec = PRECISION
        total_percentage = sum(percentages, Decimal(0))
        if total_percentage <= 0:
            raise InvalidPercentageError("Total percentage must be greater than 0")

        units = Decimal(total_units)
        allocations = [
            int((pct * units / total_percentage).to_integral_value(rounding=ROUND_DOWN))
            for pct in percentages
        ]

    logger.debug(f"Total percentage: {total_percentage}")
    logger.debug(f"Number of projects: {len(records)}")

    current_total = sum(allocations)
    logger.debug(f"Current total allocation: {current_total}")

    shortfall = total_units - current_total
    if shortfall > 0:
        idx_largest = max(range(len(allocations)), key=lambda i: allocations[i])
        allocations[idx_largest] += shortfall

    check_allocations(allocations, total_units)
    logger.debug(f"Allocations range: {min(allocations)} - {max(allocations)}")
    return allocations


def check_allocations(allocations, total_units=TOTAL_UNITS):
    invalid = [a for a in allocations if not isinstance(a, int) or a < 0 or a > total_units]
    if invalid:
        raise AllocationInvariantError(f"Invalid allocations found: {invalid}")
    final_total = sum(allocations)
    if final_total != total_units:
        raise AllocationInvariantError(f"Total allocation must equal {total_units}, got {final_total}")


def allocation_share(allocation, total_units=TOTAL_UNITS):
    """Percentage of the round an integer allocation represents."""
    return (Decimal(allocation) * Decimal(100) / Decimal(total_units)).quantize(Decimal("0.0001"))
