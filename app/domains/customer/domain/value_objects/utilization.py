"""
Credit utilization threshold.
"""

from decimal import Decimal, InvalidOperation

from app.core.domain import ValidationException


def utilization_threshold(threshold_percent: float | int | Decimal) -> Decimal:
    """
    Parse a utilization threshold (in percent) into a finite Decimal.

    Floats go through str() so 25.5 stays Decimal("25.5").

    Raises:
        ValidationException: threshold is not a finite number
    """
    if isinstance(threshold_percent, bool):
        raise ValidationException("Utilization threshold must be a number", field="threshold_percent")
    try:
        threshold = Decimal(str(threshold_percent))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValidationException(
            f"Invalid utilization threshold: {threshold_percent!r}", field="threshold_percent"
        ) from e

    if not threshold.is_finite():
        raise ValidationException(
            f"Utilization threshold must be finite, got {threshold_percent!r}",
            field="threshold_percent",
        )
    return threshold
