"""
Retention Curve

Maps the real elapsed fraction of a video to the percentage shown on the
progress bar. Exponents below 1 front-load the visible progress; 1.0 is linear.
Because 1 ** e == 1 for any e, the bar always lands on exactly 100 at the end.

The JavaScript twin below is embedded verbatim in generated players, so the
exported snippet and the in-app preview compute the same numbers.
"""
import math
from typing import List, Optional, Tuple


def _check_exponent(exponent: float) -> None:
    if not (0 < exponent <= 1):
        raise ValueError(f"retention exponent must be in (0, 1], got {exponent}")


def compute_display_percent(elapsed_fraction: float, exponent: float) -> float:
    """
    Percentage of the progress bar to fill for a given elapsed fraction.

    Args:
        elapsed_fraction: currentTime / duration, normally in [0, 1]
        exponent: Retention curve exponent in (0, 1]

    Returns:
        Fill percentage clamped to [0, 100]
    """
    _check_exponent(exponent)
    fraction = max(0.0, elapsed_fraction)
    return min(100.0, math.pow(fraction, exponent) * 100)


def progress_for_time(current_time: float, duration: Optional[float], exponent: float) -> Optional[float]:
    """Display percentage at a playback position, or None while duration is unknown."""
    if duration is None or math.isnan(duration) or math.isinf(duration) or duration <= 0:
        return None
    return compute_display_percent(current_time / duration, exponent)


def sample_curve(exponent: float, points: int = 11) -> List[Tuple[float, float]]:
    """Evenly spaced (fraction, percent) pairs from 0 to 1 inclusive."""
    if points < 2:
        raise ValueError("points must be at least 2")
    _check_exponent(exponent)
    step = 1.0 / (points - 1)
    samples = []
    for i in range(points):
        fraction = 1.0 if i == points - 1 else i * step
        samples.append((fraction, compute_display_percent(fraction, exponent)))
    return samples


# Same semantics as compute_display_percent; duration guarding happens in the caller.
DISPLAY_PERCENT_JS = """function computeDisplayPercent(elapsedFraction, exponent) {
            var fraction = Math.max(0, elapsedFraction);
            return Math.min(100, Math.pow(fraction, exponent) * 100);
        }"""
