# metrics/smoothing.py
# Exponential moving average used for every per-frame metric.

DEFAULT_FACTOR = 0.35
FPS_FACTOR = 0.25


def smooth(previous: float, current: float, factor: float = DEFAULT_FACTOR) -> float:
    """
    Blend a new sample into the previous value

    The result always lies between previous and current (inclusive).
    A larger factor reacts faster and is less stable.
    """
    return previous * (1.0 - factor) + current * factor


class Smoother:
    """
    Persistent EMA cell for one scalar metric
    Starts at 0.0 so the first samples ramp up instead of jumping.
    """
    __slots__ = ("factor", "value")

    def __init__(self, factor: float = DEFAULT_FACTOR, value: float = 0.0) -> None:
        if not 0.0 <= factor <= 1.0:
            raise ValueError(f"smoothing factor must be in [0, 1], got {factor}")
        self.factor = float(factor)
        self.value = float(value)

    def update(self, sample: float) -> float:
        self.value = smooth(self.value, sample, self.factor)
        return self.value

    def reset(self, value: float = 0.0) -> None:
        self.value = float(value)
