"""Least-squares line fitting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...exceptions import DegenerateFitError


@dataclass(frozen=True, slots=True)
class LinearRegression:
    """Simple linear regression over a small point set.

    Built with `fit`; holds the means and deviation sums of the points.
    """
    x_mean: float
    y_mean: float
    sum_xx: float  # sum of squared x deviations
    sum_xy: float  # sum of x deviation * y deviation

    @classmethod
    def fit(cls, xs: Sequence[float], ys: Sequence[float]) -> LinearRegression:
        """Fit y on x.

        Args:
            xs: X values
            ys: Y values, same length as xs

        Returns:
            Fitted regression

        Raises:
            DegenerateFitError: Fewer than two points, mismatched lengths,
                or all x values identical
        """
        if len(xs) != len(ys):
            raise DegenerateFitError(
                f"Mismatched point lists ({len(xs)} x values, {len(ys)} y values)"
            )
        if len(xs) < 2:
            raise DegenerateFitError(f"Need at least 2 points, got {len(xs)}")

        n = len(xs)
        x_mean = sum(xs) / n
        y_mean = sum(ys) / n

        x_dev = [x - x_mean for x in xs]
        y_dev = [y - y_mean for y in ys]

        sum_xx = sum(d * d for d in x_dev)
        if sum_xx == 0:
            raise DegenerateFitError("All x values are identical (vertical line)")

        return cls(
            x_mean=x_mean,
            y_mean=y_mean,
            sum_xx=sum_xx,
            sum_xy=sum(dx * dy for dx, dy in zip(x_dev, y_dev)),
        )

    @property
    def slope(self) -> float:
        """Slope of the regression of y on x."""
        return self.sum_xy / self.sum_xx

    @property
    def intercept(self) -> float:
        return self.y_mean - self.slope * self.x_mean

    def predict_y(self, x: float) -> float:
        return self.slope * (x - self.x_mean) + self.y_mean
