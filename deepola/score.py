"""Model selection criteria that trade complexity against fit."""

from __future__ import annotations

import math
from dataclasses import dataclass


def _log(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return math.log(x)


@dataclass(frozen=True)
class Score:
    """Complexity, maximum log-likelihood and sample count of a fitted model."""

    complexity: float
    log_likelihood: float
    num_samples: float

    def aic(self) -> float:
        """Akaike information criterion: 2k - 2 ln(L)."""
        return 2.0 * self.complexity - 2.0 * self.log_likelihood

    def aicc(self) -> float:
        """AIC with the small-sample correction term."""
        ll = self.log_likelihood
        numerator = 2.0 * ll * ll + 2.0 * ll
        denominator = self.num_samples - ll - 1.0
        if denominator == 0:
            if numerator == 0 or math.isnan(numerator):
                correction = math.nan
            else:
                correction = math.copysign(math.inf, numerator)
        else:
            correction = numerator / denominator
        return self.aic() + correction

    def bic(self) -> float:
        """Bayesian information criterion: k ln(n) - 2 ln(L)."""
        return self.complexity * _log(self.num_samples) - 2.0 * self.log_likelihood