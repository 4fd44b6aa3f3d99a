from typing import Dict, List, Sequence, Tuple, Union

import numpy as np
from scipy import stats

from sicksicker.settings.constants import DEFAULT_CALIBRATED_PRIORS


class UniformPrior:
    """
    A uniformily distributed prior.
    """

    def __init__(self, name: str, domain: Tuple[float, float]):
        start, end = domain
        if not np.isfinite(start) or not np.isfinite(end):
            raise ValueError(f"Prior bounds for {name} must be finite, got {domain}")
        if not start < end:
            raise ValueError(f"Lower bound of {name} must be below its upper bound, got {domain}")

        self.name = name
        self.start, self.end = float(start), float(end)

    @property
    def width(self) -> float:
        return self.end - self.start

    def ppf(self, quantiles: np.ndarray) -> np.ndarray:
        """Maps quantiles in [0, 1] onto the prior support."""
        return stats.uniform.ppf(quantiles, loc=self.start, scale=self.width)

    def logpdf(self, values: np.ndarray) -> np.ndarray:
        """Log-density, -inf outside the (inclusive) support and for NaN values."""
        values = np.asarray(values, dtype=float)
        logpdf = stats.uniform.logpdf(values, loc=self.start, scale=self.width)
        return np.where(np.isnan(values), -np.inf, logpdf)

    @classmethod
    def from_dict(cls, prior_dict: dict):
        """
        Build a prior from a {"param_name", "distribution", "distri_params"} dict.
        """
        distribution = prior_dict.get("distribution", "uniform")
        if distribution != "uniform":
            raise ValueError(
                f"Unsupported prior distribution for {prior_dict.get('param_name')}: {distribution}"
            )
        return cls(prior_dict["param_name"], prior_dict["distri_params"])

    def to_dict(self) -> dict:
        return {
            "param_name": self.name,
            "distribution": "uniform",
            "distri_params": [self.start, self.end],
        }

    def __repr__(self):
        return f"UniformPrior({self.name!r}, [{self.start}, {self.end}])"


def get_uniform_priors(bounds: Dict[str, Sequence[float]]) -> List[UniformPrior]:
    """
    Build priors from a {param_name: [lower, upper]} mapping, keeping its order.
    """
    return [UniformPrior(name, domain) for name, domain in bounds.items()]


def get_priors_from_config(priors_config: Union[list, dict]) -> List[UniformPrior]:
    """
    Build priors from a config section, either a list of prior dicts (as written by
    UniformPrior.to_dict) or a {param_name: [lower, upper]} mapping.
    """
    if isinstance(priors_config, dict):
        return get_uniform_priors(priors_config)
    if isinstance(priors_config, list):
        return [UniformPrior.from_dict(p) for p in priors_config]

    raise ValueError(f"Priors must be a list or a mapping, got {type(priors_config).__name__}")


def check_priors(priors: List[UniformPrior]):
    if not priors:
        raise ValueError("At least one calibrated parameter is required")

    names = [p.name for p in priors]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Calibrated parameters declared more than once: {duplicates}")


def get_default_priors() -> List[UniformPrior]:
    """
    Priors of the parameters calibrated by default: p.S1S2, hr.S1 and hr.S2.
    """
    return get_uniform_priors(DEFAULT_CALIBRATED_PRIORS)
