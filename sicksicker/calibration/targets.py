from typing import Dict, Iterator, List, Mapping, Sequence

import numpy as np
from scipy import stats

from sicksicker.settings.constants import CHECKPOINT_ROWS, DEFAULT_TARGET_WEIGHT, Targets


def _as_readonly_array(values: Sequence[float]) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


def normalise_target_name(name: str) -> str:
    return Targets.ALIASES.get(name, name)


class NormalTarget:
    """
    A calibration target observed with normally distributed error.

    Holds the observed values and their standard errors, both aligned with the
    checkpoint rows of the cohort trace.
    """

    def __init__(self, name: str, value: Sequence[float], se: Sequence[float]):
        self.name = normalise_target_name(name)
        self.value = _as_readonly_array(value)
        self.se = _as_readonly_array(se)
        if self.value.ndim != 1 or self.value.size == 0:
            raise ValueError(f"Target {self.name} needs a non-empty sequence of values")
        if self.value.shape != self.se.shape:
            raise ValueError(
                f"Target {self.name} has {self.value.size} values but {self.se.size} standard errors"
            )
        if not np.all(np.isfinite(self.value)):
            raise ValueError(f"Target {self.name} has non-finite observed values")
        if not np.all(self.se > 0):
            raise ValueError(f"Standard errors of target {self.name} must be positive")

    def __len__(self):
        return self.value.size

    def loglikelihood(self, model_output: Sequence[float]) -> float:
        """
        Sum over checkpoints of the normal log-density of the observed values,
        centred on the model output.
        """
        model_output = np.asarray(model_output, dtype=float)
        if model_output.shape != self.value.shape:
            raise ValueError(
                f"Model output for {self.name} has shape {model_output.shape}, "
                f"expected {self.value.shape}"
            )

        return float(np.sum(stats.norm.logpdf(self.value, loc=model_output, scale=self.se)))

    def __repr__(self):
        return f"NormalTarget({self.name!r}, value={self.value.tolist()}, se={self.se.tolist()})"


class CalibrationTargets:
    """
    Read-only collection of the calibration targets and their weights.
    """

    def __init__(self, targets: List[NormalTarget], weights: Mapping[str, float] = None):
        by_name = {}
        for target in targets:
            if target.name in by_name:
                raise ValueError(f"Target {target.name} is defined more than once")
            by_name[target.name] = target

        missing = [n for n in Targets.ALL if n not in by_name]
        unknown = [n for n in by_name if n not in Targets.ALL]
        if missing:
            raise ValueError(f"Missing calibration targets: {missing}")
        if unknown:
            raise ValueError(f"Unknown calibration targets {unknown}, expected {Targets.ALL}")

        n_checkpoints = len(CHECKPOINT_ROWS)
        for target in by_name.values():
            if len(target) != n_checkpoints:
                raise ValueError(
                    f"Target {target.name} has {len(target)} points, "
                    f"expected one per checkpoint ({n_checkpoints})"
                )

        self._targets = {name: by_name[name] for name in Targets.ALL}
        self._weights = self._build_weights(weights or {})

    @staticmethod
    def _build_weights(weights: Mapping[str, float]) -> Dict[str, float]:
        requested = {normalise_target_name(k): v for k, v in weights.items()}
        unknown = [n for n in requested if n not in Targets.ALL]
        if unknown:
            raise ValueError(f"Weights given for unknown targets: {unknown}")

        built = {}
        for name in Targets.ALL:
            weight = float(requested.get(name, DEFAULT_TARGET_WEIGHT))
            if not np.isfinite(weight) or weight < 0:
                raise ValueError(f"Weight of target {name} must be finite and non-negative")
            built[name] = weight

        return built

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Sequence[float]]], weights=None):
        """
        Build targets from plain data, eg.

            {"Surv": {"value": [...], "se": [...]}, "Prev": {...}, "PropSick": {...}}
        """
        targets = []
        for name, target in data.items():
            if "value" not in target or "se" not in target:
                raise ValueError(f"Target {name} must define both 'value' and 'se'")
            targets.append(NormalTarget(name, target["value"], target["se"]))

        return cls(targets, weights)

    def to_dict(self) -> dict:
        """
        Plain target data, the inverse of from_dict.
        """
        return {
            t.name: {"value": t.value.tolist(), "se": t.se.tolist()} for t in self._targets.values()
        }

    @property
    def names(self) -> List[str]:
        return list(self._targets.keys())

    @property
    def weights(self) -> Dict[str, float]:
        return dict(self._weights)

    def __getitem__(self, name: str) -> NormalTarget:
        return self._targets[normalise_target_name(name)]

    def __iter__(self) -> Iterator[NormalTarget]:
        return iter(self._targets.values())

    def __len__(self):
        return len(self._targets)
