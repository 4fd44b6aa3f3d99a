"""
Turns a calibrated parameter set into the model outputs compared against the targets.
"""
import logging
from typing import Callable, Dict, Mapping

import numpy as np
import pandas as pd

from sicksicker.settings.constants import CHECKPOINT_ROWS, States, Targets
from sicksicker.tool_kit.params import update_params

logger = logging.getLogger(__name__)

ModelRunner = Callable[[dict], pd.DataFrame]


class ModelRunError(RuntimeError):
    """
    The cohort model could not produce usable outputs for a parameter set.
    """


def update_calibrated_params(params: dict, calib_params: Mapping[str, float]) -> dict:
    """
    Substitute calibrated values into a copy of the full parameter set.
    """
    return update_params(params, {k: float(v) for k, v in calib_params.items()})


def run_cohort_model(params: dict, run_model: ModelRunner) -> pd.DataFrame:
    """
    Run the external cohort model and check that its trace can be used.
    """
    try:
        trace = run_model(params)
    except Exception as e:
        raise ModelRunError(f"Cohort model failed: {e}") from e

    if trace is None:
        raise ModelRunError("Cohort model returned no trace")

    try:
        trace = pd.DataFrame(trace)
    except (ValueError, TypeError) as e:
        raise ModelRunError(f"Cohort model returned an unusable trace: {e}") from e

    missing = [s for s in States.ALL if s not in trace.columns]
    if missing:
        raise ModelRunError(f"Cohort trace is missing health states {missing}")

    n_rows_needed = max(CHECKPOINT_ROWS) + 1
    if len(trace) < n_rows_needed:
        raise ModelRunError(
            f"Cohort trace has {len(trace)} cycles, at least {n_rows_needed} are needed"
        )

    try:
        return trace.astype({state: float for state in States.ALL})
    except (ValueError, TypeError) as e:
        raise ModelRunError(f"Cohort trace has non-numeric state occupancies: {e}") from e


def get_epi_outputs(trace: pd.DataFrame) -> pd.DataFrame:
    """
    Derive survival, prevalence and proportion sicker for every cycle of the trace.
    Cycles where a denominator is zero give NaN or inf.
    """
    sick = trace[States.SICK].to_numpy(dtype=float)
    sicker = trace[States.SICKER].to_numpy(dtype=float)
    dead = trace[States.DEAD].to_numpy(dtype=float)

    survival = 1.0 - dead
    all_sick = sick + sicker
    with np.errstate(divide="ignore", invalid="ignore"):
        prevalence = all_sick / survival
        prop_sicker = sicker / all_sick

    return pd.DataFrame(
        {
            Targets.SURVIVAL: survival,
            Targets.PREVALENCE: prevalence,
            Targets.PROP_SICKER: prop_sicker,
        },
        index=trace.index,
    )


def get_calibration_outputs(
    calib_params: Mapping[str, float], params: dict, run_model: ModelRunner
) -> Dict[str, np.ndarray]:
    """
    Computes the model outputs used for calibration.

    :param calib_params: calibrated parameter values, by name
    :param params: full parameter set of the model, left unchanged
    :param run_model: function running the cohort model on a full parameter set
    :return: survival, prevalence and proportion sicker at each checkpoint
    """
    iter_params = update_calibrated_params(params, calib_params)
    trace = run_cohort_model(iter_params, run_model)
    epi_outputs = get_epi_outputs(trace).iloc[CHECKPOINT_ROWS]

    outputs = {}
    for name in Targets.ALL:
        values = epi_outputs[name].to_numpy()
        if not np.all(np.isfinite(values)):
            raise ModelRunError(f"Output {name} is undefined at a checkpoint: {values.tolist()}")

        outputs[name] = values

    return outputs
