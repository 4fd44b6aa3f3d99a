"""
Used to load and update model parameters
"""
import logging
from copy import deepcopy
from typing import Dict

import yaml

logger = logging.getLogger(__name__)


def get_basecase_params() -> Dict[str, float]:
    """
    Base-case values of every input of the Sick-Sicker model.
    """
    return {
        # Transition probabilities (per cycle)
        "p.HS1": 0.15,  # healthy -> sick
        "p.S1H": 0.5,  # sick -> healthy
        # Calibrated parameters, the values here are placeholders
        "p.S1S2": 0.105,  # sick -> sicker
        "hr.S1": 3.0,  # hazard ratio of death in sick vs healthy
        "hr.S2": 10.0,  # hazard ratio of death in sicker vs healthy
        # Costs per cycle
        "c.H": 2000.0,
        "c.S1": 4000.0,
        "c.S2": 15000.0,
        "c.D": 0.0,
        "c.Trt": 12000.0,
        # Utilities
        "u.H": 1.0,
        "u.S1": 0.75,
        "u.S2": 0.5,
        "u.D": 0.0,
        "u.Trt": 0.95,
    }


def update_params(params: dict, updates: dict) -> dict:
    """
    Returns a copy of params with the requested entries replaced.

    Parameter names contain dots (eg. "p.S1S2"), so keys are matched literally.
    Every requested key must already exist in params.

    Example

        params = {"p.HS1": 0.15, "hr.S1": 3}
        updates = {"hr.S1": 2.5}
        returns {"p.HS1": 0.15, "hr.S1": 2.5}
    """
    unknown = [k for k in updates if k not in params]
    if unknown:
        raise KeyError(f"Cannot update parameters missing from the parameter set: {unknown}")

    ps = deepcopy(params)
    for key, val in updates.items():
        ps[key] = val

    return ps


def load_params(path: str) -> Dict[str, float]:
    """
    Load base-case parameters from a YAML file, on top of the built-in defaults.
    Unknown parameter names are kept, so that the simulator can consume them.
    """
    with open(path, "r") as f:
        overrides = yaml.safe_load(f) or {}

    if not isinstance(overrides, dict):
        raise ValueError(f"Parameter file {path} must contain a mapping of names to values")

    params = get_basecase_params()
    params.update({k: float(v) for k, v in overrides.items()})
    logger.info("Loaded %s parameter values from %s", len(overrides), path)
    return params


def load_calibration_config(path: str) -> dict:
    """
    Load calibration priors and targets from a YAML file.

        priors:
          - param_name: p.S1S2
            distri_params: [0.01, 0.5]
          - param_name: hr.S1
            distri_params: [1.0, 4.5]
        targets:
          Surv: {value: [...], se: [...]}
          Prev: {value: [...], se: [...]}
          PropSick: {value: [...], se: [...]}
        weights:        # optional
          Surv: 1.0

    Priors can also be given as a {param_name: [lower, upper]} mapping,
    in which case the column order is the order of the keys.

    Returns plain data: {"priors": ..., "targets": ..., "weights": ...}
    """
    with open(path, "r") as f:
        config = yaml.safe_load(f) or {}

    for section in ["priors", "targets"]:
        if not config.get(section):
            raise ValueError(f"Calibration config {path} has no '{section}' section")

    if not isinstance(config["priors"], (list, dict)):
        raise ValueError(f"Priors in calibration config {path} must be a list or a mapping")

    logger.info(
        "Loaded %s priors and %s targets from %s",
        len(config["priors"]),
        len(config["targets"]),
        path,
    )
    return {
        "priors": config["priors"],
        "targets": config["targets"],
        "weights": config.get("weights") or {},
    }


def write_calibration_config(path: str, config: dict):
    """
    Write calibration priors, targets and weights to a YAML file, keeping the prior order.
    """
    with open(path, "w") as f:
        yaml.dump(config, f, sort_keys=False)

    logger.info("Wrote calibration config to %s", path)
