from typing import List

import numpy as np
import pandas as pd
from pyDOE import lhs

from .priors import UniformPrior


def sample_params_from_lhs(
    priors: List[UniformPrior], n_samples: int, seed: int = None
) -> pd.DataFrame:
    """
    Use Latin Hypercube Sampling to draw parameter sets from the priors
    :param priors: priors of the calibrated parameters, in column order
    :param n_samples: integer
    :param seed: seeds the draw, numpy's global random state is restored afterwards
    :return: a dataframe with one row per parameter set
    """
    if n_samples < 1:
        raise ValueError(f"At least one sample is required, got {n_samples}")

    # Draw a Latin hypercube (all values in [0-1]), one random point in each stratum.
    if seed is None:
        hypercube = lhs(n=len(priors), samples=n_samples, criterion=None)
    else:
        random_state = np.random.get_state()
        np.random.seed(seed)
        try:
            hypercube = lhs(n=len(priors), samples=n_samples, criterion=None)
        finally:
            np.random.set_state(random_state)

    samples = {prior.name: prior.ppf(hypercube[:, j]) for j, prior in enumerate(priors)}
    return pd.DataFrame(samples, columns=[p.name for p in priors])


def calculate_logprior(priors: List[UniformPrior], param_matrix: np.ndarray) -> np.ndarray:
    """
    Calculate the joint log-prior of each row of the parameter matrix.
    Rows with any value outside its prior support, or NaN, get -inf.
    """
    logprior = np.zeros(param_matrix.shape[0])
    for j, prior in enumerate(priors):
        logprior += prior.logpdf(param_matrix[:, j])

    return logprior


def get_param_matrix(params, param_names: List[str]) -> np.ndarray:
    """
    Convert one parameter set (a vector) or several (a matrix) into a 2D float array,
    with columns in the order of param_names.

    Dataframes and series are matched on names, plain sequences on position.
    """
    n_param = len(param_names)
    if isinstance(params, pd.DataFrame):
        if sorted(params.columns) != sorted(param_names):
            raise ValueError(
                f"Parameter columns {list(params.columns)} do not match "
                f"the calibrated parameters {param_names}"
            )
        return params[param_names].to_numpy(dtype=float)

    if isinstance(params, pd.Series):
        if sorted(params.index) != sorted(param_names):
            raise ValueError(
                f"Parameter names {list(params.index)} do not match "
                f"the calibrated parameters {param_names}"
            )
        return params[param_names].to_numpy(dtype=float).reshape(1, n_param)

    param_matrix = np.array(params, dtype=float)
    if param_matrix.ndim == 1:
        # A single parameter set
        param_matrix = param_matrix.reshape(1, -1)
    elif param_matrix.ndim != 2:
        raise ValueError(f"Expected a vector or a matrix of parameters, got {param_matrix.ndim}D")

    if param_matrix.shape[1] != n_param:
        raise ValueError(
            f"Expected {n_param} calibrated parameters {param_names}, "
            f"got {param_matrix.shape[1]}"
        )

    return param_matrix
