import logging
from copy import deepcopy
from typing import Dict, List, Optional, Union

import numpy as np
import pandas as pd

from sicksicker.tool_kit.parallel import run_parallel_tasks
from sicksicker.tool_kit.params import (
    get_basecase_params,
    load_calibration_config,
    write_calibration_config,
)
from sicksicker.tool_kit.timer import Timer

from .outputs import ModelRunError, ModelRunner, get_calibration_outputs
from .priors import UniformPrior, check_priors, get_priors_from_config
from .targets import CalibrationTargets
from .utils import calculate_logprior, get_param_matrix, sample_params_from_lhs

logger = logging.getLogger(__name__)


class LikelihoodEvaluation:
    """
    Outcome of evaluating one parameter set against the targets:
    either the log-likelihood of each target, or the reason the model run failed.
    """

    def __init__(self, target_loglikelihoods: Dict[str, float] = None, error: str = None):
        if (target_loglikelihoods is None) == (error is None):
            raise ValueError("An evaluation holds either target log-likelihoods or an error")

        self.target_loglikelihoods = target_loglikelihoods
        self.error = error

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def overall(self, weights: Dict[str, float]) -> float:
        """Weighted sum of the target log-likelihoods, -inf if the model run failed."""
        if not self.succeeded:
            return -np.inf

        return float(sum(weights[k] * ll for k, ll in self.target_loglikelihoods.items()))


class Calibration:
    """
    Bayesian calibration of the Sick-Sicker cohort model.

    Exposes the prior, likelihood and posterior of the calibrated parameters,
    to be used by an external sampler (eg. IMIS or MCMC).
    Every density method accepts a single parameter set (a vector) or several (a matrix
    or a dataframe, one row per set) and returns one value per set.
    """

    def __init__(
        self,
        priors: List[UniformPrior],
        targets: Union[CalibrationTargets, dict],
        run_model: ModelRunner,
        params: Optional[dict] = None,
        seed: int = None,
        n_workers: int = 1,
    ):
        """
        :param priors: uniform priors of the calibrated parameters, in column order
        :param targets: the calibration targets, or plain target data
        :param run_model: function running the cohort model on a full parameter set
        :param params: full parameter set of the model, defaults to the base case
        :param seed: seeds the sequence of prior samples
        :param n_workers: number of threads used to evaluate a batch of parameter sets
        """
        check_priors(priors)
        if isinstance(targets, dict):
            targets = CalibrationTargets.from_dict(targets)
        if n_workers < 1:
            raise ValueError(f"n_workers must be at least 1, got {n_workers}")

        self.priors = list(priors)
        self.param_names = [p.name for p in self.priors]
        self.targets = targets
        self.run_model = run_model
        self.params = deepcopy(params) if params is not None else get_basecase_params()
        self.seed = seed
        self._seed_sequence = np.random.SeedSequence(seed) if seed is not None else None
        self.n_workers = n_workers

        missing = [n for n in self.param_names if n not in self.params]
        if missing:
            raise KeyError(f"Calibrated parameters missing from the model parameters: {missing}")

    @classmethod
    def from_config(cls, config_path: str, run_model: ModelRunner, **kwargs):
        """
        Build a calibration from a YAML file of priors and targets.
        """
        config = load_calibration_config(config_path)
        priors = get_priors_from_config(config["priors"])
        targets = CalibrationTargets.from_dict(config["targets"], config["weights"])
        return cls(priors, targets, run_model, **kwargs)

    def save_config(self, config_path: str):
        """
        Write the priors, targets and weights to a YAML file that from_config can read.
        """
        config = {
            "priors": [p.to_dict() for p in self.priors],
            "targets": self.targets.to_dict(),
            "weights": self.targets.weights,
        }
        write_calibration_config(config_path, config)

    def sample_prior(self, n_samples: int, seed: int = None) -> pd.DataFrame:
        """
        Draw parameter sets from the prior with Latin Hypercube Sampling.

        Without a seed, a calibration built with one draws each sample from the next
        seed of its own sequence: successive calls differ, and two calibrations built
        with the same seed draw the same sequence of samples.
        """
        if seed is None and self._seed_sequence is not None:
            seed = int(self._seed_sequence.spawn(1)[0].generate_state(1)[0])

        return sample_params_from_lhs(self.priors, n_samples, seed=seed)

    def evaluate_params(self, calib_values: np.ndarray) -> LikelihoodEvaluation:
        """
        Run the model for one parameter set and compare its outputs to the targets.
        """
        calib_params = {k: float(v) for k, v in zip(self.param_names, calib_values)}
        try:
            model_outputs = get_calibration_outputs(calib_params, self.params, self.run_model)
        except ModelRunError as e:
            logger.warning("Rejecting parameter set %s: %s", calib_params, e)
            return LikelihoodEvaluation(error=str(e))

        target_loglikelihoods = {
            target.name: target.loglikelihood(model_outputs[target.name])
            for target in self.targets
        }
        return LikelihoodEvaluation(target_loglikelihoods=target_loglikelihoods)

    def _evaluate_batch(self, param_matrix: np.ndarray) -> List[LikelihoodEvaluation]:
        rows = list(param_matrix)
        with Timer(f"evaluating {len(rows)} parameter sets"):
            evaluations = run_parallel_tasks(self.evaluate_params, rows, self.n_workers)

        n_failed = sum(not e.succeeded for e in evaluations)
        if n_failed:
            logger.info("%s / %s model runs failed", n_failed, len(rows))

        return evaluations

    def loglikelihood(self, params) -> np.ndarray:
        """
        Calculate the log-likelihood of each parameter set.
        Parameter sets for which the model fails get -inf.
        """
        param_matrix = get_param_matrix(params, self.param_names)
        weights = self.targets.weights
        evaluations = self._evaluate_batch(param_matrix)
        return np.array([e.overall(weights) for e in evaluations], dtype=float)

    def loglikelihood_by_target(self, params) -> pd.DataFrame:
        """
        Log-likelihood of each parameter set, broken down by target.
        Failed model runs give NaN for every target and -inf overall.
        """
        param_matrix = get_param_matrix(params, self.param_names)
        weights = self.targets.weights
        evaluations = self._evaluate_batch(param_matrix)
        rows = []
        for evaluation in evaluations:
            if evaluation.succeeded:
                row = dict(evaluation.target_loglikelihoods)
            else:
                row = {name: np.nan for name in self.targets.names}

            row["overall"] = evaluation.overall(weights)
            rows.append(row)

        return pd.DataFrame(rows, columns=self.targets.names + ["overall"])

    def likelihood(self, params) -> np.ndarray:
        return np.exp(self.loglikelihood(params))

    def logprior(self, params) -> np.ndarray:
        """
        Calculate the joint log-prior of each parameter set.
        """
        param_matrix = get_param_matrix(params, self.param_names)
        return calculate_logprior(self.priors, param_matrix)

    def prior(self, params) -> np.ndarray:
        return np.exp(self.logprior(params))

    def logposterior(self, params) -> np.ndarray:
        """
        Calculate the unnormalised log-posterior of each parameter set.
        The model is only run for parameter sets inside the prior support.
        """
        param_matrix = get_param_matrix(params, self.param_names)
        logprior = calculate_logprior(self.priors, param_matrix)
        loglike = np.full(param_matrix.shape[0], -np.inf)

        in_support = np.isfinite(logprior)
        if in_support.any():
            weights = self.targets.weights
            evaluations = self._evaluate_batch(param_matrix[in_support])
            loglike[in_support] = [e.overall(weights) for e in evaluations]

        return logprior + loglike

    def posterior(self, params) -> np.ndarray:
        return np.exp(self.logposterior(params))
