import numpy as np
import pandas as pd

from sicksicker.settings.constants import CHECKPOINT_ROWS, States

N_CYCLES = max(CHECKPOINT_ROWS) + 1

# Background mortality used by the test cohort model.
P_HD = 0.005


def build_cohort_trace(sick, sicker, dead, n_cycles: int = N_CYCLES) -> pd.DataFrame:
    """
    Cohort trace starting with everyone healthy, then holding the given
    occupancies (scalars or one value per later cycle) for the remaining cycles.
    """
    sick = np.broadcast_to(np.asarray(sick, dtype=float), (n_cycles - 1,))
    sicker = np.broadcast_to(np.asarray(sicker, dtype=float), (n_cycles - 1,))
    dead = np.broadcast_to(np.asarray(dead, dtype=float), (n_cycles - 1,))
    trace = pd.DataFrame(
        {
            States.HEALTHY: np.concatenate([[1.0], 1.0 - sick - sicker - dead]),
            States.SICK: np.concatenate([[0.0], sick]),
            States.SICKER: np.concatenate([[0.0], sicker]),
            States.DEAD: np.concatenate([[0.0], dead]),
        }
    )
    trace.index.name = "cycle"
    return trace


def run_sick_sicker_model(params: dict, n_cycles: int = N_CYCLES) -> pd.DataFrame:
    """
    Minimal Sick-Sicker Markov cohort model, standing in for the real simulator.
    """
    p_hs1, p_s1h, p_s1s2 = params["p.HS1"], params["p.S1H"], params["p.S1S2"]
    r_hd = -np.log(1 - P_HD)
    p_s1d = 1 - np.exp(-r_hd * params["hr.S1"])
    p_s2d = 1 - np.exp(-r_hd * params["hr.S2"])

    # Rows are the origin state H, S1, S2, D.
    transitions = np.array(
        [
            [1 - p_hs1 - P_HD, p_hs1, 0, P_HD],
            [p_s1h, 1 - p_s1h - p_s1s2 - p_s1d, p_s1s2, p_s1d],
            [0, 0, 1 - p_s2d, p_s2d],
            [0, 0, 0, 1],
        ]
    )
    if np.any(transitions < 0):
        raise ValueError("Transition probabilities must be non-negative")

    trace = np.zeros((n_cycles, len(States.ALL)))
    trace[0] = [1, 0, 0, 0]
    for t in range(1, n_cycles):
        trace[t] = trace[t - 1] @ transitions

    return pd.DataFrame(trace, columns=States.ALL)


def get_failing_model(fail_when):
    """
    Wraps the test cohort model so that it raises for some parameter sets.
    """

    def run_model(params: dict) -> pd.DataFrame:
        if fail_when(params):
            raise FloatingPointError("Simulated solver failure")
        return run_sick_sicker_model(params)

    return run_model
