"""
Constants shared by the calibration engine.
"""


class States:
    """Health states reported in the cohort trace."""

    HEALTHY = "H"
    SICK = "S1"
    SICKER = "S2"
    DEAD = "D"

    ALL = [HEALTHY, SICK, SICKER, DEAD]


class Targets:
    """Names of the calibration targets / model outputs."""

    SURVIVAL = "Surv"
    PREVALENCE = "Prev"
    PROP_SICKER = "PropSicker"

    ALL = [SURVIVAL, PREVALENCE, PROP_SICKER]

    # Older target tables label the proportion-sicker target "PropSick".
    ALIASES = {"PropSick": PROP_SICKER}


# Positional rows of the cohort trace compared against the targets.
# The trace starts at cycle 0, so these are the 11th, 21st and 31st rows.
CHECKPOINT_ROWS = [10, 20, 30]

DEFAULT_TARGET_WEIGHT = 1.0

# Prior support of the parameters calibrated by default.
DEFAULT_CALIBRATED_PRIORS = {
    "p.S1S2": [0.01, 0.50],
    "hr.S1": [1.0, 4.5],
    "hr.S2": [5.0, 15.0],
}
