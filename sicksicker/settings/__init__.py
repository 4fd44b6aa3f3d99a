from .constants import (
    CHECKPOINT_ROWS,
    DEFAULT_CALIBRATED_PRIORS,
    DEFAULT_TARGET_WEIGHT,
    States,
    Targets,
)
