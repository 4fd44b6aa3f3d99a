from .calibration import Calibration, LikelihoodEvaluation
from .outputs import ModelRunError, get_calibration_outputs
from .priors import UniformPrior, get_default_priors, get_priors_from_config, get_uniform_priors
from .targets import CalibrationTargets, NormalTarget
