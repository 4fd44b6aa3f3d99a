# PyTest configuration file.
# See pytest fixtue docs: https://docs.pytest.org/en/latest/fixture.html
import pytest

from sicksicker.calibration.outputs import get_calibration_outputs
from sicksicker.calibration.priors import get_default_priors
from sicksicker.calibration.targets import CalibrationTargets
from sicksicker.tool_kit.params import get_basecase_params

from .utils import run_sick_sicker_model

TRUE_PARAMS = {"p.S1S2": 0.105, "hr.S1": 3.0, "hr.S2": 10.0}


@pytest.fixture
def basecase_params():
    return get_basecase_params()


@pytest.fixture
def priors():
    return get_default_priors()


@pytest.fixture
def target_data(basecase_params):
    """
    Synthetic targets: the test model's outputs at TRUE_PARAMS, with a 0.02 standard error.
    The alternative "PropSick" name is used, as in older target tables.
    """
    outputs = get_calibration_outputs(TRUE_PARAMS, basecase_params, run_sick_sicker_model)
    return {
        "Surv": {"value": outputs["Surv"].tolist(), "se": [0.02] * 3},
        "Prev": {"value": outputs["Prev"].tolist(), "se": [0.02] * 3},
        "PropSick": {"value": outputs["PropSicker"].tolist(), "se": [0.02] * 3},
    }


@pytest.fixture
def targets(target_data):
    return CalibrationTargets.from_dict(target_data)
