"""
Application state for the sandbox.

Owns the truth model, the estimated model and the generated data, and
sequences calls into the stateless engines. Setters validate before
mutating so a rejected update leaves the previous state intact.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from . import glm
from ._core.random import make_rng
from .config import Settings, get_settings
from .constants import DEFAULT_SAMPLE_SIZE
from .exceptions import GLMSandboxError
from .glm import DataPoint, GLMConfig, GLMParameters
from .validation import ValidationResult, validate_data, validate_parameters, validate_sample_size

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Which model the user is editing."""
    TRUTH = "truth"
    ESTIMATION = "estimation"


def _default_params() -> GLMParameters:
    return GLMParameters(intercept=0.0, slope=1.0)


@dataclass
class AppState:
    """
    Mutable application state.

    Attributes
    ----------
    truth_params, truth_config : GLMParameters, GLMConfig
        The data-generating model
    estimated_params : GLMParameters
        Last successful estimate (or user-set values)
    data_points : list of DataPoint
        Observations generated from the truth model
    sample_size : int
        Number of points :meth:`generate_data` draws
    mode : Mode
        Truth or estimation view
    error : GLMSandboxError, optional
        Last engine failure, cleared on the next success
    rng : Generator
        Uniform source for data generation
    """
    truth_params: GLMParameters = field(default_factory=_default_params)
    truth_config: GLMConfig = field(default_factory=GLMConfig)
    estimated_params: GLMParameters = field(default_factory=_default_params)
    data_points: List[DataPoint] = field(default_factory=list)
    sample_size: int = DEFAULT_SAMPLE_SIZE
    mode: Mode = Mode.TRUTH
    is_generating_data: bool = False
    error: Optional[GLMSandboxError] = None
    rng: np.random.Generator = field(default_factory=make_rng, repr=False, compare=False)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "AppState":
        """Fresh state using configured sample size and seed."""
        settings = settings or get_settings()
        return cls(sample_size=settings.default_sample_size, rng=make_rng(settings.seed))

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_truth_params(self, **changes) -> ValidationResult:
        """Merge ``intercept``/``slope`` into the truth parameters."""
        candidate = replace(self.truth_params, **changes)
        result = validate_parameters(candidate)
        if result:
            self.truth_params = candidate
        return result

    def set_truth_config(self, **changes) -> ValidationResult:
        """Merge ``distribution``/``link_function`` into the truth config."""
        result = ValidationResult()
        try:
            self.truth_config = replace(self.truth_config, **changes)
        except GLMSandboxError as exc:
            result.add(exc.message)
        return result

    def set_estimated_params(self, **changes) -> ValidationResult:
        """Merge ``intercept``/``slope`` into the estimated parameters."""
        candidate = replace(self.estimated_params, **changes)
        result = validate_parameters(candidate)
        if result:
            self.estimated_params = candidate
        return result

    def set_data_points(self, points: Sequence[DataPoint]) -> ValidationResult:
        """Replace the observations; an empty sequence clears them."""
        points = list(points)
        result = validate_data(points) if points else ValidationResult()
        if result:
            self.data_points = points
        return result

    def set_sample_size(self, sample_size: int) -> ValidationResult:
        result = validate_sample_size(sample_size)
        if result:
            self.sample_size = sample_size
        return result

    def set_mode(self, mode) -> None:
        self.mode = Mode(mode)

    def reset_to_defaults(self) -> None:
        """Restore every model field; the random source is kept."""
        defaults = AppState(rng=self.rng)
        for name in ('truth_params', 'truth_config', 'estimated_params', 'data_points',
                     'sample_size', 'mode', 'is_generating_data', 'error'):
            setattr(self, name, getattr(defaults, name))

    # ------------------------------------------------------------------
    # Engine calls
    # ------------------------------------------------------------------

    def generate_data(self) -> List[DataPoint]:
        """
        Replace ``data_points`` with a fresh sample from the truth model.

        Raises
        ------
        GLMSandboxError
            Recorded in ``error`` and re-raised; ``data_points`` is unchanged.
        """
        self.is_generating_data = True
        try:
            points = glm.generate_data(self.truth_params, self.truth_config,
                                       self.sample_size, rng=self.rng)
        except GLMSandboxError as exc:
            self.error = exc
            raise
        finally:
            self.is_generating_data = False

        self.data_points = points
        self.error = None
        logger.debug("State now holds %d data points", len(points))
        return points

    def auto_fit(self) -> Optional[GLMParameters]:
        """
        Estimate parameters from ``data_points`` under the truth config.

        Returns None without estimating when there is no data.

        Raises
        ------
        GLMSandboxError
            Recorded in ``error`` and re-raised; ``estimated_params`` keeps
            its previous value.
        """
        if not self.data_points:
            return None
        try:
            estimated = glm.estimate_parameters(self.data_points, self.truth_config)
        except GLMSandboxError as exc:
            self.error = exc
            logger.debug("Auto-fit failed: %s", exc.code)
            raise

        self.estimated_params = estimated
        self.error = None
        return estimated

    def linear_predictor(self, x: float, params: Optional[GLMParameters] = None) -> float:
        """η at x; truth parameters unless ``params`` is given."""
        return glm.linear_predictor(x, params or self.truth_params)

    def mean_response(self, x: float, params: Optional[GLMParameters] = None) -> float:
        """μ at x under the truth config; truth parameters unless ``params`` is given."""
        return glm.mean_response(x, params or self.truth_params, self.truth_config)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Model fields as plain data (UI flags and the error are not saved)."""
        return {
            'truthParams': self.truth_params.to_dict(),
            'truthConfig': self.truth_config.to_dict(),
            'estimatedParams': self.estimated_params.to_dict(),
            'dataPoints': [point.to_dict() for point in self.data_points],
            'sampleSize': self.sample_size,
            'mode': self.mode.value,
        }

    @classmethod
    def from_dict(cls, data: dict, rng=None) -> "AppState":
        state = cls(rng=make_rng(rng))
        if 'truthParams' in data:
            state.truth_params = GLMParameters.from_dict(data['truthParams'])
        if 'truthConfig' in data:
            state.truth_config = GLMConfig.from_dict(data['truthConfig'])
        if 'estimatedParams' in data:
            state.estimated_params = GLMParameters.from_dict(data['estimatedParams'])
        state.data_points = [DataPoint.from_dict(p) for p in data.get('dataPoints', [])]
        state.sample_size = int(data.get('sampleSize', DEFAULT_SAMPLE_SIZE))
        state.mode = Mode(data.get('mode', Mode.TRUTH))
        return state

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, text: str, rng=None) -> "AppState":
        return cls.from_dict(json.loads(text), rng=rng)


__all__ = ["Mode", "AppState"]
