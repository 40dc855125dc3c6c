import math
from numbers import Integral, Real

from .constants import ALPHA, BETA, LAMBDA, XI_TOL, GTOL, MAXITER, XI0


def validate_config(config: dict = None) -> dict:
    """
    Validate the fit configuration and fill missing keys with the defaults.

    Args:
        config (dict, optional): Fit configuration. Recognised keys:
            alpha   : weight of the barrier on the scale (> 0)
            beta    : weight of the barrier on the support constraint (> 0)
            lam     : barrier threshold control, the barriers act below 1/lam (> 0)
            eps     : |xi| below which the Gumbel likelihood is used (>= 0)
            gtol    : gradient norm tolerance of the solver (> 0)
            maxiter : iteration cap of the solver (> 0)
            xi0     : initial guess of the shape parameter

    Returns:
        dict: New dictionary with every key set. The input is not modified.
    """
    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError("Configuration error: config must be a dictionary.")

    # Optional fields with defaults
    optional_fields = {
        "alpha": (ALPHA, Real),
        "beta": (BETA, Real),
        "lam": (LAMBDA, Real),
        "eps": (XI_TOL, Real),
        "gtol": (GTOL, Real),
        "maxiter": (MAXITER, Integral),
        "xi0": (XI0, Real),
    }

    unknown = set(config) - set(optional_fields)
    if unknown:
        raise KeyError(f"Configuration error: Unknown keys {sorted(unknown)} in the config dictionary.")

    validated = {}
    for key, (default_value, expected_type) in optional_fields.items():
        value = config.get(key, default_value)
        if isinstance(value, bool) or not isinstance(value, expected_type):
            raise TypeError(f"Configuration error: Key '{key}' must be numeric, got {type(value).__name__}.")
        if not math.isfinite(value):
            raise ValueError(f"Configuration error: Key '{key}' must be finite.")
        validated[key] = value

    # Positivity
    for key in ("alpha", "beta", "lam", "gtol", "maxiter"):
        if validated[key] <= 0:
            raise ValueError(f"Configuration error: Key '{key}' must be positive.")

    if validated["eps"] < 0:
        raise ValueError("Configuration error: Key 'eps' must be non-negative.")

    return validated
