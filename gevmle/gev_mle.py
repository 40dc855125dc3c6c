import logging

import numpy as np
from scipy.optimize import minimize

from .config import validate_config
from .constants import SENTINEL, MIN_SAMPLE_SIZE, VAR_TOL, EULER_GAMMA, XI0
from .gev_utils import as_sample, nll_gev, grad_nll_gev, is_feasible, feasible_scale

logger = logging.getLogger(__name__)


def initial_guess(data, xi0=XI0):
    """
    Starting point of the MLE problem.

    Location and scale are the Gumbel method of moments estimates; the scale is
    inflated when needed so every observation is well inside the support for
    the initial shape `xi0`.

    Args:
        data (np.array): observations (at least one)
        xi0 (float): initial shape

    Returns:
        np.array: [location, scale, shape]
    """
    sigma0 = np.sqrt(6)*np.std(data)/np.pi
    mu0 = np.mean(data) - EULER_GAMMA*sigma0
    sigma0 = feasible_scale(data, mu0, sigma0, xi0)

    return np.array([mu0, sigma0, xi0], dtype=float)


def _is_degenerate(data):
    if data.size < MIN_SAMPLE_SIZE:
        return f"sample of size {data.size} (at least {MIN_SAMPLE_SIZE} required)"
    if not np.all(np.isfinite(data)):
        return "sample with non-finite values"
    with np.errstate(over="ignore", invalid="ignore"):
        mean, std = np.mean(data), np.std(data)
    if not (np.isfinite(mean) and np.isfinite(std)):
        return "sample moments overflow"
    if std <= VAR_TOL*max(1.0, np.abs(mean)):
        return "sample with zero variance"
    return None


def _degenerate_guess(data):
    if data.size == 0 or not np.all(np.isfinite(data)):
        return np.zeros(3)
    with np.errstate(over="ignore", invalid="ignore"):
        mean = np.mean(data)
    if not np.isfinite(mean):
        return np.zeros(3)
    return np.array([mean, 0.0, 0.0])


def _gevfit(data, config=None):
    """
    Solve the penalized MLE problem and return the raw outcome.

    Returns:
        dict: 'x' (final iterate), 'fun', 'success', 'nit' and 'message'
    """
    config = validate_config(config)
    data = as_sample(data)

    reason = _is_degenerate(data)
    if reason is not None:
        logger.warning("GEV fit skipped: %s", reason)
        return {
            'x': _degenerate_guess(data),
            'fun': SENTINEL,
            'success': False,
            'nit': 0,
            'message': f"Degenerate input: {reason}"
        }

    alpha, beta, lam, eps = config['alpha'], config['beta'], config['lam'], config['eps']

    # Objective and gradient bound to the sample and the penalty hyperparameters
    fun = lambda p: nll_gev(data, p, alpha=alpha, beta=beta, lam=lam, eps=eps)
    jac = lambda p: grad_nll_gev(data, p, alpha=alpha, beta=beta, lam=lam, eps=eps)

    x0 = initial_guess(data, xi0=config['xi0'])
    n = data.size

    # The solver sees the objective per observation, so gtol does not depend on the sample size
    try:
        with np.errstate(all="ignore"):
            res = minimize(
                fun=lambda p: fun(p)/n,
                x0=x0,
                jac=lambda p: jac(p)/n,
                method="BFGS",
                options={"gtol": config['gtol'], "maxiter": config['maxiter']}
            )
    except (FloatingPointError, ValueError, np.linalg.LinAlgError) as err:
        logger.warning("GEV fit broke down: %s", err)
        return {
            'x': x0,
            'fun': fun(x0),
            'success': False,
            'nit': 0,
            'message': f"Numerical breakdown: {err}"
        }

    x = np.asarray(res.x, dtype=float)
    fx = fun(x)
    success = bool(res.success) and is_feasible(data, x) and fx < SENTINEL

    if not success:
        logger.warning("GEV fit did not converge after %d iterations: %s", res.nit, res.message)
    else:
        logger.debug("GEV fit converged in %d iterations: loc=%.6g scale=%.6g shape=%.6g", res.nit, *x)

    return {
        'x': x,
        'fun': fx,
        'success': success,
        'nit': int(res.nit),
        'message': str(res.message)
    }


def gevfit_mle(data, config=None):
    """
    Maximum likelihood estimation of the GEV distribution.

    The penalized negative loglikelihood (:func:`gev_utils.nll_gev`) and its
    analytic gradient are minimized with BFGS. Failures (degenerate sample,
    iteration cap, numerical breakdown) are only reported through the flag.

    Args:
        data (array-like): observations, e.g. annual maxima
        config (dict, optional): penalty and solver settings, see :func:`config.validate_config`

    Returns:
        success (bool): True if the solver converged to a feasible point
        params (np.array): [location, scale, shape]. When success is False this is
            the last iterate and must be validated before use.

    Example
    -------
    >>> from scipy.stats import genextreme
    >>> data = genextreme.rvs(-0.2, loc=0, scale=1, size=500, random_state=42)
    >>> success, (mu, sigma, xi) = gevfit_mle(data)
    """
    res = _gevfit(data, config)
    return res['success'], res['x']
