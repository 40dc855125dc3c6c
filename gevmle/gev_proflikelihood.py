import logging

import numpy as np
from scipy.stats import chi2
from scipy.optimize import minimize, root_scalar
from scipy.interpolate import interp1d
from tqdm import tqdm

from .config import validate_config
from .gev_utils import as_sample, nll_gev, grad_nll_gev, is_feasible, feasible_scale

logger = logging.getLogger(__name__)


def gev_shape_plik(params,  # Estimated parameters of GEV [location, scale, shape]
                   nllopt,  # Optimal negative log-likelihood value for estimated parameters
                   data,  # Data used for estimation
                   xlow,  # Lower bound of the shape grid
                   xup,  # Upper bound of the shape grid
                   conf=0.95,
                   nint=100,
                   config=None,
                   progress=False):
    """
    Function to compute the confidence interval of the shape parameter using profile likelihood method

    Parameters
    ----------
    params : list
        Estimated parameters of GEV [location, scale, shape]
    nllopt : float
        Optimal negative log-likelihood value for estimated parameters
    data : np.array
        Data used for estimation
    xlow : float
        Lower bound of the shape grid, must be below params[2]
    xup : float
        Upper bound of the shape grid, must be above params[2]
    conf : float, optional
        Confidence level, by default 0.95
    nint : int, optional
        Number of points to evaluate profile likelihood, by default 100
    config : dict, optional
        Penalty and solver settings, the same used for the estimation
    progress : bool, optional
        Whether to show a progress bar, by default False

    Returns
    -------
    conf_int : list
        Confidence interval of the shape parameter

    Example
    -------
    >>> from scipy.stats import genextreme
    >>> data = genextreme.rvs(-0.1, loc=0, scale=1, size=1000, random_state=42)
    >>> res = gev.fit(data)
    >>> conf_int = gev_shape_plik(res['x'], res['fun'], data, xlow=-0.2, xup=0.4, nint=200)
    """
    if not xlow < params[2] < xup:
        raise ValueError("The estimated shape must lie inside (`xlow', `xup')")

    config = validate_config(config)
    data = as_sample(data)
    alpha, beta, lam, eps = config['alpha'], config['beta'], config['lam'], config['eps']
    n = data.size

    v = np.zeros(nint)
    x = np.linspace(xlow, xup, nint)

    # Initial guess for location and scale
    initial_guess = np.array([params[0], params[1]], dtype=float)

    for i, xi in enumerate(tqdm(x, disable=not progress)):
        # Profile negative log-likelihood of GEV for fixed shape xi
        def gev_plik(a):
            return nll_gev(data, [a[0], a[1], xi], alpha=alpha, beta=beta, lam=lam, eps=eps)

        def grad_gev_plik(a):
            return grad_nll_gev(data, [a[0], a[1], xi], alpha=alpha, beta=beta, lam=lam, eps=eps)[:2]

        # Keep the warm start inside the support of the new shape
        if not is_feasible(data, [initial_guess[0], initial_guess[1], xi]):
            initial_guess[1] = feasible_scale(data, initial_guess[0], initial_guess[1], xi)

        opt = minimize(
            lambda a: gev_plik(a)/n,
            initial_guess,
            jac=lambda a: grad_gev_plik(a)/n,
            method="BFGS",
            options={"gtol": config['gtol'], "maxiter": config['maxiter']}
        )
        if not opt.success:
            logger.debug("Profile likelihood at shape %.4g: %s", xi, opt.message)
        initial_guess = np.array(opt.x, dtype=float)
        v[i] = gev_plik(opt.x)

    # Find the roots of the equation: -v = -nllopt - 0.5*chi2.ppf(conf, 1)
    f_interpolated = interp1d(x, -v)

    def froot_gev_plik(xi):
        return f_interpolated(xi) + nllopt + 0.5 * chi2.ppf(conf, 1)

    sol_lower = root_scalar(froot_gev_plik, bracket=[xlow, params[2]], method="bisect")
    sol_upper = root_scalar(froot_gev_plik, bracket=[params[2], xup], method="bisect")

    conf_int = [sol_lower.root, sol_upper.root]

    return conf_int
