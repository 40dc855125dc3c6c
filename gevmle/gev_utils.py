import numpy as np

from .constants import ALPHA, BETA, LAMBDA, XI_TOL, SENTINEL, GRAD_CAP, MAX_EXP


def as_sample(data) -> np.ndarray:
    """
    Read-only float64 copy of the observations, shared by the objective and
    the gradient during one fit.
    """
    sample = np.array(data, dtype=float).ravel()
    sample.flags.writeable = False
    return sample


def _exp(x):
    # Clamped exponential, never overflows
    return np.exp(np.minimum(x, MAX_EXP))


def _barrier(s, lam):
    """
    Barrier (log(lam*s))**2 for 0 < s < 1/lam and 0 otherwise.
    Continuously differentiable at s = 1/lam and unbounded as s -> 0+.
    """
    s = np.atleast_1d(np.asarray(s, dtype=float))
    b = np.zeros_like(s)
    active = s < 1/lam
    b[active] = np.log(lam*s[active])**2
    return b


def _dbarrier(s, lam):
    """Derivative of :func:`_barrier` with respect to s"""
    s = np.atleast_1d(np.asarray(s, dtype=float))
    db = np.zeros_like(s)
    active = s < 1/lam
    db[active] = 2*np.log(lam*s[active])/s[active]
    return db


def is_feasible(data, p):
    """Scale and support constraints: sigma > 0 and 1 + xi*(z - mu)/sigma > 0"""
    if not np.all(np.isfinite(p)) or p[1] <= 0:
        return False
    with np.errstate(over="ignore", invalid="ignore"):
        return bool(np.all(1 + p[2]*(data - p[0])/p[1] > 0))


def feasible_scale(data, mu, sigma, xi):
    """
    Smallest scale, not below `sigma`, for which 1 + xi*(z - mu)/scale >= 1/2
    for every observation z
    """
    data = np.asarray(data, dtype=float)
    if data.size == 0:
        return float(sigma)
    return float(max(sigma, 2*np.max(-xi*(data - mu))))


def nll_gev(data, p, alpha=ALPHA, beta=BETA, lam=LAMBDA, eps=XI_TOL):
    """
    Penalized negative loglikelihood of the Stationary GEV distribution.

    The scale and support constraints are replaced by barriers so the problem
    can be solved by an unconstrained minimizer. Infeasible parameters return
    a large finite value instead of NaN or infinity.

    Args:
        data (np.array): observations
        p (list): parameters of GEV distribution [location, scale, shape]
        alpha (float): weight of the barrier on 0 < scale
        beta (float): weight of the barrier on 1 + shape*(data - location)/scale > 0
        lam (float): barriers are active below 1/lam
        eps (float): |shape| below which the Gumbel loglikelihood is used

    Returns:
        float: penalized negative loglikelihood value
    """
    data = np.asarray(data, dtype=float)
    p = np.asarray(p, dtype=float)
    if not is_feasible(data, p):
        return SENTINEL

    mu = p[0]       # Location
    sigma = p[1]    # Scale
    xi = p[2]       # Shape
    n = data.size

    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        expr = (data - mu)/sigma
        t = 1 + xi*expr

        # Gumbel
        if np.abs(xi) <= eps:
            f = n*np.log(sigma) + np.sum(expr) + np.sum(_exp(-expr))

        # Weibull-Frechet
        else:
            logt = np.log1p(xi*expr)
            f = n*np.log(sigma) + (1 + 1/xi)*np.sum(logt) + np.sum(_exp(-logt/xi))

        f = f + alpha*np.sum(_barrier(sigma, lam)) + beta*np.sum(_barrier(t, lam))

    if not np.isfinite(f):
        return SENTINEL

    return float(min(f, SENTINEL))


def grad_nll_gev(data, p, alpha=ALPHA, beta=BETA, lam=LAMBDA, eps=XI_TOL):
    """
    Analytic gradient of :func:`nll_gev` with respect to [location, scale, shape].

    The Gumbel branch uses the xi -> 0 limit of the shape derivative so the
    shape can move away from zero. Infeasible parameters return zeros.

    Args:
        data (np.array): observations
        p (list): parameters of GEV distribution [location, scale, shape]
        alpha, beta, lam, eps: same as :func:`nll_gev`

    Returns:
        np.array: gradient, shape (3,)
    """
    data = np.asarray(data, dtype=float)
    p = np.asarray(p, dtype=float)
    if not is_feasible(data, p):
        return np.zeros(3)

    mu = p[0]
    sigma = p[1]
    xi = p[2]
    n = data.size

    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        expr = (data - mu)/sigma
        t = 1 + xi*expr

        # Gumbel
        if np.abs(xi) <= eps:
            e = _exp(-expr)
            dmu = -np.sum(1 - e)/sigma
            dsigma = n/sigma - np.sum(expr*(1 - e))/sigma
            dxi = np.sum(expr - 0.5*expr**2*(1 - e))

        # Weibull-Frechet
        else:
            logt = np.log1p(xi*expr)
            w = _exp(-logt/xi)
            a = (1 + xi - w)/t
            dmu = -np.sum(a)/sigma
            dsigma = n/sigma - np.sum(a*expr)/sigma
            dxi = np.sum(logt*(w - 1))/xi**2 + np.sum(a*expr)/xi

        # Barriers
        dt = beta*_dbarrier(t, lam)
        dmu = dmu - np.sum(dt)*xi/sigma
        dsigma = dsigma + alpha*np.sum(_dbarrier(sigma, lam)) - np.sum(dt*expr)*xi/sigma
        dxi = dxi + np.sum(dt*expr)

    g = np.array([dmu, dsigma, dxi], dtype=float)
    g = np.nan_to_num(g, nan=0.0, posinf=GRAD_CAP, neginf=-GRAD_CAP)

    return np.clip(g, -GRAD_CAP, GRAD_CAP)
