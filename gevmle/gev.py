import numpy as np
import numdifftools as ndt

from .config import validate_config
from .constants import XI_TOL
from .gev_mle import _gevfit
from .gev_utils import as_sample, grad_nll_gev


class gev:
    @staticmethod
    def supp(loc=0, scale=1, shape=0):

        if scale <= 0:
            raise ValueError("Invalid scale")

        if shape == 0:
            return (-np.inf, np.inf)
        if shape > 0:
            return (loc - scale/shape, np.inf)
        else:
            return (-np.inf, loc - scale/shape)

    @staticmethod
    def loglike(x, loc, scale, shape, eps=XI_TOL):
        """
        Loglikelihood of the GEV distribution (without penalties).
        Returns -inf outside the support or for a non-positive scale.
        """
        x = np.atleast_1d(np.asarray(x, dtype=float))
        n = x.size

        if scale <= 0:
            return -np.inf

        if np.abs(shape) <= eps:
            x = (x - loc)/scale
            return -n*np.log(scale) - np.sum(x) - np.sum(np.exp(-x))
        else:
            low, up = gev.supp(loc, scale, shape)
            if np.any(x <= low) or np.any(x >= up):
                return -np.inf
            xx = 1 + shape*(x - loc)/scale
            # Rounding at the support bound
            if np.any(xx <= 0):
                return -np.inf
            return -n*np.log(scale) - (1/shape + 1)*np.sum(np.log(xx)) - np.sum(xx**(-1/shape))

    @staticmethod
    def fit(x, method="mle", config=None):
        """
        Fit the GEV distribution to the data.

        Args:
            x (array-like): observations
            method (str): only "mle" is supported
            config (dict, optional): penalty and solver settings

        Returns:
            dict: 'x' ([location, scale, shape]), 'fun' (penalized negative
            loglikelihood), 'success', 'nit' and 'message'
        """
        if method.lower() != "mle":
            raise ValueError(f"{method} method not supported yet")

        return _gevfit(x, config)

    @staticmethod
    def cov(x, params, config=None):
        """
        Variance-covariance matrix of the estimates, inverse of the observed
        information at `params`.

        The information matrix is the numerical jacobian of the analytic
        gradient of the penalized negative loglikelihood.
        """
        config = validate_config(config)
        data = as_sample(x)

        aux_fun = lambda p: grad_nll_gev(data, p, alpha=config['alpha'], beta=config['beta'],
                                         lam=config['lam'], eps=config['eps'])
        jac = ndt.Jacobian(aux_fun, step=1e-5)
        info = jac(np.asarray(params, dtype=float))
        info = 0.5*(info + info.T)

        return np.linalg.inv(info)
