import numpy as np
import pytest
from scipy.stats import genextreme

from gevmle.gev import gev
from gevmle.gev_utils import nll_gev

from conftest import gev_sample


def test_supp():
    assert gev.supp(0, 1, 0) == (-np.inf, np.inf)
    assert gev.supp(0, 1, 0.5) == (-2.0, np.inf)
    assert gev.supp(0, 1, -0.5) == (-np.inf, 2.0)

    with pytest.raises(ValueError):
        gev.supp(0, -1, 0.1)


@pytest.mark.parametrize("shape", [-0.02, 0.0, 0.2])
def test_loglike_matches_scipy(frechet_data, shape):
    loc, scale = 10.0, 2.5
    expected = np.sum(genextreme.logpdf(frechet_data, -shape, loc=loc, scale=scale))

    assert gev.loglike(frechet_data, loc, scale, shape) == pytest.approx(expected, rel=1e-10)


def test_loglike_outside_support(frechet_data):
    assert gev.loglike(frechet_data, 10.0, 2.0, -2.0) == -np.inf
    assert gev.loglike(frechet_data, 10.0, 0.0, 0.1) == -np.inf


def test_loglike_support_bounds():
    # Lower bound -2 for shape 0.5, upper bound 2 for shape -0.5
    assert gev.loglike([-2.0, 0.0, 1.0], 0.0, 1.0, 0.5) == -np.inf
    assert gev.loglike([-1.9, 0.0, 1.0], 0.0, 1.0, 0.5) > -np.inf
    assert gev.loglike([-1.0, 0.0, 2.5], 0.0, 1.0, -0.5) == -np.inf
    assert gev.loglike([-1.0, 0.0, 1.9], 0.0, 1.0, -0.5) > -np.inf


def test_loglike_is_unpenalized_objective(frechet_data):
    p = [10.0, 2.0, 0.2]
    assert -gev.loglike(frechet_data, *p) == pytest.approx(nll_gev(frechet_data, p), rel=1e-12)


def test_fit():
    data = gev_sample(0.0, 1.0, 0.2, size=500, seed=0)
    res = gev.fit(data)

    assert set(res) == {'x', 'fun', 'success', 'nit', 'message'}
    assert res['success']
    assert res['nit'] > 0
    assert res['fun'] == pytest.approx(nll_gev(data, res['x']))
    np.testing.assert_allclose(res['x'], [0.0, 1.0, 0.2], atol=0.1)


def test_fit_unsupported_method():
    with pytest.raises(ValueError):
        gev.fit([1.0, 2.0, 3.0], method="pwm")


def test_fit_degenerate_sample():
    res = gev.fit([])

    assert res['success'] is False
    assert "Degenerate" in res['message']


def test_cov():
    data = gev_sample(0.0, 1.0, 0.2, size=500, seed=0)
    res = gev.fit(data)
    cov = gev.cov(data, res['x'])

    assert cov.shape == (3, 3)
    np.testing.assert_allclose(cov, cov.T)
    assert np.all(np.linalg.eigvalsh(cov) > 0)

    std = np.sqrt(np.diag(cov))
    assert np.all(std > 0.005)
    assert np.all(std < 0.2)
