import numpy as np
import pytest
from scipy.optimize import minimize

from mcmc_lite.errors import ConfigurationError, NotPositiveDefiniteError
from mcmc_lite.logistic import log_posterior
from mcmc_lite.models import default_proposal_cov
from mcmc_lite.primitives import cholesky_lower
from mcmc_lite.rwmh import RWMHState, acceptance_probability, run_rwmh, rwmh_step, sample_rwmh


def _make_data(n: int = 50, seed: int = 0, beta=(0.5, -1.0)):
    rng = np.random.default_rng(seed)
    X = np.column_stack([np.ones(n), rng.normal(size=n)])
    p = 1.0 / (1.0 + np.exp(-(X @ np.asarray(beta))))
    y = (rng.random(n) < p).astype(float)
    return X, y


def _start(X, y, prior_variance=100.0):
    beta0 = np.zeros(X.shape[1])
    return RWMHState(beta=beta0, logp=log_posterior(beta0, y, X, prior_variance))


S2 = 0.1 * np.eye(2)


@pytest.mark.parametrize("R,burn_in", [(1, 0), (1, 10), (30, 0), (30, 20)])
def test_shape(R, burn_in):
    X, y = _make_data()
    out = run_rwmh(R, burn_in, y, X, S2, seed=0)
    assert out.shape == (R, X.shape[1])
    assert np.all(np.isfinite(out))


def test_deterministic_with_seed():
    X, y = _make_data()
    a = run_rwmh(300, 100, y, X, S2, seed=5)
    b = run_rwmh(300, 100, y, X, S2, seed=5)
    assert a.tobytes() == b.tobytes()


def test_run_matches_manual_steps_with_inclusive_burn_in():
    X, y = _make_data()
    R, burn_in = 40, 10
    out = run_rwmh(R, burn_in, y, X, S2, seed=3)

    A = cholesky_lower(S2)
    rng = np.random.default_rng(3)
    state = _start(X, y)
    rows = []
    for _ in range(R + burn_in):
        state, _ = rwmh_step(state, A, y, X, rng)
        rows.append(state.beta)
    assert np.array_equal(out, np.array(rows[burn_in:]))
    # accepted moves must show up in later rows
    assert len(np.unique(out[:, 0])) > 1


def test_cached_logp_tracks_beta():
    X, y = _make_data(seed=2)
    A = cholesky_lower(S2)
    rng = np.random.default_rng(0)
    state = _start(X, y)
    for _ in range(300):
        state, _ = rwmh_step(state, A, y, X, rng)
        assert state.logp == log_posterior(state.beta, y, X)


def test_acceptance_probabilities_in_unit_interval():
    X, y = _make_data(seed=4)
    A = cholesky_lower(np.eye(2))
    rng = np.random.default_rng(1)
    state = _start(X, y)
    alphas = []
    for _ in range(500):
        state, alpha = rwmh_step(state, A, y, X, rng)
        alphas.append(alpha)
    alphas = np.array(alphas)
    assert np.all((alphas >= 0.0) & (alphas <= 1.0))
    assert 0.0 < alphas.mean() < 1.0


def test_acceptance_probability_no_overflow():
    assert acceptance_probability(1e6, 0.0) == 1.0
    assert acceptance_probability(0.0, 1e6) == 0.0
    assert acceptance_probability(-1.0, 0.0) == pytest.approx(np.exp(-1.0))
    assert acceptance_probability(np.nan, 0.0) == 0.0


def test_chain_mean_near_map():
    X, y = _make_data(n=200, seed=1)
    res = minimize(lambda b: -log_posterior(b, y, X), np.zeros(2), method="BFGS")
    S = default_proposal_cov(X)
    result = sample_rwmh(20_000, 2_000, y, X, S, seed=42)
    assert 0.15 < result.acceptance_rate < 0.7
    assert np.allclose(result.draws.mean(axis=0), res.x, atol=0.1)


def test_stable_with_extreme_linear_predictor():
    X = np.array([[1.0, 80.0], [1.0, -80.0], [1.0, 60.0], [1.0, -55.0]])
    y = np.array([1.0, 0.0, 0.0, 1.0])
    out = run_rwmh(200, 0, y, X, 0.5 * np.eye(2), seed=0)
    assert np.all(np.isfinite(out))


def test_prior_variance_is_a_parameter():
    X, y = _make_data()
    a = run_rwmh(50, 0, y, X, S2, prior_variance=100.0, seed=8)
    b = run_rwmh(50, 0, y, X, S2, prior_variance=0.01, seed=8)
    assert not np.array_equal(a, b)


@pytest.mark.parametrize("S", [
    np.array([[1.0, 2.0], [2.0, 1.0]]),
    np.array([[1.0, 0.2], [0.0, 1.0]]),
])
def test_bad_proposal_fails_before_any_draw(S):
    X, y = _make_data()
    rng = np.random.default_rng(0)
    before = rng.bit_generator.state
    with pytest.raises(NotPositiveDefiniteError):
        run_rwmh(10, 0, y, X, S, seed=rng)
    assert rng.bit_generator.state == before


@pytest.mark.parametrize("R,burn_in,rows,y_bad,S_dim", [
    (0, 0, 50, False, 2),
    (10, -1, 50, False, 2),
    (10, 0, 49, False, 2),
    (10, 0, 50, True, 2),
    (10, 0, 50, False, 3),
])
def test_configuration_errors(R, burn_in, rows, y_bad, S_dim):
    X, y = _make_data()
    y = y[:rows]
    if y_bad:
        y = y.copy()
        y[0] = 2.0
    with pytest.raises(ConfigurationError):
        run_rwmh(R, burn_in, y, X, 0.1 * np.eye(S_dim), seed=0)


def test_prior_variance_validated_once(monkeypatch):
    import mcmc_lite.logistic as logistic_mod
    import mcmc_lite.rwmh as rwmh_mod

    calls = []

    def counting(name, value):
        calls.append(name)
        return float(value)

    monkeypatch.setattr(logistic_mod, "check_positive", counting)
    monkeypatch.setattr(rwmh_mod, "check_positive", counting)
    X, y = _make_data()
    sample_rwmh(100, 20, y, X, S2, seed=0)
    assert calls == ["prior_variance"]


def test_bad_prior_variance_rejected_before_loop():
    X, y = _make_data()
    with pytest.raises(ConfigurationError):
        run_rwmh(10, 0, y, X, S2, prior_variance=0.0, seed=0)
