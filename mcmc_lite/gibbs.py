from __future__ import annotations
from dataclasses import dataclass
import logging
import numpy as np
import tqdm
from .chain import ChainStore
from .errors import ConfigurationError, NumericDomainError
from .primitives import (SeedLike, check_count, check_positive, draw_inverse_gamma, draw_normal,
                         make_rng, mean, variance)

_LOGGER = logging.getLogger(__name__)

GIBBS_COLUMNS = ("mu", "sigma2")


@dataclass(frozen=True)
class NormalPrior:
    mu_mu: float
    sigma2_mu: float
    a_sigma: float
    b_sigma: float

    def __post_init__(self):
        if not np.isfinite(self.mu_mu):
            raise ConfigurationError(f"mu_mu must be finite, got {self.mu_mu}")
        check_positive("sigma2_mu", self.sigma2_mu)
        check_positive("a_sigma", self.a_sigma)
        check_positive("b_sigma", self.b_sigma)


@dataclass(frozen=True)
class GibbsState:
    mu: float
    sigma2: float


def gibbs_step(state: GibbsState, x: np.ndarray, xbar: float, prior: NormalPrior,
               rng: np.random.Generator) -> GibbsState:
    """One sweep: mu | sigma2, x then sigma2 | mu, x."""
    n = x.shape[0]
    # mu | sigma2, x ~ N(mu_n, sigma2_n)
    sigma2_n = 1.0 / (1.0 / prior.sigma2_mu + n / state.sigma2)
    mu_n = sigma2_n * (prior.mu_mu / prior.sigma2_mu + n / state.sigma2 * xbar)
    mu = float(draw_normal(1, mu_n, np.sqrt(sigma2_n), rng)[0])

    # sigma2 | mu, x ~ InvGamma(a_sigma + n/2, rate = b_sigma + 0.5 * sum((x - mu)^2))
    a_n = prior.a_sigma + 0.5 * n
    b_n = prior.b_sigma + 0.5 * float(np.sum((x - mu) ** 2))
    sigma2 = draw_inverse_gamma(a_n, b_n, rng)
    if not np.isfinite(sigma2) or sigma2 <= 0:
        raise NumericDomainError(f"sigma2 draw left its domain: {sigma2} (a_n={a_n}, b_n={b_n})")
    return GibbsState(mu=mu, sigma2=sigma2)


def initial_state(x: np.ndarray) -> GibbsState:
    s2 = variance(x)
    if not np.isfinite(s2) or not s2 > 0:
        raise NumericDomainError(f"sample variance of x is {s2}; cannot seed sigma2")
    return GibbsState(mu=mean(x), sigma2=s2)


def _check_data(x) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    if x.ndim != 1:
        raise ConfigurationError(f"x must be a 1D vector, got shape {x.shape}")
    if x.shape[0] < 2:
        raise ConfigurationError("x needs at least two observations")
    if not np.all(np.isfinite(x)):
        raise ConfigurationError("x has non-finite values")
    return x


def run_gibbs(
    x: np.ndarray, mu_mu: float, sigma2_mu: float, a_sigma: float, b_sigma: float,
    R: int, burn_in: int, seed: SeedLike = None, verbose: bool = False
) -> np.ndarray:
    """Gibbs sampler for x_i ~ N(mu, sigma2), mu ~ N(mu_mu, sigma2_mu), sigma2 ~ InvGamma(a_sigma, b_sigma).

    Runs ``burn_in + R`` sweeps from mu = mean(x), sigma2 = var(x) and keeps
    sweeps ``burn_in .. burn_in + R - 1``. Returns a read-only (R, 2) array with
    columns ``[mu, sigma2]``. Output is random unless ``seed`` is fixed.
    """
    R = check_count("R", R, 1)
    burn_in = check_count("burn_in", burn_in, 0)
    x = _check_data(x)
    prior = NormalPrior(float(mu_mu), float(sigma2_mu), float(a_sigma), float(b_sigma))
    rng = make_rng(seed)

    xbar = mean(x)
    state = initial_state(x)
    chain = ChainStore(R, GIBBS_COLUMNS)

    _LOGGER.info("Gibbs: n=%d, burn_in=%d, R=%d", x.shape[0], burn_in, R)
    total_iter = burn_in + R
    for r in tqdm.tqdm(range(total_iter), total=total_iter, disable=not verbose):
        state = gibbs_step(state, x, xbar, prior, rng)
        if r >= burn_in:
            chain.append((state.mu, state.sigma2))

    out = chain.finalize()
    _LOGGER.debug("Gibbs: posterior means mu=%.4f sigma2=%.4f", out[:, 0].mean(), out[:, 1].mean())
    return out
