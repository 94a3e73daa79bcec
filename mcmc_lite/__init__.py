from .gibbs import run_gibbs, gibbs_step, GibbsState, NormalPrior
from .rwmh import run_rwmh, sample_rwmh, rwmh_step, RWMHState, RWMHResult
from .logistic import log_likelihood, log_prior, log_posterior
from .chain import ChainStore
from .errors import MCMCError, ConfigurationError, NotPositiveDefiniteError, NumericDomainError, NotFittedError
from .models import NormalPosterior, LogisticPosterior, GibbsConfig, RWMHConfig
from .simulator import simulate_normal, simulate_logistic
from . import primitives
__all__ = ["run_gibbs", "gibbs_step", "GibbsState", "NormalPrior",
           "run_rwmh", "sample_rwmh", "rwmh_step", "RWMHState", "RWMHResult",
           "log_likelihood", "log_prior", "log_posterior", "ChainStore",
           "MCMCError", "ConfigurationError", "NotPositiveDefiniteError", "NumericDomainError", "NotFittedError",
           "NormalPosterior", "LogisticPosterior", "GibbsConfig", "RWMHConfig",
           "simulate_normal", "simulate_logistic", "primitives"]
