from __future__ import annotations
import numpy as np


class MCMCError(Exception):
    """Base class for sampler failures."""


class ConfigurationError(MCMCError, ValueError):
    """Invalid inputs detected before the first iteration runs."""


class NotPositiveDefiniteError(ConfigurationError, np.linalg.LinAlgError):
    """Matrix handed to the Cholesky factorisation is not symmetric positive-definite."""


class NumericDomainError(MCMCError, ArithmeticError):
    """A variance left its domain (non-positive or non-finite) during an update."""


class NotFittedError(MCMCError, AttributeError):
    """Posterior wrapper used before ``fit`` was called."""
