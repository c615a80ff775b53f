"""
Inference module: factorization lookup and breaker-message resolution.
"""

from forney.inference.factorization import Factorization
from forney.inference.breaker import (
    BreakerSite,
    requires_breaker,
    breaker_parameters,
    effective_partner,
    validate_breakers,
    seed_breakers,
)

__all__ = [
    "Factorization",
    "BreakerSite",
    "requires_breaker",
    "breaker_parameters",
    "effective_partner",
    "validate_breakers",
    "seed_breakers",
]
