"""
forney/messages.py

Message objects carried on interfaces.

Key types:
- Variate: dimensionality class of a message payload
- PayloadType: (family, variate) descriptor, hashable and printable
- Message: a payload type plus numpy parameter arrays
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

import numpy as np


class Variate(Enum):
    """Dimensionality class of a distribution."""
    UNIVARIATE = "Univariate"
    MULTIVARIATE = "Multivariate"
    MATRIXVARIATE = "MatrixVariate"


@dataclass(frozen=True)
class PayloadType:
    """
    Descriptor of a message payload.

    Attributes:
        family: Distribution family name, e.g. "GaussianMeanVariance"
        variate: Dimensionality class
    """
    family: str
    variate: Variate = Variate.UNIVARIATE

    def __str__(self) -> str:
        return f"{self.family}{{{self.variate.value}}}"


GAUSSIAN_MEAN_VARIANCE = PayloadType("GaussianMeanVariance", Variate.UNIVARIATE)

# Parameter names and default values per family, used when a message is
# built without explicit arguments
FAMILY_DEFAULTS: Dict[str, Tuple[Tuple[str, float], ...]] = {
    "GaussianMeanVariance": (("m", 0.0), ("v", 1.0)),
    "GaussianMeanPrecision": (("m", 0.0), ("w", 1.0)),
    "Gamma": (("a", 1.0), ("b", 1.0)),
    "PointMass": (("m", 0.0),),
}


@dataclass(eq=False)
class Message:
    """
    A message on an interface.

    Attributes:
        payload_type: Family and variate of the payload
        parameters: Parameter name -> numpy array
    """
    payload_type: PayloadType
    parameters: Dict[str, np.ndarray] = field(default_factory=dict)

    @staticmethod
    def build(payload_type: PayloadType, *args: Any, **kwargs: Any) -> "Message":
        """
        Construct a message from constructor arguments.

        Positional arguments fill the family's parameters in order, keyword
        arguments by name; parameters not given fall back to the family
        defaults.

        Args:
            payload_type: Descriptor of the message family
            *args: Positional parameter values
            **kwargs: Named parameter values

        Returns:
            Message with numpy parameters
        """
        defaults = FAMILY_DEFAULTS.get(payload_type.family)
        if defaults is None:
            if args:
                raise ValueError(
                    f"Positional arguments need known parameter names; "
                    f"family {payload_type.family!r} has none"
                )
            if not kwargs:
                raise ValueError(f"No default parameters for family {payload_type.family!r}")
            return Message(payload_type, {k: np.asarray(v, dtype=np.float64) for k, v in kwargs.items()})

        names = [name for name, _ in defaults]
        if len(args) > len(names):
            raise ValueError(
                f"{payload_type.family} takes {len(names)} parameters, got {len(args)}"
            )
        unknown = set(kwargs) - set(names)
        if unknown:
            raise ValueError(f"Unknown parameters for {payload_type.family}: {sorted(unknown)}")

        params: Dict[str, np.ndarray] = {}
        for i, (name, default) in enumerate(defaults):
            if i < len(args):
                value = args[i]
            else:
                value = kwargs.get(name, default)
            params[name] = np.asarray(value, dtype=np.float64)
        return Message(payload_type, params)

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={np.array2string(v)}" for k, v in self.parameters.items())
        return f"Message({self.payload_type}, {params})"
