"""
Tests for messages and payload descriptors.
"""

import numpy as np
import pytest

from forney.messages import GAUSSIAN_MEAN_VARIANCE, Message, PayloadType, Variate


class TestPayloadType:
    def test_label(self):
        assert str(GAUSSIAN_MEAN_VARIANCE) == "GaussianMeanVariance{Univariate}"
        assert str(PayloadType("Wishart", Variate.MATRIXVARIATE)) == "Wishart{MatrixVariate}"

    def test_hashable(self):
        assert {GAUSSIAN_MEAN_VARIANCE: 1}[PayloadType("GaussianMeanVariance")] == 1


class TestMessageBuild:
    def test_defaults(self):
        msg = Message.build(GAUSSIAN_MEAN_VARIANCE)
        assert msg.payload_type == GAUSSIAN_MEAN_VARIANCE
        assert np.isclose(msg.parameters["m"], 0.0)
        assert np.isclose(msg.parameters["v"], 1.0)

    def test_positional_and_keyword(self):
        msg = Message.build(GAUSSIAN_MEAN_VARIANCE, 2.0, v=4.0)
        assert np.isclose(msg.parameters["m"], 2.0)
        assert np.isclose(msg.parameters["v"], 4.0)

    def test_too_many_arguments(self):
        with pytest.raises(ValueError):
            Message.build(GAUSSIAN_MEAN_VARIANCE, 1.0, 2.0, 3.0)

    def test_unknown_parameter(self):
        with pytest.raises(ValueError):
            Message.build(GAUSSIAN_MEAN_VARIANCE, w=1.0)

    def test_unknown_family(self):
        family = PayloadType("Custom")
        with pytest.raises(ValueError):
            Message.build(family)
        with pytest.raises(ValueError):
            Message.build(family, 1.0)
        msg = Message.build(family, alpha=[1.0, 2.0])
        assert msg.parameters["alpha"].shape == (2,)

    def test_repr(self):
        assert "GaussianMeanVariance" in repr(Message.build(GAUSSIAN_MEAN_VARIANCE))
