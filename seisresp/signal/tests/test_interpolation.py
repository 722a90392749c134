# -*- coding: utf-8 -*-
"""
The seisresp.signal.interpolation test suite.
"""
import numpy as np
import pytest

from seisresp.core.util.resp_types import ResponseConfigurationError
from seisresp.signal.interpolation import interpolate_fap, lagrange


class TestLagrange:
    """
    Test cases for Lagrange polynomials.
    """
    def test_exact_at_knots(self):
        xi = np.array([0.0, 0.5, 2.0, 3.0, 4.5])
        f = np.sin(xi)
        for order in (2, 4):
            for offset in range(len(xi) - order + 1):
                for k in range(order):
                    x = xi[offset + k]
                    assert lagrange(f, xi, offset, order, x) == \
                        pytest.approx(f[offset + k])

    def test_reproduces_polynomials(self):
        xi = np.array([1.0, 2.0, 4.0, 7.0])
        f = 2 * xi ** 3 - xi + 1
        x = np.array([1.5, 3.0, 6.5])
        np.testing.assert_allclose(lagrange(f, xi, 0, 4, x),
                                   2 * x ** 3 - x + 1)

    def test_vectorized_offsets(self):
        xi = np.arange(6, dtype=np.float64)
        f = xi ** 2
        result = lagrange(f, xi, np.array([0, 3]), 2, np.array([0.5, 3.5]))
        # linear interpolation of x**2 between the bracketing knots
        np.testing.assert_allclose(result, [0.5, 12.5])


class TestInterpolateFap:
    """
    Test cases for frequency/amplitude/phase resampling.
    """
    def test_constant_table(self):
        freqs = [0.1, 1.0, 10.0, 100.0]
        amp, phase = interpolate_fap(50, 0.0, 50.0, freqs, [3.0] * 4,
                                     [0.5] * 4)
        np.testing.assert_allclose(amp, 3.0)
        np.testing.assert_allclose(phase, 0.5)

    def test_power_law_is_reproduced(self):
        # a straight line in log/log space
        freqs = np.logspace(-1, 2, 10)
        amps = 5.0 * freqs ** 2
        amp, _phase = interpolate_fap(21, 1.0, 21.0, freqs, amps,
                                      np.zeros(10))
        requested = np.linspace(1.0, 21.0, 21)
        np.testing.assert_allclose(amp, 5.0 * requested ** 2, rtol=1e-8)

    def test_values_at_table_frequencies(self):
        freqs = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        amps = [1.0, 4.0, 2.0, 8.0, 3.0, 1.0]
        phases = [0.0, 0.1, 0.2, 0.3, 0.2, 0.1]
        amp, phase = interpolate_fap(6, 1.0, 6.0, freqs, amps, phases)
        np.testing.assert_allclose(amp, amps, rtol=1e-10)
        np.testing.assert_allclose(phase, phases, atol=1e-10)

    def test_table_is_extended_to_end_frequency(self):
        amp, phase = interpolate_fap(3, 10.0, 30.0, [1.0, 10.0],
                                     [1.0, 2.0], [0.0, 1.0])
        np.testing.assert_allclose(amp, 2.0)
        np.testing.assert_allclose(phase, 1.0)

    def test_invalid_tables(self):
        with pytest.raises(ResponseConfigurationError):
            interpolate_fap(3, 0.0, 1.0, [1.0, 2.0], [1.0], [0.0, 0.0])
        with pytest.raises(ResponseConfigurationError):
            interpolate_fap(3, 0.0, 1.0, [], [], [])
        with pytest.raises(ResponseConfigurationError):
            interpolate_fap(3, 0.0, 1.0, [5.0], [1.0], [0.0])
