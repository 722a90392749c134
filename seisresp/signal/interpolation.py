# -*- coding: utf-8 -*-
"""
Lagrange interpolation of tabulated frequency/amplitude/phase responses.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import numpy as np

from seisresp.core.util.resp_types import ResponseConfigurationError


# Floor applied to frequencies and amplitudes before taking logarithms
LOG_FLOOR = 1e-20


def lagrange(f, xi, offset, n, x):
    """
    Evaluate the Lagrange polynomial through ``n`` consecutive samples.

    :type f: :class:`numpy.ndarray`
    :param f: Ordinates of the table.
    :type xi: :class:`numpy.ndarray`
    :param xi: Abscissae of the table.
    :type offset: int or :class:`numpy.ndarray`
    :param offset: Index of the first sample used. May be an array of the
        same shape as ``x``.
    :type n: int
    :param n: Number of samples used (interpolation order).
    :type x: float or :class:`numpy.ndarray`
    :param x: Point(s) to evaluate.

    >>> xi = np.array([0.0, 1.0, 2.0, 3.0])
    >>> f = xi ** 2
    >>> print(lagrange(f, xi, 0, 3, 1.5))
    2.25
    """
    f = np.asarray(f, dtype=np.float64)
    xi = np.asarray(xi, dtype=np.float64)
    fx = 0.0
    for k in range(n):
        prod = 1.0
        for i in range(n):
            if i != k:
                prod = prod * (x - xi[offset + i]) / \
                    (xi[offset + k] - xi[offset + i])
        fx = fx + prod * f[offset + k]
    return fx


def interpolate_fap(nfr, start_fr, end_fr, freqs, amps, phases):
    """
    Resample a frequency/amplitude/phase table onto ``nfr`` evenly spaced
    frequencies between ``start_fr`` and ``end_fr``.

    Amplitudes are interpolated in log10/log10 space, phases against log10
    frequency. Fourth order interpolation centred on the bracketing interval
    is used away from the table edges and second order within two samples of
    either edge. If ``end_fr`` lies beyond the last tabulated frequency the
    table is extended by a point at ``end_fr`` repeating the last amplitude
    and phase.

    :type freqs: array_like
    :param freqs: Tabulated frequencies in Hz, increasing.
    :type amps: array_like
    :param amps: Tabulated amplitudes.
    :type phases: array_like
    :param phases: Tabulated phases in radians.
    :rtype: tuple of two :class:`numpy.ndarray`
    :return: Interpolated amplitudes and phases.
    """
    freqs = np.array(freqs, dtype=np.float64)
    amps = np.array(amps, dtype=np.float64)
    phases = np.array(phases, dtype=np.float64)
    if not len(freqs) == len(amps) == len(phases):
        msg = "FAP table columns differ in length (%d, %d, %d)" % (
            len(freqs), len(amps), len(phases))
        raise ResponseConfigurationError(msg)
    if len(freqs) == 0:
        msg = "FAP table is empty"
        raise ResponseConfigurationError(msg)

    if end_fr > freqs[-1]:
        freqs = np.append(freqs, end_fr)
        amps = np.append(amps, amps[-1])
        phases = np.append(phases, phases[-1])
    nf = len(freqs)
    if nf < 2:
        msg = "FAP table needs at least two frequencies, got %d" % nf
        raise ResponseConfigurationError(msg)

    logf = np.log10(np.maximum(freqs, LOG_FLOOR))
    loga = np.log10(np.maximum(amps, LOG_FLOOR))

    delta_f = 1.0 if nfr == 1 else (end_fr - start_fr) / (nfr - 1)
    requested = start_fr + np.arange(nfr) * delta_f
    x = np.log10(np.maximum(requested, LOG_FLOOR))

    # first tabulated frequency above the requested one
    offset = np.searchsorted(logf, x, side='right') - 2
    order = np.full(nfr, 4)
    low = offset < 0
    high = offset > nf - 4
    offset[low] = 0
    order[low] = 2
    offset[high & ~low] = nf - 2
    order[high & ~low] = 2

    amp = np.empty(nfr)
    phase = np.empty(nfr)
    for n in (2, 4):
        mask = order == n
        if not mask.any():
            continue
        amp[mask] = 10.0 ** lagrange(loga, logf, offset[mask], n, x[mask])
        phase[mask] = lagrange(phases, logf, offset[mask], n, x[mask])
    return amp, phase


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
