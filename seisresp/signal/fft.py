# -*- coding: utf-8 -*-
"""
Radix-2 FFT of real sequences in packed real/imaginary layout.

The routine works in place on a real array. The forward transform of
``2**nexp`` real samples returns the ``2**(nexp-1) + 1`` non-negative
frequency bins interleaved as ``re0, im0, re1, im1, ...``. The inverse
transform takes that packed layout and returns the (unscaled) real
sequence.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import numpy as np


def _bit_reversed_indices(n1):
    """
    Bit reversal permutation of ``range(n1)``; ``n1`` must be a power of
    two.
    """
    nbits = n1.bit_length() - 1
    if 1 << nbits != n1:
        msg = "Number of rows (%d) is not a power of two" % n1
        raise ValueError(msg)
    indices = np.arange(n1)
    reversed_ = np.zeros(n1, dtype=np.int64)
    for _i in range(nbits):
        reversed_ = (reversed_ << 1) | (indices & 1)
        indices = indices >> 1
    return reversed_


def cooley_tukey(xr, xi, n2=1, sign=1):
    """
    In place decimation in time Cooley-Tukey transform of ``n // n2`` rows
    by ``n2`` columns, each column transformed independently.

    :type xr: :class:`numpy.ndarray`
    :param xr: Real parts, at least ``n`` long (``n = len(xi)`` rounded
        down to a power of two times ``n2`` by the caller).
    :type xi: :class:`numpy.ndarray`
    :param xi: Imaginary parts.
    :type n2: int
    :param n2: Number of columns.
    :type sign: int
    :param sign: ``1`` for the forward (``exp(-i...)``) transform, ``-1``
        for the unscaled inverse.
    """
    n = len(xi)
    n1 = n // n2
    rows = _bit_reversed_indices(n1)
    xr[:n] = xr[:n].reshape(n1, n2)[rows].ravel()
    xi[:n] = xi[:n].reshape(n1, n2)[rows].ravel()

    p = 1
    while p < n1:
        ls = p
        p <<= 1
        dk = p * n2
        for j in range(ls):
            wr = np.cos(np.pi * j / ls)
            wi = -sign * np.sin(np.pi * j / ls)
            for i in range(n2):
                m = np.arange(j * n2, n, dk) + i
                ms = m + ls * n2
                tr = wr * xr[ms] - wi * xi[ms]
                ti = wr * xi[ms] + wi * xr[ms]
                xr[ms] = xr[m] - tr
                xi[ms] = xi[m] - ti
                xr[m] += tr
                xi[m] += ti


def odfftr(nexp, xr, flag=1):
    """
    Real FFT of ``2**nexp`` points working in place on ``xr``.

    :type nexp: int
    :param nexp: Base 2 logarithm of the transform length ``npts``.
    :type xr: :class:`numpy.ndarray`
    :param xr: Array of at least ``npts + 2`` floats. For the forward
        transform (``flag > 0``) the first ``npts`` entries hold the real
        signal, on return the first ``npts + 2`` entries hold the packed
        spectrum. For the inverse transform (``flag < 0``) the packed
        spectrum is expanded to its hermitian full length and transformed
        back, leaving ``npts`` times the signal in ``xr[:npts]``.
    :type flag: int
    :param flag: Direction of the transform.

    >>> x = np.zeros(10)
    >>> x[0] = 1.0
    >>> odfftr(3, x)
    >>> bool(np.allclose(x[0::2], 1.0) and np.allclose(x[1::2], 0.0))
    True
    """
    npts = 1 << nexp
    if len(xr) < npts + 2:
        msg = "Work array must hold at least %d values" % (npts + 2)
        raise ValueError(msg)
    xi = np.zeros(npts + 2)
    half = npts // 2
    if flag < 0:
        idx = np.arange(half + 1)
        packed = xr[:npts + 2].copy()
        xi[idx] = packed[2 * idx + 1]
        xr[idx] = packed[2 * idx]
        xi[npts - idx] = -xi[idx]
        xr[npts - idx] = xr[idx]

    work_r = xr[:npts]
    work_i = xi[:npts]
    cooley_tukey(work_r, work_i, n2=1, sign=flag)

    if flag > 0:
        re = xr[:half + 1].copy()
        im = xi[:half + 1].copy()
        xr[0:npts + 2:2] = re
        xr[1:npts + 2:2] = im


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
