# -*- coding: utf-8 -*-
"""
Various helpers for building frequency grids.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import math


# Sample rates commonly used by seismic digitizers
DISCRETE_SAMPLE_RATES = (0.01, 0.1, 0.5, 1.0, 2.0, 3.0, 4.0, 5.0, 10.0,
                         20.0, 25.0, 40.0, 50.0, 80.0, 100.0, 120.0, 125.0,
                         200.0, 250.0, 500.0, 1000.0)
SAMPLE_RATE_TOLERANCE = 0.001


def next2(num):
    """
    Smallest power of two strictly greater than ``num`` (at least 2).

    >>> next2(1), next2(513), next2(1024)
    (2, 1024, 2048)
    """
    result = 2
    while result <= num:
        result *= 2
    return result


def get_frequency_sampling(nsamp, samprate):
    """
    Frequency grid used for a seismogram of ``nsamp`` samples.

    :rtype: tuple
    :return: ``(nfft, nfreq, delfreq)``, the zero padded FFT length, the
        number of non-negative frequency bins and the bin spacing in Hz.

    >>> get_frequency_sampling(1000, 40.0)
    (1024, 513, 0.0390625)
    """
    nfft = next2(nsamp)
    nfreq = nfft // 2 + 1
    delfreq = 1.0 / (nfft * (1.0 / samprate))
    return nfft, nfreq, delfreq


def standardize_sample_rate(samprate, tolerance=SAMPLE_RATE_TOLERANCE):
    """
    Snap a sample rate onto :data:`DISCRETE_SAMPLE_RATES`.

    The first table entry within the relative ``tolerance`` is returned,
    otherwise the sample rate itself.

    >>> standardize_sample_rate(99.95)
    100.0
    >>> standardize_sample_rate(33.3)
    33.3
    """
    for rate in DISCRETE_SAMPLE_RATES:
        if math.fabs(samprate - rate) / rate <= tolerance:
            return rate
    return samprate


def remove_regex_escape(text):
    r"""
    Strip regular expression escapes from a station or channel pattern.

    >>> print(remove_regex_escape(r"BH\?"))
    BH?
    """
    return text.replace("\\", "")


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
