# -*- coding: utf-8 -*-
"""
Automatic estimation of the usable frequency band of a response.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import math

import numpy as np

from seisresp.core.freqlimits import FreqLimits
from seisresp.core.util.resp_types import ResponseConfigurationError


def _get_start_index(freqs):
    nonzero = np.flatnonzero(freqs != 0)
    if len(nonzero) == 0:
        msg = "No non-zero frequencies in input data!"
        raise ResponseConfigurationError(msg)
    return int(nonzero[0])


def _get_log_full_range(amps, idx):
    amp_range = amps[idx:].max() - amps[idx:].min()
    if amp_range <= 0:
        msg = "No range in amplitude distribution!"
        raise ResponseConfigurationError(msg)
    return math.log10(amp_range)


def _get_mid_log_freq_index(freqs, idx):
    min_freq = freqs[idx]
    max_freq = freqs[-1]
    test_freq = 10 ** ((math.log10(max_freq) - math.log10(min_freq)) / 2 +
                       math.log10(min_freq))
    for j in range(len(freqs) - 1):
        if freqs[j] <= test_freq <= freqs[j + 1]:
            return j
    return 0


def estimate_freq_limits(frequencies, amplitudes, delfreq, data_samprate,
                         instrument_samprate=None):
    """
    Derive taper limits from the shape of an amplitude spectrum.

    Starting at the frequency halfway (in log10) between the first non-zero
    frequency and the Nyquist frequency, the spectrum is followed towards
    higher frequencies. Once the amplitude has dropped by more than half of
    the full log10 amplitude range the spectrum is "on the down slope" and
    the first bin where the amplitude rises again ends the usable band.
    The limits are placed at 1%, 5%, 95% and 99% of the log10 frequency
    range of that band.

    :type frequencies: :class:`numpy.ndarray`
    :param frequencies: Frequencies of the spectrum, starting at 0 Hz.
    :type amplitudes: :class:`numpy.ndarray`
    :param amplitudes: Amplitude spectrum.
    :type delfreq: float
    :param delfreq: Frequency spacing of the spectrum.
    :type data_samprate: float
    :param data_samprate: Sample rate of the data to be corrected.
    :type instrument_samprate: float, optional
    :param instrument_samprate: Sample rate of the digitizer. Used instead
        of ``data_samprate`` if it is lower.
    :rtype: :class:`~seisresp.core.freqlimits.FreqLimits`
    """
    nyquist = data_samprate / 2.0
    if instrument_samprate is not None and \
            0 < instrument_samprate < data_samprate:
        nyquist = instrument_samprate / 2.0
    nyquist_index = min(int(round(nyquist / delfreq)), len(amplitudes) - 1)

    amps = np.asarray(amplitudes, dtype=np.float64)[:nyquist_index]
    freqs = np.asarray(frequencies, dtype=np.float64)[:nyquist_index]
    if nyquist_index >= len(amps):
        nyquist_index = len(amps) - 1

    idx1 = _get_start_index(freqs)
    log_full_range = _get_log_full_range(amps, idx1)
    test_index = _get_mid_log_freq_index(freqs, idx1)

    current_max = current_min = amps[test_index]
    on_down_slope = False
    for jdx in range(test_index, len(freqs)):
        value = amps[jdx]
        if on_down_slope and value > current_min:
            nyquist_index = jdx - 1
            break
        if value < current_min:
            current_min = value
            if math.log10(current_max - current_min) > log_full_range / 2:
                on_down_slope = True
        if value > current_max:
            current_max = value

    nyq = freqs[nyquist_index]
    min_freq = freqs[idx1]
    log_freq_range = math.log10(nyq) - math.log10(min_freq)
    highcut = 10 ** (math.log10(nyq) - log_freq_range * 0.01)
    highpass = 10 ** (math.log10(nyq) - log_freq_range * 0.05)
    lowpass = 10 ** (math.log10(min_freq) + log_freq_range * 0.05)
    lowcut = 10 ** (math.log10(min_freq) + log_freq_range * 0.01)
    return FreqLimits(lowcut, lowpass, highpass, highcut)
