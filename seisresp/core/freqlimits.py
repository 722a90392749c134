# -*- coding: utf-8 -*-
"""
Frequency limits of the cosine taper applied during deconvolution.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import math

from obspy.core.util.base import ComparingObject

from seisresp.core.tuning import TuningParameters
from seisresp.core.util.resp_types import ResponseConfigurationError


# Smallest low pass corner of the Nyquist based default limits
MIN_NYQUIST_LOWPASS = 0.003


class FreqLimits(ComparingObject):
    """
    The four corner frequencies of a two sided cosine taper.

    Below ``lowcut`` and above ``highcut`` the taper is zero, between
    ``lowpass`` and ``highpass`` it is one.

    >>> limits = FreqLimits(0.01, 0.02, 8.0, 9.0)
    >>> print(limits)
    Lowcut = 0.01, Lowpass = 0.02, Highpass = 8.0, Highcut = 9.0
    >>> limits.contains_band(0.05, 5.0)
    True
    """
    def __init__(self, lowcut, lowpass, highpass, highcut):
        self.lowcut = float(lowcut)
        self.lowpass = float(lowpass)
        self.highpass = float(highpass)
        self.highcut = float(highcut)
        if self.lowcut > self.lowpass or self.highpass > self.highcut:
            msg = "Frequency limits are not ordered: %s" % self
            raise ResponseConfigurationError(msg)

    def __str__(self):
        return "Lowcut = %r, Lowpass = %r, Highpass = %r, Highcut = %r" % (
            self.lowcut, self.lowpass, self.highpass, self.highcut)

    def __repr__(self):
        return "FreqLimits(%r, %r, %r, %r)" % tuple(self)

    def __hash__(self):
        return hash(tuple(self))

    def __iter__(self):
        return iter((self.lowcut, self.lowpass, self.highpass, self.highcut))

    def contains_band(self, low, high):
        return low >= self.lowpass and high <= self.highpass

    @classmethod
    def from_nyquist(cls, nyquist, window_length, tuning=None):
        """
        Default limits for a data window of the given length.

        The pass band extends from ``tfactor / window_length`` (but at least
        3 mHz) to ``highpass_frac`` times the Nyquist frequency.

        :type nyquist: float
        :param nyquist: Nyquist frequency of the data.
        :type window_length: float
        :param window_length: Length of the data window in seconds.
        :type tuning: :class:`~seisresp.core.tuning.TuningParameters`
        :param tuning: Fractions and factors to use. Defaults are used if not
            given.

        >>> limits = FreqLimits.from_nyquist(10.0, 100.0)
        >>> limits.lowpass, limits.highpass, limits.highcut
        (0.02, 8.5, 9.0)
        """
        return cls._from_window_heuristics(nyquist, window_length, tuning,
                                           MIN_NYQUIST_LOWPASS)

    @classmethod
    def from_window(cls, samprate, window_length, tuning=None):
        """
        Like :meth:`from_nyquist`, but for a sample rate and with the
        smallest low pass corner taken from ``tuning.min_lowpass``.
        """
        tuning = tuning if tuning is not None else TuningParameters()
        return cls._from_window_heuristics(samprate / 2.0, window_length,
                                           tuning, tuning.min_lowpass)

    @classmethod
    def _from_window_heuristics(cls, nyquist, window_length, tuning,
                                min_lowpass):
        tuning = tuning if tuning is not None else TuningParameters()
        if window_length <= 0:
            msg = "Window length must be positive, got %r" % window_length
            raise ResponseConfigurationError(msg)
        highpass = tuning.highpass_frac * nyquist
        highcut = tuning.highcut_frac * nyquist
        lowpass = max(tuning.tfactor / window_length, min_lowpass)
        lowcut = tuning.lowcut_frac * lowpass
        return cls(lowcut, lowpass, highpass, highcut)

    @classmethod
    def from_transfer_function(cls, frequencies, amplitudes, nyquist=None,
                               tuning=None):
        """
        Place the limits where the amplitude spectrum falls to 1% (pass) and
        0.1% (stop) of its peak on either side of the peak.

        ``nyquist`` defaults to the last frequency. The high pass
        and high cut frequencies never exceed 95% and 99% of it.
        """
        tuning = tuning if tuning is not None else TuningParameters()
        if nyquist is None:
            nyquist = frequencies[-1]
        index = 0
        peak = amplitudes[0]
        for j, value in enumerate(amplitudes):
            if value > peak:
                peak = value
                index = j
        stop_value = peak / 1000.0
        pass_value = stop_value * 10.0

        low_stop = low_pass = -1
        for j in range(index, 0, -1):
            value = amplitudes[j]
            if value <= pass_value and low_pass < 0:
                low_pass = j
            if value <= stop_value and low_stop < 0:
                low_stop = j
        high_stop = high_pass = -1
        for j in range(index, len(amplitudes)):
            value = amplitudes[j]
            if value <= pass_value and high_pass < 0:
                high_pass = j
            if value <= stop_value and high_stop < 0:
                high_stop = j

        lowpass = frequencies[low_pass] if low_pass >= 0 else 0.0001
        lowcut = (frequencies[low_stop] if low_stop >= 0
                  else tuning.lowcut_frac * lowpass)
        highpass = (frequencies[high_pass] if high_pass > 0
                    else nyquist * 0.95)
        highcut = (frequencies[high_stop] if high_stop > 0
                   else nyquist * 0.99)
        highpass = min(highpass, nyquist * 0.95)
        highcut = min(highcut, nyquist * 0.99)
        return cls(lowcut, lowpass, highpass, highcut)


def create_multiband_freq_limits(broadband, nbands):
    """
    Split a broadband into ``nbands`` narrow bands evenly spaced in log10
    frequency.

    :type broadband: :class:`FreqLimits`
    :type nbands: int
    :rtype: list of :class:`FreqLimits`
    :return: The broadband followed by the narrow bands (only the broadband
        if ``nbands`` is less than two).
    """
    bands = [broadband]
    if nbands <= 1:
        return bands
    lowcut = math.log10(broadband.lowcut)
    lowpass = math.log10(broadband.lowpass)
    highpass = math.log10(broadband.highpass)
    highcut = math.log10(broadband.highcut)
    dband = (highpass - lowpass) / nbands
    for i in range(nbands):
        lowp = lowpass + i * dband
        lowc = lowpass - (lowpass - lowcut) / nbands
        highp = lowp + dband
        highc = highp + (highcut - highpass) / nbands
        bands.append(FreqLimits(10 ** lowc, 10 ** lowp, 10 ** highp,
                                10 ** highc))
    return bands


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
