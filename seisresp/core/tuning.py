# -*- coding: utf-8 -*-
"""
Tunable parameters of frequency limit heuristics and sample rate handling.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from obspy.core.util.base import ComparingObject


class TuningParameters(ComparingObject):
    """
    Container for the numerical knobs used when no explicit frequency limits
    are given.

    :type reference_period: float
    :param reference_period: Reference period (s) for amplitude
        measurements.
    :type reference_distance: float
    :param reference_distance: Reference distance (degrees).
    :type taper_percent: float
    :param taper_percent: Time domain taper (percent of the window) applied
        before deconvolution.
    :type tfactor: float
    :param tfactor: The low pass corner is ``tfactor`` divided by the window
        length.
    :type highpass_frac: float
    :param highpass_frac: High pass corner as fraction of the Nyquist
        frequency.
    :type highcut_frac: float
    :param highcut_frac: High cut corner as fraction of the Nyquist
        frequency.
    :type lowcut_frac: float
    :param lowcut_frac: Low cut corner as fraction of the low pass corner.
    :type min_lowpass: float
    :param min_lowpass: Smallest low pass corner in Hz.
    :type sample_rate_tolerance: float
    :param sample_rate_tolerance: Relative tolerance for snapping sample
        rates to standard values.

    >>> tuning = TuningParameters(tfactor=3.0)
    >>> tuning.tfactor, tuning.highpass_frac
    (3.0, 0.85)
    """
    def __init__(self, reference_period=20.0, reference_distance=1.0,
                 taper_percent=5.0, tfactor=2.0, highpass_frac=0.85,
                 highcut_frac=0.9, lowcut_frac=0.8, min_lowpass=0.001,
                 sample_rate_tolerance=0.001):
        self.reference_period = reference_period
        self.reference_distance = reference_distance
        self.taper_percent = taper_percent
        self.tfactor = tfactor
        self.highpass_frac = highpass_frac
        self.highcut_frac = highcut_frac
        self.lowcut_frac = lowcut_frac
        self.min_lowpass = min_lowpass
        self.sample_rate_tolerance = sample_rate_tolerance

    def __hash__(self):
        return hash(tuple(sorted(self.__dict__.items())))

    def __repr__(self):
        return "TuningParameters(%s)" % ", ".join(
            "%s=%r" % (key, value) for key, value in sorted(
                self.__dict__.items()))

    @property
    def taper_fraction(self):
        """
        Total time domain taper as a fraction of the window.
        """
        return self.taper_percent / 100.0


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
