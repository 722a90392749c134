# -*- coding: utf-8 -*-
"""
Forward transfer functions together with their calibration and unit
conversion bookkeeping.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import copy
import warnings

import numpy as np
from obspy.core.util.obspy_types import Enum
from scipy.interpolate import interp1d

from seisresp.core.units import (SECOND, ResponseUnits, Unit, UnitsStatus,
                                 get_unit)
from seisresp.core.util.resp_types import (CalibrationWarning,
                                           ResponseUnitsError)
from seisresp.signal.freqband import estimate_freq_limits


SpectrumDataType = Enum(["original", "converted", "working"])

NormalizationStatus = Enum(["normalized", "unnormalized", "unknown"])

AppliedScaling = Enum(["none", "scaled_by_wfdisc_calib",
                       "scaled_by_nominal_calib"])

ConversionType = Enum(["none", "scale_only", "integrate_once",
                       "integrate_twice", "differentiate_once",
                       "differentiate_twice"])


def compute_normalization_status(amplitude):
    """
    >>> print(compute_normalization_status(1.005))
    normalized
    """
    if amplitude is None:
        return NormalizationStatus.UNKNOWN
    if 0.99 <= amplitude <= 1.01:
        return NormalizationStatus.NORMALIZED
    return NormalizationStatus.UNNORMALIZED


class TransferData(object):
    """
    Forward transfer function of an instrument on an evenly spaced
    frequency grid starting at 0 Hz.

    The spectrum as produced from the response file is kept untouched in
    :attr:`original_data` (a read-only array). Calibration normalization
    produces :attr:`working_data`, a later unit conversion replaces the
    working data and also stores it in :attr:`converted_data`.

    :type data: array_like of complex
    :param data: Complex response, one value per frequency bin.
    :type delfreq: float
    :param delfreq: Frequency spacing in Hz.
    :type units: :class:`~seisresp.core.units.ResponseUnits`
    :param units: Input units of the response.
    :type metadata: :class:`~seisresp.core.metadata.ResponseMetadata`
    :param metadata: Metadata the response was computed from.
    """
    def __init__(self, data, delfreq, units, metadata):
        original = np.array(data, dtype=np.complex128)
        original.flags.writeable = False
        self.original_data = original
        self.working_data = original.copy()
        self.converted_data = None
        self.delfreq = delfreq
        self.metadata = metadata
        self.original_units = units
        self.forced_units = None
        self.converted_units = None
        self.working_units = units
        self.amplitude_at_wfdisc_calper = None
        self.amplitude_at_nominal_calper = None
        self.normalization_status = NormalizationStatus.UNKNOWN
        self.applied_scale_factor = 1.0
        self.applied_scaling = AppliedScaling.NONE
        self.applied_calib = None
        self.unit_conversion_scale_factor = 1.0
        self.conversion_type = ConversionType.NONE
        self._maybe_scale_response()

    def __len__(self):
        return len(self.original_data)

    def __str__(self):
        return ("TransferData: %d bins, delfreq=%g Hz, units=%s, "
                "scaling=%s, conversion=%s") % (
            len(self), self.delfreq, self.working_units,
            self.applied_scaling, self.conversion_type)

    def __eq__(self, other):
        if not isinstance(other, TransferData):
            return False
        for key, value in self.__dict__.items():
            other_value = other.__dict__[key]
            if isinstance(value, np.ndarray) or \
                    isinstance(other_value, np.ndarray):
                if value is None or other_value is None or \
                        not np.array_equal(value, other_value):
                    return False
            elif value != other_value:
                return False
        return True

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None

    def _maybe_scale_response(self):
        # Calib is given in nm/count at calper. The response has to be unity
        # at calper, so it is divided by its amplitude there and by calib.
        max_freq = (len(self.original_data) - 1) * self.delfreq
        md = self.metadata
        if md is None:
            return
        if md.has_wfdisc_calibration():
            cal_freq = 1.0 / md.wfdisc_calper
            if cal_freq < max_freq:
                self.applied_calib = md.wfdisc_calib
                amp = self.get_amplitude_at(cal_freq)
                self.amplitude_at_wfdisc_calper = amp
                self.normalization_status = compute_normalization_status(amp)
                if amp > 0:
                    self._apply_scale(md.wfdisc_calib * amp,
                                      AppliedScaling.SCALED_BY_WFDISC_CALIB)
            else:
                msg = ("Waveform calibration period %g s lies outside of the "
                       "frequency range of the response (max. %g Hz), "
                       "calibration not applied.") % (md.wfdisc_calper,
                                                      max_freq)
                warnings.warn(msg, CalibrationWarning)
        elif md.has_nominal_calibration():
            cal_freq = 1.0 / md.nominal_calper
            if cal_freq < max_freq:
                self.applied_calib = md.nominal_calib
                amp = self.get_amplitude_at(cal_freq)
                self.amplitude_at_nominal_calper = amp
                if amp > 0:
                    self._apply_scale(md.nominal_calib * amp,
                                      AppliedScaling.SCALED_BY_NOMINAL_CALIB)
            else:
                msg = ("Nominal calibration period %g s lies outside of the "
                       "frequency range of the response (max. %g Hz), "
                       "calibration not applied.") % (md.nominal_calper,
                                                      max_freq)
                warnings.warn(msg, CalibrationWarning)

    def _apply_scale(self, scale, scaling):
        self.applied_scale_factor = scale
        self.working_data = self.original_data / scale
        self.applied_scaling = scaling

    def get_amplitude_at(self, freq):
        """
        Working amplitude at ``freq`` by linear interpolation.

        :raises ValueError: If ``freq`` lies outside the frequency grid.
        """
        interp = interp1d(self.get_frequencies(), self.get_amplitudes())
        return float(interp(freq))

    def get_data(self, data_type=SpectrumDataType.WORKING):
        data_type = SpectrumDataType[data_type]
        if data_type == SpectrumDataType.ORIGINAL:
            return self.original_data
        elif data_type == SpectrumDataType.CONVERTED:
            return self.converted_data
        return self.working_data

    def get_units(self, data_type=SpectrumDataType.WORKING):
        data_type = SpectrumDataType[data_type]
        if data_type == SpectrumDataType.ORIGINAL:
            return self.original_units
        elif data_type == SpectrumDataType.CONVERTED:
            return self.converted_units
        return self.working_units

    def get_frequencies(self, max_index=None):
        n = len(self.working_data)
        if max_index is not None:
            n = min(max_index, n)
        return np.arange(n) * self.delfreq

    def get_amplitudes(self, max_index=None,
                       data_type=SpectrumDataType.WORKING):
        data = self.get_data(data_type)
        if data is None:
            msg = "Attempted to get amplitude array for uncomputed data type!"
            raise ValueError(msg)
        if max_index is not None:
            data = data[:max_index]
        return np.abs(data)

    def get_phases(self, data_type=SpectrumDataType.WORKING):
        return np.angle(self.get_data(data_type))

    def get_spectrum(self, data_type=SpectrumDataType.WORKING):
        """
        Frequencies and complex values of the requested spectrum.
        """
        data = self.get_data(data_type)
        return self.get_frequencies(len(data)), data

    def set_forced_units(self, units):
        """
        Override the input units. The data values are not changed, only
        their interpretation.
        """
        if not isinstance(units, ResponseUnits):
            units = ResponseUnits(get_unit(units), UnitsStatus.FORCED_VALUE)
        self.forced_units = units
        self.working_units = units

    def convert_units(self, requested):
        """
        Convert the working spectrum to new input units.

        The requested units are compared with the current input units. If
        they describe the same quantity the spectrum is only scaled. If they
        differ by one or two time derivatives the spectrum is additionally
        divided (integration) or multiplied (differentiation) by ``jw`` or
        ``(jw)**2``. The DC bin is left untouched in those cases.

        :type requested: :class:`~seisresp.core.units.Unit` or str
        :raises ResponseUnitsError: If the requested units can not be
            reached from the current units.
        """
        requested = get_unit(requested)
        current = self.working_units.units
        if requested == current:
            return
        data = self.working_data.copy()
        omega = 2.0 * np.pi * np.arange(len(data)) * self.delfreq
        jomega = 1j * omega[1:]
        if requested.is_compatible(current):
            scale = Unit.scale_factor(current, requested)
            data *= 1.0 / scale
            conversion = ConversionType.SCALE_ONLY
        elif requested.is_compatible(current / SECOND):
            scale = Unit.scale_factor(current / SECOND, requested)
            data[1:] = data[1:] / jomega / scale
            conversion = ConversionType.INTEGRATE_ONCE
        elif requested.is_compatible(current / SECOND / SECOND):
            scale = Unit.scale_factor(current / SECOND / SECOND, requested)
            data[1:] = data[1:] / (jomega * jomega) / scale
            conversion = ConversionType.INTEGRATE_TWICE
        elif requested.is_compatible(current * SECOND):
            scale = Unit.scale_factor(current * SECOND, requested)
            data[1:] = data[1:] * jomega / scale
            conversion = ConversionType.DIFFERENTIATE_ONCE
        elif requested.is_compatible(current * SECOND * SECOND):
            scale = Unit.scale_factor(current * SECOND * SECOND, requested)
            data[1:] = data[1:] * (jomega * jomega) / scale
            conversion = ConversionType.DIFFERENTIATE_TWICE
        else:
            msg = ("Requested units (%s) are not compatible with response "
                   "units (%s)!") % (requested, current)
            raise ResponseUnitsError(msg, requested=requested,
                                     current=current)
        self.unit_conversion_scale_factor = scale
        self.conversion_type = conversion
        self.converted_units = ResponseUnits(requested,
                                             UnitsStatus.QUANTITY_AND_UNITS)
        self.working_units = self.converted_units
        self.working_data = data
        self.converted_data = data.copy()

    def compute_freq_limits(self, data_samprate):
        """
        Estimate usable frequency limits of the working spectrum.

        :type data_samprate: float
        :param data_samprate: Sample rate of the data to be corrected.
        :rtype: :class:`~seisresp.core.freqlimits.FreqLimits`
        """
        instrument_samprate = getattr(self.metadata, 'instrument_sample_rate',
                                      None)
        return estimate_freq_limits(
            self.get_frequencies(), self.get_amplitudes(), self.delfreq,
            data_samprate, instrument_samprate)

    def write_to_text_file(self, filename,
                           data_type=SpectrumDataType.WORKING):
        """
        Write ``frequency  amplitude`` lines of the chosen spectrum.
        """
        amplitudes = self.get_amplitudes(data_type=data_type)
        write_amplitude_file(filename, self.get_frequencies(len(amplitudes)),
                             amplitudes)

    def copy(self):
        """
        Returns a deepcopy of the transfer function.
        """
        new = copy.deepcopy(self)
        new.original_data.flags.writeable = False
        return new

    def plot(self, data_type=SpectrumDataType.WORKING, axes=None,
             outfile=None, show=True, label=None):
        """
        Show a bode plot (amplitude and phase) of the transfer function.

        :type axes: list of 2 :class:`matplotlib.axes.Axes`
        :param axes: List/tuple of two axes instances to plot the amplitude
            and phase spectrum into. If not specified, a new figure is
            opened.
        :type outfile: str
        :param outfile: Output file path to directly save the resulting image
            (e.g. ``"/tmp/image.png"``). Overrides the ``show`` option, image
            will not be displayed interactively.
        """
        import matplotlib.pyplot as plt

        freqs, data = self.get_spectrum(data_type)
        # skip DC on the logarithmic frequency axis
        freqs = freqs[1:]
        data = data[1:]
        if axes is not None:
            ax1, ax2 = axes
            fig = ax1.figure
        else:
            fig = plt.figure()
            ax1 = fig.add_subplot(211)
            ax2 = fig.add_subplot(212, sharex=ax1)

        label_kwarg = {}
        if label is not None:
            label_kwarg['label'] = label
        lw = 1.5
        lines = ax1.loglog(freqs, np.abs(data), lw=lw, **label_kwarg)
        color = lines[0].get_color()
        ax2.semilogx(freqs, np.unwrap(np.angle(data)), color=color, lw=lw)

        if not axes:
            ax1.set_ylabel("Amplitude")
            ax2.set_ylabel("Phase [rad]")
            ax2.set_xlabel("Frequency [Hz]")
            for ax in (ax1, ax2):
                ax.grid(True)
            ax1.set_title("Input units: %s" % self.get_units(data_type))

        if outfile:
            fig.savefig(outfile)
        else:
            if show:
                plt.show()
        return fig


def write_amplitude_file(filename, frequencies, amplitudes):
    """
    Write ``frequency  amplitude`` line pairs to a text file.
    """
    with open(filename, 'wt') as fh:
        for freq, amp in zip(frequencies, amplitudes):
            fh.write("%s  %s\n" % (repr(float(freq)), repr(float(amp))))


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
