# -*- coding: utf-8 -*-
"""
Inverse (deconvolution) transfer functions and instrument correction.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import copy

import numpy as np
from obspy.signal.invsim import cosine_taper

from seisresp.core.units import ResponseUnits, UNSPECIFIED_UNITS
from seisresp.core.util.resp_types import ResponseConfigurationError
from seisresp.signal.transfer import write_amplitude_file
from seisresp.signal.util import get_frequency_sampling


# Spectral values with |F|**2 at or below the smallest normal single
# precision float are not inverted
STABILITY_FLOOR = np.finfo(np.float32).tiny


def taper(freqs, fqh, fql):
    """
    One sided raised cosine taper.

    If ``fql > fqh`` the taper is a low pass: one below ``fqh``, zero above
    ``fql``. If ``fqh > fql`` it is a high pass: zero below ``fql``, one
    above ``fqh``. In between it follows half a cosine period. Equal corner
    frequencies give a taper of zero everywhere.

    :type freqs: float or :class:`numpy.ndarray`
    :param freqs: Frequencies to evaluate.
    :type fqh: float
    :param fqh: Transition between unity and the taper.
    :type fql: float
    :param fql: Transition between zero and the taper.

    >>> taper(np.array([0.5, 1.5, 3.0]), 1.0, 2.0)
    array([ 1. ,  0.5,  0. ])
    """
    freqs = np.asarray(freqs, dtype=np.float64)
    result = np.zeros_like(freqs)
    if fql > fqh:
        result[freqs < fqh] = 1.0
        ramp = (freqs >= fqh) & (freqs <= fql)
        result[ramp] = 0.5 * (1.0 + np.cos(np.pi * (freqs[ramp] - fqh) /
                                           (fql - fqh)))
    elif fqh > fql:
        result[freqs > fqh] = 1.0
        ramp = (freqs >= fql) & (freqs <= fqh)
        result[ramp] = 0.5 * (1.0 - np.cos(np.pi * (freqs[ramp] - fql) /
                                           (fqh - fql)))
    return result


def cosine_limits_taper(freqs, limits):
    """
    Two sided taper defined by a
    :class:`~seisresp.core.freqlimits.FreqLimits` object. ``None`` gives a
    taper of one everywhere.
    """
    freqs = np.asarray(freqs, dtype=np.float64)
    if limits is None:
        return np.ones_like(freqs)
    return taper(freqs, limits.lowpass, limits.lowcut) * \
        taper(freqs, limits.highpass, limits.highcut)


class InverseTransferFunction(object):
    """
    Inverse transfer function on the non-negative frequencies of a zero
    padded seismogram.

    :type values: :class:`numpy.ndarray` complex128
    :param values: Inverse response, one value per frequency bin.
    :type frequencies: :class:`numpy.ndarray`
    :param frequencies: Frequencies of the bins in Hz.
    :type response_units: :class:`~seisresp.core.units.ResponseUnits`
    :param response_units: Units of the corrected data.
    :type original_input_units: :class:`~seisresp.core.units.Unit`
    :param original_input_units: Input units the forward response had when
        the inverse was built, after any forcing and conversion.
    :type input_transfer_data: :class:`~seisresp.signal.transfer.TransferData`
    :param input_transfer_data: Forward response this was derived from.
    """
    def __init__(self, values, frequencies, response_units,
                 original_input_units=None, input_transfer_data=None):
        self.values = np.asarray(values, dtype=np.complex128)
        self.frequencies = np.asarray(frequencies, dtype=np.float64)
        self.response_units = response_units
        self.original_input_units = original_input_units
        self.input_transfer_data = input_transfer_data

    def __len__(self):
        return len(self.values)

    def __str__(self):
        return "InverseTransferFunction: %d bins, units=%s" % (
            len(self), self.response_units)

    def get_values(self):
        return self.values

    def get_xre(self):
        return self.values.real

    def get_xim(self):
        return self.values.imag

    def get_amplitudes(self):
        return np.abs(self.values)

    def write_to_text_file(self, filename):
        write_amplitude_file(filename, self.frequencies,
                             self.get_amplitudes())

    def copy(self):
        return copy.deepcopy(self)


def build_inverse_transfer_function(nsamp, samprate, metadata, limits,
                                    from_transfer_data,
                                    to_transfer_data=None,
                                    original_input_units=None):
    """
    Build the inverse of a forward response for a seismogram of ``nsamp``
    samples.

    Each bin is ``taper(f) * to(f) / from(f)``. Bins where ``|from(f)|**2``
    is at or below :data:`STABILITY_FLOOR` (or not finite) are set to zero.
    A missing ``from`` or ``to`` spectrum counts as one.

    :type limits: :class:`~seisresp.core.freqlimits.FreqLimits` or None
    :param limits: Taper limits. ``None`` disables the taper.
    :type from_transfer_data: :class:`~seisresp.signal.transfer.TransferData`
    :param from_transfer_data: Response to remove.
    :type to_transfer_data: :class:`~seisresp.signal.transfer.TransferData`
    :param to_transfer_data: Optional response to apply instead.
    :rtype: :class:`InverseTransferFunction`
    """
    _nfft, nfreq, delfreq = get_frequency_sampling(nsamp, samprate)
    frequencies = np.arange(nfreq) * delfreq

    from_data = (from_transfer_data.working_data
                 if from_transfer_data is not None else None)
    to_data = (to_transfer_data.working_data
               if to_transfer_data is not None else None)
    if from_data is not None and to_data is not None and \
            len(from_data) != len(to_data):
        msg = ("From Transfer function and To Transfer function are not the "
               "same length!")
        raise ResponseConfigurationError(msg)
    present = from_data if from_data is not None else to_data
    if present is not None and len(present) != nfreq:
        msg = ("Transfer function lengths do not match length of zero-padded "
               "seismogram!")
        raise ResponseConfigurationError(msg)

    inverse = np.ones(nfreq, dtype=np.complex128)
    if from_data is not None:
        with np.errstate(invalid='ignore', over='ignore'):
            denom = np.abs(from_data * np.conj(from_data))
            null = ~(denom > STABILITY_FLOOR)
        inverse[null] = 0.0
        inverse[~null] = 1.0 / from_data[~null]
    inverse *= cosine_limits_taper(frequencies, limits)
    if to_data is not None:
        inverse *= to_data

    if from_transfer_data is not None and to_transfer_data is None:
        response_units = from_transfer_data.working_units
    elif from_transfer_data is None and to_transfer_data is None:
        response_units = ResponseUnits()
    else:
        response_units = UNSPECIFIED_UNITS
    return InverseTransferFunction(inverse, frequencies, response_units,
                                   original_input_units, from_transfer_data)


def convolve_with_transfer_function(nfft, nfreq, spectrum, transfer):
    """
    Multiply a full length complex spectrum by a transfer function given on
    the non-negative frequencies only. The negative frequencies receive the
    complex conjugate.

    :type spectrum: :class:`numpy.ndarray` complex128
    :param spectrum: Spectrum of length ``nfft``.
    :type transfer: :class:`numpy.ndarray` complex128
    :param transfer: Transfer function of length ``nfreq``.
    :rtype: :class:`numpy.ndarray` complex128
    """
    if len(spectrum) < nfft or len(transfer) < nfreq:
        msg = "Spectrum (%d) or transfer function (%d) too short" % (
            len(spectrum), len(transfer))
        raise ResponseConfigurationError(msg)
    result = np.zeros(nfft, dtype=np.complex128)
    result[:nfreq] = spectrum[:nfreq] * transfer[:nfreq]
    idx = np.arange(1, nfreq - 1)
    result[nfft - idx] = np.conj(result[idx])
    return result


def remove_response(data, samprate, inverse, zero_mean=True, taper=True,
                    taper_fraction=0.05):
    """
    Correct a seismogram with an inverse transfer function.

    :type data: :class:`numpy.ndarray`
    :param data: Seismogram.
    :type samprate: float
    :param samprate: Sample rate of the seismogram.
    :type inverse: :class:`InverseTransferFunction`
    :param inverse: Inverse built for ``len(data)`` samples at ``samprate``.
    :type zero_mean: bool
    :param zero_mean: If true the mean of the data is subtracted
    :type taper: bool
    :param taper: If true a cosine taper is applied.
    :type taper_fraction: float
    :param taper_fraction: Taper fraction of cosine taper to use
    :rtype: :class:`numpy.ndarray`
    """
    ndat = len(data)
    nfft, nfreq, delfreq = get_frequency_sampling(ndat, samprate)
    if len(inverse) != nfreq or \
            not np.isclose(inverse.frequencies[1] - inverse.frequencies[0],
                           delfreq):
        msg = ("Inverse transfer function (%d bins) does not fit %d samples "
               "at %g Hz") % (len(inverse), ndat, samprate)
        raise ResponseConfigurationError(msg)
    data = np.asarray(data).astype(np.float64)
    if zero_mean:
        data -= data.mean()
    if taper:
        data *= cosine_taper(ndat, taper_fraction)
    spec = np.fft.rfft(data, n=nfft)
    spec *= inverse.get_values()
    spec[-1] = abs(spec[-1]) + 0.0j
    return np.fft.irfft(spec, n=nfft)[0:ndat]


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
