# -*- coding: utf-8 -*-
"""
SAC pole-zero responses.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import io
import logging
import re

import numpy as np
from obspy import Trace
from obspy.io.sac.sacpz import attach_paz
from obspy.signal.invsim import paz_to_freq_resp

from seisresp.core.units import ResponseUnits, UnitsStatus, get_unit
from seisresp.core.util.base import read_text_lines
from seisresp.core.util.resp_types import (ResponseConfigurationError,
                                           ResponseUnitsError)
from seisresp.signal.transfer import TransferData
from seisresp.signal.util import get_frequency_sampling


logger = logging.getLogger('seisresp.signal.polezero')

_INPUT_UNIT = re.compile(r"^\*\s*INPUT\s+UNITS?\s*:\s*(\S+)", re.IGNORECASE)


class PoleZeroData(object):
    """
    Poles, zeros and gain constant of an analog response.

    :type constant: float
    :type poles: list of complex
    :type zeros: list of complex
    :type input_units: :class:`~seisresp.core.units.Unit`, optional
    """
    def __init__(self, constant, poles, zeros, input_units=None):
        self.constant = float(constant)
        self.poles = np.array(poles, dtype=np.complex128)
        self.zeros = np.array(zeros, dtype=np.complex128)
        self.input_units = input_units

    @property
    def npoles(self):
        return len(self.poles)

    @property
    def nzeros(self):
        return len(self.zeros)

    def __str__(self):
        return "PoleZeroData: constant=%r, %d poles, %d zeros" % (
            self.constant, self.npoles, self.nzeros)


def read_sacpz(filename_or_buffer):
    """
    Read a SAC pole-zero file.

    Poles, zeros and the gain are parsed by
    :func:`obspy.io.sac.sacpz.attach_paz`, so rows omitted from a section
    are zeros at the origin. A ``* INPUT UNIT : <units>`` comment sets the
    input units. Without a ``CONSTANT`` line the gain is one.

    :rtype: :class:`PoleZeroData`

    >>> import io
    >>> pzd = read_sacpz(io.StringIO("ZEROS 3\\nPOLES 1\\n-1.0 0.0\\n"
    ...                              "CONSTANT 2.5\\n"))
    >>> print(pzd)
    PoleZeroData: constant=2.5, 1 poles, 3 zeros
    """
    lines = [line for line in read_text_lines(filename_or_buffer)
             if line.strip()]
    input_units = None
    for line in lines:
        match = _INPUT_UNIT.match(line.strip())
        if match:
            try:
                input_units = get_unit(match.group(1))
            except ResponseUnitsError:
                logger.warning("Ignoring unknown input units '%s'",
                               match.group(1))
    if not any('CONSTANT' in line for line in lines
               if not line.startswith('*')):
        lines.append("CONSTANT 1.0")

    tr = Trace()
    try:
        attach_paz(tr, io.StringIO("\n".join(lines) + "\n"))
    except (IndexError, ValueError) as e:
        msg = "Invalid SAC pole-zero file: %s" % e
        raise ResponseConfigurationError(msg)
    return PoleZeroData(tr.stats.paz.gain, tr.stats.paz.poles,
                        tr.stats.paz.zeros, input_units)


def evaluate_pole_zero(delfreq, pzd, nfreq):
    """
    Evaluate ``constant * prod(jw - z) / prod(jw - p)`` at ``nfreq``
    frequencies spaced by ``delfreq`` starting at 0 Hz.

    :type pzd: :class:`PoleZeroData`
    :rtype: :class:`numpy.ndarray` complex128

    >>> pzd = PoleZeroData(1.0, [-1.0], [])
    >>> print(evaluate_pole_zero(1.0, pzd, 1))
    [ 1.+0.j]
    """
    nfft = 2 * max(nfreq - 1, 1)
    with np.errstate(divide='ignore', invalid='ignore'):
        data = paz_to_freq_resp(pzd.poles, pzd.zeros, pzd.constant,
                                1.0 / (delfreq * nfft), nfft)
    return np.asarray(data[:nfreq], dtype=np.complex128)


class SACPZTransfer(object):
    """
    Producer of transfer functions from SAC pole-zero files.
    """
    def get_from_transfer_function(self, nsamp, samprate, time, metadata):
        """
        Forward transfer function for a seismogram of ``nsamp`` samples.

        :type metadata: :class:`~seisresp.core.metadata.ResponseMetadata`
        :rtype: :class:`~seisresp.signal.transfer.TransferData`
        """
        _nfft, nfreq, delfreq = get_frequency_sampling(nsamp, samprate)
        pzd = read_sacpz(metadata.filename)
        logger.debug("Read %s from %s", pzd, metadata.filename)
        if pzd.input_units is not None:
            units = ResponseUnits(pzd.input_units,
                                  UnitsStatus.QUANTITY_AND_UNITS)
        else:
            units = ResponseUnits()
        data = evaluate_pole_zero(delfreq, pzd, nfreq)
        return TransferData(data, delfreq, units, metadata)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
