# -*- coding: utf-8 -*-
"""
Evaluation of NDC style cascaded response files.

An NDC response file is a line oriented description of the stages of an
instrument. Lines starting with ``#`` are comments. A line containing
``theoretical`` or ``measured`` introduces a stage whose kind is given by a
key word on the same line:

``paz``
    normalization factor, then a pole block and a zero block. Each block is
    a count line followed by ``real imag real-error imag-error`` rows.
``PAZ2``
    single header line with the normalization factor, pole count and zero
    count at token offsets 3, 6 and 7, followed by ``real imag`` rows.
``fap``
    count line followed by ``freq amp phase [amp-error phase-error]``
    rows, phase in degrees.
``FAP2``
    header line with the row count at token offset 5 followed by ``freq amp
    phase`` rows.
``fir``
    input sample rate, numerator count line and ``value error`` rows,
    denominator count line and rows.
``DIG2``
    header line with the input sample rate at token offset 3, consumed by
    the next ``FIR2`` stage.
``FIR2``
    header line with the coefficient count at token offset 6 followed by
    whitespace separated coefficients.

The response of the file is the product of the stage amplitudes and the sum
of the stage phases.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import logging
import math
import re

import numpy as np

from seisresp.core.units import ResponseUnits, UnitsStatus, get_unit
from seisresp.core.util.base import read_text_lines
from seisresp.core.util.resp_types import (NDCParseError,
                                           ResponseConfigurationError)
from seisresp.signal.fft import odfftr
from seisresp.signal.interpolation import interpolate_fap
from seisresp.signal.transfer import TransferData
from seisresp.signal.util import get_frequency_sampling


logger = logging.getLogger('seisresp.signal.ndc')

TWOPI = 2.0 * math.pi
# number of frequencies at which FIR stages are tabulated
FIR_TABLE_SIZE = 513

_FIRST_INT = re.compile(r"\d+")

# Checked in order against lower cased comment lines, first hit wins
_UNIT_PATTERNS = [
    (("nm/s/s",), "nm/s^2"),
    (("nm/s",), "nm/s"),
    (("nm/count",), "nm"),
    (("m/s^2", "mps^2", "m/s/s"), "m/s^2"),
    (("m/s",), "m/s"),
    (("pascal",), "Pa"),
    (("upa",), "uPa"),
    (("counts/pa", "counts/(pa)", "pa/count"), "Pa"),
    (("inch/second",), "in/s"),
]


def _to_float(token, line):
    try:
        return float(token)
    except ValueError:
        msg = "Invalid number '%s' in line: %s" % (token, line)
        raise NDCParseError(msg)


def _to_int(token, line):
    try:
        return int(token)
    except ValueError:
        msg = "Invalid count '%s' in line: %s" % (token, line)
        raise NDCParseError(msg)


class _StageReader(object):
    """
    Sequential access to the lines of a stage file.
    """
    def __init__(self, lines):
        self.lines = lines
        self.pos = 0

    def has_next(self):
        return self.pos < len(self.lines)

    def next_raw(self):
        line = self.lines[self.pos]
        self.pos += 1
        return line

    def next_line(self, what):
        """
        Next line with content, skipping blank and comment lines.
        """
        while self.has_next():
            line = self.next_raw().strip()
            if line and not line.startswith("#"):
                return line
        msg = "Unexpected end of stage text while reading %s" % what
        raise NDCParseError(msg)

    def next_tokens(self, what, minimum):
        line = self.next_line(what)
        tokens = line.split()
        if len(tokens) < minimum:
            msg = "Expected at least %d values for %s in line: %s" % (
                minimum, what, line)
            raise NDCParseError(msg)
        return tokens, line

    def next_count(self, what):
        line = self.next_line(what)
        match = _FIRST_INT.search(line)
        if match is None:
            msg = "Expected %s count in line: %s" % (what, line)
            raise NDCParseError(msg)
        return int(match.group())

    def next_complex_rows(self, count, what):
        values = []
        for _i in range(count):
            tokens, line = self.next_tokens(what, 2)
            values.append(complex(_to_float(tokens[0], line),
                                  _to_float(tokens[1], line)))
        return values


class PolesZerosStage(object):
    """
    Analog stage given by its poles, zeros and normalization factor.
    """
    def __init__(self, norm_factor, poles, zeros):
        self.norm_factor = norm_factor
        self.poles = list(poles)
        self.zeros = list(zeros)

    def response(self, nfr, start_fr, end_fr):
        delta_f = 1.0 if nfr == 1 else (end_fr - start_fr) / (nfr - 1)
        omega = TWOPI * (start_fr + np.arange(nfr) * delta_f)
        amp = np.ones(nfr)
        phase = np.zeros(nfr)
        for zero in self.zeros:
            re_ = np.full(nfr, -zero.real)
            im_ = omega - zero.imag
            amp *= np.hypot(re_, im_)
            phase += np.arctan2(im_, re_)
        for pole in self.poles:
            re_ = np.full(nfr, -pole.real)
            im_ = omega - pole.imag
            distance = np.hypot(re_, im_)
            nonzero = distance != 0
            amp[nonzero] /= distance[nonzero]
            phase -= np.arctan2(im_, re_)
        amp *= self.norm_factor
        return amp, phase


class FapStage(object):
    """
    Stage given as a table of frequency, amplitude and phase (radians).
    """
    def __init__(self, freqs, amps, phases):
        self.freqs = np.asarray(freqs, dtype=np.float64)
        self.amps = np.asarray(amps, dtype=np.float64)
        self.phases = np.asarray(phases, dtype=np.float64)

    def response(self, nfr, start_fr, end_fr):
        return interpolate_fap(nfr, start_fr, end_fr, self.freqs, self.amps,
                               self.phases)


class FirStage(object):
    """
    Digital stage given by its input sample rate and numerator (and
    optionally denominator) coefficients.
    """
    def __init__(self, isr, numerator, denominator=()):
        self.isr = isr
        self.numerator = np.asarray(numerator, dtype=np.float64)
        self.denominator = np.asarray(denominator, dtype=np.float64)
        logger.debug("Created FIR with ISR = %f and %d coefficients. Sum of "
                     "coefficients is %f", isr, len(self.numerator),
                     self.numerator.sum())

    def _transform(self, coefficients, nexp):
        n = FIR_TABLE_SIZE
        if len(coefficients) > 2 * (n - 1):
            msg = "FIR stage has %d coefficients, at most %d supported" % (
                len(coefficients), 2 * (n - 1))
            raise ResponseConfigurationError(msg)
        xr = np.zeros(2 * n)
        xr[:len(coefficients)] = coefficients
        odfftr(nexp, xr, 1)
        return xr[0::2], xr[1::2]

    def table(self):
        """
        Amplitude and (unwrapped) phase of the filter at
        :data:`FIR_TABLE_SIZE` frequencies between zero and half the input
        sample rate.

        :rtype: tuple of three :class:`numpy.ndarray`
        :return: Frequencies, amplitudes and phases.
        """
        n = FIR_TABLE_SIZE
        nexp = 1
        while 2 ** nexp < 2 * n:
            nexp += 1
        nexp -= 1

        re_, im_ = self._transform(self.numerator, nexp)
        amp = np.hypot(re_, im_)
        # phase of sum(h[k] * exp(-i*w*k)), a delay of d samples gives
        # -2*pi*f*d/isr
        phase = np.arctan2(im_, re_)
        if len(self.denominator) > 0:
            re_, im_ = self._transform(self.denominator, nexp)
            amp /= np.hypot(1.0 - re_, -im_)
            phase -= np.arctan2(-im_, 1.0 - re_)
        df = self.isr / ((n - 1) * 2)
        freqs = np.arange(n) * df
        return freqs, amp, unwrap_phase(phase)

    def response(self, nfr, start_fr, end_fr):
        freqs, amps, phases = self.table()
        return interpolate_fap(nfr, start_fr, end_fr, freqs, amps, phases)


def _sign(value):
    return -1 if value < 0 else 1


def unwrap_phase(phase):
    """
    Remove 2*pi jumps from a phase curve.

    Starting from the bin whose phase derivative is closest to zero the
    curve is walked towards higher and then towards lower indices. Every
    time the derivative changes sign, 2*pi (with the sign of the derivative)
    is added to all phases beyond that point.

    :type phase: :class:`numpy.ndarray`
    :rtype: :class:`numpy.ndarray`
    """
    phase = np.array(phase, dtype=np.float64)
    n = len(phase)
    deriv = np.zeros(n)
    # integer threshold, initialized to int(2 * pi) == 6
    threshold = int(TWOPI)
    minindex = 0
    for i in range(n - 1):
        deriv[i] = phase[i + 1] - phase[i]
        if abs(deriv[i]) < threshold:
            threshold = int(abs(deriv[i]))
            minindex = i

    for i in range(minindex, n - 2):
        if _sign(deriv[i]) != _sign(deriv[i + 1]):
            phase[i + 2:] += _sign(deriv[i]) * TWOPI
            deriv[i + 1] = phase[i + 2] - phase[i + 1]

    for i in range(minindex, 0, -1):
        if _sign(deriv[i]) != _sign(deriv[i - 1]):
            phase[:i] += _sign(deriv[i]) * TWOPI
            deriv[i - 1] = phase[i] - phase[i - 1]
    return phase


def _read_paz(reader):
    tokens, line = reader.next_tokens("normalization factor", 1)
    norm_factor = _to_float(tokens[0], line)
    npoles = reader.next_count("pole")
    poles = reader.next_complex_rows(npoles, "pole")
    nzeros = reader.next_count("zero")
    zeros = reader.next_complex_rows(nzeros, "zero")
    return PolesZerosStage(norm_factor, poles, zeros)


def _read_paz2(header, reader):
    tokens = header.split()
    if len(tokens) < 8:
        msg = "Invalid PAZ2 line: %s" % header
        raise NDCParseError(msg)
    norm_factor = _to_float(tokens[3], header)
    npoles = _to_int(tokens[6], header)
    nzeros = _to_int(tokens[7], header)
    poles = reader.next_complex_rows(npoles, "pole")
    zeros = reader.next_complex_rows(nzeros, "zero")
    return PolesZerosStage(norm_factor, poles, zeros)


def _read_fap(reader):
    count = reader.next_count("fap")
    rows = []
    for _i in range(count):
        tokens, line = reader.next_tokens("fap", 3)
        rows.append([_to_float(t, line) for t in tokens[:3]])
    return _fap_from_rows(rows)


def _read_fap2(header, reader):
    tokens = header.split()
    if len(tokens) < 6:
        msg = "Invalid FAP2 line: %s" % header
        raise NDCParseError(msg)
    count = _to_int(tokens[5], header)
    rows = []
    while len(rows) < count:
        line = reader.next_line("FAP2")
        tokens = line.split()
        if len(tokens) == 3:
            rows.append([_to_float(t, line) for t in tokens])
    return _fap_from_rows(rows)


def _fap_from_rows(rows):
    rows = np.array(rows, dtype=np.float64).reshape(-1, 3)
    return FapStage(rows[:, 0], rows[:, 1], np.radians(rows[:, 2]))


def _read_fir(reader):
    tokens, line = reader.next_tokens("input sample rate", 1)
    isr = _to_float(tokens[0], line)
    nnc = reader.next_count("numerator")
    numerator = []
    for _i in range(nnc):
        tokens, line = reader.next_tokens("numerator", 1)
        numerator.append(_to_float(tokens[0], line))
    tokens, line = reader.next_tokens("denominator count", 1)
    ndc = _to_int(tokens[0], line)
    denominator = []
    for _i in range(ndc):
        tokens, line = reader.next_tokens("denominator", 1)
        denominator.append(_to_float(tokens[0], line))
    return FirStage(isr, numerator, denominator)


def _read_fir2(header, isr, reader):
    if isr is None:
        msg = "Encountered FIR2 line not preceeded by DIG2 line!"
        raise ResponseConfigurationError(msg)
    tokens = header.split()
    if len(tokens) < 7:
        msg = "Invalid FIR2 line: %s" % header
        raise NDCParseError(msg)
    count = _to_int(tokens[6], header)
    coefficients = []
    while len(coefficients) < count:
        line = reader.next_line("FIR2 coefficients")
        for token in line.split():
            if len(coefficients) == count:
                msg = "More FIR2 coefficients than declared (%d): %s" % (
                    count, line)
                raise NDCParseError(msg)
            coefficients.append(_to_float(token, line))
    return FirStage(isr, coefficients)


def _read_dig2(header):
    tokens = header.split()
    if len(tokens) < 4:
        msg = "Invalid DIG2 line: %s" % header
        raise NDCParseError(msg)
    return _to_float(tokens[3], header)


def read_ndc_stages(lines):
    """
    Parse the stages of an NDC response file.

    :type lines: list of str
    :param lines: Lines of the file.
    :rtype: list
    :return: Stage objects in file order. Each has a ``response(nfr,
        start_fr, end_fr)`` method returning amplitudes and phases.
    """
    reader = _StageReader(lines)
    stages = []
    isr = None
    while reader.has_next():
        line = reader.next_raw().strip()
        if not line or line.startswith("#"):
            continue
        if "theoretical" not in line and "measured" not in line:
            continue
        if "paz" in line:
            stages.append(_read_paz(reader))
        elif "PAZ2" in line:
            stages.append(_read_paz2(line, reader))
        elif "fap" in line:
            stages.append(_read_fap(reader))
        elif "FAP2" in line:
            stages.append(_read_fap2(line, reader))
        elif "fir" in line:
            stages.append(_read_fir(reader))
        elif "DIG2" in line:
            isr = _read_dig2(line)
        elif "FIR2" in line:
            stages.append(_read_fir2(line, isr, reader))
        else:
            logger.debug("Skipping stage line of unknown kind: %s", line)
    return stages


def cascade(stages, nfr, start_fr, end_fr):
    """
    Combine the stage responses: amplitudes multiply, phases add.

    :rtype: tuple of two :class:`numpy.ndarray`
    """
    amp = np.ones(nfr)
    phase = np.zeros(nfr)
    for stage in stages:
        stage_amp, stage_phase = stage.response(nfr, start_fr, end_fr)
        amp *= stage_amp
        phase += stage_phase
    return amp, phase


def read_ndc_units(lines):
    """
    Infer the input units of a response from the comments of an NDC file.

    :rtype: :class:`~seisresp.core.units.ResponseUnits`
    """
    for line in lines:
        if not line.strip().startswith("#"):
            continue
        text = line.lower()
        for patterns, symbol in _UNIT_PATTERNS:
            if any(pattern in text for pattern in patterns):
                return ResponseUnits(get_unit(symbol),
                                     UnitsStatus.QUANTITY_AND_UNITS)
    return ResponseUnits()


class NDCTransfer(object):
    """
    Producer of transfer functions from NDC response files.
    """
    def transfer(self, filename, delfreq, nfreq):
        """
        Complex response of the file at ``nfreq`` frequencies spaced by
        ``delfreq`` starting at 0 Hz.

        :rtype: :class:`numpy.ndarray` complex128
        """
        lines = read_text_lines(filename)
        return self._transfer(lines, delfreq, nfreq)

    def _transfer(self, lines, delfreq, nfreq):
        stages = read_ndc_stages(lines)
        amp, phase = cascade(stages, nfreq, 0.0, delfreq * (nfreq - 1))
        return amp * np.cos(phase) + 1j * amp * np.sin(phase)

    def get_from_transfer_function(self, nsamp, samprate, time, metadata):
        """
        Forward transfer function for a seismogram of ``nsamp`` samples.

        :type metadata: :class:`~seisresp.core.metadata.ResponseMetadata`
        :rtype: :class:`~seisresp.signal.transfer.TransferData`
        """
        _nfft, nfreq, delfreq = get_frequency_sampling(nsamp, samprate)
        lines = read_text_lines(metadata.filename)
        units = read_ndc_units(lines)
        if not units.is_known():
            logger.warning("No units declared in response file %s",
                           metadata.filename)
        data = self._transfer(lines, delfreq, nfreq)
        return TransferData(data, delfreq, units, metadata)
