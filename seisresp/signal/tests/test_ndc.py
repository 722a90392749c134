# -*- coding: utf-8 -*-
"""
The seisresp.signal.ndc test suite.
"""
import logging
import os

import numpy as np
import pytest

from seisresp.core.metadata import ResponseMetadata
from seisresp.core.units import UnitsStatus, get_unit
from seisresp.core.util.resp_types import (NDCParseError,
                                           ResponseConfigurationError)
from seisresp.signal.ndc import (FapStage, FirStage, NDCTransfer,
                                 PolesZerosStage, cascade, read_ndc_stages,
                                 read_ndc_units, unwrap_phase)
from seisresp.signal.polezero import PoleZeroData, evaluate_pole_zero
from seisresp.signal.transfer import TransferData
from seisresp.signal.util import get_frequency_sampling


POLES = [-4.4429 + 4.4429j, -4.4429 - 4.4429j]


class TestStages:
    """
    Test cases for the individual stage kinds.
    """
    def test_poles_zeros_matches_complex_evaluation(self):
        stage = PolesZerosStage(3.0, POLES, [0j, 0j])
        amp, phase = stage.response(101, 0.0, 10.0)
        pzd = PoleZeroData(3.0, POLES, [0j, 0j])
        expected = evaluate_pole_zero(0.1, pzd, 101)
        np.testing.assert_allclose(amp * np.exp(1j * phase), expected,
                                   atol=1e-9)

    def test_equal_poles_and_zeros_cancel(self):
        stage = PolesZerosStage(2.5, POLES, POLES)
        amp, phase = stage.response(50, 0.0, 20.0)
        np.testing.assert_allclose(amp, 2.5)
        np.testing.assert_allclose(phase, 0.0, atol=1e-12)

    def test_pole_at_frequency_is_skipped(self):
        # a pole exactly on the frequency axis does not divide the amplitude
        stage = PolesZerosStage(1.0, [0j], [])
        amp, _phase = stage.response(3, 0.0, 2.0)
        assert amp[0] == 1.0
        assert amp[1] == pytest.approx(1.0 / (2 * np.pi))

    def test_single_frequency(self):
        stage = PolesZerosStage(1.0, [], [0j])
        amp, _phase = stage.response(1, 1.0, 1.0)
        assert amp[0] == pytest.approx(2 * np.pi)

    def test_fap_stage_interpolates(self):
        stage = FapStage([0.1, 1.0, 10.0], [2.0, 2.0, 2.0], [0.1, 0.1, 0.1])
        amp, phase = stage.response(11, 0.0, 10.0)
        np.testing.assert_allclose(amp, 2.0)
        np.testing.assert_allclose(phase, 0.1)

    def test_delta_fir_is_transparent(self):
        freqs, amp, phase = FirStage(40.0, [1.0]).table()
        assert len(freqs) == 513
        assert freqs[-1] == pytest.approx(20.0)
        np.testing.assert_allclose(amp, 1.0)
        np.testing.assert_allclose(phase, 0.0, atol=1e-12)

    def test_smoothing_fir_amplitude(self):
        _freqs, amp, _phase = FirStage(40.0, [0.25, 0.5, 0.25]).table()
        k = np.arange(513)
        np.testing.assert_allclose(amp, 0.5 * (1 + np.cos(np.pi * k / 512)),
                                   atol=1e-12)

    def test_fir_phase_is_linear(self):
        # a pure delay of one sample
        freqs, _amp, phase = FirStage(40.0, [0.0, 1.0]).table()
        np.testing.assert_allclose(phase[:400],
                                   -2 * np.pi * freqs[:400] / 40.0,
                                   atol=1e-9)

    def test_fir_matches_numpy_fft(self):
        coefficients = [0.6, 0.3, 0.1]
        _freqs, amp, phase = FirStage(40.0, coefficients).table()
        expected = np.fft.rfft(coefficients, 1024)
        np.testing.assert_allclose(amp * np.exp(1j * phase), expected,
                                   atol=1e-9)

    def test_recursive_stage_phase(self):
        freqs, amp, phase = FirStage(40.0, [1.0], [0.0, 0.5]).table()
        omega = 2 * np.pi * freqs / 40.0
        expected = 1.0 / (1.0 - 0.5 * np.exp(-1j * omega))
        np.testing.assert_allclose(amp * np.exp(1j * phase), expected,
                                   atol=1e-9)

    def test_fir_with_too_many_coefficients(self):
        with pytest.raises(ResponseConfigurationError):
            FirStage(40.0, np.ones(1025)).table()

    def test_fir_logs_creation(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='seisresp.signal.ndc'):
            FirStage(40.0, [0.5, 0.5])
        assert "Created FIR with ISR = 40.000000 and 2 coefficients" in \
            caplog.text


class TestUnwrapPhase:
    """
    Test cases for phase unwrapping.
    """
    def test_single_wrap(self):
        true = -np.arange(5) - 0.5
        wrapped = np.angle(np.exp(1j * true))
        np.testing.assert_allclose(unwrap_phase(wrapped), true, atol=1e-12)

    def test_zero_phase(self):
        np.testing.assert_array_equal(unwrap_phase(np.zeros(10)), 0.0)

    def test_input_is_not_modified(self):
        phase = np.array([0.0, -3.0, 3.0, 2.0])
        unwrap_phase(phase)
        np.testing.assert_array_equal(phase, [0.0, -3.0, 3.0, 2.0])


class TestNDCReader:
    """
    Test cases for parsing NDC stage text.
    """
    path = os.path.join(os.path.dirname(__file__), 'data')

    def _lines(self, filename):
        with open(os.path.join(self.path, filename), 'rt') as fh:
            return fh.read().splitlines()

    def test_paz_stage(self):
        stages = read_ndc_stages(self._lines("velocity_paz.ndc"))
        assert len(stages) == 1
        stage = stages[0]
        assert isinstance(stage, PolesZerosStage)
        assert stage.norm_factor == 1.0
        assert stage.poles == [-4.4429 + 4.4429j, -4.4429 - 4.4429j]
        assert stage.zeros == [0j, 0j]

    def test_idc_stages(self):
        stages = read_ndc_stages(self._lines("idc_stages.ndc"))
        assert [type(s) for s in stages] == [PolesZerosStage, FapStage,
                                             FirStage]
        paz, fap, fir = stages
        assert paz.norm_factor == 2.0
        assert paz.poles == [-6.283185 + 0j]
        assert paz.zeros == [0j]
        np.testing.assert_array_equal(fap.freqs, [0.1, 1.0, 10.0])
        np.testing.assert_array_equal(fap.phases, 0.0)
        assert fir.isr == 40.0
        np.testing.assert_array_equal(fir.numerator, [0.25, 0.5, 0.25])

    def test_fir2_needs_dig2(self):
        with pytest.raises(ResponseConfigurationError) as e:
            read_ndc_stages(self._lines("fir2_without_dig2.ndc"))
        assert "not preceeded by DIG2" in str(e.value)

    def test_truncated_file(self):
        with pytest.raises(NDCParseError):
            read_ndc_stages(self._lines("truncated_paz.ndc"))

    def test_bad_number(self):
        lines = ["theoretical 1 instrument paz", "one"]
        with pytest.raises(NDCParseError) as e:
            read_ndc_stages(lines)
        assert "one" in str(e.value)

    def test_unknown_stage_kinds_are_skipped(self):
        lines = ["theoretical 1 instrument xyz", "1.0"]
        assert read_ndc_stages(lines) == []

    def test_units(self):
        assert read_ndc_units(self._lines("velocity_paz.ndc")).units == \
            get_unit("nm/s")
        assert read_ndc_units(self._lines("flat_fap.ndc")).units == \
            get_unit("nm")
        assert read_ndc_units(self._lines("idc_stages.ndc")).units == \
            get_unit("m/s")
        assert read_ndc_units(["# acceleration in nm/s/s"]).units == \
            get_unit("nm/s^2")
        assert read_ndc_units(["# hydrophone, counts/pa"]).units == \
            get_unit("Pa")
        units = read_ndc_units(self._lines("no_units.ndc"))
        assert not units.is_known()
        assert units.status == UnitsStatus.UNDETERMINED

    def test_units_only_from_comments(self):
        assert not read_ndc_units(["nm/s"]).is_known()


class TestCascade:
    """
    Test cases for combining stages.
    """
    def test_amplitudes_multiply_and_phases_add(self):
        first = PolesZerosStage(2.0, [], [])
        second = FapStage([0.1, 100.0], [3.0, 3.0], [0.25, 0.25])
        amp, phase = cascade([first, second], 10, 0.0, 9.0)
        np.testing.assert_allclose(amp, 6.0)
        np.testing.assert_allclose(phase, 0.25)

    def test_order_does_not_matter(self):
        stages = [PolesZerosStage(1.5, POLES, [0j]),
                  FirStage(40.0, [0.25, 0.5, 0.25]),
                  FapStage([0.1, 1.0, 100.0], [1.0, 2.0, 4.0],
                           [0.0, 0.1, 0.2])]
        amp1, phase1 = cascade(stages, 64, 0.0, 20.0)
        amp2, phase2 = cascade(stages[::-1], 64, 0.0, 20.0)
        np.testing.assert_allclose(amp1, amp2)
        np.testing.assert_allclose(phase1, phase2)

    def test_empty_cascade(self):
        amp, phase = cascade([], 4, 0.0, 1.0)
        np.testing.assert_array_equal(amp, 1.0)
        np.testing.assert_array_equal(phase, 0.0)


class TestNDCTransfer:
    """
    Test cases for transfer functions of NDC files.
    """
    path = os.path.join(os.path.dirname(__file__), 'data')

    def test_transfer_of_paz_file(self):
        filename = os.path.join(self.path, "velocity_paz.ndc")
        data = NDCTransfer().transfer(filename, 0.05, 401)
        pzd = PoleZeroData(1.0, [-4.4429 + 4.4429j, -4.4429 - 4.4429j],
                           [0j, 0j])
        np.testing.assert_allclose(data, evaluate_pole_zero(0.05, pzd, 401),
                                   atol=1e-12)

    def test_delta_fir_stage_does_not_change_response(self):
        transfer = NDCTransfer()
        paz = transfer.transfer(os.path.join(self.path, "velocity_paz.ndc"),
                                0.05, 401)
        paz_fir = transfer.transfer(os.path.join(self.path, "paz_fir.ndc"),
                                    0.05, 401)
        np.testing.assert_allclose(paz_fir, paz, atol=1e-10)

    def test_flat_fap(self):
        filename = os.path.join(self.path, "flat_fap.ndc")
        md = ResponseMetadata(filename, "fap")
        td = NDCTransfer().get_from_transfer_function(1000, 40.0, 0.0, md)
        assert isinstance(td, TransferData)
        assert len(td) == 513
        assert td.delfreq == pytest.approx(40.0 / 1024)
        np.testing.assert_allclose(td.get_amplitudes(), 2.0)
        assert td.working_units.units == get_unit("nm")
        assert td.working_units.status == UnitsStatus.QUANTITY_AND_UNITS

    def test_idc_file(self):
        filename = os.path.join(self.path, "idc_stages.ndc")
        md = ResponseMetadata(filename, "pazfir")
        td = NDCTransfer().get_from_transfer_function(512, 40.0, 0.0, md)
        _nfft, nfreq, delfreq = get_frequency_sampling(512, 40.0)
        freqs = np.arange(nfreq) * delfreq
        omega = 2 * np.pi * freqs
        highpass = 2.0 * omega / np.hypot(6.283185, omega)
        smoothing = 0.5 * (1 + np.cos(np.pi * freqs / 20.0))
        np.testing.assert_allclose(td.get_amplitudes(), highpass * smoothing,
                                   rtol=1e-6, atol=1e-12)

    def test_missing_units_are_logged(self, caplog):
        filename = os.path.join(self.path, "no_units.ndc")
        md = ResponseMetadata(filename, "paz")
        with caplog.at_level(logging.WARNING, logger='seisresp.signal.ndc'):
            td = NDCTransfer().get_from_transfer_function(100, 20.0, 0.0, md)
        assert "No units declared" in caplog.text
        assert not td.working_units.is_known()
        np.testing.assert_allclose(td.get_amplitudes(), 1.0)
