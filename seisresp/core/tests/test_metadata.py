# -*- coding: utf-8 -*-
"""
The seisresp.core.metadata test suite.
"""
import io

import pytest

from seisresp.core.metadata import (ChannelIdentity, ChannelMatchPolicy,
                                    ResponseMetadata,
                                    ResponseMetadataExtension, ResponseType,
                                    ResponseUnitsSource, get_response_type,
                                    is_ndc_type)
from seisresp.core.units import get_unit
from seisresp.core.util.resp_types import (ResponseConfigurationError,
                                           UnsupportedResponseType)


RESP_HEADER = """\
#
B050F03     Station:     ANMO
B050F16     Network:     IU
B052F03     Location:    00
B052F04     Channel:     BHZ
B052F22     Start date:  2002,323,00:00:00.0000
"""


class TestResponseType:
    """
    Test cases for response type lookup.
    """
    def test_aliases(self):
        assert get_response_type("RESP") == ResponseType.EVRESP
        assert get_response_type("sacpz") == ResponseType.SACPZF
        assert get_response_type("pz") == ResponseType.SACPZF
        assert get_response_type("PAZFIR") == ResponseType.PAZFIR

    def test_unsupported(self):
        with pytest.raises(UnsupportedResponseType) as e:
            get_response_type("seismometer")
        assert e.value.response_type == "seismometer"
        assert "not supported" in str(e.value)

    def test_ndc_types(self):
        for rsptype in ("paz", "fap", "pazfir", "pazfap", "firfap", "css"):
            assert is_ndc_type(rsptype)
        assert not is_ndc_type("evresp")
        assert not is_ndc_type("sacpzf")


class TestChannelIdentity:
    """
    Test cases for channel identities.
    """
    def test_seed_id(self):
        identity = ChannelIdentity("IU", "ANMO", "BHZ", "00")
        assert identity.seed_id == "IU.ANMO.00.BHZ"
        identity = ChannelIdentity("IU", "ANMO", "BHZ", "--")
        assert identity.seed_id == "IU.ANMO..BHZ"

    def test_equality_and_hash(self):
        a = ChannelIdentity("IU", "ANMO", "BHZ", "00")
        b = ChannelIdentity("IU", "ANMO", "BHZ", "00")
        assert a == b
        assert hash(a) == hash(b)
        assert a != ChannelIdentity("IU", "ANMO", "BHN", "00")

    def test_from_resp_file(self):
        identity = ChannelIdentity.from_resp_file(io.StringIO(RESP_HEADER))
        assert identity == ChannelIdentity("IU", "ANMO", "BHZ", "00")

    def test_from_resp_file_with_empty_field(self):
        text = RESP_HEADER.replace("Location:    00", "Location:")
        identity = ChannelIdentity.from_resp_file(io.StringIO(text))
        assert identity.location == "*"

    def test_from_resp_file_missing_field(self):
        text = RESP_HEADER.replace("B052F04", "XXXXXXX")
        with pytest.raises(ResponseConfigurationError):
            ChannelIdentity.from_resp_file(io.StringIO(text))


class TestChannelMatchPolicy:
    """
    Test cases for channel match policies.
    """
    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            ChannelMatchPolicy("SOME_MATCH")

    def test_flags(self):
        policy = ChannelMatchPolicy("no_match_required")
        assert not any([policy.match_agency, policy.match_net,
                        policy.match_sta, policy.match_chan,
                        policy.match_location_code, policy.match_epoch])
        policy = ChannelMatchPolicy.get("STA_CHAN_EPOCH_MATCH")
        assert policy.match_sta and policy.match_chan and policy.match_epoch
        assert not policy.match_net

    def test_get_returns_policy_objects_unchanged(self):
        policy = ChannelMatchPolicy()
        assert ChannelMatchPolicy.get(policy) is policy
        assert policy == ChannelMatchPolicy("FULL_MATCH")
        assert hash(policy) == hash(ChannelMatchPolicy("FULL_MATCH"))

    def test_matches(self):
        requested = ChannelIdentity("IU", "ANMO", "BHZ", "")
        found = ChannelIdentity("II", "ANMO", "BHZ", "--")
        assert not ChannelMatchPolicy("FULL_MATCH").matches(requested, found)
        assert ChannelMatchPolicy("STA_CHAN_EPOCH_MATCH").matches(
            requested, found)
        other = ChannelIdentity("IU", "ANMO", "BHN", "")
        assert not ChannelMatchPolicy("NET_STA_CHAN_MATCH").matches(
            requested, other)
        assert ChannelMatchPolicy("NO_MATCH_REQUIRED").matches(
            requested, other)

    def test_matches_epoch(self):
        requested = ChannelIdentity("IU", "ANMO", "BHZ", "00")
        policy = ChannelMatchPolicy("STA_CHAN_EPOCH_MATCH")
        assert policy.matches(requested, requested, time=5.0, starttime=0.0,
                              endtime=10.0)
        assert not policy.matches(requested, requested, time=15.0,
                                  starttime=0.0, endtime=10.0)
        assert ChannelMatchPolicy("NET_STA_CHAN_MATCH").matches(
            requested, requested, time=15.0, starttime=0.0, endtime=10.0)

    def test_equivalent_location_codes(self):
        policy = ChannelMatchPolicy("NET_STA_CHAN_LOCID_EPOCH_MATCH")
        requested = ChannelIdentity("IU", "ANMO", "BHZ", None)
        for location in ("", "--", "??", "*", "**"):
            found = ChannelIdentity("IU", "ANMO", "BHZ", location)
            assert policy.matches(requested, found)
        found = ChannelIdentity("IU", "ANMO", "BHZ", "10")
        assert not policy.matches(requested, found)


class TestResponseMetadata:
    """
    Test cases for response metadata records.
    """
    def test_contains(self):
        md = ResponseMetadata("x.ndc", "paz", time=10.0, endtime=20.0)
        assert md.contains(10.0)
        assert md.contains(20.0)
        assert not md.contains(9.99)
        assert not md.contains(20.01)
        assert ResponseMetadata("x.ndc", "paz").contains(-1e12)

    def test_calibration_flags(self):
        md = ResponseMetadata("x.ndc", "pazfir", nominal_calib=1.0,
                              nominal_calper=1.0, wfdisc_calib=2.0,
                              wfdisc_calper=1.0)
        assert md.has_wfdisc_calibration()
        assert md.has_nominal_calibration()
        md = ResponseMetadata("x.resp", "evresp", wfdisc_calib=2.0,
                              wfdisc_calper=1.0)
        assert not md.has_wfdisc_calibration()
        md = ResponseMetadata("x.ndc", "paz", wfdisc_calib=2.0,
                              wfdisc_calper=1.0)
        assert not md.has_wfdisc_calibration()
        md = ResponseMetadata("x.ndc", "fap", nominal_calib=2.0,
                              nominal_calper=0.0)
        assert not md.has_nominal_calibration()

    def test_equality_and_hash(self):
        a = ResponseMetadata("x.ndc", "paz", nominal_calib=1.0)
        b = ResponseMetadata("x.ndc", "PAZ", nominal_calib=1.0)
        assert a == b
        assert hash(a) == hash(b)
        assert a != ResponseMetadata("x.ndc", "paz", nominal_calib=2.0)

    def test_forced_input_units(self):
        ext = ResponseMetadataExtension(response_type="paz",
                                        likely_units_for_type="nm/s")
        md = ResponseMetadata("x.ndc", "paz", extended_metadata=ext)
        assert md.get_forced_input_units() == get_unit("nm/s")
        assert ResponseMetadata("x.ndc", "paz").get_forced_input_units() \
            is None


class TestResponseMetadataExtension:
    """
    Test cases for the analysis results attached to metadata.
    """
    def test_analysis_derived_units_win(self):
        ext = ResponseMetadataExtension(response_type="paz",
                                        likely_units_for_type="nm/s",
                                        analysis_derived_units="nm")
        assert ext.is_force_input_units_required()
        assert ext.get_force_input_units() == get_unit("nm")
        assert ext.get_response_units_source() == \
            ResponseUnitsSource.EVALUATED

    def test_resp_files_are_self_describing(self):
        ext = ResponseMetadataExtension(response_type="evresp",
                                        likely_units_for_type="m/s")
        assert not ext.is_force_input_units_required()
        assert ext.get_response_units_source() == ResponseUnitsSource.REPORTED

    def test_nothing_to_force(self):
        ext = ResponseMetadataExtension(response_type="fap")
        assert not ext.is_force_input_units_required()
        assert ext.get_response_units_source() == ResponseUnitsSource.UNKNOWN
        with pytest.raises(ResponseConfigurationError):
            ext.get_force_input_units()

    def test_untyped_extension_forces_nothing(self):
        ext = ResponseMetadataExtension(likely_units_for_type="nm/s",
                                        analysis_derived_units="nm")
        assert not ext.is_force_input_units_required()
        md = ResponseMetadata("velocity_paz.ndc", "paz",
                              extended_metadata=ext)
        assert md.get_forced_input_units() is None
