# -*- coding: utf-8 -*-
"""
Response metadata: response types, channel identities, match policies and
the per-response metadata records consumed by the transfer function
producers.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from collections import OrderedDict

from obspy.core.util.base import ComparingObject
from obspy.core.util.obspy_types import Enum

from seisresp.core.units import get_unit
from seisresp.core.util.base import read_text_lines
from seisresp.core.util.resp_types import (
    ResponseConfigurationError, UnsupportedResponseType)


ResponseType = Enum(["evresp", "sacpzf", "paz", "fap", "pazfir", "pazfap",
                     "firfap", "css"],
                    replace={'resp': 'evresp', 'sacpz': 'sacpzf',
                             'polezero': 'sacpzf', 'pz': 'sacpzf'})

ResponseUnitsSource = Enum(["evaluated", "reported", "inferred", "unknown"])


def get_response_type(value):
    """
    Map a response type name (or alias) to its :data:`ResponseType` value.

    >>> print(get_response_type("PoleZero"))
    sacpzf
    >>> get_response_type("foo")  # doctest: +ELLIPSIS
    Traceback (most recent call last):
    ...
    seisresp.core.util.resp_types.UnsupportedResponseType: Response type ...
    """
    rsptype = ResponseType(value.lower()) if isinstance(value, str) else None
    if rsptype is None:
        raise UnsupportedResponseType(value)
    return rsptype


def is_ndc_type(rsptype):
    """
    Whether the response type is evaluated by the NDC stage cascade.
    """
    return get_response_type(rsptype) not in (ResponseType.EVRESP,
                                              ResponseType.SACPZF)


def _normalize_location(locid):
    if locid is None or locid in ("--", "", "??", "*", "**"):
        return "--"
    return locid


class ChannelIdentity(ComparingObject):
    """
    Network, station, channel and location code of a recording channel.
    """
    def __init__(self, network=None, station=None, channel=None,
                 location=None, agency=None):
        self.network = network
        self.station = station
        self.channel = channel
        self.location = location
        self.agency = agency

    def __hash__(self):
        return hash((self.network, self.station, self.channel, self.location,
                     self.agency))

    def __str__(self):
        return ".".join("" if _i is None else _i for _i in (
            self.network, self.station, self.location, self.channel))

    def __repr__(self):
        return "ChannelIdentity(%r, %r, %r, %r)" % (
            self.network, self.station, self.channel, self.location)

    @property
    def seed_id(self):
        location = _normalize_location(self.location)
        if location == "--":
            location = ""
        return ".".join([self.network or "", self.station or "", location,
                         self.channel or ""])

    @classmethod
    def from_resp_file(cls, filename):
        """
        Read the station identity from the header blockettes of a SEED RESP
        file.

        The station comes from B050F03, the network from B050F16, the
        location from B052F03 and the channel from B052F04. Fields with no
        value are reported as ``"*"``.
        """
        fields = OrderedDict([("B050F03", None), ("B050F16", None),
                              ("B052F03", None), ("B052F04", None)])
        for line in read_text_lines(filename):
            for key in fields:
                if fields[key] is None and line.startswith(key):
                    tokens = line.split()
                    fields[key] = tokens[2] if len(tokens) > 2 else "*"
        missing = [key for key, value in fields.items() if value is None]
        if missing:
            msg = ("Failed to read channel identity from %s, missing "
                   "fields: %s") % (filename, ", ".join(missing))
            raise ResponseConfigurationError(msg)
        return cls(network=fields["B050F16"], station=fields["B050F03"],
                   channel=fields["B052F04"], location=fields["B052F03"])


class ChannelMatchPolicy(object):
    """
    Rules for deciding whether the channel found in a response file matches
    the requested channel.

    >>> policy = ChannelMatchPolicy.get("net_sta_chan_match")
    >>> policy.match_sta, policy.match_epoch
    (True, False)
    """
    POLICIES = OrderedDict([
        # agency, net, net_jdate, sta, chan, location_code, epoch
        ("NO_MATCH_REQUIRED", (False, False, False, False, False, False,
                               False)),
        ("FULL_MATCH", (True, True, True, True, True, True, True)),
        ("STA_CHAN_EPOCH_MATCH", (False, False, False, True, True, False,
                                  True)),
        ("NET_STA_CHAN_EPOCH_MATCH", (False, True, False, True, True, False,
                                      True)),
        ("AGENCY_NET_STA_CHAN_LOCID_EPOCH_MATCH", (True, True, False, True,
                                                   True, True, True)),
        ("NET_STA_CHAN_LOCID_EPOCH_MATCH", (False, True, False, True, True,
                                            True, True)),
        ("NET_STA_CHAN_MATCH", (False, True, False, True, True, False,
                                False)),
    ])

    def __init__(self, policy="FULL_MATCH"):
        policy = policy.upper()
        if policy not in self.POLICIES:
            msg = "Unrecognized policy: %s. Available policies are: (%s)." % (
                policy, ", ".join(self.POLICIES))
            raise ValueError(msg)
        self.policy = policy
        (self.match_agency, self.match_net, self.match_net_jdate,
         self.match_sta, self.match_chan, self.match_location_code,
         self.match_epoch) = self.POLICIES[policy]

    @classmethod
    def get(cls, policy):
        if isinstance(policy, cls):
            return policy
        return cls(policy)

    def __eq__(self, other):
        return (isinstance(other, ChannelMatchPolicy) and
                self.policy == other.policy)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.policy)

    def __str__(self):
        return self.policy

    def __repr__(self):
        return "ChannelMatchPolicy(%r)" % self.policy

    def matches(self, requested, found, time=None, starttime=None,
                endtime=None):
        """
        Check a channel identity parsed from a response file against the
        requested one.

        :type requested: :class:`ChannelIdentity`
        :type found: :class:`ChannelIdentity`
        :type time: float, optional
        :param time: Requested epoch time. Only checked when the policy
            demands epoch matching and a time is given.
        """
        if self.match_agency and requested.agency is not None and \
                requested.agency != found.agency:
            return False
        if self.match_net and requested.network != found.network:
            return False
        if self.match_sta and requested.station != found.station:
            return False
        if self.match_chan and requested.channel != found.channel:
            return False
        if self.match_epoch and time is not None:
            if starttime is not None and time < starttime:
                return False
            if endtime is not None and time > endtime:
                return False
        if self.match_location_code and \
                _normalize_location(requested.location) != \
                _normalize_location(found.location):
            return False
        return True


class ResponseMetadataExtension(ComparingObject):
    """
    Results of an external analysis of a response: the units the response
    most likely has and how they were determined.
    """
    def __init__(self, response_id=None, response_type=None,
                 likely_units_for_type=None, analysis_derived_units=None,
                 median_residual=None, std_residual=None, evaluations=0,
                 failure_problem_detail=None):
        self.response_id = response_id
        self.response_type = (get_response_type(response_type)
                              if response_type is not None else None)
        self.likely_units_for_type = (
            get_unit(likely_units_for_type)
            if likely_units_for_type is not None else None)
        self.analysis_derived_units = (
            get_unit(analysis_derived_units)
            if analysis_derived_units is not None else None)
        self.median_residual = median_residual
        self.std_residual = std_residual
        self.evaluations = evaluations
        self.failure_problem_detail = failure_problem_detail

    def __hash__(self):
        return hash((self.response_id, self.response_type,
                     self.likely_units_for_type,
                     self.analysis_derived_units))

    def is_force_input_units_required(self):
        if self.response_type is None:
            return False
        # RESP files are self describing, only an explicit analysis
        # overrides them.
        if self.response_type == ResponseType.EVRESP:
            return self.analysis_derived_units is not None
        return (self.analysis_derived_units is not None or
                self.likely_units_for_type is not None)

    def get_force_input_units(self):
        if self.analysis_derived_units is not None:
            return self.analysis_derived_units
        elif self.likely_units_for_type is not None:
            return self.likely_units_for_type
        msg = "No units available to force for response %s" % \
            self.response_id
        raise ResponseConfigurationError(msg)

    def get_response_units_source(self):
        if self.analysis_derived_units is not None:
            return ResponseUnitsSource.EVALUATED
        elif self.response_type == ResponseType.EVRESP:
            return ResponseUnitsSource.REPORTED
        elif self.likely_units_for_type is not None:
            return ResponseUnitsSource.INFERRED
        return ResponseUnitsSource.UNKNOWN


class ResponseMetadata(ComparingObject):
    """
    Everything needed to locate and calibrate an instrument response.

    :type filename: str
    :param filename: File holding the response (NDC stage text, SAC PZ
        file or SEED RESP file).
    :type rsptype: str
    :param rsptype: One of :data:`ResponseType` (aliases are accepted).
    :type nominal_calib: float
    :param nominal_calib: Nominal calibration (nm/count) of the instrument.
    :type nominal_calper: float
    :param nominal_calper: Period (s) at which ``nominal_calib`` applies.
    :type wfdisc_calib: float
    :param wfdisc_calib: Calibration attached to the waveform segment.
    :type wfdisc_calper: float
    :param wfdisc_calper: Period (s) at which ``wfdisc_calib`` applies.
    :type time: float
    :param time: Start of the validity window (epoch seconds).
    :type endtime: float
    :param endtime: End of the validity window (epoch seconds).
    :type instrument_sample_rate: float
    :param instrument_sample_rate: Sample rate of the digitizer, if known.
    """
    def __init__(self, filename, rsptype, nominal_calib=None,
                 nominal_calper=None, sensor_calper=None,
                 sensor_calratio=None, wfdisc_calib=None, wfdisc_calper=None,
                 time=None, endtime=None, extended_metadata=None,
                 instrument_sample_rate=None):
        self.filename = str(filename)
        self.rsptype = get_response_type(rsptype)
        self.nominal_calib = nominal_calib
        self.nominal_calper = nominal_calper
        self.sensor_calper = sensor_calper
        self.sensor_calratio = sensor_calratio
        self.wfdisc_calib = wfdisc_calib
        self.wfdisc_calper = wfdisc_calper
        self.time = time
        self.endtime = endtime
        self.extended_metadata = extended_metadata
        self.instrument_sample_rate = instrument_sample_rate

    def __hash__(self):
        return hash((self.filename, self.rsptype, self.nominal_calib,
                     self.nominal_calper, self.wfdisc_calib,
                     self.wfdisc_calper, self.time, self.endtime,
                     self.instrument_sample_rate))

    def __str__(self):
        return ("ResponseMetadata: file=%s, type=%s, calib=%s, calper=%s, "
                "time=%s, endtime=%s") % (
            self.filename, self.rsptype, self.nominal_calib,
            self.nominal_calper, self.time, self.endtime)

    def contains(self, time):
        """
        Whether ``time`` lies inside the validity window. Missing bounds are
        treated as open.
        """
        time = float(time)
        if self.time is not None and time < self.time:
            return False
        if self.endtime is not None and time > self.endtime:
            return False
        return True

    def has_wfdisc_calibration(self):
        return (self.wfdisc_calib is not None and
                self.wfdisc_calper is not None and self.wfdisc_calper > 0 and
                self.rsptype not in (ResponseType.EVRESP, ResponseType.PAZ))

    def has_nominal_calibration(self):
        return (self.nominal_calib is not None and
                self.nominal_calper is not None and self.nominal_calper > 0)

    def get_forced_input_units(self):
        """
        Units the response must be treated as having, or ``None``.
        """
        ext = self.extended_metadata
        if ext is not None and ext.is_force_input_units_required():
            return ext.get_force_input_units()
        return None


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
