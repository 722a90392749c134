# -*- coding: utf-8 -*-
"""
Transfer functions of SEED RESP files evaluated with ObsPy's evalresp
bindings.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import logging

import numpy as np
from obspy import UTCDateTime, read_inventory

from seisresp.core.metadata import ChannelIdentity, ChannelMatchPolicy
from seisresp.core.units import ResponseUnits, UnitsStatus, get_unit
from seisresp.core.util.resp_types import (ResponseConfigurationError,
                                           ResponseUnitsError)
from seisresp.signal.transfer import TransferData
from seisresp.signal.util import get_frequency_sampling


logger = logging.getLogger('seisresp.signal.evalresp')


def resolve_channel(requested, found, policy):
    """
    Reconcile the requested channel with the channel identity read from the
    RESP file header.

    The station has to be equal. The channel is accepted if either code
    contains the other, in which case the code from the file is used. Both
    checks are only done if the match policy asks for them.

    :type requested: :class:`~seisresp.core.metadata.ChannelIdentity`
    :type found: :class:`~seisresp.core.metadata.ChannelIdentity`
    :type policy: :class:`~seisresp.core.metadata.ChannelMatchPolicy`
    :rtype: :class:`~seisresp.core.metadata.ChannelIdentity`
    :return: Identity to look up in the file.
    """
    policy = ChannelMatchPolicy.get(policy)
    station = requested.station
    channel = requested.channel
    if policy.match_sta and station != found.station:
        msg = ("Supplied station (%s) does not match station in RESP file "
               "(%s)") % (station, found.station)
        raise ResponseConfigurationError(msg)
    if channel != found.channel:
        if channel and found.channel and (found.channel in channel or
                                          channel in found.channel):
            channel = found.channel
        elif policy.match_chan:
            msg = ("Supplied chan (%s) does not match chan in RESP file "
                   "(%s)") % (channel, found.channel)
            raise ResponseConfigurationError(msg)
        else:
            channel = found.channel
    return ChannelIdentity(network=found.network, station=found.station,
                           channel=channel, location=found.location,
                           agency=requested.agency)


def _find_response(inventory, identity, time, policy):
    utc = UTCDateTime(time) if time is not None else None
    candidates = []
    for net in inventory.networks:
        for sta in net.stations:
            if sta.code != identity.station:
                continue
            for cha in sta.channels:
                if cha.code != identity.channel:
                    continue
                if policy.match_epoch and utc is not None and \
                        not cha.is_active(time=utc):
                    continue
                candidates.append(cha)
    if not candidates:
        msg = "No response for %s at %s found" % (identity.seed_id, utc)
        raise ResponseConfigurationError(msg)
    if len(candidates) > 1:
        logger.warning("Found %d matching responses for %s, using first.",
                       len(candidates), identity.seed_id)
    return candidates[0].response


def get_response_input_units(response):
    """
    Input units of an ObsPy :class:`~obspy.core.inventory.response.Response`.
    """
    symbol = None
    if response.instrument_sensitivity is not None:
        symbol = response.instrument_sensitivity.input_units
    if not symbol and response.response_stages:
        symbol = response.response_stages[0].input_units
    if not symbol:
        return ResponseUnits()
    try:
        return ResponseUnits(get_unit(symbol),
                             UnitsStatus.QUANTITY_AND_UNITS)
    except ResponseUnitsError:
        logger.warning("Unrecognized response input units '%s'", symbol)
        return ResponseUnits()


class EvalrespTransfer(object):
    """
    Producer of transfer functions from SEED RESP files.
    """
    def get_from_transfer_function(self, nsamp, samprate, time, identity,
                                   metadata, policy="FULL_MATCH"):
        """
        Forward transfer function for a seismogram of ``nsamp`` samples.

        The response is evaluated in default units, i.e. output units per
        input units of the file.

        :type identity: :class:`~seisresp.core.metadata.ChannelIdentity`
        :param identity: Requested channel.
        :type time: float
        :param time: Epoch time the response has to be valid for.
        :type policy: str or
            :class:`~seisresp.core.metadata.ChannelMatchPolicy`
        :rtype: :class:`~seisresp.signal.transfer.TransferData`
        """
        policy = ChannelMatchPolicy.get(policy)
        _nfft, nfreq, delfreq = get_frequency_sampling(nsamp, samprate)
        found = ChannelIdentity.from_resp_file(metadata.filename)
        resolved = resolve_channel(identity, found, policy)
        inventory = read_inventory(metadata.filename, format="RESP")
        response = _find_response(inventory, resolved, time, policy)
        freqs = np.arange(nfreq) * delfreq
        data = response.get_evalresp_response_for_frequencies(
            freqs, output="DEF")
        units = get_response_input_units(response)
        return TransferData(data, delfreq, units, metadata)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
