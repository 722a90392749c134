# -*- coding: utf-8 -*-
"""
Dispatcher producing (cached) forward and inverse transfer functions.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import logging

from seisresp.core.metadata import ChannelMatchPolicy, ResponseType, \
    get_response_type, is_ndc_type
from seisresp.core.tuning import TuningParameters
from seisresp.core.units import ResponseUnits, UnitsStatus, get_unit
from seisresp.core.util.resp_types import (RecoverableResponseError,
                                           UnsupportedResponseType)
from seisresp.processing.cache import ResponseCache
from seisresp.processing.keys import FromResponseLookupKey, \
    ToResponseLookupKey
from seisresp.signal.evalresp import EvalrespTransfer
from seisresp.signal.invsim import build_inverse_transfer_function, \
    remove_response
from seisresp.signal.ndc import NDCTransfer
from seisresp.signal.polezero import SACPZTransfer
from seisresp.signal.util import next2, standardize_sample_rate


logger = logging.getLogger('seisresp.processing.processor')


class ComputationContext(object):
    """
    Settings and shared state of a
    :class:`TransferFunctionProcessor`.

    :type match_policy: str or
        :class:`~seisresp.core.metadata.ChannelMatchPolicy`
    :param match_policy: How strictly channels read from RESP files have to
        match the requested channel.
    :type cache: :class:`~seisresp.processing.cache.ResponseCache`
    :param cache: Cache to use. Processors sharing a cache share results.
        A new cache is created if not given.
    :type tuning: :class:`~seisresp.core.tuning.TuningParameters`
    :param tuning: Numerical parameters. Defaults are used if not given.
    """
    def __init__(self, match_policy="FULL_MATCH", cache=None, tuning=None):
        self.match_policy = ChannelMatchPolicy.get(match_policy)
        self.cache = cache if cache is not None else ResponseCache()
        self.tuning = tuning if tuning is not None else TuningParameters()

    def __str__(self):
        return "ComputationContext(policy=%s, %s)" % (
            self.match_policy, self.cache.get_state_string())


class TransferFunctionProcessor(object):
    """
    Compute forward and inverse transfer functions for a seismogram.

    Results are cached in the cache of the computation context. Callers
    always receive copies, so they are free to modify them.

    >>> processor = TransferFunctionProcessor()
    >>> print(processor.get_cache_state())
    Forward: 0 hits, 0 misses; Inverse: 0 hits, 0 misses; \
Metadata: 0 hits, 0 misses
    """
    def __init__(self, context=None):
        self.context = context if context is not None else \
            ComputationContext()
        self._sacpz_transfer = SACPZTransfer()
        self._evalresp_transfer = EvalrespTransfer()
        self._ndc_transfer = NDCTransfer()

    @property
    def cache(self):
        return self.context.cache

    def _produce(self, nsamp, samprate, time, identity, metadata, policy):
        rsptype = get_response_type(metadata.rsptype)
        if rsptype == ResponseType.SACPZF:
            return self._sacpz_transfer.get_from_transfer_function(
                nsamp, samprate, time, metadata)
        elif rsptype == ResponseType.EVRESP:
            return self._evalresp_transfer.get_from_transfer_function(
                nsamp, samprate, time, identity, metadata, policy)
        elif is_ndc_type(rsptype):
            return self._ndc_transfer.get_from_transfer_function(
                nsamp, samprate, time, metadata)
        raise UnsupportedResponseType(rsptype)

    def get_from_transfer_function(self, nsamp, samprate, time, identity,
                                   metadata):
        """
        Forward transfer function of a seismogram's instrument.

        The sample rate is snapped to the nearest standard rate first.

        :type nsamp: int
        :param nsamp: Number of samples of the seismogram.
        :type samprate: float
        :param samprate: Sample rate of the seismogram.
        :type time: float
        :param time: Epoch time of the seismogram.
        :type identity: :class:`~seisresp.core.metadata.ChannelIdentity`
        :param identity: Channel of the seismogram.
        :type metadata: :class:`~seisresp.core.metadata.ResponseMetadata`
        :param metadata: Response to evaluate.
        :rtype: :class:`~seisresp.signal.transfer.TransferData`
        """
        policy = self.context.match_policy
        rate = standardize_sample_rate(
            samprate, self.context.tuning.sample_rate_tolerance)
        key = FromResponseLookupKey(
            next2(nsamp), rate, identity.network, identity.station,
            identity.channel, identity.location, metadata, policy)
        cached = self.cache.retrieve_forward(key, time)
        if cached is not None:
            return cached.copy()
        logger.debug("Computing forward transfer function of %s from %s "
                     "(%s)", identity, metadata.filename, metadata.rsptype)
        result = self._produce(nsamp, rate, time, identity, metadata, policy)
        self.cache.cache_forward(key, result)
        return result.copy()

    def get_to_transfer_function(self, nsamp, samprate, time, identity,
                                 metadata, limits=None, requested_units=None,
                                 forced_input_units=None):
        """
        Inverse transfer function removing a seismogram's instrument.

        :type limits: :class:`~seisresp.core.freqlimits.FreqLimits`
        :param limits: Taper limits. ``None`` applies no taper.
        :type requested_units: :class:`~seisresp.core.units.Unit` or str
        :param requested_units: Units of the corrected seismogram. If the
            response can not be converted into them, a warning is logged and
            the response units are kept. ``None`` means no conversion.
        :type forced_input_units: :class:`~seisresp.core.units.Unit` or str
        :param forced_input_units: Input units to assume for the response,
            overriding what the response file says. If not given, units
            required by the extended metadata are used.
        :rtype: :class:`~seisresp.signal.invsim.InverseTransferFunction`
        """
        if requested_units is not None:
            requested_units = get_unit(requested_units)
        if forced_input_units is not None:
            forced_input_units = get_unit(forced_input_units)
        else:
            forced_input_units = metadata.get_forced_input_units()

        key = ToResponseLookupKey(
            next2(nsamp), samprate, identity.network, identity.station,
            identity.channel, identity.location, metadata,
            self.context.match_policy, requested_units, forced_input_units)
        cached = self.cache.retrieve_inverse(key, time)
        if cached is not None:
            return cached.copy()

        logger.debug("Computing inverse transfer function of %s from %s "
                     "(%s)", identity, metadata.filename, metadata.rsptype)
        transfer_data = self.get_from_transfer_function(
            nsamp, samprate, time, identity, metadata)
        if forced_input_units is not None and \
                forced_input_units != transfer_data.original_units.units:
            transfer_data.set_forced_units(
                ResponseUnits(forced_input_units, UnitsStatus.FORCED_VALUE))
        if requested_units is not None:
            try:
                transfer_data.convert_units(requested_units)
            except RecoverableResponseError as e:
                logger.warning("Keeping units of response for %s: %s",
                               identity, e)
        original_input_units = transfer_data.working_units.units

        result = build_inverse_transfer_function(
            nsamp, samprate, metadata, limits, transfer_data,
            original_input_units=original_input_units)
        self.cache.cache_inverse(key, result)
        return result.copy()

    def remove_response(self, data, samprate, time, identity, metadata,
                        limits=None, requested_units=None,
                        forced_input_units=None):
        """
        Remove the instrument response from a seismogram.

        The data are demeaned and tapered with a cosine taper covering
        ``taper_percent`` of the window before deconvolution.

        :type data: :class:`numpy.ndarray`
        :rtype: tuple of :class:`numpy.ndarray` and
            :class:`~seisresp.core.units.ResponseUnits`
        :return: Corrected data and their units.
        """
        inverse = self.get_to_transfer_function(
            len(data), samprate, time, identity, metadata, limits=limits,
            requested_units=requested_units,
            forced_input_units=forced_input_units)
        corrected = remove_response(
            data, samprate, inverse,
            taper_fraction=self.context.tuning.taper_fraction)
        return corrected, inverse.response_units

    def get_cache_state(self):
        return self.cache.get_state_string()


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
