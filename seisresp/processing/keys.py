# -*- coding: utf-8 -*-
"""
Lookup keys of the transfer function cache.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from collections import namedtuple


class _LookupKeyMixin(object):
    __slots__ = ()

    def contains(self, time):
        """
        Whether the response metadata of the key is valid at ``time``.
        """
        if time is None:
            return True
        return self.metadata.contains(time)


class FromResponseLookupKey(
        _LookupKeyMixin,
        namedtuple("FromResponseLookupKey", [
            "nfft", "samprate", "network", "station", "channel", "location",
            "metadata", "policy"])):
    """
    Key of a cached forward transfer function.

    >>> from seisresp.core.metadata import ResponseMetadata
    >>> md = ResponseMetadata("BW.FURT.pz", "sacpzf", time=0.0, endtime=10.)
    >>> key = FromResponseLookupKey(1024, 20.0, "BW", "FURT", "EHZ", "",
    ...                             md, "FULL_MATCH")
    >>> key == FromResponseLookupKey(1024, 20.0, "BW", "FURT", "EHZ", "",
    ...                              md, "FULL_MATCH")
    True
    >>> key.contains(11.0)
    False
    """
    __slots__ = ()


class ToResponseLookupKey(
        _LookupKeyMixin,
        namedtuple("ToResponseLookupKey", [
            "nfft", "samprate", "network", "station", "channel", "location",
            "metadata", "policy", "requested_units", "forced_input_units"])):
    """
    Key of a cached inverse transfer function.
    """
    __slots__ = ()


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
