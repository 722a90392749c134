# -*- coding: utf-8 -*-
"""
In-memory cache of forward and inverse transfer functions and of response
metadata.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import threading


class _Store(object):
    """
    Dictionary with hit and miss counters guarded by a lock.
    """
    def __init__(self):
        self._data = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def retrieve(self, key):
        with self._lock:
            result = self._data.get(key)
            if result is None:
                self.misses += 1
            else:
                self.hits += 1
            return result

    def miss(self):
        with self._lock:
            self.misses += 1

    def put(self, key, value):
        with self._lock:
            self._data[key] = value

    def clear(self):
        with self._lock:
            self._data.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self):
        with self._lock:
            return len(self._data)


class ResponseCache(object):
    """
    Cache of transfer functions shared by all users of a
    :class:`~seisresp.processing.processor.TransferFunctionProcessor`.

    Lookups of transfer functions pass the time of the data. A key whose
    response metadata is not valid at that time is a miss without the store
    being consulted.

    Stored objects are returned as they are. Callers that hand them out are
    responsible for copying.

    >>> cache = ResponseCache()
    >>> cache.retrieve_metadata(42) is None
    True
    >>> cache.cache_metadata(42, "metadata")
    >>> cache.retrieve_metadata(42)
    'metadata'
    >>> print(cache.get_state_string())
    Forward: 0 hits, 0 misses; Inverse: 0 hits, 0 misses; \
Metadata: 1 hits, 1 misses
    """
    def __init__(self):
        self._forward = _Store()
        self._inverse = _Store()
        self._metadata = _Store()

    @staticmethod
    def _retrieve(store, key, time):
        if not key.contains(time):
            store.miss()
            return None
        return store.retrieve(key)

    def retrieve_forward(self, key, time):
        """
        :type key: :class:`~seisresp.processing.keys.FromResponseLookupKey`
        :rtype: :class:`~seisresp.signal.transfer.TransferData` or None
        """
        return self._retrieve(self._forward, key, time)

    def cache_forward(self, key, transfer_data):
        self._forward.put(key, transfer_data)

    def retrieve_inverse(self, key, time):
        """
        :type key: :class:`~seisresp.processing.keys.ToResponseLookupKey`
        :rtype: :class:`~seisresp.signal.invsim.InverseTransferFunction` or
            None
        """
        return self._retrieve(self._inverse, key, time)

    def cache_inverse(self, key, inverse):
        self._inverse.put(key, inverse)

    def retrieve_metadata(self, waveform_id):
        return self._metadata.retrieve(waveform_id)

    def cache_metadata(self, waveform_id, metadata):
        self._metadata.put(waveform_id, metadata)

    def clear(self):
        """
        Drop all entries and reset the counters.
        """
        for store in (self._forward, self._inverse, self._metadata):
            store.clear()

    @property
    def forward_hit_count(self):
        return self._forward.hits

    @property
    def forward_miss_count(self):
        return self._forward.misses

    @property
    def inverse_hit_count(self):
        return self._inverse.hits

    @property
    def inverse_miss_count(self):
        return self._inverse.misses

    @property
    def metadata_hit_count(self):
        return self._metadata.hits

    @property
    def metadata_miss_count(self):
        return self._metadata.misses

    def get_state_string(self):
        return ("Forward: %d hits, %d misses; Inverse: %d hits, %d misses; "
                "Metadata: %d hits, %d misses") % (
            self.forward_hit_count, self.forward_miss_count,
            self.inverse_hit_count, self.inverse_miss_count,
            self.metadata_hit_count, self.metadata_miss_count)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
