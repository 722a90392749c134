# -*- coding: utf-8 -*-
"""
The seisresp.processing.cache test suite.
"""
import threading

from seisresp.core.metadata import ChannelMatchPolicy, ResponseMetadata
from seisresp.core.units import get_unit
from seisresp.processing.cache import ResponseCache
from seisresp.processing.keys import FromResponseLookupKey, \
    ToResponseLookupKey


def _metadata(**kwargs):
    return ResponseMetadata("IU.ANMO.00.BHZ.pz", "sacpzf", **kwargs)


def _from_key(md=None, nfft=1024):
    md = md if md is not None else _metadata()
    return FromResponseLookupKey(nfft, 20.0, "IU", "ANMO", "BHZ", "00", md,
                                 ChannelMatchPolicy("FULL_MATCH"))


class TestLookupKeys:
    """
    Test cases for cache keys.
    """
    def test_equality_and_hash(self):
        assert _from_key() == _from_key()
        assert hash(_from_key()) == hash(_from_key())
        assert _from_key() != _from_key(nfft=2048)
        assert _from_key() != _from_key(_metadata(nominal_calib=1.0))

    def test_inverse_key_includes_units(self):
        md = _metadata()
        args = (1024, 20.0, "IU", "ANMO", "BHZ", "00", md, "FULL_MATCH")
        key = ToResponseLookupKey(*args, requested_units=get_unit("nm"),
                                  forced_input_units=None)
        assert key == ToResponseLookupKey(*args, get_unit("nm"), None)
        assert key != ToResponseLookupKey(*args, get_unit("nm/s"), None)
        assert key != ToResponseLookupKey(*args, get_unit("nm"),
                                          get_unit("m/s"))
        assert len({key, ToResponseLookupKey(*args, get_unit("nm"),
                                             None)}) == 1

    def test_contains(self):
        key = _from_key(_metadata(time=100.0, endtime=200.0))
        assert key.contains(None)
        assert key.contains(150.0)
        assert not key.contains(50.0)
        assert not key.contains(250.0)
        assert _from_key().contains(-1e9)


class TestResponseCache:
    """
    Test cases for the transfer function cache.
    """
    def test_hits_and_misses(self):
        cache = ResponseCache()
        key = _from_key()
        assert cache.retrieve_forward(key, None) is None
        cache.cache_forward(key, "forward")
        assert cache.retrieve_forward(key, 0.0) == "forward"
        assert cache.retrieve_forward(_from_key(), None) == "forward"
        assert cache.forward_hit_count == 2
        assert cache.forward_miss_count == 1
        assert cache.inverse_hit_count == 0
        assert cache.inverse_miss_count == 0

    def test_stores_are_separate(self):
        cache = ResponseCache()
        key = _from_key()
        cache.cache_forward(key, "forward")
        assert cache.retrieve_inverse(key, None) is None
        assert cache.retrieve_metadata(key) is None
        assert cache.inverse_miss_count == 1
        assert cache.metadata_miss_count == 1

    def test_time_outside_of_epoch_is_a_miss(self):
        cache = ResponseCache()
        key = _from_key(_metadata(time=100.0, endtime=200.0))
        cache.cache_inverse(key, "inverse")
        assert cache.retrieve_inverse(key, 300.0) is None
        assert cache.retrieve_inverse(key, 150.0) == "inverse"
        assert cache.inverse_miss_count == 1
        assert cache.inverse_hit_count == 1

    def test_clear(self):
        cache = ResponseCache()
        cache.cache_metadata("IU.ANMO.00.BHZ", _metadata())
        assert cache.retrieve_metadata("IU.ANMO.00.BHZ") == _metadata()
        cache.clear()
        assert cache.retrieve_metadata("IU.ANMO.00.BHZ") is None
        assert cache.get_state_string() == (
            "Forward: 0 hits, 0 misses; Inverse: 0 hits, 0 misses; "
            "Metadata: 0 hits, 1 misses")

    def test_concurrent_access(self):
        cache = ResponseCache()
        keys = [_from_key(nfft=2 ** i) for i in range(8)]

        def worker():
            for key in keys:
                if cache.retrieve_forward(key, None) is None:
                    cache.cache_forward(key, key.nfft)

        threads = [threading.Thread(target=worker) for _i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert cache.forward_hit_count + cache.forward_miss_count == 32
        for key in keys:
            assert cache.retrieve_forward(key, None) == key.nfft
