# -*- coding: utf-8 -*-
"""
seisresp.processing - Cached transfer function computation
==========================================================
:class:`~seisresp.processing.processor.TransferFunctionProcessor` selects
the producer matching a response type, converts units on request, builds
inverse transfer functions and memoizes all results in a
:class:`~seisresp.processing.cache.ResponseCache`.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from seisresp.processing.cache import ResponseCache  # NOQA
from seisresp.processing.keys import (  # NOQA
    FromResponseLookupKey, ToResponseLookupKey)
from seisresp.processing.processor import (  # NOQA
    ComputationContext, TransferFunctionProcessor)
