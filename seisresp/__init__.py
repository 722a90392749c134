# -*- coding: utf-8 -*-
"""
seisresp: Seismic instrument transfer functions
===============================================

seisresp computes the frequency-domain transfer function of a seismic
sensor/digitizer chain from several flavours of response metadata (NDC style
stage files, SAC pole-zero files and SEED RESP files) and derives from it an
inverse (deconvolution) transfer function usable to remove the instrument
from a recorded waveform.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
__version__ = '0.1.0'

from seisresp.core.util.resp_types import (  # NOQA
    SeisRespException, FatalResponseError, RecoverableResponseError,
    NDCParseError, ResponseConfigurationError, UnsupportedResponseType,
    ResponseUnitsError)


__all__ = ["__version__", "SeisRespException", "FatalResponseError",
           "RecoverableResponseError", "NDCParseError",
           "ResponseConfigurationError", "UnsupportedResponseType",
           "ResponseUnitsError"]
