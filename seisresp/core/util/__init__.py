# -*- coding: utf-8 -*-
"""
Various utilities for seisresp

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from seisresp.core.util.base import read_text_lines  # NOQA
from seisresp.core.util.resp_types import (  # NOQA
    CalibrationWarning, FatalResponseError, NDCParseError,
    RecoverableResponseError, ResponseConfigurationError, ResponseUnitsError,
    SeisRespException, UnsupportedResponseType)
