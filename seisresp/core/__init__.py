# -*- coding: utf-8 -*-
"""
seisresp.core - Data model of seisresp
======================================
Units, response metadata, channel identities and frequency limits shared
by the numerical kernels in :mod:`seisresp.signal` and the dispatcher in
:mod:`seisresp.processing`.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
from seisresp.core.freqlimits import (  # NOQA
    FreqLimits, create_multiband_freq_limits)
from seisresp.core.metadata import (  # NOQA
    ChannelIdentity, ChannelMatchPolicy, ResponseMetadata,
    ResponseMetadataExtension, ResponseType, get_response_type, is_ndc_type)
from seisresp.core.units import (  # NOQA
    ResponseUnits, UnitsStatus, Quantity, Unit, get_unit, UNSPECIFIED_UNITS)
from seisresp.core.tuning import TuningParameters  # NOQA
