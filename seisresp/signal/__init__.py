# -*- coding: utf-8 -*-
"""
seisresp.signal - Numerical kernels of seisresp
===============================================
Production of forward transfer functions from response files and
construction of inverse transfer functions for instrument correction.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)

Forward transfer functions
--------------------------
Three producers turn a response file into a
:class:`~seisresp.signal.transfer.TransferData` object sampled on the
frequency grid of a zero padded seismogram:

* :class:`~seisresp.signal.ndc.NDCTransfer` for NDC stage files (poles and
  zeros, frequency/amplitude/phase tables and FIR filters).
* :class:`~seisresp.signal.polezero.SACPZTransfer` for SAC pole-zero files.
* :class:`~seisresp.signal.evalresp.EvalrespTransfer` for SEED RESP files.

>>> import io
>>> from seisresp.signal.polezero import read_sacpz, evaluate_pole_zero
>>> pzd = read_sacpz(io.StringIO("ZEROS 1\\nPOLES 1\\n-6.28 0.0\\n"))
>>> data = evaluate_pole_zero(0.5, pzd, 5)
>>> print(abs(data[0]))
0.0

Instrument correction
---------------------
:func:`~seisresp.signal.invsim.build_inverse_transfer_function` divides an
optional target response by the forward response, tapered to a usable
frequency band, and :func:`~seisresp.signal.invsim.remove_response` applies
the result to a seismogram.
"""
from seisresp.signal.invsim import (  # NOQA
    InverseTransferFunction, build_inverse_transfer_function,
    convolve_with_transfer_function, cosine_limits_taper, remove_response)
from seisresp.signal.transfer import TransferData  # NOQA


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
