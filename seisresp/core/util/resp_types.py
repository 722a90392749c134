# -*- coding: utf-8 -*-
"""
Exception hierarchy of seisresp.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""


class SeisRespException(Exception):
    pass


class FatalResponseError(SeisRespException):
    """
    Base class of all faults that abort a transfer function computation.
    """
    pass


class RecoverableResponseError(SeisRespException):
    """
    Base class of faults the dispatcher may log and continue past.
    """
    pass


class NDCParseError(FatalResponseError, ValueError):
    """
    Malformed or missing tokens in NDC stage text.
    """
    pass


class ResponseConfigurationError(FatalResponseError, ValueError):
    """
    Structurally inconsistent input (length mismatches, degenerate
    amplitude ranges, missing predecessor state).
    """
    pass


class UnsupportedResponseType(FatalResponseError, NotImplementedError):
    """
    Raised for a response type no producer can handle.

    :type response_type: str
    :param response_type: The offending response type name.
    """
    def __init__(self, response_type, msg=None):
        self.response_type = response_type
        if msg is None:
            msg = "Response type %s not supported!" % response_type
        super(UnsupportedResponseType, self).__init__(msg)


class ResponseUnitsError(RecoverableResponseError, ValueError):
    """
    Requested units cannot be reached from the current units.
    """
    def __init__(self, msg, requested=None, current=None):
        self.requested = requested
        self.current = current
        super(ResponseUnitsError, self).__init__(msg)


class CalibrationWarning(UserWarning):
    """
    Calibration information could not be applied as declared.
    """
    pass


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
