# -*- coding: utf-8 -*-
"""
Base utilities for seisresp.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import os
from pathlib import PurePath


def read_text_lines(filename_or_buffer):
    """
    Return all lines of a text file without their line terminators.

    :type filename_or_buffer: str, :class:`pathlib.PurePath` or file-like
    :param filename_or_buffer: Name of the file or an open text/bytes buffer.
    :rtype: list of str
    """
    if isinstance(filename_or_buffer, (str, PurePath)):
        with open(os.fspath(filename_or_buffer), 'rt') as fh:
            text = fh.read()
    else:
        text = filename_or_buffer.read()
        if isinstance(text, bytes):
            text = text.decode()
    return text.splitlines()
