#! /usr/bin/env python
# -*- coding: utf-8 -*-
"""
seisresp - Seismic instrument transfer functions for Python.

seisresp computes the frequency domain transfer function of a seismic
sensor and digitizer chain from NDC stage files, SAC pole-zero files and
SEED RESP files, converts it between displacement, velocity and
acceleration and derives inverse transfer functions used to remove the
instrument response from recorded waveforms.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import inspect
import os
import re
import sys

from setuptools import find_packages, setup


# The minimum python version which can be used to run seisresp
MIN_PYTHON_VERSION = (3, 8)

# Fail fast if the user is on an unsupported version of python.
if sys.version_info < MIN_PYTHON_VERSION:
    msg = ("seisresp requires python version >= {}".format(
        MIN_PYTHON_VERSION) +
        " you are using python version {}".format(sys.version_info))
    print(msg, file=sys.stderr)
    sys.exit(1)

# Directory of the current file in the (hopefully) most reliable way
# possible
SETUP_DIRECTORY = os.path.dirname(os.path.abspath(inspect.getfile(
    inspect.currentframe())))

DOCSTRING = __doc__.split("\n")

# Hard dependencies needed to install/run seisresp.
INSTALL_REQUIRES = [
    'numpy>=1.20',
    'scipy>=1.7',
    'matplotlib>=3.3',
    'obspy>=1.3',
]
# Extra dependencies
EXTRAS_REQUIRES = {
    'tests': [
        'pytest',
    ],
}
EXTRAS_REQUIRES['all'] = [dep for depl in EXTRAS_REQUIRES.values()
                          for dep in depl]

# package specific settings
KEYWORDS = [
    'deconvolution', 'evalresp', 'FIR', 'instrument correction',
    'instrument response', 'NDC', 'poles and zeros', 'RESP',
    'response file', 'SAC', 'SEED', 'seismology', 'seismogram', 'taper',
    'transfer function']


def get_version():
    """
    Read the version string from the package without importing it.
    """
    filename = os.path.join(SETUP_DIRECTORY, "seisresp", "__init__.py")
    with open(filename, "rt") as fh:
        match = re.search(r"^__version__ = ['\"]([^'\"]+)['\"]", fh.read(),
                          re.MULTILINE)
    if match is None:
        msg = "Unable to find version string in %s" % filename
        raise RuntimeError(msg)
    return match.group(1)


def setup_package():
    setup(
        name='seisresp',
        version=get_version(),
        description=DOCSTRING[1],
        long_description="\n".join(DOCSTRING[3:]),
        author='The SeisResp Development Team',
        license='GNU Lesser General Public License, Version 3 (LGPLv3)',
        platforms='OS Independent',
        classifiers=[
            'Development Status :: 4 - Beta',
            'Intended Audience :: Science/Research',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: '
                'GNU Lesser General Public License v3 (LGPLv3)',
            'Operating System :: OS Independent',
            'Programming Language :: Python',
            'Programming Language :: Python :: 3',
            'Topic :: Scientific/Engineering',
            'Topic :: Scientific/Engineering :: Physics'],
        keywords=KEYWORDS,
        packages=find_packages(include=['seisresp', 'seisresp.*']),
        package_data={'': ['tests/data/*']},
        include_package_data=True,
        python_requires='>=%s.%s' % MIN_PYTHON_VERSION,
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRES,
        zip_safe=False,
    )


if __name__ == '__main__':
    setup_package()
