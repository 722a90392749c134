# -*- coding: utf-8 -*-
"""
Physical units attached to response spectra.

A deliberately small unit table: every unit is described by the exponents of
its base dimensions and its scale relative to SI. This is enough to decide
whether two units describe the same quantity, how far apart they are in
time derivatives and which scalar converts one into the other.

:copyright:
    The SeisResp Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import math

from obspy.core.util.base import ComparingObject
from obspy.core.util.obspy_types import Enum

from seisresp.core.util.resp_types import ResponseUnitsError


BASE_DIMENSIONS = ('length', 'mass', 'time', 'current', 'temperature',
                   'angle', 'counts')

Quantity = Enum(["default", "displacement", "velocity", "acceleration"],
                replace={'def': 'default', 'dis': 'displacement',
                         'vel': 'velocity', 'acc': 'acceleration'})

UnitsStatus = Enum(["undetermined", "quantity_and_units", "forced_value",
                    "unspecified"])


def _dims(length=0, mass=0, time=0, current=0, temperature=0, angle=0,
          counts=0):
    return (length, mass, time, current, temperature, angle, counts)


class Unit(object):
    """
    A unit with dimension exponents and a scale factor to SI.

    >>> meter = get_unit("m")
    >>> velocity = meter / SECOND
    >>> velocity.is_compatible(get_unit("nm/s"))
    True
    >>> print(Unit.scale_factor(get_unit("m/s"), get_unit("nm/s")))
    1000000000.0
    """
    def __init__(self, symbol, dimensions, scale=1.0, description=""):
        self.__dict__['symbol'] = symbol
        self.__dict__['dimensions'] = \
            tuple(dimensions) if dimensions is not None else None
        self.__dict__['scale'] = float(scale)
        self.__dict__['description'] = description

    def __setattr__(self, name, value):
        msg = "Unit objects are immutable"
        raise AttributeError(msg)

    def __eq__(self, other):
        if not isinstance(other, Unit):
            return False
        return (self.symbol == other.symbol and
                self.dimensions == other.dimensions and
                self.scale == other.scale)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.symbol, self.dimensions, self.scale))

    def __str__(self):
        return self.symbol

    def __repr__(self):
        return "Unit(%r)" % self.symbol

    def __mul__(self, other):
        if not self.is_known() or not other.is_known():
            return UNKNOWN
        dims = tuple(a + b for a, b in zip(self.dimensions, other.dimensions))
        return Unit("%s*%s" % (self.symbol, other.symbol), dims,
                    self.scale * other.scale)

    def __truediv__(self, other):
        if not self.is_known() or not other.is_known():
            return UNKNOWN
        dims = tuple(a - b for a, b in zip(self.dimensions, other.dimensions))
        return Unit("%s/%s" % (self.symbol, other.symbol), dims,
                    self.scale / other.scale)

    def is_known(self):
        return self.dimensions is not None

    def is_compatible(self, other):
        """
        Whether both units measure the same physical quantity.
        """
        return (self.is_known() and other.is_known() and
                self.dimensions == other.dimensions)

    @property
    def quantity(self):
        if self.dimensions == _dims(length=1):
            return Quantity.DISPLACEMENT
        elif self.dimensions == _dims(length=1, time=-1):
            return Quantity.VELOCITY
        elif self.dimensions == _dims(length=1, time=-2):
            return Quantity.ACCELERATION
        return Quantity.DEFAULT

    @staticmethod
    def scale_factor(source, target):
        """
        Factor by which a value in ``source`` units must be multiplied to be
        expressed in ``target`` units.
        """
        if not source.is_compatible(target):
            msg = "Units %s and %s are not compatible!" % (source, target)
            raise ResponseUnitsError(msg, requested=target, current=source)
        return source.scale / target.scale


UNKNOWN = Unit("unknown", None, description="Unknown units")
DEFAULT = Unit("default", _dims(), description="Dimensionless default units")
SECOND = Unit("s", _dims(time=1), description="Seconds")

_LENGTH = _dims(length=1)
_VELOCITY = _dims(length=1, time=-1)
_ACCELERATION = _dims(length=1, time=-2)
_PRESSURE = _dims(length=-1, mass=1, time=-2)
_VOLTAGE = _dims(length=2, mass=1, time=-3, current=-1)

_UNIT_TABLE = [
    Unit("pm", _LENGTH, 1e-12, "Picometers"),
    Unit("nm", _LENGTH, 1e-9, "Nanometers"),
    Unit("um", _LENGTH, 1e-6, "Micrometers"),
    Unit("mm", _LENGTH, 1e-3, "Millimeters"),
    Unit("cm", _LENGTH, 1e-2, "Centimeters"),
    Unit("m", _LENGTH, 1.0, "Meters"),
    Unit("nm/s", _VELOCITY, 1e-9, "Nanometers per second"),
    Unit("um/s", _VELOCITY, 1e-6, "Micrometers per second"),
    Unit("mm/s", _VELOCITY, 1e-3, "Millimeters per second"),
    Unit("cm/s", _VELOCITY, 1e-2, "Centimeters per second"),
    Unit("m/s", _VELOCITY, 1.0, "Meters per second"),
    Unit("in/s", _VELOCITY, 0.0254, "Inches per second"),
    Unit("mm/h", _VELOCITY, 1e-3 / 3600.0, "Millimeters per hour"),
    Unit("nm/s^2", _ACCELERATION, 1e-9, "Nanometers per second squared"),
    Unit("um/s^2", _ACCELERATION, 1e-6, "Micrometers per second squared"),
    Unit("mm/s^2", _ACCELERATION, 1e-3, "Millimeters per second squared"),
    Unit("cm/s^2", _ACCELERATION, 1e-2, "Centimeters per second squared"),
    Unit("m/s^2", _ACCELERATION, 1.0, "Meters per second squared"),
    Unit("gal", _ACCELERATION, 1e-2, "Gal"),
    Unit("uPa", _PRESSURE, 1e-6, "Micropascals"),
    Unit("mPa", _PRESSURE, 1e-3, "Millipascals"),
    Unit("Pa", _PRESSURE, 1.0, "Pascals"),
    Unit("hPa", _PRESSURE, 1e2, "Hectopascals"),
    Unit("kPa", _PRESSURE, 1e3, "Kilopascals"),
    Unit("Pa-s", _dims(length=-1, mass=1, time=-1), 1.0, "Pascal seconds"),
    Unit("uV", _VOLTAGE, 1e-6, "Microvolts"),
    Unit("mV", _VOLTAGE, 1e-3, "Millivolts"),
    Unit("V", _VOLTAGE, 1.0, "Volts"),
    Unit("A", _dims(current=1), 1.0, "Amperes"),
    Unit("nT", _dims(mass=1, time=-2, current=-1), 1e-9, "Nanotesla"),
    Unit("T", _dims(mass=1, time=-2, current=-1), 1.0, "Tesla"),
    Unit("urad", _dims(angle=1), 1e-6, "Microradians"),
    Unit("mrad", _dims(angle=1), 1e-3, "Milliradians"),
    Unit("rad", _dims(angle=1), 1.0, "Radians"),
    Unit("deg", _dims(angle=1), math.pi / 180.0, "Degrees"),
    Unit("rad/s", _dims(angle=1, time=-1), 1.0, "Radians per second"),
    Unit("degC", _dims(temperature=1), 1.0, "Degrees Celsius"),
    Unit("ns", _dims(time=1), 1e-9, "Nanoseconds"),
    Unit("ms", _dims(time=1), 1e-3, "Milliseconds"),
    SECOND,
    Unit("counts", _dims(counts=1), 1.0, "Digital counts"),
    Unit("strain", _dims(), 1.0, "Strain"),
    Unit("microstrain", _dims(), 1e-6, "Microstrain"),
    Unit("W/m^2", _dims(mass=1, time=-3), 1.0, "Watts per square meter"),
    DEFAULT,
    UNKNOWN,
]

_UNITS = dict((u.symbol.lower(), u) for u in _UNIT_TABLE)

_ALIASES = {
    'meter': 'm', 'meters': 'm', 'micron': 'um', 'microns': 'um',
    'm/sec': 'm/s', 'mps': 'm/s', 'ips': 'in/s', 'inch/second': 'in/s',
    'in/sec': 'in/s', 'm/s**2': 'm/s^2', 'm/s/s': 'm/s^2',
    'm/sec**2': 'm/s^2', 'mps^2': 'm/s^2', 'nm/s**2': 'nm/s^2',
    'nm/s/s': 'nm/s^2', 'cm/s**2': 'cm/s^2', 'cm/s/s': 'cm/s^2',
    'mm/s**2': 'mm/s^2', 'mm/s/s': 'mm/s^2', 'um/s**2': 'um/s^2',
    'pascal': 'pa', 'pascals': 'pa', 'pa-sec': 'pa-s', 'volts': 'v',
    'volt': 'v', 'count': 'counts', 'du': 'counts',
    'digital counts': 'counts', 'sec': 's', 'seconds': 's',
    'degree': 'deg', 'degrees': 'deg', 'c': 'degc', 'ustrain': 'microstrain',
    'def': 'default',
}


def get_unit(symbol):
    """
    Look up a unit by its symbol.

    Lookup is case insensitive and understands the spellings commonly used
    in SEED and SAC headers (``"M/S"``, ``"M/S**2"``, ``"COUNTS"``...).

    :type symbol: str or :class:`Unit`
    :rtype: :class:`Unit`

    >>> print(get_unit("M/S**2"))
    m/s^2
    """
    if isinstance(symbol, Unit):
        return symbol
    key = symbol.strip().lower()
    key = _ALIASES.get(key, key)
    try:
        return _UNITS[key]
    except KeyError:
        msg = "Unknown units '%s'" % symbol
        raise ResponseUnitsError(msg)


def change_for_differentiation(unit):
    """
    Units of a waveform after differentiation with respect to time.
    """
    unit = get_unit(unit)
    if not unit.is_known():
        return unit
    target = unit / SECOND
    for candidate in _WAVEFORM_UNITS:
        if candidate.dimensions == target.dimensions and \
                candidate.scale == target.scale:
            return candidate
    msg = "No differentiated counterpart for units %s" % unit
    raise ResponseUnitsError(msg)


def change_for_integration(unit):
    """
    Units of a waveform after integration with respect to time.
    """
    unit = get_unit(unit)
    if not unit.is_known():
        return unit
    target = unit * SECOND
    for candidate in _WAVEFORM_UNITS:
        if candidate.dimensions == target.dimensions and \
                candidate.scale == target.scale:
            return candidate
    msg = "No integrated counterpart for units %s" % unit
    raise ResponseUnitsError(msg)


_WAVEFORM_UNITS = [get_unit(_s) for _s in (
    "cm", "cm/s", "cm/s^2", "m", "m/s", "m/s^2", "nm", "nm/s", "nm/s^2")]


class ResponseUnits(ComparingObject):
    """
    Units assigned to a response spectrum together with how they were
    obtained.

    :type units: :class:`Unit` or str
    :param units: Input units of the response (the physical quantity the
        instrument measures).
    :type status: str
    :param status: One of :data:`UnitsStatus`.
    """
    def __init__(self, units=UNKNOWN, status=UnitsStatus.UNDETERMINED):
        self.units = get_unit(units)
        self.status = UnitsStatus[status]

    @property
    def quantity(self):
        return self.units.quantity

    def is_known(self):
        return self.units.is_known()

    def __hash__(self):
        return hash((self.units, self.status))

    def __str__(self):
        return "%s (%s, %s)" % (self.units, self.quantity, self.status)

    def __repr__(self):
        return "ResponseUnits(%r, %r)" % (self.units.symbol, self.status)


UNSPECIFIED_UNITS = ResponseUnits(UNKNOWN, UnitsStatus.UNSPECIFIED)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
