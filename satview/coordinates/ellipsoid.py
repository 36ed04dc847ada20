# Copyright European Space Agency, 2013

"""
This module defines the reference ellipsoid of revolution used by all
geodetic conversions of the :mod:`satview.coordinates` package.
"""

from collections import namedtuple

import numpy as np
from geographiclib.constants import Constants

from satview.errors import InvalidParameter

_EllipsoidBase = namedtuple('_EllipsoidBase', ['a', 'f', 'b', 'e2', 'el2'])

class Ellipsoid(_EllipsoidBase):
    """
    Ellipsoid of revolution, defined by its semi-major axis `a` in meters
    and its flattening `f`.

    The semi-minor axis `b`, the eccentricity squared `e2` and the
    second eccentricity squared `el2` are derived once on construction.
    Instances are immutable and compare/hash by value.

    :raise InvalidParameter: if `f` is not in [0,1)
    """
    __slots__ = ()

    def __new__(cls, a, f):
        a, f = float(a), float(f)
        if not 0 <= f < 1:
            raise InvalidParameter('The flattening must be in [0,1), got ' + str(f))
        if not a > 0:
            raise InvalidParameter('The semi-major axis must be positive, got ' + str(a))
        b = a * (1 - f)
        e2 = f * (2 - f)
        el2 = e2 / (1 - e2)
        return _EllipsoidBase.__new__(cls, a, f, b, e2, el2)

    def __getnewargs__(self):
        return (self.a, self.f)

    def __repr__(self):
        return 'Ellipsoid(a={}, f={})'.format(self.a, self.f)

    def offset(self, h):
        """
        Return the axes (a+h, b+h) of the ellipsoid inflated by the height `h`.

        Note that the inflated surface is not an ellipsoid of constant geodetic
        height, but it is the one used for intersecting pointing rays with targets
        above the surface.
        """
        return self.a + h, self.b + h

    def isclose(self, other, rtol=1e-12, atol=0):
        return bool(np.allclose(self, other, rtol=rtol, atol=atol))

WGS84 = Ellipsoid(Constants.WGS84_a, Constants.WGS84_f)

wgs84A = WGS84.a
wgs84B = WGS84.b
