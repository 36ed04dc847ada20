# Copyright European Space Agency, 2013

"""
Immutable point types used by the origin transformations.

All angles are stored in radians and all distances in meters.
The `fromDegrees` and `fromQuantities` constructors accept degrees or
:mod:`astropy.units` quantities for convenience.

Points which cannot be computed, for example the ground point of a pointing
that misses the earth, are represented by NaN-valued instances
(:data:`invalidLLA`, :data:`invalidERA`) and can be tested with :func:`isValid`.
"""

from collections import namedtuple
from math import pi, isnan

import numpy as np
import astropy.units as u

from satview.errors import InvalidParameter

def wrapToPi(angle):
    """
    Wrap angles in radians to (-pi,pi] by removing the nearest
    multiple of 2*pi.
    """
    angle = np.asarray(angle, dtype=np.float64)
    wrapped = angle - 2*pi*np.round(angle/(2*pi))
    return np.where(wrapped <= -pi, wrapped + 2*pi, wrapped)[()]

def _toValue(q, unit):
    if isinstance(q, u.Quantity):
        return q.to_value(unit)
    return q

_LLABase = namedtuple('_LLABase', ['lat', 'lon', 'alt'])

class LLA(_LLABase):
    """
    Geodetic coordinates: latitude and longitude in radians and
    altitude in meters above the reference ellipsoid.

    The longitude is wrapped to (-pi,pi].

    :raise InvalidParameter: if the latitude is outside [-pi/2,pi/2]
    """
    __slots__ = ()

    def __new__(cls, lat, lon, alt=0.0):
        lat, lon, alt = float(lat), float(lon), float(alt)
        if not (isnan(lat) or -pi/2 <= lat <= pi/2):
            raise InvalidParameter('Latitude must be in [-pi/2,pi/2], got ' + str(lat))
        if not isnan(lon):
            lon = float(wrapToPi(lon))
        return _LLABase.__new__(cls, lat, lon, alt)

    @classmethod
    def fromDegrees(cls, lat, lon, alt=0.0):
        """
        :param lat,lon: in degrees
        :param alt: in meters
        """
        return cls(np.deg2rad(lat), np.deg2rad(lon), alt)

    @classmethod
    def fromQuantities(cls, lat, lon, alt=0*u.m):
        """
        Create an LLA from astropy quantities, e.g. ``LLA.fromQuantities(10*u.deg, 20*u.deg, 600*u.km)``.
        Plain numbers are interpreted as degrees (lat, lon) and meters (alt).
        """
        lat = lat if isinstance(lat, u.Quantity) else lat*u.deg
        lon = lon if isinstance(lon, u.Quantity) else lon*u.deg
        return cls(lat.to_value(u.rad), lon.to_value(u.rad), _toValue(alt, u.m))

    @property
    def degrees(self):
        """ (lat, lon) in degrees """
        return np.rad2deg(self.lat), np.rad2deg(self.lon)

    def isclose(self, other, rtol=1e-9, atol=1e-9):
        return bool(np.allclose(self, other, rtol=rtol, atol=atol))

    def __repr__(self):
        lat, lon = self.degrees
        return 'LLA(lat={:.6f}deg, lon={:.6f}deg, alt={:.3f}m)'.format(lat, lon, self.alt)

_ERABase = namedtuple('_ERABase', ['el', 'r', 'az'])

class ERA(_ERABase):
    """
    Elevation, range and azimuth of a target as seen from an observer.

    The elevation (radians) is measured from the local horizontal plane and
    must be in [0,pi/2]. The range is in meters and must be non-negative.
    The azimuth (radians) is the angle from the first towards the second axis
    of the topocentric frame and is wrapped to (-pi,pi].

    :raise InvalidParameter: if elevation or range are outside their domain
    """
    __slots__ = ()

    def __new__(cls, el, r, az):
        el, r, az = float(el), float(r), float(az)
        if not (isnan(el) or 0 <= el <= pi/2):
            raise InvalidParameter('Elevation must be in [0,pi/2], got ' + str(el))
        if not (isnan(r) or r >= 0):
            raise InvalidParameter('Range must be non-negative, got ' + str(r))
        if not isnan(az):
            az = float(wrapToPi(az))
        return _ERABase.__new__(cls, el, r, az)

    @classmethod
    def fromDegrees(cls, el, r, az):
        """
        :param el,az: in degrees
        :param r: in meters
        """
        return cls(np.deg2rad(el), r, np.deg2rad(az))

    @classmethod
    def fromQuantities(cls, el, r, az):
        """
        As :meth:`fromDegrees` but also accepts astropy quantities for each argument.
        """
        el = el if isinstance(el, u.Quantity) else el*u.deg
        az = az if isinstance(az, u.Quantity) else az*u.deg
        return cls(el.to_value(u.rad), _toValue(r, u.m), az.to_value(u.rad))

    @property
    def degrees(self):
        """ (el, az) in degrees """
        return np.rad2deg(self.el), np.rad2deg(self.az)

    def isclose(self, other, rtol=1e-9, atol=1e-9):
        return bool(np.allclose(self, other, rtol=rtol, atol=atol))

    def __repr__(self):
        el, az = self.degrees
        return 'ERA(el={:.6f}deg, r={:.3f}m, az={:.6f}deg)'.format(el, self.r, az)

invalidLLA = LLA(np.nan, np.nan, np.nan)
invalidERA = ERA(np.nan, np.nan, np.nan)

def invalidUV():
    return np.array([np.nan, np.nan])

def invalidECEF():
    return np.array([np.nan, np.nan, np.nan])

def isValid(point):
    """
    Return whether the given point (LLA, ERA, ECEF or UV vector) holds an
    actual solution, i.e. none of its coordinates is NaN.
    """
    return not np.any(np.isnan(np.asarray(point, dtype=np.float64)))
