# Copyright European Space Agency, 2013

"""
This module contains the closed-form conversions between geodetic and
Earth Centered, Earth Fixed (ECEF) coordinates, the conversions between
local cartesian and spherical (elevation, range, azimuth) coordinates,
and the rotation matrices used to align ECEF with the topocentric and
satellite-view reference frames.

All functions accept scalars or arrays and use radians and meters.
Formulas follow the EPSG guidance note 7-2.
"""

from math import sin, cos, pi

import numpy as np

from satview.coordinates.ellipsoid import WGS84
from satview.errors import InvalidParameter

# cos(lat) below which the altitude is computed with the polar formula (~1 deg from the poles)
_POLE_COS_LAT = sin(np.deg2rad(1))

def geodetic2Ecef(lat, lon, h, ellipsoid=WGS84):
    """
    Converts geodetic to Earth Centered, Earth Fixed coordinates.

    :param lat: latitude(s) in radians
    :param lon: longitude(s) in radians
    :param h: height(s) above the ellipsoid in meters
    :param Ellipsoid ellipsoid: reference ellipsoid
    :rtype: tuple (x,y,z) in meters
    """
    lat, lon, h = np.asarray(lat), np.asarray(lon), np.asarray(h)
    a, b, e2 = ellipsoid.a, ellipsoid.b, ellipsoid.e2
    latSin = np.sin(lat)
    latCos = np.cos(lat)
    n = a / np.sqrt(1 - e2*latSin**2) # radius of curvature in the prime vertical
    nh = n+h
    x = nh*latCos*np.cos(lon)
    y = nh*latCos*np.sin(lon)
    z = ((b/a)**2*n + h)*latSin
    return x,y,z

def ecef2Geodetic(x, y, z, ellipsoid=WGS84):
    """
    Convert ECEF to geodetic coordinates.

    This function uses the non-iterative formulation based on the
    parametric latitude (u-blox AG, Datum Transformations of GPS Positions, 1999).
    Near the poles (within ~1 degree) the altitude is computed from the z
    coordinate to avoid the singularity of 1/cos(lat).

    The accuracy is sub-millimeter for points near the earth surface.

    :param x,y,z: ECEF coordinates in meters
    :param Ellipsoid ellipsoid: reference ellipsoid
    :rtype: tuple (lat,lon,h) with lat,lon in radians and h in meters
    """
    x, y, z = np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64), np.asarray(z, dtype=np.float64)
    a, b, e2, el2 = ellipsoid.a, ellipsoid.b, ellipsoid.e2, ellipsoid.el2

    p = np.hypot(x, y)
    theta = np.arctan2(z*a, p*b)
    thetaSin = np.sin(theta)
    thetaCos = np.cos(theta)

    lon = np.arctan2(y, x)
    lat = np.arctan2(z + el2*b*thetaSin**3, p - e2*a*thetaCos**3)

    latSin = np.sin(lat)
    latCos = np.cos(lat)
    n = a / np.sqrt(1 - e2*latSin**2)

    nearPole = np.abs(latCos) < _POLE_COS_LAT
    with np.errstate(divide='ignore', invalid='ignore'):
        h = np.where(nearPole, z/latSin - n*(1 - e2), p/latCos - n)

    if h.ndim == 0:
        return lat[()], lon[()], h[()]
    return lat, lon, h

def enu2Era(x, y, z):
    """
    Convert local cartesian coordinates to spherical (elevation, range, azimuth)
    coordinates. The elevation is measured from the x-y plane and the azimuth
    from the x axis towards the y axis.

    A vector of zero length has elevation pi/2 and azimuth 0.

    :rtype: tuple (el,r,az) with el,az in radians
    """
    x, y, z = np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64), np.asarray(z, dtype=np.float64)
    r = np.sqrt(x*x + y*y + z*z)
    isZero = r == 0
    with np.errstate(divide='ignore', invalid='ignore'):
        theta = np.where(isZero, 0., np.arccos(np.clip(z/r, -1, 1)))
    phi = np.where(isZero, 0., np.arctan2(y, x))
    el = pi/2 - theta
    if r.ndim == 0:
        return el[()], r[()], phi[()]
    return el, r, phi

def era2Enu(el, r, az):
    """
    Inverse of :func:`enu2Era`.

    :rtype: tuple (x,y,z)
    """
    el, r, az = np.asarray(el), np.asarray(r), np.asarray(az)
    rCosEl = r*np.cos(el)
    x = rCosEl*np.cos(az)
    y = rCosEl*np.sin(az)
    z = r*np.sin(el)
    return x,y,z

def _enuFromEcefMatrix(lat, lon):
    # the latitude enters the first row and the longitude the last two rows
    sinLat, cosLat = sin(lat), cos(lat)
    sinLon, cosLon = sin(lon), cos(lon)
    return np.array([[-sinLat,         cosLat,        0     ],
                     [-sinLon*cosLat, -sinLon*sinLat, cosLon],
                     [ cosLon*cosLat,  cosLon*sinLat, sinLon]])

def _ecefFromUvMatrix(lat, lon):
    # columns are the West, North and nadir unit vectors of the satellite
    sinLat, cosLat = sin(lat), cos(lat)
    sinLon, cosLon = sin(lon), cos(lon)
    return np.array([[ sinLon, -sinLat*cosLon, -cosLat*cosLon],
                     [-cosLon, -sinLat*sinLon, -cosLat*sinLon],
                     [ 0,       cosLat,        -sinLat       ]])

_rotationMatrixFns = {
    'ENUfromECEF': _enuFromEcefMatrix,
    'ECEFfromENU': lambda lat, lon: _enuFromEcefMatrix(lat, lon).T,
    'ECEFfromUV': _ecefFromUvMatrix,
    'UVfromECEF': lambda lat, lon: _ecefFromUvMatrix(lat, lon).T,
    }

ROTATION_KINDS = tuple(_rotationMatrixFns)

def rotationMatrix(kind, lat, lon):
    """
    Return the 3x3 rotation matrix to go from one frame to another for
    an origin located at the given geodetic latitude and longitude.

    Supported kinds:

    - ``ENUfromECEF``: ECEF to the topocentric frame with rows
      ``(-sin(lat), cos(lat), 0)``, ``(-sin(lon)cos(lat), -sin(lon)sin(lat), cos(lon))``
      and ``(cos(lon)cos(lat), cos(lon)sin(lat), sin(lon))``; for an origin on the
      equator at longitude 0 these are the East, North and Up directions
    - ``ECEFfromENU``: inverse of ``ENUfromECEF``
    - ``UVfromECEF``: ECEF to the satellite-view frame whose third axis points to nadir
      (West-North-Down)
    - ``ECEFfromUV``: inverse of ``UVfromECEF``

    As all matrices are orthonormal, the inverse is the transpose.

    :param str kind: one of :data:`ROTATION_KINDS`
    :param lat,lon: in radians
    :rtype: ndarray of shape (3,3)
    :raise InvalidParameter: if the kind is unknown
    """
    try:
        fn = _rotationMatrixFns[kind]
    except KeyError:
        raise InvalidParameter('Unknown rotation kind ' + repr(kind) + ', must be one of ' + str(ROTATION_KINDS))
    return fn(float(lat), float(lon))

__all__ = ['geodetic2Ecef', 'ecef2Geodetic', 'enu2Era', 'era2Enu', 'rotationMatrix', 'ROTATION_KINDS']
