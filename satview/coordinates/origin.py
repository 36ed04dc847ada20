# Copyright European Space Agency, 2013

"""
Transformations between reference frames sharing an origin and a rotation.

An origin transformation holds the ECEF position of an origin (a ground
observer or a satellite), the rotation matrix aligning ECEF with the local
frame at that origin, and the reference ellipsoid. Transformations come in
pairs created by :func:`makePairedTransforms`; :meth:`Transform.inverse`
returns the paired transformation which shares the same origin and ellipsoid
and uses the transposed rotation matrix.

Available transformations::

    ENUfromECEF  <->  ECEFfromENU    (topocentric East-North-Up)
    ERAfromENU   <->  ENUfromERA     (spherical, no origin)
    ERAfromECEF  <->  ECEFfromERA    (look angles from a ground observer)
    UVfromECEF   <->  ECEFfromUV     (satellite view)
    UVfromLLA    <->  LLAfromUV      (satellite view of geodetic points)

Transformations can be composed with ``*``: ``(t2 * t1)(x) == t2(t1(x))``.
"""

import numpy as np

from satview.coordinates.ellipsoid import WGS84
from satview.coordinates.points import LLA, ERA, isValid, invalidERA, invalidLLA,\
    invalidUV, invalidECEF
from satview.coordinates.transform import geodetic2Ecef, ecef2Geodetic, enu2Era,\
    era2Enu, rotationMatrix
from satview.coordinates.intersection import earthIntersection, isBlockedByEarth,\
    BLOCKAGE_TOLERANCE
from satview.errors import InvalidParameter
from satview.util.decorators import lazy_property, inherit_docs

class Transform(object):
    """
    Base class of all transformations.
    """
    def __call__(self, x):
        """
        Apply the transformation to a single point.
        """
        raise NotImplementedError

    def inverse(self):
        """
        Return the transformation undoing this one.
        """
        raise NotImplementedError

    def __mul__(self, other):
        if not isinstance(other, Transform):
            return NotImplemented
        return ComposedTransform(self, other)

class ComposedTransform(Transform):
    """
    Applies `inner` first and then `outer`.
    """
    def __init__(self, outer, inner):
        self.outer = outer
        self.inner = inner

    def __call__(self, x):
        return self.outer(self.inner(x))

    def inverse(self):
        return ComposedTransform(self.inner.inverse(), self.outer.inverse())

    def __repr__(self):
        return repr(self.outer) + ' * ' + repr(self.inner)

@inherit_docs
class ERAfromENU(Transform):
    """
    Cartesian East-North-Up to spherical elevation, range and azimuth of a single vector.
    Targets below the horizon give :data:`~satview.coordinates.points.invalidERA`.
    """
    def __call__(self, enu):
        enu = np.asarray(enu, dtype=np.float64)
        if enu.shape != (3,):
            raise InvalidParameter('Only a single x,y,z vector can be converted to ERA, got shape ' +
                                   str(enu.shape))
        if not isValid(enu):
            return invalidERA
        el, r, az = enu2Era(*enu)
        if el < 0:
            return invalidERA
        return ERA(el, r, az)

    def inverse(self):
        return ENUfromERA()

    def __repr__(self):
        return 'ERAfromENU()'

@inherit_docs
class ENUfromERA(Transform):
    """
    Spherical elevation, range and azimuth to cartesian East-North-Up.
    """
    def __call__(self, era):
        if not isValid(era):
            return invalidECEF()
        return np.array(era2Enu(*era))

    def inverse(self):
        return ERAfromENU()

    def __repr__(self):
        return 'ENUfromERA()'

class OriginTransform(Transform):
    """
    A transformation defined by an origin, a rotation and an ellipsoid.

    The origin can be given as :class:`~satview.coordinates.points.LLA` or as
    ECEF vector in meters.

    :param origin: LLA or x,y,z vector
    :param Ellipsoid ellipsoid: reference ellipsoid
    """
    #: kind passed to :func:`~satview.coordinates.transform.rotationMatrix`
    rotationKind = None
    #: the paired class returned by :meth:`inverse`
    inverseClass = None

    def __init__(self, origin, ellipsoid=WGS84):
        self.ellipsoid = ellipsoid
        if isinstance(origin, LLA):
            self.__dict__['_lazy_lla'] = origin
            self.origin = np.array(geodetic2Ecef(origin.lat, origin.lon, origin.alt, ellipsoid),
                                   dtype=np.float64)
        else:
            origin = np.array(origin, dtype=np.float64)
            if origin.shape != (3,):
                raise InvalidParameter('The origin must be an LLA or a x,y,z vector')
            if not np.any(origin):
                raise InvalidParameter('The origin must not be the center of the earth')
            self.origin = origin
        self.R = rotationMatrix(self.rotationKind, self.lla.lat, self.lla.lon)
        self.origin.setflags(write=False)
        self.R.setflags(write=False)

    @lazy_property
    def lla(self):
        """ Geodetic coordinates of the origin. """
        return LLA(*ecef2Geodetic(*self.origin, ellipsoid=self.ellipsoid))

    def inverse(self):
        inv = self.inverseClass.__new__(self.inverseClass)
        inv.ellipsoid = self.ellipsoid
        inv.origin = self.origin
        inv.__dict__['_lazy_lla'] = self.lla
        inv.R = self.R.T
        return inv

    def __repr__(self):
        return '{}(origin={!r}, ellipsoid={!r})'.format(type(self).__name__, self.lla, self.ellipsoid)

def makePairedTransforms(forwardName, reverseName, rotationKind, reverseRotationKind,
                         forwardFn, reverseFn, forwardDoc=None, reverseDoc=None):
    """
    Create a pair of :class:`OriginTransform` subclasses which are each other's inverse.

    :param str forwardName,reverseName: class names
    :param str rotationKind,reverseRotationKind: rotation matrix kinds of both classes
    :param forwardFn,reverseFn: functions ``fn(transform, x)`` implementing ``__call__``
    :rtype: tuple of classes (forward, reverse)
    """
    forward = type(forwardName, (OriginTransform,),
                   {'rotationKind': rotationKind, '__call__': forwardFn, '__doc__': forwardDoc})
    reverse = type(reverseName, (OriginTransform,),
                   {'rotationKind': reverseRotationKind, '__call__': reverseFn, '__doc__': reverseDoc})
    forward.inverseClass = reverse
    reverse.inverseClass = forward
    return inherit_docs(forward), inherit_docs(reverse)

def _enuFromEcef(self, ecef):
    ecef = np.asarray(ecef, dtype=np.float64)
    return (ecef - self.origin).dot(self.R.T)

def _ecefFromEnu(self, enu):
    enu = np.asarray(enu, dtype=np.float64)
    return enu.dot(self.R.T) + self.origin

ENUfromECEF, ECEFfromENU = makePairedTransforms(
    'ENUfromECEF', 'ECEFfromENU', 'ENUfromECEF', 'ECEFfromENU',
    _enuFromEcef, _ecefFromEnu,
    """
    ECEF to topocentric East-North-Up coordinates centered on the origin.
    Accepts a single vector or an array of shape (n,3).
    """,
    """
    Topocentric East-North-Up coordinates centered on the origin to ECEF.
    Accepts a single vector or an array of shape (n,3).
    """)

def _eraFromEcef(self, ecef):
    return ERAfromENU()(_enuFromEcef(self, ecef))

def _ecefFromEra(self, era):
    return _ecefFromEnu(self, ENUfromERA()(era))

ERAfromECEF, ECEFfromERA = makePairedTransforms(
    'ERAfromECEF', 'ECEFfromERA', 'ENUfromECEF', 'ECEFfromENU',
    _eraFromEcef, _ecefFromEra,
    """
    Elevation, range and azimuth of an ECEF target as seen from the origin (observer).
    Accepts a single x,y,z vector.
    Targets below the local horizon give :data:`~satview.coordinates.points.invalidERA`.
    """,
    """
    ECEF position of a target given by its elevation, range and azimuth as seen
    from the origin (observer).
    """)

def _uvFromEcef(self, ecef):
    ecef = np.asarray(ecef, dtype=np.float64)
    if not isValid(ecef) or isBlockedByEarth(self.origin, ecef, self.ellipsoid, BLOCKAGE_TOLERANCE):
        return invalidUV()
    pointing = ecef - self.origin
    dist = np.linalg.norm(pointing)
    if dist == 0:
        return invalidUV()
    uvw = self.R.dot(pointing / dist)
    if uvw[2] <= 0:
        # behind the sensor plane
        return invalidUV()
    return uvw[:2]

def _ecefFromUv(self, uv, h=0):
    u, v = np.asarray(uv, dtype=np.float64)
    if not isValid((u, v)):
        return invalidECEF()
    uv2 = u*u + v*v
    if uv2 > 1:
        raise InvalidParameter('u^2 + v^2 must not exceed 1, got ' + str(uv2))
    pointing = self.R.dot([u, v, np.sqrt(1 - uv2)])
    return earthIntersection(pointing, self.origin, self.ellipsoid, h)

UVfromECEF, ECEFfromUV = makePairedTransforms(
    'UVfromECEF', 'ECEFfromUV', 'UVfromECEF', 'ECEFfromUV',
    _uvFromEcef, _ecefFromUv,
    """
    UV pointing coordinates of an ECEF target as seen from the origin (satellite).
    The w axis of the satellite frame points to nadir.

    Targets hidden by the earth or behind the sensor plane give NaN.
    """,
    """
    ECEF position of the point on the (optionally inflated) ellipsoid seen by
    the origin (satellite) in the given UV direction.

    Call as ``t(uv, h)`` where `h` is the target height above the ellipsoid in meters
    (default 0). Pointings missing the earth give NaN.

    :raise InvalidParameter: if u^2 + v^2 > 1
    """)

def _uvFromLla(self, lla):
    if not isValid(lla):
        return invalidUV()
    ecef = np.array(geodetic2Ecef(lla.lat, lla.lon, lla.alt, self.ellipsoid))
    return _uvFromEcef(self, ecef)

def _llaFromUv(self, uv, h=0):
    ecef = _ecefFromUv(self, uv, h)
    if not isValid(ecef):
        return invalidLLA
    return LLA(*ecef2Geodetic(*ecef, ellipsoid=self.ellipsoid))

UVfromLLA, LLAfromUV = makePairedTransforms(
    'UVfromLLA', 'LLAfromUV', 'UVfromECEF', 'ECEFfromUV',
    _uvFromLla, _llaFromUv,
    """
    UV pointing coordinates of a geodetic target as seen from the origin (satellite).
    Targets hidden by the earth or behind the sensor plane give NaN.
    """,
    """
    Geodetic coordinates of the point seen by the origin (satellite) in the given
    UV direction.

    Call as ``t(uv, h)`` where `h` is the height above the ellipsoid of the surface to
    intersect, in meters (default 0). Pointings missing that surface give
    :data:`~satview.coordinates.points.invalidLLA`.

    :raise InvalidParameter: if u^2 + v^2 > 1
    """)

__all__ = ['Transform', 'ComposedTransform', 'OriginTransform', 'makePairedTransforms',
           'ERAfromENU', 'ENUfromERA',
           'ENUfromECEF', 'ECEFfromENU', 'ERAfromECEF', 'ECEFfromERA',
           'UVfromECEF', 'ECEFfromUV', 'UVfromLLA', 'LLAfromUV']
