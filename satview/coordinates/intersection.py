# Copyright European Space Agency, 2013

"""
Intersection of pointing rays with the earth ellipsoid.

The ellipsoid of revolution is centered at (0,0,0) with equatorial axis `a`
and polar axis `b`. A ray starting at `origin` with direction `d` hits it
for the values of `t` solving the quadratic equation
``alpha*t^2 + beta*t + gamma = 0`` obtained by inserting ``origin + t*d``
into ``(b*x)^2 + (b*y)^2 + (a*z)^2 = (a*b)^2``.

Missed intersections are not errors: the returned points are NaN.
"""

import numpy as np
from numexpr import evaluate as ne

from satview.coordinates.ellipsoid import WGS84

# targets closer than this to the first earth intersection (in meters) are considered visible
BLOCKAGE_TOLERANCE = 1e-3

def earthIntersectionCoefficients(direction, origin, a, b):
    """
    Return the coefficients (alpha, beta, gamma) and the discriminant
    of the ray-ellipsoid quadratic equation.

    :param direction: x,y,z vector or array of vectors of shape (n,3)
    :param origin: x,y,z vector
    :param a: equatorial axis of the ellipsoid of revolution
    :param b: polar axis of the ellipsoid of revolution
    :rtype: tuple (alpha, beta, gamma, delta), scalars or arrays of shape (n,)
    """
    direction = np.asarray(direction, dtype=np.float64)
    origin = np.asarray(origin, dtype=np.float64)
    coeffs = np.array([b, b, a], dtype=np.float64)

    directionScaled = direction * coeffs
    originScaled = origin * coeffs

    alpha = np.einsum('...i,...i', directionScaled, directionScaled)
    beta = 2*np.einsum('...i,...i', directionScaled, originScaled)
    gamma = np.dot(originScaled, originScaled) - (a*b)**2
    delta = beta**2 - 4*alpha*gamma
    return alpha, beta, gamma, delta

def _closestDistance(t1, t2):
    """
    Return the distances (either t1 or t2) whose absolute values are smallest.
    """
    with np.errstate(invalid='ignore'):
        tMin = np.where(np.abs(t1) < np.abs(t2), t1, t2)
    return tMin

def _earthIntersectionScalar(direction, origin, a, b):
    alpha, beta, _, delta = earthIntersectionCoefficients(direction, origin, a, b)
    if delta < 0:
        return np.array([np.nan, np.nan, np.nan])
    root = np.sqrt(delta)
    t1 = (-beta - root) / (2*alpha)
    t2 = (-beta + root) / (2*alpha)
    t = t1 if abs(t1) < abs(t2) else t2
    return origin + t*direction

def _earthIntersectionArray(directions, origin, a, b):
    alpha, beta, _, delta = earthIntersectionCoefficients(directions, origin, a, b)
    # negative discriminants (= no intersection) produce NaN
    root = ne('where(delta >= 0, sqrt(abs(delta)), nan)', local_dict={'delta': delta, 'nan': np.nan})
    t1 = ne('(-beta - root) / (2*alpha)')
    t2 = ne('(-beta + root) / (2*alpha)')
    t = _closestDistance(t1, t2)
    return origin + t[:,None]*directions

def earthIntersection(direction, origin, ellipsoid=WGS84, h=0):
    """
    Return the intersection points of pointing rays with the ellipsoid.

    Of the two solutions, the one closest to `origin` is chosen. If the origin
    is outside of the ellipsoid and the ray points at it, this is the near
    intersection in front of the origin.

    :param direction: unit x,y,z vector or array of unit vectors of shape (n,3)
    :param origin: x,y,z vector of the ray origin, e.g. a satellite position
    :param Ellipsoid ellipsoid: reference ellipsoid
    :param h: height offset applied to both axes of the ellipsoid, in meters
    :rtype: vector or array of vectors, NaN where the ray misses the ellipsoid
    """
    direction = np.asarray(direction, dtype=np.float64)
    origin = np.asarray(origin, dtype=np.float64)
    a, b = ellipsoid.offset(h)
    if direction.ndim == 1:
        return _earthIntersectionScalar(direction, origin, a, b)
    return _earthIntersectionArray(direction, origin, a, b)

def isBlockedByEarth(origin, target, ellipsoid=WGS84, tolerance=BLOCKAGE_TOLERANCE):
    """
    Return whether the line of sight between `origin` and `target` is blocked
    by the ellipsoid, i.e. the first intersection in the direction of the
    target is closer to `origin` than the target itself.

    :param origin: x,y,z vector, e.g. a satellite position
    :param target: x,y,z vector
    :param tolerance: in meters, for targets located on the ellipsoid surface
    :rtype: bool
    """
    origin = np.asarray(origin, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    pointing = target - origin
    dist = np.linalg.norm(pointing)
    if dist == 0:
        return False
    pointing /= dist
    alpha, beta, _, delta = earthIntersectionCoefficients(pointing, origin, ellipsoid.a, ellipsoid.b)
    if delta <= 0:
        # no intersection or tangent ray
        return False
    root = np.sqrt(delta)
    t1 = (-beta - root) / (2*alpha)
    t2 = (-beta + root) / (2*alpha)
    # an intersection strictly between origin and target hides the target
    return bool((0 < t1 < dist - tolerance) or (0 < t2 < dist - tolerance))
