# Copyright European Space Agency, 2013

"""
This module contains functions for solving geodesic problems on the
reference ellipsoid using the `geographiclib` implementation of Karney's
algorithms.

Contrary to the rest of the :mod:`satview.coordinates` package, the functions
in this module use degrees, as does geographiclib.
"""

import logging
from functools import lru_cache

import numpy as np
from geographiclib.geodesic import Geodesic

from satview.coordinates.ellipsoid import WGS84

@lru_cache(maxsize=16)
def _geodesic(ellipsoid):
    if ellipsoid == WGS84:
        return Geodesic.WGS84
    logging.debug('Creating geodesic solver for ' + repr(ellipsoid))
    return Geodesic(ellipsoid.a, ellipsoid.f)

def geodesicInverse(lat1, lon1, lat2, lon2, ellipsoid=WGS84):
    """
    Solve the inverse geodesic problem.

    If either point is at a pole, the azimuth is defined by keeping the
    longitude fixed, writing lat = 90 +/- eps, and taking the limit as eps -> 0+.

    :param lat1,lon1: point 1 in degrees, lat in [-90,90]
    :param lat2,lon2: point 2 in degrees, lat in [-90,90]
    :param Ellipsoid ellipsoid: reference ellipsoid
    :rtype: tuple (distance, azimuth1, azimuth2)
    :return: distance in meters, azimuths at point 1 and (forward) at point 2 in degrees
    """
    data = _geodesic(ellipsoid).Inverse(lat1, lon1, lat2, lon2,
                                        Geodesic.DISTANCE | Geodesic.AZIMUTH)
    return data['s12'], data['azi1'], data['azi2']

def geodesicInverseLLA(lla1, lla2, ellipsoid=WGS84):
    """
    As :func:`geodesicInverse` but takes two :class:`~satview.coordinates.points.LLA`
    (in radians); the altitudes are ignored.
    """
    lat1, lon1 = lla1.degrees
    lat2, lon2 = lla2.degrees
    return geodesicInverse(lat1, lon1, lat2, lon2, ellipsoid)

def distance(lat1, lon1, lat2, lon2, ellipsoid=WGS84):
    """
    Return the shortest distance in meters between two locations given in degrees.
    """
    data = _geodesic(ellipsoid).Inverse(lat1, lon1, lat2, lon2, Geodesic.DISTANCE)
    return data['s12']

def course(lat1, lon1, lat2, lon2, ellipsoid=WGS84):
    """
    Return the course/azimuth in degrees when travelling from location 1 to location 2.
    """
    data = _geodesic(ellipsoid).Inverse(lat1, lon1, lat2, lon2, Geodesic.AZIMUTH)
    return data['azi1']

def destination(lat, lon, azimuth, distance, ellipsoid=WGS84):
    """
    Return the location when starting at (`lat`, `lon`) and
    travelling in direction `azimuth` for `distance` meters.

    :param lat,lon,azimuth: in degrees
    :param distance: in meters
    :rtype: tuple (lat, lon) in degrees
    """
    data = _geodesic(ellipsoid).Direct(lat, lon, azimuth, distance,
                                       Geodesic.LATITUDE | Geodesic.LONGITUDE)
    return data['lat2'], data['lon2']

def line(lat1, lon1, lat2, lon2, resolution=1000, ellipsoid=WGS84):
    """
    Return points on the geodesic between two locations in the given resolution.
    If the distance between the two locations is smaller than
    the requested resolution, then the line points consist only
    of the unchanged start and end locations.

    :param resolution: in meters
    :rtype: ndarray of shape (n, 2) with [lat,lon] order in degrees
    """
    geod = _geodesic(ellipsoid)
    data = geod.Inverse(lat1, lon1, lat2, lon2, Geodesic.AZIMUTH | Geodesic.DISTANCE)
    d = data['s12']
    num = int(d//resolution)
    if num < 2:
        logging.warning('Geodesic line has less than two points at ' + str(resolution) + 'm resolution ' +
                        'for a line length of ' + str(d) + 'm. The input points are returned as-is.')
        return np.array([[lat1, lon1], [lat2, lon2]])

    geodLine = geod.Line(lat1, lon1, data['azi1'],
                         Geodesic.LATITUDE | Geodesic.LONGITUDE | Geodesic.DISTANCE_IN)
    latLons = []
    for dStartToPoint in np.linspace(0, d, num):
        pos = geodLine.Position(dStartToPoint, Geodesic.LATITUDE | Geodesic.LONGITUDE)
        latLons.append([pos['lat2'], pos['lon2']])
    return np.array(latLons)
