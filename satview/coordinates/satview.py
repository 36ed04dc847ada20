# Copyright European Space Agency, 2013

"""
The view of a satellite on the earth.

:class:`SatView` bundles the position of a satellite with the reference
ellipsoid and gives access to the transformations between the satellite's
UV pointing coordinates and ground points, and to the look angles of the
satellite from ground observers.
"""

import numpy as np

from satview.coordinates.ellipsoid import WGS84
from satview.coordinates.points import LLA
from satview.coordinates.transform import geodetic2Ecef
from satview.coordinates.origin import UVfromECEF, UVfromLLA, ERAfromECEF
from satview.util.decorators import lazy_property

class SatView(object):
    """
    :param position: satellite position as LLA or ECEF x,y,z vector in meters
    :param Ellipsoid ellipsoid: reference ellipsoid
    """
    def __init__(self, position, ellipsoid=WGS84):
        self.ellipsoid = ellipsoid
        self._uvFromEcef = UVfromECEF(position, ellipsoid)

    @property
    def lla(self):
        """ Geodetic coordinates of the satellite. """
        return self._uvFromEcef.lla

    @property
    def ecef(self):
        """ ECEF coordinates of the satellite in meters. """
        return self._uvFromEcef.origin

    @lazy_property
    def _ecefFromUv(self):
        return self._uvFromEcef.inverse()

    @lazy_property
    def _uvFromLla(self):
        return UVfromLLA(self.lla, self.ellipsoid)

    @lazy_property
    def _llaFromUv(self):
        return self._uvFromLla.inverse()

    def uvFromECEF(self, ecef):
        """
        UV coordinates of the ECEF point, NaN if not visible.
        """
        return self._uvFromEcef(ecef)

    def ecefFromUV(self, uv, h=0):
        """
        ECEF point seen in the UV direction on the ellipsoid inflated by `h` meters,
        NaN if the pointing misses it.
        """
        return self._ecefFromUv(uv, h)

    def uvFromLLA(self, lla):
        """
        UV coordinates of the geodetic point, NaN if not visible.
        """
        return self._uvFromLla(lla)

    def llaFromUV(self, uv, h=0):
        """
        Geodetic point seen in the UV direction at height `h` above the ellipsoid,
        invalid if the pointing misses it.
        """
        return self._llaFromUv(uv, h)

    def eraFromObserver(self, observer):
        """
        Return the look angles (elevation, range, azimuth) of the satellite as seen
        from the given observer.

        :param observer: LLA or ECEF vector of the observer
        :rtype: :class:`~satview.coordinates.points.ERA`, invalid if the satellite
                is below the observer's horizon
        """
        return ERAfromECEF(observer, self.ellipsoid)(self.ecef)

    def isVisible(self, target):
        """
        Return whether the target (LLA or ECEF vector) can be seen from the satellite.
        """
        if isinstance(target, LLA):
            target = np.array(geodetic2Ecef(target.lat, target.lon, target.alt, self.ellipsoid))
        return not np.any(np.isnan(self.uvFromECEF(target)))

    def __repr__(self):
        return 'SatView({!r})'.format(self.lla)
