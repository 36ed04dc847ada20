# Copyright European Space Agency, 2013

import unittest

import numpy as np
from numpy.testing import assert_allclose, assert_array_almost_equal,\
    assert_array_equal, assert_equal

from satview.utils import unitVectors
from satview.coordinates.ellipsoid import WGS84, Ellipsoid
from satview.coordinates.transform import geodetic2Ecef
from satview.coordinates.intersection import earthIntersection,\
    earthIntersectionCoefficients, isBlockedByEarth

sphere = Ellipsoid(2, 0)

class Test(unittest.TestCase):

    def testSphereIntersection(self):
        point = earthIntersection([0,-1,0], [0,3,0], sphere)
        assert_equal(point, [0,2,0])

    def testSphereIntersectionArray(self):
        directions = unitVectors([[0,-1,0],[-1,-1,0]])
        points = earthIntersection(directions, [0,3,0], sphere)
        assert_equal(points, [[0,2,0],[np.nan,np.nan,np.nan]])

    def testSphereIntersectionMiss(self):
        point = earthIntersection([0,0,1], [0,3,0], sphere)
        self.assertTrue(np.all(np.isnan(point)))

    def testSphereIntersectionOffset(self):
        point = earthIntersection([0,-1,0], [0,3,0], sphere, h=0.5)
        assert_allclose(point, [0,2.5,0])

    def testClosestIntersectionIsChosen(self):
        # ray pointing away from the sphere, the closest solution lies behind the origin
        point = earthIntersection([0,1,0], [0,3,0], sphere)
        assert_allclose(point, [0,2,0])

    def testEllipsoidIntersectionRegression(self):
        ellipsoid = Ellipsoid(6.37814e6, 1 - 6.35675e6/6.37814e6)
        direction = [-0.944818, -0.200827, -0.258819]
        origin = [1.23781e7, 1000, 1000]
        point = earthIntersection(direction, origin, ellipsoid)
        assert_allclose(point, [5978510.878, -1359272.862, -1752073.351], rtol=0, atol=1e-2)

        points = earthIntersection(np.array([direction, direction]), origin, ellipsoid)
        assert_allclose(points, [point, point], rtol=0, atol=1e-6)

    def testEllipsoidIntersection(self):
        p1 = np.array(geodetic2Ecef(np.deg2rad(30), np.deg2rad(60), 0))
        p2 = np.array(geodetic2Ecef(np.deg2rad(-30), np.deg2rad(-60), 0))
        direction = unitVectors(p1 - p2)

        # closest to p1 is p1 itself
        assert_array_almost_equal(earthIntersection(direction, p1), p1, 5)
        # starting outside, the near intersection is hit first
        origin = p1 + direction*1e6
        assert_array_almost_equal(earthIntersection(-direction, origin), p1, 5)

    def testEllipsoidIntersectionArray(self):
        satellite = np.array(geodetic2Ecef(np.deg2rad(10), np.deg2rad(20), 700e3))
        lats, lons = np.deg2rad([8, 10, 12, 11]), np.deg2rad([19, 20, 21, 25])
        targets = np.transpose(geodetic2Ecef(lats, lons, np.zeros(4)))
        directions = unitVectors(targets - satellite)

        points = earthIntersection(directions, satellite)
        assert_array_equal(points.shape, (4,3))
        assert_allclose(points, targets, rtol=0, atol=1e-4)

        # pointing into space, perpendicular to the satellite position
        missing = unitVectors(np.cross(satellite, [0,0,1]))
        points = earthIntersection(np.array([missing, directions[0]]), satellite)
        self.assertTrue(np.all(np.isnan(points[0])))
        assert_allclose(points[1], targets[0], rtol=0, atol=1e-4)

    def testCoefficients(self):
        alpha, beta, gamma, delta = earthIntersectionCoefficients([0,-1,0], [0,3,0], 2, 2)
        assert_allclose([alpha, beta, gamma], [4, -24, 20])
        assert_allclose(delta, 24**2 - 4*4*20)

    def testIsBlockedByEarth(self):
        satellite = np.array(geodetic2Ecef(0, 0, 600e3))
        visible = np.array(geodetic2Ecef(0, np.deg2rad(20), 0))
        behindLimb = np.array(geodetic2Ecef(0, np.deg2rad(30), 0))
        antipode = np.array(geodetic2Ecef(0, np.pi, 0))
        self.assertFalse(isBlockedByEarth(satellite, visible))
        self.assertTrue(isBlockedByEarth(satellite, behindLimb))
        self.assertTrue(isBlockedByEarth(satellite, antipode))
        self.assertFalse(isBlockedByEarth(satellite, satellite))

    def testIsBlockedByEarthInSpace(self):
        satellite = np.array(geodetic2Ecef(0, 0, 600e3))
        other = np.array(geodetic2Ecef(0, np.deg2rad(10), 35786e3))
        self.assertFalse(isBlockedByEarth(satellite, other))
        self.assertFalse(isBlockedByEarth(satellite, [WGS84.a + 1e6, 0, 0]))
