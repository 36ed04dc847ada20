# Copyright European Space Agency, 2013

import unittest

import numpy as np
from numpy.testing import assert_allclose, assert_array_equal

from satview.coordinates.ellipsoid import WGS84
from satview.coordinates.points import LLA, ERA, isValid
from satview.coordinates.transform import geodetic2Ecef
from satview.coordinates.origin import ERAfromENU, ENUfromERA, ENUfromECEF, ECEFfromENU,\
    ERAfromECEF, ECEFfromERA, UVfromECEF, ECEFfromUV, UVfromLLA, LLAfromUV, ComposedTransform
from satview.errors import InvalidParameter

a = WGS84.a

class Test(unittest.TestCase):

    def testEraAtZenith(self):
        era = ERAfromENU()((0, 0, 100000))
        assert_allclose(era, [np.pi/2, 100000, 0])
        self.assertIsInstance(era, ERA)

    def testEraBelowHorizon(self):
        self.assertFalse(isValid(ERAfromENU()((0, 0, -100))))
        self.assertFalse(isValid(ERAfromECEF(LLA(0, 0, 0))((-a, 0, 0))))

    def testEraFromEcefSubSatellitePoint(self):
        era = ERAfromECEF(LLA(0, 0, 0))((a + 600000, 0, 0))
        assert_allclose(era, [np.pi/2, 600000, 0], rtol=0, atol=1e-9)

    def testEraAzimuthNorth(self):
        era = ERAfromECEF(LLA(0, 0, 0))((a + 10, 0, 1000))
        assert_allclose(era.az, np.pi/2)
        assert_allclose(era.el, np.arctan2(10, 1000))

    def testEraTopocentricAxes(self):
        # rows of the topocentric matrix at latitude 0, longitude 60 deg
        origin = LLA.fromDegrees(0, 60)
        ecef = np.array(geodetic2Ecef(origin.lat, origin.lon, origin.alt))
        up = np.array([0.5, 0, np.sqrt(3)/2])
        north = np.array([-np.sqrt(3)/2, 0, 0.5])
        east = np.array([0, 1, 0])
        t = ERAfromECEF(origin)

        era = t(ecef + 1000*up)
        assert_allclose([era.el, era.r], [np.pi/2, 1000], rtol=0, atol=1e-6)
        assert_allclose(t(ecef + 1000*up + 1000*east), [np.pi/4, 1000*np.sqrt(2), 0],
                        rtol=0, atol=1e-6)
        assert_allclose(t(ecef + 1000*up + 1000*north), [np.pi/4, 1000*np.sqrt(2), np.pi/2],
                        rtol=0, atol=1e-6)

    def testEraArrayRejected(self):
        with self.assertRaises(InvalidParameter):
            ERAfromENU()(np.ones((4, 3)))
        with self.assertRaises(InvalidParameter):
            ERAfromECEF(LLA(0, 0, 0))(np.ones((4, 3))*(a + 1000))

    def testEraRoundTrip(self):
        origin = LLA.fromDegrees(10, 20, 100)
        era = ERA.fromDegrees(30, 1e6, 45)
        ecef = ECEFfromERA(origin)(era)
        self.assertTrue(ERAfromECEF(origin)(ecef).isclose(era, rtol=1e-12, atol=1e-6))

        t = ERAfromECEF(origin)
        self.assertIsInstance(t.inverse(), ECEFfromERA)
        assert_allclose(t.inverse()(t(ecef)), ecef, rtol=0, atol=1e-6)

    def testEnuRoundTrip(self):
        t = ENUfromECEF(LLA(0, 0, 0))
        assert_allclose(t((a + 100, 0, 0)), [0, 0, 100], rtol=0, atol=1e-9)

        origin = LLA.fromDegrees(-35, 150, 200)
        ecef = np.random.rand(10, 3)*1e6 + geodetic2Ecef(origin.lat, origin.lon, origin.alt)
        enu = ENUfromECEF(origin)(ecef)
        assert_array_equal(enu.shape, (10, 3))
        assert_allclose(ECEFfromENU(origin)(enu), ecef, rtol=0, atol=1e-6)

    def testInverseSharesOrigin(self):
        t = UVfromECEF(LLA.fromDegrees(10, 20, 700e3))
        inv = t.inverse()
        self.assertIsInstance(inv, ECEFfromUV)
        self.assertIs(inv.origin, t.origin)
        self.assertEqual(inv.ellipsoid, t.ellipsoid)
        assert_array_equal(inv.R, t.R.T)
        self.assertIsInstance(inv.inverse(), UVfromECEF)
        self.assertEqual(inv.lla, t.lla)

    def testOriginFromEcef(self):
        lla = LLA.fromDegrees(45, -60, 1000)
        ecef = geodetic2Ecef(lla.lat, lla.lon, lla.alt)
        t = ENUfromECEF(ecef)
        self.assertTrue(t.lla.isclose(lla, atol=1e-6))
        assert_allclose(t.R, ENUfromECEF(lla).R, rtol=0, atol=1e-12)

    def testOriginInvalid(self):
        with self.assertRaises(InvalidParameter):
            ENUfromECEF([1, 2])
        with self.assertRaisesRegex(InvalidParameter, "center of the earth"):
            ENUfromECEF([0, 0, 0])
        with self.assertRaises(InvalidParameter):
            UVfromECEF(np.zeros(3))

    def testOriginReadOnly(self):
        t = ENUfromECEF(LLA(0, 0, 0))
        with self.assertRaises(ValueError):
            t.R[0,0] = 2
        with self.assertRaises(ValueError):
            t.origin[0] = 0

    def testUvNadir(self):
        satellite = LLA(0, 0, 600e3)
        assert_allclose(UVfromLLA(satellite)(LLA(0, 0, 0)), [0, 0], rtol=0, atol=1e-12)
        assert_allclose(UVfromECEF(satellite)((a, 0, 0)), [0, 0], rtol=0, atol=1e-12)

        lla = LLAfromUV(satellite)((0, 0))
        self.assertTrue(lla.isclose(LLA(0, 0, 0), atol=1e-6))
        lla = LLAfromUV(satellite)((0, 0), 1000)
        self.assertTrue(lla.isclose(LLA(0, 0, 1000), atol=1e-6))
        assert_allclose(ECEFfromUV(satellite)((0, 0)), [a, 0, 0], rtol=0, atol=1e-6)

    def testUvVisibility(self):
        t = UVfromLLA(LLA(0, 0, 600e3))
        uv = t(LLA.fromDegrees(0, 20))
        self.assertTrue(isValid(uv))
        self.assertLessEqual(uv[0]**2 + uv[1]**2, 1)
        # u points west
        self.assertLess(uv[0], 0)
        assert_allclose(uv[1], 0, rtol=0, atol=1e-12)

        # behind the limb
        self.assertFalse(isValid(t(LLA.fromDegrees(0, 30))))
        self.assertFalse(isValid(t(LLA.fromDegrees(0, 180))))

    def testUvNorth(self):
        uv = UVfromLLA(LLA(0, 0, 600e3))(LLA.fromDegrees(5, 0))
        self.assertGreater(uv[1], 0)
        assert_allclose(uv[0], 0, rtol=0, atol=1e-12)

    def testUvMissingEarth(self):
        t = ECEFfromUV(LLA(0, 0, 600e3))
        self.assertFalse(isValid(t((0.95, 0))))
        self.assertFalse(isValid(LLAfromUV(LLA(0, 0, 600e3))((0, 0.95))))
        with self.assertRaises(InvalidParameter):
            t((1, 1))

    def testUvRoundTrip(self):
        satellite = LLA.fromDegrees(10, 20, 700e3)
        uvFromLla = UVfromLLA(satellite)
        llaFromUv = uvFromLla.inverse()
        for lat in np.linspace(5, 15, 5):
            for lon in np.linspace(15, 25, 5):
                target = LLA.fromDegrees(lat, lon)
                uv = uvFromLla(target)
                self.assertTrue(isValid(uv))
                lla = llaFromUv(uv)
                assert_allclose(lla[:2], target[:2], rtol=0, atol=1e-9)
                assert_allclose(lla.alt, 0, rtol=0, atol=1e-3)

    def testUvWithHeight(self):
        satellite = LLA(0, 0, 600e3)
        target = LLA.fromDegrees(0, 5, 10000)
        uv = UVfromLLA(satellite)(target)
        lla = LLAfromUV(satellite)(uv, 10000)
        self.assertTrue(lla.isclose(target, atol=1e-6))

    def testComposition(self):
        origin = LLA.fromDegrees(10, 20, 100)
        ecef = ECEFfromERA(origin)(ERA.fromDegrees(30, 1e6, 45))

        composed = ERAfromENU() * ENUfromECEF(origin)
        self.assertIsInstance(composed, ComposedTransform)
        self.assertTrue(composed(ecef).isclose(ERAfromECEF(origin)(ecef)))
        assert_allclose(composed.inverse()(composed(ecef)), ecef, rtol=0, atol=1e-6)

    def testEnuFromEraInverse(self):
        self.assertIsInstance(ENUfromERA().inverse(), ERAfromENU)
        self.assertFalse(isValid(ENUfromERA()(ERA(np.nan, np.nan, np.nan))))
