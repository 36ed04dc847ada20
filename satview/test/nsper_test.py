# Copyright European Space Agency, 2013

import unittest

import numpy as np
from numpy.testing import assert_allclose, assert_array_equal

from satview.coordinates.nsper import NSper2UV, UV2NSper
from satview.errors import InvalidParameter

class Test(unittest.TestCase):

    def testCenter(self):
        assert_array_equal(NSper2UV(600e3)((0, 0)), [0, 0])
        assert_array_equal(UV2NSper(600e3)((0, 0)), [0, 0])

    def testUV2NSper(self):
        assert_allclose(UV2NSper(600e3)((0.6, 0)), [450000, 0])
        assert_allclose(NSper2UV(600e3)((450000, 0)), [0.6, 0])

    def testRoundTrip(self):
        uv = (np.random.rand(20, 2) - 0.5)
        t = UV2NSper(35786e3)
        xy = t(uv)
        assert_array_equal(xy.shape, (20, 2))
        assert_allclose(t.inverse()(xy), uv, rtol=0, atol=1e-12)

    def testOutsideUnitCircle(self):
        with self.assertRaises(InvalidParameter):
            UV2NSper(600e3)((0.8, 0.6))
        with self.assertRaises(InvalidParameter):
            UV2NSper(600e3)([[0, 0], [1, 1]])

    def testInverse(self):
        self.assertIsInstance(NSper2UV(1).inverse(), UV2NSper)
        self.assertEqual(UV2NSper(5).inverse().h, 5)
