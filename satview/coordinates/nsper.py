# Copyright European Space Agency, 2013

"""
Conversion between the near-sided perspective projection plane and UV
coordinates.

The near-sided perspective projection (e.g. ``+proj=nsper`` in PROJ) maps
ground points onto the plane tangent to the earth at the sub-satellite point.
Its X,Y coordinates become UV pointing coordinates once scaled by the
distance from the satellite, which depends on the satellite altitude `h`.
"""

import numpy as np

from satview.coordinates.origin import Transform
from satview.errors import InvalidParameter
from satview.util.decorators import inherit_docs

@inherit_docs
class NSper2UV(Transform):
    """
    Near-sided perspective X,Y (meters) to UV for a satellite at altitude `h` (meters).
    """
    def __init__(self, h):
        self.h = float(h)

    def __call__(self, xy):
        xy = np.asarray(xy, dtype=np.float64)
        coeff = np.sqrt(self.h**2 + np.sum(xy**2, axis=-1))
        return xy / coeff[...,None] if xy.ndim > 1 else xy / coeff

    def inverse(self):
        return UV2NSper(self.h)

    def __repr__(self):
        return 'NSper2UV(h={})'.format(self.h)

@inherit_docs
class UV2NSper(Transform):
    """
    UV to near-sided perspective X,Y (meters) for a satellite at altitude `h` (meters).

    :raise InvalidParameter: if u^2 + v^2 >= 1
    """
    def __init__(self, h):
        self.h = float(h)

    def __call__(self, uv):
        uv = np.asarray(uv, dtype=np.float64)
        uv2 = np.sum(uv**2, axis=-1)
        if np.any(uv2 >= 1):
            raise InvalidParameter('u^2 + v^2 must be smaller than 1')
        coeff = self.h / np.sqrt(1 - uv2)
        return uv * coeff[...,None] if uv.ndim > 1 else uv * coeff

    def inverse(self):
        return NSper2UV(self.h)

    def __repr__(self):
        return 'UV2NSper(h={})'.format(self.h)
