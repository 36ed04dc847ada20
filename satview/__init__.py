"""
The satview package is split up in several packages and modules each covering
different aspects of the geometry of a satellite looking at the earth.

The :mod:`satview.coordinates` package defines the reference ellipsoid and
the point types, converts between geodetic, ECEF, topocentric and satellite
view (UV) coordinates, calculates intersection points between pointing rays
and the ellipsoid, and performs geodesic calculations.

The :mod:`satview.lattice` module generates regular lattices of points,
e.g. the beam centers of a multi-beam antenna, and the :mod:`satview.coloring`
module partitions them into frequency reuse colours.

The :mod:`satview.utils` module contains small numerical helpers
(decibels, wavelengths, vector operations).
"""

from ._version import __version__, __version_info__
