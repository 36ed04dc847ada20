# Copyright European Space Agency, 2013

"""
Generation of regular 2D lattices of points, e.g. the beam centers of a
multi-beam antenna in UV coordinates.

A regular lattice is defined by the spacing `dx` between points of a row,
the spacing `dy` between rows and the displacement `ds` along x between
consecutive rows. Each row is shifted by a whole number of `dx` so that the
generated window stays centered around x=0 regardless of the skew.

Points are generated row by row (rows in outer loop, columns in inner loop)
so that the order, and therefore the index of each point, is reproducible.
"""

from math import sqrt

import numpy as np

#: default number of points per half row / half column generated before filtering
DEFAULT_M = 70

def _keepAll(x, y):
    return True

def _latticeGenerator(dx, dy, ds, x0, y0, M, N):
    for n in range(-N, N+1):
        y = n*dy + y0
        shift = round(n*ds/dx)
        for m in range(-M, M+1):
            yield (m - shift)*dx + n*ds + x0, y

def generateRegularLattice(dx, dy, ds, predicate=_keepAll, x0=0., y0=0., M=DEFAULT_M, N=None):
    """
    Generate a regular lattice of points.

    :param dx: element spacing on the x axis
    :param dy: element spacing on the y axis
    :param ds: displacement along x between rows of elements
    :param predicate: function ``f(x, y)`` returning True if the point must be kept
    :param x0,y0: coordinates of the origin of the lattice
    :param int M: number of elements generated on each side of x0 per row,
                  before applying `predicate`
    :param int N: number of rows generated on each side of y0 before
                  applying `predicate`, defaults to `M`
    :rtype: ndarray of shape (n,2) with (x,y) points
    """
    if N is None:
        N = M
    points = [p for p in _latticeGenerator(float(dx), float(dy), float(ds), x0, y0, M, N)
              if predicate(*p)]
    return np.array(points, dtype=np.float64).reshape(-1, 2)

def regularLatticeNElements(dx, dy, ds, predicate=_keepAll, x0=0., y0=0., M=DEFAULT_M, N=None):
    """
    Return the number of points :func:`generateRegularLattice` would generate
    for the same arguments, without storing them.
    """
    if N is None:
        N = M
    return sum(1 for p in _latticeGenerator(float(dx), float(dy), float(ds), x0, y0, M, N)
               if predicate(*p))

def generateRectLattice(spacingX, spacingY, predicate=_keepAll, **kwargs):
    """
    Generate a rectangular lattice of points (with different spacing among x and y directions).

    See :func:`generateRegularLattice` for the remaining arguments.
    """
    return generateRegularLattice(spacingX, spacingY, 0, predicate, **kwargs)

def generateSquareLattice(spacing, predicate=_keepAll, **kwargs):
    """
    Generate a square lattice of points (with equal spacing among x and y directions).

    See :func:`generateRegularLattice` for the remaining arguments.
    """
    return generateRegularLattice(spacing, spacing, 0, predicate, **kwargs)

def hexLatticeParameters(spacing):
    """ Return (dx, dy, ds) of a hexagonal lattice with the given spacing. """
    return spacing, spacing*sqrt(3)/2, spacing/2

def generateHexLattice(spacing, predicate=_keepAll, **kwargs):
    """
    Generate a hexagonal lattice of points (with equal distance between neighboring points).

    The distance between points on the same column is sqrt(3) times greater
    than the distance between points on the same row.

    See :func:`generateRegularLattice` for the remaining arguments.
    """
    return generateRegularLattice(*hexLatticeParameters(spacing), predicate=predicate, **kwargs)
