# Copyright European Space Agency, 2013

"""
Frequency reuse colouring of regular lattices.

The points of a square or triangular (hexagonal) lattice are partitioned into
`N` colours using a periodic sub-lattice whose integer generating matrix `F`
has determinant `N`. Two points get the same colour if their integer lattice
indexes are congruent modulo `F`.

The generating matrices are found with a brute-force search which maximizes
the minimum distance between points of the same colour. Results are kept in
a :class:`ReuseMatrixCache`.

References:

- C. de Almeida, R. Palazzo, "On the frequency allocation for mobile radio
  telephone systems", Proceedings of 6th International Symposium on Personal,
  Indoor and Mobile Radio Communications, 1995, vol. 1, pp. 96-99
- P. Angeletti, "Simple implementation of vectorial modulo operation based
  on fundamental parallelepiped", Electronics Letters, vol. 48, no. 3,
  pp. 159-160, 2012, doi: 10.1049/el.2011.3667
"""

import logging
import threading
from math import pi, cos, sin

import numpy as np

from satview.errors import InvalidParameter

DEFAULT_GRID_MAX = 25
DEFAULT_MAX_COLOURS = 10
DEFAULT_PRECISION_DIGITS = 7

# maps integer lattice indexes to the plane, rows are the lattice basis vectors
LATTICE_BASES = {
    'square': np.eye(2),
    'triangular': np.array([[1, 0], [cos(pi/3), sin(pi/3)]]),
    }

# maps normalized point coordinates to integer lattice indexes
_NORMALIZATION_MATRICES = {
    'square': np.eye(2),
    'triangular': np.array([[1, -0.5], [0, 1]]),
    }

LATTICE_TYPES = tuple(LATTICE_BASES)

def _checkLatticeType(latticeType):
    if latticeType not in LATTICE_BASES:
        raise InvalidParameter('The lattice type ' + repr(latticeType) + ' is not recognized, ' +
                               'it should be one of ' + str(LATTICE_TYPES))

def computeReuseMatrices(latticeType, maxColours, gridMax=DEFAULT_GRID_MAX):
    """
    Brute-force search of the best reuse generating matrix for each number of
    colours from 1 to `maxColours`.

    All integer matrices ``[[x1,y1],[x2,y2]]`` with ``x1,y1,y2`` in [0,gridMax] and
    ``x2`` in [-gridMax,gridMax] are candidates. Candidates are skipped if their
    determinant is not in [1,min(maxColours,gridMax^2)], if one entry is larger than
    ``ceil(sqrt(det)+3)``, or if the angle between the two generating vectors
    deviates more than 45 degrees from a right angle.

    For each determinant, the candidate with the largest minimum squared distance
    between sub-lattice points is kept, ties being broken by the smallest Frobenius
    norm and then by search order.

    :param str latticeType: 'square' or 'triangular'
    :rtype: list of length `maxColours` whose item ``i`` is the 2x2 matrix for
            ``i+1`` colours (generating vectors as columns), or None if no candidate was found
    """
    _checkLatticeType(latticeType)
    basis = LATTICE_BASES[latticeType]

    r = np.arange(gridMax+1)
    rs = np.arange(-gridMax, gridMax+1)
    # 'ij' indexing keeps the search order x1 > y1 > x2 > y2 after ravelling
    x1, y1, x2, y2 = (c.ravel() for c in np.meshgrid(r, r, rs, r, indexing='ij'))

    det = x1*y2 - y1*x2
    maxEntry = np.max(np.abs([x1, y1, x2, y2]), axis=0)
    keep = (det >= 1) & (det <= maxColours) & (det <= gridMax**2)
    keep &= maxEntry <= np.ceil(np.sqrt(np.maximum(det, 0)) + 3)

    angle = np.abs(np.arctan2(y1, x1) - np.arctan2(y2, x2))
    keep &= np.abs(pi/2 - angle) <= pi/4

    order = np.flatnonzero(keep)
    x1, y1, x2, y2, det = x1[order], y1[order], x2[order], y2[order], det[order]

    # generating vectors in the plane
    d1 = np.outer(x1, basis[0]) + np.outer(y1, basis[1])
    d2 = np.outer(x2, basis[0]) + np.outer(y2, basis[1])
    norm2 = lambda v: np.sum(v*v, axis=1)

    frobenius = np.rint(norm2(d1) + norm2(d2))
    dmin = np.rint(np.min([norm2(d1), norm2(d2), norm2(d1 + d2), norm2(d2 - d1)], axis=0))

    # lexsort uses the last key as primary key
    ranking = np.lexsort((order, frobenius, -dmin, det))
    _, first = np.unique(det[ranking], return_index=True)
    best = ranking[first]

    matrices = [None]*maxColours
    for i in best:
        matrices[det[i]-1] = np.array([[x1[i], x2[i]], [y1[i], y2[i]]], dtype=np.float64)

    logging.debug('Reuse matrix search (' + latticeType + ', gridMax=' + str(gridMax) + '): ' +
                  str(len(order)) + ' candidates, ' + str(len(best)) + ' colour counts found')
    return matrices

class ReuseMatrixCache(object):
    """
    Append-only cache of the reuse generating matrices of each lattice type,
    indexed by number of colours.

    The cache only grows: requesting more colours than currently cached runs
    the search again and appends the missing entries, already cached entries
    are never replaced. Growing the cache is guarded by a lock so that it can
    be shared between threads.

    :param int gridMax: search range, see :func:`computeReuseMatrices`
    """
    def __init__(self, gridMax=DEFAULT_GRID_MAX):
        self.gridMax = gridMax
        self._matrices = {latticeType: () for latticeType in LATTICE_TYPES}
        self._lock = threading.Lock()

    def __len__(self):
        """ Number of colour counts currently cached. """
        return len(self._matrices[LATTICE_TYPES[0]])

    def ensureComputed(self, maxColours):
        """
        Make sure the matrices for up to `maxColours` colours are cached.
        """
        if len(self) >= maxColours:
            return
        with self._lock:
            current = len(self)
            if current >= maxColours:
                return
            logging.debug('Growing reuse matrix cache from ' + str(current) + ' to ' +
                          str(maxColours) + ' colours')
            matrices = {}
            for latticeType in LATTICE_TYPES:
                new = computeReuseMatrices(latticeType, maxColours, self.gridMax)
                matrices[latticeType] = self._matrices[latticeType] + tuple(new[current:])
            # replace the whole table at once, readers never see a partial update
            self._matrices = matrices

    def get(self, latticeType, nColours, maxColours=DEFAULT_MAX_COLOURS):
        """
        Return the reuse generating matrix for `nColours` colours.

        :param str latticeType: 'square' or 'triangular'
        :param int maxColours: minimum size the cache is grown to if needed
        :rtype: ndarray of shape (2,2) with the generating vectors as columns
        :raise InvalidParameter: for an unknown lattice type or if no matrix exists for `nColours`
        """
        _checkLatticeType(latticeType)
        if nColours < 1:
            raise InvalidParameter('The number of colours must be at least 1, got ' + str(nColours))
        self.ensureComputed(max(maxColours, nColours))
        matrix = self._matrices[latticeType][nColours-1]
        if matrix is None:
            raise InvalidParameter('No reuse matrix found for ' + str(nColours) + ' colours with gridMax=' +
                                   str(self.gridMax))
        return matrix.copy()

#: cache shared by default between calls of :func:`generateReuseMatrix` and :func:`assignColors`
defaultCache = ReuseMatrixCache()

def generateReuseMatrix(latticeType='triangular', nColours=4, cache=defaultCache):
    """
    Return the reuse generating matrix for the given lattice type and number of colours.
    """
    return cache.get(latticeType, nColours)

def _minSpacing(values, precisionDigits):
    unique = np.unique(np.round(values, precisionDigits))
    if len(unique) < 2:
        return 1.
    return np.min(np.diff(unique))

def latticeIndexes(points, latticeType='triangular', precisionDigits=DEFAULT_PRECISION_DIGITS):
    """
    Return a function mapping points of the given lattice to integer lattice indexes.

    The lattice spacings are derived from the smallest distance between the
    distinct u (x) and v (y) coordinates of `points`. For triangular lattices
    the v axis of the integer grid is inclined by 60 degrees.

    :param points: array of shape (n,2)
    :rtype: function taking an array of shape (n,2) and returning an integer array of shape (n,2)
    """
    _checkLatticeType(latticeType)
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    minU = _minSpacing(points[:,0], precisionDigits)
    minV = _minSpacing(points[:,1], precisionDigits)
    if latticeType == 'triangular':
        # neighbouring rows are shifted by half a spacing
        spacing = np.array([2*minU, minV])
    else:
        spacing = np.array([minU, minV])
    D = _NORMALIZATION_MATRICES[latticeType]

    def toIndexes(p):
        p = np.asarray(p, dtype=np.float64).reshape(-1, 2)
        return np.rint((p / spacing).dot(D.T)).astype(int)
    return toIndexes

def reduceModulo(indexes, F, precisionDigits=DEFAULT_PRECISION_DIGITS):
    """
    Reduce integer lattice indexes modulo the lattice generated by the
    columns of `F`, returning the canonical representative in the fundamental
    parallelepiped of `F`: ``index - F*floor(F^-1*index)``.

    :param indexes: integer array of shape (n,2)
    :rtype: integer array of shape (n,2)
    """
    indexes = np.asarray(indexes).reshape(-1, 2)
    Finv = np.linalg.inv(F)
    k = np.floor(np.round(indexes.dot(Finv.T), precisionDigits))
    return np.rint(indexes - k.dot(F.T)).astype(int)

def assignColors(points, nColours=4, firstColorCoord=None, firstColorIdx=None,
                 precisionDigits=DEFAULT_PRECISION_DIGITS, latticeType='triangular',
                 cache=defaultCache):
    """
    Compute the colouring of a set of lattice points.

    Colours are numbered from 1 in order of first occurrence when scanning
    `points`, except that the point designated by `firstColorCoord` or
    `firstColorIdx` always gets colour 1.

    :param points: (u,v) coordinates of the lattice points, array-like of shape (n,2)
    :param int nColours: number of colours
    :param firstColorCoord: (u,v) coordinates of the point getting the first colour
    :param int firstColorIdx: index of the point getting the first colour, defaults to 0;
                              ignored if `firstColorCoord` is given
    :param int precisionDigits: number of digits used when rounding before flooring
    :param str latticeType: 'triangular' or 'square'
    :param ReuseMatrixCache cache: cache of reuse generating matrices
    :rtype: integer ndarray of shape (n,)
    :raise InvalidParameter: for an unknown lattice type or an invalid number of colours
    """
    _checkLatticeType(latticeType)
    if nColours < 1:
        raise InvalidParameter('The number of colours must be at least 1, got ' + str(nColours))
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    nPoints = len(points)
    if nPoints == 0:
        return np.empty(0, dtype=int)

    if firstColorCoord is None:
        if firstColorIdx is None:
            firstColorIdx = 0
        firstColorCoord = points[firstColorIdx]
    elif firstColorIdx is not None:
        logging.warning('Both firstColorIdx and firstColorCoord were given, disregarding firstColorIdx')

    if nColours == 1:
        return np.ones(nPoints, dtype=int)

    F = cache.get(latticeType, nColours)
    toIndexes = latticeIndexes(points, latticeType, precisionDigits)
    reduced = reduceModulo(toIndexes(points), F, precisionDigits)
    firstReduced = reduceModulo(toIndexes(firstColorCoord), F, precisionDigits)[0]

    colourOf = {tuple(firstReduced): 1}
    colours = np.empty(nPoints, dtype=int)
    for n, rep in enumerate(map(tuple, reduced)):
        colours[n] = colourOf.setdefault(rep, len(colourOf)+1)
    return colours
