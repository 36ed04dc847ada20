# Copyright European Space Agency, 2013

"""
Exceptions raised by the :mod:`satview` package.

Only invalid input is signalled with exceptions. Geometric outcomes like a
pointing that misses the earth or a target hidden behind it are returned as
NaN-valued coordinates, see :func:`satview.coordinates.points.isValid`.
"""

class InvalidParameter(ValueError):
    """
    Raised when a constructor or function receives a value outside of
    its valid domain, e.g. a latitude above 90 degrees.
    """
    pass
