# Copyright European Space Agency, 2013

"""
A collection of small numerical helper functions.
"""

import numpy as np
from astropy.constants import c

#: speed of light in vacuum in m/s
c0 = c.to_value('m/s')

def vectorLengths(vectors):
    """ Return the lengths of an array of vectors of shape (n,d). """
    vectors = np.asarray(vectors)
    return np.sqrt((vectors*vectors).sum(axis=-1))

def unitVectors(vectors):
    """ Return the unit vectors of an array of vectors. """
    vectors = np.asarray(vectors, dtype=np.float64)
    return vectors / vectorLengths(vectors)[...,None]

def angleBetween(v1, v2):
    """ Return the angles in radians between two unit vector arrays.
        Angles are in [0,pi]. """
    # When vectors are equal their dot product is 1, but
    # due to rounding it can be slightly above 1 which would then
    # result in arccos returning NaN. Therefore we clip the values to [-1,1]
    dot = np.clip(np.einsum('...i,...i', v1, v2), -1, 1)
    return np.arccos(dot)

def lin2db(x):
    """ Convert a number from linear to dB. """
    return 10*np.log10(x)

def db2lin(x):
    """ Convert a number from dB to linear. """
    return 10**(np.asarray(x)/10)

def f2lambda(f):
    """ Get the wavelength (in m) starting from the frequency (in Hz). """
    return c0/np.asarray(f)

def lambda2f(wavelength):
    """ Get the frequency (in Hz) starting from the wavelength (in m). """
    return c0/np.asarray(wavelength)
