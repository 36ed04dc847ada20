# Copyright European Space Agency, 2013

import inspect
from functools import wraps

def lazy_property(fn):
    """
    Caches the result of a property.

    The value is stored on the instance the first time it is accessed.
    """
    attr_name = '_lazy_' + fn.__name__
    @property
    @wraps(fn)
    def _lazyprop(self):
        try:
            return self.__dict__[attr_name]
        except KeyError:
            value = fn(self)
            self.__dict__[attr_name] = value
            return value
    return _lazyprop

def inherit_docs(cls):
    """
    Inherits docstrings from base classes
    for all methods defined in `cls` which lack a docstring.
    """
    for name, func in vars(cls).items():
        if not inspect.isfunction(func) or func.__doc__:
            continue
        for parent in cls.__mro__[1:]:
            doc = getattr(getattr(parent, name, None), '__doc__', None)
            if doc:
                func.__doc__ = doc
                break
    return cls
