"""
This package contains modules to define the reference ellipsoid
(:mod:`~satview.coordinates.ellipsoid`) and point types
(:mod:`~satview.coordinates.points`), to convert coordinates between
reference frames (:mod:`~satview.coordinates.transform`,
:mod:`~satview.coordinates.origin` and :mod:`~satview.coordinates.nsper`),
to calculate intersection points between a ray and an ellipsoid
(:mod:`~satview.coordinates.intersection`), and to perform geodesic
calculations (:mod:`~satview.coordinates.geodesic`).

:class:`~satview.coordinates.satview.SatView` combines them for a single
satellite position.
"""
