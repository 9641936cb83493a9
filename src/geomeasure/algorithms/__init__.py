"""Computational geometry kernels.

- lines: point/segment distances and exact segment intersection
- polygons: ring area, winding-number point location, ring segments
"""
