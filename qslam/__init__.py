"""Geometry and linear-algebra primitives for quadric-based object SLAM.

Objects are mapped as quadric surfaces whose projections into the image are
conics. This package contains the pieces that relate such a conic to a 2D
detector bounding box, plus the matrix kernels needed when differentiating
pose transforms:
- base: Quadratic solver, SE(3) poses, pose-matrix Jacobian, kron, tvec
- geometry: Conic extremum queries, conic bounds, AlignedBox2

Quadric parameterisation, projection, the factor graph and the detector are
provided by the surrounding system.

Author: Mapping Engineer
Date: 2026
"""

__version__ = "0.1.0"
