"""Exceptions raised by the ray caster core."""


class RayTracerError(Exception):
    """Base class for every error raised by the renderer."""


class NonInvertibleMatrixError(RayTracerError, ValueError):
    """A transform with a zero determinant was asked for its inverse."""


class ZeroVectorError(RayTracerError, ValueError):
    """A zero-length tuple was normalized."""


class MissingLightError(RayTracerError, LookupError):
    """Shading was requested from a world that has no light source."""
