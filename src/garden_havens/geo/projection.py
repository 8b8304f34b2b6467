"""Map projections: geographic coordinates to SVG pixels.

Conventions follow d3-geo so the pictures match the web application:

  - ``rotation`` is ``(lambda, phi, gamma)`` in degrees; rotating by
    ``(-lon, -lat, 0)`` brings ``(lon, lat)`` to the centre of the view.
  - ``scale`` is pixels per radian, ``translate`` the pixel position of the
    projected origin. Screen y grows downward.

Projections are mutable and each one belongs to exactly one renderer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

Position = tuple[float, float]
Rotation = tuple[float, float, float]
Vector = tuple[float, float, float]

# Points this close to the horizon (radians) still count as visible.
HORIZON_EPSILON = 1e-9


def _wrap_radians(lam: float) -> float:
    if abs(lam) > math.pi:
        lam -= round(lam / math.tau) * math.tau
    return lam


@dataclass
class SphericalRotation:
    """Rotation of the sphere by Euler angles (degrees), as in ``d3.geoRotation``."""

    lam: float = 0.0
    phi: float = 0.0
    gamma: float = 0.0

    @classmethod
    def of(cls, rotation: Rotation) -> SphericalRotation:
        return cls(*rotation)

    def apply(self, lon: float, lat: float) -> tuple[float, float]:
        """Rotate a lon/lat point; returns rotated (lambda, phi) in radians."""
        lam = _wrap_radians(math.radians(lon) + math.radians(self.lam))
        phi = math.radians(lat)
        d_phi = math.radians(self.phi)
        d_gamma = math.radians(self.gamma)
        if d_phi == 0 and d_gamma == 0:
            return lam, phi
        cos_dp, sin_dp = math.cos(d_phi), math.sin(d_phi)
        cos_dg, sin_dg = math.cos(d_gamma), math.sin(d_gamma)
        cos_phi = math.cos(phi)
        x = math.cos(lam) * cos_phi
        y = math.sin(lam) * cos_phi
        z = math.sin(phi)
        k = z * cos_dp + x * sin_dp
        return (
            math.atan2(y * cos_dg - k * sin_dg, x * cos_dp - z * sin_dp),
            math.asin(max(-1.0, min(1.0, k * cos_dg + y * sin_dg))),
        )

    def invert(self, lam: float, phi: float) -> tuple[float, float]:
        """Undo :meth:`apply`: rotated radians back to lon/lat degrees."""
        d_phi = math.radians(self.phi)
        d_gamma = math.radians(self.gamma)
        if d_phi != 0 or d_gamma != 0:
            cos_dp, sin_dp = math.cos(d_phi), math.sin(d_phi)
            cos_dg, sin_dg = math.cos(d_gamma), math.sin(d_gamma)
            cos_phi = math.cos(phi)
            x = math.cos(lam) * cos_phi
            y = math.sin(lam) * cos_phi
            z = math.sin(phi)
            k = z * cos_dg - y * sin_dg
            lam, phi = (
                math.atan2(y * cos_dg + z * sin_dg, x * cos_dp + k * sin_dp),
                math.asin(max(-1.0, min(1.0, k * cos_dp - x * sin_dp))),
            )
        lam = _wrap_radians(lam - math.radians(self.lam))
        return math.degrees(lam), math.degrees(phi)


class Projection:
    """Base class holding the shared scale/translate/rotation state."""

    def __init__(
        self,
        scale: float,
        translate: Position,
        rotation: Rotation = (0.0, 0.0, 0.0),
    ) -> None:
        self.scale = scale
        self.translate = translate
        self.rotation = rotation

    @property
    def rotation(self) -> Rotation:
        return self._rotation

    @rotation.setter
    def rotation(self, value: Rotation) -> None:
        self._rotation = (float(value[0]), float(value[1]), float(value[2]))
        self._rotator = SphericalRotation.of(self._rotation)

    @property
    def rotator(self) -> SphericalRotation:
        return self._rotator

    def __call__(self, point: Position | None) -> Position | None:
        raise NotImplementedError

    def invert(self, pixel: Position) -> Position | None:
        raise NotImplementedError


def _finite(point: Position | None) -> bool:
    return (
        point is not None
        and len(point) >= 2
        and all(isinstance(v, (int, float)) and math.isfinite(v) for v in point[:2])
    )


class OrthographicProjection(Projection):
    """Sphere seen from infinitely far away, clipped to the near hemisphere."""

    clip_angle = 90.0

    def rotated_vector(self, point: Position) -> Vector:
        """Unit vector of a lon/lat point in the view frame.

        The x axis points at the viewer: ``x >= 0`` means the near hemisphere,
        and ``(y, z)`` are the unscaled screen offsets (right, up).
        """
        lam, phi = self._rotator.apply(point[0], point[1])
        cos_phi = math.cos(phi)
        return (cos_phi * math.cos(lam), cos_phi * math.sin(lam), math.sin(phi))

    @staticmethod
    def is_visible_vector(v: Vector) -> bool:
        # cos(distance from view centre) >= cos(90deg + eps)
        return v[0] >= -math.sin(HORIZON_EPSILON)

    def vector_to_pixel(self, v: Vector) -> Position:
        tx, ty = self.translate
        return (tx + v[1] * self.scale, ty - v[2] * self.scale)

    def __call__(self, point: Position | None) -> Position | None:
        """Pixel position of a point, or None when it is on the far side."""
        if not _finite(point):
            return None
        assert point is not None
        v = self.rotated_vector(point)
        if not self.is_visible_vector(v):
            return None
        return self.vector_to_pixel(v)

    def invert(self, pixel: Position) -> Position | None:
        tx, ty = self.translate
        x = (pixel[0] - tx) / self.scale
        y = (ty - pixel[1]) / self.scale
        rho = math.hypot(x, y)
        if rho > 1.0 + 1e-12:
            return None
        if rho == 0:
            lam, phi = 0.0, 0.0
        else:
            c = math.asin(min(1.0, rho))
            sin_c, cos_c = math.sin(c), math.cos(c)
            lam = math.atan2(x * sin_c, rho * cos_c)
            phi = math.asin(max(-1.0, min(1.0, y * sin_c / rho)))
        return self._rotator.invert(lam, phi)

    def view_center(self) -> Position:
        """Geographic coordinate currently facing the viewer."""
        return self._rotator.invert(0.0, 0.0)

    def horizon_point(self, angle: float) -> Position:
        """Pixel on the clip circle at a screen angle (radians, y down)."""
        tx, ty = self.translate
        return (tx + self.scale * math.cos(angle), ty + self.scale * math.sin(angle))

    def screen_angle(self, pixel: Position) -> float:
        tx, ty = self.translate
        return math.atan2(pixel[1] - ty, pixel[0] - tx)


class EquirectangularProjection(Projection):
    """Plate carrée: longitude and latitude map linearly to x and y."""

    def rotated_radians(self, point: Position) -> tuple[float, float]:
        return self._rotator.apply(point[0], point[1])

    def radians_to_pixel(self, lam: float, phi: float) -> Position:
        tx, ty = self.translate
        return (tx + lam * self.scale, ty - phi * self.scale)

    def __call__(self, point: Position | None) -> Position | None:
        """Pixel position of a point; None only for missing or non-finite input."""
        if not _finite(point):
            return None
        assert point is not None
        lam, phi = self.rotated_radians(point)
        return self.radians_to_pixel(lam, phi)

    def invert(self, pixel: Position) -> Position | None:
        tx, ty = self.translate
        lam = (pixel[0] - tx) / self.scale
        phi = (ty - pixel[1]) / self.scale
        if abs(phi) > math.pi / 2 + 1e-12:
            return None
        return self._rotator.invert(lam, phi)
