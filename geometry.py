import numpy as np
from utils import vec

# Distance returned when a ray misses. Valid hits are always > EPSILON.
NO_HIT = 0.0
EPSILON = 1e-4

LIGHT_RADIUS = 0.05
LIGHT_COLOUR = (255, 255, 0)


class GeometryError(ValueError):
    """Raised when a primitive, ray or camera is built from invalid data."""


def _as_vec3(value, name):
    v = vec(value)
    if v.shape != (3,) or not np.all(np.isfinite(v)):
        raise GeometryError(f"{name} must be a finite 3-vector, got {value!r}")
    return v

def _as_coefficient(value, name):
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise GeometryError(f"{name} must lie in [0, 1], got {value}")
    return value


def intersect_sphere(position, radius, ray):
    """Distance along ray to the nearest surface point of a sphere.

    Uses the geometric solution of the ray-sphere quadratic and assumes
    ray.direction is unit length. A zero-radius sphere has no surface to
    shade and is never hit.

    Parameters:
      position : (3,) -- center of the sphere
      radius : float -- radius of the sphere
      ray : Ray -- the ray to intersect
    Return:
      float -- distance to the hit, or NO_HIT (0.0) when there is none
    """
    if radius == 0:
        return NO_HIT
    op = position - ray.origin
    b = np.dot(op, ray.direction)
    det = b * b - np.dot(op, op) + radius * radius
    if det < 0:
        return NO_HIT
    det = np.sqrt(det)

    t = b - det
    if t > EPSILON:
        return float(t)
    t = b + det
    if t > EPSILON:
        return float(t)
    return NO_HIT


class Primitive:
    """Anything the renderer can intersect and shade.

    Subclasses provide intersect(ray) plus the position, colour, diffuse
    and specular attributes read by the shading code.
    """

    def intersect(self, ray):
        raise NotImplementedError

    def translate(self, x, y, z):
        raise NotImplementedError


class Sphere(Primitive):

    def __init__(self, radius, position, colour, diffuse=1.0, specular=0.0):
        """Create a sphere with the given radius, center and material.

        Parameters:
          radius : float -- radius, must be >= 0
          position : (3,) -- a 3D point specifying the sphere's center
          colour : (3,) -- base colour in the 0-255 range
          diffuse : float -- diffuse coefficient in [0, 1]
          specular : float -- specular coefficient in [0, 1]
        """
        radius = float(radius)
        if not np.isfinite(radius) or radius < 0:
            raise GeometryError(f"sphere radius must be a finite value >= 0, got {radius}")
        self.radius = radius
        self.position = _as_vec3(position, "position")
        self.colour = _as_vec3(colour, "colour")
        self.diffuse = _as_coefficient(diffuse, "diffuse")
        self.specular = _as_coefficient(specular, "specular")

    def intersect(self, ray):
        return intersect_sphere(self.position, self.radius, ray)

    def translate(self, x, y, z):
        """Move the sphere by the given offset."""
        self.position = self.position + vec([x, y, z])

    def __repr__(self):
        return f"Sphere(radius={self.radius}, position={self.position.tolist()})"


class Light(Primitive):

    def __init__(self, intensity, position):
        """Create a point light drawn as a small yellow marker sphere.

        The marker takes part in primary-ray intersection like any other
        object; shadow tests only consider the scene's spheres.

        Parameters:
          intensity : float -- scale applied to the diffuse term, must be > 0
          position : (3,) -- location of the light
        """
        intensity = float(intensity)
        if not np.isfinite(intensity) or intensity <= 0:
            raise GeometryError(f"light intensity must be > 0, got {intensity}")
        self.intensity = intensity
        self.marker = Sphere(LIGHT_RADIUS, position, LIGHT_COLOUR)

    @property
    def position(self):
        return self.marker.position

    @property
    def colour(self):
        return self.marker.colour

    @property
    def diffuse(self):
        return self.marker.diffuse

    @property
    def specular(self):
        return self.marker.specular

    @property
    def radius(self):
        return self.marker.radius

    def intersect(self, ray):
        return self.marker.intersect(ray)

    def translate(self, x, y, z):
        self.marker.translate(x, y, z)

    def __repr__(self):
        return f"Light(intensity={self.intensity}, position={self.position.tolist()})"
