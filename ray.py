import threading

import numpy as np
from geometry import GeometryError, NO_HIT
from utils import vec, normalize, reflect, clamp

"""
Core implementation of the ray tracer.
"""

SPECULAR_EXPONENT = 20
DIFFUSE_SCALE = 1.0
SPECULAR_SCALE = 0.6
# offset along the surface normal before shadow testing
SHADOW_BIAS = 1e-4

WHITE = vec([255, 255, 255])


class Ray:

    def __init__(self, origin, direction):
        """Create a ray with the given origin and direction.

        The direction is stored as given; intersection code expects it to
        be unit length. Rays are read-only once built.
        """
        self.origin = np.array(origin, np.float64)
        self.direction = np.array(direction, np.float64)
        if self.origin.shape != (3,) or self.direction.shape != (3,):
            raise GeometryError("ray origin and direction must be 3-vectors")
        length = np.linalg.norm(self.direction)
        if not np.isfinite(length) or length == 0:
            raise GeometryError(f"ray direction must be non-zero and finite, got {direction!r}")
        self.origin.flags.writeable = False
        self.direction.flags.writeable = False

    def at(self, t):
        """Point at distance t along the ray."""
        return self.origin + self.direction * t


class Camera:

    def __init__(self, width, height, fov=30.0):
        """Create a pinhole camera at the origin looking down -z.

        Parameters:
          width, height : int -- image size in pixels
          fov : float -- field of view in degrees
        """
        if int(width) != width or int(height) != height or width <= 0 or height <= 0:
            raise GeometryError(f"image size must be positive integers, got {width}x{height}")
        if not 0 < fov < 180:
            raise GeometryError(f"field of view must lie in (0, 180) degrees, got {fov}")
        self.width = int(width)
        self.height = int(height)
        self.fov = float(fov)

        self.inv_width = 1.0 / self.width
        self.inv_height = 1.0 / self.height
        self.aspect = self.width / self.height
        self.angle = np.tan(np.pi * 0.5 * self.fov / 180.0)
        self._rays = None

    def generate_ray(self, x, y):
        """Compute the primary ray through the center of pixel (x, y)."""
        xx = (2.0 * ((x + 0.5) * self.inv_width) - 1.0) * self.angle * self.aspect
        yy = (1.0 - 2.0 * ((y + 0.5) * self.inv_height)) * self.angle
        return Ray(vec([0, 0, 0]), normalize(vec([xx, yy, -1.0])))

    def center_ray(self):
        """The ray through the exact center of the image, straight down -z."""
        return self.generate_ray((self.width - 1) / 2.0, (self.height - 1) / 2.0)

    def rays(self):
        """All primary rays in row-major order, built on first use.

        The camera never moves, so the list is reused for every frame.
        """
        if self._rays is None:
            self._rays = [self.generate_ray(x, y)
                          for y in range(self.height)
                          for x in range(self.width)]
        return self._rays


class Scene:

    def __init__(self, spheres, lights):
        """Create a scene containing the given spheres and lights.

        objects lists every renderable in scan order: spheres first, then
        lights. It is built once; lights are addressed by their index.
        Hold lock while rendering a frame or moving a light.
        """
        self.spheres = list(spheres)
        self.lights = list(lights)
        self.objects = tuple(self.spheres) + tuple(self.lights)
        self.lock = threading.RLock()

    def light(self, index):
        return self.lights[index]

    def translate_light(self, index, x, y, z):
        """Move a light between frames."""
        with self.lock:
            self.lights[index].translate(x, y, z)


def find_closest_object(objects, ray):
    """Computes the nearest object hit by the ray.

    Return:
      (object, float) -- the closest object and its distance, or
      (None, inf) when nothing is hit
    """
    closest = None
    closest_dist = np.inf
    for obj in objects:
        dist = obj.intersect(ray)
        if dist > 0 and dist < closest_dist:
            closest = obj
            closest_dist = dist
    return closest, closest_dist


def is_in_shadow(spheres, shadow_ray, max_distance):
    """True if any sphere blocks shadow_ray before max_distance."""
    for sphere in spheres:
        dist = sphere.intersect(shadow_ray)
        if dist > 0 and dist < max_distance:
            return True
    return False


def calc_illumination(lights, spheres, ray, closest, contact_point, normal):
    """Sum the diffuse and specular terms of all unoccluded lights.

    Parameters:
      lights : [Light] -- the lights to gather
      spheres : [Sphere] -- occluders for the shadow test
      ray : Ray -- the primary ray
      closest : Primitive -- the object that was hit
      contact_point : (3,) -- hit point, already offset along the normal
      normal : (3,) -- unit surface normal at the hit
    Return:
      (float, float) -- unclamped (diffuse, specular)
    """
    diffuse = 0.0
    specular = 0.0
    surface_dir = normalize(contact_point - closest.position)
    for light in lights:
        lightdir = contact_point - light.position
        lightdir_length = np.linalg.norm(lightdir)
        if lightdir_length == 0:
            continue
        lightdir_normalized = lightdir / lightdir_length
        light_ray = Ray(light.position, lightdir_normalized)

        if not is_in_shadow(spheres, light_ray, lightdir_length):
            diffuse += abs(float(np.dot(lightdir_normalized, surface_dir))) * light.intensity
            specular += float(np.dot(ray.direction, reflect(lightdir_normalized, normal))) ** SPECULAR_EXPONENT
    return diffuse, specular


def calc_final_colour(closest, diffuse, specular):
    """Combine the lighting terms with the object's material, in 0-255."""
    diffuse = clamp(diffuse, 0.0, 1.0)
    specular = clamp(specular, 0.0, 1.0)
    final_colour = (closest.colour * closest.diffuse * diffuse * DIFFUSE_SCALE
                    + specular * closest.specular * WHITE * SPECULAR_SCALE)
    return clamp(final_colour, 0.0, 255.0)


def shade(scene, ray):
    """Colour seen along a primary ray, or None if it hits nothing."""
    closest, dist = find_closest_object(scene.objects, ray)
    if closest is None:
        return None

    contact_point = ray.at(dist)
    normal = normalize(contact_point - closest.position)
    contact_point = contact_point + SHADOW_BIAS * normal

    diffuse, specular = calc_illumination(scene.lights, scene.spheres, ray, closest, contact_point, normal)
    return calc_final_colour(closest, diffuse, specular)
