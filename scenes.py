from geometry import Sphere, Light
from ray import Scene, Camera
from renderer import render_image, DEFAULT_WORKERS
from utils import vec

WALL_COLOUR = vec([200, 200, 200])


class SceneDef(object):
    def __init__(self, camera, scene):
        self.camera = camera
        self.scene = scene

    def render(self, output_path=None, num_workers=DEFAULT_WORKERS):
        buffer = render_image(self.scene, self.camera, num_workers)
        if output_path is None:
            return buffer
        buffer.writeToFile(output_path)
        return buffer


def default_scene():
    """Three coloured spheres in a room of four huge wall spheres, one light."""
    spheres = [
        Sphere(1.0, vec([0, 0, -10]), vec([255, 0, 0])),
        Sphere(0.5, vec([-1.5, -0.5, -8]), vec([0, 255, 0])),
        Sphere(0.5, vec([1, -0.5, -6]), vec([0, 0, 255])),
        # walls
        Sphere(500.0, vec([0, -501, -10]), WALL_COLOUR, 1.0, 0.3),
        Sphere(500.0, vec([-503, 0, -10]), WALL_COLOUR, 1.0, 0.3),
        Sphere(500.0, vec([0, 0, -515]), WALL_COLOUR, 1.0, 0.3),
        Sphere(500.0, vec([503, 0, -10]), WALL_COLOUR, 1.0, 0.3),
    ]
    lights = [
        Light(1.0, vec([-1, 1, -5])),
    ]
    return Scene(spheres, lights)


def single_sphere_scene():
    """One matte red sphere lit from the upper left."""
    spheres = [
        Sphere(1.0, vec([0, 0, -10]), vec([255, 0, 0]), 1.0, 0.0),
    ]
    lights = [
        Light(1.0, vec([-1, 1, -5])),
    ]
    return Scene(spheres, lights)


SCENES = {
    "room": default_scene,
    "single": single_sphere_scene,
}


def RoomExample(width, height, fov=30.0):
    return SceneDef(camera=Camera(width, height, fov), scene=default_scene())


def SingleSphereExample(width, height, fov=30.0):
    return SceneDef(camera=Camera(width, height, fov), scene=single_sphere_scene())
