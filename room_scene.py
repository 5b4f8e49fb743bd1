from utils import *
from geometry import Sphere, Light
from ray import Camera, Scene
from scenes import SceneDef
from cli import render
from logging_config import setup_logging

setup_logging()

grey = vec([200, 200, 200])

# the default room with a second, dimmer light behind the camera
scene = Scene([
    Sphere(1.0, vec([0, 0, -10]), vec([255, 0, 0])),
    Sphere(0.5, vec([-1.5, -0.5, -8]), vec([0, 255, 0])),
    Sphere(0.5, vec([1, -0.5, -6]), vec([0, 0, 255]), 1.0, 0.8),
    Sphere(500.0, vec([0, -501, -10]), grey, 1.0, 0.3),
    Sphere(500.0, vec([-503, 0, -10]), grey, 1.0, 0.3),
    Sphere(500.0, vec([0, 0, -515]), grey, 1.0, 0.3),
    Sphere(500.0, vec([503, 0, -10]), grey, 1.0, 0.3),
], [
    Light(1.0, vec([-1, 1, -5])),
    Light(0.4, vec([2, 2, 1])),
])

camera = Camera(640, 360, fov=30)

render(SceneDef(camera, scene), "room_two_lights.png")
