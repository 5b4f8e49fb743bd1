"""
Command line front end: render a scene to a PNG, or open an interactive
window where the keyboard moves the first light.

Usage examples:
  python cli.py --scene room --width 640 --height 360 --output room.png
  python cli.py --scene room --view
"""
import argparse
import logging

import matplotlib.pyplot as plt

import config
from framebuffer import FrameBuffer
from logging_config import setup_logging
from ray import Camera
from renderer import TileRenderer, RenderError
from scenes import SCENES, SceneDef

logger = logging.getLogger(__name__)

STEP = 0.1

# key -> light translation
KEY_BINDINGS = {
    'e': (0.0, 0.0, -STEP),
    'd': (0.0, 0.0, STEP),
    's': (-STEP, 0.0, 0.0),
    'f': (STEP, 0.0, 0.0),
    'q': (0.0, STEP, 0.0),
    'a': (0.0, -STEP, 0.0),
}
QUIT_KEYS = ('escape',)


def apply_key(scene, key, light_index=0):
    """Move the light bound to key. Returns False for unbound keys."""
    delta = KEY_BINDINGS.get(key)
    if delta is None:
        return False
    scene.translate_light(light_index, *delta)
    logger.debug("light %d moved to %s", light_index, scene.light(light_index).position.tolist())
    return True


def render(scene_def, output_path=None, num_workers=config.NUM_THREADS, frames=1):
    """Render frames of scene_def with one worker pool; write the last one out."""
    camera = scene_def.camera
    buffer = FrameBuffer(camera.width, camera.height)
    with TileRenderer(num_workers) as renderer:
        for _ in range(frames):
            duration = renderer.render(scene_def.scene, camera, buffer)
            logger.info("Raytrace - %d ms", duration)
    if output_path is not None:
        buffer.writeToFile(output_path)
        logger.info("wrote %s", output_path)
    return buffer


def handle_key(key, scene, renderer, camera, buffer):
    """Apply one key press and render the next frame if the light moved.

    Returns False when the viewer should close: on a quit key, or when the
    frame failed and the buffer only holds part of it.
    """
    if key in QUIT_KEYS:
        return False
    if not apply_key(scene, key):
        return True
    try:
        frame_ms = renderer.render(scene, camera, buffer)
    except RenderError as error:
        logger.error("frame failed, closing viewer: %s", error.__cause__ or error)
        return False
    logger.info("Raytrace - %d ms", frame_ms)
    return True


def run_viewer(scene_def, num_workers=config.NUM_THREADS):
    """Show the render in a matplotlib window and re-render on key presses.

    Each key press is applied after the previous frame has been joined,
    then the next frame is rendered.
    """
    camera = scene_def.camera
    scene = scene_def.scene
    buffer = FrameBuffer(camera.width, camera.height)

    with TileRenderer(num_workers) as renderer:
        duration = renderer.render(scene, camera, buffer)
        logger.info("Raytrace - %d ms", duration)
        image = buffer.show(title="Tracer")
        figure = image.figure

        def on_key(event):
            if not handle_key(event.key, scene, renderer, camera, buffer):
                plt.close(figure)
                return
            image.set_data(buffer.rgb_pixels())
            figure.canvas.draw_idle()

        figure.canvas.mpl_connect('key_press_event', on_key)
        plt.show()
    return buffer


def build_parser():
    parser = argparse.ArgumentParser(description="Single-bounce sphere ray tracer")
    parser.add_argument("--scene", choices=sorted(SCENES), default="room")
    parser.add_argument("--width", type=int, default=config.WIDTH)
    parser.add_argument("--height", type=int, default=config.HEIGHT)
    parser.add_argument("--fov", type=float, default=config.FOV, help="field of view in degrees")
    parser.add_argument("--threads", type=int, default=config.NUM_THREADS)
    parser.add_argument("--frames", type=int, default=1, help="frames to render (timing runs)")
    parser.add_argument("--output", default=config.OUTPUT_PATH)
    parser.add_argument("--view", action="store_true", help="open an interactive window")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    scene_def = SceneDef(camera=Camera(args.width, args.height, args.fov),
                         scene=SCENES[args.scene]())
    logger.info("rendering '%s' at %dx%d with %d threads",
                args.scene, args.width, args.height, args.threads)
    if args.view:
        run_viewer(scene_def, num_workers=args.threads)
    else:
        render(scene_def, args.output, num_workers=args.threads, frames=max(1, args.frames))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
