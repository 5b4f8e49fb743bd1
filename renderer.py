import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor, wait

from framebuffer import FrameBuffer, BACKGROUND
from ray import shade
from utils import pack_argb

"""
Multi-threaded frame renderer: the image is cut into horizontal row bands
and each band is shaded by one worker of a persistent thread pool.
"""

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 8


class RenderError(RuntimeError):
    """A worker failed; the frame's pixels are incomplete."""


def row_bands(height, num_workers):
    """Split [0, height) into at most num_workers contiguous (start, end) bands.

    Every band has ceil(height / num_workers) rows except possibly the last.
    """
    if num_workers <= 0:
        raise ValueError(f"num_workers must be positive, got {num_workers}")
    rows_per_band = math.ceil(height / num_workers)
    bands = []
    for i in range(num_workers):
        start = rows_per_band * i
        end = min(rows_per_band * (i + 1), height)
        if start >= end:
            break
        bands.append((start, end))
    return bands


def render_rows(scene, rays, buffer, start, end):
    """Shade rows [start, end) into buffer. rays is the camera's row-major list."""
    width = buffer.width
    for y in range(start, end):
        stride = width * y
        for x in range(width):
            colour = shade(scene, rays[stride + x])
            if colour is None:
                buffer.put(x, y, BACKGROUND)
            else:
                buffer.put(x, y, pack_argb(int(colour[0]), int(colour[1]), int(colour[2])))


class TileRenderer:

    def __init__(self, num_workers=DEFAULT_WORKERS):
        """Create a renderer backed by a pool of num_workers threads.

        The pool lives until close() so frames don't pay for thread start-up.
        """
        if num_workers <= 0:
            raise ValueError(f"num_workers must be positive, got {num_workers}")
        self.num_workers = num_workers
        self._pool = ThreadPoolExecutor(max_workers=num_workers, thread_name_prefix="raytrace")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def close(self):
        self._pool.shutdown(wait=True)

    def render(self, scene, camera, buffer):
        """Render one frame of scene into buffer and wait for every band.

        The scene lock is held for the whole frame, so lights can only move
        between frames.

        Return:
          float -- wall time of the frame in milliseconds
        Raises:
          RenderError -- if any worker raised; the buffer is then partial
        """
        if (buffer.width, buffer.height) != (camera.width, camera.height):
            raise ValueError(
                f"buffer is {buffer.width}x{buffer.height} but camera is {camera.width}x{camera.height}")
        rays = camera.rays()
        bands = row_bands(buffer.height, self.num_workers)

        t1 = time.perf_counter()
        with scene.lock:
            futures = {self._pool.submit(render_rows, scene, rays, buffer, start, end): (start, end)
                       for start, end in bands}
            wait(futures)
        duration = (time.perf_counter() - t1) * 1000.0

        for future, (start, end) in futures.items():
            error = future.exception()
            if error is not None:
                logger.error("worker for rows %d-%d failed: %s", start, end, error)
                raise RenderError(f"rendering rows {start}-{end} failed") from error

        logger.debug("rendered %d bands in %.1f ms", len(bands), duration)
        return duration


def render_image(scene, camera, num_workers=DEFAULT_WORKERS):
    """Render a single frame into a fresh FrameBuffer."""
    buffer = FrameBuffer(camera.width, camera.height)
    with TileRenderer(num_workers) as renderer:
        renderer.render(scene, camera, buffer)
    return buffer
