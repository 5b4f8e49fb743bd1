from PIL import Image as PIM
import numpy as np

import matplotlib.pyplot as plt

from geometry import GeometryError
from utils import pack_argb

BACKGROUND = pack_argb(0, 0, 0)


class FrameBuffer(object):
    """Packed 0xAARRGGBB pixels, height rows of stride pixels each.

    Only the first width pixels of a row are visible. Each pixel is written
    by exactly one render worker per frame.
    """

    def __init__(self, width, height, stride=None):
        if stride is None:
            stride = width
        if width <= 0 or height <= 0 or stride < width:
            raise GeometryError(f"invalid buffer size {width}x{height} with stride {stride}")
        self.width = int(width)
        self.height = int(height)
        self.stride = int(stride)
        self.pixels = np.full(self.height * self.stride, BACKGROUND, dtype=np.uint32)

    @property
    def shape(self):
        return (self.height, self.width)

    def clear(self, pixel=BACKGROUND):
        self.pixels[:] = pixel

    def set_pixel(self, x, y, r, g, b, a=255):
        self.pixels[y * self.stride + x] = pack_argb(r, g, b, a)

    def put(self, x, y, pixel):
        self.pixels[y * self.stride + x] = pixel

    def get_pixel(self, x, y):
        return int(self.pixels[y * self.stride + x])

    def argb_pixels(self):
        """(height, width) view of the visible pixels."""
        return self.pixels.reshape(self.height, self.stride)[:, :self.width]

    def rgb_pixels(self):
        """(height, width, 3) uint8 copy of the visible pixels."""
        argb = self.argb_pixels()
        rgb = np.empty((self.height, self.width, 3), dtype=np.uint8)
        rgb[:, :, 0] = (argb >> 16) & 0xFF
        rgb[:, :, 1] = (argb >> 8) & 0xFF
        rgb[:, :, 2] = argb & 0xFF
        return rgb

    def tobytes(self):
        return self.argb_pixels().tobytes()

    def PIL(self):
        return PIM.fromarray(self.rgb_pixels())

    def writeToFile(self, output_path, **kwargs):
        self.PIL().save(output_path, **kwargs)

    def show(self, title=None, axis=None, **kwargs):
        """Draw the buffer with matplotlib; returns the AxesImage."""
        if axis is None:
            if title is not None:
                plt.figure(num=title)
            else:
                plt.figure()
            axis = plt.gca()
        image = axis.imshow(self.rgb_pixels(), **kwargs)
        axis.axis('off')
        if title:
            axis.set_title(title)
        return image
