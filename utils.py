import numpy as np


def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)

def normalize(v):
    """Return a unit vector in the direction of the vector v."""
    return v / np.linalg.norm(v)

def reflect(i, n):
    """Reflect the incident direction i about the normal n (glm convention)."""
    return i - 2.0 * np.dot(n, i) * n

def clamp(x, lo, hi):
    """Clamp a scalar or an array to [lo, hi], channel by channel."""
    if np.ndim(x) == 0:
        return max(lo, min(hi, x))
    return np.clip(x, lo, hi)


def pack_argb(r, g, b, a=255):
    """Pack 8-bit channels into one 0xAARRGGBB pixel."""
    return (int(a) & 0xFF) << 24 | (int(r) & 0xFF) << 16 | (int(g) & 0xFF) << 8 | (int(b) & 0xFF)

def unpack_argb(pixel):
    """Split a packed 0xAARRGGBB pixel into (a, r, g, b)."""
    pixel = int(pixel)
    return ((pixel >> 24) & 0xFF, (pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF)
