"""
per-pixel cushion shading of leaf tiles.

the surface normal of a tile's height field is lit by a directional light
plus an ambient term; pixels are computed for a whole tile at once with
numpy. buffers are (height, width, 3) uint8 arrays, row major, in the
tile's own coordinates.
"""
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from logger import logger
from .colormap import rgb, tile_color


def is_shaded(node):
    # directories and groups are painted flat, only real files get a cushion
    return node.is_leaf() and not node.is_directory()


def render_cushion(tile, light, ambient_light, base_color, contrast=True):
    rect = tile.rect
    width = int(round(rect.width))
    height = int(round(rect.height))
    if width < 1 or height < 1:
        return np.zeros((0, 0, 3), dtype=np.uint8)

    lx, ly, lz = light
    xx2, xx1, yy2, yy1 = tile.surface.coefficients
    x0 = int(rect.x)
    y0 = int(rect.y)

    nx = (2.0 * xx2 * (np.arange(width) + x0) + xx1)[np.newaxis, :]
    ny = (2.0 * yy2 * (np.arange(height) + y0) + yy1)[:, np.newaxis]
    cosa = (nx * lx + ny * ly + lz) / np.sqrt(nx * nx + ny * ny + 1.0)

    # only the part of the color above the ambient level is shaded
    span = np.maximum(np.asarray(base_color, dtype=float) - ambient_light, 0.0)
    shade = np.maximum(np.floor(cosa[..., np.newaxis] * span + 0.5), 0.0)
    image = np.clip(shade + ambient_light, 0, 255).astype(np.uint8)

    if contrast:
        ensure_contrast(image)
    return image


def ensure_contrast(image):
    """draw a contrasting line on the right/bottom edge if it would blend into the neighbor

    compares samples of the outermost column (row) with the ones 5 pixels
    inside; a few identical pixels are fine, more than 10% are not.
    modifies image in place and returns it.
    """
    height, width = image.shape[:2]

    if width > 5:
        x1, x2 = width - 6, width - 1
        rows = np.arange(max(height // 10, 5), height, max(height // 10, 5))
        same = np.all(image[rows, x1] == image[rows, x2], axis=-1).sum()
        if len(rows) and same * 10 > len(rows):
            image[:, x2] = contrasting_color(image[height // 2, x2])

    if height > 5:
        y1, y2 = height - 6, height - 1
        cols = np.arange(max(width // 10, 5), width, max(width // 10, 5))
        same = np.all(image[y1, cols] == image[y2, cols], axis=-1).sum()
        if len(cols) and same * 10 > len(cols):
            image[y2, :] = contrasting_color(image[y2, width // 2])

    return image


def contrasting_color(pixel):
    channels = np.asarray(pixel, dtype=int)
    return np.where(channels < 128, np.minimum(channels * 2, 255), channels // 2).astype(np.uint8)


def render_cushions(root, config, workers=None):
    """shade every file tile below root, returns {tile: buffer}"""
    tiles = [t for t in root.walk() if is_shaded(t.node)]

    def render(tile):
        return render_cushion(tile, config.light_vector, config.ambient_light,
                              rgb(tile_color(tile.node)), config.ensure_contrast)

    if workers and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            buffers = list(pool.map(render, tiles))
    else:
        buffers = [render(t) for t in tiles]

    logger.debug('rendered %d cushions' % len(tiles))
    return dict(zip(tiles, buffers))
