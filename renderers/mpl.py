import matplotlib.pyplot as plt
import numpy as np

from logger import logger
from .colormap import (background_color, cushion_grid_color, dir_fill_color,
                       outline_color, rgb, tile_color)
from .cushion import is_shaded, render_cushions


def compose(root, config, width=None, height=None, workers=None):
    """paint the tile tree into one (height, width, 3) uint8 image

    parents are painted before their children, so children cover them.
    """
    width = width or int(root.rect.right)
    height = height or int(root.rect.bottom)
    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[:] = rgb(background_color)

    buffers = render_cushions(root, config, workers) if config.cushion_shading else {}
    dir_fill = rgb(dir_fill_color)
    outline = rgb(outline_color)
    grid = rgb(cushion_grid_color)

    for tile in root.walk():
        rx, ry, x0, y0, x1, y1 = _pixel_bounds(tile.rect, width, height)
        if x1 <= x0 or y1 <= y0:
            continue

        if config.cushion_shading:
            if tile in buffers:
                buf = buffers[tile]
                canvas[y0:y1, x0:x1] = buf[y0 - ry:y1 - ry, x0 - rx:x1 - rx]
                if config.cushion_grid:
                    # a clearly visible boundary, except along the canvas border
                    if tile.rect.x > 0:
                        canvas[y0:y1, x0] = grid
                    if tile.rect.y > 0:
                        canvas[y0, x0:x1] = grid
            else:
                canvas[y0:y1, x0:x1] = dir_fill
        else:
            fill = rgb(tile_color(tile.node)) if is_shaded(tile.node) else dir_fill
            canvas[y0:y1, x0:x1] = fill
            canvas[y0, x0:x1] = outline
            canvas[y1 - 1, x0:x1] = outline
            canvas[y0:y1, x0] = outline
            canvas[y0:y1, x1 - 1] = outline

    return canvas


def _pixel_bounds(rect, width, height):
    rx = int(rect.x)
    ry = int(rect.y)
    x0 = max(rx, 0)
    y0 = max(ry, 0)
    x1 = min(rx + int(round(rect.width)), width)
    y1 = min(ry + int(round(rect.height)), height)
    return rx, ry, x0, y0, x1, y1


def render(root, config, output_path=None, workers=None):
    image = compose(root, config, workers=workers)
    if output_path:
        plt.imsave(output_path, image)
        logger.info(f'PNG saved to: {output_path}')
    else:
        plt.imshow(image, interpolation='nearest')
        plt.axis('off')
        plt.show()
    return image
