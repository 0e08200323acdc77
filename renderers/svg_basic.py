"""
Basic static SVG renderer for a computed tile tree.

Generates a self-contained SVG file with flat rectangles and labels only,
no cushion shading, no interactivity, no JavaScript.
"""

import html

from logger import logger
from utils import format_bytes, shorten
from .colormap import depth_colors, tile_color
from .cushion import is_shaded

TEXT_SIZE = 8


def render(root, svg_params, output_path=None):
    """
    Write a static SVG of the tile tree.

    Args:
        root: root Tile from subdivide.compute_tiles
        svg_params: the 'svg-renderer' config section
        output_path: where to save the SVG file, defaults to svg_params['filename']
    """
    width = svg_params.get("width", int(root.rect.right))
    height = svg_params.get("height", int(root.rect.bottom))
    max_rects = svg_params.get("max-rectangles", 1000)
    output_path = output_path or svg_params.get("filename")

    tiles = cull_tiles(list(root.walk()), max_rects)
    svg_content = generate_svg(tiles, width, height)

    with open(output_path, 'w') as f:
        f.write(svg_content)

    logger.info(f'SVG saved to: {output_path} ({len(tiles)} tiles)')
    return output_path


def cull_tiles(tiles, max_rects):
    """keep the max_rects largest tiles, in drawing order"""
    if max_rects is None or len(tiles) <= max_rects:
        return tiles
    logger.debug('dropping %d smallest of %d tiles' % (len(tiles) - max_rects, len(tiles)))
    order = sorted(range(len(tiles)), key=lambda i: -tiles[i].rect.area)
    keep = set(order[:max_rects])
    return [t for i, t in enumerate(tiles) if i in keep]


def generate_svg(tiles, width, height):
    """Generate a static SVG document with rectangles and text labels."""
    clip_defs, body = render_tiles(tiles)

    return f'''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg"
     width="{width}" height="{height}" viewBox="0 0 {width} {height}"
     style="background-color: #000000;">
  <defs>
    <style type="text/css">
      rect {{ stroke: #000000; stroke-width: 1; }}
      text {{
        font-family: Helvetica, Arial, sans-serif;
        font-size: {TEXT_SIZE}px;
        fill: #000000;
        pointer-events: none;
      }}
    </style>
{clip_defs}
  </defs>
{body}
</svg>'''


def render_tiles(tiles):
    """Render tiles to SVG elements.

    Returns (clip_defs, body) where clip_defs is a string of <clipPath>
    elements for <defs>, and body is the SVG shape/text elements.
    """
    clip_parts = []
    body_parts = []

    for i, tile in enumerate(tiles):
        x, y = tile.rect.x, tile.rect.y
        dx, dy = tile.rect.width, tile.rect.height
        cs = depth_colors(tile.depth)
        fill = tile_color(tile.node) if is_shaded(tile.node) else cs[0]

        clip_id = f'c{i}'
        clip_parts.append(
            f'    <clipPath id="{clip_id}">'
            f'<rect x="{x+1}" y="{y+1}" width="{max(0, dx-2)}" height="{max(0, dy-2)}"/>'
            f'</clipPath>'
        )

        body_parts.append(
            f'  <rect x="{x}" y="{y}" width="{dx}" height="{dy}" fill="{fill}"/>'
        )

        # top/left lighter, bottom/right darker
        body_parts.append(
            f'  <polyline points="{x+1},{y+dy-1} {x+1},{y+1} {x+dx-1},{y+1}"'
            f' fill="none" stroke="{cs[1]}" stroke-width="1"/>'
        )
        body_parts.append(
            f'  <polyline points="{x+1},{y+dy-1} {x+dx-1},{y+dy-1} {x+dx-1},{y+1}"'
            f' fill="none" stroke="{cs[2]}" stroke-width="1"/>'
        )

        label = '%s (%s)' % (getattr(tile.node, 'name', ''), format_bytes(tile.node.weight()))
        text = html.escape(shorten(label, dx, TEXT_SIZE))
        if is_shaded(tile.node):
            body_parts.append(
                f'  <text x="{x + 3}" y="{y + dy / 2}" text-anchor="start"'
                f' dominant-baseline="middle" clip-path="url(#{clip_id})">{text}</text>'
            )
        else:
            body_parts.append(
                f'  <text x="{x + 3}" y="{y + 10}" text-anchor="start"'
                f' clip-path="url(#{clip_id})">{text}</text>'
            )

    return '\n'.join(clip_parts), '\n'.join(body_parts)
