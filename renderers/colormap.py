from matplotlib.colors import to_rgb

colormap = [
    # main       light      dark
    ["#ff7f7f", "#ffbfbf", "#bf7f7f"],
    ["#ffbf7f", "#ffdfbf", "#bf9f5f"],
    ["#ffff00", "#ffffbf", "#bfbf3f"],
    ["#7fff7f", "#bfffbf", "#7fbf7f"],
    ["#7fffff", "#dfffff", "#7fbfbf"],
    ["#bfbfff", "#dfdfff", "#9f9fff"],
    ["#bfbfbf", "#dfdfdf", "#9f9f9f"],
    ["#ff7fff", "#ffbfff", "#bf7fbf"],
]

# tile colors by node category
category_colors = {
    'image': "#00ffff",
    'audio': "#ffff00",
    'video': "#ff00ff",
    'archive': "#00ff00",
    'source': "#ff0064",
    'document': "#3278ff",
    'executable': "#ff8000",
    'group': "#a0a0a0",
    'directory': "#606060",
    'other': "#ff0000",
}

dir_fill_color = "#606060"
outline_color = "#000000"
cushion_grid_color = "#808080"
background_color = "#000000"


def rgb(color):
    """'#rrggbb' (or any matplotlib color) -> (r, g, b) ints in 0..255"""
    return tuple(int(round(c * 255)) for c in to_rgb(color))


def tile_color(node):
    return category_colors.get(node.category(), category_colors['other'])


def depth_colors(depth):
    return colormap[depth % len(colormap)]
