#!/usr/bin/env python3
"""
cushionmap [options] [path]
path:     optional, defaults to PWD

scan a directory (or load a previous scan) and draw it as a cushion treemap,
either to a PNG/SVG file or in a matplotlib window.
"""
import argparse
import json
import os
import socket
import sys
from datetime import datetime as dt

from config import ConfigFileError, InvalidConfiguration, TreemapConfig, load_config
from geometry import Rect
from logger import logger, set_verbosity
from scan import count_leaves, dict_to_tree, get_directory_tree, tree_to_dict
from subdivide import compute_tiles
from utils import format_bytes

HOST = os.getenv('MACHINE', socket.gethostname())


def main(argv=None):
    args = parse_args(argv)
    set_verbosity(args.verbose)

    try:
        config = load_config(args.config)
        apply_cli_flags(config, args)
        treemap_config = TreemapConfig.from_sections(config)
    except (ConfigFileError, InvalidConfiguration) as exc:
        logger.error(str(exc))
        return 1

    flags = config['flags']
    if args.file:
        try:
            with open(args.file) as f:
                data = json.load(f)
            root = data['root']
            tree = dict_to_tree(data['tree'])
        except (OSError, json.JSONDecodeError) as exc:
            logger.error('failed to load scan %s: %s' % (args.file, exc))
            return 1
        except (KeyError, TypeError, AttributeError) as exc:
            logger.error('%s is not a cushionmap scan: %r' % (args.file, exc))
            return 1
        logger.info('loaded scan of %s from %s' % (root, args.file))
    else:
        root = os.path.realpath(args.path)
        if not os.path.exists(root):
            logger.error('no such file or directory: %s' % args.path)
            return 1
        t0 = dt.now()
        tree = get_directory_tree(
            root,
            exclude_dirs=flags['exclude-dirs'],
            exclude_files=flags['exclude-files'],
            exclude_filters=flags['exclude-filters'],
            skip_mount=flags['skip-mount'],
            group_loose_files=flags['group-loose-files'],
        )
        delta_t = (dt.now() - t0).total_seconds()
        logger.info('%f sec to scan %s / %s files' % (delta_t, format_bytes(tree.size), count_leaves(tree)))

        if args.save:
            save_scan(tree, root, flags, delta_t, args.save)

    # without -o, a configured filename picks the renderer
    output = (args.output or config['png-renderer'].get('filename') or
              config['svg-renderer'].get('filename'))
    renderer = 'svg-renderer' if output and output.lower().endswith('.svg') else 'png-renderer'
    width = config[renderer]['width']
    height = config[renderer]['height']

    tiles = compute_tiles(tree, Rect(0, 0, width, height), treemap_config)
    logger.info('%d tiles for %s' % (sum(1 for _ in tiles.walk()), root))

    if renderer == 'svg-renderer':
        from renderers.svg_basic import render as render_svg
        render_svg(tiles, config['svg-renderer'], output)
    else:
        from renderers.mpl import render as render_png
        render_png(tiles, treemap_config, output, workers=args.workers)
    return 0


def save_scan(tree, root, flags, delta_t, path):
    data = {
        'tree': tree_to_dict(tree),
        'root': root,
        'host': HOST,
        'options': flags,
        'scan_timestamp': dt.strftime(dt.now(), '%Y%m%d-%H%M%S'),
        'scan_duration_seconds': delta_t,
    }
    logger.info('archiving results to:\n  %s' % path)
    try:
        with open(path, 'w') as f:
            json.dump(data, f)
    except OSError as exc:
        logger.warning('failed to archive scan: %s' % exc)


def apply_cli_flags(config, args):
    """CLI values override the config file; list values are combined"""
    flags = config['flags']
    flags['exclude-dirs'] = flags['exclude-dirs'] + args.exclude_dir
    flags['exclude-files'] = flags['exclude-files'] + args.exclude_file
    flags['exclude-filters'] = flags['exclude-filters'] + args.exclude_filter
    if args.skip_mount:
        flags['skip-mount'] = True
    if args.no_group:
        flags['group-loose-files'] = False

    layout = config['layout']
    if args.simple:
        layout['squarify'] = False
    if args.orientation:
        layout['orientation'] = args.orientation
    if args.min_tile_size is not None:
        layout['min-tile-size'] = args.min_tile_size
    if args.max_depth is not None:
        layout['max-depth'] = args.max_depth

    cushion = config['cushion']
    if args.no_cushion:
        cushion['cushion-shading'] = False
    if args.no_contrast:
        cushion['ensure-contrast'] = False
    if args.grid:
        cushion['cushion-grid'] = True

    for renderer in ('png-renderer', 'svg-renderer'):
        if args.width:
            config[renderer]['width'] = args.width
        if args.height:
            config[renderer]['height'] = args.height
    return config


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='cushionmap', description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('path', nargs='?', default='.')
    parser.add_argument('-d', '--exclude-dir', action='append', default=[],
                        help='exclude directory by name')
    parser.add_argument('--exclude-file', action='append', default=[],
                        help='exclude file by name')
    parser.add_argument('--exclude-filter', action='append', default=[],
                        help='exclude file by substring match')
    parser.add_argument('-x', '--skip-mount', action='store_true',
                        help='do not descend into other filesystems')
    parser.add_argument('--no-group', action='store_true',
                        help='do not gather loose files into a <Files> tile')
    parser.add_argument('-f', '--file', help='load previous scan from json file')
    parser.add_argument('--save', help='archive the scan to a json file')
    parser.add_argument('-o', '--output',
                        help='.png or .svg file, defaults to the configured filename, else show a window')
    parser.add_argument('--width', type=int)
    parser.add_argument('--height', type=int)
    parser.add_argument('--simple', action='store_true',
                        help='alternating slice layout instead of squarified')
    parser.add_argument('--orientation', choices=['horizontal', 'vertical', 'auto'])
    parser.add_argument('--min-tile-size', type=float)
    parser.add_argument('--max-depth', type=int)
    parser.add_argument('--no-cushion', action='store_true', help='flat tiles with outlines')
    parser.add_argument('--no-contrast', action='store_true', help='skip the edge contrast repair')
    parser.add_argument('--grid', action='store_true', help='draw a grid line between cushions')
    parser.add_argument('-j', '--workers', type=int, help='threads for cushion rendering')
    parser.add_argument('-c', '--config', help='config file, default ~/.config/cushionmap.json')
    parser.add_argument('-v', '--verbose', action='count', default=0)
    return parser.parse_args(argv)


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
