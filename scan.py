import os

from logger import logger
from utils import format_bytes

LOOSE_FILES_NAME = '<Files>'

# extension -> category, used to pick tile colors
_categories = {
    'image': ['.png', '.jpg', '.jpeg', '.gif', '.bmp', '.svg', '.tif', '.tiff', '.webp', '.ico'],
    'audio': ['.mp3', '.wav', '.flac', '.ogg', '.aac', '.m4a'],
    'video': ['.mp4', '.mkv', '.avi', '.mov', '.webm', '.mpg', '.mpeg'],
    'archive': ['.zip', '.tar', '.gz', '.bz2', '.xz', '.7z', '.rar', '.tgz', '.zst', '.deb', '.rpm'],
    'source': ['.py', '.c', '.h', '.cpp', '.hpp', '.cc', '.js', '.ts', '.java', '.go', '.rs',
               '.rb', '.sh', '.pl', '.php', '.cs', '.swift', '.kt'],
    'document': ['.txt', '.md', '.rst', '.pdf', '.doc', '.docx', '.odt', '.html', '.htm',
                 '.json', '.xml', '.csv', '.yaml', '.yml', '.tex'],
    'executable': ['.exe', '.dll', '.so', '.dylib', '.o', '.a', '.bin', '.pyc'],
}
EXTENSION_CATEGORIES = {ext: cat for cat, exts in _categories.items() for ext in exts}


class TreeNode(object):
    def __init__(self, path, size=0, is_dir=False):
        self.path = path
        self.size = size
        self.is_dir = is_dir
        self._children = []
        self.details = {}

    # weighted node interface, see nodes.py

    def weight(self):
        return self.size

    def children(self):
        return self._children

    def is_leaf(self):
        return not self._children

    def is_directory(self):
        return self.is_dir

    def category(self):
        if self.is_dir:
            return 'directory'
        ext = os.path.splitext(self.path)[1].lower()
        return EXTENSION_CATEGORIES.get(ext, 'other')

    def add_child(self, child):
        self._children.append(child)
        self.size += child.size

    @property
    def name(self):
        name = os.path.basename(self.path.rstrip(os.sep)) or self.path
        if self.is_dir:
            name += os.sep
        return name

    def __str__(self):
        size = format_bytes(self.size)
        info_list = [size]
        if self._children:
            info_list.append('%d children' % len(self._children))
        if 'skip' in self.details:
            info_list.append('skipped: %s' % self.details['skip'])

        info = ', '.join(info_list)
        return '<TreeNode %s: %s>' % (self.name, info)

    def __getitem__(self, key):
        # get child by name
        for c in self._children:
            if key == c.name or key + os.sep == c.name:
                return c
        raise KeyError(key)

    def __repr__(self):
        return self.__str__()


class FileGroup(TreeNode):
    """the plain files of a directory that also has subdirectories"""

    def __init__(self, parent_path):
        super().__init__(os.path.join(parent_path, LOOSE_FILES_NAME), is_dir=False)

    @property
    def name(self):
        return LOOSE_FILES_NAME

    def category(self):
        return 'group'


def count_leaves(t):
    if t.children():
        return sum(count_leaves(c) for c in t.children())
    return 1


def tree_to_dict(t):
    d = {
        'path': t.path,
        'size': t.size,
        'is_dir': t.is_dir,
        'details': t.details,
        'children': [tree_to_dict(c) for c in t.children()],
    }
    if isinstance(t, FileGroup):
        d['group'] = True
    return d


def dict_to_tree(d):
    if d.get('group'):
        t = FileGroup(os.path.dirname(d['path']))
    else:
        # scans archived before is_dir was recorded: anything with children is a directory
        t = TreeNode(d['path'], is_dir=d.get('is_dir', bool(d['children'])))
    t.details = d.get('details', {})
    for c in d['children']:
        t.add_child(dict_to_tree(c))
    if not d['children']:
        t.size = d['size']
    return t


def get_directory_tree(path,
                       exclude_dirs=(),
                       exclude_files=(),
                       exclude_filters=(),
                       skip_mount=False,
                       group_loose_files=True):
    """scan path into a TreeNode tree, sizes in bytes, directories summed bottom up"""
    t = TreeNode(path)
    try:
        realpath = os.path.realpath(path)
    except OSError as exc:
        t.details['skip'] = str(exc)
        logger.warning('skipping %s' % exc)
        return t

    if os.path.islink(path):
        t.details['skip'] = 'symlink'
        return t

    if not os.path.isdir(path):
        try:
            t.size = os.path.getsize(path)
        except OSError as exc:
            t.details['skip'] = str(exc)
            logger.warning('skipping %s' % exc)
        return t

    t.is_dir = True
    if skip_mount and realpath != '/' and os.path.ismount(realpath):
        # different filesystem, probably don't want to scan
        logger.info('skip mount %s' % path)
        t.details['skip'] = 'mount'
        return t

    if os.path.basename(path.rstrip(os.sep)) in exclude_dirs:
        t.details['skip'] = 'exclude_dir'
        return t

    try:
        entries = sorted(os.scandir(path), key=lambda e: e.name)
    except OSError as exc:
        t.details['skip'] = str(exc)
        logger.warning('skipping %s' % exc)
        return t

    subdirs = []
    files = []
    for entry in entries:
        if any(filt in entry.name for filt in exclude_filters):
            continue
        if entry.name in exclude_files:
            continue
        subtree = get_directory_tree(entry.path, exclude_dirs, exclude_files, exclude_filters,
                                     skip_mount, group_loose_files)
        if subtree.is_dir:
            subdirs.append(subtree)
        else:
            files.append(subtree)

    for subdir in subdirs:
        t.add_child(subdir)

    if group_loose_files and subdirs and files:
        group = FileGroup(path)
        for f in files:
            group.add_child(f)
        t.add_child(group)
    else:
        for f in files:
            t.add_child(f)

    return t
