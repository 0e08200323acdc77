_abbrevs = [(1 << 50, 'P'),
            (1 << 40, 'T'),
            (1 << 30, 'G'),
            (1 << 20, 'M'),
            (1 << 10, 'k'),
            (1, '')
            ]


def format_bytes(size):
    """Return a human readable size string (i.e., kB, MB, etc)"""
    k = 2.0
    # this makes the jump occur at 2kB instead of 1kB, which makes thing a little more readable
    for factor, suffix in _abbrevs:
        if size > k * factor:
            break
    s = "%.2f%sB" % (size / (1.0 * factor), suffix)
    return s


def shorten(string, dx, text_size):
    """shorten a label so it roughly fits into dx pixels"""
    max_len = int(dx / text_size) + 5
    if len(string) > max_len:
        string = string[:max(max_len - 1, 0)]
    return string
