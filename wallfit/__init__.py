"""Markdown on wallpapers.

The public API is what is accessible from this "root" packages without
importing sub-modules.

"""

VERSION = __version__ = '1.0'

#: Default values for command-line and Python API options. See
#: :func:`__main__.main` to learn more about specific options for
#: command-line.
#:
#: :param int width:
#:     Canvas width, in CSS pixels.
#: :param int height:
#:     Canvas height, in CSS pixels.
#: :param int min_columns:
#:     Smallest number of columns tried.
#: :param int max_columns:
#:     Largest number of columns tried, used when nothing fits.
#: :param int min_font_size:
#:     Smallest font size tried, in CSS pixels, used when nothing fits.
#: :param int max_font_size:
#:     Largest font size tried, in CSS pixels.
#: :param str stylesheet:
#:     CSS source of the wallpaper stylesheet, defaults to
#:     :data:`css.DEFAULT_STYLESHEET`.
#: :param str background:
#:     Filename of a background image.
#: :param str strategy:
#:     Search strategy, ``'linear'`` or ``'bisect'``.
#: :param bool spacing:
#:     Whether vertical margins are included when checking the fit.
DEFAULT_OPTIONS = {
    'width': 1920,
    'height': 1080,
    'min_columns': 1,
    'max_columns': 6,
    'min_font_size': 14,
    'max_font_size': 24,
    'stylesheet': None,
    'background': None,
    'strategy': 'linear',
    'spacing': False,
}

__all__ = [
    'DEFAULT_OPTIONS', 'LOGGER', 'PROGRESS_LOGGER', 'VERSION', 'Document',
    'Markdown', '__version__', 'fit']


# Import after setting the options, as they are used in other modules
from .logger import LOGGER, PROGRESS_LOGGER  # noqa: I001, E402
from .document import Document, Markdown, fit  # noqa: E402
