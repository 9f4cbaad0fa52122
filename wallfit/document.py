"""Markdown sources and fitted documents."""

import io
import shutil
from pathlib import Path
from subprocess import PIPE, run
from tempfile import TemporaryDirectory

from markdown_it import MarkdownIt
from PIL import Image

from . import DEFAULT_OPTIONS
from .css import DEFAULT_STYLESHEET, update_canvas_size, vertical_padding
from .logger import LOGGER, PROGRESS_LOGGER
from .measure import MeasurementAdapter
from .partition import partition
from .search import bounds_from_options, search_layout
from .serialize import make_columns_html, make_html, render

MAGIC_NUMBER = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'

MARKDOWN_PARSER = MarkdownIt('commonmark', {'html': False}).enable('table')


class Markdown:
    """Markdown document converted to HTML by markdown-it-py.

    You can just create an instance with a positional argument:
    ``doc = Markdown(something)``
    The class will try to guess if the input is a filename or a
    :term:`file object`.

    Alternatively, use **one** named argument so that no guessing is involved:

    :type filename: str or pathlib.Path
    :param filename:
        A filename, relative to the current directory, or absolute.
    :type file_obj: :term:`file object`
    :param file_obj:
        Any object with a ``read`` method.
    :param str string:
        A string of Markdown source.

    Specifying multiple inputs is an error.

    :param str encoding:
        The source character encoding, used for files and bytes.
    :param str base_url:
        The base used to resolve relative URLs (e.g. in ``![](foo.png)``).
        If not provided, the folder of the input filename is used.

    """
    def __init__(self, guess=None, filename=None, file_obj=None, string=None,
                 encoding='utf-8', base_url=None):
        PROGRESS_LOGGER.info(
            'Step 1 - Reading and converting Markdown - %s',
            guess or filename or getattr(file_obj, 'name', 'Markdown string'))
        selected_params = [
            name for name, param in (
                ('guess', guess), ('filename', filename),
                ('file_obj', file_obj), ('string', string))
            if param is not None]
        if len(selected_params) != 1:
            source = ', '.join(selected_params) or 'nothing'
            raise TypeError(f'Expected exactly one source, got {source}')

        if guess is not None:
            if hasattr(guess, 'read'):
                file_obj = guess
            else:
                filename = guess

        if filename is not None:
            path = Path(filename)
            string = path.read_bytes()
            if base_url is None:
                base_url = path.resolve().parent.as_uri() + '/'
        elif file_obj is not None:
            string = file_obj.read()
            # Some streams have a .name like '<stdin>', not a filename.
            name = getattr(file_obj, 'name', None)
            if base_url is None and isinstance(name, str) and (
                    not name.startswith('<')):
                base_url = Path(name).resolve().parent.as_uri() + '/'

        if isinstance(string, bytes):
            string = string.decode(encoding)
        self.source = string
        self.base_url = base_url
        self.markup = MARKDOWN_PARSER.render(string)

    def render(self, oracle=None, **options):
        """Fit the document on the canvas.

        :param oracle:
            The measurement oracle, a WeasyPrint based
            :class:`oracle.Oracle` by default. It is closed when the
            configuration is found.
        :param options:
            The ``options`` parameter includes by default the
            :data:`DEFAULT_OPTIONS` values.
        :returns: A :class:`Document` object.

        """
        return fit(self.markup, oracle, self.base_url, **options)


def fit(markup, oracle=None, base_url=None, **options):
    """Fit HTML ``markup`` on the canvas and return a :class:`Document`.

    Same parameters as :meth:`Markdown.render`.

    """
    for unknown in set(options) - set(DEFAULT_OPTIONS):
        LOGGER.warning('Unknown fitting option: %s.', unknown)
    new_options = DEFAULT_OPTIONS.copy()
    new_options.update(options)
    options = new_options

    width, height = options['width'], options['height']
    stylesheet = update_canvas_size(
        options['stylesheet'] or DEFAULT_STYLESHEET, width, height)
    bounds = bounds_from_options(options)
    max_column_height = height - vertical_padding(stylesheet, '.column')
    background = background_url(options['background'])

    PROGRESS_LOGGER.info('Step 2 - Searching layout configuration')
    if oracle is None:
        # Import late, as WeasyPrint needs Pango.
        from .oracle import Oracle
        oracle = Oracle(width, base_url)
    with oracle:
        adapter = MeasurementAdapter(oracle, width, stylesheet).bind(markup)
        layout = search_layout(
            adapter, bounds, max_column_height, options['strategy'],
            options['spacing'])

    PROGRESS_LOGGER.info('Step 3 - Splitting content in columns')
    return Document(
        markup, layout, stylesheet, width, height, background, base_url)


def background_url(filename):
    """Return the URL of a background image, or :obj:`None` if unusable."""
    if filename is None:
        return None
    path = Path(filename)
    try:
        with Image.open(path) as image:
            image.verify()
    except (OSError, SyntaxError, ValueError) as exception:
        LOGGER.warning(
            'Background image %s is ignored: %s', filename, exception)
        return None
    return path.resolve().as_uri()


def _write(data, target):
    if target is None:
        return data
    elif hasattr(target, 'write'):
        target.write(data)
    else:
        Path(target).write_bytes(data)


class Document:
    """Content fitted on the canvas.

    Should be obtained from :meth:`Markdown.render` or :func:`fit` but not
    instantiated directly.

    """
    def __init__(self, markup, layout, stylesheet, width, height,
                 background=None, base_url=None):
        #: The chosen :class:`nodes.LayoutConfiguration`.
        self.configuration = layout.configuration
        #: Whether no configuration fits, the content may then overflow.
        self.fallback = layout.fallback
        #: The canvas width, in CSS pixels.
        self.width = width
        #: The canvas height, in CSS pixels.
        self.height = height
        self.base_url = base_url

        if layout.tree is None:
            # Nothing measured, let CSS columns split the content.
            #: The list of :class:`nodes.ColumnSubtree`.
            self.columns = []
            #: The list of the markup fragments, one per column.
            self.fragments = []
            #: The output HTML document.
            self.html = make_columns_html(
                markup, stylesheet, self.configuration, width, background)
        else:
            self.columns = partition(layout.tree, layout.divide_marks)
            self.fragments = render(self.columns, width)
            self.html = make_html(
                self.fragments, stylesheet, self.configuration, background)

    def write_html(self, target=None):
        """Write the HTML document.

        :type target:
            :class:`str`, :class:`pathlib.Path` or :term:`file object`
        :param target:
            A filename where the UTF-8 HTML is written, a binary file object,
            or :obj:`None`.
        :returns:
            The HTML as :obj:`str` if ``target`` is not provided or
            :obj:`None`, otherwise :obj:`None`.

        """
        PROGRESS_LOGGER.info('Step 4 - Writing HTML')
        if target is None:
            return self.html
        _write(self.html.encode(), target)

    def write_pdf(self, target=None):
        """Write a one-page PDF file of the canvas size, with WeasyPrint.

        :returns:
            The PDF as :obj:`bytes` if ``target`` is not provided or
            :obj:`None`, otherwise :obj:`None`.

        """
        from weasyprint import HTML

        PROGRESS_LOGGER.info('Step 4 - Writing PDF')
        return HTML(string=self.html, base_url=self.base_url).write_pdf(target)

    def write_png(self, target=None, resolution=96):
        """Write a PNG image of the canvas, rasterized by Ghostscript.

        :param float resolution: PNG pixels per CSS inch.
        :returns:
            The PNG as :obj:`bytes` if ``target`` is not provided or
            :obj:`None`, otherwise :obj:`None`.

        """
        if shutil.which('gs') is None:
            raise RuntimeError('Ghostscript (gs) is needed for PNG output')
        with TemporaryDirectory() as folder:
            # Use a file, gs on Windows doesn’t accept binary on stdin
            pdf = Path(folder) / 'wallpaper.pdf'
            self.write_pdf(pdf)
            PROGRESS_LOGGER.info('Step 5 - Rasterizing PDF')
            command = (
                'gs', '-q', '-sDEVICE=png16m', '-dTextAlphaBits=4',
                '-dGraphicsAlphaBits=4', '-dBATCH', '-dNOPAUSE',
                '-dPDFSTOPONERROR', f'-r{resolution}',
                '-sOutputFile=-', str(pdf))
            png = run(command, stdout=PIPE, stderr=PIPE).stdout

        if not png.startswith(MAGIC_NUMBER):
            error = png.split(MAGIC_NUMBER)[0].decode().strip() or 'no output'
            raise RuntimeError(f'Ghostscript error: {error}')

        size = (
            round(self.width * resolution / 96),
            round(self.height * resolution / 96))
        with Image.open(io.BytesIO(png)) as image:
            if image.size != size:
                image = image.crop((0, 0, *size))
            output = io.BytesIO()
            image.save(output, format='png')
        return _write(output.getvalue(), target)
