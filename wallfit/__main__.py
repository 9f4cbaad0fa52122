"""Command-line interface to WallFit."""

import argparse
import logging
import sys
from pathlib import Path

from . import DEFAULT_OPTIONS, LOGGER, Markdown, __version__
from .search import STRATEGIES
from .sizes import WALLPAPER_SIZES, get_size

FORMATS = ('html', 'pdf', 'png')


class PrintSizes(argparse.Action):
    def __call__(*_, **__):
        for name, size in WALLPAPER_SIZES.items():
            print(  # noqa: T201
                f'{name:16} {size.width:>5} × {size.height:<5} '
                f'{size.aspect_ratio:6} {size.category}')
        sys.exit()


class Parser(argparse.ArgumentParser):
    def __init__(self, *args, **kwargs):
        self._arguments = {}
        super().__init__(*args, **kwargs)

    def add_argument(self, *args, **kwargs):
        super().add_argument(*args, **kwargs)
        key = args[-1].lstrip('-')
        kwargs['flags'] = args
        kwargs['positional'] = args[-1][0] != '-'
        self._arguments[key] = kwargs

    @property
    def docstring(self):
        self._arguments['help'] = self._arguments.pop('help')
        data = []
        for key, args in self._arguments.items():
            data.append('.. option:: ')
            action = args.get('action', 'store')
            for flag in args['flags']:
                data.append(flag)
                if not args['positional'] and action == 'store':
                    data.append(f' <{key}>')
                data.append(', ')
            data[-1] = '\n\n'
            data.append(f'  {args["help"][0].upper()}{args["help"][1:]}.\n\n')
            if 'choices' in args:
                choices = ', '.join(args['choices'])
                data.append(f'  Possible choices: {choices}.\n\n')
        return ''.join(data)


PARSER = Parser(
    prog='wallfit', description='Fit Markdown documents on wallpapers.')
PARSER.add_argument(
    'input', help='filename of the Markdown input, or - for stdin')
PARSER.add_argument(
    'output', help='filename where output is written, or - for stdout')
PARSER.add_argument(
    '-f', '--format', choices=FORMATS,
    help='output format, defaults to the output filename extension or html')
PARSER.add_argument(
    '-e', '--encoding', default='utf-8', help='input character encoding')
PARSER.add_argument(
    '-s', '--stylesheet', help='filename of the wallpaper CSS stylesheet')
PARSER.add_argument(
    '-S', '--size', help='name of the wallpaper size, defaults to FHD')
PARSER.add_argument(
    '-W', '--width', type=int, help='canvas width in pixels')
PARSER.add_argument(
    '-H', '--height', type=int, help='canvas height in pixels')
PARSER.add_argument(
    '--min-columns', type=int, help='smallest number of columns')
PARSER.add_argument(
    '--max-columns', type=int, help='largest number of columns')
PARSER.add_argument(
    '--min-font-size', type=int, help='smallest font size in pixels')
PARSER.add_argument(
    '--max-font-size', type=int, help='largest font size in pixels')
PARSER.add_argument(
    '-b', '--background', help='filename of a background image')
PARSER.add_argument(
    '--strategy', choices=STRATEGIES,
    help='configuration search strategy, defaults to linear')
PARSER.add_argument(
    '--spacing', action='store_true',
    help='include vertical margins when checking whether content fits')
PARSER.add_argument(
    '-r', '--resolution', type=float, default=96,
    help='PNG pixels per CSS inch, defaults to 96')
PARSER.add_argument(
    '-u', '--base-url',
    help='base for relative URLs in the Markdown input, defaults to the '
    'input’s folder or the current directory for stdin')
PARSER.add_argument(
    '-v', '--verbose', action='store_true',
    help='show warnings and information messages')
PARSER.add_argument(
    '-d', '--debug', action='store_true', help='show debugging messages')
PARSER.add_argument(
    '-q', '--quiet', action='store_true', help='hide logging messages')
PARSER.add_argument(
    '--version', action='version',
    version=f'WallFit version {__version__}',
    help='print WallFit’s version number and exit')
PARSER.add_argument(
    '-l', '--list-sizes', action=PrintSizes, nargs=0,
    help='print the known wallpaper sizes and exit')
PARSER.set_defaults(**DEFAULT_OPTIONS)
# Canvas size defaults depend on --size.
PARSER.set_defaults(width=None, height=None)


def main(argv=None, stdout=None, stdin=None, Markdown=Markdown):  # noqa: N803
    """The ``wallfit`` program takes at least two arguments:

    .. code-block:: sh

        wallfit [options] <input> <output>

    """
    args = PARSER.parse_args(argv)

    size = None
    if args.size is not None:
        try:
            size = get_size(args.size)
        except KeyError:
            PARSER.error(f'unknown size {args.size!r}, see --list-sizes')
    if args.width is None:
        args.width = size.width if size else DEFAULT_OPTIONS['width']
    if args.height is None:
        args.height = size.height if size else DEFAULT_OPTIONS['height']

    if args.stylesheet is not None:
        args.stylesheet = Path(args.stylesheet).read_text(encoding='utf-8')

    if args.input == '-':
        source = stdin or sys.stdin.buffer
        if args.base_url is None:
            args.base_url = Path.cwd().as_uri() + '/'
    else:
        source = args.input

    if args.output == '-':
        output = stdout or sys.stdout.buffer
        output_format = args.format or 'html'
    else:
        output = args.output
        suffix = Path(output).suffix.lower().lstrip('.')
        output_format = args.format or (
            suffix if suffix in FORMATS else 'html')

    options = {
        key: value for key, value in vars(args).items()
        if key in DEFAULT_OPTIONS}

    # Default to logging to stderr.
    if args.debug:
        LOGGER.setLevel(logging.DEBUG)
    elif args.verbose:
        LOGGER.setLevel(logging.INFO)
    if not args.quiet:
        handler = logging.StreamHandler()
        if args.debug:
            # Add extra information when debug logging
            handler.setFormatter(
                logging.Formatter(
                    '%(levelname)s: %(filename)s:%(lineno)d '
                    '(%(funcName)s): %(message)s'))
        else:
            handler.setFormatter(
                logging.Formatter('%(levelname)s: %(message)s'))
        LOGGER.addHandler(handler)

    markdown = Markdown(
        source, encoding=args.encoding, base_url=args.base_url)
    document = markdown.render(**options)
    if output_format == 'pdf':
        document.write_pdf(output)
    elif output_format == 'png':
        document.write_png(output, args.resolution)
    else:
        document.write_html(output)


main.__doc__ += '\n\n' + PARSER.docstring


if __name__ == '__main__':  # pragma: no cover
    main()
