"""Test the public API and the command-line interface."""

import io
import logging

import pytest
from PIL import Image

from wallfit import DEFAULT_OPTIONS, Markdown, fit
from wallfit.__main__ import main
from wallfit.logger import LOGGER, PROGRESS_LOGGER, capture_logs

from .testing_utils import FakeOracle, assert_no_logs, native

MARKDOWN = '''\
# Title

First paragraph.

- one
- two
'''


def fake_markdown(tree):
    """Return a :class:`Markdown` class measuring ``tree``."""
    class FakeMarkdown(Markdown):
        def render(self, oracle=None, **options):
            return super().render(FakeOracle(tree), **options)
    return FakeMarkdown


@assert_no_logs
def test_markdown_string():
    markdown = Markdown(string=MARKDOWN)
    assert markdown.source == MARKDOWN
    assert '<h1>Title</h1>' in markdown.markup
    assert '<p>First paragraph.</p>' in markdown.markup
    assert '<li>one</li>' in markdown.markup
    assert markdown.base_url is None


@assert_no_logs
def test_markdown_bytes():
    markdown = Markdown(string='# Été'.encode('latin-1'), encoding='latin-1')
    assert '<h1>Été</h1>' in markdown.markup


@assert_no_logs
def test_markdown_table():
    markdown = Markdown(string='| a | b |\n|---|---|\n| 1 | 2 |\n')
    assert '<table>' in markdown.markup
    assert '<td>2</td>' in markdown.markup


@assert_no_logs
def test_markdown_raw_html():
    markdown = Markdown(string='<script>alert(1)</script>\n')
    assert '<script>' not in markdown.markup
    assert '&lt;script&gt;' in markdown.markup


@assert_no_logs
def test_markdown_filename(tmp_path):
    path = tmp_path / 'notes.md'
    path.write_text(MARKDOWN, encoding='utf-8')
    for markdown in (
            Markdown(filename=path), Markdown(str(path)), Markdown(path)):
        assert '<h1>Title</h1>' in markdown.markup
        assert markdown.base_url == tmp_path.resolve().as_uri() + '/'
    markdown = Markdown(path, base_url='https://example.com/')
    assert markdown.base_url == 'https://example.com/'


@assert_no_logs
def test_markdown_file_obj(tmp_path):
    markdown = Markdown(file_obj=io.BytesIO(MARKDOWN.encode()))
    assert '<h1>Title</h1>' in markdown.markup
    assert markdown.base_url is None
    path = tmp_path / 'notes.md'
    path.write_text(MARKDOWN, encoding='utf-8')
    with path.open('rb') as file_obj:
        markdown = Markdown(file_obj)
    assert markdown.base_url == tmp_path.resolve().as_uri() + '/'


@pytest.mark.parametrize('arguments', (
    {},
    {'guess': 'a.md', 'string': '# a'},
    {'filename': 'a.md', 'file_obj': io.BytesIO()},
))
def test_markdown_sources(arguments):
    with pytest.raises(TypeError):
        Markdown(**arguments)


@assert_no_logs
def test_render(fake_oracle):
    document = Markdown(string=MARKDOWN).render(oracle=fake_oracle)
    assert fake_oracle.closed
    assert document.configuration == (24, 2)
    assert not document.fallback
    assert (document.width, document.height) == (1920, 1080)
    assert len(document.columns) == len(document.fragments) == 2
    first, second = document.fragments
    assert 'width: 960.0px' in first
    assert '<p>First</p><p>Second</p>' in first
    assert '<p>Third</p>' in second
    assert 'font-size: 24px' in document.html
    # One measure per trial, from 24px with 1 column to 24px with 2 columns.
    assert len(fake_oracle.rendered) == 12
    assert '<h1>Title</h1>' in fake_oracle.rendered[0]


@assert_no_logs
def test_fit_options(fake_oracle):
    # Columns are 680px high, three columns are needed.
    document = fit(
        '<p>a</p>', fake_oracle, width=1200, height=700, strategy='bisect')
    assert document.configuration == (24, 3)
    assert 'width: 400.0px' in document.fragments[0]
    assert 'size: 1200px 700px' in document.html
    assert 'width: 1200.0px' in fake_oracle.rendered[0]


@assert_no_logs
def test_fit_stylesheet(fake_oracle):
    # Without padding, columns are 1080px high.
    document = fit(
        '<p>a</p>', fake_oracle, stylesheet='.column { padding: 0 }',
        width=1000, max_font_size=20)
    assert document.configuration == (20, 2)
    assert '.column {\n  padding: 0;\n  height: 1080px;\n}' in document.html
    assert 'Arial' not in document.html


def test_fit_unknown_option(fake_oracle):
    with capture_logs() as logs:
        fit('<p>a</p>', fake_oracle, colour='red')
    assert logs == ['WARNING: Unknown fitting option: colour.']


def test_fit_invalid_bounds(fake_oracle):
    with pytest.raises(ValueError):
        fit('<p>a</p>', fake_oracle, min_columns=4, max_columns=2)


def test_fit_fallback():
    oracle = FakeOracle(native(
        'div', 0, 5000, native('p', 0, 5000, text_nodes=['Long'])))
    with capture_logs() as logs:
        document = fit('<p>Long</p>', oracle)
    assert document.fallback
    assert document.configuration == (14, 6)
    assert logs[-1].startswith('WARNING: No configuration fits')
    assert '<p>Long</p>' in document.fragments[-1]


def test_fit_nothing_measured():
    oracle = FakeOracle(error=ValueError('boom'))
    with capture_logs() as logs:
        document = fit('<p>a</p>', oracle)
    assert document.fallback
    assert document.columns == document.fragments == []
    assert 'column-count: 6' in document.html
    assert '<p>a</p>' in document.html
    assert len(logs) == 67
    assert 'ValueError: boom' in logs[0]


@assert_no_logs
def test_fit_background(fake_oracle, tmp_path):
    path = tmp_path / 'background.png'
    Image.new('RGB', (4, 4), 'blue').save(path)
    document = fit('<p>a</p>', fake_oracle, background=str(path))
    assert '<div class="background">' in document.html
    assert path.resolve().as_uri() in document.html


def test_fit_invalid_background(fake_oracle, tmp_path):
    path = tmp_path / 'background.png'
    path.write_bytes(b'not an image')
    with capture_logs() as logs:
        document = fit('<p>a</p>', fake_oracle, background=str(path))
    assert 'class="background"' not in document.html
    message, = logs
    assert message.startswith('WARNING: Background image')
    with capture_logs() as logs:
        fit('<p>a</p>', FakeOracle(fake_oracle.tree),
            background=str(tmp_path / 'missing.png'))
    assert len(logs) == 1


@assert_no_logs
def test_write_html(fake_oracle, tmp_path):
    document = fit('<p>a</p>', fake_oracle)
    html = document.write_html()
    assert html == document.html
    path = tmp_path / 'wallpaper.html'
    assert document.write_html(path) is None
    assert path.read_text(encoding='utf-8') == html
    output = io.BytesIO()
    document.write_html(output)
    assert output.getvalue() == html.encode()


@assert_no_logs
def test_default_options():
    assert DEFAULT_OPTIONS['width'] == 1920
    assert DEFAULT_OPTIONS['height'] == 1080
    assert DEFAULT_OPTIONS['strategy'] == 'linear'


@assert_no_logs
def test_main_stdin_stdout(three_paragraphs):
    stdout = io.BytesIO()
    main(
        ['-q', '-', '-'], stdout=stdout, stdin=io.BytesIO(MARKDOWN.encode()),
        Markdown=fake_markdown(three_paragraphs))
    html = stdout.getvalue().decode()
    assert '<div class="container" style="font-size: 24px">' in html
    assert html.count('<div class="column"') == 2


@assert_no_logs
def test_main_files(three_paragraphs, tmp_path):
    source = tmp_path / 'notes.md'
    source.write_text(MARKDOWN, encoding='utf-8')
    stylesheet = tmp_path / 'style.css'
    stylesheet.write_text('.column { padding: 0 }', encoding='utf-8')
    for name in ('wallpaper.html', 'wallpaper.txt'):
        output = tmp_path / name
        main(
            ['-q', '-s', str(stylesheet), '--max-font-size', '20',
             '-W', '1000', str(source), str(output)],
            Markdown=fake_markdown(three_paragraphs))
        html = output.read_text(encoding='utf-8')
        assert 'font-size: 20px' in html
        assert 'size: 1000px 1080px' in html


@assert_no_logs
def test_main_size(three_paragraphs):
    stdout = io.BytesIO()
    main(
        ['-q', '-S', 'wqhd', '--strategy', 'bisect', '-', '-'],
        stdout=stdout, stdin=io.BytesIO(b'# Title'),
        Markdown=fake_markdown(three_paragraphs))
    html = stdout.getvalue().decode()
    assert 'size: 3440px 1440px' in html
    # Columns are 1420px high, one column is enough.
    assert html.count('<div class="column"') == 1


@assert_no_logs
def test_main_size_overridden(three_paragraphs):
    stdout = io.BytesIO()
    main(
        ['-q', '-S', 'wqhd', '-H', '1080', '-', '-'],
        stdout=stdout, stdin=io.BytesIO(b'# Title'),
        Markdown=fake_markdown(three_paragraphs))
    assert b'size: 3440px 1080px' in stdout.getvalue()


def test_main_unknown_size(capsys):
    with pytest.raises(SystemExit):
        main(['-S', 'VGA', '-', '-'])
    _, stderr = capsys.readouterr()
    assert 'unknown size' in stderr


def test_main_list_sizes(capsys):
    with pytest.raises(SystemExit) as exception:
        main(['--list-sizes'])
    assert exception.value.code is None
    stdout, _ = capsys.readouterr()
    assert 'FHD' in stdout
    assert '3840 × 2160' in stdout


def test_main_version(capsys):
    with pytest.raises(SystemExit) as exception:
        main(['--version'])
    assert exception.value.code == 0
    stdout, _ = capsys.readouterr()
    assert stdout.startswith('WallFit version ')


@assert_no_logs
def test_main_docstring():
    assert '.. option:: -S <size>, --size <size>' in main.__doc__
    assert 'Possible choices: html, pdf, png.' in main.__doc__


def test_capture_logs():
    with capture_logs() as logs:
        LOGGER.debug('hidden')
        LOGGER.info('shown')
        PROGRESS_LOGGER.info('progress')
    assert logs == ['INFO: shown']
    with capture_logs(logging.WARNING) as logs:
        LOGGER.info('hidden')
        LOGGER.warning('shown')
    assert logs == ['WARNING: shown']
