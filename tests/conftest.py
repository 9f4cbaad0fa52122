"""Configuration for WallFit tests.

Tests using the ``oracle`` fixture need WeasyPrint and its Pango library,
they are skipped when WeasyPrint can't be loaded.

"""

import pytest

from .testing_utils import FakeOracle, native


@pytest.fixture
def oracle():
    try:
        from wallfit.oracle import Oracle
    except (ImportError, OSError) as exception:  # pragma: no cover
        pytest.skip(f'WeasyPrint is not available: {exception}')
    with Oracle(1920) as oracle:
        yield oracle


@pytest.fixture
def three_paragraphs():
    """Oracle tree of three paragraphs ending at 300, 900 and 1400."""
    return native(
        'div', 0, 1420,
        native('p', 10, 310, text_nodes=['First']),
        native('p', 310, 910, text_nodes=['Second']),
        native('p', 910, 1410, text_nodes=['Third']),
        attributes=[('class', 'column wallfit-measure')],
        text_nodes=['\n', '\n', '\n', '\n'],
        padding_top=10, padding_bottom=10)


@pytest.fixture
def fake_oracle(three_paragraphs):
    return FakeOracle(three_paragraphs)
