"""
    wallfit.measure
    ---------------

    Turn some markup and a layout configuration into a measured content
    tree.

    The adapter never lays anything out: it builds a document where the
    content is flowed in one column of the configured width and font size,
    lets the oracle render it, and converts the geometry returned by the
    oracle into :class:`ContentNode` objects.

"""

from html import escape

from .logger import PROGRESS_LOGGER
from .nodes import ContentNode

#: Stable selector of the measurement root.
MEASURE_SELECTOR = 'div.wallfit-measure'

# Fixed canvas heights set by wallpaper stylesheets must not clip the
# measured flow.
MEASURE_STYLESHEET = '''
html, body {
  height: auto !important; margin: 0 !important; padding: 0 !important;
  overflow: visible !important;
}
'''


class MeasurementError(Exception):
    """The oracle could not render or measure a configuration."""


def wrap_content(markup, configuration, canvas_width, stylesheet=''):
    """Return the document measured for ``configuration``.

    The content is wrapped in a single container whose height is not
    bounded, ``canvas_width / num_columns`` wide.

    """
    column_width = canvas_width / configuration.num_columns
    return (
        '<html><head>'
        f'<style>{stylesheet}</style><style>{MEASURE_STYLESHEET}</style>'
        '</head><body>'
        '<div class="column wallfit-measure" style="'
        f'width: {column_width}px; height: auto; overflow: visible; '
        f'font-size: {configuration.font_size}px">\n'
        f'{markup}\n</div></body></html>')


def serialize_attributes(attributes):
    """Serialize a list of ``(name, value)`` attribute pairs."""
    return ' '.join(
        f'{name}="{escape(value, quote=True)}"' for name, value in attributes)


def native_to_node(native, origin=0):
    """Convert a tree returned by the oracle into a :class:`ContentNode`.

    ``origin`` is subtracted from all vertical offsets.

    """
    children = [
        native_to_node(child, origin) for child in native['children']]
    top = native['top'] - origin
    bottom = native['bottom'] - origin
    if children:
        # Collapsing containers: the last child defines the extent.
        height = children[-1].bottom_offset - top
    else:
        height = bottom - top
    return ContentNode(
        tag=native['tag'],
        direct_text=direct_text(native),
        attributes=serialize_attributes(native['attributes']),
        height=height, top_offset=top, bottom_offset=bottom,
        is_hidden=native['hidden'], children=children,
        margin_top=native.get('margin_top'),
        margin_bottom=native.get('margin_bottom'),
        padding_top=native.get('padding_top'),
        padding_bottom=native.get('padding_bottom'))


def direct_text(native):
    """Return the element's full text minus its descendants' text.

    Only the text nodes owned by the element are kept, each stripped, and
    joined by single spaces.

    """
    return ' '.join(
        text.strip() for text in native['text_nodes'] if text.strip())


class MeasurementAdapter:
    """Measure content at given configurations with an oracle.

    The oracle is owned by the caller, the adapter only replaces its
    content for each measurement.

    """
    def __init__(self, oracle, canvas_width, stylesheet=''):
        self.oracle = oracle
        self.canvas_width = canvas_width
        self.stylesheet = stylesheet
        self.markup = None

    def bind(self, markup):
        """Set the markup measured when the adapter is called."""
        self.markup = markup
        return self

    def __call__(self, configuration):
        return self.measure(self.markup, configuration)

    def measure(self, markup, configuration):
        """Return the content tree measured at ``configuration``.

        :raises: :class:`MeasurementError` when the oracle fails.

        """
        if markup is None:
            raise MeasurementError('No markup to measure')
        PROGRESS_LOGGER.info(
            'Measuring at %spx with %s column(s)',
            configuration.font_size, configuration.num_columns)
        document = wrap_content(
            markup, configuration, self.canvas_width, self.stylesheet)
        try:
            self.oracle.render(document)
            native = self.oracle.measure_tree(MEASURE_SELECTOR)
        except MeasurementError:
            raise
        except Exception as exception:
            raise MeasurementError(
                f'{type(exception).__name__}: {exception}') from exception
        if native is None:
            raise MeasurementError(
                f'No element matching {MEASURE_SELECTOR!r}')
        origin = native['top'] + (native.get('padding_top') or 0)
        return native_to_node(native, origin)
