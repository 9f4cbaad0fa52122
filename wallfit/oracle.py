"""
    wallfit.oracle
    --------------

    Measurement oracle based on WeasyPrint's layout engine.

    The oracle renders a whole HTML document on a very tall page and returns
    the geometry of each element under a root element, as a tree of plain
    dictionaries. The fitting engine only consumes this geometry.

"""

import cssselect2
from weasyprint import CSS, HTML
from weasyprint.css import AnonymousStyle
from weasyprint.text.fonts import FontConfiguration

from .logger import LOGGER

#: Height of the measurement page, content is flowed on following pages
#: when it is taller.
MEASURE_PAGE_HEIGHT = 100000


class Oracle:
    """Rendering session, owned by one configuration search at a time.

    :param int width: The page width, in CSS pixels.
    :param str base_url: The base used to resolve relative URLs.

    """
    def __init__(self, width, base_url=None):
        self.width = width
        self.base_url = base_url
        self._font_config = FontConfiguration()
        self._page_css = CSS(
            string=(
                f'@page {{ size: {width}px {MEASURE_PAGE_HEIGHT}px; '
                'margin: 0 }'),
            font_config=self._font_config)
        self._html = None
        self._document = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._html = self._document = self._font_config = None

    def render(self, html):
        """Lay out ``html``, replacing the previous content."""
        if self._font_config is None:
            raise RuntimeError('Oracle session is closed')
        self._html = HTML(string=html, base_url=self.base_url)
        self._document = self._html.render(
            font_config=self._font_config, stylesheets=[self._page_css])

    def measure_tree(self, selector):
        """Return the geometry tree of the first element matching ``selector``.

        Return :obj:`None` if no element matches.

        """
        if self._document is None:
            raise RuntimeError('Nothing rendered')
        try:
            selectors = cssselect2.compile_selector_list(selector)
        except cssselect2.SelectorError as exception:
            raise ValueError(
                f'Invalid root selector {selector!r}: {exception}')
        for root in self._html.wrapper_element.iter_subtree():
            if any(compiled.test(root) for compiled in selectors):
                break
        else:
            return None
        boxes = self._boxes_by_element()
        return _native(root.etree_element, boxes, default_top=0)

    def _boxes_by_element(self):
        boxes = {}
        page_top = 0
        for page in self._document.pages:
            for box in page._page_box.descendants():
                element = getattr(box, 'element', None)
                if element is None or '::' in (box.element_tag or ''):
                    continue
                boxes.setdefault(element, []).append((page_top, box))
            page_top += page.height
        LOGGER.debug(
            'Measured %d pages, %d elements',
            len(self._document.pages), len(boxes))
        return boxes


def _native(element, boxes, default_top):
    element_boxes = boxes.get(element, ())
    visible_boxes = [
        (page_top, box) for page_top, box in element_boxes
        if box.style['visibility'] == 'visible']
    if element_boxes:
        top = min(
            page_top + box.border_box_y() for page_top, box in element_boxes)
        bottom = max(
            page_top + box.border_box_y() + box.border_height()
            for page_top, box in element_boxes)
        # Line and text boxes share the element of their parent.
        principal_boxes = [
            box for _, box in element_boxes
            if not isinstance(box.style, AnonymousStyle)] or [
                box for _, box in element_boxes]
        first_box, last_box = principal_boxes[0], principal_boxes[-1]
        spacing = {
            'margin_top': _used(first_box, 'margin_top'),
            'margin_bottom': _used(last_box, 'margin_bottom'),
            'padding_top': _used(first_box, 'padding_top'),
            'padding_bottom': _used(last_box, 'padding_bottom'),
        }
    else:
        top = bottom = default_top
        spacing = {}

    text_nodes = [element.text] if element.text else []
    children = []
    for child in element:
        if isinstance(child.tag, str):
            children.append(_native(child, boxes, default_top=top))
        if child.tail:
            text_nodes.append(child.tail)

    return {
        'tag': element.tag,
        'attributes': list(element.attrib.items()),
        'text_nodes': text_nodes,
        'top': top,
        'bottom': bottom,
        'hidden': not visible_boxes,
        'children': children,
        **spacing,
    }


def _used(box, name):
    value = getattr(box, name, None)
    return value if isinstance(value, (int, float)) else None
