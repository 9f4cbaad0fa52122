"""
    wallfit.serialize
    -----------------

    Turn column trees back into markup, and build output documents.

"""

from html import escape

# https://html.spec.whatwg.org/multipage/syntax.html#void-elements
VOID_ELEMENTS = frozenset((
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input', 'link',
    'meta', 'source', 'track', 'wbr'))


def serialize_node(node):
    """Return the markup of ``node`` and its descendants.

    Hidden nodes are skipped with their descendants.

    """
    if node.is_hidden:
        return ''
    attributes = f' {node.attributes}' if node.attributes else ''
    if node.tag in VOID_ELEMENTS:
        return f'<{node.tag}{attributes}>'
    return (
        f'<{node.tag}{attributes}>{escape(node.direct_text)}'
        f'{serialize_children(node)}</{node.tag}>')


def serialize_children(node):
    return ''.join(serialize_node(child) for child in node.children)


def render(subtrees, canvas_width):
    """Return one markup fragment per column tree.

    The root of each tree stands for the measurement container, it is
    replaced by a column container sharing the canvas width with the other
    columns.

    """
    width = canvas_width / len(subtrees)
    fragments = []
    for root in subtrees:
        content = '' if root.is_hidden else (
            escape(root.direct_text) + serialize_children(root))
        fragments.append(
            f'<div class="column" style="width: {width}px">{content}</div>')
    return fragments


def background_html(url):
    """Return the markup of a background image."""
    return (
        '<div class="background">'
        f'<img src="{escape(url)}" alt="Background Image"></div>')


def make_html(fragments, stylesheet, configuration, background=None):
    """Return the output document holding the column ``fragments``."""
    columns = '\n'.join(fragments)
    background = f'{background_html(background)}\n' if background else ''
    return (
        '<html>\n<head>\n<meta charset="utf-8">\n'
        f'<style>{stylesheet}</style>\n</head>\n<body>\n{background}'
        f'<div class="container" style="font-size: '
        f'{configuration.font_size}px">\n{columns}\n</div>\n'
        '</body>\n</html>\n')


def make_columns_html(markup, stylesheet, configuration, canvas_width,
                      background=None):
    """Return the output document flowing ``markup`` in CSS columns.

    Used when the content could not be measured, and thus not partitioned.

    """
    fragment = (
        f'<div class="column" style="width: {canvas_width}px; '
        f'column-count: {configuration.num_columns}">\n{markup}\n</div>')
    return make_html([fragment], stylesheet, configuration, background)
