"""Trees handled by the fitting engine.

A :class:`ContentNode` tree is built by the measurement adapter for one
configuration trial. Its geometry only makes sense for this configuration,
trees built for different trials must never be mixed.

A :class:`ColumnSubtree` tree is built by the partitioner for one output
column. It has the same shape as a content tree, without geometry.

Nodes are identified by their *path*, the tuple of child indices leading
from the root to the node. The root's path is ``()``.

"""

from collections import namedtuple

#: A ``(font_size, num_columns)`` pair, both in the configured bounds.
LayoutConfiguration = namedtuple(
    'LayoutConfiguration', ('font_size', 'num_columns'))

#: Inclusive limits of the configuration search.
Bounds = namedtuple(
    'Bounds',
    ('min_columns', 'max_columns', 'min_font_size', 'max_font_size'))


class ContentNode:
    """Element of the content tree, with its rendered geometry.

    ``bottom_offset - top_offset`` is not necessarily ``height``: the height
    of a node with children is measured from its top to the bottom of its
    last child, to tolerate collapsing and overflowing containers.

    ``direct_text`` only includes the text owned by the node itself, text
    owned by descendants is excluded. Direct texts never overlap.

    """
    def __init__(self, tag, direct_text='', attributes='', height=0,
                 top_offset=0, bottom_offset=0, is_hidden=False,
                 children=None, margin_top=None, margin_bottom=None,
                 padding_top=None, padding_bottom=None):
        self.tag = tag
        self.direct_text = direct_text
        self.attributes = attributes
        self.height = height
        self.top_offset = top_offset
        self.bottom_offset = bottom_offset
        self.is_hidden = is_hidden
        self.children = [] if children is None else children
        # Only available with some oracles.
        self.margin_top = margin_top
        self.margin_bottom = margin_bottom
        self.padding_top = padding_top
        self.padding_bottom = padding_bottom

    def __repr__(self):
        return (
            f'<{type(self).__name__} {self.tag} '
            f'{self.top_offset}-{self.bottom_offset}>')

    def descendants(self, path=()):
        """A flat generator of ``(path, node)`` for a node and descendants."""
        yield path, self
        for index, child in enumerate(self.children):
            yield from child.descendants((*path, index))

    def get(self, path):
        """Return the descendant at ``path``, raise ``IndexError`` if none."""
        node = self
        for index in path:
            node = node.children[index]
        return node


class ColumnSubtree:
    """Element of a column tree, without geometry."""
    def __init__(self, tag, attributes='', direct_text='', is_hidden=False,
                 children=None):
        self.tag = tag
        self.attributes = attributes
        self.direct_text = direct_text
        self.is_hidden = is_hidden
        self.children = [] if children is None else children

    def __repr__(self):
        return f'<{type(self).__name__} {self.tag}>'

    @classmethod
    def stub_from(cls, node, text=True):
        """Return a childless copy of ``node``.

        ``text`` is false for continuation stubs, re-created for ancestors
        split across columns, whose text has already been emitted.

        """
        return cls(
            node.tag, node.attributes, node.direct_text if text else '',
            node.is_hidden)

    def descendants(self):
        """A flat generator for the node and its descendants."""
        yield self
        for child in self.children:
            yield from child.descendants()


def leaf_texts(tree):
    """Return the list of direct texts of the leaves in document order."""
    return [
        node.direct_text for _, node in _iter_nodes(tree)
        if not node.children]


def texts(tree):
    """Return the list of non-empty direct texts in document order."""
    return [
        node.direct_text for _, node in _iter_nodes(tree)
        if node.direct_text]


def _iter_nodes(tree):
    if isinstance(tree, ContentNode):
        yield from tree.descendants()
    else:
        for node in tree.descendants():
            yield None, node
