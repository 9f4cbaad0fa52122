"""
    wallfit.partition
    -----------------

    Split a measured content tree into column trees.

    The tree is walked once, depth-first, with an explicit stack of frames.
    Each visited node is copied as a stub into the column being built, under
    the stub of its parent. A node starting a new column closes the current
    column: the new column gets copies of the node's ancestors and the node
    itself. Ancestors already holding content in the closed column are
    continued without their text, which has already been emitted. Ancestors
    with no content yet are moved to the new column with their text.

"""

import re

from .logger import PROGRESS_LOGGER
from .nodes import ColumnSubtree

START = re.compile(r'(^|\s)start="(-?\d+)"')


class InvariantError(AssertionError):
    """Divide marks don't match the partitioned tree."""


class _Frame:
    """Position of the walk in the children of a node."""
    __slots__ = ('node', 'path', 'stub', 'index')

    def __init__(self, node, path, stub):
        self.node = node
        self.path = path
        self.stub = stub
        self.index = 0


def _close(stack):
    """Remove the ancestors with no content yet from the current column.

    Return a dict mapping the depths of the removed stubs to their text.
    The column root is kept, only its text is removed.

    """
    moved = {}
    for depth in range(len(stack) - 1, -1, -1):
        stub = stack[depth].stub
        if stub.children:
            break
        moved[depth] = stub.direct_text
        if depth:
            # The stub is the last child of its parent, later siblings are
            # not visited yet.
            stack[depth - 1].stub.children.pop()
        else:
            stub.direct_text = ''
    return moved


def _list_start(frame):
    """Return the attributes of a continued ordered list."""
    attributes = frame.node.attributes
    # The child being walked is continued in the new column.
    done = sum(
        1 for child in frame.node.children[:frame.index - 1]
        if child.tag == 'li' and not child.is_hidden)
    if not done:
        return attributes
    match = START.search(attributes)
    start = int(match.group(2)) if match else 1
    attributes = START.sub(r'\1', attributes).strip()
    return ' '.join(filter(None, (attributes, f'start="{start + done}"')))


def _continuation(stack, moved):
    """Return a new column root with stubs for the nodes in ``stack``.

    Nodes at the ``moved`` depths get back the text of their removed stubs.

    """
    root = parent = None
    for depth, frame in enumerate(stack):
        stub = ColumnSubtree.stub_from(frame.node, text=False)
        stub.direct_text = moved.get(depth, '')
        if frame.node.tag == 'ol':
            stub.attributes = _list_start(frame)
        if parent is None:
            root = stub
        else:
            parent.children.append(stub)
        frame.stub = parent = stub
    return root


def partition(tree, divide_marks=()):
    """Split ``tree`` into a list of :class:`nodes.ColumnSubtree`.

    :param tree: The measured :class:`nodes.ContentNode` tree.
    :param divide_marks: The paths of the nodes starting a new column.
    :returns: A list of ``1 + len(divide_marks)`` column trees.
    :raises: :class:`InvariantError` if a mark is on the root or out of the
        tree.

    """
    divide_marks = set(divide_marks)
    if () in divide_marks:
        raise InvariantError('The root node can not start a column')

    columns = []
    column = ColumnSubtree.stub_from(tree)
    stack = [_Frame(tree, (), column)]
    found = set()

    while stack:
        frame = stack[-1]
        if frame.index >= len(frame.node.children):
            stack.pop()
            continue
        child = frame.node.children[frame.index]
        path = (*frame.path, frame.index)
        frame.index += 1

        if path in divide_marks:
            found.add(path)
            moved = _close(stack)
            columns.append(column)
            column = _continuation(stack, moved)
            PROGRESS_LOGGER.debug(
                'Column %d starts with %s at %s',
                len(columns) + 1, child.tag, path)

        stub = ColumnSubtree.stub_from(child)
        stack[-1].stub.children.append(stub)
        stack.append(_Frame(child, path, stub))

    if divide_marks != found:
        missing = ', '.join(str(path) for path in sorted(divide_marks - found))
        raise InvariantError(f'Divide marks out of the tree: {missing}')

    columns.append(column)
    return columns
