"""
    wallfit.fit
    -----------

    Check whether a measured content tree fits in a given number of columns.

    Geometry is measured once for the whole content flowed in one column.
    Column breaks are modelled by moving the origin of the vertical offsets
    to the top of the node starting each new column: removing the content
    before a break does not change the geometry of the following content,
    as the width and the font size stay the same.

"""

from collections import namedtuple

from .logger import PROGRESS_LOGGER

#: Result of a fit evaluation. ``divide_marks`` is the set of the paths of
#: the nodes starting a new column.
FitResult = namedtuple('FitResult', ('fits', 'divide_marks', 'used_columns'))


class EvaluationError(ValueError):
    """The evaluator has been called without a tree."""


def evaluate(tree, column_budget, max_column_height, spacing=False):
    """Check whether ``tree`` fits in ``column_budget`` columns.

    The tree is walked depth-first. A leaf whose bottom is lower than
    ``max_column_height`` below the current column top starts a new column.
    A node with children is checked after its children, with the bottom of
    its last child: when it overflows, the new column starts with the whole
    node.

    The root is the measurement container and never starts a column.

    :param tree: The measured :class:`nodes.ContentNode` tree.
    :param int column_budget: The maximum number of columns.
    :param float max_column_height: The height of a column.
    :param bool spacing: Whether vertical margins are included in the
        extent of the nodes.
    :returns: A :class:`FitResult`. The tree is not modified.

    """
    if tree is None:
        raise EvaluationError('No tree to evaluate')

    divide_marks = set()
    used_columns = 1
    last_divide_offset = 0

    def top(node):
        if spacing:
            return node.top_offset - (node.margin_top or 0)
        return node.top_offset

    def bottom(node):
        if spacing:
            return node.bottom_offset + (node.margin_bottom or 0)
        return node.bottom_offset

    def start_new_column(path, node):
        nonlocal used_columns, last_divide_offset
        # The root is the container copied in every column, it can't start
        # one. Its overflow means that the content after the last break is
        # taller than a column, spending a column on it would not help.
        if not path or used_columns >= column_budget:
            return False
        used_columns += 1
        last_divide_offset = top(node)
        divide_marks.add(path)
        PROGRESS_LOGGER.debug(
            'New column %d at %s (%s)', used_columns, last_divide_offset,
            node.tag)
        return True

    def fits(path, node):
        if node.is_hidden:
            return True
        visible_children = [
            child for child in node.children if not child.is_hidden]
        if not visible_children:
            if bottom(node) - last_divide_offset > max_column_height:
                return start_new_column(path, node)
            return True
        for index, child in enumerate(node.children):
            if not fits((*path, index), child):
                return False
        last_bottom = bottom(visible_children[-1]) - last_divide_offset
        if last_bottom > max_column_height:
            return start_new_column(path, node)
        return True

    result = fits((), tree) and used_columns <= column_budget
    return FitResult(result, divide_marks, used_columns)
