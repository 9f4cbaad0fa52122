"""
    wallfit.search
    --------------

    Find the layout configuration used for some content.

    Configurations are tried in a fixed order: fewer columns first, then
    larger fonts first. The first configuration whose measured tree fits is
    kept. This is a deterministic tie-break policy, not an optimization.

"""

from .fit import EvaluationError, evaluate
from .logger import LOGGER, PROGRESS_LOGGER
from .measure import MeasurementError
from .nodes import Bounds, LayoutConfiguration

STRATEGIES = ('linear', 'bisect')


class Layout:
    """Result of a configuration search.

    Should be obtained from :func:`search_layout` but not instantiated
    directly.

    """
    def __init__(self, configuration, tree, divide_marks, fallback, trials):
        #: The chosen :class:`nodes.LayoutConfiguration`.
        self.configuration = configuration
        #: The :class:`nodes.ContentNode` tree measured for the chosen
        #: configuration, or :obj:`None` if it could not be measured.
        self.tree = tree
        #: The set of the paths of the nodes starting a new column.
        self.divide_marks = divide_marks
        #: Whether no configuration fits. The configuration is then the most
        #: compressed one, and the content may overflow.
        self.fallback = fallback
        #: The number of measured configurations.
        self.trials = trials

    def __repr__(self):
        font_size, num_columns = self.configuration
        return (
            f'<{type(self).__name__} {font_size}px × {num_columns} '
            f'column(s){" (fallback)" if self.fallback else ""}>')


def bounds_from_options(options):
    """Return the :class:`nodes.Bounds` defined in ``options``."""
    bounds = Bounds(
        options['min_columns'], options['max_columns'],
        options['min_font_size'], options['max_font_size'])
    if bounds.min_columns < 1 or bounds.min_font_size < 1:
        raise ValueError(f'Bounds must be positive: {bounds}')
    if bounds.min_columns > bounds.max_columns:
        raise ValueError(
            f'min_columns ({bounds.min_columns}) is greater than '
            f'max_columns ({bounds.max_columns})')
    if bounds.min_font_size > bounds.max_font_size:
        raise ValueError(
            f'min_font_size ({bounds.min_font_size}) is greater than '
            f'max_font_size ({bounds.max_font_size})')
    return bounds


def iter_configurations(bounds):
    """Yield configurations in the search order."""
    for num_columns in range(bounds.min_columns, bounds.max_columns + 1):
        for font_size in range(
                bounds.max_font_size, bounds.min_font_size - 1, -1):
            yield LayoutConfiguration(font_size, num_columns)


class _Trials:
    """Cache of measured and evaluated configurations."""
    def __init__(self, measure, max_column_height, spacing, keep):
        self.measure = measure
        self.max_column_height = max_column_height
        self.spacing = spacing
        self.keep = keep
        self.results = {}

    def __len__(self):
        return len(self.results)

    def __call__(self, configuration):
        """Return ``(tree, fit_result)``, both :obj:`None` on failure."""
        if configuration in self.results:
            return self.results[configuration]
        try:
            tree = self.measure(configuration)
            result = evaluate(
                tree, configuration.num_columns, self.max_column_height,
                self.spacing)
        except (MeasurementError, EvaluationError) as exception:
            LOGGER.warning(
                'Configuration %spx × %s column(s) is unusable: %s',
                configuration.font_size, configuration.num_columns,
                exception)
            tree = result = None
        else:
            PROGRESS_LOGGER.info(
                'Trial %d - %spx × %s column(s) %s', len(self.results) + 1,
                configuration.font_size, configuration.num_columns,
                'fits' if result.fits else 'does not fit')
        if result is not None and not result.fits and (
                configuration != self.keep):
            # Trees of failed trials are not needed anymore.
            tree = None
        self.results[configuration] = tree, result
        return tree, result

    def fits(self, configuration):
        _, result = self(configuration)
        return result is not None and result.fits


def _linear(trials, bounds):
    for configuration in iter_configurations(bounds):
        if trials.fits(configuration):
            return configuration


def _bisect(trials, bounds):
    # Fitting is assumed to be monotonic in font size for each column count.
    for num_columns in range(bounds.min_columns, bounds.max_columns + 1):
        low, high = bounds.min_font_size, bounds.max_font_size
        best = None
        while low <= high:
            font_size = (low + high + 1) // 2
            if trials.fits(LayoutConfiguration(font_size, num_columns)):
                best = font_size
                low = font_size + 1
            else:
                high = font_size - 1
        if best is not None:
            return LayoutConfiguration(best, num_columns)


def search_layout(measure, bounds, max_column_height, strategy='linear',
                  spacing=False):
    """Find the first configuration whose content fits.

    :type measure: :term:`callable`
    :param measure:
        A function returning the :class:`nodes.ContentNode` tree measured
        for a given :class:`nodes.LayoutConfiguration`, and raising
        :class:`measure.MeasurementError` when it can't.
    :type bounds: :class:`nodes.Bounds`
    :param bounds: The limits of the search.
    :param float max_column_height: The height of a column.
    :param str strategy:
        ``'linear'`` tries every configuration in order, ``'bisect'`` uses
        a binary search on font sizes for each column count.
    :param bool spacing:
        Whether vertical margins are included in the extent of the nodes.
    :returns: A :class:`Layout`.

    When no configuration fits, the smallest font size with the largest
    column count is returned without being checked.

    """
    if strategy not in STRATEGIES:
        raise ValueError(f'Unknown search strategy: {strategy}')
    fallback = LayoutConfiguration(bounds.min_font_size, bounds.max_columns)
    trials = _Trials(measure, max_column_height, spacing, keep=fallback)
    search = _linear if strategy == 'linear' else _bisect

    configuration = search(trials, bounds)
    if configuration is not None:
        tree, result = trials(configuration)
        PROGRESS_LOGGER.info(
            'Chosen configuration: %spx × %s column(s), %d trial(s)',
            configuration.font_size, configuration.num_columns, len(trials))
        return Layout(
            configuration, tree, result.divide_marks, False, len(trials))

    LOGGER.warning(
        'No configuration fits, falling back to %spx × %s column(s), '
        'content may overflow', fallback.font_size, fallback.num_columns)
    tree, result = trials(fallback)
    divide_marks = set() if result is None else result.divide_marks
    return Layout(fallback, tree, divide_marks, True, len(trials))


def find_configuration(measure, bounds, max_column_height, **kwargs):
    """Return the :class:`nodes.LayoutConfiguration` for some content.

    Same parameters as :func:`search_layout`.

    """
    return search_layout(
        measure, bounds, max_column_height, **kwargs).configuration
