"""
    wallfit.css
    -----------

    Default wallpaper stylesheet and helpers to edit stylesheets.

    Stylesheets are edited at the declaration level with tinycss2. Rules are
    found by their exact selector text, ``'@page'`` selects the ``@page``
    at-rule.

"""

import tinycss2

DEFAULT_STYLESHEET = '''
@page {
  size: 1920px 1080px;
  margin: 0;
}
html {
  margin: 0 auto;
  padding: 0;
  height: 1080px;
  max-width: 1920px;
  overflow: hidden;
}
body {
  margin: 0;
  width: 1920px;
  height: 1080px;
  background-color: #121212;
  color: #ffffff;
  font-family: Arial, sans-serif;
  line-height: 1.5;
  overflow: hidden;
}
.background {
  position: absolute;
  top: 0;
  left: 0;
  width: 1920px;
  height: 1080px;
  z-index: -1;
}
.background img {
  width: 100%;
  height: 100%;
  object-fit: contain;
  opacity: 0.4;
}
.container {
  display: flex;
  width: 1920px;
  height: 1080px;
}
.column {
  box-sizing: border-box;
  height: 1080px;
  padding: 10px;
  overflow: hidden;
}
.column + .column {
  background-image: linear-gradient(#808080, #808080);
  background-repeat: no-repeat;
  background-size: 2px 100%;
}
h1, h2, h3, h4, h5, h6 {
  color: #ffffff;
  margin-top: 10px;
  margin-bottom: 10px;
}
a {
  color: #ffffff;
  text-decoration: none;
}
ul, ol {
  padding-left: 30px;
  margin-top: 3px;
  margin-bottom: 3px;
}
li ul, li ol {
  padding-left: 20px;
}
li {
  padding-top: 3px;
  padding-bottom: 3px;
}
p {
  margin-top: 0;
  margin-bottom: 0;
}
hr {
  border-top: 1px solid #808080;
}
'''

# Selectors and properties set to the canvas size.
CANVAS_PROPERTIES = (
    ('html', ('height', 'max-width')),
    ('body', ('width', 'height')),
    ('.background', ('width', 'height')),
    ('.container', ('width', 'height')),
    ('.column', ('height',)),
)


def _parse(css):
    return tinycss2.parse_stylesheet(
        css, skip_comments=False, skip_whitespace=False)


def _prelude(rule):
    prelude = tinycss2.serialize(rule.prelude)
    if rule.type == 'at-rule':
        return f'@{rule.at_keyword}{prelude}'
    return prelude


def _matches(rule, selector):
    if rule.type not in ('qualified-rule', 'at-rule') or rule.content is None:
        return False
    return _prelude(rule).strip() == selector


def _declarations(rule):
    return [
        declaration for declaration in tinycss2.parse_declaration_list(
            rule.content, skip_comments=True, skip_whitespace=True)
        if declaration.type == 'declaration']


def _serialize_declaration(declaration):
    value = tinycss2.serialize(declaration.value).strip()
    important = ' !important' if declaration.important else ''
    return f'{declaration.name}: {value}{important}'


def get_property(css, selector, name):
    """Return the value of property ``name`` for ``selector``.

    Return :obj:`None` if the property is not set.

    """
    value = None
    for rule in _parse(css):
        if _matches(rule, selector):
            for declaration in _declarations(rule):
                if declaration.lower_name == name:
                    value = tinycss2.serialize(declaration.value).strip()
    return value


def set_property(css, selector, name, value):
    """Return ``css`` with property ``name`` set to ``value`` for ``selector``.

    The first rule matching ``selector`` is updated, a new rule is appended
    if there is none.

    """
    rules = _parse(css)
    for index, rule in enumerate(rules):
        if not _matches(rule, selector):
            continue
        lines = []
        replaced = False
        for declaration in _declarations(rule):
            if declaration.lower_name != name:
                lines.append(_serialize_declaration(declaration))
            elif not replaced:
                lines.append(f'{name}: {value}')
                replaced = True
        if not replaced:
            lines.append(f'{name}: {value}')
        body = ''.join(f'\n  {line};' for line in lines)
        return ''.join((
            tinycss2.serialize(rules[:index]),
            f'{_prelude(rule)}{{{body}\n}}',
            tinycss2.serialize(rules[index + 1:])))
    return f'{css}\n{selector} {{ {name}: {value}; }}\n'


def numeric_value(value):
    """Return the number at the beginning of a CSS value, or 0."""
    for token in tinycss2.parse_component_value_list(value or ''):
        if token.type in ('number', 'dimension', 'percentage'):
            return token.value
        elif token.type not in ('whitespace', 'comment'):
            break
    return 0


def box_edges(value):
    """Return ``(top, right, bottom, left)`` values of a shorthand value."""
    values = [
        token.value for token in tinycss2.parse_component_value_list(
            value or '')
        if token.type in ('number', 'dimension', 'percentage')]
    if not values:
        return (0, 0, 0, 0)
    if len(values) == 1:
        values *= 2
    if len(values) == 2:
        values *= 2
    if len(values) == 3:
        values.append(values[1])
    return tuple(values[:4])


def vertical_padding(css, selector):
    """Return the sum of the top and bottom paddings of ``selector``."""
    top, _, bottom, _ = box_edges(get_property(css, selector, 'padding'))
    padding_top = get_property(css, selector, 'padding-top')
    padding_bottom = get_property(css, selector, 'padding-bottom')
    if padding_top is not None:
        top = numeric_value(padding_top)
    if padding_bottom is not None:
        bottom = numeric_value(padding_bottom)
    return top + bottom


def update_canvas_size(css, width, height):
    """Return ``css`` with the canvas size set to ``width``×``height``."""
    for selector, properties in CANVAS_PROPERTIES:
        for name in properties:
            value = width if name in ('width', 'max-width') else height
            css = set_property(css, selector, name, f'{value}px')
    return set_property(css, '@page', 'size', f'{width}px {height}px')
