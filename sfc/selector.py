"""
Scope attribute injection for CSS selectors.
"""
from lark import Lark, Token
from lark.exceptions import UnexpectedInput

from sfc.errors import StyleSyntaxError
from sfc.grammar import selector_grammar

_parser = None


def get_parser():
    global _parser
    if _parser is None:
        _parser = Lark(selector_grammar, parser='lalr')
    return _parser


def parse_selector_list(selector):
    """Parse a selector list into a list of token lists (one per selector) and the separators between them."""
    tree = get_parser().parse(selector)
    selectors, separators = [], []
    for child in tree.children:
        if isinstance(child, Token):
            separators.append(str(child))
        else:
            selectors.append(list(child.children))
    return selectors, separators


def add_scope(parts, scope_id):
    """
    Insert ``[scope_id]`` after the last part of a selector that isn't a pseudo.

    Trailing pseudo-classes and pseudo-elements stay after the attribute, so
    ``.btn:hover`` becomes ``.btn[scope]:hover``. A selector made only of
    pseudos gets the attribute in front of the first one. Comments and
    combinators are never a target.
    """
    attribute = f"[{scope_id}]"
    target = None
    for index, part in enumerate(parts):
        if part.type not in ("PSEUDO", "COMMENT", "COMBINATOR"):
            target = index
    if target is not None and parts[target].type == "ATTRIBUTE" and str(parts[target]) == attribute:
        # already scoped
        return "".join(str(part) for part in parts)
    if target is None:
        position = next((i for i, part in enumerate(parts) if part.type == "PSEUDO"), 0)
    else:
        position = target + 1
    values = [str(part) for part in parts]
    values.insert(position, attribute)
    return "".join(values)


def scope_selector(selector, scope_id, file_path=None):
    """
    Add the scope attribute to every selector in a comma-separated list.

    Whitespace and comments in the list are preserved.

    Raises:
        StyleSyntaxError: If the selector cannot be parsed
    """
    stripped = selector.strip()
    if not stripped:
        return selector
    try:
        selectors, separators = parse_selector_list(stripped)
    except UnexpectedInput as e:
        raise StyleSyntaxError(
            message=f"Invalid selector: {stripped}",
            column=getattr(e, "column", None),
            context=stripped,
            suggestion="Check the selector syntax",
            file_path=file_path,
        ) from e

    leading = selector[:len(selector) - len(selector.lstrip())]
    trailing = selector[len(selector.rstrip()):]
    out = [add_scope(selectors[0], scope_id)]
    for separator, parts in zip(separators, selectors[1:]):
        out.append(separator)
        out.append(add_scope(parts, scope_id))
    return leading + "".join(out) + trailing
