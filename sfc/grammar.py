"""
Selector Grammar Definition.

This module contains the Lark grammar for CSS selector lists. Only the
top-level structure matters to the scope rewriter: which pieces are
pseudo-classes/pseudo-elements and where the compound selectors end. The
arguments of functional pseudos (``:not(...)``) are kept as opaque text.
"""

selector_grammar = r"""
    start: selector (COMMA selector)*

    selector: part+
    ?part: CLASS | ID | TAG | NESTING | ATTRIBUTE | PSEUDO | COMBINATOR | COMMENT

    // --- Terminals ---
    CLASS: /\.(?:[-\w]|\\.)+/
    ID: /#(?:[-\w]|\\.)+/
    // type or universal selector, with an optional namespace prefix (svg|a, *|*, |a)
    TAG: /(?:(?:[-\w]|\\.)+|\*)?\|(?:(?:[-\w]|\\.)+|\*)|(?:[-\w]|\\.)+|\*/
    NESTING: "&"
    ATTRIBUTE: /\[(?:[^\]"'\\]|\\.|"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')*\]/
    PSEUDO: /::?(?:[-\w]|\\.)+(?:\((?:[^()"']|"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'|\((?:[^()]|\([^()]*\))*\))*\))?/
    COMMENT: /\/\*[\s\S]*?\*\//

    // commas win over the whitespace combinator around them
    COMMA.3: /\s*,\s*/
    COMBINATOR.2: /\s*(?:>>>|[>+~])\s*|\s+/
"""
