"""
A small, format-preserving CSS tree.

The parser only recognises the structure the style stages need: rules,
at-rules, declarations and comments. Every piece of whitespace is kept in the
node that precedes it, so ``parse_stylesheet(css).to_css() == css`` for any
input that parses.
"""
import re

from sfc.errors import StyleSyntaxError, get_line_context, line_and_column

AT_NAME = re.compile(r"@(-?[_a-zA-Z][-\w]*)")
WHITESPACE = re.compile(r"\s*")


class Comment:
    def __init__(self, text, before=""):
        self.before = before
        self.text = text  # including the /* */ delimiters

    def to_css(self):
        return self.before + self.text


class Declaration:
    """``prop: value`` inside a block. ``between`` holds the colon and the spaces around it."""

    def __init__(self, prop, value, before="", between=":", semicolon=True):
        self.before = before
        self.prop = prop
        self.between = between
        self.value = value
        self.semicolon = semicolon

    @property
    def name(self):
        return self.prop.lower()

    def clone(self, **changes):
        attrs = dict(prop=self.prop, value=self.value, before=self.before,
                     between=self.between, semicolon=self.semicolon)
        attrs.update(changes)
        return Declaration(**attrs)

    def to_css(self):
        return self.before + self.prop + self.between + self.value + (";" if self.semicolon else "")


class Raw:
    """Block content that is neither a rule nor a declaration (kept verbatim)."""

    def __init__(self, text, before="", semicolon=False):
        self.before = before
        self.text = text
        self.semicolon = semicolon

    def to_css(self):
        return self.before + self.text + (";" if self.semicolon else "")


class Container:
    """A node holding child nodes between braces."""

    def __init__(self, nodes=None, after=""):
        self.nodes = nodes if nodes is not None else []
        self.after = after  # whitespace before the closing brace

    def _body_css(self):
        return "".join(node.to_css() for node in self.nodes) + self.after

    def declarations(self):
        return [node for node in self.nodes if isinstance(node, Declaration)]

    def walk_containers(self):
        yield self
        for node in self.nodes:
            if isinstance(node, Container):
                yield from node.walk_containers()


class Rule(Container):
    def __init__(self, selector, nodes=None, before="", between="", after=""):
        super().__init__(nodes, after)
        self.before = before
        self.selector = selector
        self.between = between

    def to_css(self):
        return self.before + self.selector + self.between + "{" + self._body_css() + "}"


class AtRule(Container):
    """``@name params { ... }`` or, when ``nodes`` is None, ``@name params;``."""

    def __init__(self, name, params="", nodes=None, before="", between="", after="", semicolon=True):
        super().__init__(nodes, after)
        self.before = before
        self.name = name
        self.params = params  # includes the whitespace after the name
        self.between = between
        self.semicolon = semicolon
        self.has_block = nodes is not None

    def to_css(self):
        head = self.before + "@" + self.name + self.params + self.between
        if not self.has_block:
            return head + (";" if self.semicolon else "")
        return head + "{" + self._body_css() + "}"

    def walk_containers(self):
        if self.has_block:
            yield from super().walk_containers()


class Stylesheet(Container):
    def to_css(self):
        return self._body_css()


class _Parser:
    def __init__(self, css, file_path=None):
        self.css = css
        self.file_path = file_path

    def error(self, message, offset, suggestion=None):
        line, column = line_and_column(self.css, offset)
        return StyleSyntaxError(
            message=message,
            line_number=line,
            column=column,
            context=get_line_context(self.css, line),
            suggestion=suggestion,
            file_path=self.file_path,
        )

    def skip_string(self, pos):
        quote = self.css[pos]
        pos += 1
        while pos < len(self.css):
            char = self.css[pos]
            if char == "\\":
                pos += 2
                continue
            if char == quote:
                return pos + 1
            if char == "\n":
                # unterminated strings end at the line break, like browsers do
                return pos
            pos += 1
        return pos

    def skip_comment(self, pos):
        end = self.css.find("*/", pos + 2)
        if end == -1:
            raise self.error("Unclosed comment", pos)
        return end + 2

    def scan_until(self, pos, stops):
        """Return the index of the first top-level stop character at or after pos (or the end)."""
        depth = 0
        while pos < len(self.css):
            char = self.css[pos]
            if char == "\\":
                pos += 2
                continue
            if char in "\"'":
                pos = self.skip_string(pos)
                continue
            if char == "/" and self.css.startswith("/*", pos):
                pos = self.skip_comment(pos)
                continue
            if char in "([":
                depth += 1
            elif char in ")]":
                depth = max(depth - 1, 0)
            elif depth == 0 and char in stops:
                return pos
            pos += 1
        return pos

    def parse_nodes(self, pos, container, closing):
        """Parse children into container until its closing brace (or EOF at the top level)."""
        css = self.css
        while True:
            end_ws = WHITESPACE.match(css, pos).end()
            before = css[pos:end_ws]
            pos = end_ws

            if pos >= len(css):
                if closing is not None:
                    raise self.error("Unclosed block", closing, "Add the missing '}'")
                container.after = before
                return pos

            char = css[pos]
            if char == "}":
                if closing is None:
                    raise self.error("Unexpected '}'", pos, "Remove the extra '}'")
                container.after = before
                return pos + 1

            if css.startswith("/*", pos):
                end = self.skip_comment(pos)
                container.nodes.append(Comment(css[pos:end], before))
                pos = end
                continue

            if char == ";":
                # stray semicolon, keep it
                container.nodes.append(Raw("", before, semicolon=True))
                pos += 1
                continue

            if char == "@":
                pos = self.parse_at_rule(pos, before, container)
                continue

            stop = self.scan_until(pos, "{;}")
            text = css[pos:stop]
            if stop < len(css) and css[stop] == "{":
                selector = text.rstrip()
                rule = Rule(selector, before=before, between=text[len(selector):])
                pos = self.parse_nodes(stop + 1, rule, stop)
                container.nodes.append(rule)
                continue

            semicolon = stop < len(css) and css[stop] == ";"
            if not semicolon:
                # whitespace after the last declaration belongs to the block
                text = text.rstrip()
                stop = pos + len(text)
            container.nodes.append(self.make_declaration(text, before, semicolon))
            pos = stop + 1 if semicolon else stop

    def parse_at_rule(self, pos, before, container):
        css = self.css
        match = AT_NAME.match(css, pos)
        if not match:
            raise self.error("Invalid at-rule", pos)
        name = match.group(1)
        params_start = match.end()
        stop = self.scan_until(params_start, "{;}")
        text = css[params_start:stop]
        params = text.rstrip()
        between = text[len(params):]
        if stop < len(css) and css[stop] == "{":
            at_rule = AtRule(name, params, nodes=[], before=before, between=between)
            pos = self.parse_nodes(stop + 1, at_rule, stop)
        else:
            semicolon = stop < len(css) and css[stop] == ";"
            at_rule = AtRule(name, params, before=before, between=between, semicolon=semicolon)
            pos = stop + 1 if semicolon else stop
        container.nodes.append(at_rule)
        return pos

    def make_declaration(self, text, before, semicolon):
        colon = self.scan_until_colon(text)
        if colon is None:
            return Raw(text, before, semicolon)
        prop = text[:colon].rstrip()
        rest = text[colon + 1:]
        value = rest.lstrip()
        between = text[len(prop):colon + 1] + rest[:len(rest) - len(value)]
        return Declaration(prop, value, before, between, semicolon)

    @staticmethod
    def scan_until_colon(text):
        for index, char in enumerate(text):
            if char == ":":
                return index
            if char in "\"'(/":
                return None
        return None


def parse_stylesheet(css, file_path=None):
    """
    Parse CSS text into a Stylesheet.

    Raises:
        StyleSyntaxError: On unbalanced braces or unclosed comments
    """
    parser = _Parser(css, file_path)
    sheet = Stylesheet()
    parser.parse_nodes(0, sheet, None)
    return sheet
