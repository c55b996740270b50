"""
Scoped style rewriting.

Every compiled style block goes through a small pipeline of stages operating
on a parsed Stylesheet: user-configured stages first, then the scope stage
(scoped blocks only), then autoprefixing. Results are memoized in a bounded
LRU cache keyed by the scope id and the CSS text.
"""
import threading
from collections import OrderedDict

from sfc.autoprefixer import autoprefix
from sfc.css import AtRule, Rule, parse_stylesheet
from sfc.log import debug_log
from sfc.models import BlockKind, CompiledBlock
from sfc.options import options as default_options
from sfc.selector import scope_selector


class RewriteContext:
    """Per-call state handed to every style stage."""

    def __init__(self, scope_id, options, file_path=None):
        self.scope_id = scope_id
        self.options = options
        self.file_path = file_path


class StyleCache:
    """Thread-safe LRU cache of rewritten styles."""

    def __init__(self, max_size=100):
        self.max_size = max_size
        self._entries = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            value = self._entries.get(key)
            if value is not None:
                self._entries.move_to_end(key)
            return value

    def set(self, key, value):
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def resize(self, max_size):
        with self._lock:
            self.max_size = max_size
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries


cache = StyleCache(default_options.style_cache_size)


def _rewrite_rules(nodes, scope_id, file_path=None):
    for node in nodes:
        if isinstance(node, Rule):
            node.selector = scope_selector(node.selector, scope_id, file_path)
        elif isinstance(node, AtRule) and node.name.lower() == "media" and node.has_block:
            # handle media queries
            _rewrite_rules(node.nodes, scope_id, file_path)


def add_id(stylesheet, context):
    """Style stage adding the scope attribute selector to every rule."""
    _rewrite_rules(stylesheet.nodes, context.scope_id, context.file_path)


def build_stages(scoped, options):
    stages = list(options.style_stages)
    # scoped css rewrite
    if scoped:
        stages.append(add_id)
    # autoprefixing
    if options.autoprefixer is not False:
        stages.append(autoprefix)
    return stages


def rewrite_style(scope_id, css, scoped, options=None, style_cache=None, file_path=None):
    """
    Add attribute selector to css

    Args:
        scope_id: Scope id of the document
        css: Compiled CSS of one style block
        scoped: Whether the block carries the scoped attribute
        options: CompilerOptions (defaults to the process-wide options)
        style_cache: StyleCache (defaults to the process-wide cache)
        file_path: Document path, used in error messages

    Returns:
        CompiledBlock of kind style
    """
    if options is None:
        options = default_options
    if style_cache is None:
        style_cache = cache
        if cache.max_size != options.style_cache_size:
            cache.resize(options.style_cache_size)

    key = (scope_id, css, bool(scoped))
    cached = style_cache.get(key)
    if cached is not None:
        debug_log(f"Style cache hit for {scope_id}")
        return cached

    stages = build_stages(scoped, options)
    if stages:
        context = RewriteContext(scope_id, options, file_path)
        sheet = parse_stylesheet(css, file_path)
        for stage in stages:
            result = stage(sheet, context)
            if result is not None:
                sheet = result
        source = sheet.to_css()
    else:
        source = css

    value = CompiledBlock(kind=BlockKind.STYLE, source=source)
    style_cache.set(key, value)
    return value
