import os

from sfc.dependencies import DependencyTracker
from sfc.dispatcher import compile_block, compilers
from sfc.extractor import (
    extract_blocks,
    has_scoped_style,
    parse_document,
    template_node,
)
from sfc.log import debug_log, set_verbose
from sfc.merger import merge_parts
from sfc.models import BlockKind, CompileResult, scope_id_for
from sfc.options import apply_config, load_config, options as default_options
from sfc.style_rewriter import rewrite_style
from sfc.template import add_scope_attribute, minify_template, validate_template

__all__ = [
    "compile_sync",
    "compile_file",
    "apply_config",
    "load_config",
    "set_verbose",
]


def process_template(block, node, content, file_path, scope_id, scoped_style, ctx):
    if block.lang is None and node is not None:
        validate_template(node, content, ctx.options, file_path, ctx.warnings)
    res = compile_block(BlockKind.TEMPLATE, block.source, block.lang, file_path,
                        ctx.dependencies, ctx.registry)
    if scoped_style and ctx.options.scope_template:
        res.source = add_scope_attribute(res.source, scope_id)
    if ctx.options.production:
        res.source = minify_template(res.source, ctx.options)
    return res


def process_style(block, file_path, scope_id, ctx):
    res = compile_block(BlockKind.STYLE, block.source, block.lang, file_path,
                        ctx.dependencies, ctx.registry)
    return rewrite_style(scope_id, res.source, block.scoped, ctx.options,
                         ctx.style_cache, file_path)


def process_script(block, file_path, ctx):
    return compile_block(BlockKind.SCRIPT, block.source, block.lang, file_path,
                         ctx.dependencies, ctx.registry)


class _CompileContext:
    """Collaborators for a single compile call."""

    def __init__(self, options, registry, dependencies, style_cache):
        self.options = options
        self.registry = registry
        self.dependencies = dependencies
        self.style_cache = style_cache
        self.warnings = []


def compile_sync(content, file_path=None, *, scope_id=None, options=None, registry=None,
                 dependencies=None, style_cache=None, strict=False):
    """
    Compile a single-file component into a CommonJS module.

    Args:
        content: Text of the .vue document
        file_path: Path of the document; src references resolve against its
            directory and it seeds the scope id
        scope_id: Override for the derived scope id
        options: CompilerOptions (defaults to the process-wide options)
        registry: CompilerRegistry (defaults to the process-wide registry)
        dependencies: DependencyTracker, for callers that want to subscribe
            before the compile starts
        style_cache: StyleCache (defaults to the process-wide cache)
        strict: Raise ReferenceLoadError when a src reference can't be read
            instead of compiling the block as empty

    Returns:
        CompileResult with the emitted code, dependencies and warnings

    Raises:
        StructuralError: More than one template block
        StyleSyntaxError: A style block the rewriter cannot parse
        Exception: Anything raised by a registered language compiler
    """
    ctx = _CompileContext(
        options if options is not None else default_options,
        registry if registry is not None else compilers,
        dependencies if dependencies is not None else DependencyTracker(),
        style_cache,
    )
    # generate css scope id
    if scope_id is None:
        scope_id = scope_id_for(file_path, content)
    debug_log(f"Compiling {file_path or '<stdin>'} (scope {scope_id})")

    # parse the file into an HTML tree
    fragment = parse_document(content)
    blocks = extract_blocks(fragment, content, file_path, ctx.dependencies, ctx.warnings, strict=strict)

    # check for scoped style nodes
    scoped_style = has_scoped_style(fragment)

    parts = []
    for block in blocks:
        if block.kind is BlockKind.TEMPLATE:
            parts.append(process_template(block, template_node(fragment), content,
                                          file_path, scope_id, scoped_style, ctx))
        elif block.kind is BlockKind.STYLE:
            parts.append(process_style(block, file_path, scope_id, ctx))
        else:
            parts.append(process_script(block, file_path, ctx))

    return CompileResult(
        code=merge_parts(parts),
        scope_id=scope_id,
        dependencies=ctx.dependencies.paths,
        warnings=ctx.warnings,
    )


def compile_file(file_path, **kwargs):
    """Read a .vue file from disk and compile it."""
    file_path = os.path.abspath(file_path)
    with open(file_path, "r", encoding="utf-8") as f:
        content = f.read()
    return compile_sync(content, file_path, **kwargs)
