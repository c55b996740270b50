"""
Block extraction for single-file components.

Splits a parsed ``.vue`` document into its ``<template>``, ``<script>`` and
``<style>`` blocks, resolving ``src`` references relative to the document.
"""
import os
import textwrap
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, Tag

from sfc.errors import ReferenceLoadError, StructuralError
from sfc.log import debug_log, warn
from sfc.models import Block, BlockKind, CompileWarning, WarningKind

BLOCK_TAGS = {kind.value: kind for kind in BlockKind}
DEFAULT_SCRIPT_LANG = "babel"


def parse_document(content):
    """Parse document text into a fragment whose top-level children are the blocks."""
    with warnings.catch_warnings():
        # short documents can look like file names to BeautifulSoup
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        return BeautifulSoup(content, "html.parser")


def top_level_blocks(fragment):
    """Yield the top-level template/style/script tags, in document order."""
    for node in fragment.contents:
        if isinstance(node, Tag) and node.name in BLOCK_TAGS:
            yield node


def validate_node_count(fragment, file_path=None):
    """
    Ensure there's only one template node.

    Raises:
        StructuralError: If the document has more than one <template>
    """
    count = sum(1 for node in top_level_blocks(fragment) if node.name == "template")
    if count > 1:
        raise StructuralError(
            message=f"Found {count} <template> blocks",
            suggestion="Only one template tag is allowed per *.vue file",
            file_path=file_path,
        )


def template_node(fragment):
    for node in top_level_blocks(fragment):
        if node.name == "template":
            return node
    return None


def check_lang(node):
    """Return the lang attribute of a node (the last one wins), or None."""
    lang = node.attrs.get("lang")
    return lang if lang else None


def is_scoped(node):
    return "scoped" in node.attrs


def has_scoped_style(fragment):
    return any(node.name == "style" and is_scoped(node) for node in top_level_blocks(fragment))


def pad_content(content):
    """Replace content with the same number of empty lines."""
    return "\n" * content.count("\n")


def deindent(source):
    return textwrap.dedent(source)


def serialize_children(node):
    """Turn a block's children back into source text."""
    if node.name == "template":
        return node.decode_contents()
    # script and style bodies are raw text for the parser
    return "".join(str(child) for child in node.contents)


def check_src(node, file_path, dependencies, warning_list, strict=False):
    """
    Load the file referenced by a node's src attribute.

    Paths resolve relative to the document's directory (the working directory
    when there is no document path). The file is emitted as a dependency
    before it is read, so watchers also learn about files that don't exist yet.

    Args:
        node: Block tag
        file_path: Path of the document, or None
        dependencies: DependencyTracker for this compile
        warning_list: List collecting CompileWarnings
        strict: Raise ReferenceLoadError instead of degrading to empty content

    Returns:
        The file content, "" if it could not be read, or None if the node has
        no src attribute
    """
    src = node.attrs.get("src")
    if not src:
        return None
    base_dir = os.path.dirname(os.path.abspath(file_path)) if file_path else os.getcwd()
    ref_path = os.path.normpath(os.path.join(base_dir, src))
    dependencies.emit(ref_path)
    try:
        with open(ref_path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        message = f"Failed to load src: \"{src}\" from file: \"{ref_path}\""
        if strict:
            raise ReferenceLoadError(
                message=message,
                suggestion="Check the src attribute path",
                file_path=file_path,
            ) from e
        warn(message)
        warning_list.append(CompileWarning(kind=WarningKind.REFERENCE, message=message, path=ref_path))
        return ""


def extract_block(node, content, file_path, dependencies, warning_list, strict=False):
    """Build the Block for a single top-level tag."""
    kind = BLOCK_TAGS[node.name]
    lang = check_lang(node)
    if kind is BlockKind.SCRIPT and lang is None:
        lang = DEFAULT_SCRIPT_LANG

    src = node.attrs.get("src") or None
    source = check_src(node, file_path, dependencies, warning_list, strict=strict)
    if source is None:
        source = serialize_children(node)
        if kind is BlockKind.SCRIPT:
            # pad the script to ensure correct line number for syntax errors
            location = content.find(source) if source else -1
            if location > 0:
                source = pad_content(content[:location]) + source
        source = deindent(source)

    return Block(
        kind=kind,
        lang=lang,
        source=source,
        src=src,
        scoped=kind is BlockKind.STYLE and is_scoped(node),
    )


def extract_blocks(fragment, content, file_path, dependencies, warning_list, strict=False):
    """
    Extract every block of a parsed document, in document order.

    Raises:
        StructuralError: If the document has more than one <template>
    """
    validate_node_count(fragment, file_path)
    blocks = []
    for node in top_level_blocks(fragment):
        block = extract_block(node, content, file_path, dependencies, warning_list, strict=strict)
        debug_log(f"Extracted {block.kind.value} block (lang={block.lang}, {len(block.source)} chars)")
        blocks.append(block)
    return blocks
