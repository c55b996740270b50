# vueify - single-file component compiler
"""
Core modules for the vueify compiler:
- errors: Error types and line context helpers
- models: Blocks, compiled blocks, dependency events and results
- extractor: Splits a .vue document into template/script/style blocks
- dispatcher: Language compiler registry (lang attribute -> compile function)
- style_rewriter: Scoped CSS rewriting with an LRU cache
- merger: Assembles compiled blocks into the emitted module
- dependencies: Dependency events for incremental builds
- options: Compiler configuration
"""

from .errors import (
    SfcCompileError,
    StructuralError,
    LanguageCompileError,
    StyleSyntaxError,
    ReferenceLoadError,
)
from .models import Block, BlockKind, CompiledBlock, CompileResult, CompileWarning, DependencyEvent
from .dependencies import DependencyTracker
from .dispatcher import CompilerRegistry, compilers, compile_block
from .options import CompilerOptions, AutoprefixerOptions, apply_config, load_config
from .style_rewriter import StyleCache, RewriteContext, rewrite_style
from .merger import merge_parts

__all__ = [
    'SfcCompileError',
    'StructuralError',
    'LanguageCompileError',
    'StyleSyntaxError',
    'ReferenceLoadError',
    'Block',
    'BlockKind',
    'CompiledBlock',
    'CompileResult',
    'CompileWarning',
    'DependencyEvent',
    'DependencyTracker',
    'CompilerRegistry',
    'compilers',
    'compile_block',
    'CompilerOptions',
    'AutoprefixerOptions',
    'apply_config',
    'load_config',
    'StyleCache',
    'RewriteContext',
    'rewrite_style',
    'merge_parts',
]
