"""
Language compiler registry and dispatch.

A language compiler is a synchronous function::

    def compile_sass(source, dependencies, file_path):
        ...
        for path in included_files:
            dependencies.emit(path)
        return css

``dependencies`` is the DependencyTracker of the current compile call and
``file_path`` the path of the document being compiled. Whatever the function
raises reaches the caller unchanged.
"""
import inspect

from sfc.errors import LanguageCompileError
from sfc.log import debug_log
from sfc.models import CompiledBlock


class CompilerRegistry:
    """Maps language tags (the ``lang`` attribute) to compile functions."""

    def __init__(self, handlers=None):
        self._handlers = {}
        for lang, compile_fn in (handlers or {}).items():
            self.register(lang, compile_fn)

    def register(self, lang, compile_fn):
        """
        Register (or replace) the compiler for a language tag.

        Raises:
            ValueError: If the tag is empty or not a string
            TypeError: If compile_fn cannot be called as (source, dependencies, file_path)
        """
        if not isinstance(lang, str) or not lang:
            raise ValueError(f"Language tag must be a non-empty string, got {lang!r}")
        if not callable(compile_fn):
            raise TypeError(f"Compiler for lang=\"{lang}\" must be callable")
        try:
            signature = inspect.signature(compile_fn)
        except (TypeError, ValueError):
            # builtins and some C extensions have no introspectable signature
            signature = None
        if signature is not None:
            try:
                signature.bind(None, None, None)
            except TypeError:
                raise TypeError(
                    f"Compiler for lang=\"{lang}\" must accept (source, dependencies, file_path)"
                ) from None
        self._handlers[lang] = compile_fn

    def unregister(self, lang):
        self._handlers.pop(lang, None)

    def get(self, lang):
        if lang is None:
            return None
        return self._handlers.get(lang)

    def languages(self):
        return sorted(self._handlers)

    def __contains__(self, lang):
        return lang in self._handlers

    def __len__(self):
        return len(self._handlers)


# Process-wide registry, extended by apply_config(custom_compilers=...)
compilers = CompilerRegistry()


def compile_block(kind, source, lang, file_path, dependencies, registry=None):
    """
    Compile a block's source with the compiler registered for its language.

    Languages without a registered compiler pass through unchanged.

    Args:
        kind: BlockKind of the block
        source: Raw block source
        lang: Language tag, or None
        file_path: Path of the document being compiled
        dependencies: DependencyTracker for this compile call
        registry: CompilerRegistry to use (defaults to the process-wide one)

    Returns:
        CompiledBlock
    """
    if registry is None:
        registry = compilers
    compile_fn = registry.get(lang)
    if compile_fn is None:
        return CompiledBlock(kind=kind, source=source)

    debug_log(f"Compiling {kind.value} block with lang=\"{lang}\"")
    result = compile_fn(source, dependencies, file_path)
    if not isinstance(result, str):
        raise LanguageCompileError(
            message=f"Compiler for lang=\"{lang}\" returned {type(result).__name__} instead of text",
            suggestion="Language compilers must return the compiled source as a string",
            file_path=file_path,
        )
    return CompiledBlock(kind=kind, source=result)
