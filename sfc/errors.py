"""
Error types for the vueify compiler.

Structural problems and language compile failures abort a compile. Missing
``src`` references and template validation messages are only warnings, unless
the caller asked for strict mode.
"""


class SfcCompileError(Exception):
    """Base exception for component compilation errors with line numbers and hints."""
    def __init__(self, message, line_number=None, column=None, context=None, suggestion=None, file_path=None):
        self.message = message
        self.line_number = line_number
        self.column = column
        self.context = context  # The offending line
        self.suggestion = suggestion  # How to fix it
        self.file_path = file_path
        super().__init__(self._format_error())

    def _format_error(self):
        """Format the error message with context and suggestion."""
        lines = ["\n❌ Compilation Error"]
        if self.file_path:
            lines.append(f" in {self.file_path}")
        if self.line_number:
            lines.append(f" at line {self.line_number}")
            if self.column:
                lines.append(f", column {self.column}")
        lines.append(":\n")

        lines.append(f"   {self.message}\n")

        if self.context:
            lines.append(f"   > {self.context}\n")

        if self.suggestion:
            lines.append(f"   💡 {self.suggestion}\n")

        return "".join(lines)


class StructuralError(SfcCompileError):
    """The document has an invalid set of top-level blocks."""


class LanguageCompileError(SfcCompileError):
    """
    Raised by language compilers that want a formatted error.

    Registered compilers may raise anything; their exceptions reach the caller
    unchanged. This class is a convenience for compiler authors, and is also
    used by the dispatcher when a compiler returns something other than text.
    """


class StyleSyntaxError(SfcCompileError):
    """CSS that the style rewriter cannot parse."""


class ReferenceLoadError(SfcCompileError):
    """A ``src`` reference could not be read and the compile runs in strict mode."""


def get_line_context(source_code, line_number):
    """Extract the line of code from source by line number (1-based)."""
    if not source_code or line_number is None:
        return None
    source_lines = source_code.split('\n')
    if 0 < line_number <= len(source_lines):
        return source_lines[line_number - 1].strip()
    return None


def line_and_column(source_code, offset):
    """Convert a character offset into a (line, column) pair, both 1-based."""
    line = source_code.count('\n', 0, offset) + 1
    column = offset - (source_code.rfind('\n', 0, offset) + 1) + 1
    return line, column
