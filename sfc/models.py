"""
Data model shared by the compile pipeline.
"""
import hashlib
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class BlockKind(str, Enum):
    """The three top-level sections of a component document."""
    TEMPLATE = "template"
    STYLE = "style"
    SCRIPT = "script"


class WarningKind(str, Enum):
    """Categorizes non-fatal problems found during a compile."""
    REFERENCE = "reference"
    VALIDATION = "validation"


class Block(BaseModel):
    """One section extracted from a document, before compilation."""
    kind: BlockKind
    lang: Optional[str] = None
    source: str = ""
    src: Optional[str] = None
    scoped: bool = False


class CompiledBlock(BaseModel):
    """Output of compiling a Block."""
    kind: BlockKind
    source: str


class DependencyEvent(BaseModel):
    """A file other than the document itself influenced the output."""
    path: str


class CompileWarning(BaseModel):
    kind: WarningKind
    message: str
    path: Optional[str] = None

    def __str__(self):
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class CompileResult(BaseModel):
    """Everything a single compile call produces."""
    code: str
    scope_id: str
    dependencies: List[str] = Field(default_factory=list)
    warnings: List[CompileWarning] = Field(default_factory=list)


def scope_id_for(file_path=None, content=""):
    """
    Derive the scope id used to namespace a document's styles.

    The id hashes the file path when there is one, otherwise the content, so it
    is stable for identical input.
    """
    key = file_path or content
    digest = hashlib.md5(key.encode("utf-8")).hexdigest()[:8]
    return f"_v-{digest}"
