import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sfc.dispatcher import CompilerRegistry
from sfc.options import CompilerOptions
from sfc.style_rewriter import StyleCache


@pytest.fixture
def options():
    """Fresh options, independent of the environment and of other tests."""
    return CompilerOptions(production=False)


@pytest.fixture
def registry():
    return CompilerRegistry()


@pytest.fixture
def style_cache():
    return StyleCache()
