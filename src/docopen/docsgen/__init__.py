"""Documentation compilation."""

from .builder import Compilation, compile_docs

__all__ = ["Compilation", "compile_docs"]
