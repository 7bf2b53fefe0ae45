"""Symbol table, syntax trees and GSTAL stack-machine code generation."""

__version__ = "0.1.0"
__all__ = ["symbols", "syntax", "codegen", "assign_codegen"]