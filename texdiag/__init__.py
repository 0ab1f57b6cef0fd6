"""
texdiag - Structured diagnostics from TeX compiler logs

Turns the wrapped, stateful .log output of pdfTeX, XeTeX and LuaTeX into an
ordered list of errors, warnings and typesetting notices, each attributed to
the source file and line that produced it.

Architecture:
- Diagnostics Context: log reconstruction, file tracking, classification, filtering
- Utils: logging setup, report tables, timestamps
"""

__version__ = "0.1.0"
