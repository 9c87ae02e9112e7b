"""Utility modules.

- symbols: process-wide symbol table behind captured frames
- logging: structured logging with error-chain expansion (import
  ``stackerr.utils.logging`` directly)
"""

from stackerr.utils.symbols import UNKNOWN, Symbol, SymbolTable, symbol_table

__all__ = [
    "UNKNOWN",
    "Symbol",
    "SymbolTable",
    "symbol_table",
]
