"""
Core types for orderflow.

Lazy computation alias + domain type aliases.
"""

from __future__ import annotations

from decimal import Decimal

from kungfu import LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Lazy Computation Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail. Awaiting it runs it."""

# ═══════════════════════════════════════════════════════════════════════════════
# Domain Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type OrderId = str
type CustomerId = str
type ProductId = str

type Money = Decimal
"""Currency amount. Always Decimal, never float."""

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Lazy",
    "OrderId",
    "CustomerId",
    "ProductId",
    "Money",
)
