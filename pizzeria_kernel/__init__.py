"""
Pizzeria Kernel

Order placement against a shared inventory and courier roster with:
- Atomic placement (stock, courier, order record commit together or not at all)
- Conditional stock decrement and compare-and-swap courier reservation
- Typed failures instead of raw store exceptions
- Read-only reporting over the order ledger and catalog
"""

__version__ = "0.1.0"
