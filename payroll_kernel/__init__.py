"""
Payroll Kernel

Shared foundation for the shift payroll engine:
- Structured JSON logging with run-scoped context
- Typed exception hierarchy with machine-readable codes
- Immutable domain records, ledger types and statutory rates
"""

__version__ = "0.1.0"
