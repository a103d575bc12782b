"""
Payroll services: orchestration over ingestion, configuration and the
pure engines.  The only layer that combines all three.
"""

from payroll_services.payroll_service import PayrollRun, PayrollService

__all__ = ["PayrollRun", "PayrollService"]
