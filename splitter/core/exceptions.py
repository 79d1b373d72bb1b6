"""Defect types for the bill graph"""

from typing import List


class BillIntegrityError(RuntimeError):
    """
    Raised when a bill graph breaks one of its structural invariants.

    Under- or over-assigned items and totals that do not reconcile are
    ordinary editing states and never raise; this error only reports
    states that correct operations cannot produce.
    """

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations) or "bill graph is inconsistent")
