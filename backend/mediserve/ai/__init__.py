"""AI Module for Groq LLM Integration.

Used by the sales-trend analyzer and the patient-update drafter. The model
only writes text; it does not touch stock, prescriptions or notifications.
"""

from .sales_trends import analyze_sales_trends, build_report
from .patient_update import draft_patient_update

__all__ = ["analyze_sales_trends", "build_report", "draft_patient_update"]
