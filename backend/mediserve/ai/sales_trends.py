"""
Sales Trend Analyzer: sales + prescription-trend CSV in, three text sections out.

The LLM reply is parsed as JSON and validated against SalesTrendsResponse.
Any failure (no API key, upstream error, malformed reply) raises
SalesAnalysisError so the route can show a single generic message.
"""
import json
import logging
from typing import Optional

from pydantic import ValidationError

from mediserve.ai.groq_client import GroqClient, get_groq_client, strip_code_fence
from mediserve.ai.prompts import SYSTEM_PROMPT, build_prompt
from mediserve.core.exceptions import SalesAnalysisError
from mediserve.schemas.analysis import SalesTrendsResponse

logger = logging.getLogger(__name__)

REPORT_SECTIONS = (
    ("Highest Demand Medicines", "highest_demand_medicines"),
    ("Future Stock Predictions", "future_stock_predictions"),
    ("Stock Optimization Suggestions", "stock_optimization_suggestions"),
)


def _as_text(value) -> str:
    # Models sometimes answer a section with a list instead of a string
    if isinstance(value, list):
        return "\n".join(f"- {item}" if not isinstance(item, dict) else "- " + json.dumps(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, indent=2)
    return value


def parse_analysis(raw: str) -> SalesTrendsResponse:
    try:
        data = json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise SalesAnalysisError(f"LLM reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SalesAnalysisError("LLM reply is not a JSON object")

    fields = {key: _as_text(data.get(key)) for _, key in REPORT_SECTIONS}
    try:
        return SalesTrendsResponse(**fields)
    except ValidationError as e:
        raise SalesAnalysisError(f"LLM reply failed schema validation: {e.error_count()} errors") from e


def analyze_sales_trends(
    sales_data: str,
    prescription_trends: str,
    client: Optional[GroqClient] = None,
) -> SalesTrendsResponse:
    client = client or get_groq_client()
    if not client.is_available():
        raise SalesAnalysisError("LLM client is not configured")

    raw = client.complete_json(SYSTEM_PROMPT, build_prompt(sales_data, prescription_trends))
    if raw is None:
        raise SalesAnalysisError("LLM call failed")

    result = parse_analysis(raw)
    logger.info("Sales trend analysis completed")
    return result


def build_report(result: SalesTrendsResponse) -> str:
    """Plain-text report offered as a download from the analytics page."""
    report = "Sales Trend Analysis Report\n\n"
    for title, key in REPORT_SECTIONS:
        report += f"--- {title} ---\n"
        report += f"{getattr(result, key)}\n\n"
    return report
