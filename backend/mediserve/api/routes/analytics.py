"""
Analytics API: AI sales-trend analysis for the analytics page.

- sample data to pre-fill the form
- analysis (three text sections)
- the same analysis as a downloadable plain-text report
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from mediserve.ai import analyze_sales_trends, build_report
from mediserve.ai.sample_data import sales_data_csv, prescription_trends_csv
from mediserve.api.deps import get_current_pharmacy
from mediserve.core.exceptions import BusinessError, SalesAnalysisError
from mediserve.models.pharmacy import Pharmacy
from mediserve.schemas.analysis import SalesTrendsRequest, SalesTrendsResponse, SampleDataResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ANALYSIS_FAILED = "Failed to analyze trends. Please try again."


def _analyze(data: SalesTrendsRequest) -> SalesTrendsResponse:
    try:
        return analyze_sales_trends(data.sales_data, data.prescription_trends)
    except SalesAnalysisError as e:
        logger.warning(f"Sales trend analysis failed: {e}")
        raise BusinessError.upstream_unavailable(ANALYSIS_FAILED) from e


@router.get("/sample-data", response_model=SampleDataResponse)
def sample_data(pharmacy: Pharmacy = Depends(get_current_pharmacy)):
    return SampleDataResponse(
        sales_data=sales_data_csv(),
        prescription_trends=prescription_trends_csv(),
    )


@router.post("/sales-trends", response_model=SalesTrendsResponse)
def sales_trends(data: SalesTrendsRequest, pharmacy: Pharmacy = Depends(get_current_pharmacy)):
    return _analyze(data)


@router.post("/sales-trends/report", response_class=PlainTextResponse)
def sales_trends_report(data: SalesTrendsRequest, pharmacy: Pharmacy = Depends(get_current_pharmacy)):
    report = build_report(_analyze(data))
    return PlainTextResponse(
        report,
        headers={"Content-Disposition": "attachment; filename=sales_analysis_report.txt"},
    )
