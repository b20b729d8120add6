"""
Report Products - Revyn Audit Platform
revyn_audit/scoring/report_types.py

Static catalog of purchasable reports. Only the marketing audit is on sale;
the other products are listed as coming soon.
"""

from typing import Dict, List, Optional

from revyn_audit.models.report import ReportType

REPORT_PRICE_USD = 125

REPORT_TYPES: List[ReportType] = [
    ReportType(
        id="marketing-audit",
        title="Marketing Strategy & Brand Audit",
        description="Comprehensive analysis of your marketing strategy, brand alignment, and channel effectiveness",
        price=REPORT_PRICE_USD,
        category="Marketing",
        estimated_time="15-20 minutes",
        available=True,
    ),
    ReportType(
        id="sales-performance",
        title="Sales Performance Snapshot",
        description="Deep dive into your sales funnel, processes, and performance metrics",
        price=REPORT_PRICE_USD,
        category="Sales",
        estimated_time="12-15 minutes",
        available=False,
    ),
    ReportType(
        id="financial-health",
        title="Financial Health Snapshot",
        description="Comprehensive analysis of your financial performance, cash flow, and profitability",
        price=REPORT_PRICE_USD,
        category="Finance",
        estimated_time="10-15 minutes",
        available=False,
    ),
    ReportType(
        id="operations-audit",
        title="Operations & Production Health Audit",
        description="Analysis of your operational efficiency, workflows, and production capabilities",
        price=REPORT_PRICE_USD,
        category="Operations",
        estimated_time="12-18 minutes",
        available=False,
    ),
    ReportType(
        id="hr-team-readiness",
        title="HR & Team Readiness Snapshot",
        description="Assessment of your team structure, culture, and human resources effectiveness",
        price=REPORT_PRICE_USD,
        category="HR",
        estimated_time="10-15 minutes",
        available=False,
    ),
]

_BY_ID: Dict[str, ReportType] = {r.id: r for r in REPORT_TYPES}


def get_report_type(report_id: str) -> Optional[ReportType]:
    return _BY_ID.get(report_id)


def unavailable_report_ids(report_ids: List[str]) -> List[str]:
    """Ids that are unknown or not currently on sale."""
    return [rid for rid in report_ids if rid not in _BY_ID or not _BY_ID[rid].available]


def price_in_cents(report_ids: List[str]) -> int:
    return sum(_BY_ID[rid].price * 100 for rid in report_ids if rid in _BY_ID)
