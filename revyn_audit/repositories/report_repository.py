"""
Report Repository - Revyn Audit Platform
revyn_audit/repositories/report_repository.py

Stores generated reports as a VARIANT document keyed by report id.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from revyn_audit.models.report import GeneratedReport
from revyn_audit.repositories.base import BaseRepository, variant


class ReportRepository(BaseRepository):
    """Repository for GENERATED_REPORTS."""

    TABLE_NAME = "GENERATED_REPORTS"

    def create(self, report: GeneratedReport) -> None:
        sql = """
            INSERT INTO GENERATED_REPORTS (ID, SUBMISSION_ID, REPORT_TYPE_ID, OVERALL_SCORE, CONTENT, GENERATED_AT)
            SELECT %s, %s, %s, %s, PARSE_JSON(%s), %s
        """
        params = (
            str(report.id),
            str(report.submission_id),
            report.report_type_id,
            report.overall_score,
            report.model_dump_json(),
            report.generated_at,
        )
        self.execute(sql, params)

    def get_by_id(self, report_id: UUID) -> Optional[GeneratedReport]:
        sql = "SELECT CONTENT FROM GENERATED_REPORTS WHERE ID = %s"
        row = self.fetch_one(sql, (str(report_id),))
        return self._row_to_report(row) if row else None

    def get_latest_for_submission(self, submission_id: UUID) -> Optional[GeneratedReport]:
        sql = """
            SELECT CONTENT FROM GENERATED_REPORTS
            WHERE SUBMISSION_ID = %s
            ORDER BY GENERATED_AT DESC
            LIMIT 1
        """
        row = self.fetch_one(sql, (str(submission_id),))
        return self._row_to_report(row) if row else None

    def _row_to_report(self, row: Dict[str, Any]) -> GeneratedReport:
        return GeneratedReport.model_validate(variant(row["CONTENT"]))
