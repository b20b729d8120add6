"""
Purchase Repository - Revyn Audit Platform
revyn_audit/repositories/purchase_repository.py

One row per Stripe payment intent. Status moves from pending to completed
or failed when the webhook reports the outcome.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from revyn_audit.models.enumerations import PurchaseStatus
from revyn_audit.repositories.base import BaseRepository, optional_uuid, utc, variant

_COLUMNS = """ID, PAYMENT_INTENT_ID, USER_ID, SUBMISSION_ID, CUSTOMER_EMAIL, CUSTOMER_NAME,
              REPORT_IDS, AMOUNT, CURRENCY, STATUS, CREATED_AT, UPDATED_AT"""


class PurchaseRepository(BaseRepository):
    """Repository for PURCHASES."""

    TABLE_NAME = "PURCHASES"

    def create(
        self,
        payment_intent_id: str,
        customer_email: str,
        report_ids: List[str],
        amount: int,
        currency: str,
        customer_name: Optional[str] = None,
        submission_id: Optional[UUID] = None,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Record a pending purchase for a freshly created payment intent.

        Returns:
            Created purchase dict
        """
        purchase_id = uuid4()
        now = datetime.now(timezone.utc)

        sql = """
            INSERT INTO PURCHASES (ID, PAYMENT_INTENT_ID, USER_ID, SUBMISSION_ID, CUSTOMER_EMAIL, CUSTOMER_NAME,
                                   REPORT_IDS, AMOUNT, CURRENCY, STATUS, CREATED_AT)
            SELECT %s, %s, %s, %s, %s, %s, PARSE_JSON(%s), %s, %s, %s, %s
        """
        params = (
            str(purchase_id),
            payment_intent_id,
            user_id,
            str(submission_id) if submission_id else None,
            customer_email,
            customer_name,
            json.dumps(report_ids),
            amount,
            currency,
            PurchaseStatus.PENDING.value,
            now,
        )
        self.execute(sql, params)
        return self.get_by_id(purchase_id)

    def get_by_id(self, purchase_id: UUID) -> Optional[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM PURCHASES WHERE ID = %s"
        row = self.fetch_one(sql, (str(purchase_id),))
        return self._row_to_dict(row) if row else None

    def get_by_payment_intent(self, payment_intent_id: str) -> Optional[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM PURCHASES WHERE PAYMENT_INTENT_ID = %s"
        row = self.fetch_one(sql, (payment_intent_id,))
        return self._row_to_dict(row) if row else None

    def find_completed_for_user(self, user_id: str, report_id: str) -> Optional[Dict[str, Any]]:
        """Most recent completed purchase of a user that includes report_id."""
        sql = f"""
            SELECT {_COLUMNS} FROM PURCHASES
            WHERE USER_ID = %s AND STATUS = %s AND ARRAY_CONTAINS(%s::VARIANT, REPORT_IDS)
            ORDER BY CREATED_AT DESC
            LIMIT 1
        """
        row = self.fetch_one(sql, (user_id, PurchaseStatus.COMPLETED.value, report_id))
        return self._row_to_dict(row) if row else None

    def update_status(self, payment_intent_id: str, new_status: PurchaseStatus) -> Optional[Dict[str, Any]]:
        """
        Set the status of the purchase behind a payment intent.

        Returns:
            Updated purchase dict or None if no purchase matches
        """
        sql = """
            UPDATE PURCHASES
            SET STATUS = %s, UPDATED_AT = %s
            WHERE PAYMENT_INTENT_ID = %s
        """
        self.execute(sql, (new_status.value, datetime.now(timezone.utc), payment_intent_id))
        return self.get_by_payment_intent(payment_intent_id)

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert Snowflake row to purchase dict."""
        return {
            "id": UUID(row["ID"]),
            "payment_intent_id": row["PAYMENT_INTENT_ID"],
            "user_id": row["USER_ID"],
            "submission_id": optional_uuid(row["SUBMISSION_ID"]),
            "customer_email": row["CUSTOMER_EMAIL"],
            "customer_name": row["CUSTOMER_NAME"],
            "report_ids": variant(row["REPORT_IDS"]) or [],
            "amount": int(row["AMOUNT"]),
            "currency": row["CURRENCY"],
            "status": PurchaseStatus(row["STATUS"]),
            "created_at": utc(row["CREATED_AT"]),
            "updated_at": utc(row["UPDATED_AT"]),
        }
