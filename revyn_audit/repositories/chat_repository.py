"""
Chat Repository - Revyn Audit Platform
revyn_audit/repositories/chat_repository.py

Chat sessions (one per conversation about a purchased report) and their
messages.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from revyn_audit.models.enumerations import ChatRole, ReportKind
from revyn_audit.repositories.base import BaseRepository, utc


class ChatRepository(BaseRepository):
    """Repository for CHAT_SESSIONS and CHAT_MESSAGES."""

    TABLE_NAME = "CHAT_SESSIONS"

    def create_session(self, purchase_id: UUID, report_kind: ReportKind, title: str) -> Dict[str, Any]:
        session_id = uuid4()
        sql = """
            INSERT INTO CHAT_SESSIONS (ID, PURCHASE_ID, REPORT_KIND, TITLE, CREATED_AT)
            VALUES (%s, %s, %s, %s, %s)
        """
        params = (str(session_id), str(purchase_id), report_kind.value, title, datetime.now(timezone.utc))
        self.execute(sql, params)
        return self.get_session(session_id)

    def get_session(self, session_id: UUID) -> Optional[Dict[str, Any]]:
        sql = """
            SELECT ID, PURCHASE_ID, REPORT_KIND, TITLE, CREATED_AT, UPDATED_AT
            FROM CHAT_SESSIONS WHERE ID = %s
        """
        row = self.fetch_one(sql, (str(session_id),))
        return self._session_to_dict(row) if row else None

    def list_sessions(self, purchase_id: UUID) -> List[Dict[str, Any]]:
        """Sessions of a purchase, most recently active first."""
        sql = """
            SELECT ID, PURCHASE_ID, REPORT_KIND, TITLE, CREATED_AT, UPDATED_AT
            FROM CHAT_SESSIONS
            WHERE PURCHASE_ID = %s
            ORDER BY COALESCE(UPDATED_AT, CREATED_AT) DESC
        """
        rows = self.fetch_all(sql, (str(purchase_id),))
        return [self._session_to_dict(row) for row in rows]

    def add_message(self, session_id: UUID, role: ChatRole, content: str) -> Dict[str, Any]:
        """Append a message and bump the session's UPDATED_AT."""
        message_id = uuid4()
        now = datetime.now(timezone.utc)
        with self.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO CHAT_MESSAGES (ID, SESSION_ID, ROLE, CONTENT, CREATED_AT)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (str(message_id), str(session_id), role.value, content, now),
            )
            cursor.execute("UPDATE CHAT_SESSIONS SET UPDATED_AT = %s WHERE ID = %s", (now, str(session_id)))
        return {
            "id": message_id,
            "session_id": session_id,
            "role": role,
            "content": content,
            "created_at": now,
        }

    def list_messages(self, session_id: UUID, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Messages in chronological order. With a limit, the most recent
        `limit` messages are returned, still oldest first.
        """
        if limit is None:
            sql = """
                SELECT ID, SESSION_ID, ROLE, CONTENT, CREATED_AT
                FROM CHAT_MESSAGES WHERE SESSION_ID = %s
                ORDER BY CREATED_AT ASC
            """
            params: tuple = (str(session_id),)
        else:
            sql = """
                SELECT * FROM (
                    SELECT ID, SESSION_ID, ROLE, CONTENT, CREATED_AT
                    FROM CHAT_MESSAGES WHERE SESSION_ID = %s
                    ORDER BY CREATED_AT DESC
                    LIMIT %s
                ) ORDER BY CREATED_AT ASC
            """
            params = (str(session_id), limit)
        rows = self.fetch_all(sql, params)
        return [self._message_to_dict(row) for row in rows]

    def _session_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": UUID(row["ID"]),
            "purchase_id": UUID(row["PURCHASE_ID"]),
            "report_kind": ReportKind(row["REPORT_KIND"]),
            "title": row["TITLE"],
            "created_at": utc(row["CREATED_AT"]),
            "updated_at": utc(row["UPDATED_AT"]),
        }

    def _message_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": UUID(row["ID"]),
            "session_id": UUID(row["SESSION_ID"]),
            "role": ChatRole(row["ROLE"]),
            "content": row["CONTENT"],
            "created_at": utc(row["CREATED_AT"]),
        }
