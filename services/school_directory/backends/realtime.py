# services/school_directory/backends/realtime.py
"""
Row-change notifications for the remote database.

Each table gets an AFTER trigger that publishes ``{"table", "type", "id"}``
on the ``directory_changes`` channel. Only the key travels in the payload:
NOTIFY payloads are capped at 8000 bytes and rows can carry inline images,
so listeners fetch the current row themselves.
"""
import json
from typing import Tuple

from sqlalchemy import text

from services.school_directory.backends.base import ChangeKind, Table

CHANGE_CHANNEL = "directory_changes"

NOTIFY_FUNCTION = f"""
CREATE OR REPLACE FUNCTION notify_directory_change() RETURNS trigger AS $$
BEGIN
  PERFORM pg_notify('{CHANGE_CHANNEL}', CAST(json_build_object(
    'table', TG_TABLE_NAME,
    'type', TG_OP,
    'id', CASE WHEN TG_OP = 'DELETE' THEN OLD.id ELSE NEW.id END
  ) AS text));
  RETURN NULL;
END;
$$ LANGUAGE plpgsql
"""


def trigger_statements():
    statements = [NOTIFY_FUNCTION]
    for table in Table:
        statements.append(f"DROP TRIGGER IF EXISTS {table.value}_notify ON {table.value}")
        statements.append(
            f"CREATE TRIGGER {table.value}_notify "
            f"AFTER INSERT OR UPDATE OR DELETE ON {table.value} "
            f"FOR EACH ROW EXECUTE FUNCTION notify_directory_change()"
        )
    return statements


async def install_change_triggers(conn) -> None:
    """Create the notify function and per-table triggers (PostgreSQL only)."""
    for statement in trigger_statements():
        await conn.execute(text(statement))


def parse_notification(payload: str) -> Tuple[Table, ChangeKind, str]:
    """Decode a channel payload. Raises ValueError on anything unexpected."""
    try:
        data = json.loads(payload)
        return Table(data["table"]), ChangeKind(data["type"]), str(data["id"])
    except (TypeError, KeyError, json.JSONDecodeError) as e:
        raise ValueError(f"Malformed change notification: {payload!r}") from e
