"""
Admin helpers to inspect, export and reset tracker tables

Used by the admin-only /utils/db routes and by scripts/db_utils.py. Password
hashes and tokens are never included in any output.
"""
import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from ..core.database import SessionLocal
from ..models.user import User
from ..models.contract import Contract
from ..models.subgrant import Subgrant
from ..models.session import Session as SessionModel

logger = logging.getLogger(__name__)

# Parents before children; clearing walks it in reverse
TABLE_MODELS = {
    'users': User,
    'sessions': SessionModel,
    'contracts': Contract,
    'subgrants': Subgrant,
}
TRACKER_TABLES = ('contracts', 'subgrants')

SECRET_COLUMNS = {'password_hash', 'token', 'refresh_token'}

MAX_DISPLAY_WIDTH = 100


@contextmanager
def _session(db: Optional[Session]) -> Iterator[Session]:
    """Use the caller's session, or open (and close) a private one"""
    if db is not None:
        yield db
        return
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _serialize(value: Any) -> Any:
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    if hasattr(value, 'value'):
        return value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _row_to_dict(record: Any) -> Dict[str, Any]:
    return {
        column.key: _serialize(getattr(record, column.key))
        for column in inspect(record).mapper.column_attrs
        if column.key not in SECRET_COLUMNS
    }


def get_all_table_data(db: Session) -> Dict[str, List[Dict[str, Any]]]:
    """Every row of every tracker table, keyed by table name"""
    return {
        table_name: [_row_to_dict(record) for record in db.query(model).all()]
        for table_name, model in TABLE_MODELS.items()
    }


def get_database_stats(db: Session) -> Dict[str, int]:
    """Record counts per table plus a total"""
    stats = {table_name: db.query(model).count() for table_name, model in TABLE_MODELS.items()}
    stats["total"] = sum(stats.values())
    return stats


def _format_value(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_DISPLAY_WIDTH:
        return value[:MAX_DISPLAY_WIDTH] + "..."
    return value


def display_all_database_content(db: Optional[Session] = None) -> str:
    """Plain-text dump: a count summary followed by every record"""
    with _session(db) as session:
        tables_data = get_all_table_data(session)

    rule = "=" * 80
    lines = [rule, "DATABASE CONTENT SUMMARY", rule, ""]
    lines += [f"{name.upper()}: {len(records)} record(s)" for name, records in tables_data.items()]
    lines += ["", f"Total Records: {sum(len(records) for records in tables_data.values())}"]

    for name, records in tables_data.items():
        lines += ["", rule, f"TABLE: {name.upper()} ({len(records)} records)", rule]
        if not records:
            lines.append("  (No records)")
        for number, record in enumerate(records, 1):
            lines.append(f"\n  Record #{number}:")
            lines += [f"    {key}: {_format_value(value)}" for key, value in record.items()]

    lines.append("\n" + rule)
    return "\n".join(lines)


def clear_database(db: Optional[Session] = None, confirm: bool = False, keep_users: bool = True) -> Dict[str, Any]:
    """
    Delete contracts and subgrants, and with keep_users=False accounts too

    Returns a status dict; nothing is deleted unless confirm is True.
    """
    if not confirm:
        return {
            "status": "error",
            "message": "Database clear operation requires confirm=True for safety"
        }

    tables = TRACKER_TABLES if keep_users else tuple(TABLE_MODELS)
    with _session(db) as session:
        try:
            deletion_counts = {
                name: session.query(TABLE_MODELS[name]).delete()
                for name in reversed(tables)
            }
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error clearing database: {str(e)}", exc_info=True)
            return {"status": "error", "message": f"Error clearing database: {str(e)}"}

    total_deleted = sum(deletion_counts.values())
    return {
        "status": "success",
        "message": f"Database cleared successfully. Deleted {total_deleted} total records.",
        "deletion_counts": deletion_counts,
        "total_deleted": total_deleted
    }


def export_database_to_json(db: Optional[Session] = None, file_path: Optional[str] = None) -> Dict[str, Any]:
    """Export every table as JSON-ready dicts, optionally writing them to file_path"""
    with _session(db) as session:
        tables_data = get_all_table_data(session)

    if file_path:
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(tables_data, f, indent=2)
        except OSError as e:
            logger.error(f"Error writing export to {file_path}: {str(e)}")
            return {"status": "error", "message": f"Error exporting database: {str(e)}"}

    return {
        "status": "success",
        "message": "Database exported successfully" + (f" to {file_path}" if file_path else ""),
        "data": tables_data,
        "file_path": file_path
    }
