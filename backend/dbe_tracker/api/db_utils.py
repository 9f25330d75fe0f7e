"""
API endpoints for database utility functions (admin only)
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
import logging
from ..core.database import get_db
from ..core.dependencies import require_admin
from ..models.user import User
from ..utils.db_utils import (
    display_all_database_content,
    clear_database,
    export_database_to_json,
    get_all_table_data,
    get_database_stats
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/utils", tags=["database-utils"])


@router.get("/db/display")
def display_database(
    format: str = Query(default="text", pattern="^(text|json)$"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Display all database content

    - **format**: Output format - 'text' for formatted text, 'json' for JSON
    """
    if format == "json":
        return {
            "status": "success",
            "data": get_all_table_data(db)
        }
    return {
        "status": "success",
        "content": display_all_database_content(db)
    }


@router.post("/db/clear")
def clear_database_endpoint(
    confirm: bool = Query(..., description="Must be True to clear database"),
    keep_users: bool = Query(default=True, description="Keep user accounts and sessions"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Clear contracts and subgrants (and optionally users)

    **WARNING**: This deletes data permanently.
    """
    if not confirm:
        raise HTTPException(
            status_code=400,
            detail="Database clear operation requires confirm=true for safety"
        )

    result = clear_database(db=db, confirm=True, keep_users=keep_users)
    if result["status"] == "error":
        raise HTTPException(status_code=500, detail=result["message"])

    logger.warning(f"Database cleared by admin {admin.id}: {result['deletion_counts']}")
    return result


@router.get("/db/export")
def export_database(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Export all database content as JSON
    """
    result = export_database_to_json(db=db)
    if result["status"] == "error":
        raise HTTPException(status_code=500, detail=result["message"])
    return result


@router.get("/db/stats")
def database_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Get database statistics (record counts per table)
    """
    return {
        "status": "success",
        "stats": get_database_stats(db)
    }
