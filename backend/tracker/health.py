from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from tracker.db.main import get_session

router = APIRouter()

@router.get("/health")
async def health_check():
    """Basic health check without database"""
    return {
        "status": "ok",
        "service": "expense-tracker-api"
    }

@router.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_session)):
    """Health check with database connection test"""
    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        return {
            "status": "ok",
            "database": "connected"
        }
    except Exception as e:
        return {
            "status": "error",
            "database": "disconnected",
            "error": str(e)
        }
