from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import settings
from middlewares.role_middleware import staff_only
from api.stats.stats_controller import stats_controller, recent_check_ins_controller
from api.stats.stats_schema import StatsOut, RecentCheckInOut

router = APIRouter(tags=["Statistics"])


@router.get(
    "/stats",
    response_model=StatsOut,
    summary="Live registration and check-in counts",
)
def stats(
    db: Session = Depends(get_db),
    current_user: dict = Depends(staff_only),
) -> StatsOut:
    return stats_controller(db)


@router.get(
    "/recent-check-ins",
    response_model=List[RecentCheckInOut],
    summary="Latest check-ins, newest first",
)
def recent_check_ins(
    limit: int = Query(settings.RECENT_CHECK_INS_DEFAULT_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: dict = Depends(staff_only),
) -> List[RecentCheckInOut]:
    return recent_check_ins_controller(db, limit)
