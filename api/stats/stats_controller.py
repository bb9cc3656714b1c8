from typing import List
from sqlalchemy.orm import Session

from api.stats.stats_service import get_stats, get_recent_check_ins
from api.stats.stats_schema import StatsOut, RecentCheckInOut


def stats_controller(db: Session) -> StatsOut:
    return StatsOut(**get_stats(db))


def recent_check_ins_controller(db: Session, limit: int) -> List[RecentCheckInOut]:
    return [RecentCheckInOut(**row) for row in get_recent_check_ins(db, limit)]
