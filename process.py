import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

import config
from errors import ValidationError
from structs import (
    DIFFICULTIES,
    PLATFORMS,
    ActivityPoint,
    ActivityRecord,
    ContestRecord,
    PlatformStats,
    ProblemRecord,
    SubmissionRecord,
    TagRecord,
    UserProfile,
)
from utils import check_count, coerce_records, current_date

logger = logging.getLogger(__name__)

WILDCARD = "all"
STATUS_FILTERS = {"solved": True, "unsolved": False}


def _resolve_today(today: Optional[date]) -> date:
    if today is None:
        return current_date()
    if isinstance(today, datetime):
        return today.date()
    return today


def _window(days: int, today: Optional[date]) -> List[str]:
    today = _resolve_today(today)
    return [(today - timedelta(days=days - 1 - i)).isoformat() for i in range(days)]


def _check_platform(platform) -> str:
    if platform not in PLATFORMS:
        raise ValidationError(f"unknown platform {platform!r}, expected one of {', '.join(PLATFORMS)}")
    return platform


def aggregate_activity(
    activities: Iterable[Union[ActivityRecord, dict]],
    days: int = config.ACTIVITY_DAYS,
    today: Optional[date] = None,
) -> List[ActivityPoint]:
    """Merge per-platform daily activity into a gap-filled series.

    The series holds exactly ``days`` entries ending at ``today`` (the current
    date in the configured timezone by default), oldest first. Records sharing
    a date and platform are summed; records outside the window are dropped.
    """
    check_count("days", days)
    counts = {day: dict.fromkeys(PLATFORMS, 0) for day in _window(days, today)}

    dropped = 0
    for record in coerce_records(ActivityRecord, activities):
        bucket = counts.get(record.date)
        if bucket is None:
            dropped += 1
            continue
        bucket[record.platform] += record.problemsSolved
    if dropped:
        logger.debug("Dropped %d activity records outside the %d day window", dropped, days)

    return [
        ActivityPoint(date=day, total=sum(per_platform.values()), **per_platform)
        for day, per_platform in counts.items()
    ]


def rank_tags(tags: Iterable[Union[TagRecord, dict]], limit: int = config.TOP_TAGS) -> List[TagRecord]:
    """Top ``limit`` tags by count; equal counts are ordered by tag name."""
    check_count("limit", limit)
    records = list(coerce_records(TagRecord, tags))
    return sorted(records, key=lambda t: (-t.count, t.tag))[:limit]


def filter_problems(
    problems: Iterable[Union[ProblemRecord, dict]],
    platform: str,
    query: str = "",
    difficulty: Optional[str] = WILDCARD,
    status: Union[str, bool, None] = WILDCARD,
) -> List[ProblemRecord]:
    """Problems on ``platform`` that match every given filter, in input order.

    ``query`` is matched case-insensitively as a substring of the title or of
    any tag. ``difficulty`` and ``status`` accept ``"all"`` or ``None`` as
    wildcards; ``status`` is ``"solved"``, ``"unsolved"`` or a bool.
    """
    _check_platform(platform)
    if difficulty is not None and difficulty != WILDCARD and difficulty not in DIFFICULTIES:
        raise ValidationError(f"unknown difficulty {difficulty!r}")

    if status is None or status == WILDCARD:
        want_solved = None
    elif isinstance(status, bool):
        want_solved = status
    elif status in STATUS_FILTERS:
        want_solved = STATUS_FILTERS[status]
    else:
        raise ValidationError(f"unknown status filter {status!r}")

    needle = (query or "").casefold()
    result = []
    for problem in coerce_records(ProblemRecord, problems):
        if problem.platform != platform:
            continue
        if needle and needle not in problem.title.casefold() and not any(
            needle in tag.casefold() for tag in problem.tags
        ):
            continue
        if difficulty not in (None, WILDCARD) and problem.difficulty != difficulty:
            continue
        if want_solved is not None and problem.solved != want_solved:
            continue
        result.append(problem)
    return result


def recent_submissions(
    submissions: Iterable[Union[SubmissionRecord, dict]],
    limit: int = config.RECENT_SUBMISSIONS,
) -> List[SubmissionRecord]:
    check_count("limit", limit)
    records = list(coerce_records(SubmissionRecord, submissions))
    # sorted() keeps input order for equal keys even with reverse=True
    return sorted(records, key=lambda s: s.submitted_at, reverse=True)[:limit]


def summarize_platform(
    platform: str,
    problems: Iterable[Union[ProblemRecord, dict]],
    activities: Iterable[Union[ActivityRecord, dict]] = (),
    profile: Optional[UserProfile] = None,
    today: Optional[date] = None,
) -> PlatformStats:
    """Derive solved counts and the current streak for one platform.

    A day counts toward the streak when any activity on it solved at least
    one problem. If nothing is solved today yet, the streak is counted from
    yesterday backwards.
    """
    _check_platform(platform)
    today = _resolve_today(today)

    per_difficulty = dict.fromkeys(DIFFICULTIES, 0)
    for problem in coerce_records(ProblemRecord, problems):
        if problem.platform == platform and problem.solved:
            per_difficulty[problem.difficulty] += 1

    active_days = set()
    for record in coerce_records(ActivityRecord, activities):
        if record.platform == platform and record.problemsSolved > 0:
            active_days.add(record.date)

    day = today if today.isoformat() in active_days else today - timedelta(days=1)
    streak = 0
    while day.isoformat() in active_days:
        streak += 1
        day -= timedelta(days=1)

    return PlatformStats(
        platform=platform,
        totalSolved=sum(per_difficulty.values()),
        rating=profile.rating if profile else None,
        rank=profile.rank if profile else None,
        easyCount=per_difficulty["Easy"],
        mediumCount=per_difficulty["Medium"],
        hardCount=per_difficulty["Hard"],
        streak=streak,
    )


def contest_history(
    contests: Iterable[Union[ContestRecord, dict]],
    platform: Optional[str] = None,
) -> List[ContestRecord]:
    if platform is not None:
        _check_platform(platform)
    result = [
        c for c in coerce_records(ContestRecord, contests)
        if c.participated and (platform is None or c.platform == platform)
    ]
    return sorted(result, key=lambda c: c.started_at, reverse=True)
