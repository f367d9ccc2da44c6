from datetime import datetime
from typing import List, Literal, Optional, Tuple, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils import parse_iso_date, parse_iso_timestamp

Platform = Literal["codeforces", "leetcode", "codechef"]
Difficulty = Literal["Easy", "Medium", "Hard"]
SubmissionStatus = Literal[
    "Accepted",
    "Wrong Answer",
    "Time Limit Exceeded",
    "Runtime Error",
    "Compilation Error",
]

PLATFORMS: Tuple[str, ...] = get_args(Platform)
DIFFICULTIES: Tuple[str, ...] = get_args(Difficulty)
STATUSES: Tuple[str, ...] = get_args(SubmissionStatus)


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class ActivityRecord(Record):
    date: str
    platform: Platform
    problemsSolved: int = Field(ge=0)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return parse_iso_date(value).isoformat()


class TagRecord(Record):
    tag: str
    count: int = Field(ge=0)
    successRate: float = Field(ge=0, le=100)


class ProblemRecord(Record):
    id: str
    title: str
    platform: Platform
    difficulty: Difficulty
    tags: Tuple[str, ...] = ()
    url: str = ""
    solved: bool = False
    solvedDate: Optional[str] = None
    rating: Optional[int] = None

    @field_validator("solvedDate")
    @classmethod
    def check_solved_date(cls, value):
        if value is not None:
            parse_iso_timestamp(value)
        return value


class SubmissionRecord(Record):
    id: str
    problemId: Optional[str] = None
    problemTitle: str
    platform: Platform
    status: SubmissionStatus
    submissionDate: str
    language: str
    executionTime: Optional[float] = None
    memoryUsed: Optional[float] = None

    @field_validator("submissionDate")
    @classmethod
    def check_submission_date(cls, value):
        parse_iso_timestamp(value)
        return value

    @property
    def submitted_at(self) -> datetime:
        return parse_iso_timestamp(self.submissionDate)


class ContestRecord(Record):
    id: str
    title: str
    platform: Platform
    startDate: str
    endDate: str
    participated: bool = False
    rank: Optional[int] = None
    rating: Optional[int] = None
    ratingChange: Optional[int] = None

    @field_validator("startDate", "endDate")
    @classmethod
    def check_timestamp(cls, value):
        parse_iso_timestamp(value)
        return value

    @property
    def started_at(self) -> datetime:
        return parse_iso_timestamp(self.startDate)


class UserProfile(Record):
    username: str
    platform: Platform
    joinDate: Optional[str] = None
    rating: Optional[int] = None
    rank: Optional[str] = None
    solvedCount: Optional[int] = None
    contestsParticipated: Optional[int] = None
    avatarUrl: Optional[str] = None


class PlatformStats(Record):
    platform: Platform
    totalSolved: int = 0
    rating: Optional[int] = None
    rank: Optional[str] = None
    easyCount: int = 0
    mediumCount: int = 0
    hardCount: int = 0
    streak: int = 0


class ActivityPoint(Record):
    date: str
    codeforces: int = 0
    leetcode: int = 0
    codechef: int = 0
    total: int = 0


class DashboardData(Record):
    platform_stats: List[PlatformStats]
    activities: List[ActivityRecord]
    tag_stats: List[TagRecord]
    submissions: List[SubmissionRecord]
