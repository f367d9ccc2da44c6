import asyncio
import logging
import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import pytz

import config
from errors import DataSourceError, ValidationError
from structs import (
    DIFFICULTIES,
    PLATFORMS,
    STATUSES,
    ActivityRecord,
    ContestRecord,
    DashboardData,
    PlatformStats,
    ProblemRecord,
    SubmissionRecord,
    TagRecord,
    UserProfile,
)
from utils import current_date

logger = logging.getLogger(__name__)

TAGS = [
    "Arrays", "Strings", "Hash Table", "Dynamic Programming", "Math", "Greedy",
    "Depth-First Search", "Binary Search", "Tree", "Graph", "Sorting", "Backtracking",
]
LANGUAGES = ["C++", "Python", "Java", "JavaScript", "Go"]
RANKS = {
    "codeforces": [
        "Newbie", "Pupil", "Specialist", "Expert", "Candidate Master", "Master",
        "International Master", "Grandmaster", "International Grandmaster", "Legendary Grandmaster",
    ],
    "leetcode": ["Novice", "Beginner", "Intermediate", "Advanced", "Expert", "Master", "Guardian"],
    "codechef": ["1★", "2★", "3★", "4★", "5★", "6★", "7★"],
}
PROFILES = {
    "codeforces": UserProfile(
        username="tourist",
        platform="codeforces",
        joinDate="2009-02-15",
        rating=3779,
        rank="Legendary Grandmaster",
        solvedCount=1245,
        contestsParticipated=78,
        avatarUrl="https://userpic.codeforces.org/422/title/1615719503.jpg",
    ),
    "leetcode": UserProfile(
        username="leetcode_user",
        platform="leetcode",
        joinDate="2018-05-22",
        rating=2845,
        rank="Guardian",
        solvedCount=987,
        contestsParticipated=45,
        avatarUrl="https://assets.leetcode.com/users/leetcode_user/avatar_1584438416.png",
    ),
    "codechef": UserProfile(
        username="codechef_star",
        platform="codechef",
        joinDate="2015-11-03",
        rating=2156,
        rank="6★",
        solvedCount=543,
        contestsParticipated=32,
        avatarUrl="https://cdn.codechef.com/sites/default/files/uploads/pictures/codechef_default.png",
    ),
}

# seconds, before scaling by the latency factor
DELAYS = {
    "profile": 0.5,
    "problems": 0.7,
    "submissions": 0.6,
    "contests": 0.8,
    "activity": 0.5,
    "stats": 0.4,
    "tags": 0.6,
}
# how far back generated timestamps may go, roughly 115 days
HISTORY_SPAN = timedelta(seconds=10_000_000)


class MockDataSource:
    """Asynchronous stand-in for the platform APIs.

    Every fetch sleeps for a fixed delay and returns freshly generated
    records. ``seed`` makes the generated data reproducible, ``latency``
    scales the delays and ``failure_rate`` makes fetches fail at random with
    ``DataSourceError``.
    """

    def __init__(self, seed: Optional[int] = None, latency: float = config.MOCK_LATENCY, failure_rate: float = 0.0):
        if latency < 0:
            raise ValidationError(f"latency must not be negative, got {latency}")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValidationError(f"failure_rate must be within [0, 1], got {failure_rate}")
        self.rng = random.Random(seed)
        self.latency = latency
        self.failure_rate = failure_rate

    async def _respond(self, kind: str, platform: Optional[str] = None):
        if platform is not None and platform not in PLATFORMS:
            raise ValidationError(f"unknown platform {platform!r}")
        await asyncio.sleep(DELAYS[kind] * self.latency)
        if self.failure_rate and self.rng.random() < self.failure_rate:
            logger.warning("Mock %s fetch failed for %s", kind, platform or "all platforms")
            raise DataSourceError(f"failed to fetch {kind}", platform=platform)

    def _title(self, platform: str) -> str:
        return platform.capitalize()

    def _past_timestamp(self, now: datetime) -> datetime:
        return now - HISTORY_SPAN * self.rng.random()

    async def fetch_user_profile(self, platform: str, username: str) -> UserProfile:
        await self._respond("profile", platform)
        logger.debug("Fetched %s profile for %s", platform, username)
        return PROFILES[platform].model_copy(update={"username": username})

    async def fetch_problems(self, platform: str, count: int = 50) -> List[ProblemRecord]:
        await self._respond("problems", platform)
        now = datetime.now(pytz.utc)
        problems = []
        for i in range(1, count + 1):
            problems.append(ProblemRecord(
                id=f"{platform}-{i}",
                title=f"{self._title(platform)} Problem {i}",
                platform=platform,
                difficulty=self.rng.choice(DIFFICULTIES),
                tags=tuple(self.rng.choice(TAGS) for _ in range(self.rng.randint(1, 3))),
                url=f"https://www.{platform}.com/problems/problem-{i}",
                solved=self.rng.random() > 0.4,
                solvedDate=self._past_timestamp(now).isoformat() if self.rng.random() > 0.4 else None,
                rating=self.rng.randint(800, 1799),
            ))
        return problems

    async def fetch_submissions(self, platform: str, count: int = 30) -> List[SubmissionRecord]:
        await self._respond("submissions", platform)
        now = datetime.now(pytz.utc)
        submissions = []
        for i in range(1, count + 1):
            problem_number = self.rng.randint(1, 50)
            submissions.append(SubmissionRecord(
                id=f"{platform}-sub-{i}",
                problemId=f"{platform}-{problem_number}",
                problemTitle=f"{self._title(platform)} Problem {problem_number}",
                platform=platform,
                status=self.rng.choice(STATUSES),
                language=self.rng.choice(LANGUAGES),
                submissionDate=self._past_timestamp(now).isoformat(),
                executionTime=self.rng.randint(10, 1009),
                memoryUsed=self.rng.randint(1000, 10999),
            ))
        return submissions

    async def fetch_contests(self, platform: str, count: int = 15) -> List[ContestRecord]:
        await self._respond("contests", platform)
        now = datetime.now(pytz.utc)
        contests = []
        for i in range(1, count + 1):
            start = self._past_timestamp(now)
            end = start + timedelta(hours=self.rng.uniform(1, 6))
            participated = self.rng.random() > 0.3
            contests.append(ContestRecord(
                id=f"{platform}-contest-{i}",
                title=f"{self._title(platform)} Contest {i}",
                platform=platform,
                startDate=start.isoformat(),
                endDate=end.isoformat(),
                participated=participated,
                rank=self.rng.randint(1, 10000) if participated else None,
                rating=self.rng.randint(1000, 3999) if participated else None,
                ratingChange=self.rng.randint(-100, 99) if participated else None,
            ))
        return contests

    async def fetch_daily_activity(self, platform: str, days: int = 30) -> List[ActivityRecord]:
        await self._respond("activity", platform)
        today = current_date()
        return [
            ActivityRecord(
                date=(today - timedelta(days=i)).isoformat(),
                platform=platform,
                problemsSolved=self.rng.randint(0, 4),
            )
            for i in range(days)
        ]

    async def fetch_platform_stats(self, platform: str) -> PlatformStats:
        await self._respond("stats", platform)
        return PlatformStats(
            platform=platform,
            totalSolved=self.rng.randint(100, 1099),
            rating=self.rng.randint(1000, 3999),
            rank=self.rng.choice(RANKS[platform]),
            easyCount=self.rng.randint(50, 349),
            mediumCount=self.rng.randint(30, 229),
            hardCount=self.rng.randint(10, 109),
            streak=self.rng.randint(1, 30),
        )

    async def fetch_tag_stats(self, count: int = 12) -> List[TagRecord]:
        await self._respond("tags")
        return [
            TagRecord(
                tag=TAGS[i % len(TAGS)],
                count=self.rng.randint(10, 109),
                successRate=self.rng.random() * 100,
            )
            for i in range(count)
        ]

    async def fetch_all_platform_stats(self) -> List[PlatformStats]:
        return list(await asyncio.gather(*(self.fetch_platform_stats(p) for p in PLATFORMS)))

    async def fetch_all_daily_activity(self) -> List[ActivityRecord]:
        results = await asyncio.gather(*(self.fetch_daily_activity(p) for p in PLATFORMS))
        return [record for records in results for record in records]

    async def fetch_all_problems(self) -> List[ProblemRecord]:
        results = await asyncio.gather(*(self.fetch_problems(p) for p in PLATFORMS))
        return [problem for problems in results for problem in problems]

    async def fetch_all_submissions(self) -> List[SubmissionRecord]:
        results = await asyncio.gather(*(self.fetch_submissions(p) for p in PLATFORMS))
        return [submission for submissions in results for submission in submissions]

    async def fetch_all_profiles(self, handles: Optional[Dict[str, str]] = None) -> Dict[str, UserProfile]:
        handles = {**config.DEFAULT_HANDLES, **(handles or {})}
        profiles = await asyncio.gather(*(self.fetch_user_profile(p, handles[p]) for p in PLATFORMS))
        return dict(zip(PLATFORMS, profiles))

    async def fetch_all_contests(self) -> Dict[str, List[ContestRecord]]:
        results = await asyncio.gather(*(self.fetch_contests(p) for p in PLATFORMS))
        return dict(zip(PLATFORMS, results))

    async def fetch_dashboard(self) -> DashboardData:
        stats, activities, tags, submissions = await asyncio.gather(
            self.fetch_all_platform_stats(),
            self.fetch_all_daily_activity(),
            self.fetch_tag_stats(),
            self.fetch_all_submissions(),
        )
        return DashboardData(
            platform_stats=stats,
            activities=activities,
            tag_stats=tags,
            submissions=submissions,
        )


async def collect(source: MockDataSource):
    data = await source.fetch_dashboard()
    print(f"Found {len(data.platform_stats)} platform summaries")
    print(f"Found {len(data.activities)} daily activity records")
    print(f"Found {len(data.tag_stats)} tag stats")
    print(f"Found {len(data.submissions)} submissions")
    problems = await source.fetch_all_problems()
    print(f"Found {len(problems)} problems")
    contests = await source.fetch_all_contests()
    for platform, records in contests.items():
        print(f"Found {len(records)} contests for {platform}")
    return data


if __name__ == "__main__":
    config.configure_logging()
    print(f"Fetching mock data for {len(PLATFORMS)} platforms")
    try:
        asyncio.run(collect(MockDataSource()))
    except DataSourceError as e:
        print("API Error: ", e)
        raise SystemExit(1)
