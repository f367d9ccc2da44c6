"""Shared fixtures for the dashboard test suite."""

from datetime import date

import pytest

from collect import MockDataSource


@pytest.fixture
def today() -> date:
    return date(2024, 3, 15)


@pytest.fixture
def source() -> MockDataSource:
    """Seeded mock source without artificial delays."""
    return MockDataSource(seed=1234, latency=0)


@pytest.fixture
def problems() -> list:
    return [
        {"id": "cf-1", "title": "Two Arrays", "platform": "codeforces", "difficulty": "Easy",
         "tags": ["Arrays"], "url": "https://codeforces.com/1", "solved": True},
        {"id": "cf-2", "title": "Shortest Path", "platform": "codeforces", "difficulty": "Hard",
         "tags": ["Graph"], "url": "https://codeforces.com/2", "solved": False},
        {"id": "lc-1", "title": "Merge Intervals", "platform": "leetcode", "difficulty": "Medium",
         "tags": ["Sorting", "Arrays"], "url": "https://leetcode.com/1", "solved": True},
        {"id": "cf-3", "title": "Knapsack", "platform": "codeforces", "difficulty": "Medium",
         "tags": ["Dynamic Programming"], "url": "https://codeforces.com/3", "solved": True},
    ]
