import logging
import os

import pytz

TIMEZONE = pytz.timezone(os.getenv("DASHBOARD_TZ", "UTC"))

ACTIVITY_DAYS = int(os.getenv("ACTIVITY_DAYS", "14"))
TOP_TAGS = int(os.getenv("TOP_TAGS", "8"))
RECENT_SUBMISSIONS = int(os.getenv("RECENT_SUBMISSIONS", "5"))

# multiplier for the mock source delays, 0 disables them
MOCK_LATENCY = float(os.getenv("MOCK_LATENCY", "1.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_HANDLES = {
    "codeforces": "tourist",
    "leetcode": "leetcode_user",
    "codechef": "codechef_star",
}

PROTECTED_ROUTES = ("/dashboard", "/problems", "/profile", "/settings")
AUTH_ROUTES = ("/auth/login", "/auth/signup")
LOGIN_ROUTE = "/auth/login"
HOME_ROUTE = "/dashboard"


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
