import asyncio
import io
import random

import pandas as pd
import plotly.express as px
import streamlit as st

import config
from auth import Session, route_for
from collect import MockDataSource
from errors import DashboardError
from export_pdf import generate_pdf_report
from process import (
    aggregate_activity,
    contest_history,
    filter_problems,
    rank_tags,
    recent_submissions,
    summarize_platform,
)
from structs import DIFFICULTIES, PLATFORMS

PLATFORM_LABELS = {"codeforces": "Codeforces", "leetcode": "LeetCode", "codechef": "CodeChef"}
PLATFORM_COLORS = {"codeforces": "#3b82f6", "leetcode": "#eab308", "codechef": "#22c55e"}
STATUS_ICONS = {
    "Accepted": "✅",
    "Wrong Answer": "❌",
    "Time Limit Exceeded": "⏱️",
    "Runtime Error": "⚠️",
    "Compilation Error": "🛑",
}
PAGES = {"Dashboard": "/dashboard", "Problems": "/problems", "Profile": "/profile", "Settings": "/settings"}

# Set page config
st.set_page_config(
    page_title="Competitive Programming Dashboard",
    page_icon="📊",
    layout="wide"
)

# Custom CSS to increase heading font sizes
st.markdown("""
<style>
h1 {
    font-size: 2.8rem !important;
    font-weight: 600 !important;
    margin-bottom: 1rem !important;
}
h3 {
    font-size: 1.8rem !important;
    font-weight: 500 !important;
    margin-bottom: 0.6rem !important;
}
.sidebar .block-container {
    padding-top: 2rem !important;
}
</style>
""", unsafe_allow_html=True)


def get_source():
    # one seed per session keeps reruns stable until the user refreshes
    if "seed" not in st.session_state:
        st.session_state["seed"] = random.randrange(2**32)
    return MockDataSource(seed=st.session_state["seed"])


def fetch(coroutine):
    try:
        return asyncio.run(coroutine)
    except DashboardError as e:
        st.error(f"Error fetching data: {e}")
        st.stop()


def style_figure(fig, xaxis_title, yaxis_title):
    fig.update_layout(
        xaxis_title=xaxis_title,
        yaxis_title=yaxis_title,
        title_font=dict(size=18),
        legend_title_font=dict(size=14),
        legend_font=dict(size=12)
    )
    return fig


def login_page():
    st.title("Sign in")
    with st.form("login"):
        username = st.text_input("Username")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        if not username.strip():
            st.warning("Please enter a username")
            return
        st.session_state["session"] = Session(username=username.strip())
        st.rerun()


def dashboard_page(source):
    st.title("Dashboard")
    data = fetch(source.fetch_dashboard())

    # Platform stats cards
    columns = st.columns(len(data.platform_stats) or 1)
    for column, stats in zip(columns, data.platform_stats):
        with column:
            st.markdown(f"<h3 style='color: {PLATFORM_COLORS[stats.platform]}'>{PLATFORM_LABELS[stats.platform]}</h3>", unsafe_allow_html=True)
            left, right = st.columns(2)
            left.metric("Problems Solved", stats.totalSolved)
            right.metric("Rating", stats.rating if stats.rating is not None else "N/A")
            left.metric("Rank", stats.rank or "N/A")
            right.metric("Streak", f"{stats.streak} days")
            st.caption(f"Easy {stats.easyCount} · Medium {stats.mediumCount} · Hard {stats.hardCount}")

    days = st.session_state.get("activity_days", config.ACTIVITY_DAYS)
    col1, col2 = st.columns([2, 1])

    # Daily activity (col1)
    with col1:
        st.markdown("<h3>Daily Activity</h3>", unsafe_allow_html=True)
        activity_df = pd.DataFrame([p.model_dump() for p in aggregate_activity(data.activities, days=days)])
        if activity_df.empty:
            st.info("No activity data available")
        else:
            activity_fig = px.bar(
                activity_df,
                x="date",
                y=list(PLATFORMS),
                color_discrete_map=PLATFORM_COLORS,
                title=f"Problems solved in the last {days} days"
            )
            activity_fig.update_layout(barmode="stack", legend_title_text="Platform")
            st.plotly_chart(style_figure(activity_fig, "Date", "Problems Solved"), use_container_width=True)

    # Tag distribution (col2)
    with col2:
        st.markdown("<h3>Tag Distribution</h3>", unsafe_allow_html=True)
        top_tags = rank_tags(data.tag_stats)
        if not top_tags:
            st.info("No tag data available")
        else:
            tag_df = pd.DataFrame([t.model_dump() for t in top_tags])
            tag_fig = px.pie(
                tag_df,
                names="tag",
                values="count",
                hover_data=["successRate"],
                title="Most common problem categories"
            )
            tag_fig.update_layout(title_font=dict(size=18), legend_font=dict(size=12))
            st.plotly_chart(tag_fig, use_container_width=True)

    # Recent submissions (full width)
    st.markdown("<h3>Recent Submissions</h3>", unsafe_allow_html=True)
    latest = recent_submissions(data.submissions)
    if not latest:
        st.info("No recent submissions found.")
    else:
        submissions_df = pd.DataFrame([
            {
                "": STATUS_ICONS.get(s.status, ""),
                "Problem": s.problemTitle,
                "Platform": PLATFORM_LABELS[s.platform],
                "Status": s.status,
                "Language": s.language,
                "Submitted": s.submitted_at.strftime("%b %d, %Y %H:%M"),
                "Time (ms)": s.executionTime,
                "Memory (KB)": s.memoryUsed,
            }
            for s in latest
        ])
        st.dataframe(submissions_df, use_container_width=True, hide_index=True)

    # PDF export
    st.markdown("<h3>Export Dashboard</h3>", unsafe_allow_html=True)
    buffer = io.BytesIO()
    generate_pdf_report(data, buffer, days=days)
    st.download_button(
        label="Download PDF Report",
        data=buffer.getvalue(),
        file_name="dashboard_report.pdf",
        mime="application/pdf"
    )


def problems_page(source):
    st.title("Problems")
    problems = fetch(source.fetch_all_problems())

    # Filters
    platform = st.radio(
        "Platform",
        PLATFORMS,
        format_func=PLATFORM_LABELS.get,
        horizontal=True
    )
    search_col, difficulty_col, status_col = st.columns([3, 1, 1])
    query = search_col.text_input("Search problems by title or tag...")
    difficulty = difficulty_col.selectbox("Difficulty", ["all", *DIFFICULTIES], format_func=lambda d: "All Difficulties" if d == "all" else d)
    status = status_col.selectbox("Status", ["all", "solved", "unsolved"], format_func=lambda s: "All Status" if s == "all" else s.capitalize())

    filtered = filter_problems(problems, platform, query=query, difficulty=difficulty, status=status)
    st.markdown(f"<h3>{PLATFORM_LABELS[platform]} Problems</h3>", unsafe_allow_html=True)
    if not filtered:
        st.info("No problems found matching your filters.")
        return

    problems_df = pd.DataFrame([
        {
            "Solved": "✅" if p.solved else "",
            "Title": p.title,
            "Difficulty": p.difficulty,
            "Tags": ", ".join(p.tags),
            "Rating": p.rating,
            "Link": p.url,
        }
        for p in filtered
    ])
    st.dataframe(
        problems_df,
        use_container_width=True,
        hide_index=True,
        column_config={"Link": st.column_config.LinkColumn("Link", display_text="Open")}
    )


def profile_page(source):
    st.title("Profile")
    handles = st.session_state.get("handles", {})
    profiles = fetch(source.fetch_all_profiles(handles))
    contests = fetch(source.fetch_all_contests())

    platform = st.radio(
        "Platform",
        PLATFORMS,
        format_func=PLATFORM_LABELS.get,
        horizontal=True
    )
    profile = profiles[platform]

    # Profile card
    avatar_col, info_col = st.columns([1, 4])
    if profile.avatarUrl:
        avatar_col.image(profile.avatarUrl, width=96)
    with info_col:
        st.markdown(f"<h3>{profile.username} <span style='color: {PLATFORM_COLORS[platform]}'>{profile.rank or ''}</span></h3>", unsafe_allow_html=True)
        rating_col, solved_col, contests_col = st.columns(3)
        rating_col.metric("Rating", profile.rating or "N/A")
        solved_col.metric("Problems Solved", profile.solvedCount or 0)
        contests_col.metric("Contests", profile.contestsParticipated or 0)
        st.caption(f"Joined {pd.to_datetime(profile.joinDate).strftime('%B %Y') if profile.joinDate else 'N/A'}")

    # Contest history
    st.markdown("<h3>Contest History</h3>", unsafe_allow_html=True)
    history = contest_history(contests[platform], platform)
    if not history:
        st.info("No contest history available.")
        return

    contest_df = pd.DataFrame([
        {
            "Contest": c.title,
            "Date": c.started_at.strftime("%b %d, %Y"),
            "Rank": c.rank,
            "Rating": c.rating,
            "Change": c.ratingChange,
        }
        for c in history
    ])
    st.dataframe(
        contest_df,
        use_container_width=True,
        hide_index=True,
        column_config={
            "Change": st.column_config.NumberColumn(
                "Rating Change",
                format="%+d",
                help="Change in rating from the contest"
            )
        }
    )

    # Derived summary from the fetched problems and activity
    with st.expander("Derived stats"):
        problems = fetch(source.fetch_problems(platform))
        activity = fetch(source.fetch_daily_activity(platform))
        st.json(summarize_platform(platform, problems, activity, profile=profile).model_dump())


def settings_page():
    st.title("Settings")
    handles = dict(st.session_state.get("handles", config.DEFAULT_HANDLES))
    with st.form("settings"):
        for platform in PLATFORMS:
            handles[platform] = st.text_input(f"{PLATFORM_LABELS[platform]} handle", value=handles.get(platform, ""))
        days = st.number_input("Activity window (days)", min_value=1, max_value=90, value=st.session_state.get("activity_days", config.ACTIVITY_DAYS))
        submitted = st.form_submit_button("Save")
    if submitted:
        st.session_state["handles"] = {p: h.strip() for p, h in handles.items() if h.strip()}
        st.session_state["activity_days"] = int(days)
        st.success("Settings saved")


def main():
    session = st.session_state.get("session")

    # Sidebar
    with st.sidebar:
        st.header("Navigation")
        page = st.radio("Go to", list(PAGES), key="page")
        if session is not None:
            st.caption(f"Signed in as {session.username}")
            if st.button("Refresh data"):
                st.session_state.pop("seed", None)
            if st.button("Sign out"):
                st.session_state.pop("session", None)
                st.rerun()

    path = route_for(PAGES[page], session)
    if path == config.LOGIN_ROUTE:
        login_page()
        return

    source = get_source()
    if path == "/dashboard":
        dashboard_page(source)
    elif path == "/problems":
        problems_page(source)
    elif path == "/profile":
        profile_page(source)
    elif path == "/settings":
        settings_page()


if __name__ == "__main__":
    config.configure_logging()
    main()
