# Output formatters for the tracker CLI

import json
from typing import Any

from pydantic import BaseModel

from tracker.models import CommitRecord, Profile, Repository, StreakReport


def format_json(data: Any) -> str:
    """
    Format models (or lists of models) as JSON.

    Returns - JSON string
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    elif isinstance(data, list):
        data = [item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in data]
    return json.dumps(data, indent=2, default=str)


def format_repos(repos: list[Repository]) -> str:
    if not repos:
        return "No repositories found.\n"

    columns = ["Repository", "Current", "Longest", "Commits", "Days", "Role"]
    rows = []
    for repo in repos:
        role = "owner" if repo.is_owner else "contributor" if repo.is_contributor else "-"
        rows.append(
            [
                repo.full_name,
                str(repo.streak.current_streak),
                str(repo.streak.longest_streak),
                str(repo.streak.total_commits),
                str(repo.streak.days_active),
                role,
            ]
        )

    widths = [max(len(col), *(len(row[i]) for row in rows)) for i, col in enumerate(columns)]
    header = " | ".join(col.ljust(widths[i]) for i, col in enumerate(columns))
    output = [header, "-" * len(header)]
    output.extend(" | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) for row in rows)
    return "\n".join(output) + "\n"


def format_commits(commits: list[CommitRecord]) -> str:
    if not commits:
        return "No commits found.\n"

    output = []
    for commit in commits:
        subject = commit.message.splitlines()[0] if commit.message else ""
        output.append(
            f"{commit.sha[:7]}  {commit.authored_at:%Y-%m-%d}  {commit.author_name[:20]:<20}  {subject[:72]}"
        )
    return "\n".join(output) + "\n"


def format_streak(report: StreakReport) -> str:
    return (
        f"{report.full_name}\n"
        f"  Current streak: {report.current_streak} day(s)\n"
        f"  Longest streak: {report.longest_streak} day(s)\n"
        f"  Total commits:  {report.total_commits}\n"
        f"  Days active:    {report.days_active}\n"
    )


def format_profile(profile: Profile) -> str:
    output = [
        f"User: {profile.username}",
        f"Repositories: {profile.repos}",
        f"Total commits: {profile.total_commits}",
        f"Active days: {len(profile.heatmap)}",
    ]
    if profile.heatmap:
        busiest = max(profile.heatmap, key=lambda entry: entry.count)
        output.append(f"First commit day: {profile.heatmap[0].date.isoformat()}")
        output.append(f"Last commit day: {profile.heatmap[-1].date.isoformat()}")
        output.append(f"Busiest day: {busiest.date.isoformat()} ({busiest.count} commits)")
    return "\n".join(output) + "\n"
