"""Account inventory: counts, most-starred and stale repositories.

The authenticated ``gh`` user is summarized in three views:

- Counts of total, public and private repositories.
- The top repositories by star count.
- Stale repositories, last updated more than 90 days ago.

Example:
    ```python
    from alkon.core.github import GhCli
    from alkon.core.inventory import summarize_account

    summarize_account(GhCli())
    ```
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Sequence

from .errors import AlkonError
from .github import GhCli, Repository
from .messages import info
from .render import format_table

INVENTORY_FIELDS = ("name", "visibility", "updatedAt", "stargazerCount", "isPrivate", "sshUrl", "url")
TOP_N = 5
STALE_AFTER = timedelta(days=90)


@dataclass
class RepoCounts:
    total: int
    public: int
    private: int


def count_repos(repos: Sequence[Repository]) -> RepoCounts:
    """Partition `repos` by their private flag."""
    private = sum(1 for r in repos if r.is_private)
    return RepoCounts(total=len(repos), public=len(repos) - private, private=private)


def top_by_stars(repos: Sequence[Repository], n: int = TOP_N) -> List[Repository]:
    """Return the `n` most-starred repositories.

    The sort is stable, so ties keep the order ``gh`` returned them in.
    """
    return sorted(repos, key=lambda r: r.stars, reverse=True)[:n]


def stale_repos(repos: Sequence[Repository],
                now: Optional[datetime] = None,
                max_age: timedelta = STALE_AFTER) -> List[Repository]:
    """Return repositories last updated strictly before ``now - max_age``.

    Repositories without an update timestamp are never reported as stale.
    """
    cutoff = (now or datetime.now(timezone.utc)) - max_age
    return [r for r in repos if r.updated_at is not None and r.updated_at < cutoff]


def top_table(repos: Sequence[Repository]) -> str:
    """Render repositories as a Stars / Name / Visibility / Updated table."""
    return format_table(
        [[r.stars, r.name, r.visibility, r.updated_date] for r in repos],
        header=["Stars", "Name", "Visibility", "Updated"],
    )


def stale_table(repos: Sequence[Repository]) -> str:
    """Render repositories as a Name / Updated / Visibility table."""
    return format_table(
        [[r.name, r.updated_date, r.visibility] for r in repos],
        header=["Name", "Updated", "Visibility"],
    )


def summarize_account(gh: GhCli,
                      top: int = TOP_N,
                      max_age: timedelta = STALE_AFTER,
                      now: Optional[datetime] = None,
                      out: Callable[[str], None] = print) -> int:
    """Print the inventory of the authenticated user's repositories.

    Every check and the fetch happen before anything is printed, so a
    failure leaves no partial report.

    Args:
        gh: GitHub CLI capability.
        top: Number of rows in the most-starred table.
        max_age: Age beyond which a repository counts as stale.
        now: Reference time, defaults to the current UTC time.
        out: Sink for report lines.

    Returns:
        Exit code 0.

    Raises:
        MissingDependency, Unauthenticated: If ``gh`` is not ready.
        AlkonError: If the login cannot be determined.
        FetchFailed: If listing repositories fails.
    """
    gh.require_ready()
    owner = gh.current_login()
    if not owner:
        raise AlkonError("Could not determine GitHub login.")
    info(f"Using owner: {owner}")

    info("Fetching repositories…")
    repos = gh.list_repos(owner, INVENTORY_FIELDS)

    counts = count_repos(repos)
    info(f"Repo counts: total={counts.total} public={counts.public} private={counts.private}")

    out("")
    info(f"Top {top} by stars")
    out(top_table(top_by_stars(repos, top)))

    out("")
    info(f"Stale (>{max_age.days}d since update)")
    out(stale_table(stale_repos(repos, now=now, max_age=max_age)))
    return 0
