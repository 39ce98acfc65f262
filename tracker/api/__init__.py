# GitHub API integration module
#
# Lazy imports to avoid requiring aiohttp at import time for pure helpers.


def __getattr__(name):
    if name in ("GitHubClient", "RemoteResult"):
        from . import github_api
        return getattr(github_api, name)
    if name in ("PageWalk", "fetch_all_pages"):
        from . import pagination
        return getattr(pagination, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "GitHubClient",
    "RemoteResult",
    "PageWalk",
    "fetch_all_pages",
]
