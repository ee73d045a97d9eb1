from dataclasses import dataclass

from .page_cache import PageCache


@dataclass(frozen=True)
class Redirect:
    """Tells the route to send the browser elsewhere instead of a body."""

    location: str
    status_code: int = 303  # See Other: the browser follows up with a GET


def revalidate_and_redirect(cache: PageCache, path: str) -> Redirect:
    """Mark `path` stale and navigate to it. Only called after a successful write."""
    cache.revalidate_path(path)
    return Redirect(location=path)
