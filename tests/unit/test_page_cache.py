from apps.api.services.navigation import Redirect, revalidate_and_redirect
from apps.api.services.page_cache import PageCache

PATH = "/dashboard/invoices"


def test_second_read_is_served_from_cache():
    cache = PageCache()
    calls = []

    def render():
        calls.append(1)
        return {"items": len(calls)}

    first = cache.get_or_render(PATH, render)
    second = cache.get_or_render(PATH, render)

    assert first == second == {"items": 1}
    assert len(calls) == 1
    assert not cache.is_stale(PATH)


def test_revalidate_drops_every_variant_of_the_path():
    cache = PageCache()
    cache.get_or_render(PATH, lambda: "page 1", variant="page=1")
    cache.get_or_render(PATH, lambda: "page 2", variant="page=2")
    cache.get_or_render("/dashboard/customers", lambda: "customers")

    cache.revalidate_path(PATH)

    assert cache.is_stale(PATH, variant="page=1")
    assert cache.is_stale(PATH, variant="page=2")
    assert not cache.is_stale("/dashboard/customers")
    assert cache.get_or_render(PATH, lambda: "fresh", variant="page=1") == "fresh"


def test_render_overtaken_by_revalidation_is_not_stored():
    cache = PageCache()

    def render():
        # a write lands while this read is still running
        cache.revalidate_path(PATH)
        return "stale"

    assert cache.get_or_render(PATH, render) == "stale"
    assert cache.is_stale(PATH)


def test_revalidate_and_redirect():
    cache = PageCache()
    cache.get_or_render(PATH, lambda: "old")

    result = revalidate_and_redirect(cache, PATH)

    assert result == Redirect(location=PATH, status_code=303)
    assert cache.is_stale(PATH)


def test_variants_per_path_are_capped_oldest_first():
    cache = PageCache(max_variants=3)

    for i in range(1000):
        cache.get_or_render(PATH, lambda: i, variant=f"query={i}&page=1")
    cache.get_or_render("/dashboard/customers", lambda: "customers")

    assert cache.size(PATH) == 3
    assert cache.is_stale(PATH, variant="query=996&page=1")
    assert not cache.is_stale(PATH, variant="query=999&page=1")
    assert not cache.is_stale("/dashboard/customers")
