from customer_api.utils.cache import TTLCache


def test_get_returns_none_for_missing_and_expired_keys(monkeypatch):
    cache = TTLCache()
    now = [1000.0]
    monkeypatch.setattr("customer_api.utils.cache.time.time", lambda: now[0])

    assert cache.get("newsletter:subscribers:1") is None
    cache.set("newsletter:subscribers:1", {"ann@example.com"}, ttl=10)
    assert cache.get("newsletter:subscribers:1") == {"ann@example.com"}

    now[0] += 11
    assert cache.get("newsletter:subscribers:1") is None


def test_get_or_set_loads_once_and_invalidate_by_prefix():
    cache = TTLCache()
    calls = []

    def load():
        calls.append(1)
        return {"ann@example.com"}

    cache.get_or_set("newsletter:subscribers:1", load)
    cache.get_or_set("newsletter:subscribers:1", load)
    assert len(calls) == 1

    cache.set("other", 1)
    assert cache.invalidate("newsletter:") == 1
    assert cache.get("other") == 1
