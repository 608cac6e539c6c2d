from __future__ import annotations

import requests

from autofill.services import equivalent_domains
from autofill.services.equivalent_domains import (
    EquivalentDomainRegistry,
    load_equivalent_domains,
    parse_domains_payload,
)


class FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")

    def json(self):
        return self.payload


def test_registry_unions_every_group_of_the_domain() -> None:
    registry = EquivalentDomainRegistry([["a.com", "b.com"], ["a.com", "c.com"], ["d.com"]])
    assert registry.domains_for("https://www.a.com/login") == {"a.com", "b.com", "c.com"}
    assert registry.domains_for("https://z.com") == set()
    assert registry.domains_for(None) == set()


def test_parse_payload_skips_excluded_global_groups() -> None:
    payload = {
        "equivalentDomains": [["mine.com", "mine.net"]],
        "globalEquivalentDomains": [
            {"domains": ["g1.com", "g2.com"], "excluded": False},
            {"domains": ["x1.com", "x2.com"], "excluded": True},
        ],
    }
    assert parse_domains_payload(payload) == [["mine.com", "mine.net"], ["g1.com", "g2.com"]]


def test_load_fetches_with_requests(monkeypatch) -> None:
    calls = {}

    def fake_get(url, timeout):
        calls["url"] = url
        return FakeResponse({"equivalentDomains": [["one.com", "two.com"]]})

    monkeypatch.setattr(equivalent_domains.requests, "get", fake_get)
    registry = load_equivalent_domains("https://settings.test/domains", timeout=2)
    assert calls["url"] == "https://settings.test/domains"
    assert registry.domains_for("https://one.com") == {"one.com", "two.com"}


def test_load_falls_back_to_built_in_groups(monkeypatch) -> None:
    monkeypatch.setattr(equivalent_domains.requests, "get", lambda url, timeout: FakeResponse({}, 503))
    registry = load_equivalent_domains("https://settings.test/domains")
    assert "youtube.com" in registry.domains_for("https://google.com")


def test_load_without_url_uses_built_in_groups(monkeypatch) -> None:
    monkeypatch.setattr(equivalent_domains, "resolve_equivalent_domains_url", lambda url=None: url)
    registry = load_equivalent_domains()
    assert "icloud.com" in registry.domains_for("https://apple.com")
