"""Tests for the REST API."""

import asyncwhois
import pytest
from fastapi.testclient import TestClient

from conftest import FakeDoH, make_resolvers, make_transport
from dnsintel.api.app import app
from dnsintel.api.routers.dns import get_coordinator
from dnsintel.models import SubdomainEnumerationResult
from dnsintel.orchestration.coordinator import ScanCoordinator
from dnsintel.scanners.health import STANDARD_RECORD_TYPES


@pytest.fixture
def doh(example_zone) -> FakeDoH:
    return FakeDoH(example_zone)


@pytest.fixture
def client(doh, monkeypatch):
    monkeypatch.setattr(asyncwhois, "whois", lambda domain: ("", {"registrar": "Registrar"}))
    app.dependency_overrides[get_coordinator] = lambda: ScanCoordinator(
        transport=make_transport(doh=doh),
        resolvers=make_resolvers("r1.test", "r2.test"),
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_endpoint(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_root_lists_modules(client):
    body = client.get("/").json()

    assert set(body["modules"]) >= {"health", "propagation", "subdomains", "whois"}


def test_invalid_domain_is_400(client):
    response = client.get("/api/v1/health/not_a_domain")

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid domain"
    assert body["details"]


def test_zone_health_endpoint_normalizes_domain(client):
    response = client.get("/api/v1/health/www.example.com")

    assert response.status_code == 200
    body = response.json()
    assert body["domain"] == "example.com"
    assert body["grade"] == "A"
    assert body["summary"]["ns_count"] == 2


def test_zone_fetch_failure_is_502(client, doh):
    doh.failing_types = set(STANDARD_RECORD_TYPES)

    response = client.get("/api/v1/health/example.com")

    assert response.status_code == 502
    assert response.json()["error"] == "Zone fetch failed"


def test_dns_endpoint_filters_types(client):
    body = client.get("/api/v1/dns/example.com", params={"type": "ns"}).json()

    assert list(body["records"]) == ["NS"]
    assert body["records"]["NS"][0]["type_name"] == "NS"
    assert "A" in body["supported_types"]


def test_propagation_endpoint(client):
    body = client.get("/api/v1/propagation/example.com", params={"type": "a"}).json()

    assert body["record_type"] == "A"
    assert [r["status"] for r in body["results"]] == ["success", "success"]
    assert body["analysis"]["percentage"] == 100
    assert body["results"][0]["response"]["status_text"] == "NOERROR"


def test_subdomain_limit_is_capped(client, monkeypatch):
    captured = {}

    async def fake_subdomains(self, domain, check_ssl=True, max_results=None):
        captured["max_results"] = max_results
        captured["check_ssl"] = check_ssl
        return SubdomainEnumerationResult(domain=domain)

    monkeypatch.setattr(ScanCoordinator, "subdomains", fake_subdomains)

    response = client.get("/api/v1/subdomains/example.com", params={"limit": 5000, "ssl": "false"})

    assert response.status_code == 200
    assert captured == {"max_results": 200, "check_ssl": False}


def test_whois_endpoint(client):
    body = client.get("/api/v1/whois/example.com").json()

    assert body["domain"] == "example.com"
    assert body["registrar"]["name"] == "Registrar"


def test_scan_endpoint_with_checks_disabled(client):
    response = client.get(
        "/api/v1/scan/example.com",
        params={"subdomains": "false", "whois": "false", "propagation": "false"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["health"]["grade"] == "A"
    assert body["propagation"] is None
    assert body["errors"] == []
