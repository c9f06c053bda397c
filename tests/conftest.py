"""pytest fixtures for testing."""

import json
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest

from dnspod_dyndns.api import HTTPClient
from dnspod_dyndns.config import DnspodConfig
from dnspod_dyndns.dnspod import Dnspod
from dnspod_dyndns.logger import LoggerManager
from dnspod_dyndns.models import Domain, Domains, ProviderCredential


def make_response(payload: Any = None, status_code: int = 200, text: Optional[str] = None,
                  url: str = "https://dnsapi.cn/Record.List") -> Mock:
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.url = url
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    response.text = text if text is not None else json.dumps(payload)
    return response


def status_response(code: str = "1", message: str = "Action completed successful") -> Mock:
    return make_response({"status": {"code": code, "message": message}})


def list_response(*records: Dict[str, str]) -> Mock:
    if not records:
        return make_response({"status": {"code": "10", "message": "No records"}})
    return make_response({
        "status": {"code": "1", "message": "Action completed successful"},
        "records": [
            {"id": r["id"], "name": r.get("name", ""), "type": r.get("type", "A"),
             "value": r["value"], "enabled": r.get("enabled", "1")}
            for r in records
        ],
    })


class FakeDnspodServer:
    """Routes HTTPClient session requests by endpoint and records every call.

    Each endpoint has a queue of responses (or exceptions to raise); the last
    entry is reused once the queue is down to one.
    """

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.responses: Dict[str, List[Any]] = {
            "Record.List": [],
            "Record.Create": [],
            "Record.Modify": [],
        }

    def queue(self, endpoint: str, *items: Any) -> None:
        self.responses[endpoint].extend(items)

    def request(self, method: str, url: str, timeout: Any = None, data: Any = None, **kwargs: Any) -> Any:
        endpoint = url.rsplit("/", 1)[-1]
        self.calls.append({"method": method, "endpoint": endpoint, "data": dict(data or {}), "timeout": timeout})

        queue = self.responses[endpoint]
        if not queue:
            raise AssertionError(f"Unexpected call to {endpoint}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    def calls_to(self, *endpoints: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["endpoint"] in endpoints]

    def writes(self) -> List[Dict[str, Any]]:
        return self.calls_to("Record.Create", "Record.Modify")


@pytest.fixture(autouse=True)
def reset_loggers():
    """Drop cached loggers so handlers never point at a closed capture stream."""
    yield
    LoggerManager.reset()


@pytest.fixture
def server():
    return FakeDnspodServer()


@pytest.fixture
def dnspod_config():
    return DnspodConfig(
        credential=ProviderCredential(id="12345", secret="s3cr3t"),
        ttl="600",
        base_url="https://dnsapi.cn",
        timeout=30,
    )


@pytest.fixture
def http_client(server):
    session = Mock()
    session.request.side_effect = server.request
    return HTTPClient(base_url="https://dnsapi.cn", timeout=30, session=session)


@pytest.fixture
def make_dnspod(dnspod_config, http_client):
    """Factory: make_dnspod(ipv4_addr, ipv4_domains, ipv6_addr, ipv6_domains)."""
    def factory(ipv4_addr: str = "", ipv4_domains: Optional[List[Domain]] = None,
                ipv6_addr: str = "", ipv6_domains: Optional[List[Domain]] = None) -> Dnspod:
        domains = Domains(ipv4_domains=ipv4_domains, ipv6_domains=ipv6_domains)
        domains.ipv4_addr = ipv4_addr
        domains.ipv6_addr = ipv6_addr
        return Dnspod(dnspod_config, domains, client=http_client)
    return factory
