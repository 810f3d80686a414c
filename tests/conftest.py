import json

import pytest

import fetch

AWS_DOC = {
    "syncToken": "1700000000",
    "createDate": "2023-11-14-22-13-20",
    "prefixes": [
        {
            "ip_prefix": "3.5.140.0/22",
            "region": "ap-northeast-2",
            "service": "AMAZON",
            "network_border_group": "ap-northeast-2",
        },
        {
            "ip_prefix": "13.34.37.64/27",
            "region": "ap-southeast-4",
            "service": "AMAZON",
            "network_border_group": "ap-southeast-4",
        },
    ],
    "ipv6_prefixes": [
        {
            "ipv6_prefix": "2600:1f14::/35",
            "region": "us-west-2",
            "service": "AMAZON",
            "network_border_group": "us-west-2",
        },
    ],
}

GOOGLE_DOC = {
    "syncToken": "1700000001",
    "creationTime": "2023-11-14T22:13:21.000000",
    "prefixes": [
        {"ipv4Prefix": "34.1.208.0/20", "service": "Google Cloud", "scope": "africa-south1"},
        {"ipv6Prefix": "2600:1900:8000::/44", "service": "Google Cloud", "scope": "africa-south1"},
        {"ipv4Prefix": "35.199.128.0/18"},
    ],
}

class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")

@pytest.fixture
def aws_doc():
    return json.loads(json.dumps(AWS_DOC))

@pytest.fixture
def google_doc():
    return json.loads(json.dumps(GOOGLE_DOC))

@pytest.fixture
def fake_get(monkeypatch):
    # Serve canned documents by URL instead of going to the network
    pages = {}
    calls = []

    def get(url, headers=None, timeout=None):
        calls.append(url)
        if url not in pages:
            return FakeResponse("", 404)
        return FakeResponse(pages[url])

    monkeypatch.setattr(fetch, "get", get)
    get.pages = pages
    get.calls = calls
    return get
