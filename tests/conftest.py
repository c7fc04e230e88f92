import json

import pytest

from carbonintensity import APIHandler

FACTORS = {
    "Biomass": 120,
    "Coal": 937,
    "Dutch Imports": 474,
    "French Imports": 53,
    "Gas (Combined Cycle)": 394,
    "Gas (Open Cycle)": 651,
    "Hydro": 0,
    "Irish Imports": 458,
    "Nuclear": 0,
    "Oil": 935,
    "Other": 300,
    "Pumped Storage": 0,
    "Solar": 0,
    "Wind": 0,
}


def intensity_entry(start, end, forecast=50, actual=None, index="low"):
    return {
        "from": start,
        "to": end,
        "intensity": {"forecast": forecast, "actual": actual, "index": index},
    }


def stats_entry(start, end, max_=300, average=200, min_=100, index="moderate"):
    return {
        "from": start,
        "to": end,
        "intensity": {"max": max_, "average": average, "min": min_, "index": index},
    }


class StubResponse:
    def __init__(self, payload, status_code=200):
        if isinstance(payload, (dict, list)):
            payload = json.dumps(payload)
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self.content = payload
        self.status_code = status_code


class StubSession:
    """Stands in for requests.Session, replying with a canned payload."""

    def __init__(self, payload=None, status_code=200):
        self.response = StubResponse(payload if payload is not None else {"data": []}, status_code)
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        return self.response


class NoCallSession:
    def get(self, url, timeout=None):
        pytest.fail(f"No request expected, got GET {url}")


@pytest.fixture
def handler_for():
    def make(payload=None, status_code=200):
        session = StubSession(payload, status_code)
        return APIHandler("http://stub.test", session=session), session
    return make


@pytest.fixture
def offline_handler():
    return APIHandler("http://stub.test", session=NoCallSession())
