from __future__ import annotations

import pytest

from ga4_adapter.contracts.filters import ScopingFilter
from ga4_adapter.orchestrator.connector import QueryConnector
from ga4_validation.stubs import DOMAIN, PROPERTY_ID, FakeReportClient


@pytest.fixture()
def scope() -> ScopingFilter:
    return ScopingFilter(dimension="hostName", value=DOMAIN)


@pytest.fixture()
def fake_client() -> FakeReportClient:
    return FakeReportClient()


@pytest.fixture()
def connector(fake_client: FakeReportClient, scope: ScopingFilter) -> QueryConnector:
    return QueryConnector(fake_client, property_id=PROPERTY_ID, scope=scope)
