#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import pytest

from ocean_publisher.config import PublishConfig
from ocean_publisher.constants import BaseURLs
from ocean_publisher.run import app
from tests.helpers import DISPENSER_ADDRESS, FRE_ADDRESS, MARKET_FEE_ADDRESS

app = app


@pytest.fixture
def publish_url():
    return BaseURLs.PUBLISH_URL


@pytest.fixture
def compliance_url():
    return BaseURLs.COMPLIANCE_URL


@pytest.fixture
def client():
    client = app.test_client()

    yield client


@pytest.fixture
def cli_runner():
    return app.test_cli_runner()


@pytest.fixture
def config():
    return PublishConfig(
        market_fee_address=MARKET_FEE_ADDRESS,
        publisher_market_order_fee="0.1",
        publisher_market_fixed_swap_fee="0.05",
        compliance_uri="https://compliance.example.com/",
        fixed_rate_exchange_address=FRE_ADDRESS,
        dispenser_address=DISPENSER_ADDRESS,
        request_timeout=3,
    )
