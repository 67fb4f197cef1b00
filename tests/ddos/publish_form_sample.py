#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
from tests.helpers import ACCOUNT_ID, OCEAN_ADDRESS

PROVIDER_URL = "https://v4.provider.oceanprotocol.com"

dataset_form = {
    "user": {"chainId": 5, "accountId": ACCOUNT_ID},
    "metadata": {
        "nft": {"name": "Ocean Data NFT", "symbol": "OCEAN-NFT"},
        "transferable": True,
        "type": "dataset",
        "name": "Weather in Berlin",
        "description": "Hourly temperature readings.",
        "tags": ["Weather Data", "Berlin"],
        "author": "Met Office",
        "license": "MIT",
        "termsAndConditions": True,
        "gaiaXInformation": {
            "termsAndConditions": [
                {"url": "https://example.com/terms.pdf", "valid": True}
            ],
            "containsPII": False,
        },
    },
    "services": [
        {
            "dataTokenOptions": {"name": "Weather Datatoken", "symbol": "WEATHER-1"},
            "access": "access",
            "providerUrl": {"url": PROVIDER_URL, "valid": True, "custom": False},
            "files": [
                {"url": "https://example.com/weather.csv", "valid": True, "type": "url"}
            ],
            "links": [
                {"url": "https://example.com/sample.csv", "valid": True},
                {"url": "https://example.com/broken", "valid": False},
            ],
            "timeout": "1 day",
        }
    ],
    "pricing": {
        "type": "fixed",
        "price": "10",
        "baseToken": {"address": OCEAN_ADDRESS, "symbol": "OCEAN", "decimals": 18},
    },
}

algorithm_form = {
    "user": {"chainId": 5, "accountId": ACCOUNT_ID},
    "metadata": {
        "type": "algorithm",
        "name": "Average temperature",
        "description": "Computes the average temperature.",
        "tags": ["Statistics"],
        "author": "Met Office",
        "license": "MIT",
        "termsAndConditions": True,
        "dockerImage": "python:latest",
        "gaiaXInformation": {"termsAndConditions": []},
    },
    "services": [
        {
            "dataTokenOptions": {"name": "Average Datatoken", "symbol": "AVG-1"},
            "access": "compute",
            "providerUrl": {"url": PROVIDER_URL, "valid": True, "custom": False},
            "files": [
                {
                    "url": "https://example.com/algorithms/average.py",
                    "valid": True,
                    "type": "url",
                }
            ],
            "timeout": "Forever",
        }
    ],
    "pricing": {"type": "free"},
}
