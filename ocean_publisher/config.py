#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import configparser
import json
import logging
import os
from json import JSONDecodeError

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_REGISTRY_DOMAINS = [
    "https://registry.gaia-x.eu/v2206",
    "https://registry.lab.gaia-x.eu/v2206",
]


def get_version():
    conf = configparser.ConfigParser()
    conf.read(".bumpversion.cfg")
    return conf["bumpversion"]["current_version"]


def get_list_env_value(envvar_name, default_value):
    value = os.getenv(envvar_name, "")
    if not value:
        return list(default_value)

    try:
        parsed = json.loads(value)
    except (JSONDecodeError, TypeError) as e:
        logger.error(
            f"Reading {envvar_name} failed: {e}\n"
            f"{envvar_name} is set to its default value."
        )
        return list(default_value)

    if not isinstance(parsed, list):
        logger.error(f"{envvar_name} must be a json list, using default value.")
        return list(default_value)

    return parsed


class PublishConfig:
    """Process-wide settings for publishing.

    Fee settings are never taken from the publisher, they are injected here so
    that the pricing provisioner and the compliance pipeline stay reentrant.
    """

    def __init__(
        self,
        market_fee_address,
        publisher_market_order_fee="0",
        publisher_market_fixed_swap_fee="0",
        default_datatoken_template_index=2,
        default_access_terms="https://market.oceanprotocol.com/terms",
        compliance_uri="https://compliance.lab.gaia-x.eu",
        compliance_api_version="2210",
        allowed_registry_domains=None,
        fixed_rate_exchange_address=None,
        dispenser_address=None,
        request_timeout=10,
    ):
        self.market_fee_address = market_fee_address
        self.publisher_market_order_fee = str(publisher_market_order_fee)
        self.publisher_market_fixed_swap_fee = str(publisher_market_fixed_swap_fee)
        self.default_datatoken_template_index = int(default_datatoken_template_index)
        self.default_access_terms = default_access_terms
        self.compliance_uri = compliance_uri.rstrip("/")
        self.compliance_api_version = compliance_api_version
        self.allowed_registry_domains = (
            list(allowed_registry_domains)
            if allowed_registry_domains is not None
            else list(DEFAULT_ALLOWED_REGISTRY_DOMAINS)
        )
        self.fixed_rate_exchange_address = fixed_rate_exchange_address
        self.dispenser_address = dispenser_address
        self.request_timeout = request_timeout

    @classmethod
    def from_env(cls):
        try:
            request_timeout = int(os.getenv("REQUEST_TIMEOUT", 10))
        except ValueError:
            request_timeout = 10

        return cls(
            market_fee_address=os.getenv(
                "MARKET_FEE_ADDRESS", "0x9984b2453eC7D99a73A5B3a46Da81f197B753C8d"
            ),
            publisher_market_order_fee=os.getenv("PUBLISHER_MARKET_ORDER_FEE", "0"),
            publisher_market_fixed_swap_fee=os.getenv(
                "PUBLISHER_MARKET_FIXED_SWAP_FEE", "0"
            ),
            default_datatoken_template_index=os.getenv(
                "DEFAULT_DATATOKEN_TEMPLATE_INDEX", 2
            ),
            default_access_terms=os.getenv(
                "DEFAULT_ACCESS_TERMS", "https://market.oceanprotocol.com/terms"
            ),
            compliance_uri=os.getenv(
                "COMPLIANCE_URI", "https://compliance.lab.gaia-x.eu"
            ),
            compliance_api_version=os.getenv("COMPLIANCE_API_VERSION", "2210"),
            allowed_registry_domains=get_list_env_value(
                "ALLOWED_REGISTRY_DOMAINS", DEFAULT_ALLOWED_REGISTRY_DOMAINS
            ),
            fixed_rate_exchange_address=os.getenv("FIXED_RATE_EXCHANGE_ADDRESS"),
            dispenser_address=os.getenv("DISPENSER_ADDRESS"),
            request_timeout=request_timeout,
        )
