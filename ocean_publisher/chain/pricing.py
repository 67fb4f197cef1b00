#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import logging
from collections import namedtuple

from ocean_publisher.constants import (
    DATATOKEN_DECIMALS,
    DISPENSER_MAX_BALANCE,
    DISPENSER_MAX_TOKENS,
    MAX_DATATOKEN_CAP,
    ZERO_ADDRESS,
    PricingTypes,
)
from ocean_publisher.ddo.form import FormPublishData
from ocean_publisher.exceptions import ProvisioningFailed, ValidationError

logger = logging.getLogger(__name__)

PricingResult = namedtuple(
    "PricingResult", ["nft_address", "datatoken_address", "tx_hash"]
)

DEFAULT_NFT_METADATA = {"name": "Ocean Data NFT", "symbol": "OCEAN-NFT"}


def generate_nft_create_data(nft_metadata, account_id, transferable=True):
    nft_metadata = nft_metadata or DEFAULT_NFT_METADATA
    return {
        "name": nft_metadata.get("name"),
        "symbol": nft_metadata.get("symbol"),
        "templateIndex": 1,
        "tokenURI": "",
        "transferable": transferable,
        "owner": account_id,
    }


def get_datatoken_create_params(values, account_id, config):
    # fee token and cap are not publisher choices
    return {
        "templateIndex": config.default_datatoken_template_index,
        "minter": account_id,
        "paymentCollector": account_id,
        "mpFeeAddress": config.market_fee_address,
        "feeToken": values.pricing["baseToken"]["address"]
        if values.pricing.get("baseToken")
        else ZERO_ADDRESS,
        "feeAmount": config.publisher_market_order_fee,
        "cap": MAX_DATATOKEN_CAP,
        "name": values.datatoken_options["name"],
        "symbol": values.datatoken_options["symbol"],
    }


def get_fixed_rate_params(values, account_id, config):
    base_token = values.pricing["baseToken"]
    return {
        "fixedRateAddress": config.fixed_rate_exchange_address,
        "baseTokenAddress": base_token["address"],
        "owner": account_id,
        "marketFeeCollector": config.market_fee_address,
        "baseTokenDecimals": int(base_token.get("decimals", 18)),
        "datatokenDecimals": DATATOKEN_DECIMALS,
        "fixedRate": str(values.pricing["price"]),
        "marketFee": config.publisher_market_fixed_swap_fee,
        "allowedConsumer": ZERO_ADDRESS,
        "withMint": True,
    }


def get_dispenser_params(config):
    # maxTokens: how many datatokens one request may dispense
    # maxBalance: wallet balance above which the dispenser refuses
    return {
        "dispenserAddress": config.dispenser_address,
        "maxTokens": DISPENSER_MAX_TOKENS,
        "maxBalance": DISPENSER_MAX_BALANCE,
        "withMint": True,
        "allowedSwapper": ZERO_ADDRESS,
    }


def create_tokens_and_pricing(values, account_id, config, nft_factory):
    """Creates the data NFT, its datatoken and the selected exchange.

    `nft_factory` performs the on-chain call, see Web3NftFactory. The whole
    sequence is a single transaction, any failure raises ProvisioningFailed
    and no address from it may be referenced by a DDO.
    """
    values = FormPublishData.from_dict(values)
    values.validate_pricing()

    nft_create_data = generate_nft_create_data(
        values.metadata.get("nft"),
        account_id,
        values.metadata.get("transferable", True),
    )
    logger.info(f"[publish] Creating NFT with metadata {nft_create_data}")

    erc_params = get_datatoken_create_params(values, account_id, config)
    logger.info(f"[publish] Creating datatoken with ercParams {erc_params}")

    pricing_type = values.pricing["type"]
    try:
        if pricing_type == PricingTypes.FIXED:
            fre_params = get_fixed_rate_params(values, account_id, config)
            logger.info(
                f"[publish] Creating fixed pricing with freParams {fre_params}"
            )
            result = nft_factory.create_nft_with_datatoken_with_fixed_rate(
                account_id, nft_create_data, erc_params, fre_params
            )
        elif pricing_type == PricingTypes.FREE:
            dispenser_params = get_dispenser_params(config)
            logger.info(
                f"[publish] Creating free pricing with dispenserParams {dispenser_params}"
            )
            result = nft_factory.create_nft_with_datatoken_with_dispenser(
                account_id, nft_create_data, erc_params, dispenser_params
            )
        else:
            raise ValidationError(f"Unknown pricing type {pricing_type}.")
    except (ValidationError, ProvisioningFailed):
        raise
    except Exception as e:
        msg = f"[publish] {pricing_type} pricing creation failed for account {account_id}: {e}"
        logger.error(msg)
        raise ProvisioningFailed(msg) from e

    if not result or not all(
        [result.nft_address, result.datatoken_address, result.tx_hash]
    ):
        msg = f"[publish] {pricing_type} pricing creation returned an incomplete result {result}"
        logger.error(msg)
        raise ProvisioningFailed(msg)

    logger.info(f"[publish] {pricing_type} pricing created, tx {result.tx_hash}")

    return result
