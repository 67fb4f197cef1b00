#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import json
import logging
import os
from functools import lru_cache
from pathlib import Path

import addresses
import artifacts
from eth_account import Account
from eth_utils.address import to_checksum_address
from web3 import HTTPProvider, Web3
from web3.exceptions import ExtraDataLengthError
from web3.middleware import ExtraDataToPOAMiddleware

from ocean_publisher.exceptions import PublishError

logger = logging.getLogger(__name__)

# contract name in the ocean-contracts artifacts -> key in address.json
NFT_FACTORY = ("ERC721Factory", "ERC721Factory")
FIXED_RATE_EXCHANGE = ("FixedRateExchange", "FixedPrice")
DISPENSER = ("Dispenser", "Dispenser")
NFT_TEMPLATE = "ERC721Template"


def get_address_file():
    """Returns the address.json of ADDRESS_FILE, or the one of ocean-contracts."""
    env_file = os.getenv("ADDRESS_FILE")
    if env_file:
        return Path(env_file).expanduser().resolve()

    return (Path(addresses.__file__).parent / "address.json").resolve()


@lru_cache(maxsize=4)
def _load_deployments(address_file):
    with open(address_file) as f:
        networks = json.load(f)

    return {
        network["chainId"]: network
        for network in networks.values()
        if isinstance(network, dict) and "chainId" in network
    }


def get_deployed_address(chain_id, address_key):
    deployments = _load_deployments(str(get_address_file()))
    address = deployments.get(chain_id, {}).get(address_key)
    if not address:
        raise PublishError(f"No {address_key} deployed on chain {chain_id}.")

    return to_checksum_address(address)


@lru_cache(maxsize=8)
def get_contract_abi(contract_name):
    path = Path(artifacts.__file__).parent / f"{contract_name}.json"
    if not path.exists():
        raise PublishError(f"No artifact for contract {contract_name}.")

    with open(path) as f:
        return json.load(f)["abi"]


def get_contract(web3, contract_name, address):
    return web3.eth.contract(
        address=to_checksum_address(address), abi=get_contract_abi(contract_name)
    )


def get_nft_factory(web3, chain_id=None):
    contract_name, address_key = NFT_FACTORY
    address = get_deployed_address(chain_id or web3.eth.chain_id, address_key)

    return get_contract(web3, contract_name, address)


def get_fre_address(web3, chain_id=None):
    return get_deployed_address(chain_id or web3.eth.chain_id, FIXED_RATE_EXCHANGE[1])


def get_dispenser_address(web3, chain_id=None):
    return get_deployed_address(chain_id or web3.eth.chain_id, DISPENSER[1])


def get_nft_contract(web3, address):
    return get_contract(web3, NFT_TEMPLATE, address)


def get_publisher_account():
    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise PublishError("Missing publisher PRIVATE_KEY.")

    return Account.from_key(private_key=private_key)


def sign_tx(web3, tx, private_key):
    """Fills nonce and legacy gas price when missing, returns the raw signed tx."""
    sender = web3.eth.account.from_key(private_key).address
    tx["nonce"] = web3.eth.get_transaction_count(sender)
    if "gasPrice" not in tx and "maxFeePerGas" not in tx:
        tx["gasPrice"] = web3.eth.gas_price

    return web3.eth.account.sign_transaction(tx, private_key).raw_transaction


def setup_web3(network_rpc=None, timeout=30):
    network_rpc = network_rpc or os.getenv("NETWORK_URL", "http://127.0.0.1:8545")
    logger.info(f"Publisher: connecting to rpc={network_rpc}")

    web3 = Web3(HTTPProvider(network_rpc, request_kwargs={"timeout": timeout}))
    try:
        web3.eth.get_block("latest")
    except ExtraDataLengthError:
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    return web3
