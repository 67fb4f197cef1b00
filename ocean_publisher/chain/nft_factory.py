#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import logging
from decimal import Decimal

from eth_utils.address import to_checksum_address
from web3 import Web3
from web3.logs import DISCARD

from ocean_publisher.chain.pricing import PricingResult
from ocean_publisher.chain.util import (
    get_dispenser_address,
    get_fre_address,
    get_nft_factory,
    sign_tx,
)
from ocean_publisher.exceptions import ProvisioningFailed

logger = logging.getLogger(__name__)


def to_wei(amount, decimals=18):
    return int(Decimal(str(amount)) * (Decimal(10) ** decimals))


def nft_create_data_to_tuple(nft_create_data):
    return (
        nft_create_data["name"],
        nft_create_data["symbol"],
        nft_create_data["templateIndex"],
        nft_create_data["tokenURI"],
        nft_create_data["transferable"],
        to_checksum_address(nft_create_data["owner"]),
    )


def erc_params_to_tuple(erc_params):
    return (
        erc_params["templateIndex"],
        [erc_params["name"], erc_params["symbol"]],
        [
            to_checksum_address(erc_params["minter"]),
            to_checksum_address(erc_params["paymentCollector"]),
            to_checksum_address(erc_params["mpFeeAddress"]),
            to_checksum_address(erc_params["feeToken"]),
        ],
        [to_wei(erc_params["cap"]), to_wei(erc_params["feeAmount"])],
        [],
    )


def fre_params_to_tuple(fre_params, fre_address):
    return (
        to_checksum_address(fre_address),
        [
            to_checksum_address(fre_params["baseTokenAddress"]),
            to_checksum_address(fre_params["owner"]),
            to_checksum_address(fre_params["marketFeeCollector"]),
            to_checksum_address(fre_params["allowedConsumer"]),
        ],
        [
            fre_params["baseTokenDecimals"],
            fre_params["datatokenDecimals"],
            to_wei(fre_params["fixedRate"]),
            to_wei(fre_params["marketFee"]),
            1 if fre_params["withMint"] else 0,
        ],
    )


def dispenser_params_to_tuple(dispenser_params, dispenser_address):
    return (
        to_checksum_address(dispenser_address),
        to_wei(dispenser_params["maxTokens"]),
        to_wei(dispenser_params["maxBalance"]),
        dispenser_params["withMint"],
        to_checksum_address(dispenser_params["allowedSwapper"]),
    )


class Web3NftFactory:
    """Calls the ERC721Factory of ocean-contracts.

    Both creation methods deploy the NFT, the datatoken and the exchange in one
    transaction, signed with `account`.
    """

    def __init__(self, web3, account, chain_id=None, receipt_timeout=120):
        self._web3 = web3
        self._account = account
        self._chain_id = chain_id if chain_id else web3.eth.chain_id
        self._factory = get_nft_factory(web3, self._chain_id)
        self.receipt_timeout = receipt_timeout

    def create_nft_with_datatoken_with_fixed_rate(
        self, account_id, nft_create_data, erc_params, fre_params
    ):
        fre_address = fre_params.get("fixedRateAddress") or get_fre_address(
            self._web3, self._chain_id
        )
        function = self._factory.functions.createNftWithErc20WithFixedRate(
            nft_create_data_to_tuple(nft_create_data),
            erc_params_to_tuple(erc_params),
            fre_params_to_tuple(fre_params, fre_address),
        )
        return self._send(account_id, function)

    def create_nft_with_datatoken_with_dispenser(
        self, account_id, nft_create_data, erc_params, dispenser_params
    ):
        dispenser_address = dispenser_params.get(
            "dispenserAddress"
        ) or get_dispenser_address(self._web3, self._chain_id)
        function = self._factory.functions.createNftWithErc20WithDispenser(
            nft_create_data_to_tuple(nft_create_data),
            erc_params_to_tuple(erc_params),
            dispenser_params_to_tuple(dispenser_params, dispenser_address),
        )
        return self._send(account_id, function)

    def _send(self, account_id, function):
        if to_checksum_address(account_id) != self._account.address:
            raise ProvisioningFailed(
                f"Account {account_id} does not match the signing wallet."
            )

        built_tx = function.build_transaction({"from": self._account.address})
        raw_tx = sign_tx(self._web3, built_tx, self._account.key)
        tx_hash = self._web3.eth.send_raw_transaction(raw_tx)
        receipt = self._web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self.receipt_timeout
        )
        tx_hash = Web3.to_hex(tx_hash)

        if receipt["status"] != 1:
            raise ProvisioningFailed(f"Transaction {tx_hash} reverted.")

        nft_events = self._factory.events.NFTCreated().process_receipt(
            receipt, errors=DISCARD
        )
        token_events = self._factory.events.TokenCreated().process_receipt(
            receipt, errors=DISCARD
        )
        if not nft_events or not token_events:
            raise ProvisioningFailed(f"Transaction {tx_hash} created no tokens.")

        logger.info(f"[publish] tokens created in tx {tx_hash}")

        return PricingResult(
            nft_events[0].args.newTokenAddress,
            token_events[0].args.newTokenAddress,
            tx_hash,
        )
