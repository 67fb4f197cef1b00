#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import hashlib
import logging

from eth_utils.address import to_checksum_address
from web3 import Web3
from web3.logs import DISCARD

from ocean_publisher.chain.util import get_nft_contract, sign_tx
from ocean_publisher.constants import METADATA_FLAG_ENCRYPTED, MetadataStates
from ocean_publisher.exceptions import PublishError

logger = logging.getLogger(__name__)


def set_metadata(
    web3,
    account,
    nft_address,
    document,
    encrypted_document,
    provider_url,
    provider_address,
    receipt_timeout=120,
):
    """Stores an encrypted DDO on its data NFT and returns the tx hash.

    `document` is the serialized DDO that was encrypted, its sha256 is the
    on-chain data hash.
    """
    nft_contract = get_nft_contract(web3, nft_address)
    data_hash = hashlib.sha256(document.encode("utf-8")).digest()

    built_tx = nft_contract.functions.setMetaData(
        MetadataStates.ACTIVE,
        provider_url,
        to_checksum_address(provider_address),
        bytes([METADATA_FLAG_ENCRYPTED]),
        Web3.to_bytes(hexstr=encrypted_document),
        data_hash,
        [],
    ).build_transaction({"from": account.address})
    raw_tx = sign_tx(web3, built_tx, account.key)
    tx_hash = web3.eth.send_raw_transaction(raw_tx)
    receipt = web3.eth.wait_for_transaction_receipt(tx_hash, timeout=receipt_timeout)
    tx_hash = Web3.to_hex(tx_hash)

    events = nft_contract.events.MetadataCreated().process_receipt(
        receipt, errors=DISCARD
    )
    if receipt["status"] != 1 or not events:
        msg = f"setMetaData failed for nft {nft_address}, tx {tx_hash}."
        logger.error(msg)
        raise PublishError(msg)

    logger.info(f"DDO metadata set on nft {nft_address}, tx {tx_hash}.")

    return tx_hash
