#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import json
import logging

import requests

from ocean_publisher.exceptions import EncryptionUnavailable

logger = logging.getLogger(__name__)


def _post_encrypt(data, chain_id, provider_url, timeout):
    endpoint = f"{provider_url.rstrip('/')}/api/services/encrypt"
    error = None
    try:
        response = requests.post(
            endpoint,
            params={"chainId": chain_id},
            data=data,
            headers={"Content-type": "application/octet-stream"},
            timeout=timeout,
        )
    except Exception as e:
        response = None
        error = e

    if not hasattr(response, "status_code"):
        msg = f"Failed to get a response for encrypt with provider={endpoint}, chainId={chain_id}: {error}"
        logger.error(msg)
        raise EncryptionUnavailable(msg, provider_url=endpoint)

    if response.status_code not in (200, 201):
        msg = f"Provider exception on encrypt. Status:{response.status_code}, {response.content}\n provider URL={endpoint}, chainId={chain_id}."
        logger.error(msg)
        raise EncryptionUnavailable(
            msg, provider_url=endpoint, status_code=response.status_code
        )

    if not response.text:
        msg = f"Provider returned an empty encrypted payload, provider URL={endpoint}."
        logger.error(msg)
        raise EncryptionUnavailable(
            msg, provider_url=endpoint, status_code=response.status_code
        )

    return response.text


def get_encrypted_files(files, chain_id, provider_url, timeout=10):
    """Encrypts `{nftAddress, datatokenAddress, files}` with the provider.

    Raises EncryptionUnavailable, there is no plaintext fallback.
    """
    logger.info(
        f"Encrypting files for nft={files.get('nftAddress')}, "
        f"datatoken={files.get('datatokenAddress')}, provider={provider_url}."
    )
    return _post_encrypt(
        json.dumps(files).encode("utf-8"), chain_id, provider_url, timeout
    )


def encrypt_ddo(document, chain_id, provider_url, timeout=10):
    """Encrypts a serialized DDO, the same bytes must be hashed on-chain."""
    logger.info(f"Encrypting DDO with provider {provider_url}.")
    return _post_encrypt(document.encode("utf-8"), chain_id, provider_url, timeout)


def get_provider_address(provider_url, chain_id, timeout=10):
    """Reads the provider signer address for a chain from the provider root."""
    try:
        response = requests.get(provider_url, timeout=timeout)
    except Exception as e:
        msg = f"Failed to reach provider {provider_url}: {e}"
        logger.error(msg)
        raise EncryptionUnavailable(msg, provider_url=provider_url)

    if response.status_code != 200:
        msg = f"Provider {provider_url} returned {response.status_code}."
        logger.error(msg)
        raise EncryptionUnavailable(
            msg, provider_url=provider_url, status_code=response.status_code
        )

    data = response.json()
    addresses = data.get("providerAddresses") or {}
    address = addresses.get(str(chain_id)) or data.get("providerAddress")
    if not address:
        msg = f"Provider {provider_url} has no address for chain {chain_id}."
        logger.error(msg)
        raise EncryptionUnavailable(msg, provider_url=provider_url)

    return address
