#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
"""
Publication flow: form -> preview check -> pricing -> final DDO -> validation
-> trust credential check -> persistence.
"""
import json
import logging
from collections import namedtuple

from ocean_publisher.chain.metadata import set_metadata
from ocean_publisher.chain.pricing import create_tokens_and_pricing
from ocean_publisher.compliance.credentials import (
    get_service_credential,
    verify_raw_service_credential,
)
from ocean_publisher.ddo.form import FormPublishData
from ocean_publisher.ddo.transformer import transform_publish_form_to_ddo
from ocean_publisher.ddo_checker.shacl_checker import validate_dict
from ocean_publisher.exceptions import PublishCancelled, ValidationError
from ocean_publisher.provider.encryptor import encrypt_ddo, get_provider_address

logger = logging.getLogger("ocean_publisher")

PublishResult = namedtuple(
    "PublishResult", ["ddo", "pricing", "credential", "metadata_tx"]
)


def check_cancelled(cancel_event, step, pricing=None):
    if cancel_event is None or not cancel_event.is_set():
        return

    msg = f"[publish] cancelled {step}"
    if pricing:
        msg += f", tokens from tx {pricing.tx_hash} are not referenced by any DDO"
    logger.warning(msg)
    raise PublishCancelled(msg)


def get_raw_service_credential(values, timeout=10):
    service_credential = values.trust_information.get("serviceSD") or {}
    if service_credential.get("raw"):
        return service_credential["raw"]

    return get_service_credential(service_credential.get("url"), timeout)


def make_chain_persister(web3, account, provider_url, chain_id, timeout=10):
    """Returns a persist callable storing the encrypted DDO on its data NFT."""

    def persist(ddo):
        document = json.dumps(ddo)
        encrypted_document = encrypt_ddo(document, chain_id, provider_url, timeout)
        provider_address = get_provider_address(provider_url, chain_id, timeout)

        return set_metadata(
            web3,
            account,
            ddo["nftAddress"],
            document,
            encrypted_document,
            provider_url,
            provider_address,
        )

    return persist


def publish_asset(
    values,
    account_id,
    nft_factory,
    config,
    persist=None,
    cancel_event=None,
    encrypt_files=None,
    checksum_resolver=None,
):
    """Publishes a form and returns a PublishResult.

    Fatal errors (ValidationError, EncryptionUnavailable, ProvisioningFailed,
    PublishCancelled) propagate and nothing is persisted. A failing trust
    credential check never aborts the publish, it is reported in
    `PublishResult.credential`.
    """
    values = FormPublishData.from_dict(values)
    values.validate_pricing()
    values.validate_files()

    # resolves presets and timeouts before anything happens on-chain
    transform_publish_form_to_ddo(
        values, config=config, checksum_resolver=checksum_resolver
    )
    check_cancelled(cancel_event, "before pricing")

    pricing = create_tokens_and_pricing(values, account_id, config, nft_factory)
    check_cancelled(cancel_event, "after pricing", pricing)

    ddo = transform_publish_form_to_ddo(
        values,
        pricing.datatoken_address,
        pricing.nft_address,
        config=config,
        encrypt_files=encrypt_files,
        checksum_resolver=checksum_resolver,
    )
    ddo_dict = ddo.as_dict()
    conforms, errors = validate_dict(ddo_dict, values.chain_id, pricing.nft_address)
    if not conforms:
        msg = f"[publish] DDO {ddo.did} has validation errors: {errors}"
        logger.error(msg)
        raise ValidationError(msg)
    check_cancelled(cancel_event, "after metadata", pricing)

    credential = None
    raw_service_credential = get_raw_service_credential(
        values, config.request_timeout
    )
    check_cancelled(cancel_event, "before credential verification", pricing)
    if raw_service_credential:
        credential = verify_raw_service_credential(
            raw_service_credential, config, ddo.did
        )
        logger.info(
            f"[publish] service credential for {ddo.did} verified={credential['verified']}"
        )
    check_cancelled(cancel_event, "before persisting", pricing)

    metadata_tx = persist(ddo_dict) if persist else None
    logger.info(f"[publish] published {ddo.did}, tx {pricing.tx_hash}")

    return PublishResult(ddo, pricing, credential, metadata_tx)
