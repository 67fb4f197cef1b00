#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import logging
from datetime import datetime, timezone
from functools import partial

from ocean_publisher.chain.pricing import generate_nft_create_data
from ocean_publisher.config import PublishConfig
from ocean_publisher.constants import (
    ALGORITHM_VERSION,
    CUSTOM_DOCKER_IMAGE,
    DEFAULT_LICENSE,
    AssetTypes,
    ServiceTypes,
)
from ocean_publisher.ddo.documents import PreviewDDO
from ocean_publisher.ddo.form import FormPublishData
from ocean_publisher.ddo.normalizer import (
    date_to_string_no_ms,
    get_url_file_extension,
    map_timeout_string_to_seconds,
    normalize_file,
    sanitize_url,
    transform_tags,
)
from ocean_publisher.ddo.presets import get_algorithm_container_preset
from ocean_publisher.exceptions import ValidationError
from ocean_publisher.provider.encryptor import get_encrypted_files

logger = logging.getLogger(__name__)

DEFAULT_COMPUTE_OPTIONS = {
    "allowRawAlgorithm": False,
    "allowNetworkAccess": True,
    "publisherTrustedAlgorithmPublishers": [],
    "publisherTrustedAlgorithms": [],
}


def _first_valid_url(entries):
    if entries and entries[0].get("valid"):
        return sanitize_url(entries[0]["url"])

    return None


def _valid_urls(entries):
    urls = [sanitize_url(entry["url"]) for entry in entries or [] if entry.get("valid")]
    return urls or None


def get_algorithm_container(metadata, checksum_resolver=None):
    docker_image = metadata.get("dockerImage")
    if docker_image == CUSTOM_DOCKER_IMAGE:
        return {
            "entrypoint": metadata.get("dockerImageCustomEntrypoint"),
            "image": metadata.get("dockerImageCustom"),
            "tag": metadata.get("dockerImageCustomTag"),
            "checksum": metadata.get("dockerImageCustomChecksum") or "",
        }

    preset = get_algorithm_container_preset(docker_image, checksum_resolver)
    return {
        "entrypoint": preset["entrypoint"],
        "image": preset["image"],
        "tag": preset["tag"],
        "checksum": preset["checksum"],
    }


def get_trust_information(values, default_access_terms):
    information = values.trust_information
    access_terms_url = _first_valid_url(information.get("termsAndConditions"))

    result = {"termsAndConditions": [{"url": access_terms_url or default_access_terms}]}
    if values.asset_type == AssetTypes.DATASET:
        result["containsPII"] = information.get("containsPII")
        result["PIIInformation"] = information.get("PIIInformation")
    result["serviceSD"] = information.get("serviceSD")

    return result


def build_metadata(values, current_time, default_access_terms, checksum_resolver=None):
    metadata = values.metadata
    asset_type = values.asset_type

    new_metadata = {
        "created": current_time,
        "updated": current_time,
        "type": asset_type,
        "name": metadata.get("name"),
        "description": metadata.get("description"),
        "tags": transform_tags(metadata.get("tags")),
        "author": metadata.get("author"),
        "license": metadata.get("license") or DEFAULT_LICENSE,
        "links": _valid_urls(values.service.get("links")),
        "additionalInformation": {
            "termsAndConditions": metadata.get("termsAndConditions"),
            "gaiaXInformation": get_trust_information(values, default_access_terms),
        },
    }

    if asset_type == AssetTypes.ALGORITHM and metadata.get("dockerImage"):
        file_url = _first_valid_url(values.service.get("files"))
        new_metadata["algorithm"] = {
            "language": get_url_file_extension(file_url) if file_url else "",
            "version": ALGORITHM_VERSION,
            "container": get_algorithm_container(metadata, checksum_resolver),
        }

    return {k: v for k, v in new_metadata.items() if v is not None}


def build_service(values):
    service = values.service
    new_service = {
        "type": service["access"],
        "serviceEndpoint": values.provider_url,
        "timeout": map_timeout_string_to_seconds(service["timeout"]),
    }
    if service["access"] == ServiceTypes.COMPUTE:
        compute = dict(DEFAULT_COMPUTE_OPTIONS)
        compute.update(service.get("computeOptions") or {})
        new_service["compute"] = compute

    return new_service


def transform_publish_form_to_ddo(
    values,
    datatoken_address=None,
    nft_address=None,
    config=None,
    encrypt_files=None,
    checksum_resolver=None,
    now=None,
):
    """Builds the DDO for a publish form.

    Without token addresses the result is a PreviewDDO. The addresses are only
    known once pricing has been provisioned, they must be passed together and
    turn the result into a FinalDDO whose files are encrypted by the provider.
    """
    values = FormPublishData.from_dict(values)
    config = config or PublishConfig.from_env()
    if bool(datatoken_address) != bool(nft_address):
        raise ValidationError(
            "datatoken_address and nft_address must be passed together."
        )

    is_preview = not datatoken_address and not nft_address
    current_time = date_to_string_no_ms(now or datetime.now(timezone.utc))

    options = values.datatoken_options
    preview = PreviewDDO(
        values.chain_id,
        build_metadata(
            values, current_time, config.default_access_terms, checksum_resolver
        ),
        build_service(values),
        datatokens=[{"name": options.get("name"), "symbol": options.get("symbol")}],
        nft=generate_nft_create_data(
            values.metadata.get("nft"),
            values.account_id,
            values.metadata.get("transferable", True),
        ),
    )
    if is_preview:
        return preview

    values.validate_files()
    files = values.service["files"]
    file = {
        "nftAddress": nft_address,
        "datatokenAddress": datatoken_address,
        "files": [normalize_file(files[0], values.chain_id)],
    }
    encrypt_files = encrypt_files or partial(
        get_encrypted_files, timeout=config.request_timeout
    )
    files_encrypted = encrypt_files(file, values.chain_id, values.provider_url)
    logger.debug(f"Got encrypted files for nft {nft_address}.")

    return preview.finalize(nft_address, datatoken_address, files_encrypted)
