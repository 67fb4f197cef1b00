#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
from eth_utils import is_address
from eth_utils.address import to_checksum_address

from ocean_publisher.constants import ServiceTypes


def sanitize_addresses(addresses):
    return [to_checksum_address(a) for a in addresses if is_address(a)]


def get_service_by_name(asset, name):
    return next(
        (service for service in asset.get("services", []) if service.get("type") == name),
        None,
    )


def _credential_addresses(asset, kind):
    credentials = (asset.get("credentials") or {}).get(kind) or []
    addresses = []
    for credential in credentials:
        if credential.get("type") == "address":
            addresses.extend(credential.get("values") or [])

    return set(sanitize_addresses(addresses))


def is_address_whitelisted(asset, account_id):
    """Deny list wins, an empty allow list lets every account through."""
    if not asset or not account_id or not is_address(account_id):
        return False

    account_id = to_checksum_address(account_id)
    if account_id in _credential_addresses(asset, "deny"):
        return False

    allowed = _credential_addresses(asset, "allow")
    return not allowed or account_id in allowed


def transform_asset_to_asset_selection(
    dataset_provider_endpoint, assets, account_id, selected_algorithms=None
):
    """Lists the priced algorithms a compute dataset can trust.

    Only assets served by the dataset's provider qualify, already selected
    algorithms come first.
    """
    selected_dids = {
        algorithm.get("did") for algorithm in selected_algorithms or []
    }
    algorithm_list = []

    for asset in assets:
        algo_service = get_service_by_name(
            asset, ServiceTypes.COMPUTE
        ) or get_service_by_name(asset, ServiceTypes.ACCESS)
        price = ((asset.get("stats") or {}).get("price") or {}).get("value")

        if (
            price is None
            or price < 0
            or not algo_service
            or algo_service.get("serviceEndpoint") != dataset_provider_endpoint
        ):
            continue

        selected = asset["id"] in selected_dids
        datatokens = asset.get("datatokens") or [{}]
        algorithm_asset = {
            "did": asset["id"],
            "name": asset["metadata"]["name"],
            "price": price,
            "checked": selected,
            "symbol": datatokens[0].get("symbol"),
            "isAccountIdWhitelisted": is_address_whitelisted(asset, account_id),
        }
        if selected:
            algorithm_list.insert(0, algorithm_asset)
        else:
            algorithm_list.append(algorithm_asset)

    return algorithm_list
