#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
from ocean_publisher.constants import LEGACY_COMPLIANCE_API_VERSION


def get_compliance_api_version(context, config):
    """Chooses the registry protocol version from a credential's @context.

    Credentials without context, or referencing one of the allowed registry
    domains, use the latest version. Anything else is pinned to the legacy one.
    """
    if isinstance(context, str):
        context = [context]
    elif not isinstance(context, list):
        context = None

    if not context or any(
        isinstance(uri, str)
        and any(uri.startswith(domain) for domain in config.allowed_registry_domains)
        for uri in context
    ):
        return config.compliance_api_version

    return LEGACY_COMPLIANCE_API_VERSION
