#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import copy
from decimal import Decimal, InvalidOperation

from ocean_publisher.constants import AssetTypes, PricingTypes, ServiceTypes
from ocean_publisher.ddo.normalizer import TIMEOUTS, normalize_file
from ocean_publisher.exceptions import ValidationError


class FormPublishData:
    """Snapshot of the publish form, as sent by the UI.

    The snapshot is copied on construction, later edits of the UI state do
    not leak into a running publish.
    """

    def __init__(self, user, metadata, services, pricing=None):
        self.user = user
        self.metadata = metadata
        self.services = services
        self.pricing = pricing or {}

    @classmethod
    def from_dict(cls, values):
        if isinstance(values, cls):
            return values

        if not isinstance(values, dict):
            raise ValidationError("Form data must be an object.")

        values = copy.deepcopy(values)
        form = cls(
            user=values.get("user") or {},
            metadata=values.get("metadata") or {},
            services=values.get("services") or [],
            pricing=values.get("pricing"),
        )
        form.validate()

        return form

    @property
    def service(self):
        return self.services[0]

    @property
    def chain_id(self):
        return self.user.get("chainId")

    @property
    def account_id(self):
        return self.user.get("accountId")

    @property
    def asset_type(self):
        return self.metadata.get("type")

    @property
    def provider_url(self):
        provider_url = self.service.get("providerUrl") or {}
        if isinstance(provider_url, str):
            return provider_url

        return provider_url.get("url")

    @property
    def datatoken_options(self):
        return self.service.get("dataTokenOptions") or {}

    @property
    def trust_information(self):
        return self.metadata.get("gaiaXInformation") or {}

    def validate(self):
        if not self.services:
            raise ValidationError("Form has no service.")

        if self.asset_type not in AssetTypes.get_all_values():
            raise ValidationError(f"Unknown asset type {self.asset_type}.")

        if self.service.get("access") not in ServiceTypes.get_all_values():
            raise ValidationError(
                f"Unknown service access type {self.service.get('access')}."
            )

        if self.service.get("timeout") not in TIMEOUTS:
            raise ValidationError(f"Unknown timeout {self.service.get('timeout')}.")

        if not self.provider_url:
            raise ValidationError("Service has no provider url.")

        if not self.chain_id:
            raise ValidationError("chainId is missing.")

        if not self.metadata.get("name"):
            raise ValidationError("Asset name is missing.")

        tags = self.metadata.get("tags")
        if tags is not None and not isinstance(tags, (list, str)):
            raise ValidationError("Tags must be a list or comma separated text.")

    def validate_pricing(self):
        """Checks that exactly one pricing strategy is selected and usable."""
        pricing_type = self.pricing.get("type")
        if pricing_type not in PricingTypes.get_all_values():
            raise ValidationError(f"Unknown pricing type {pricing_type}.")

        if not self.account_id:
            raise ValidationError("accountId is missing.")

        options = self.datatoken_options
        if not options.get("name") or not options.get("symbol"):
            raise ValidationError("Datatoken name and symbol are required.")

        if pricing_type == PricingTypes.FREE:
            return

        base_token = self.pricing.get("baseToken") or {}
        if not base_token.get("address"):
            raise ValidationError("Fixed pricing needs a base token.")

        try:
            int(base_token.get("decimals", 18))
        except (TypeError, ValueError):
            raise ValidationError("Base token decimals must be an integer.")

        try:
            price = Decimal(str(self.pricing.get("price")))
        except InvalidOperation:
            raise ValidationError("Fixed pricing needs a numeric price.")

        if not price.is_finite() or price <= 0:
            raise ValidationError("Fixed pricing needs a positive price.")

    def validate_files(self):
        """Checks the file the provider will encrypt, before anything is minted."""
        files = self.service.get("files")
        if not isinstance(files, list) or not files:
            raise ValidationError("A valid file is required to publish.")

        file = files[0]
        if not isinstance(file, dict) or not file.get("valid") or not file.get("url"):
            raise ValidationError("A valid file is required to publish.")

        normalize_file(file, self.chain_id)
