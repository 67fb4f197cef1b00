#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#


class PublishError(Exception):
    """Base class for errors that abort a publish attempt."""

    pass


class ValidationError(PublishError):
    """Malformed or contradictory form input, raised before any network call."""

    pass


class InvalidContainerPreset(ValidationError):
    pass


class EncryptionUnavailable(PublishError):
    """The provider could not encrypt the file references."""

    def __init__(self, message, provider_url=None, status_code=None):
        super().__init__(message)
        self.provider_url = provider_url
        self.status_code = status_code


class ProvisioningFailed(PublishError):
    """Token creation or exchange binding failed, no token may be referenced."""

    pass


class PublishCancelled(PublishError):
    pass


class ComplianceTransportError(Exception):
    def __init__(self, message, endpoint=None):
        super().__init__(message)
        self.endpoint = endpoint


class ComplianceConflict(Exception):
    """The registry refused the payload with a 409 and a detail body."""

    def __init__(self, message, endpoint=None, body=None):
        super().__init__(message)
        self.endpoint = endpoint
        self.body = body
