#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
from enum import IntEnum


class BaseURLs:
    """
    This class contains values for:
        1. `BASE_PUBLISHER_URL`
        2. `SWAGGER_URL`
        3. `PUBLISH_URL`
        4. `COMPLIANCE_URL`
    """

    BASE_PUBLISHER_URL = "/api/publisher"
    SWAGGER_URL = "/api/docs"  # URL for exposing Swagger UI (without trailing '/')
    PUBLISH_URL = BASE_PUBLISHER_URL + "/publish"
    COMPLIANCE_URL = BASE_PUBLISHER_URL + "/compliance"


class Metadata:
    """
    This class stores values for:
        1.`TITLE`
        2.`DESCRIPTION`
    """

    TITLE = "Ocean Publisher"
    DESCRIPTION = (
        "Ocean Publisher turns publish form data into signed, versioned DDOs "
        "and provisions their pricing. When running with our Docker images, it is exposed under:"
    )


class SimpleEnum:
    """This class can be used as a replacement for enum.Enum class.
    - The attributes are accessible with `ClassName.ATTR`
    - :func:`get_value` returns the value for a given key
    - :func:`get_all_keys` returns a list of all the keys
    - :func:`get_all_values` returns a list of all the values
    """

    @classmethod
    def get_value(cls, key):
        return getattr(cls, key)

    @classmethod
    def get_all_keys(cls):
        return [
            key
            for key in cls.__dict__.keys()
            if not key.startswith("_") and not callable(cls.get_value(key))
        ]

    @classmethod
    def get_all_values(cls):
        return [cls.get_value(key) for key in cls.get_all_keys()]


class AssetTypes(SimpleEnum):
    DATASET = "dataset"
    ALGORITHM = "algorithm"


class ServiceTypes(SimpleEnum):
    ACCESS = "access"
    COMPUTE = "compute"


class PricingTypes(SimpleEnum):
    FIXED = "fixed"
    FREE = "free"


DDO_CONTEXT = ["https://w3id.org/did/v1"]
DDO_VERSION = "4.1.0"
PREVIEW_DID = "0x..."
DEFAULT_LICENSE = "https://market.oceanprotocol.com/terms"
ALGORITHM_VERSION = "0.1"
CUSTOM_DOCKER_IMAGE = "custom"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
# largest cap accepted by the datatoken template, in token units
MAX_DATATOKEN_CAP = "115792089237316195423570985008687907853269984665640564039457"
DATATOKEN_DECIMALS = 18
DISPENSER_MAX_TOKENS = "1"
DISPENSER_MAX_BALANCE = "1"

LEGACY_COMPLIANCE_API_VERSION = "2204"


class MetadataStates(IntEnum):
    ACTIVE = 0
    END_OF_LIFE = 1
    DEPRECATED = 2
    REVOKED = 3
    ORDERING_DISABLED = 4


# setMetaData flags, bit 1 marks an encrypted document
METADATA_FLAG_ENCRYPTED = 2
