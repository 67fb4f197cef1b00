#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import copy
import json
from unittest.mock import patch

from ocean_publisher.compliance.credentials import (
    CredentialStates,
    LocalizedValue,
    PlainValue,
    TrustCredentialPipeline,
    get_credential_context,
    get_formatted_code_string,
    get_publisher_from_service_credential,
    get_service_credential,
    get_service_offering_id,
    parse_legal_name,
    sign_service_credential,
    store_raw_service_credential,
    update_service_credential,
    verify_raw_service_credential,
)
from ocean_publisher.compliance.version import get_compliance_api_version
from tests.ddos.service_credential_sample import (
    SERVICE_OFFERING_ID,
    legacy_service_credential,
    raw_service_credential,
)
from tests.helpers import new_response

SIGNATURE = {"complianceCredential": {"proof": {"jws": "eyJhbGciOiJQUzI1NiJ9..x"}}}
STORED_URL = "https://compliance.example.com/api/service-offering/abc.json"


def test_get_compliance_api_version(config):
    assert get_compliance_api_version(None, config) == "2210"
    assert get_compliance_api_version([], config) == "2210"
    assert (
        get_compliance_api_version(
            ["https://registry.lab.gaia-x.eu/v2206/api/shape"], config
        )
        == "2210"
    )
    assert (
        get_compliance_api_version("https://registry.gaia-x.eu/v2206/api/shape", config)
        == "2210"
    )
    assert (
        get_compliance_api_version(
            ["https://registry.gaia-x.example.org/v2204/api/shape"], config
        )
        == "2204"
    )

    config.allowed_registry_domains = ["https://registry.gaia-x.example.org"]
    config.compliance_api_version = "2301"
    assert (
        get_compliance_api_version(
            ["https://registry.gaia-x.example.org/v2204/api/shape"], config
        )
        == "2301"
    )


def test_credential_lookups():
    assert get_credential_context(raw_service_credential) == [
        "https://www.w3.org/2018/credentials/v1",
        "https://registry.lab.gaia-x.eu/v2206/api/shape",
    ]
    assert get_credential_context(legacy_service_credential) == [
        "https://registry.gaia-x.example.org/v2204/api/shape"
    ]
    assert get_credential_context(
        {"selfDescriptionCredential": {"@context": ["https://a"]}}
    ) == ["https://a"]
    assert get_credential_context(
        {"verifiableCredential": [{"@context": ["https://b"]}]}
    ) == ["https://b"]
    assert get_credential_context("not a dict") is None

    assert get_service_offering_id(raw_service_credential) == SERVICE_OFFERING_ID
    assert get_service_offering_id(legacy_service_credential) == SERVICE_OFFERING_ID
    assert get_service_offering_id({"verifiableCredential": [{}]}) is None


def test_sign_service_credential(config):
    with patch("requests.post") as mock:
        mock.return_value = new_response(200, SIGNATURE)
        result = sign_service_credential(json.dumps(raw_service_credential), config)

    assert result["signed"] is True
    signed = result["serviceCredential"]
    assert signed["selfDescriptionCredential"] == raw_service_credential
    assert signed["complianceCredential"] == SIGNATURE["complianceCredential"]
    assert mock.call_args[0][0] == "https://compliance.example.com/api/sign"
    assert mock.call_args[1]["json"] == raw_service_credential
    assert mock.call_args[1]["timeout"] == 3


def test_sign_service_credential_failures(config):
    assert sign_service_credential(None, config)["signed"] is False

    result = sign_service_credential("{not json", config)
    assert result["signed"] is False
    assert "not valid json" in result["error"]

    with patch("requests.post") as mock:
        mock.return_value = new_response(400, {"message": "invalid shape"})
        result = sign_service_credential(raw_service_credential, config)
    assert result == {
        "signed": False,
        "error": "Signing failed at https://compliance.example.com/api/sign, status 400.",
    }

    with patch("requests.post") as mock:
        mock.side_effect = Exception("Boom!")
        result = sign_service_credential(raw_service_credential, config)
    assert result["signed"] is False
    assert "Boom!" in result["error"]


def test_store_raw_service_credential(config):
    with patch("requests.post") as mock:
        mock.return_value = new_response(201, {"storedSdUrl": STORED_URL})
        assert store_raw_service_credential({"signed": "sd"}, config) == {
            "stored": True,
            "storedSdUrl": STORED_URL,
        }
    assert mock.call_args[0][0] == (
        "https://compliance.example.com/api/service-offering/verify/raw?store=true"
    )

    with patch("requests.post") as mock:
        mock.return_value = new_response(409, {"body": {"message": "already stored"}})
        assert store_raw_service_credential({"signed": "sd"}, config) == {
            "stored": False,
            "storedSdUrl": None,
        }

    with patch("requests.post") as mock:
        mock.side_effect = Exception("Boom!")
        assert store_raw_service_credential({"signed": "sd"}, config)["stored"] is False

    assert store_raw_service_credential(None, config)["stored"] is False


def test_verify_raw_service_credential(config):
    with patch("requests.post") as mock:
        mock.return_value = new_response(201, raw_service_credential)
        result = verify_raw_service_credential(
            raw_service_credential, config, SERVICE_OFFERING_ID.lower()
        )

    assert result == {"verified": True, "complianceApiVersion": "2210", "idMatch": True}
    assert mock.call_args[0][0] == (
        "https://compliance.example.com/main/api/credential-offers"
    )
    # the selected version is not part of the request
    assert mock.call_args[1]["json"] == raw_service_credential

    with patch("requests.post") as mock:
        mock.return_value = new_response(201, {})
        result = verify_raw_service_credential(
            json.dumps(legacy_service_credential), config, "did:op:other"
        )
    assert result == {"verified": True, "complianceApiVersion": "2204", "idMatch": False}

    with patch("requests.post") as mock:
        mock.return_value = new_response(201)
        result = verify_raw_service_credential(raw_service_credential, config)
    assert result["idMatch"] is False


def test_verify_raw_service_credential_failures(config):
    detail = {"message": ["gx:legalName is missing"], "conforms": False}
    with patch("requests.post") as mock:
        mock.return_value = new_response(409, {"body": detail})
        assert verify_raw_service_credential(raw_service_credential, config) == {
            "verified": False,
            "responseBody": detail,
        }

    with patch("requests.post") as mock:
        mock.return_value = new_response(409, detail)
        result = verify_raw_service_credential(raw_service_credential, config)
    assert result["responseBody"] == detail

    with patch("requests.post") as mock:
        mock.return_value = new_response(500)
        assert verify_raw_service_credential(raw_service_credential, config) == {
            "verified": False
        }

    with patch("requests.post") as mock:
        mock.side_effect = Exception("Boom!")
        assert verify_raw_service_credential(raw_service_credential, config) == {
            "verified": False
        }

    assert verify_raw_service_credential("{oops", config) == {"verified": False}
    assert verify_raw_service_credential(None, config) == {"verified": False}


def test_get_service_credential():
    with patch("requests.get") as mock:
        the_response = new_response(200, raw_service_credential)
        mock.return_value = the_response
        credential = get_service_credential("https://example.com/sd.json", 5)

    assert json.loads(credential) == raw_service_credential
    assert credential == json.dumps(raw_service_credential, indent=2)
    mock.assert_called_once_with("https://example.com/sd.json", timeout=5)

    with patch("requests.get") as mock:
        mock.side_effect = Exception("Boom!")
        assert get_service_credential("https://example.com/sd.json") is None

    assert get_service_credential(None) is None


def test_publisher_and_formatting():
    assert get_publisher_from_service_credential(raw_service_credential) == "Met Office"
    assert (
        get_publisher_from_service_credential(json.dumps(legacy_service_credential))
        == "Met Office"
    )
    assert get_publisher_from_service_credential({"verifiableCredential": []}) is None
    assert get_publisher_from_service_credential("{oops") is None
    assert get_publisher_from_service_credential(None) is None

    assert isinstance(parse_legal_name("Met Office"), PlainValue)
    localized = parse_legal_name({"@value": "Met Office", "@language": "en"})
    assert isinstance(localized, LocalizedValue)
    assert localized.unwrap() == "Met Office"
    assert localized.language == "en"
    assert parse_legal_name(42) is None

    assert get_formatted_code_string({"a": 1}) == '```\n{\n  "a": 1\n}\n```'


def test_update_service_credential():
    ddo = {"metadata": {"name": "Weather"}}
    update_service_credential(ddo, {"url": "https://example.com/sd.json"})
    assert ddo["metadata"]["additionalInformation"]["gaiaXInformation"][
        "serviceSD"
    ] == {"raw": None, "url": "https://example.com/sd.json"}

    ddo["metadata"]["additionalInformation"]["gaiaXInformation"]["containsPII"] = True
    update_service_credential(ddo, {"raw": "{}"})
    trust = ddo["metadata"]["additionalInformation"]["gaiaXInformation"]
    assert trust["serviceSD"] == {"raw": "{}", "url": None}
    assert trust["containsPII"] is True


def test_trust_credential_pipeline(config):
    with patch("requests.post") as mock:
        mock.side_effect = [
            new_response(200, SIGNATURE),
            new_response(201, {"storedSdUrl": STORED_URL}),
            new_response(201, raw_service_credential),
        ]
        result = TrustCredentialPipeline(config).run(
            copy.deepcopy(raw_service_credential), SERVICE_OFFERING_ID
        )

    assert result["state"] == CredentialStates.VERIFIED
    assert result["signed"] is True
    assert result["stored"] is True
    assert result["storedSdUrl"] == STORED_URL
    assert result["verified"] is True
    assert result["idMatch"] is True
    assert mock.call_count == 3


def test_trust_credential_pipeline_stops_when_unsigned(config):
    with patch("requests.post") as mock:
        mock.return_value = new_response(400, {"message": "invalid"})
        result = TrustCredentialPipeline(config).run(raw_service_credential)

    assert result["state"] == CredentialStates.UNSIGNED
    assert result["verified"] is False
    assert mock.call_count == 1


def test_trust_credential_pipeline_rejected(config):
    with patch("requests.post") as mock:
        mock.side_effect = [
            new_response(200, SIGNATURE),
            new_response(409, {"body": {"message": "already stored"}}),
            new_response(409, {"body": {"message": "invalid"}}),
        ]
        result = TrustCredentialPipeline(config).run(raw_service_credential)

    assert result["state"] == CredentialStates.REJECTED
    assert result["signed"] is True
    assert result["stored"] is False
    assert result["responseBody"] == {"message": "invalid"}


MALFORMED_CREDENTIALS = [
    {"selfDescriptionCredential": "x"},
    {"verifiableCredential": 5},
    {"verifiableCredential": "abc"},
    {"verifiableCredential": [5, {"credentialSubject": 5, "@context": 7}]},
    {"verifiableCredential": [{"credentialSubject": [1, "a"]}]},
    {"@context": 5},
    [1, 2],
    5,
]


def test_malformed_credential_lookups(config):
    for credential in MALFORMED_CREDENTIALS:
        assert get_service_offering_id(credential) is None
        assert get_publisher_from_service_credential(credential) is None
        assert get_compliance_api_version(
            get_credential_context(credential), config
        ) in ("2210", "2204")

    assert get_credential_context({"selfDescriptionCredential": "x"}) is None
    assert get_compliance_api_version(5, config) == "2210"
    assert (
        get_publisher_from_service_credential(
            {"verifiableCredential": {"credentialSubject": {"gx:legalName": "Met"}}}
        )
        == "Met"
    )


def test_verify_malformed_credential(config):
    for credential in MALFORMED_CREDENTIALS:
        with patch("requests.post") as mock:
            mock.return_value = new_response(201, {"verifiableCredential": 5})
            result = verify_raw_service_credential(
                json.dumps(credential), config, "did:op:123"
            )

        assert result["verified"] is True
        assert result["idMatch"] is False


def test_trust_credential_pipeline_malformed_credential(config):
    with patch("requests.post") as mock:
        mock.side_effect = [
            new_response(200, SIGNATURE),
            new_response(201, {"storedSdUrl": STORED_URL}),
            new_response(409, {"body": {"message": "invalid"}}),
        ]
        result = TrustCredentialPipeline(config).run('{"verifiableCredential": 5}')

    assert result["state"] == CredentialStates.REJECTED
    assert result["signed"] is True
    assert result["stored"] is True
    assert result["responseBody"] == {"message": "invalid"}
