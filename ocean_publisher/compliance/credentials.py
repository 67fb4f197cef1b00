#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import copy
import json
import logging
from json import JSONDecodeError

import requests

from ocean_publisher.compliance.version import get_compliance_api_version
from ocean_publisher.constants import SimpleEnum
from ocean_publisher.exceptions import ComplianceConflict, ComplianceTransportError

logger = logging.getLogger(__name__)

SERVICE_OFFERING_TYPES = ("gx:ServiceOffering", "ServiceOffering")


class CredentialStates(SimpleEnum):
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    STORED = "stored"
    VERIFIED = "verified"
    REJECTED = "rejected"


def _parse_credential(credential):
    if isinstance(credential, (str, bytes)):
        return json.loads(credential)

    return credential


def _response_json(response):
    try:
        return response.json()
    except ValueError:
        return None


def _post(endpoint, payload, timeout):
    """Posts to the registry. 409 raises ComplianceConflict, transport
    failures raise ComplianceTransportError, any other status is returned."""
    try:
        response = requests.post(endpoint, json=payload, timeout=timeout)
    except Exception as e:
        raise ComplianceTransportError(
            f"Compliance registry request to {endpoint} failed: {e}", endpoint
        )

    if not hasattr(response, "status_code"):
        raise ComplianceTransportError(
            f"No response from compliance registry {endpoint}.", endpoint
        )

    if response.status_code == 409:
        data = _response_json(response)
        body = data.get("body", data) if isinstance(data, dict) else data
        raise ComplianceConflict(
            f"Compliance registry {endpoint} returned a conflict.", endpoint, body
        )

    return response


def sign_service_credential(raw_service_credential, config):
    """unsigned -> signed. Returns {"signed", "serviceCredential" | "error"}."""
    if not raw_service_credential:
        return {"signed": False, "error": "No service credential provided."}

    endpoint = f"{config.compliance_uri}/api/sign"
    try:
        raw_service_credential = _parse_credential(raw_service_credential)
        response = _post(endpoint, raw_service_credential, config.request_timeout)
    except JSONDecodeError as e:
        msg = f"Service credential is not valid json: {e}"
        logger.error(msg)
        return {"signed": False, "error": msg}
    except (ComplianceTransportError, ComplianceConflict) as e:
        logger.error(str(e))
        return {"signed": False, "error": str(e)}

    data = _response_json(response)
    if response.status_code not in (200, 201) or not isinstance(data, dict):
        msg = f"Signing failed at {endpoint}, status {response.status_code}."
        logger.error(msg)
        return {"signed": False, "error": msg}

    signed_service_credential = {
        "selfDescriptionCredential": copy.deepcopy(raw_service_credential)
    }
    signed_service_credential.update(data)

    return {"signed": True, "serviceCredential": signed_service_credential}


def store_raw_service_credential(signed_service_credential, config):
    """signed -> stored. A 409 means the payload already exists remotely."""
    if not signed_service_credential:
        return {"stored": False, "storedSdUrl": None}

    endpoint = f"{config.compliance_uri}/api/service-offering/verify/raw?store=true"
    try:
        response = _post(endpoint, signed_service_credential, config.request_timeout)
    except ComplianceConflict as e:
        logger.info(f"{e} Service credential is already stored.")
        return {"stored": False, "storedSdUrl": None}
    except ComplianceTransportError as e:
        logger.error(str(e))
        return {"stored": False, "storedSdUrl": None}

    data = _response_json(response)
    if response.status_code in (200, 201) and isinstance(data, dict):
        return {"stored": True, "storedSdUrl": data.get("storedSdUrl")}

    logger.error(f"Storing failed at {endpoint}, status {response.status_code}.")
    return {"stored": False, "storedSdUrl": None}


def get_verifiable_credentials(credential):
    """The presentation's credential objects, a single object counts as one."""
    if not isinstance(credential, dict):
        return []

    verifiable_credentials = credential.get("verifiableCredential")
    if isinstance(verifiable_credentials, dict):
        verifiable_credentials = [verifiable_credentials]
    if not isinstance(verifiable_credentials, list):
        return []

    return [vc for vc in verifiable_credentials if isinstance(vc, dict)]


def get_credential_context(credential):
    """Context of the self description, falling back to the presentation's."""
    if not isinstance(credential, dict):
        return None

    self_description = credential.get("selfDescriptionCredential")
    if isinstance(self_description, dict) and self_description.get("@context"):
        return self_description["@context"]

    contexts = []
    for verifiable_credential in get_verifiable_credentials(credential):
        context = verifiable_credential.get("@context") or []
        if isinstance(context, str):
            contexts.append(context)
        elif isinstance(context, list):
            contexts.extend(context)

    return contexts or credential.get("@context")


def get_service_offering_id(credential):
    for verifiable_credential in get_verifiable_credentials(credential):
        subjects = verifiable_credential.get("credentialSubject")
        if isinstance(subjects, dict):
            subjects = [subjects]

        if not isinstance(subjects, list):
            continue

        for subject in subjects:
            if isinstance(subject, dict) and subject.get("type") in SERVICE_OFFERING_TYPES:
                return subject.get("id")

    return None


def verify_raw_service_credential(raw_service_credential, config, did=None):
    """Submits a raw credential for verification.

    201 yields verified, plus whether the service offering id matches `did`.
    409 yields not verified with the registry detail in `responseBody`.
    """
    if not raw_service_credential:
        return {"verified": False}

    try:
        parsed_service_credential = _parse_credential(raw_service_credential)
    except JSONDecodeError as e:
        logger.error(f"Service credential is not valid json: {e}")
        return {"verified": False}

    compliance_api_version = get_compliance_api_version(
        get_credential_context(parsed_service_credential), config
    )
    endpoint = f"{config.compliance_uri}/main/api/credential-offers"

    try:
        response = _post(endpoint, parsed_service_credential, config.request_timeout)
    except ComplianceConflict as e:
        logger.warning(f"{e} did={did}")
        return {"verified": False, "responseBody": e.body}
    except ComplianceTransportError as e:
        logger.error(f"{e} did={did}")
        return {"verified": False}

    if response.status_code == 201:
        credential_id = get_service_offering_id(
            _response_json(response)
        ) or get_service_offering_id(parsed_service_credential)

        return {
            "verified": True,
            "complianceApiVersion": compliance_api_version,
            "idMatch": bool(
                did
                and isinstance(did, str)
                and isinstance(credential_id, str)
                and did.lower() == credential_id.lower()
            ),
        }

    logger.error(
        f"Verification failed at {endpoint}, status {response.status_code}, did={did}."
    )
    return {"verified": False}


def get_service_credential(url, timeout=10):
    """Fetches a credential stored by reference and returns it pretty printed."""
    if not url:
        return None

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return json.dumps(response.json(), indent=2)
    except Exception as e:
        logger.error(f"Failed to fetch service credential from {url}: {e}")
        return None


def get_formatted_code_string(parsed_code_block):
    formatted_string = json.dumps(parsed_code_block, indent=2)
    return f"```\n{formatted_string}\n```"


def update_service_credential(ddo, service_credential):
    """Attaches a credential, inline (`raw`) or by reference (`url`)."""
    additional_information = ddo["metadata"].setdefault("additionalInformation", {})
    trust_information = additional_information.setdefault("gaiaXInformation", {})
    trust_information["serviceSD"] = {
        "raw": service_credential.get("raw"),
        "url": service_credential.get("url"),
    }

    return ddo


class PlainValue:
    def __init__(self, value):
        self.value = value

    def unwrap(self):
        return self.value


class LocalizedValue:
    """JSON-LD value object, e.g. {"@value": "Ocean", "@language": "en"}."""

    def __init__(self, value, language=None):
        self.value = value
        self.language = language

    def unwrap(self):
        return self.value


def parse_legal_name(legal_name):
    if isinstance(legal_name, str):
        return PlainValue(legal_name)

    if isinstance(legal_name, dict) and "@value" in legal_name:
        return LocalizedValue(legal_name["@value"], legal_name.get("@language"))

    return None


def get_publisher_from_service_credential(service_credential):
    if not service_credential:
        return None

    try:
        parsed_service_credential = _parse_credential(service_credential)
    except JSONDecodeError as e:
        logger.error(f"Service credential is not valid json: {e}")
        return None

    verifiable_credentials = get_verifiable_credentials(parsed_service_credential)
    if not verifiable_credentials:
        return None

    subject = verifiable_credentials[0].get("credentialSubject") or {}
    if isinstance(subject, list):
        subject = subject[0] if subject else {}
    if not isinstance(subject, dict):
        return None

    legal_name = parse_legal_name(subject.get("gx:legalName"))

    return legal_name.unwrap() if legal_name else None


class TrustCredentialPipeline:
    """Drives a credential through unsigned -> signed -> stored -> verified.

    Every step resolves to a structured result, nothing raises past `run`.
    """

    def __init__(self, config):
        self.config = config

    def run(self, raw_service_credential, did=None):
        result = {
            "state": CredentialStates.UNSIGNED,
            "signed": False,
            "stored": False,
            "storedSdUrl": None,
            "verified": False,
        }

        signing = sign_service_credential(raw_service_credential, self.config)
        if not signing["signed"]:
            result["error"] = signing.get("error")
            return result

        result["signed"] = True
        result["state"] = CredentialStates.SIGNED
        result["serviceCredential"] = signing["serviceCredential"]

        storage = store_raw_service_credential(
            signing["serviceCredential"], self.config
        )
        result.update(storage)
        if storage["stored"]:
            result["state"] = CredentialStates.STORED

        verification = verify_raw_service_credential(
            raw_service_credential, self.config, did
        )
        result.update(verification)
        result["state"] = (
            CredentialStates.VERIFIED
            if verification["verified"]
            else CredentialStates.REJECTED
        )

        return result
