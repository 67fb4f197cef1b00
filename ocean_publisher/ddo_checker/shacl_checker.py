#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import copy
import json
import logging
from datetime import datetime
from pathlib import Path

import rdflib
from eth_utils.address import is_address
from pyshacl import validate

from ocean_publisher.constants import DDO_VERSION
from ocean_publisher.ddo.documents import make_did

logger = logging.getLogger("ocean_publisher")

CURRENT_VERSION = DDO_VERSION
ALLOWED_VERSIONS = [DDO_VERSION]
SCHEMAS_PATH = Path(__file__).parent / "shacl_schemas" / "v4"
SCHEMA_ORG = "http://schema.org/"
SHACL = "http://www.w3.org/ns/shacl#"


def get_schema(version=CURRENT_VERSION):
    """Returns the turtle shapes for a DDO version."""
    assert version in ALLOWED_VERSIONS, "Can't find schema {}".format(version)

    schema_file = SCHEMAS_PATH / f"remote_{version}.ttl"
    assert schema_file.exists(), "Can't find schema {}".format(version)

    return schema_file.read_text()


def beautify_message(message):
    if message.startswith("Less than 1 values on"):
        return "Less than 1 value on " + message[message.find("->") + 2 :]

    return message


def parse_report_to_errors(results_graph):
    """Maps every failing property path to its validation message."""
    errors = {}
    for result in results_graph.subjects(
        rdflib.RDF.type, rdflib.URIRef(SHACL + "ValidationResult")
    ):
        path = results_graph.value(result, rdflib.URIRef(SHACL + "resultPath"))
        message = results_graph.value(result, rdflib.URIRef(SHACL + "resultMessage"))
        if path is None:
            continue

        errors[str(path).replace(SCHEMA_ORG, "")] = beautify_message(str(message))

    return errors


def is_iso_format(date_string):
    """Checks if a datetime is in ISO format."""
    if not isinstance(date_string, str):
        return False

    try:
        datetime.fromisoformat(date_string.rstrip("Z"))
    except ValueError:
        return False

    return True


def get_publish_errors(ddo, chain_id, nft_address):
    """Checks that SHACL cannot express: identity, dates and the single service."""
    errors = {}

    if not isinstance(ddo.get("@context"), (list, dict)):
        errors["@context"] = "Context is missing or invalid."

    metadata = ddo.get("metadata")
    if not isinstance(metadata, dict):
        errors["metadata"] = "Metadata is missing or invalid."
        metadata = {}

    for attr in ["created", "updated"]:
        if attr in metadata and not is_iso_format(metadata[attr]):
            errors["metadata"] = attr + " is not in iso format."
        elif "." in str(metadata.get(attr, "")):
            errors["metadata"] = attr + " must not carry fractional seconds."

    if metadata.get("created") != metadata.get("updated"):
        errors["updated"] = "created and updated must be equal on publish."

    if len(ddo.get("services") or []) != 1:
        errors["services"] = "A published DDO has exactly one service."

    if not chain_id:
        errors["chainId"] = "chainId is missing or invalid."
    if not nft_address or not is_address(nft_address.lower()):
        errors["nftAddress"] = "nftAddress is missing or invalid."
    elif make_did(nft_address, chain_id) != ddo.get("id"):
        errors["id"] = "did is not valid for chain Id and nft address"

    return errors


def validate_dict(dict_orig, chain_id, nft_address):
    """Validates a final DDO. Returns a tuple of conforms, error messages."""
    version = dict_orig.get("version", CURRENT_VERSION)
    if version not in ALLOWED_VERSIONS:
        return False, {"version": f"Unsupported DDO version {version}."}

    dictionary = copy.deepcopy(dict_orig)
    dictionary["@type"] = "DDO"
    # @context key is reserved in JSON-LD format
    dictionary["@context"] = {"@vocab": SCHEMA_ORG}

    shapes_graph = rdflib.Graph().parse(data=get_schema(version), format="turtle")
    data_graph = rdflib.Graph().parse(data=json.dumps(dictionary), format="json-ld")
    conforms, results_graph, _ = validate(data_graph, shacl_graph=shapes_graph)

    errors = parse_report_to_errors(results_graph)
    errors.update(get_publish_errors(dict_orig, chain_id, nft_address))
    if errors:
        logger.debug(f"DDO {dict_orig.get('id')} has validation errors: {errors}")

    return conforms and not errors, errors
