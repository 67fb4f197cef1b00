#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import logging

from flask import Blueprint, jsonify, request

from ocean_publisher.app.util import get_request_json
from ocean_publisher.compliance.credentials import (
    TrustCredentialPipeline,
    get_publisher_from_service_credential,
    get_service_credential,
    sign_service_credential,
    store_raw_service_credential,
    verify_raw_service_credential,
)
from ocean_publisher.compliance.version import get_compliance_api_version
from ocean_publisher.config import PublishConfig
from ocean_publisher.exceptions import ValidationError
from ocean_publisher.log import setup_logging

setup_logging()
compliance = Blueprint("compliance", __name__)
logger = logging.getLogger("ocean_publisher")


def _get_body():
    data = get_request_json(request)
    if not data.get("serviceCredential"):
        raise ValidationError("serviceCredential is required.")

    return data


@compliance.route("/sign", methods=["POST"])
def sign():
    """Signs a raw service credential with the compliance registry.
    ---
    tags:
      - compliance
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        description: '{"serviceCredential": <raw credential>}'
    responses:
      200:
        description: signed credential.
      400:
        description: signing was refused or the body is invalid.
    """
    try:
        data = _get_body()
    except ValidationError as e:
        return jsonify(error=str(e)), 400

    result = sign_service_credential(data["serviceCredential"], PublishConfig.from_env())
    return jsonify(result), 200 if result["signed"] else 400


@compliance.route("/store", methods=["POST"])
def store():
    """Stores a signed service credential in the compliance registry.
    ---
    tags:
      - compliance
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        description: '{"serviceCredential": <signed credential>}'
    responses:
      200:
        description: storage result, including the stored url.
      400:
        description: invalid body.
    """
    try:
        data = _get_body()
    except ValidationError as e:
        return jsonify(error=str(e)), 400

    return jsonify(
        store_raw_service_credential(data["serviceCredential"], PublishConfig.from_env())
    )


@compliance.route("/verify", methods=["POST"])
def verify():
    """Verifies a raw service credential, optionally against an asset did.
    ---
    tags:
      - compliance
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        description: '{"serviceCredential": <raw credential>, "did": "did:op:..."}'
    responses:
      200:
        description: verification result.
      400:
        description: invalid body.
    """
    try:
        data = _get_body()
    except ValidationError as e:
        return jsonify(error=str(e)), 400

    return jsonify(
        verify_raw_service_credential(
            data["serviceCredential"], PublishConfig.from_env(), data.get("did")
        )
    )


@compliance.route("/pipeline", methods=["POST"])
def pipeline():
    """Signs, stores and verifies a raw service credential in one call.
    ---
    tags:
      - compliance
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        description: '{"serviceCredential": <raw credential>, "did": "did:op:..."}'
    responses:
      200:
        description: final credential state with the result of each step.
      400:
        description: invalid body.
    """
    try:
        data = _get_body()
    except ValidationError as e:
        return jsonify(error=str(e)), 400

    result = TrustCredentialPipeline(PublishConfig.from_env()).run(
        data["serviceCredential"], data.get("did")
    )
    return jsonify(result)


@compliance.route("/credential", methods=["GET"])
def credential():
    """Fetches a service credential stored by reference.
    ---
    tags:
      - compliance
    parameters:
      - name: url
        in: query
        description: url of the stored credential
        required: true
        type: string
    responses:
      200:
        description: the credential and its publisher name.
      400:
        description: missing url.
      404:
        description: the credential could not be fetched.
    """
    url = request.args.get("url")
    if not url:
        return jsonify(error="url is required."), 400

    service_credential = get_service_credential(
        url, PublishConfig.from_env().request_timeout
    )
    if not service_credential:
        return jsonify(error=f"Could not fetch service credential from {url}."), 404

    return jsonify(
        serviceCredential=service_credential,
        publisher=get_publisher_from_service_credential(service_credential),
    )


@compliance.route("/version", methods=["POST"])
def version():
    """Selects the compliance API version matching a credential context.
    ---
    tags:
      - compliance
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        description: '{"context": [<context urls>]}'
    responses:
      200:
        description: the selected version.
      400:
        description: invalid body.
    """
    try:
        data = get_request_json(request)
    except ValidationError as e:
        return jsonify(error=str(e)), 400

    return jsonify(
        version=get_compliance_api_version(
            data.get("context"), PublishConfig.from_env()
        )
    )
