#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import logging

from flask import Blueprint, jsonify, request

from ocean_publisher.app.util import get_request_json
from ocean_publisher.config import PublishConfig
from ocean_publisher.ddo.transformer import transform_publish_form_to_ddo
from ocean_publisher.ddo_checker.shacl_checker import validate_dict
from ocean_publisher.exceptions import ValidationError
from ocean_publisher.log import setup_logging

setup_logging()
publish = Blueprint("publish", __name__)
logger = logging.getLogger("ocean_publisher")


@publish.route("/preview", methods=["POST"])
def preview():
    """Builds the preview DDO for a publish form.
    ---
    tags:
      - publish
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        description: Publish form values (metadata, services, pricing, user).
    responses:
      200:
        description: preview DDO, without token addresses and encrypted files.
      400:
        description: invalid form data.
      500:
        description: server error
    """
    try:
        values = get_request_json(request)
        ddo = transform_publish_form_to_ddo(values, config=PublishConfig.from_env())
        return jsonify(ddo.as_dict())
    except ValidationError as e:
        return jsonify(error=str(e)), 400
    except Exception as e:
        msg = f"Encountered error when building preview: {str(e)}."
        logger.error(msg)
        return jsonify(error=msg), 500


@publish.route("/validate", methods=["POST"])
def validate():
    """Validates a final DDO against the current schema.
    ---
    tags:
      - publish
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        description: DDO to validate.
    responses:
      200:
        description: the DDO is valid.
      400:
        description: list of validation errors.
      500:
        description: server error
    """
    try:
        data = get_request_json(request)
    except ValidationError as e:
        return jsonify([{"message": str(e)}]), 400

    if "version" not in data:
        return jsonify([{"message": "no version provided for DDO."}]), 400

    try:
        valid, errors = validate_dict(data, data.get("chainId"), data.get("nftAddress"))
    except Exception as e:
        msg = f"Encountered error when validating asset: {str(e)}."
        logger.error(msg)
        return jsonify(error=msg), 500

    if not valid:
        return jsonify(errors), 400

    return jsonify(valid=True, did=data.get("id"))
