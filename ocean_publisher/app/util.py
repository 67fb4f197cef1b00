#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import json
from json import JSONDecodeError

from ocean_publisher.exceptions import ValidationError


def get_request_json(request):
    """Parses the request body as a json object, whatever the content type."""
    data = request.get_data()
    if not data:
        raise ValidationError("Request body is empty.")

    try:
        parsed = json.loads(data.decode("utf-8"))
    except (JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Request body is not valid json.")

    if not isinstance(parsed, dict):
        raise ValidationError("Request body must be a json object.")

    return parsed
