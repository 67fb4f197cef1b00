#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import logging
import os

import requests

from ocean_publisher.exceptions import InvalidContainerPreset

logger = logging.getLogger(__name__)

ALGORITHM_CONTAINER_PRESETS = [
    {"image": "node", "tag": "latest", "entrypoint": "node $ALGO", "checksum": ""},
    {
        "image": "python",
        "tag": "latest",
        "entrypoint": "python $ALGO",
        "checksum": "",
    },
]


def get_container_checksum(image, tag):
    """Returns the image digest published on Docker Hub, or None."""
    namespace, _, repository = image.rpartition("/")
    namespace = namespace or "library"
    base_url = os.getenv("DOCKER_HUB_URL", "https://hub.docker.com")
    url = f"{base_url}/v2/repositories/{namespace}/{repository}/tags/{tag}"

    try:
        response = requests.get(url, timeout=5)
    except Exception as e:
        logger.error(f"Failed to get checksum for {image}:{tag} from {url}: {e}")
        return None

    if response.status_code != 200:
        logger.error(
            f"Docker Hub returned {response.status_code} for {image}:{tag}, url={url}."
        )
        return None

    data = response.json()
    if data.get("digest"):
        return data["digest"]

    images = data.get("images") or []
    return images[0].get("digest") if images else None


def get_algorithm_container_preset(docker_image, checksum_resolver=None):
    """Returns a copy of the `image:tag` preset with its checksum filled in."""
    if not docker_image:
        return None

    checksum_resolver = checksum_resolver or get_container_checksum
    preset = next(
        (
            preset
            for preset in ALGORITHM_CONTAINER_PRESETS
            if f"{preset['image']}:{preset['tag']}" == docker_image
        ),
        None,
    )
    if preset is None:
        raise InvalidContainerPreset(f"Unknown container preset {docker_image}.")

    container = dict(preset)
    container["checksum"] = checksum_resolver(container["image"], container["tag"])
    if not container["checksum"]:
        raise InvalidContainerPreset(
            f"Could not resolve a checksum for container preset {docker_image}."
        )

    return container
