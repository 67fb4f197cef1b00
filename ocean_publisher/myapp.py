#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
"""
Creates the flask `app` shared by the publish and compliance blueprints.
"""
import os

from flask import Flask
from flask_cors import CORS

app = Flask(__name__)
# DDO keys are returned in the order they are built
app.json.sort_keys = False
app.config["MAX_CONTENT_LENGTH"] = int(
    os.getenv("MAX_CONTENT_LENGTH", 16 * 1024 * 1024)
)
CORS(app, origins=os.getenv("CORS_ORIGINS", "*").split(","))
