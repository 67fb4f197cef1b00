#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
"""
This module is the entrypoint for starting the Ocean Publisher component.
"""
import json
import os

import click
from flask import jsonify
from flask_swagger import swagger
from flask_swagger_ui import get_swaggerui_blueprint

from ocean_publisher.app.compliance import compliance
from ocean_publisher.app.publish import publish
from ocean_publisher.chain.nft_factory import Web3NftFactory
from ocean_publisher.chain.util import get_publisher_account, setup_web3
from ocean_publisher.compliance.credentials import TrustCredentialPipeline
from ocean_publisher.config import PublishConfig, get_version
from ocean_publisher.constants import BaseURLs, Metadata
from ocean_publisher.ddo.form import FormPublishData
from ocean_publisher.myapp import app
from ocean_publisher.publish import make_chain_persister, publish_asset

publisher_url = os.getenv("PUBLISHER_URL", "http://localhost:5000")


@app.route("/")
def version():
    """
    Returns:
        json object as follows:
        ```JSON
            {
                "software":"Ocean Publisher",
                "version":"0.1.0"
            }
        ```
    """
    info = dict()
    info["software"] = Metadata.TITLE
    info["version"] = get_version()
    return jsonify(info)


@app.route("/spec")
def spec():
    """
    Returns the information about supported endpoints generated through swagger.
    """
    swag = swagger(app)
    swag["info"]["version"] = "1.0"
    swag["info"]["title"] = Metadata.TITLE
    swag["info"]["description"] = Metadata.DESCRIPTION + "`" + publisher_url + "`."
    return jsonify(swag)


# Call factory function to create our blueprint
swaggerui_blueprint = get_swaggerui_blueprint(
    BaseURLs.SWAGGER_URL,
    "/spec",
    config={"app_name": Metadata.TITLE},
)

# Register blueprint at URL
app.register_blueprint(swaggerui_blueprint, url_prefix=BaseURLs.SWAGGER_URL)
app.register_blueprint(publish, url_prefix=BaseURLs.PUBLISH_URL)
app.register_blueprint(compliance, url_prefix=BaseURLs.COMPLIANCE_URL)


@app.cli.command("verify_credential")
@click.argument("credential_file", type=click.File("r"))
@click.argument("did", required=False)
def verify_credential(credential_file, did):
    result = TrustCredentialPipeline(PublishConfig.from_env()).run(
        credential_file.read(), did
    )
    print(json.dumps(result, indent=2))


@app.cli.command("publish")
@click.argument("form_file", type=click.File("r"))
@click.option("--network-url", default=None, help="rpc url, defaults to NETWORK_URL")
def publish_form(form_file, network_url):
    config = PublishConfig.from_env()
    values = FormPublishData.from_dict(json.load(form_file))
    web3 = setup_web3(network_url)
    account = get_publisher_account()

    result = publish_asset(
        values,
        account.address,
        Web3NftFactory(web3, account, values.chain_id),
        config,
        persist=make_chain_persister(
            web3, account, values.provider_url, values.chain_id, config.request_timeout
        ),
    )
    print(
        json.dumps(
            {
                "did": result.ddo.did,
                "nftAddress": result.pricing.nft_address,
                "datatokenAddress": result.pricing.datatoken_address,
                "pricingTx": result.pricing.tx_hash,
                "metadataTx": result.metadata_tx,
                "credential": result.credential,
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    app.run()
