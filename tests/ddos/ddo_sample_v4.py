#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
from ocean_publisher.ddo.documents import make_did
from tests.helpers import DATATOKEN_ADDRESS, NFT_ADDRESS

json_dict = {
    "@context": ["https://w3id.org/did/v1"],
    "id": make_did(NFT_ADDRESS, 5),
    "nftAddress": NFT_ADDRESS,
    "version": "4.1.0",
    "chainId": 5,
    "metadata": {
        "created": "2023-05-01T10:20:30Z",
        "updated": "2023-05-01T10:20:30Z",
        "type": "dataset",
        "name": "Weather in Berlin",
        "description": "Hourly temperature readings.",
        "tags": ["weather-data", "berlin"],
        "author": "Met Office",
        "license": "MIT",
        "links": ["https://example.com/sample.csv"],
        "additionalInformation": {
            "termsAndConditions": True,
            "gaiaXInformation": {
                "termsAndConditions": [{"url": "https://example.com/terms.pdf"}],
                "containsPII": False,
            },
        },
    },
    "services": [
        {
            "id": "1155995dda741e93afe4b1c6ced2d01734a6ec69865cc0997daf1f4db7259a36",
            "type": "access",
            "files": "0x04f0dddf93c186c38bfea243e06889b490a491141585669cfbe7521a5c7acb3bfea5a5527f17eb75ae1f66501e1f70f73df757490c8df479a618b0dd23b2bf3c62d07c372f64c6ad94209947471a898c71f1b2f0ab2a965024fa8e454644661d538b6aa025e517197ac87a3767820f018358999afda760225053df20ff14f499fcf4e7e036beb843ad95587c138e1f972e370d4c68c99ab2602b988c837f6f76658a23e99da369f6898ce1426d49c199cf8ffa33b79002765325c12781a2202239381866c6a06b07754024ee9a6e4aabc8",
            "datatokenAddress": DATATOKEN_ADDRESS,
            "serviceEndpoint": "https://v4.provider.oceanprotocol.com",
            "timeout": 86400,
        }
    ],
}
