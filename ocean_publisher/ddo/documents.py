#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#
import copy
import hashlib

from eth_utils import remove_0x_prefix
from eth_utils.address import is_address, to_checksum_address
from web3 import Web3

from ocean_publisher.constants import DDO_CONTEXT, DDO_VERSION, PREVIEW_DID
from ocean_publisher.exceptions import ValidationError


def make_did(data_nft_address, chain_id):
    if not data_nft_address or not is_address(data_nft_address.lower()):
        return None
    return "did:op:" + remove_0x_prefix(
        Web3.to_hex(
            hashlib.sha256(
                (to_checksum_address(data_nft_address) + str(chain_id)).encode("utf-8")
            ).digest()
        )
    )


def get_hash(text):
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class DDO:
    """Common part of preview and final documents.

    `metadata` and `service` hold everything that does not depend on the
    on-chain addresses. The service dict carries neither `id`, `files` nor
    `datatokenAddress`, these are added by `as_dict`.
    """

    is_preview = False

    def __init__(self, chain_id, metadata, service):
        self.chain_id = chain_id
        self.metadata = metadata
        self.service = service

    @property
    def did(self):
        raise NotImplementedError

    def _service_dict(self, datatoken_address, files):
        service = {
            "id": get_hash(f"{datatoken_address or ''}{files or ''}"),
            "type": self.service["type"],
            "files": files,
        }
        if datatoken_address:
            service["datatokenAddress"] = datatoken_address
        service.update(
            {k: v for k, v in self.service.items() if k not in service}
        )

        return service

    def _base_dict(self, nft_address=None):
        result = {"@context": list(DDO_CONTEXT), "id": self.did}
        if nft_address:
            result["nftAddress"] = nft_address
        result.update(
            {
                "version": DDO_VERSION,
                "chainId": self.chain_id,
                "metadata": copy.deepcopy(self.metadata),
            }
        )

        return result


class PreviewDDO(DDO):
    """Document shown before the tokens exist, with synthetic token info."""

    is_preview = True

    def __init__(self, chain_id, metadata, service, datatokens, nft):
        super().__init__(chain_id, metadata, service)
        self.datatokens = datatokens
        self.nft = nft

    @property
    def did(self):
        return PREVIEW_DID

    def as_dict(self):
        result = self._base_dict()
        result["services"] = [copy.deepcopy(self._service_dict(None, ""))]
        result["datatokens"] = copy.deepcopy(self.datatokens)
        result["nft"] = copy.deepcopy(self.nft)

        return result

    def finalize(self, nft_address, datatoken_address, encrypted_files):
        return FinalDDO(
            self.chain_id,
            copy.deepcopy(self.metadata),
            copy.deepcopy(self.service),
            nft_address,
            datatoken_address,
            encrypted_files,
        )


class FinalDDO(DDO):
    def __init__(
        self, chain_id, metadata, service, nft_address, datatoken_address, files
    ):
        super().__init__(chain_id, metadata, service)
        if not nft_address or not datatoken_address:
            raise ValidationError(
                "A final document needs both the nft and the datatoken address."
            )

        if not files or not isinstance(files, str):
            raise ValidationError("A final document needs encrypted files.")

        self.nft_address = nft_address
        self.datatoken_address = datatoken_address
        self.files = files
        self._did = make_did(nft_address, chain_id)
        if not self._did:
            raise ValidationError(f"Invalid nft address {nft_address}.")

    @property
    def did(self):
        return self._did

    def as_dict(self):
        result = self._base_dict(self.nft_address)
        result["services"] = [
            copy.deepcopy(self._service_dict(self.datatoken_address, self.files))
        ]

        return result
