"""Pinata client for pinning meme images and coin metadata to IPFS."""

import json
import time
from typing import Any, Dict, Mapping, Optional, Tuple

import aiohttp

from ..config.config import settings
from ..exceptions.base import ErrorCode
from ..exceptions.meme_specific import CoinDeploymentError
from ..utils.logging import get_logger

logger = get_logger(__name__)

PINATA_PIN_FILE_URL = "https://api.pinata.cloud/pinning/pinFileToIPFS"


def ipfs_uri(cid: str) -> str:
    return f"ipfs://{cid}"


def gateway_url(cid: str, gateway: Optional[str] = None) -> str:
    return f"{gateway or settings.ipfs_gateway}{cid}"


class PinataIPFSClient:
    """Uploads files and JSON documents through the Pinata pinning API."""

    def __init__(
        self,
        jwt: Optional[str] = None,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.jwt = jwt if jwt is not None else settings.pinata_jwt
        self.api_key = api_key if api_key is not None else settings.pinata_api_key
        self.secret_key = secret_key if secret_key is not None else settings.pinata_secret_key
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds if timeout_seconds is not None else settings.ipfs_timeout_seconds
        )

    @property
    def configured(self) -> bool:
        return bool(self.jwt or (self.api_key and self.secret_key))

    def _auth_headers(self) -> Dict[str, str]:
        if self.jwt:
            return {"Authorization": f"Bearer {self.jwt}"}
        if self.api_key and self.secret_key:
            return {"pinata_api_key": self.api_key, "pinata_secret_api_key": self.secret_key}
        raise CoinDeploymentError(
            "No Pinata credentials configured", stage="ipfs", code=ErrorCode.IPFS_UPLOAD_ERROR
        )

    async def fetch_image(self, image_url: str) -> bytes:
        """Download the rendered meme image."""
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(image_url) as response:
                    response.raise_for_status()
                    return await response.read()
        except aiohttp.ClientError as e:
            raise CoinDeploymentError(
                f"Failed to fetch meme image: {e}",
                stage="ipfs",
                code=ErrorCode.IPFS_UPLOAD_ERROR,
                original_error=e,
            ) from e

    async def pin_file(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        keyvalues: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Pin one file and return its CID.

        Raises:
            CoinDeploymentError: If the upload fails
        """
        form = aiohttp.FormData()
        form.add_field("file", content, filename=filename, content_type=content_type)
        form.add_field(
            "pinataMetadata",
            json.dumps({"name": filename, "keyvalues": dict(keyvalues or {})}),
        )
        form.add_field("pinataOptions", json.dumps({"cidVersion": 0}))

        headers = self._auth_headers()
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(PINATA_PIN_FILE_URL, data=form, headers=headers) as response:
                    if response.status >= 400:
                        body = await response.text()
                        raise CoinDeploymentError(
                            f"Pinata upload failed: {response.status} {body}",
                            stage="ipfs",
                            code=ErrorCode.IPFS_UPLOAD_ERROR,
                        )
                    result = await response.json()
        except aiohttp.ClientError as e:
            raise CoinDeploymentError(
                f"Pinata upload failed: {e}",
                stage="ipfs",
                code=ErrorCode.IPFS_UPLOAD_ERROR,
                original_error=e,
            ) from e

        cid = result["IpfsHash"]
        logger.info("ipfs_pinned", filename=filename, cid=cid)
        return cid

    async def pin_json(self, document: Mapping[str, Any], name: str) -> str:
        payload = json.dumps(document, indent=2).encode("utf-8")
        return await self.pin_file(
            payload,
            filename=f"{name}.json",
            content_type="application/json",
            keyvalues={"type": "meme-coin-metadata", "timestamp": str(int(time.time() * 1000))},
        )

    async def upload_meme_for_coin(self, image_url: str, metadata: Mapping[str, Any]) -> Tuple[str, str]:
        """
        Pin the meme image, then the metadata pointing at it.

        Args:
            image_url: Where to download the meme image from
            metadata: Coin metadata without the ``image`` field

        Returns:
            Tuple of (image CID, metadata CID)
        """
        image = await self.fetch_image(image_url)
        stamp = str(int(time.time() * 1000))
        image_cid = await self.pin_file(
            image,
            filename=f"meme-image-{stamp}",
            content_type="application/octet-stream",
            keyvalues={"type": "meme-image", "timestamp": stamp},
        )
        complete = {**metadata, "image": ipfs_uri(image_cid)}
        metadata_cid = await self.pin_json(complete, name=f"meme-coin-metadata-{stamp}")
        return image_cid, metadata_cid
