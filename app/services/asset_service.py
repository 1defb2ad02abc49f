from __future__ import annotations

import hashlib
import time

import httpx

from app.core.config import settings
from app.core.constants import CLOUDINARY_API


class AssetError(RuntimeError):
    pass


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary signature: sorted `key=value` pairs joined by `&`, secret appended, SHA-1."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] != "")
    return hashlib.sha1((to_sign + api_secret).encode("utf-8")).hexdigest()


class CloudinaryAssetStore:
    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.cloud_name = cloud_name or settings.cloudinary_cloud_name
        self.api_key = api_key or settings.cloudinary_api_key
        self.api_secret = api_secret or settings.cloudinary_api_secret
        self.timeout = timeout or settings.http_timeout
        self.transport = transport

    async def destroy(self, public_id: str) -> None:
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise AssetError("Cloudinary is not configured")

        params = {"public_id": public_id, "timestamp": str(int(time.time()))}
        data = {
            **params,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        url = f"{CLOUDINARY_API}/{self.cloud_name}/image/destroy"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(url, data=data)

        if r.status_code >= 400:
            raise AssetError(f"Asset host returned {r.status_code}: {r.text}")

        try:
            result = r.json().get("result")
        except ValueError:
            raise AssetError(f"Unexpected asset host response: {r.text}")

        # "not found" means an earlier attempt already removed it.
        if result not in ("ok", "not found"):
            raise AssetError(f"Asset {public_id} was not deleted: {result}")
