import logging
from typing import Dict, Optional, Tuple

from models.edit import GeneratedImage, ImagePayload
from services.base_provider import ProviderService

logger = logging.getLogger(__name__)

OUTPUT_CONTENT_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "webp": "image/webp",
}


def content_type_for(output_format: Optional[str]) -> str:
    """Map a reported output format (or mime type) to a content type, default image/png"""
    if not output_format:
        return "image/png"
    value = output_format.split(";")[0].strip().lower()
    if value.startswith("image/"):
        return "image/jpeg" if value == "image/jpg" else value
    return OUTPUT_CONTENT_TYPES.get(value, "image/png")


class StabilityService(ProviderService):
    """Image edits on the Stability AI stable-image API."""

    name = "stability"
    label = "Stability AI"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.stability.ai/v2beta",
        timeout: float = 60.0,
        client=None,
        output_format: str = "png",
    ):
        super().__init__(api_key, base_url, timeout=timeout, client=client)
        self.output_format = output_format

    @staticmethod
    def _file(field: str, payload: ImagePayload) -> Tuple[str, Tuple[str, bytes, str]]:
        filename = payload.filename or f"{field}.{payload.content_type.split('/')[-1]}"
        return field, (filename, payload.data, payload.content_type)

    async def _edit(self, path: str, files: list, data: Dict[str, str]) -> GeneratedImage:
        data["output_format"] = self.output_format
        response = await self._post(
            path,
            files=files,
            data=data,
            headers=self._headers(Accept="image/*"),
        )
        content_type = content_type_for(response.headers.get("content-type") or self.output_format)
        logger.info(
            "Stability edit %s finished: %s bytes, %s, finish-reason=%s",
            path, len(response.content), content_type, response.headers.get("finish-reason"),
        )
        return GeneratedImage(data=response.content, content_type=content_type)

    async def search_and_replace(
        self,
        image: ImagePayload,
        search_prompt: str,
        prompt: str,
        negative_prompt: Optional[str] = None,
    ) -> GeneratedImage:
        """Replace whatever matches search_prompt, no mask needed"""
        data = {"prompt": prompt, "search_prompt": search_prompt}
        if negative_prompt:
            data["negative_prompt"] = negative_prompt
        return await self._edit(
            "/stable-image/edit/search-and-replace",
            [self._file("image", image)],
            data,
        )

    async def inpaint(
        self,
        image: ImagePayload,
        prompt: str,
        mask: Optional[ImagePayload] = None,
        negative_prompt: Optional[str] = None,
        strength: float = 0.8,
    ) -> GeneratedImage:
        files = [self._file("image", image)]
        if mask is not None:
            files.append(self._file("mask", mask))

        data = {"prompt": prompt, "strength": f"{strength:g}"}
        if negative_prompt:
            data["negative_prompt"] = negative_prompt
        return await self._edit("/stable-image/edit/inpaint", files, data)
