"""Audio, image, embedding and moderation endpoints.

Uploads are sent as multipart forms. A file argument may be raw bytes, an open
binary file, or an httpx-style ``(filename, content[, mime])`` tuple.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..base.request import RequestOptions
from .helpers import ZaguanCommonMixin, file_part


class ZaguanMediaMixin(ZaguanCommonMixin):
    # ---- Audio ----
    def transcribe_audio(
        self,
        file: Any,
        model: str,
        *,
        language: Optional[str] = None,
        prompt: Optional[str] = None,
        response_format: Optional[str] = None,
        temperature: Optional[float] = None,
        timestamp_granularities: Optional[Sequence[str]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        fields = {
            "model": model,
            "language": language,
            "prompt": prompt,
            "response_format": response_format,
            "temperature": temperature,
            "timestamp_granularities[]": timestamp_granularities,
        }
        files = {"file": file_part(file, "audio")}
        return self._upload("audio", "transcriptions", files=files, fields=fields, options=options)

    def translate_audio(
        self,
        file: Any,
        model: str,
        *,
        prompt: Optional[str] = None,
        response_format: Optional[str] = None,
        temperature: Optional[float] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        fields = {
            "model": model,
            "prompt": prompt,
            "response_format": response_format,
            "temperature": temperature,
        }
        files = {"file": file_part(file, "audio")}
        return self._upload("audio", "translations", files=files, fields=fields, options=options)

    def generate_speech(self, request: Dict[str, Any], options: Optional[RequestOptions] = None) -> bytes:
        """Synthesize speech; returns the raw audio bytes."""
        return self._post("audio", "speech", body=request, options=options, expect="bytes")

    # ---- Images ----
    def generate_image(self, request: Dict[str, Any], options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._post("images", "generations", body=request, options=options)

    def edit_image(
        self,
        image: Any,
        prompt: str,
        *,
        mask: Any = None,
        model: Optional[str] = None,
        n: Optional[int] = None,
        size: Optional[str] = None,
        response_format: Optional[str] = None,
        user: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        files = {"image": file_part(image, "image.png")}
        if mask is not None:
            files["mask"] = file_part(mask, "mask.png")
        fields = {
            "prompt": prompt,
            "model": model,
            "n": n,
            "size": size,
            "response_format": response_format,
            "user": user,
        }
        return self._upload("images", "edits", files=files, fields=fields, options=options)

    def create_image_variation(
        self,
        image: Any,
        *,
        model: Optional[str] = None,
        n: Optional[int] = None,
        size: Optional[str] = None,
        response_format: Optional[str] = None,
        user: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        files = {"image": file_part(image, "image.png")}
        fields = {
            "model": model,
            "n": n,
            "size": size,
            "response_format": response_format,
            "user": user,
        }
        return self._upload("images", "variations", files=files, fields=fields, options=options)

    # ---- Embeddings / moderation ----
    def create_embeddings(self, request: Dict[str, Any], options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._post("embeddings", body=request, options=options)

    def create_moderation(self, request: Dict[str, Any], options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._post("moderations", body=request, options=options)


__all__ = ["ZaguanMediaMixin"]
