"""
Google Drive upload using httpx.

Uploads the finished report into a folder with a single multipart/related
request and returns the file id and its web view link.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass

import httpx

from valueadd.errors import UploadError
from valueadd.types import DriveUpload


logger = logging.getLogger(__name__)

DRIVE_UPLOAD_URL = 'https://www.googleapis.com/upload/drive/v3/files'


@dataclass
class DriveConfig:
    access_token: str | None
    folder_id: str | None
    timeout_seconds: int = 60


def build_multipart_body(metadata: dict, content: bytes, *, mime_type: str, boundary: str) -> bytes:
    parts = [
        f'--{boundary}\r\n'.encode('ascii'),
        b'Content-Type: application/json; charset=UTF-8\r\n\r\n',
        json.dumps(metadata).encode('utf-8'),
        b'\r\n',
        f'--{boundary}\r\n'.encode('ascii'),
        f'Content-Type: {mime_type}\r\n\r\n'.encode('ascii'),
        content,
        b'\r\n',
        f'--{boundary}--\r\n'.encode('ascii'),
    ]
    return b''.join(parts)


class GoogleDriveSink:
    def __init__(self, cfg: DriveConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.cfg.access_token and self.cfg.folder_id)

    async def upload(self, file_name: str, content: bytes) -> DriveUpload | None:
        """Upload a PDF; returns None when unconfigured or when the upload fails."""
        if not self.configured:
            logger.info('Google Drive is not configured; skipping upload of %s', file_name)
            return None
        try:
            uploaded = await self._upload(file_name, content)
        except (UploadError, httpx.HTTPError) as exc:
            logger.warning('Google Drive upload of %s failed: %s', file_name, exc)
            return None
        logger.info('Uploaded %s to Google Drive as %s', file_name, uploaded.id)
        return uploaded

    async def _upload(self, file_name: str, content: bytes) -> DriveUpload:
        boundary = f'valueadd-{uuid.uuid4().hex}'
        metadata = {
            'name': file_name,
            'mimeType': 'application/pdf',
            'parents': [self.cfg.folder_id],
        }
        body = build_multipart_body(metadata, content, mime_type='application/pdf', boundary=boundary)
        headers = {
            'Authorization': f'Bearer {self.cfg.access_token}',
            'Content-Type': f'multipart/related; boundary={boundary}',
        }
        params = {'uploadType': 'multipart', 'fields': 'id,webViewLink'}

        async with httpx.AsyncClient(
            timeout=max(20, int(self.cfg.timeout_seconds)),
            transport=self._transport,
        ) as client:
            response = await client.post(DRIVE_UPLOAD_URL, params=params, headers=headers, content=body)

        if response.status_code == 401:
            raise UploadError('Google Drive access token expired', status_code=401)
        if response.status_code >= 400:
            raise UploadError(
                f'Drive API error {response.status_code}: {response.text[:300]}',
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UploadError(f'Drive API returned a non-JSON response: {response.text[:300]}') from exc
        if not isinstance(data, dict):
            raise UploadError('Drive API returned an unexpected response')
        file_id = str(data.get('id') or '').strip()
        if not file_id:
            raise UploadError('Drive API response did not include a file id')
        return DriveUpload(id=file_id, link=data.get('webViewLink'))
