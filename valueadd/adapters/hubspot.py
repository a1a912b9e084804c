from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from valueadd.errors import UploadError
from valueadd.types import CrmUpload


logger = logging.getLogger(__name__)

# HubSpot-defined association type: note -> contact
NOTE_TO_CONTACT_ASSOCIATION_ID = 202


@dataclass
class HubSpotConfig:
    access_token: str | None
    base_url: str = 'https://api.hubapi.com'
    folder_path: str = '/value-add-reports'
    create_missing_contact: bool = True
    timeout_seconds: int = 60


def _split_name(name: str) -> tuple[str, str]:
    parts = str(name or '').split()
    if not parts:
        return '', ''
    return parts[0], ' '.join(parts[1:])


class HubSpotSink:
    """Attaches generated reports to the matching HubSpot contact."""

    def __init__(self, cfg: HubSpotConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.cfg.access_token)

    async def upload(
        self,
        file_name: str,
        content: bytes,
        *,
        email: str,
        name: str = '',
        drive_link: str | None = None,
    ) -> CrmUpload | None:
        if not self.configured:
            logger.info('HubSpot is not configured; skipping upload of %s', file_name)
            return None
        try:
            async with self._client() as client:
                contact_id = await self._find_contact(client, email)
                if contact_id is None and self.cfg.create_missing_contact:
                    contact_id = await self._create_contact(client, email=email, name=name)
                file_id = await self._upload_file(client, file_name, content)
                note_id = None
                if contact_id is not None:
                    note_id = await self._attach_note(
                        client,
                        contact_id=contact_id,
                        file_id=file_id,
                        file_name=file_name,
                        drive_link=drive_link,
                    )
                else:
                    logger.warning('No HubSpot contact for %s; file %s left unattached', email, file_id)
        except (UploadError, httpx.HTTPError) as exc:
            logger.warning('HubSpot upload of %s failed: %s', file_name, exc)
            return None

        logger.info('Uploaded %s to HubSpot as %s (contact=%s)', file_name, file_id, contact_id)
        return CrmUpload(id=file_id, contact_id=contact_id, note_id=note_id)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.cfg.base_url.rstrip('/'),
            headers={'Authorization': f'Bearer {self.cfg.access_token}'},
            timeout=max(20, int(self.cfg.timeout_seconds)),
            transport=self._transport,
        )

    @staticmethod
    def _checked(response: httpx.Response, action: str) -> dict:
        if response.status_code >= 400:
            raise UploadError(
                f'HubSpot {action} failed with {response.status_code}: {response.text[:300]}',
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise UploadError(f'HubSpot {action} returned a non-JSON response: {response.text[:300]}') from exc
        if not isinstance(data, dict):
            raise UploadError(f'HubSpot {action} returned an unexpected response')
        return data

    async def _find_contact(self, client: httpx.AsyncClient, email: str) -> str | None:
        payload = {
            'filterGroups': [
                {'filters': [{'propertyName': 'email', 'operator': 'EQ', 'value': email}]},
            ],
            'properties': ['email', 'firstname', 'lastname'],
            'limit': 1,
        }
        response = await client.post('/crm/v3/objects/contacts/search', json=payload)
        data = self._checked(response, 'contact search')
        results = data.get('results') or []
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            return None
        return str(results[0].get('id'))

    async def _create_contact(self, client: httpx.AsyncClient, *, email: str, name: str) -> str:
        first, last = _split_name(name)
        payload = {'properties': {'email': email, 'firstname': first, 'lastname': last}}
        response = await client.post('/crm/v3/objects/contacts', json=payload)
        data = self._checked(response, 'contact creation')
        logger.info('Created HubSpot contact %s for %s', data.get('id'), email)
        return str(data.get('id'))

    async def _upload_file(self, client: httpx.AsyncClient, file_name: str, content: bytes) -> str:
        options = {'access': 'PRIVATE', 'overwrite': True}
        response = await client.post(
            '/files/v3/files',
            files={'file': (file_name, content, 'application/pdf')},
            data={
                'fileName': file_name,
                'folderPath': self.cfg.folder_path,
                'options': json.dumps(options),
            },
        )
        data = self._checked(response, 'file upload')
        file_id = str(data.get('id') or '').strip()
        if not file_id:
            raise UploadError('HubSpot file upload response did not include a file id')
        return file_id

    async def _attach_note(
        self,
        client: httpx.AsyncClient,
        *,
        contact_id: str,
        file_id: str,
        file_name: str,
        drive_link: str | None,
    ) -> str:
        body = f'Value add report: {file_name}'
        if drive_link:
            body += f'<br/>Google Drive: {drive_link}'
        payload = {
            'properties': {
                'hs_timestamp': datetime.now(timezone.utc).isoformat(),
                'hs_note_body': body,
                'hs_attachment_ids': file_id,
            },
            'associations': [
                {
                    'to': {'id': contact_id},
                    'types': [
                        {
                            'associationCategory': 'HUBSPOT_DEFINED',
                            'associationTypeId': NOTE_TO_CONTACT_ASSOCIATION_ID,
                        }
                    ],
                }
            ],
        }
        response = await client.post('/crm/v3/objects/notes', json=payload)
        data = self._checked(response, 'note creation')
        return str(data.get('id'))
