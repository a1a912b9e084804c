"""Tests for the HubSpot sink."""

from __future__ import annotations

import json

import httpx
import pytest

from valueadd.adapters.hubspot import NOTE_TO_CONTACT_ASSOCIATION_ID, HubSpotConfig, HubSpotSink


PDF = b'%PDF-1.4 report'


class FakeHubSpot:
    """Routes HubSpot API calls and records them."""

    def __init__(
        self,
        *,
        existing_contact: str | None = 'contact-7',
        fail_on: str | None = None,
        html_on: str | None = None,
    ) -> None:
        self.existing_contact = existing_contact
        self.fail_on = fail_on
        self.html_on = html_on
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.fail_on and path == self.fail_on:
            return httpx.Response(500, json={'message': 'boom'})
        if self.html_on and path == self.html_on:
            return httpx.Response(200, text='<html>gateway</html>')
        if path == '/crm/v3/objects/contacts/search':
            results = [{'id': self.existing_contact}] if self.existing_contact else []
            return httpx.Response(200, json={'total': len(results), 'results': results})
        if path == '/crm/v3/objects/contacts':
            return httpx.Response(201, json={'id': 'contact-new'})
        if path == '/files/v3/files':
            return httpx.Response(201, json={'id': 'file-42', 'url': 'https://files.test/file-42'})
        if path == '/crm/v3/objects/notes':
            return httpx.Response(201, json={'id': 'note-5'})
        return httpx.Response(404, json={'message': 'unknown route'})

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def body(self, path: str) -> dict:
        request = next(r for r in self.requests if r.url.path == path)
        return json.loads(request.content)


def make_sink(api: FakeHubSpot, **cfg) -> HubSpotSink:
    config = HubSpotConfig(access_token=cfg.pop('access_token', 'hs-token'), **cfg)
    return HubSpotSink(config, transport=httpx.MockTransport(api))


class TestHubSpotSink:
    @pytest.mark.asyncio
    async def test_existing_contact_flow(self) -> None:
        api = FakeHubSpot()
        result = await make_sink(api).upload(
            'report.pdf',
            PDF,
            email='jane@example.com',
            name='Jane Doe',
            drive_link='https://drive.test/1',
        )

        assert result is not None
        assert (result.id, result.contact_id, result.note_id) == ('file-42', 'contact-7', 'note-5')
        assert api.paths() == [
            '/crm/v3/objects/contacts/search',
            '/files/v3/files',
            '/crm/v3/objects/notes',
        ]
        assert all(r.headers['Authorization'] == 'Bearer hs-token' for r in api.requests)

        search = api.body('/crm/v3/objects/contacts/search')
        assert search['filterGroups'][0]['filters'][0] == {
            'propertyName': 'email',
            'operator': 'EQ',
            'value': 'jane@example.com',
        }

        note = api.body('/crm/v3/objects/notes')
        assert note['properties']['hs_attachment_ids'] == 'file-42'
        assert 'https://drive.test/1' in note['properties']['hs_note_body']
        association = note['associations'][0]
        assert association['to'] == {'id': 'contact-7'}
        assert association['types'][0]['associationTypeId'] == NOTE_TO_CONTACT_ASSOCIATION_ID

    @pytest.mark.asyncio
    async def test_file_upload_is_private_multipart(self) -> None:
        api = FakeHubSpot()
        await make_sink(api, folder_path='/reports').upload('report.pdf', PDF, email='jane@example.com')

        upload = next(r for r in api.requests if r.url.path == '/files/v3/files')
        assert upload.headers['Content-Type'].startswith('multipart/form-data')
        body = upload.content
        assert PDF in body
        assert b'"access": "PRIVATE"' in body
        assert b'/reports' in body

    @pytest.mark.asyncio
    async def test_creates_missing_contact(self) -> None:
        api = FakeHubSpot(existing_contact=None)
        result = await make_sink(api).upload('report.pdf', PDF, email='new@example.com', name='Ada Lovelace')

        assert result is not None
        assert result.contact_id == 'contact-new'
        created = api.body('/crm/v3/objects/contacts')
        assert created['properties'] == {'email': 'new@example.com', 'firstname': 'Ada', 'lastname': 'Lovelace'}

    @pytest.mark.asyncio
    async def test_missing_contact_without_creation_leaves_file_unattached(self) -> None:
        api = FakeHubSpot(existing_contact=None)
        sink = make_sink(api, create_missing_contact=False)
        result = await sink.upload('report.pdf', PDF, email='new@example.com')

        assert result is not None
        assert result.contact_id is None
        assert result.note_id is None
        assert '/crm/v3/objects/notes' not in api.paths()

    @pytest.mark.asyncio
    async def test_api_failure_returns_none(self) -> None:
        api = FakeHubSpot(fail_on='/files/v3/files')
        assert await make_sink(api).upload('report.pdf', PDF, email='jane@example.com') is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'path',
        ['/crm/v3/objects/contacts/search', '/files/v3/files', '/crm/v3/objects/notes'],
    )
    async def test_non_json_success_returns_none(self, path: str) -> None:
        api = FakeHubSpot(html_on=path)
        assert await make_sink(api).upload('report.pdf', PDF, email='jane@example.com') is None
        assert api.paths()[-1] == path

    @pytest.mark.asyncio
    async def test_unconfigured_skips(self) -> None:
        api = FakeHubSpot()
        sink = make_sink(api, access_token=None)
        assert await sink.upload('report.pdf', PDF, email='jane@example.com') is None
        assert api.requests == []
