"""In-memory Drive and HubSpot sinks."""

from __future__ import annotations

from valueadd.types import CrmUpload, DriveUpload


class FakeDriveSink:
    def __init__(self, *, result: DriveUpload | None = None) -> None:
        self.result = result if result is not None else DriveUpload(id='drive-1', link='https://drive.test/drive-1')
        self.uploads: list[tuple[str, bytes]] = []

    async def upload(self, file_name: str, content: bytes) -> DriveUpload | None:
        self.uploads.append((file_name, content))
        return self.result


class FakeCrmSink:
    def __init__(self, *, result: CrmUpload | None = None) -> None:
        self.result = result if result is not None else CrmUpload(id='file-9', contact_id='c-1', note_id='n-1')
        self.uploads: list[dict] = []

    async def upload(
        self,
        file_name: str,
        content: bytes,
        *,
        email: str,
        name: str = '',
        drive_link: str | None = None,
    ) -> CrmUpload | None:
        self.uploads.append(
            {'file_name': file_name, 'content': content, 'email': email, 'name': name, 'drive_link': drive_link}
        )
        return self.result
