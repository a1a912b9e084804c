from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path


def report_filename(name: str, *, now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    timestamp = int(moment.timestamp() * 1000)
    stem = re.sub(r'\s+', '_', str(name or '').strip())
    stem = re.sub(r'[^A-Za-z0-9_.-]', '', stem) or 'Client'
    return f'{stem}_Value_Add_Report_{timestamp}.pdf'


def write_bytes_atomic(path: Path, content: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + '.tmp')
    tmp.write_bytes(content)
    tmp.replace(path)
    return path


def write_text_atomic(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + '.tmp')
    tmp.write_text(content, encoding='utf-8')
    tmp.replace(path)
    return path


def read_text(path: Path) -> str:
    return path.read_text(encoding='utf-8')
