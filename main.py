from __future__ import annotations

import argparse
import asyncio
import base64
import json
from pathlib import Path

from pydantic import ValidationError

from valueadd.api import create_app
from valueadd.config import get_settings
from valueadd.errors import ValueAddError
from valueadd.logging_config import setup_logging
from valueadd.service import ReportService, run_report
from valueadd.storage import read_text, report_filename, write_bytes_atomic, write_text_atomic
from valueadd.types import ReportRequest


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _output_path(args: argparse.Namespace, name: str) -> Path:
    if args.output:
        return Path(args.output).expanduser().resolve()
    return Path.cwd() / report_filename(name)


def _load_resume(args: argparse.Namespace) -> tuple[str | None, str | None]:
    resume_text = None
    resume_pdf = None
    if args.resume_text:
        path = Path(args.resume_text).expanduser().resolve()
        if not path.is_file():
            raise FileNotFoundError(f'Resume text not found: {path}')
        resume_text = read_text(path)
    if args.resume_pdf:
        path = Path(args.resume_pdf).expanduser().resolve()
        if not path.is_file():
            raise FileNotFoundError(f'Resume PDF not found: {path}')
        resume_pdf = base64.b64encode(path.read_bytes()).decode('ascii')
    return resume_text, resume_pdf


def cmd_generate(args: argparse.Namespace) -> int:
    try:
        resume_text, resume_pdf = _load_resume(args)
        request = ReportRequest(
            name=args.name,
            email=args.email,
            linkedin_url=args.linkedin,
            resume_text=resume_text,
            resume_pdf=resume_pdf,
        )
    except (FileNotFoundError, ValidationError) as exc:
        _print_json({'status': 'error', 'message': str(exc)})
        return 2

    service = ReportService.from_settings(get_settings())
    try:
        if args.save_text:
            # keep the raw model output next to the PDF for later re-rendering
            text = asyncio.run(service.generate_text(request))
            document = service.render(request.name, request.email, text)
            output = write_bytes_atomic(_output_path(args, request.name), document.content)
            text_path = write_text_atomic(output.with_suffix('.txt'), text)
            _print_json(
                {
                    'status': 'ok',
                    'pdf_path': str(output),
                    'text_path': str(text_path),
                    'page_count': document.page_count,
                }
            )
            return 0
        result = run_report(service, request)
    except ValueAddError as exc:
        _print_json({'status': 'error', 'message': str(exc)})
        return 1

    output = write_bytes_atomic(_output_path(args, request.name), result.pdf_bytes)
    _print_json(
        {
            'status': 'ok',
            'pdf_path': str(output),
            'file_name': result.file_name,
            'page_count': result.page_count,
            'drive_link': result.drive.link if result.drive else None,
            'hubspot_file_id': result.crm.id if result.crm else None,
        }
    )
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    text_path = Path(args.text).expanduser().resolve()
    if not text_path.is_file():
        _print_json({'status': 'error', 'message': f'Report text not found: {text_path}'})
        return 2

    service = ReportService.from_settings(get_settings())
    try:
        document = service.render(args.name, args.email, read_text(text_path))
    except ValueAddError as exc:
        _print_json({'status': 'error', 'message': str(exc)})
        return 1

    output = write_bytes_atomic(_output_path(args, args.name), document.content)
    _print_json({'status': 'ok', 'pdf_path': str(output), 'page_count': document.page_count})
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    host = args.host or settings.server_host
    port = int(args.port or settings.server_port)
    app = create_app()
    app.run(host=host, port=port, debug=False, threaded=True)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Value add PDF report generator')
    parser.add_argument('--log-level', required=False, help='Override LOG_LEVEL')
    sub = parser.add_subparsers(dest='command', required=True)

    generate = sub.add_parser('generate', help='Generate a report with the language model')
    generate.add_argument('--name', required=True, help='Client full name')
    generate.add_argument('--email', required=True, help='Client email')
    generate.add_argument('--linkedin', required=False, help='LinkedIn profile URL')
    generate.add_argument('--resume-text', required=False, help='Path to a plain-text resume')
    generate.add_argument('--resume-pdf', required=False, help='Path to a PDF resume')
    generate.add_argument('--output', required=False, help='Where to write the PDF')
    generate.add_argument(
        '--save-text',
        action='store_true',
        help='Also write the generated text; skips Drive and HubSpot uploads',
    )
    generate.set_defaults(func=cmd_generate)

    render = sub.add_parser('render', help='Lay out an existing report text without calling the model')
    render.add_argument('--text', required=True, help='Path to report text')
    render.add_argument('--name', required=True, help='Client full name')
    render.add_argument('--email', required=True, help='Client email')
    render.add_argument('--output', required=False, help='Where to write the PDF')
    render.set_defaults(func=cmd_render)

    serve = sub.add_parser('serve', help='Run the HTTP service')
    serve.add_argument('--host', required=False)
    serve.add_argument('--port', type=int, required=False)
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level or get_settings().log_level)
    return int(args.func(args))


if __name__ == '__main__':
    raise SystemExit(main())
