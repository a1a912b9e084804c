from __future__ import annotations

import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'INFO') -> None:
    resolved = getattr(logging, str(level or 'INFO').upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger('valueadd').setLevel(resolved)
    # request-level chatter from the HTTP clients
    logging.getLogger('httpx').setLevel(max(resolved, logging.WARNING))
