from __future__ import annotations

import re
import unicodedata


_CONTROL_PATTERN = re.compile(r'[\u0000-\u0009\u000b-\u001f]')
_C1_PATTERN = re.compile(r'[\u007f-\u00a0]')
_SEPARATOR_PATTERN = re.compile(r'[\u2028\u2029]')

_TYPOGRAPHY_REPLACEMENTS: dict[str, str] = {
    # dashes and hyphen variants
    '‐': '-',
    '‑': '-',
    '‒': '-',
    '–': '-',
    '—': '-',
    '―': '-',
    '−': '-',
    # quotes
    '‘': "'",
    '’': "'",
    '‚': "'",
    '‛': "'",
    '′': "'",
    '“': '"',
    '”': '"',
    '„': '"',
    '‟': '"',
    '″': '"',
    '«': '"',
    '»': '"',
    '…': '...',
    '•': '*',
    '◦': '*',
    '▪': '*',
    '‣': '*',
    '●': '*',
    '■': '*',
    '▸': '*',
    # math and comparison
    '≥': '>=',
    '≤': '<=',
    '±': '+/-',
    '≠': '!=',
    '×': 'x',
    '÷': '/',
    # arrows
    '→': '->',
    '←': '<-',
    '↑': '^',
    '↓': 'v',
    '↔': '<->',
    # currency
    '€': 'EUR',
    '£': 'GBP',
    '¥': 'JPY',
    '₹': 'INR',
    '₩': 'KRW',
    '₽': 'RUB',
    '₺': 'TRY',
    '₦': 'NGN',
    # marks
    '©': '(c)',
    '®': '(R)',
    '™': '(TM)',
}

_TYPOGRAPHY_PATTERN = re.compile('|'.join(re.escape(ch) for ch in _TYPOGRAPHY_REPLACEMENTS))


def _to_printable_ascii(value: str) -> str:
    normalized = unicodedata.normalize('NFKD', value)
    return ''.join(ch for ch in normalized if ch == '\n' or ' ' <= ch <= '~')


def sanitize(text: str) -> str:
    """Reduce arbitrary text to printable ASCII plus newlines.

    Control characters become spaces, typographic glyphs are mapped to ASCII
    spellings, and whatever is still non-ASCII after NFKD decomposition is
    dropped. Applying it twice gives the same result as applying it once.
    """
    value = str(text or '')
    if not value:
        return ''
    value = value.replace('\r\n', '\n').replace('\r', '\n')
    value = _CONTROL_PATTERN.sub(' ', value)
    value = _C1_PATTERN.sub(' ', value)
    value = _SEPARATOR_PATTERN.sub(' ', value)
    value = _TYPOGRAPHY_PATTERN.sub(lambda match: _TYPOGRAPHY_REPLACEMENTS[match.group(0)], value)
    return _to_printable_ascii(value)
