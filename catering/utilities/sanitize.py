"""Input sanitization helpers applied to every free-text field before storage."""
import re
from typing import Iterable, List

_ANGLE_BRACKETS = re.compile(r'[<>]')
_JS_PROTOCOL = re.compile(r'javascript:', re.IGNORECASE)
_EVENT_HANDLER = re.compile(r'on\w+=', re.IGNORECASE)
_HTML_TAG = re.compile(r'<[^>]*>')
_EMAIL_STRIP = re.compile(r'[<>\'"]')
_PHONE_STRIP = re.compile(r'[^\d+\-\s()]')


def text(value: str) -> str:
    """Trim and remove markup-looking fragments from a plain text value."""
    if not isinstance(value, str):
        return ""
    value = value.strip()
    value = _ANGLE_BRACKETS.sub('', value)
    value = _JS_PROTOCOL.sub('', value)
    return _EVENT_HANDLER.sub('', value)


def html(value: str) -> str:
    """Drop every tag, keeping only the text content."""
    if not isinstance(value, str):
        return ""
    return _ANGLE_BRACKETS.sub('', _HTML_TAG.sub('', value))


def email(value: str) -> str:
    if not isinstance(value, str):
        return ""
    return _EMAIL_STRIP.sub('', value.lower().strip())


def phone(value: str) -> str:
    """Keep digits, '+', '-', spaces and parentheses."""
    if not isinstance(value, str):
        return ""
    return _PHONE_STRIP.sub('', value).strip()


def string_array(values: Iterable[str]) -> List[str]:
    cleaned = (text(v) for v in values or [])
    return [v for v in cleaned if v]


__all__ = ['text', 'html', 'email', 'phone', 'string_array']
