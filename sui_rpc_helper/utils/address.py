import re
import secrets
from typing import Optional

from sui_rpc_helper.utils.constants import SUI_ADDRESS_LENGTH


_LEADING_ZEROS_RE = re.compile(r'0x0+')
_SHORTEN_RE = re.compile(r'0[xX][a-fA-F0-9]+')
_VALID_ADDRESS_RE = re.compile(r'^0x[a-fA-F0-9]{%d}$' % (SUI_ADDRESS_LENGTH * 2))


def remove_leading_zeros(address: str) -> str:
    """
    Remove leading zeros from every Sui address in ``address`` (lossless).

    Works on bare addresses and on type tags, e.g.
    ``'0x0000000000000000000000000000000000000000000000000000000000000002::sui::SUI'``
    becomes ``'0x2::sui::SUI'``.
    """
    return _LEADING_ZEROS_RE.sub('0x', address)


def normalize_sui_address(address: str) -> str:
    """
    Lowercase ``address`` and left-pad it to the full 32-byte hex form.
    """
    address = address.lower()
    if address.startswith('0x'):
        address = address[2:]
    return '0x' + address.rjust(SUI_ADDRESS_LENGTH * 2, '0')


def is_valid_sui_address(address: str) -> bool:
    return bool(_VALID_ADDRESS_RE.match(address))


def validate_and_normalize_sui_address(address: str) -> Optional[str]:
    """
    Validate a Sui address and return its normalized form, or ``None`` if invalid.
    """
    if len(address) == 0:
        return None
    normalized = normalize_sui_address(address)
    if not is_valid_sui_address(normalized):
        return None
    return normalized


def shorten_sui_address(
    text: Optional[str],
    start: int = 4,
    end: int = 4,
    separator: str = '…',
    prefix: str = '0x',
) -> str:
    """
    Abbreviate every address found in ``text`` for display (lossy).

    ``'0x1234000000000000000000000000000000000000000000000000000000005678'``
    becomes ``'0x1234…5678'`` with the default arguments. Addresses too short
    to abbreviate are left untouched.
    """
    if not text:
        return ''

    def _abbreviate(match):
        address = match.group(0)
        if len(address) - len(prefix) <= start + end:
            return address
        return prefix + address[2:2 + start] + separator + address[-end:]

    return _SHORTEN_RE.sub(_abbreviate, text)


def generate_random_address() -> str:
    """
    Generate a random Sui address (for development only).
    """
    return '0x' + secrets.token_hex(SUI_ADDRESS_LENGTH)
