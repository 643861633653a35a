"""QR code rendering for guest links.

The matrix comes from ``qrcode``; the SVG is written by hand as a single path
so it can be inlined into the admin page without an image file.
"""

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError

from .exceptions import CodeEncodingError

DEFAULT_BORDER = 4


def encode_matrix(text: str) -> list[list[bool]]:
    """Return the module matrix for ``text`` without a quiet zone.

    Uses error correction level M and the smallest version that fits.
    """
    qr = qrcode.QRCode(version=None, error_correction=ERROR_CORRECT_M, border=0)
    qr.add_data(text)
    try:
        qr.make(fit=True)
    except DataOverflowError as exc:
        raise CodeEncodingError(
            f"Text of length {len(text)} does not fit in a QR code"
        ) from exc
    return [[bool(module) for module in row] for row in qr.get_matrix()]


def to_svg(matrix: list[list[bool]], border: int = DEFAULT_BORDER) -> str:
    size = len(matrix)
    width = size + border * 2
    parts = [
        '<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
        f'viewBox="0 0 {width} {width}" stroke="none">',
        '<rect width="100%" height="100%" fill="#FFFFFF"/>',
        '<path d="',
    ]
    for y, row in enumerate(matrix):
        for x, dark in enumerate(row):
            if dark:
                parts.append(f"M{x + border},{y + border}h1v1h-1z ")
    parts.append('" fill="#000000"/></svg>')
    return "".join(parts)


def encode_svg(text: str, border: int = DEFAULT_BORDER) -> str:
    return to_svg(encode_matrix(text), border=border)
