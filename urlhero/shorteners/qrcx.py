"""QR.cx (qr.cx)."""

import re

from urlhero.shorteners.shortener import Shortener

Qrcx = Shortener(
    name="qrcx",
    host="qr.cx",
    prefix="http://qr.cx/",
    alphabet="0-9a-z",
    pattern=re.compile(r"^[0-9a-z]+\Z"),
)
