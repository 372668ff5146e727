"""Small wrapper around :func:`urllib.request.urlopen` with headers."""

from __future__ import annotations

import json
from http.client import HTTPException
from typing import Dict, Optional
from urllib import parse as urllib_parse
from urllib import request as urllib_request

# Everything a lookup may raise on a dead, slow or misbehaving upstream.
# URLError, HTTPError, timeouts and TLS errors are all OSError subclasses;
# LookupError covers an unknown charset announced by the server.
TRANSPORT_ERRORS = (OSError, HTTPException, ValueError, LookupError)


class HTTPClient:
    """Issue GET requests and hand back JSON or raw bytes."""

    _DEFAULT_HEADERS = {"User-Agent": "PujaLocator/1.0 (+https://github.com/)"}

    def get_json(self, url: str, params: Dict[str, object], timeout: float) -> Dict[str, object]:
        data, charset = self.get_bytes(url, params, timeout)
        return json.loads(data.decode(charset or "utf-8"))

    def get_bytes(
        self, url: str, params: Dict[str, object], timeout: float
    ) -> tuple[bytes, Optional[str]]:
        """Return the response body and the charset announced by the server."""

        full_url = f"{url}?{urllib_parse.urlencode(params)}" if params else url
        request = urllib_request.Request(full_url, headers=self._DEFAULT_HEADERS)
        with urllib_request.urlopen(request, timeout=timeout) as response:
            data = response.read()
            charset = response.headers.get_content_charset()
        return data, charset
