#!/usr/bin/env python
"""Container healthcheck probing the proxy's /health endpoint."""

import json
import os
import sys
from urllib import request, error


def main() -> int:
    host = os.getenv("HEALTHCHECK_HOST", "127.0.0.1")
    port = os.getenv("PORT", "5174")
    target = f"http://{host}:{port}/health"
    try:
        with request.urlopen(target, timeout=5) as resp:
            if resp.status != 200:
                return 1
            return 0 if json.load(resp).get("ok") is True else 1
    except (error.URLError, ValueError):
        return 1


if __name__ == "__main__":
    sys.exit(main())
