"""Configuration for JLC Parts Engine."""

import os

# Server settings
HTTP_PORT = int(os.getenv("HTTP_PORT", "8080"))
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# jlcsearch catalog endpoint ({base}/{category}/list?...)
JLCSEARCH_BASE_URL = os.getenv("JLCSEARCH_BASE_URL", "https://jlcsearch.tscircuit.com").rstrip("/")

# Request settings
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10.0"))

# Result cache settings (0 = unbounded / never expires)
RESULT_CACHE_MAX_SIZE = int(os.getenv("RESULT_CACHE_MAX_SIZE", "0"))
RESULT_CACHE_TTL = float(os.getenv("RESULT_CACHE_TTL", "0"))

# Resolution output
MAX_RESULTS = 3
SUPPLIER_KEY = "jlcpcb"  # Field name expected by downstream consumers
LCSC_PREFIX = "C"

# Footprint notation
KICAD_PREFIX = "kicad:"
