"""HTTP client for the CodeREADr API.

Security notes:
- Treat server responses as untrusted input.
- Avoid printing or logging the API key or uploaded file bytes.
"""

from .client import CodeReadrClient
from .http import HttpResponse, Transport, UrllibTransport

__all__ = ["CodeReadrClient", "HttpResponse", "Transport", "UrllibTransport"]
