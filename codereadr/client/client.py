from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel

from codereadr.client.http import Transport, UrllibTransport
from codereadr.config import ClientConfig
from codereadr.protocol.decoding import decode_response
from codereadr.protocol.encoding import FilePayload, encode_request

log = logging.getLogger("codereadr.client")

M = TypeVar("M", bound=BaseModel)


class CodeReadrClient:
    """Client for the CodeREADr action API.

    Each call is independent: parameters, body and response buffer are built
    per call, and the only state held here is the read-only config and
    transport. Safe to share between threads.

    Nothing is retried. Transport, decode and API failures are raised to the
    caller as TransportError, DecodeError and ApiError.
    """

    def __init__(self, config: ClientConfig, *, transport: Optional[Transport] = None):
        self.config = config
        self.transport = transport or UrllibTransport(timeout_sec=config.timeout_sec)

    @classmethod
    def from_api_key(cls, api_key: str, **kwargs: Any) -> "CodeReadrClient":
        return cls(ClientConfig(api_key=api_key), **kwargs)

    def call(
        self,
        section: Any,
        action: Any,
        parameters: Optional[Mapping[Any, Any]] = None,
        *,
        shape: Optional[Type[M]] = None,
    ) -> Optional[M]:
        """Run one API action.

        Args:
          section: a Section member or raw section name
          action: an Action member or raw action name (not validated)
          parameters: field values; wrap a value in FilePayload to send it
            as a file part
          shape: result model to decode into; None skips typed decoding

        Returns:
          An instance of `shape`, or None when no shape was given.
        """

        body, content_type = encode_request(self.config.api_key, section, action, parameters)
        response = self.transport(self.config.api_url, body, content_type)

        params = parameters or {}
        log.debug(
            "codereadr_call",
            extra={
                "section": getattr(section, "value", section),
                "action": getattr(action, "value", action),
                "fields": sorted(str(k) for k, v in params.items() if not isinstance(v, FilePayload)),
                "files": sorted(str(k) for k, v in params.items() if isinstance(v, FilePayload)),
                "http_status": response.status,
                "response_bytes": len(response.body_bytes),
            },
        )
        return decode_response(response.body_bytes, shape)
