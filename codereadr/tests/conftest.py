from __future__ import annotations

from xml.sax.saxutils import escape

import pytest
from fastapi import FastAPI
from fastapi.responses import Response as FastAPIResponse
from fastapi.testclient import TestClient
from starlette.datastructures import UploadFile
from starlette.requests import Request

from codereadr.client.http import HttpResponse


def _create_echo_app() -> FastAPI:
    """A server that reports back exactly what its multipart parser saw."""

    app = FastAPI()

    @app.post("/api/form")
    async def echo_form(request: Request):
        form = await request.form()
        fields = []
        files = []
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                files.append([key, value.filename, (await value.read()).decode("utf-8")])
            else:
                fields.append([key, value])
        return {"fields": fields, "files": files}

    @app.post("/api/")
    async def echo_xml(request: Request):
        form = await request.form()
        xml = (
            "<?xml version='1.0' encoding='UTF-8'?>\n"
            "<xml><status>1</status>"
            f"<api_key>{escape(str(form.get('api_key')))}</api_key>"
            f"<section>{escape(str(form.get('section')))}</section>"
            f"<action>{escape(str(form.get('action')))}</action>"
            "</xml>"
        )
        return FastAPIResponse(content=xml, media_type="application/xml")

    return app


@pytest.fixture()
def echo_client() -> TestClient:
    return TestClient(_create_echo_app())


@pytest.fixture()
def echo_transport(echo_client: TestClient):
    """Transport that posts into the in-process echo app."""

    def send(url: str, body: bytes, content_type: str) -> HttpResponse:
        r = echo_client.post(url, content=body, headers={"Content-Type": content_type})
        return HttpResponse(status=r.status_code, headers=dict(r.headers), body_bytes=r.content)

    return send


class RecordingTransport:
    """Returns a canned body and keeps every request it was given."""

    def __init__(self, body: bytes, status: int = 200):
        self.body = body
        self.status = status
        self.requests = []

    def __call__(self, url: str, body: bytes, content_type: str) -> HttpResponse:
        self.requests.append((url, body, content_type))
        return HttpResponse(status=self.status, headers={}, body_bytes=self.body)


@pytest.fixture()
def canned_transport():
    """Factory for RecordingTransport instances."""

    return RecordingTransport
