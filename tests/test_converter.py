import pytest
import requests

from form_filler.config import ConversionConfig
from form_filler.domain.exceptions import ConversionError
from form_filler.services.converter import XfaConverter


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, content=b"", text=""):
        self.status_code = status_code
        self._json_data = json_data
        self.content = content
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_data is None:
            raise ValueError("no json")
        return self._json_data


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def conversion_config():
    return ConversionConfig(api_key="secret-key", base_url="https://pdf.example.com/")


def test_convert_uploads_then_downloads(conversion_config):
    session = FakeSession([
        FakeResponse(json_data={"outputUrl": "https://pdf.example.com/resource/abc"}),
        FakeResponse(content=b"%PDF-converted"),
    ])
    converter = XfaConverter(conversion_config, session=session)

    assert converter.convert(b"%PDF-xfa", "form.pdf") == b"%PDF-converted"

    (upload_method, upload_url, upload_kwargs), (get_method, get_url, get_kwargs) = session.calls
    assert upload_method == "POST"
    assert upload_url == "https://pdf.example.com/pdf-with-acroforms"
    assert upload_kwargs["headers"] == {"Api-Key": "secret-key"}
    assert upload_kwargs["files"]["file"] == ("form.pdf", b"%PDF-xfa", "application/pdf")
    assert upload_kwargs["timeout"] is None
    assert get_method == "GET"
    assert get_url == "https://pdf.example.com/resource/abc"
    assert get_kwargs["headers"] == {"Api-Key": "secret-key"}


def test_upload_failure_raises_with_status(conversion_config):
    session = FakeSession([FakeResponse(status_code=401, text="Invalid API key")])
    converter = XfaConverter(conversion_config, session=session)

    with pytest.raises(ConversionError) as exc:
        converter.convert(b"%PDF")

    assert exc.value.status_code == 401
    assert exc.value.message == "Invalid API key"
    assert str(exc.value) == "API Error (401): Invalid API key"
    assert len(session.calls) == 1


def test_download_failure_raises_with_status(conversion_config):
    session = FakeSession([
        FakeResponse(json_data={"outputUrl": "https://pdf.example.com/resource/abc"}),
        FakeResponse(status_code=404, text="Not found"),
    ])

    with pytest.raises(ConversionError) as exc:
        XfaConverter(conversion_config, session=session).convert(b"%PDF")
    assert exc.value.status_code == 404


def test_missing_output_url(conversion_config):
    session = FakeSession([FakeResponse(json_data={"message": "queued"})])

    with pytest.raises(ConversionError) as exc:
        XfaConverter(conversion_config, session=session).convert(b"%PDF")
    assert "outputUrl" in exc.value.message


def test_non_json_upload_response(conversion_config):
    session = FakeSession([FakeResponse(text="<html>")])

    with pytest.raises(ConversionError):
        XfaConverter(conversion_config, session=session).convert(b"%PDF")


def test_transport_error_has_no_status(conversion_config):
    session = FakeSession([requests.ConnectionError("connection refused")])

    with pytest.raises(ConversionError) as exc:
        XfaConverter(conversion_config, session=session).convert(b"%PDF")
    assert exc.value.status_code is None
    assert str(exc.value).startswith("Error during conversion:")


def test_timeout_is_passed_through():
    session = FakeSession([
        FakeResponse(json_data={"outputUrl": "https://x/out"}),
        FakeResponse(content=b"%PDF"),
    ])
    converter = XfaConverter(ConversionConfig(api_key="k", timeout=12.5), session=session)
    converter.convert(b"%PDF")
    assert all(kwargs["timeout"] == 12.5 for _, _, kwargs in session.calls)
