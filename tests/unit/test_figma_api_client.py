"""
Unit tests for the Figma API client
"""

import pytest
import os
import sys
from unittest.mock import Mock, patch

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from figma_api.client import FigmaApi, encode_params
from figma_api.errors import FigmaApiError


def make_response(status_code=200, body=None, json_error=None):
    response = Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


class TestFigmaApiInit:
    """Construction and credentials"""

    def test_init_with_token(self):
        api = FigmaApi(token="pat", session=Mock())
        assert api.token == "pat"
        assert api.base_url == "https://api.figma.com/v1"

    def test_init_with_env_var(self):
        with patch.dict(os.environ, {"FIGMA_TOKEN": "env_pat"}):
            api = FigmaApi(session=Mock())
            assert api.token == "env_pat"

    def test_init_no_token(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="Figma access token is required"):
                FigmaApi(session=Mock())

    def test_base_url_trailing_slash_stripped(self):
        api = FigmaApi(token="pat", session=Mock(), base_url="http://localhost:9000/v1/")
        assert api.build_url("files/abc") == "http://localhost:9000/v1/files/abc"


class TestEncodeParams:
    """Query-string serialization"""

    def test_empty(self):
        assert encode_params(None) == ""
        assert encode_params({}) == ""

    def test_lists_are_comma_joined(self):
        qs = encode_params({"ids": ["1:2", "1:3"], "format": "png", "scale": 2})
        assert qs == "ids=1%3A2%2C1%3A3&format=png&scale=2"

    def test_integral_float_scale(self):
        assert encode_params({"scale": 2.0}) == "scale=2"
        assert encode_params({"scale": 1.5}) == "scale=1.5"

    def test_none_values_dropped(self):
        assert encode_params({"a": None, "b": "x"}) == "b=x"


class TestFigmaApiGet:
    """Request / response handling"""

    def test_get_success_sends_token_header(self):
        session = Mock()
        session.get.return_value = make_response(200, {"document": {"id": "0:0"}})
        api = FigmaApi(token="pat", session=session, timeout=5.0)

        body = api.get("files/KEY")

        assert body == {"document": {"id": "0:0"}}
        session.get.assert_called_once_with(
            "https://api.figma.com/v1/files/KEY",
            headers={"X-Figma-Token": "pat"},
            timeout=5.0,
        )

    def test_get_with_params_builds_query(self):
        session = Mock()
        session.get.return_value = make_response(200, {"images": {}})
        api = FigmaApi(token="pat", session=session)

        api.get("images/KEY", {"ids": ["1:2"], "format": "svg", "scale": 1})

        url = session.get.call_args[0][0]
        assert url == "https://api.figma.com/v1/images/KEY?ids=1%3A2&format=svg&scale=1"

    def test_http_error_includes_remote_detail(self):
        session = Mock()
        session.get.return_value = make_response(403, {"status": 403, "err": "Invalid token"})
        api = FigmaApi(token="bad", session=session)

        with pytest.raises(FigmaApiError) as exc:
            api.get("files/KEY")

        assert exc.value.status_code == 403
        assert exc.value.detail == "Invalid token"
        assert str(exc.value) == "HTTP error 403 accessing Figma. Invalid token"

    def test_http_error_message_field(self):
        session = Mock()
        session.get.return_value = make_response(404, {"status": 404, "message": "Not found"})
        api = FigmaApi(token="pat", session=session)

        with pytest.raises(FigmaApiError, match="404 accessing Figma. Not found"):
            api.get("files/missing")

    def test_http_error_with_undecodable_body(self):
        session = Mock()
        session.get.return_value = make_response(502, json_error=ValueError("not json"))
        api = FigmaApi(token="pat", session=session)

        with pytest.raises(FigmaApiError) as exc:
            api.get("files/KEY")

        assert exc.value.status_code == 502
        assert exc.value.detail is None
        assert str(exc.value) == "HTTP error 502 accessing Figma."

    def test_status_below_400_is_success(self):
        session = Mock()
        session.get.return_value = make_response(304, {"ok": True})
        api = FigmaApi(token="pat", session=session)

        assert api.get("files/KEY") == {"ok": True}
