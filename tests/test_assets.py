"""Tests for image source resolution, data URIs, and remote fetching."""

from __future__ import annotations

import base64
from unittest.mock import MagicMock, patch

import httpx
import pytest
from PIL import Image

from sermon_art.exceptions import AssetError
from sermon_art.renderer.assets import (
    decode_data_uri,
    detect_mime_type,
    fetch_remote_image,
    image_to_data_uri,
    is_data_uri,
    is_remote,
    load_image_bytes,
    resolve_image_href,
    resolve_public_path,
)


@pytest.fixture
def public_root(tmp_path):
    root = tmp_path / "public"
    (root / "uploads").mkdir(parents=True)
    Image.new("RGB", (4, 4), (255, 0, 0)).save(root / "uploads" / "logo.png")
    (tmp_path / "secret.png").write_bytes(b"\x89PNG\r\n\x1a\nsecret")
    return root


class TestSourceKinds:

    @pytest.mark.parametrize("src,expected", [
        ("data:image/png;base64,AAAA", True),
        ("DATA:image/png,abc", True),
        ("/uploads/logo.png", False),
    ])
    def test_is_data_uri(self, src, expected):
        assert is_data_uri(src) is expected

    @pytest.mark.parametrize("src,expected", [
        ("https://cdn.example.org/a.png", True),
        ("HTTP://cdn.example.org/a.png", True),
        ("ftp://cdn.example.org/a.png", False),
        ("/uploads/logo.png", False),
    ])
    def test_is_remote(self, src, expected):
        assert is_remote(src) is expected


class TestResolvePublicPath:

    def test_leading_slash(self, public_root):
        path = resolve_public_path("/uploads/logo.png", public_root)
        assert path == (public_root / "uploads" / "logo.png").resolve()

    def test_relative(self, public_root):
        assert resolve_public_path("uploads/logo.png", public_root) is not None

    def test_traversal_rejected(self, public_root):
        assert resolve_public_path("/../secret.png", public_root) is None
        assert resolve_public_path("uploads/../../secret.png", public_root) is None

    def test_missing(self, public_root):
        assert resolve_public_path("/uploads/nope.png", public_root) is None

    def test_remote_and_data_skipped(self, public_root):
        assert resolve_public_path("https://x.org/a.png", public_root) is None
        assert resolve_public_path("data:image/png;base64,AAAA", public_root) is None


class TestMime:

    @pytest.mark.parametrize("name,expected", [
        ("a.png", "image/png"),
        ("a.JPG", "image/jpeg"),
        ("a.svg", "image/svg+xml"),
        ("a.webp", "image/webp"),
    ])
    def test_by_suffix(self, tmp_path, name, expected):
        assert detect_mime_type(tmp_path / name, b"") == expected

    def test_by_magic(self, tmp_path):
        assert detect_mime_type(tmp_path / "logo", b"\xff\xd8\xff\xe0rest") == "image/jpeg"
        assert detect_mime_type(tmp_path / "logo", b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"

    def test_unknown(self, tmp_path):
        assert detect_mime_type(tmp_path / "logo", b"????") == "application/octet-stream"


class TestDataUris:

    def test_png_file_inlined(self, public_root):
        uri = image_to_data_uri(public_root / "uploads" / "logo.png")
        assert uri.startswith("data:image/png;base64,")

    def test_tiff_converted_to_png(self, tmp_path):
        path = tmp_path / "scan.tiff"
        Image.new("RGB", (3, 3), (0, 0, 255)).save(path, format="TIFF")
        uri = image_to_data_uri(path)
        assert uri.startswith("data:image/png;base64,")
        raw = base64.b64decode(uri.split(",", 1)[1])
        assert raw.startswith(b"\x89PNG")

    def test_decode_base64(self):
        mime, data = decode_data_uri("data:image/png;base64," + base64.b64encode(b"hello").decode())
        assert (mime, data) == ("image/png", b"hello")

    def test_decode_percent_encoded(self):
        assert decode_data_uri("data:image/svg+xml,%3Csvg%3E") == ("image/svg+xml", b"<svg>")

    def test_decode_rejects_non_uri(self):
        with pytest.raises(AssetError):
            decode_data_uri("/uploads/logo.png")


class TestResolveImageHref:

    def test_local_inlined(self, public_root):
        assert resolve_image_href("/uploads/logo.png", public_root).startswith("data:image/png")

    @pytest.mark.parametrize("src", [
        "/uploads/missing.png",
        "https://cdn.example.org/logo.png",
        "data:image/png;base64,AAAA",
    ])
    def test_passthrough(self, public_root, src):
        assert resolve_image_href(src, public_root) == src


class TestFetchRemoteImage:

    @patch("sermon_art.renderer.assets.httpx.get")
    def test_success(self, mock_get):
        mock_resp = MagicMock()
        mock_resp.content = b"imagebytes"
        mock_resp.raise_for_status = MagicMock()
        mock_get.return_value = mock_resp

        assert fetch_remote_image("https://cdn.example.org/a.png") == b"imagebytes"
        assert mock_get.call_args.kwargs["follow_redirects"] is True

    @patch("sermon_art.renderer.assets.httpx.get")
    def test_http_error(self, mock_get):
        request = httpx.Request("GET", "https://cdn.example.org/a.png")
        mock_resp = MagicMock()
        mock_resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "not found", request=request, response=httpx.Response(404, request=request))
        mock_get.return_value = mock_resp

        with pytest.raises(AssetError, match="HTTP 404"):
            fetch_remote_image("https://cdn.example.org/a.png")

    @patch("sermon_art.renderer.assets.httpx.get")
    def test_network_error(self, mock_get):
        mock_get.side_effect = httpx.ConnectError("refused")
        with pytest.raises(AssetError, match="Network error"):
            fetch_remote_image("https://cdn.example.org/a.png")


class TestLoadImageBytes:

    def test_local(self, public_root):
        assert load_image_bytes("/uploads/logo.png", public_root).startswith(b"\x89PNG")

    def test_data_uri(self):
        assert load_image_bytes("data:text/plain,abc") == b"abc"

    def test_missing_raises(self, public_root):
        with pytest.raises(AssetError):
            load_image_bytes("/uploads/missing.png", public_root)

    @patch("sermon_art.renderer.assets.fetch_remote_image", return_value=b"remote")
    def test_remote(self, mock_fetch):
        assert load_image_bytes("https://cdn.example.org/a.png") == b"remote"
        mock_fetch.assert_called_once_with("https://cdn.example.org/a.png")
