"""Unit tests for storage endpoint helpers."""

import pytest

from src.storage.endpoints import get_file_endpoint


class TestFileEndpoint:

    def test_public_cloud(self):
        assert get_file_endpoint("core.windows.net", "mystorage") == "https://mystorage.file.core.windows.net"

    def test_sovereign_cloud(self):
        assert (
            get_file_endpoint("core.chinacloudapi.cn", "mystorage")
            == "https://mystorage.file.core.chinacloudapi.cn"
        )

    @pytest.mark.parametrize(
        "base_uri",
        [".core.windows.net", "core.windows.net/", "https://core.windows.net", " core.windows.net "],
    )
    def test_base_uri_is_normalized(self, base_uri):
        assert get_file_endpoint(base_uri, "acct") == "https://acct.file.core.windows.net"

