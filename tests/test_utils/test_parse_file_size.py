"""文件大小解析测试"""

import pytest

from ygrid.utils import parse_file_size


class TestParseFileSize:

    @pytest.mark.parametrize("value, expected", [
        ("10MB", 10 * 1024 * 1024),
        ("512kb", 512 * 1024),
        ("2K", 2 * 1024),
        ("1.5GB", int(1.5 * 1024 ** 3)),
        ("100", 100),
        (" 3 M ", 3 * 1024 * 1024),
        (12.8, 12),
        (2048, 2048),
    ])
    def test_parse(self, value, expected):
        assert parse_file_size(value) == expected

    @pytest.mark.parametrize("value", ["", "KB", "abcMB", "ten"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_file_size(value)
