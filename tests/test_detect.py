from pathlib import Path

from rpcdoc.parser.detect import detect_format

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_directory(self):
        assert detect_format(FIXTURES / "docs") == "helpdir"

    def test_json_snapshot(self):
        assert detect_format(FIXTURES / "snapshot.json") == "bulk"

    def test_yaml_snapshot(self, tmp_path):
        f = tmp_path / "snapshot.yaml"
        f.write_text("getx:\n  description: Does x.\n")
        assert detect_format(f) == "bulk"

    def test_help_text(self):
        assert detect_format(FIXTURES / "docs" / "getblockcount.txt") == "helptext"
        assert detect_format(FIXTURES / "docs" / "sendtoaddress.txt") == "helptext"

    def test_plain_prose(self, tmp_path):
        f = tmp_path / "stop.txt"
        f.write_text("stop\n\nRequest a graceful shutdown.\n")
        assert detect_format(f) == "helptext"

    def test_empty_snapshot(self, tmp_path):
        f = tmp_path / "empty.json"
        f.write_text("{}")
        assert detect_format(f) == "bulk"
