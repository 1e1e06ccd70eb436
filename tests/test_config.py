from pathlib import Path

import pytest

from rpcdoc.config import LOG_LEVEL_ENV, Config, load_config
from rpcdoc.errors import ConfigError
from rpcdoc.pipeline import ExtractionJob
from rpcdoc.types.version import Version


class TestLoadConfig:
    def test_load(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        f = tmp_path / "rpcdoc.yaml"
        f.write_text(
            "log_level: info\n"
            "output: out\n"
            "jobs:\n"
            "  - source: docs/v29\n"
            '    version: "29.1"\n'
            "  - source: /abs/snapshot.json\n"
        )
        config = load_config(f)
        assert config.log_level == "INFO"
        assert config.output == tmp_path / "out"
        assert config.jobs[0].source == tmp_path / "docs" / "v29"
        assert config.jobs[0].version == Version(29, 1)
        assert config.jobs[1].version is None
        assert config.extraction_jobs()[1] == ExtractionJob(Path("/abs/snapshot.json"), None)

    def test_numeric_version(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        f = tmp_path / "rpcdoc.yaml"
        f.write_text("jobs:\n  - source: docs\n    version: 28\n")
        assert load_config(f).jobs[0].version == Version(28)

    def test_empty_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        f = tmp_path / "rpcdoc.yaml"
        f.write_text("")
        config = load_config(f)
        assert config == Config()

    def test_env_overrides_log_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        f = tmp_path / "rpcdoc.yaml"
        f.write_text("log_level: ERROR\n")
        assert load_config(f).log_level == "DEBUG"


class TestConfigErrors:
    @pytest.mark.parametrize("content", [
        "jobs: [unclosed\n",
        "- just\n- a list\n",
        "log_level: LOUD\n",
        "jobs:\n  - version: '29'\n",
        "jobs:\n  - source: docs\n    version: banana\n",
    ])
    def test_invalid(self, tmp_path, monkeypatch, content):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        f = tmp_path / "rpcdoc.yaml"
        f.write_text(content)
        with pytest.raises(ConfigError):
            load_config(f)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")
