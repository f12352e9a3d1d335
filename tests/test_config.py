"""Tests for config file parsing."""

from pathlib import Path

from daybook.config import DATA_DIR, Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")

        assert config == Config()
        assert config.db_path == DATA_DIR / "journal.db"
        assert config.recent_entries_limit == 50
        assert config.log_level == "WARNING"

    def test_parses_values(self, tmp_path):
        conf = tmp_path / "daybook.conf"
        conf.write_text(
            "\n".join(
                [
                    "# Daybook settings",
                    'DB_PATH="~/journals/daybook.db"  # quoted',
                    "RECENT_ENTRIES_LIMIT=20 # inline comment",
                    "log_level = info",
                    "not a setting",
                    "UNKNOWN_KEY=ignored",
                ]
            )
        )
        config = load_config(conf)

        assert config.db_path == Path.home() / "journals" / "daybook.db"
        assert config.recent_entries_limit == 20
        assert config.log_level == "INFO"

    def test_invalid_values_keep_defaults(self, tmp_path, caplog):
        conf = tmp_path / "daybook.conf"
        conf.write_text("RECENT_ENTRIES_LIMIT=lots\nLOG_LEVEL=loud\n")
        config = load_config(conf)

        assert config.recent_entries_limit == 50
        assert config.log_level == "WARNING"
        assert "Invalid RECENT_ENTRIES_LIMIT" in caplog.text
        assert "Unknown LOG_LEVEL" in caplog.text

    def test_single_quoted_value(self, tmp_path):
        conf = tmp_path / "daybook.conf"
        conf.write_text("DB_PATH='/tmp/a#b.db'\n")
        assert load_config(conf).db_path == Path("/tmp/a#b.db")
