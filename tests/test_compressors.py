"""
Tests for block compressors and CLI configuration loading.
"""

from __future__ import annotations

import sys
from unittest.mock import patch

import pytest

from lzopack.compressors import (
    BACKENDS,
    COMPRESSORS,
    _import_lzo,
    available_compressors,
    get_compressor,
    lzo1x_1,
    store,
)
from lzopack.config import DEFAULT_CONFIG, load_config
from lzopack.errors import CompressorUnavailable, LzopError

try:
    import lzo
    HAS_LZO = True
except ImportError:
    HAS_LZO = False

skip_no_lzo = pytest.mark.skipif(not HAS_LZO, reason="python-lzo not installed")


# ---------------------------------------------------------------------------
# TestCompressors
# ---------------------------------------------------------------------------

class TestCompressors:

    def test_store_is_identity(self):
        assert store(b"abc") == b"abc"
        assert store(b"") == b""

    def test_lookup(self):
        assert get_compressor("store") is store
        assert get_compressor("lzo1x_1") is lzo1x_1

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown compressor"):
            get_compressor("zstd")

    def test_available_lists_all(self):
        available = available_compressors()
        assert set(available) == set(COMPRESSORS)
        assert available["store"] is True
        assert available["lzo1x_1"] is HAS_LZO

    def test_missing_lzo_message(self):
        with patch.dict(sys.modules, {"lzo": None}):
            with pytest.raises(CompressorUnavailable, match=r"pip install lzopack\[lzo\]"):
                lzo1x_1(b"data")
            assert available_compressors()["lzo1x_1"] is False

    def test_unavailable_is_import_error(self):
        with patch.dict(sys.modules, {"lzo": None}):
            with pytest.raises(ImportError):
                _import_lzo()

    def test_unavailable_passes_through_encoder(self):
        from lzopack import compress_data

        with patch.dict(sys.modules, {"lzo": None}):
            with pytest.raises(CompressorUnavailable):
                compress_data(b"abc", "a", lzo1x_1, file_time=0)

    def test_available_uses_backend_probe(self):
        def missing():
            raise CompressorUnavailable("no backend")

        with patch.dict(COMPRESSORS, {"fake": store}), \
                patch.dict(BACKENDS, {"fake": missing}):
            assert available_compressors()["fake"] is False
        with patch.dict(COMPRESSORS, {"plain": store}):
            assert available_compressors()["plain"] is True

    def test_every_compressor_has_backend_entry(self):
        assert set(BACKENDS) == set(COMPRESSORS)

    @skip_no_lzo
    def test_lzo1x_1_raw_output(self):
        data = b"abcabcabcabc" * 1000
        compressed = lzo1x_1(data)
        assert len(compressed) < len(data)
        assert lzo.decompress(compressed, False, len(data)) == data

    @skip_no_lzo
    def test_import_lzo(self):
        assert _import_lzo() is lzo


# ---------------------------------------------------------------------------
# TestConfig
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults_when_missing(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert load_config() == DEFAULT_CONFIG

    def test_explicit_missing_path(self, tmp_path):
        assert load_config(tmp_path / "nope.toml") == DEFAULT_CONFIG

    def test_overlay(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('compressor = "store"\nsuffix = ".lz"\nkeep_mtime = false\n')
        config = load_config(path)
        assert config["compressor"] == "store"
        assert config["suffix"] == ".lz"
        assert config["keep_mtime"] is False
        assert config["log_level"] == DEFAULT_CONFIG["log_level"]

    def test_default_location(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / ".lzopack").mkdir()
        (tmp_path / ".lzopack" / "config.toml").write_text('log_level = "DEBUG"\n')
        assert load_config()["log_level"] == "DEBUG"

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text('bogus = 1\nsuffix = ".x"\n')
        with caplog.at_level("WARNING", logger="lzopack.config"):
            config = load_config(path)
        assert "bogus" not in config
        assert config["suffix"] == ".x"
        assert "unknown config key" in caplog.text

    def test_wrong_type_ignored(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("suffix = 5\n")
        assert load_config(path)["suffix"] == DEFAULT_CONFIG["suffix"]

    def test_malformed_toml(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("this is = = not toml")
        with caplog.at_level("WARNING", logger="lzopack.config"):
            assert load_config(path) == DEFAULT_CONFIG
        assert "Failed to load config" in caplog.text

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('suffix = ".changed"\n')
        load_config(path)
        assert DEFAULT_CONFIG["suffix"] == ".lzo"


def test_error_hierarchy():
    assert issubclass(CompressorUnavailable, LzopError)
