"""
Модульные тесты для retail_barcode/__init__.py
Тестирует метаданные, логирование, загрузку конфигурации и публичный API.
"""

import json
import logging
import re
from pathlib import Path

import pytest

import retail_barcode


class TestVersionMetadata:
    """Тестирование метаданных версии."""

    def test_version_format(self) -> None:
        """Проверить, что __version__ следует семантическому версионированию."""
        assert re.match(r"^\d+\.\d+\.\d+$", retail_barcode.__version__)

    def test_version_components(self) -> None:
        """Проверить, что компоненты версии соответствуют __version__."""
        expected = (
            f"{retail_barcode.VERSION_MAJOR}."
            f"{retail_barcode.VERSION_MINOR}."
            f"{retail_barcode.VERSION_PATCH}"
        )
        assert retail_barcode.__version__ == expected

    def test_metadata_attributes(self) -> None:
        for name in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(retail_barcode, name)
            assert isinstance(value, str) and value, f"{name} должен быть непустой строкой"


class TestPublicAPI:
    """Тестирование экспортов публичного API."""

    def test_all_exports_exist(self) -> None:
        for name in retail_barcode.__all__:
            assert hasattr(retail_barcode, name), f"Имя '{name}' из __all__ не существует"

    def test_generate_from_package_root(self) -> None:
        response = retail_barcode.generate_barcode({"code": "03600029145", "type": "upc-a"})
        assert response["code"] == "036000291452"


class TestLogging:
    """Тестирование конфигурации логирования."""

    def test_package_logger_has_single_handler(self) -> None:
        package_logger = logging.getLogger("retail_barcode")
        handler_count = len(package_logger.handlers)
        retail_barcode._setup_logging()
        assert len(package_logger.handlers) == handler_count == 1
        assert package_logger.propagate is False

    @pytest.mark.parametrize(
        "module_name,expected",
        [
            ("retail_barcode.barcodegen", "retail_barcode.barcodegen"),
            ("my_plugin", "retail_barcode.my_plugin"),
            ("__main__", "retail_barcode.main"),
        ],
    )
    def test_get_logger_names(self, module_name: str, expected: str) -> None:
        assert retail_barcode.get_logger(module_name).name == expected

    def test_module_loggers_are_children(self) -> None:
        logger = retail_barcode.get_logger("retail_barcode.barcodegen.encoders")
        assert logger.parent is not None
        assert logger.name.startswith("retail_barcode.")


class TestLoadConfig:
    """Тестирование загрузки конфигурации."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = retail_barcode.load_config(tmp_path / "absent.json")
        assert config["render_defaults"]["width"] == 200
        assert config["render_defaults"]["background_color"] == "#FFFFFF"

    def test_valid_file_is_merged(self, tmp_path: Path) -> None:
        path = tmp_path / "retail_barcode.json"
        path.write_text(
            json.dumps({"render_defaults": {"height": 120}, "extra": 1}), encoding="utf-8"
        )
        config = retail_barcode.load_config(path)
        assert config["render_defaults"]["height"] == 120
        assert config["render_defaults"]["width"] == 200
        assert config["extra"] == 1

    def test_defaults_are_not_mutated(self, tmp_path: Path) -> None:
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"render_defaults": {"margin": 0}}), encoding="utf-8")
        retail_barcode.load_config(path)
        assert retail_barcode.load_config(tmp_path / "absent.json")["render_defaults"]["margin"] == 10

    @pytest.mark.parametrize(
        "content",
        ["{not json", "[1, 2, 3]", '{"render_defaults": [1]}', ""],
    )
    def test_invalid_file_falls_back(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")
        config = retail_barcode.load_config(path)
        assert config["render_defaults"]["width"] == 200

    def test_invalid_file_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(logging.getLogger("retail_barcode"), "propagate", True)
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="retail_barcode"):
            retail_barcode.load_config(path)
        assert any("invalid JSON" in r.getMessage() for r in caplog.records)

    def test_path_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"render_defaults": {"font_size": 18}}), encoding="utf-8")
        monkeypatch.setenv(retail_barcode.CONFIG_PATH_ENV, str(path))
        assert retail_barcode.load_config()["render_defaults"]["font_size"] == 18

    def test_config_feeds_render_options(self, tmp_path: Path) -> None:
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"render_defaults": {"line_color": "#333333"}}), encoding="utf-8")
        options = retail_barcode.RenderOptions.from_config(retail_barcode.load_config(path))
        assert options.line_color == "#333333"
