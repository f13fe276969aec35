"""
Tests for configuration loading, pipeline settings and logging setup
"""

import logging
from pathlib import Path

import pytest

from config import ConfigurationManager, get_config
from fiscal_qr.pipeline import PipelineSettings
from fiscal_qr.utils.helpers import safe_filename
from fiscal_qr.utils.logger import ROOT_LOGGER_NAME, get_logger, setup_logger


@pytest.fixture
def fresh_config():
    """Drops the singleton before and after the test."""
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def custom_settings(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "logging:\n"
        "  file:\n"
        "    path: logs/run.log\n"
        "input:\n"
        "  pdf:\n"
        "    render_scale: 3\n"
        "ocr:\n"
        "  tesseract:\n"
        "    lang: por\n"
        "    psm: 6\n"
        "qr:\n"
        "  backend: opencv\n",
        encoding="utf-8",
    )
    return path


def test_default_settings_file(fresh_config):
    assert get_config("ocr.tesseract.lang") == "por+eng"
    assert get_config("qr.backend") == "pyzbar"
    assert get_config("input.pdf.render_scale") == 2.0
    assert get_config("batch.max_workers") == 1


def test_missing_key_returns_default(fresh_config):
    assert get_config("ocr.tesseract.unknown", "x") == "x"
    # Walking past a scalar is a miss, not an error
    assert get_config("ocr.engine.name", "y") == "y"


def test_singleton_keeps_first_file(fresh_config, custom_settings):
    first = ConfigurationManager(str(custom_settings))
    second = ConfigurationManager()

    assert first is second
    assert second.config_path == custom_settings


def test_relative_log_path_is_absolutized(fresh_config, custom_settings):
    ConfigurationManager(str(custom_settings))
    assert Path(get_config("logging.file.path")).is_absolute()


def test_missing_file(fresh_config, tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigurationManager(str(tmp_path / "nope.yaml"))


def test_non_mapping_root(fresh_config, tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        ConfigurationManager(str(path))


def test_get_all_is_a_copy(fresh_config):
    config = ConfigurationManager()
    snapshot = config.get_all()
    snapshot["ocr"]["tesseract"]["lang"] = "eng"
    assert config.get("ocr.tesseract.lang") == "por+eng"


def test_pipeline_settings_from_config(fresh_config, custom_settings):
    ConfigurationManager(str(custom_settings))

    settings = PipelineSettings.from_config()

    assert settings.render_scale == 3.0
    assert settings.ocr_language == "por"
    assert settings.ocr_psm == 6
    assert settings.qr_backend == "opencv"
    # Keys absent from the file keep their defaults
    assert settings.ocr_oem == 3
    assert settings.enhance_contrast is True


def test_get_logger_namespace():
    assert get_logger("fiscal_qr.at_qr.assembler").name == "fiscal_qr.at_qr.assembler"
    assert get_logger("main").name == "fiscal_qr.main"


def test_setup_logger_replaces_handlers(tmp_path):
    log_file = tmp_path / "logs" / "fiscal_qr.log"

    setup_logger(level="DEBUG")
    logger = setup_logger(level="WARNING", log_file=str(log_file))

    assert logger.name == ROOT_LOGGER_NAME
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 2
    assert log_file.exists()

    quiet = setup_logger(quiet=True)
    assert quiet.handlers == []


def test_safe_filename():
    assert safe_filename("fatura:17/2025.pdf") == "fatura_17_2025.pdf"
    assert safe_filename("...") == "unnamed"
