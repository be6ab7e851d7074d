from pathlib import Path

import pytest

from exifcaption.core.config import (
    CaptionConfig,
    CaptionSettings,
    build_runtime_config,
    load_config,
    load_settings,
)


def test_build_runtime_config_requires_a_source():
    with pytest.raises(ValueError):
        build_runtime_config(settings=CaptionSettings())


def test_build_runtime_config_defaults():
    config = build_runtime_config(settings=CaptionSettings(), source=Path("shot.jpg"))

    assert isinstance(config, CaptionConfig)
    assert config.source == Path("shot.jpg")
    assert config.destination is None
    assert config.composite is False
    assert config.image_format == "PNG"


def test_build_runtime_config_infers_format_from_destination():
    config = build_runtime_config(
        settings=CaptionSettings(),
        source=Path("shot.jpg"),
        destination=Path("out/labelled.jpg"),
    )

    assert config.image_format == "JPEG"


def test_cli_overrides_win_over_settings(tmp_path: Path):
    settings = CaptionSettings(
        default_source=tmp_path / "default.jpg",
        default_destination=tmp_path / "default.png",
        default_composite=True,
        default_image_format="PNG",
    )

    config = build_runtime_config(
        settings=settings,
        source=tmp_path / "other.jpg",
        composite=False,
        image_format="gif",
    )

    assert config.source == tmp_path / "other.jpg"
    assert config.destination == tmp_path / "default.png"
    assert config.composite is False
    assert config.image_format == "GIF"


def test_load_settings_reads_pyproject(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.exifcaption]\n"
        'default_source = "~/photos/DSC_6846.jpg"\n'
        'default_destination = "labelled/DSC_6846.png"\n'
        "default_composite = true\n",
        encoding="utf-8",
    )

    settings = load_settings(tmp_path)

    assert settings.default_source == Path("~/photos/DSC_6846.jpg").expanduser()
    assert settings.default_destination == Path("labelled/DSC_6846.png")
    assert settings.default_composite is True


def test_environment_overrides_pyproject(tmp_path: Path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(
        '[tool.exifcaption]\ndefault_source = "from_toml.jpg"\n', encoding="utf-8"
    )
    monkeypatch.setenv("EXIFCAPTION__DEFAULT_SOURCE", "from_env.jpg")
    monkeypatch.setenv("EXIFCAPTION__DEFAULT_COMPOSITE", "yes")

    config = load_config(start=tmp_path)

    assert config.source == Path("from_env.jpg")
    assert config.composite is True


def test_unreadable_pyproject_falls_back_to_defaults(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("not = [valid", encoding="utf-8")

    assert load_settings(tmp_path) == CaptionSettings()


def test_unknown_output_format_is_rejected():
    with pytest.raises(ValueError):
        build_runtime_config(
            settings=CaptionSettings(),
            source=Path("shot.jpg"),
            destination=Path("out.x"),
            image_format="nope",
        )


def test_jpg_alias_is_normalised():
    config = build_runtime_config(
        settings=CaptionSettings(),
        source=Path("shot.jpg"),
        destination=Path("out.bin"),
        image_format="jpg",
    )

    assert config.image_format == "JPEG"


def test_unsavable_suffix_is_rejected():
    with pytest.raises(ValueError):
        build_runtime_config(
            settings=CaptionSettings(),
            source=Path("shot.jpg"),
            destination=Path("out.psd"),
        )
