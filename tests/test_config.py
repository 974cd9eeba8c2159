from __future__ import annotations

from pathlib import Path

import pytest

from saverkit.config import ConfigError, SaverConfig, parse_config


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "saver.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_full_config_resolves_relative_paths(tmp_path: Path) -> None:
    cfg = parse_config(
        _write(
            tmp_path,
            "input: media/sunset.mp4\noutput: /abs/Sunset.saver\nname: Beautiful Sunset\ncleanup_delay: 1.5\nscratch_root: scratch\n",
        )
    )
    assert cfg == SaverConfig(
        input=tmp_path.resolve() / "media" / "sunset.mp4",
        output=Path("/abs/Sunset.saver"),
        name="Beautiful Sunset",
        cleanup_delay=1.5,
        scratch_root=tmp_path.resolve() / "scratch",
    )


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    assert parse_config(_write(tmp_path, "")) == SaverConfig()


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    cfg = parse_config(_write(tmp_path, "name: 42\nfuture_option: yes\n"))
    assert cfg.name == "42"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        parse_config(tmp_path / "nope.yaml")


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="mapping"):
        parse_config(_write(tmp_path, "- a\n- b\n"))


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not valid YAML"):
        parse_config(_write(tmp_path, "name: [unclosed\n"))


@pytest.mark.parametrize("value", ["-1", "soon", "true"])
def test_bad_cleanup_delay(tmp_path: Path, value: str) -> None:
    with pytest.raises(ConfigError, match="cleanup_delay"):
        parse_config(_write(tmp_path, f"cleanup_delay: {value}\n"))
