from __future__ import annotations

from pathlib import Path

import pytest

from fgit.config import load_effective_config


def test_non_string_editor_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "f.toml"
    path.write_text("editor = 3\n", encoding="utf-8")

    with pytest.raises(ValueError, match="'editor'"):
        load_effective_config(config_path=path)


def test_list_id_chars_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "f.toml"
    path.write_text('id_chars = ["a", "b"]\n', encoding="utf-8")

    with pytest.raises(ValueError, match="'id_chars'"):
        load_effective_config(config_path=path)


def test_malformed_toml_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "f.toml"
    path.write_text("editor = \n", encoding="utf-8")

    with pytest.raises(ValueError, match="Failed to parse config file"):
        load_effective_config(config_path=path)
