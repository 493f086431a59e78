#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tests for the command-line front end."""

from __future__ import annotations

import pytest

from ivcompat import DataPaths
from ivcompat.constants import DATA_DIR_ENV, FALLBACK_DATA_DIR, MAIN_DATASET_FILENAME, default_data_dir
from run import EXIT_INVALID_QUERY, EXIT_LOAD_FAILED, EXIT_OK, main_entry


def test_lookup_prints_cards(data_dir, capsys) -> None:
    code = main_entry(["Midazolam", "Morphine", "--data-dir", str(data_dir)])
    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert out.index("Water for injection") < out.index("Sodium chloride 0.9%") < out.index("Glucose 5%")


def test_no_data_is_not_an_error(data_dir, capsys) -> None:
    code = main_entry(["Cyclizine", "Ondansetron", "--data-dir", str(data_dir)])
    assert code == EXIT_OK
    assert "No data" in capsys.readouterr().out


def test_single_drug_is_rejected(data_dir, capsys) -> None:
    code = main_entry(["Morphine", "--data-dir", str(data_dir)])
    assert code == EXIT_INVALID_QUERY
    assert "at least 2" in capsys.readouterr().err


def test_missing_dataset_fails(tmp_path, capsys) -> None:
    code = main_entry(["Morphine", "Midazolam", "--data-dir", str(tmp_path / "nowhere")])
    assert code == EXIT_LOAD_FAILED
    err = capsys.readouterr().err
    assert "[load] Compatibility dataset not found" in err


def test_flagged_class_option(data_dir, capsys) -> None:
    code = main_entry(["Morphine", "Oxycodone", "--data-dir", str(data_dir), "--flagged-class", "Benzodiazepine"])
    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "not applicable" not in out
    assert "Classification: 1 - Anecdotal" in out


def test_legend_only(data_dir, capsys) -> None:
    assert main_entry(["--legend", "--data-dir", str(data_dir)]) == EXIT_OK
    assert "Classifications:" in capsys.readouterr().out


def test_data_dir_from_environment(data_dir, monkeypatch, capsys) -> None:
    monkeypatch.setenv(DATA_DIR_ENV, str(data_dir))
    code = main_entry(["Drug X", "Drug Y"])
    assert code == EXIT_OK
    assert "Water for injection" in capsys.readouterr().out


def test_data_dir_option_beats_environment(data_dir, tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "nowhere"))
    assert main_entry(["Drug X", "Drug Y", "--data-dir", str(data_dir)]) == EXIT_OK


@pytest.mark.parametrize("value", [None, "", "  "])
def test_default_data_dir_falls_back_when_unset(monkeypatch, value) -> None:
    if value is None:
        monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    else:
        monkeypatch.setenv(DATA_DIR_ENV, value)
    assert default_data_dir() == FALLBACK_DATA_DIR


def test_default_data_dir_is_read_on_each_call(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "one"))
    assert DataPaths.from_dir().main == tmp_path / "one" / MAIN_DATASET_FILENAME
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "two"))
    assert DataPaths.from_dir().main == tmp_path / "two" / MAIN_DATASET_FILENAME
