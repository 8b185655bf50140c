"""Unit tests for loading formulas from YAML."""

import logging

import pytest
from pydantic import ValidationError

from fincalc.sdk.formulas import (
    FormulaRegistry,
    default_formulas,
    load_formula_file,
    load_formulas_dir,
    parse_formulas,
)


SINGLE = """\
name: double_it
version: "1.2.0"
description: Double the input
script: x * 2
inputs:
  - name: x
"""

MULTIPLE = """\
formulas:
  - name: tip
    script: round(bill * pct / 100, 2)
    inputs:
      - name: bill
      - name: pct
        default: 18
  - name: half
    script: x / 2
    inputs:
      - name: x
"""


class TestParse:
    """Tests for load_formula_file and parse_formulas."""

    def test_single_mapping(self, tmp_path):
        path = tmp_path / "double.yaml"
        path.write_text(SINGLE)

        formulas = load_formula_file(path)
        assert len(formulas) == 1
        assert formulas[0].name == "double_it"
        assert formulas[0].version == "1.2.0"

    def test_formulas_list(self, tmp_path):
        path = tmp_path / "many.yaml"
        path.write_text(MULTIPLE)

        formulas = load_formula_file(path)
        assert [f.name for f in formulas] == ["tip", "half"]
        assert formulas[0].inputs[1].default == 18.0

    def test_empty(self):
        assert parse_formulas(None) == []
        assert parse_formulas({"formulas": None}) == []

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            parse_formulas("just a string")
        with pytest.raises(ValueError):
            parse_formulas({"formulas": {"name": "x"}})

    def test_missing_script(self):
        with pytest.raises(ValidationError):
            parse_formulas({"name": "no_script"})

    def test_default_formulas(self):
        names = [f.name for f in default_formulas()]
        assert names == ["income_projection", "loan_payment", "pti_max_payment", "dti_ratio"]
        assert all(f.version == "1.0.0" for f in default_formulas())


class TestLoadDirectory:
    """Tests for load_formulas_dir."""

    def test_loads_files_in_order(self, tmp_path):
        (tmp_path / "a.yaml").write_text(SINGLE)
        (tmp_path / "b.yaml").write_text(MULTIPLE)
        (tmp_path / "notes.txt").write_text("ignored")

        registry = FormulaRegistry()
        loaded = load_formulas_dir(tmp_path, registry)

        assert loaded == ["double_it", "tip", "half"]
        assert registry.execute("tip", {"bill": 50}).value == 9.0

    def test_bad_files_skipped(self, tmp_path, caplog):
        (tmp_path / "1_good.yaml").write_text(SINGLE)
        (tmp_path / "2_invalid_yaml.yaml").write_text("formulas: [")
        (tmp_path / "3_invalid_model.yaml").write_text("name: nameless_script\n")
        (tmp_path / "4_bad_script.yaml").write_text("name: broken\nscript: 'x +'\n")

        registry = FormulaRegistry()
        with caplog.at_level(logging.WARNING, logger="fincalc.sdk.formulas.loader"):
            loaded = load_formulas_dir(tmp_path, registry)

        assert loaded == ["double_it"]
        assert registry.names() == ["double_it"]
        assert "2_invalid_yaml.yaml" in caplog.text
        assert "3_invalid_model.yaml" in caplog.text
        assert "4_bad_script.yaml" in caplog.text

    def test_bad_formula_does_not_block_file(self, tmp_path):
        (tmp_path / "mixed.yaml").write_text("""\
formulas:
  - name: broken
    script: import os
  - name: fine
    script: "1 + 1"
""")
        registry = FormulaRegistry()
        assert load_formulas_dir(tmp_path, registry) == ["fine"]

    def test_missing_directory(self, tmp_path):
        registry = FormulaRegistry()
        assert load_formulas_dir(tmp_path / "nope", registry) == []

    def test_user_file_overrides_default(self, tmp_path):
        (tmp_path / "pti.yaml").write_text("""\
name: pti_max_payment
version: "2.0.0"
script: monthly_income * 0.5
inputs:
  - name: monthly_income
""")
        registry = FormulaRegistry.with_defaults()
        load_formulas_dir(tmp_path, registry)

        result = registry.execute("pti_max_payment", {"monthly_income": 5000})
        assert result.value == 2500.0
        assert result.formula_version == "2.0.0"
