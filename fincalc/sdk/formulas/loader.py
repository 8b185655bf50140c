"""Load formula definitions from YAML.

A formula file holds either a single formula mapping or a list under a
`formulas` key:

    formulas:
      - name: simple_add
        version: "1.0.0"
        script: a + b
        inputs:
          - name: a
          - name: b
            default: 0
"""

import logging
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import ValidationError

from ..errors import CalcError
from .schemas import Formula

logger = logging.getLogger(__name__)

DEFAULTS_FILE = Path(__file__).parent / "defaults.yaml"


def parse_formulas(data: Any) -> List[Formula]:
    """Build Formula models from parsed YAML data.

    Raises:
        ValueError: the data is not a formula mapping or a formula list
        pydantic.ValidationError: a formula definition is invalid
    """
    if data is None:
        return []
    if isinstance(data, dict) and "formulas" in data:
        items = data["formulas"] or []
    elif isinstance(data, dict):
        items = [data]
    elif isinstance(data, list):
        items = data
    else:
        raise ValueError(f"Expected a formula mapping or list, got {type(data).__name__}")

    if not isinstance(items, list):
        raise ValueError("'formulas' must be a list")
    return [Formula.model_validate(item) for item in items]


def load_formula_file(path: Union[str, Path]) -> List[Formula]:
    """Read and validate every formula in a YAML file."""
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f)
    return parse_formulas(data)


def default_formulas() -> List[Formula]:
    """The formulas shipped with the package."""
    return load_formula_file(DEFAULTS_FILE)


def load_formulas_dir(directory: Union[str, Path], registry) -> List[str]:
    """Register every formula found in *.yaml files under directory.

    Files are read in sorted order, so a later file overrides an earlier one
    that defines the same name. Files or formulas that fail to load are
    logged and skipped.

    Returns:
        Names of the formulas that were registered
    """
    directory = Path(directory)
    loaded: List[str] = []

    if not directory.is_dir():
        logger.debug(f"Formulas directory not found: {directory}")
        return loaded

    for yaml_file in sorted(directory.glob("*.yaml")):
        try:
            formulas = load_formula_file(yaml_file)
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
            logger.warning(f"Failed to load formulas from {yaml_file.name}: {e}")
            continue

        for formula in formulas:
            try:
                registry.register(formula)
            except CalcError as e:
                logger.warning(f"Skipping formula in {yaml_file.name}: {e}")
                continue
            loaded.append(formula.name)

    logger.debug(f"Loaded {len(loaded)} formulas from {directory}")
    return loaded
