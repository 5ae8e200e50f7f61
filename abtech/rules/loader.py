from pathlib import Path

import yaml
from pydantic import ValidationError

from abtech.rules.models import Rules


def _describe(e: ValidationError) -> str:
    """One `section.field: message` line per problem."""
    return "\n".join(
        f"  {'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
    )


def load_rules(path: Path) -> Rules:
    """
    Load and validate rules.yaml.
    Raises FileNotFoundError if the file is missing and ValueError for bad
    YAML or a document that does not match the Rules schema.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Rules file {path} must contain a mapping at the top level")

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{_describe(e)}") from e
