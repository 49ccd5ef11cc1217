from pathlib import Path

import yaml
from pydantic import ValidationError

from teamsite.config.models import SiteConfig


def _extract_yaml(content: str) -> str:
    """Use the first ```yaml fenced block if present, else the whole file."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def load_config(path: Path) -> SiteConfig:
    """
    Load and validate the site configuration file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Site config not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in site config: {e}") from e

    try:
        return SiteConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Site config validation failed:\n{e}") from e
