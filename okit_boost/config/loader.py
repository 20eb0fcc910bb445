import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from okit_boost.config.models import AppConfig

DEFAULT_CONFIG_PATH = Path("okit_boost.yaml")

# Environment overrides: variable -> (section, field)
ENV_OVERRIDES = {
    "OKIT_SUPABASE_URL": ("remote", "url"),
    "OKIT_SUPABASE_ANON_KEY": ("remote", "anon_key"),
    "OKIT_BACKEND": ("remote", "backend"),
    "OKIT_SITE_URL": ("site", "base_url"),
    "OKIT_CART_DIR": ("cart", "storage_dir"),
}


def _strip_yaml_fence(content: str) -> str:
    """Return the first ```yaml block of a markdown document, or the content as-is."""
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


def load_config(path: Path | None = None, environ: dict[str, str] | None = None) -> AppConfig:
    """
    Load and validate the application config.

    A missing file yields defaults. Environment overrides are applied on top.
    Raises ValueError if the YAML is malformed or fails validation.
    """
    env = os.environ if environ is None else environ
    if path is None:
        path = Path(env.get("OKIT_CONFIG_PATH", str(DEFAULT_CONFIG_PATH)))

    data: dict = {}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            content = f.read()
        try:
            data = yaml.safe_load(_strip_yaml_fence(content)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax in config file: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

    # An empty section (`remote:` with nothing under it) loads as None
    data = {key: value for key, value in data.items() if value is not None}

    for var, (section, field) in ENV_OVERRIDES.items():
        value = env.get(var)
        if not value:
            continue
        section_data = data.setdefault(section, {})
        if not isinstance(section_data, dict):
            raise ValueError(
                f"Config section '{section}' must be a mapping to apply {var}, "
                f"got {type(section_data).__name__}"
            )
        section_data[field] = value

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed:\n{e}") from e
