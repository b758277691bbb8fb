"""Parse lockfiles written as plain YAML (yarn berry, or hand-written files)."""

from __future__ import annotations

from typing import Any

from ..errors import YamlParseError


def parse(text: str) -> dict[str, Any]:
    """Return the top-level mapping of a YAML document."""
    import yaml

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise YamlParseError(f"Invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise YamlParseError(f"Expected a YAML mapping, got {type(data).__name__}")
    return data
