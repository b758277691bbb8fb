"""npm version range matching built atop packaging.version.

Supported range expressions, as they appear after the ``@`` in lockfile keys:
- exact versions (e.g., "1.2.3", "=1.2.3", "v1.2.3")
- wildcards: "", "*", "x", "latest"
- caret ranges ^x.y.z → >=x.y.z,<x+1.0.0 (or the next minor/patch for 0.x)
- tilde ranges ~x.y.z → >=x.y.z,<x.y+1.0
- comparator sets split by spaces, e.g., ">=1.0.0 <2.0.0"
- alternatives joined by "||"

Partial versions ("1", "1.2") are padded with zeros. Anything that is not a
valid version (git URLs, tarballs, tags) never matches.
"""

from __future__ import annotations

from packaging.version import InvalidVersion, Version

_WILDCARDS = {"", "*", "x", "X", "latest"}


def _parse_version(v: str) -> Version:
    v = v.strip().lstrip("=v")
    parts = v.split("-", 1)
    release = parts[0].split(".")
    release += ["0"] * (3 - len(release))
    padded = ".".join(release)
    if len(parts) > 1:
        padded = f"{padded}-{parts[1]}"
    return Version(padded)


def _caret_upper(v: Version) -> Version:
    major, minor, patch = (list(v.release) + [0, 0])[:3]
    if major:
        return Version(f"{major + 1}.0.0")
    if minor:
        return Version(f"0.{minor + 1}.0")
    return Version(f"0.0.{patch + 1}")


def _next_minor(v: Version) -> Version:
    return Version(f"{v.major}.{v.minor + 1}.0")


def _matches_comparator(v: Version, token: str) -> bool:
    for op in (">=", "<=", ">", "<", "=="):
        if token.startswith(op):
            bound = _parse_version(token[len(op) :])
            return {
                ">=": v >= bound,
                "<=": v <= bound,
                ">": v > bound,
                "<": v < bound,
                "==": v == bound,
            }[op]
    if token in _WILDCARDS:
        return True
    return v == _parse_version(token)


def _satisfies_range(v: Version, expr: str) -> bool:
    expr = expr.strip()
    if expr in _WILDCARDS:
        return True

    if expr.startswith("^"):
        base = _parse_version(expr[1:])
        return base <= v < _caret_upper(base)

    if expr.startswith("~"):
        base = _parse_version(expr[1:].lstrip(">"))
        return base <= v < _next_minor(base)

    # composite comparators like ">=1.0.0 <2.0.0" (space separated)
    return all(_matches_comparator(v, t) for t in expr.split())


def satisfies(installed: str, expr: str) -> bool:
    """Return True when ``installed`` falls inside the npm range ``expr``."""
    try:
        v = _parse_version(installed)
        return any(_satisfies_range(v, alt) for alt in expr.split("||"))
    except InvalidVersion:
        return False
