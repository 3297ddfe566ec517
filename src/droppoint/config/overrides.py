from __future__ import annotations


# Overrides come from JSON payloads (dict-like objects), so typing stays flexible and
# errors carry the dotted key path.
from typing import Any, Mapping

from droppoint.config.settings import Settings

"""
Per-request settings overrides (safe subset).

The API and CLI can send `settings_overrides` to tune the bisection depth and mask
threshold for a single drop computation. This module:
- validates the override payload against a whitelist,
- deep-merges the safe subset onto current settings,
- re-validates with Pydantic to ensure types/ranges remain correct.

Mask directories and the map catalog are not overridable: a request must not be able to
point the server at arbitrary files or redefine map scales.
"""

# A value of True allows any keys under that subtree; a nested dict allows only the listed
# keys, recursively.
ALLOWED_SETTINGS_OVERRIDES_TREE: dict[str, Any] = {
    # The scan step is fixed per deployment; only the bisection depth is tunable per request.
    "scan": {"bisect_iterations": True},
    "terrain": {"alpha_threshold": True},
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, override_value in override.items():
        if isinstance(override_value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(dict(merged[key]), override_value)
            continue
        merged[key] = override_value
    return merged


def _filter_overrides(
    overrides: Mapping[str, Any],
    *,
    allowed_tree: Mapping[str, Any],
    path: tuple[str, ...] = (),
) -> dict[str, Any]:
    filtered: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in allowed_tree:
            dotted_path = ".".join((*path, key))
            raise ValueError(
                f"settings_overrides contains a disallowed key: '{dotted_path}'"
            )

        allowed = allowed_tree[key]
        if allowed is True:
            filtered[key] = value
            continue

        if not isinstance(value, Mapping):
            dotted_path = ".".join((*path, key))
            raise ValueError(
                f"settings_overrides key '{dotted_path}' must be a mapping"
            )

        filtered[key] = _filter_overrides(
            value, allowed_tree=allowed, path=(*path, key)
        )
    return filtered


def apply_settings_overrides(
    settings: Settings, overrides: Mapping[str, Any] | None
) -> Settings:
    """Return `settings` with the whitelisted `overrides` applied (a new, validated model)."""
    if not overrides:
        return settings

    safe_overrides = _filter_overrides(
        overrides, allowed_tree=ALLOWED_SETTINGS_OVERRIDES_TREE
    )
    merged_payload = _deep_merge(settings.model_dump(mode="python"), safe_overrides)
    return Settings.model_validate(merged_payload)
