from __future__ import annotations

import logging
import os

from .registry import Registry, get_registry

logger = logging.getLogger(__name__)

OVERRIDES_ENV = "RESPACK_OVERRIDES"
CONFIG_ENV = "RESPACK_CONFIG"


def get_config_path(custom_path=None):
    if custom_path:
        return custom_path
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return env_path
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(xdg_config_home, "respack", "config.yaml")


def read_config(custom_path=None):
    import yaml

    config_path = get_config_path(custom_path)
    try:
        with open(config_path, "r", encoding="utf-8") as file:
            return yaml.safe_load(file) or {}
    except FileNotFoundError:
        return {}


def parse_overrides_env(raw: str | None) -> dict[str, str]:
    """Parse ``group=path`` items separated by ``os.pathsep``."""
    overrides: dict[str, str] = {}
    for item in (raw or "").split(os.pathsep):
        item = item.strip()
        if not item:
            continue
        group, sep, path = item.partition("=")
        group, path = group.strip(), path.strip()
        if not sep or not group or not path:
            logger.warning("Ignoring malformed %s item: %r", OVERRIDES_ENV, item)
            continue
        overrides[group] = path
    return overrides


def configured_overrides(custom_path=None) -> dict[str, str]:
    """Override paths from the config file, then the environment."""
    config_path = get_config_path(custom_path)
    config = read_config(config_path)
    if not isinstance(config, dict):
        logger.warning("Ignoring config %s: root must be a mapping", config_path)
        config = {}

    overrides: dict[str, str] = {}
    section = config.get("overrides") or {}
    if not isinstance(section, dict):
        logger.warning("Ignoring 'overrides' in %s: must be a mapping", config_path)
        section = {}
    base_dir = os.path.dirname(os.path.abspath(config_path))
    for group, path in section.items():
        if not isinstance(path, str) or not path:
            logger.warning("Ignoring override for group '%s': invalid path", group)
            continue
        overrides[str(group)] = os.path.join(base_dir, os.path.expanduser(path))

    overrides.update(parse_overrides_env(os.environ.get(OVERRIDES_ENV)))
    return overrides


def apply_configured_overrides(
    registry: Registry | None = None, custom_path=None
) -> dict[str, str]:
    registry = registry if registry is not None else get_registry()
    applied: dict[str, str] = {}
    for group, path in configured_overrides(custom_path).items():
        if group not in registry:
            logger.warning(
                "Cannot override resource group '%s': group is not registered", group
            )
            continue
        registry.set_override_path(group, path)
        applied[group] = path
    return applied
