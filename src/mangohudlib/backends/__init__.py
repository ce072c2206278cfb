"""Backends for Config output (MangoHud.conf file, MANGOHUD_CONFIG string)."""

from .conf import ConfEntry, iter_entries, generate_conf, save_conf_file
from .env import generate_env

__all__ = ["ConfEntry", "iter_entries", "generate_conf", "save_conf_file", "generate_env"]
