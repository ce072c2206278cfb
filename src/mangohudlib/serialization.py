"""
Serialization helpers for Config objects.

Provides lossless JSON/YAML round-trip via an intermediate dict:

    {
        "parameters": {"fps_limit": "60,144", "gpu_temp": "1", ...},
        "extra": {"some_new_key": "1"},
        "key_order": ["fps_limit", "gpu_temp"],
    }

Parameter values are kept in their on-disk text form so exported
files read the same way MangoHud.conf does.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from mangohudlib.model import Config
from mangohudlib.params import PARAMS, get_param, decode_value, encode_value


def config_to_dict(config: Config, changed_only: bool = False) -> Dict[str, Any]:
    names = set(config.changed_keys()) if changed_only else None
    parameters = {}
    for param in PARAMS:
        if names is not None and param.name not in names:
            continue
        value = config.get(param.name)
        parameters[param.name] = None if value is None else encode_value(param, value)
    return {
        "parameters": parameters,
        "extra": dict(config.extra),
        "key_order": list(config.key_order),
    }


def config_from_dict(d: Dict[str, Any]) -> Config:
    """
    Rebuild a Config from config_to_dict output.

    Raises:
        ValueError: On an unknown parameter name or an invalid value
    """
    config = Config()
    for name, text in (d.get("parameters") or {}).items():
        param = get_param(name)
        if param is None:
            raise ValueError(f"Unknown parameter: {name}")
        if text is None:
            if not param.optional:
                raise ValueError(f"{name} cannot be empty")
            config.set(name, None)
            continue
        config.set(name, decode_value(param, str(text)))
    config.extra = {str(k): str(v) for k, v in (d.get("extra") or {}).items()}
    config.key_order = [str(k) for k in (d.get("key_order") or [])]
    return config


def config_to_json(config: Config, changed_only: bool = False) -> str:
    return json.dumps(config_to_dict(config, changed_only=changed_only), sort_keys=True)


def config_from_json(s: str) -> Config:
    d = json.loads(s)
    return config_from_dict(d)


def config_to_yaml(config: Config, changed_only: bool = False) -> str:
    return yaml.safe_dump(config_to_dict(config, changed_only=changed_only), sort_keys=False)


def config_from_yaml(s: str) -> Config:
    d = yaml.safe_load(s)
    return config_from_dict(d or {})
