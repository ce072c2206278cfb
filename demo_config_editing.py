#!/usr/bin/env python3
"""
Demo: Read a MangoHud config, check it, and write it in both output forms.
"""

from mangohudlib.analyzer import analyze_config
from mangohudlib.backends import generate_conf, generate_env
from mangohudlib.model import HudPreset
from mangohudlib.parser import parse_config_string
from mangohudlib.presets import apply_preset


SAMPLE = """\
legacy_layout=0
fps
gpu_stats
gpu_mem_clock
fps_limit=144,60,0
fps_value=60,30
position=top-right
"""


def main():
    config = parse_config_string(SAMPLE)

    print("=" * 80)
    print("CHECK")
    print("=" * 80)
    for issue in analyze_config(config).issues:
        print(f"  {issue}")

    config.fps_value = [30, 60]
    config.vram = True
    apply_preset(config, HudPreset.EXTENDED)

    print("\n" + "=" * 80)
    print("MangoHud.conf")
    print("=" * 80)
    print(generate_conf(config, header="Generated by demo_config_editing.py"))

    print("=" * 80)
    print("MANGOHUD_CONFIG")
    print("=" * 80)
    print(generate_env(config))


if __name__ == "__main__":
    main()
