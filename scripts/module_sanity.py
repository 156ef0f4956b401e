#!/usr/bin/env python3
from __future__ import annotations

import importlib
from pathlib import Path
import sys
from typing import Any, Dict, List

import yaml

REQUIRED_FIELDS = ("title", "description", "category")


def _mount_from(name: str, raw: str | None) -> str:
    mount = raw or f"/{name.replace('_', '-')}"
    if not mount.startswith("/"):
        mount = "/" + mount
    if mount != "/" and mount.endswith("/"):
        mount = mount.rstrip("/")
    return mount


def load_manifest(path: Path) -> Dict[str, Any]:
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _check_entrypoint(label: str, target: str, import_apps: bool) -> List[str]:
    if ":" not in target:
        return [f"{label}: entrypoints.api must be module:app"]
    if not import_apps:
        return []
    module_name, attr = target.split(":", 1)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        return [f"{label}: cannot import {module_name} ({exc})"]
    if getattr(module, attr, None) is None:
        return [f"{label}: {module_name} has no attribute '{attr}'"]
    return []


def check_manifests(modules_dir: Path, *, import_apps: bool = False) -> List[str]:
    errors: List[str] = []
    mounts: Dict[str, str] = {}

    for module_dir in sorted(modules_dir.iterdir()):
        manifest = module_dir / "module.yaml"
        if not module_dir.is_dir() or not manifest.exists():
            continue
        label = module_dir.name
        try:
            data = load_manifest(manifest)
        except yaml.YAMLError as exc:
            errors.append(f"{label}: invalid YAML ({exc})")
            continue

        name = str(data.get("name") or "").strip() or label
        for field in REQUIRED_FIELDS:
            if not str(data.get(field) or "").strip():
                errors.append(f"{label}: missing {field}")
        if str(data.get("standard_version") or "").strip() != "1.0":
            errors.append(f"{label}: standard_version must be '1.0'")

        entrypoints = data.get("entrypoints") or {}
        api = entrypoints.get("api") if isinstance(entrypoints, dict) else None
        public = data.get("public")
        if public is None or public:
            if not api:
                errors.append(f"{label}: missing entrypoints.api")
            else:
                errors.extend(_check_entrypoint(label, str(api), import_apps))

        mount = _mount_from(name, data.get("mount"))
        if mount == "/" or " " in mount:
            errors.append(f"{label}: invalid mount '{mount}'")
        elif mount in mounts:
            errors.append(f"{label}: mount '{mount}' duplicates {mounts[mount]}")
        else:
            mounts[mount] = name

    return errors


def main() -> int:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    errors = check_manifests(root / "modules", import_apps=True)

    if errors:
        print("Module sanity check failed:\n")
        for issue in errors:
            print(f"- {issue}")
        return 1

    print("Module sanity check passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
