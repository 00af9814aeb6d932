"""
Feature module generator.

Copies ``templates/module`` into a features directory, substituting
``$module$`` (snake_case) and ``$Module$`` (PascalCase) in file names and
contents. ``.tpl`` suffixes are dropped from generated files.
"""
from __future__ import annotations

import logging
import re
import shutil
from importlib import resources
from pathlib import Path
from typing import Dict, List

import humps

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tpl"
_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def default_features_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "features"


def template_names(name: str) -> Dict[str, str]:
    """Return the placeholder substitutions for module ``name``."""
    if not _NAME_RE.match(name or ""):
        raise ValueError(f"Invalid module name {name!r}: use letters, digits and underscores")
    snake = humps.decamelize(name).lower()
    return {"$module$": snake, "$Module$": humps.pascalize(snake)}


def _render(text: str, names: Dict[str, str]) -> str:
    for placeholder, value in names.items():
        text = text.replace(placeholder, value)
    return text


def add_module(name: str, dest: Path | None = None) -> List[Path]:
    """Generate module ``name`` under ``dest`` and return the created files."""
    names = template_names(name)
    dest = Path(dest) if dest is not None else default_features_dir()
    target = dest / names["$module$"]
    if target.exists():
        raise FileExistsError(f"Module {names['$module$']!r} already exists at {target}")

    created: List[Path] = []
    template_root = resources.files("crudkit.scaffold").joinpath("templates", "module")
    with resources.as_file(template_root) as source_root:
        for source in sorted(Path(source_root).rglob("*")):
            if source.is_dir() or "__pycache__" in source.parts:
                continue
            relative = source.relative_to(source_root)
            out_name = _render(relative.as_posix(), names)
            if out_name.endswith(TEMPLATE_SUFFIX):
                out_name = out_name[: -len(TEMPLATE_SUFFIX)]
            out_path = target / out_name
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(_render(source.read_text(encoding="utf-8"), names), encoding="utf-8")
            created.append(out_path)
    logger.info("module_added: name=%s path=%s files=%d", names["$module$"], target, len(created))
    return created


def delete_module(name: str, dest: Path | None = None) -> Path:
    """Remove generated module ``name`` from ``dest`` and return its path."""
    names = template_names(name)
    dest = Path(dest) if dest is not None else default_features_dir()
    target = dest / names["$module$"]
    if not target.is_dir():
        raise FileNotFoundError(f"Module {names['$module$']!r} not found at {target}")
    shutil.rmtree(target)
    logger.info("module_deleted: name=%s path=%s", names["$module$"], target)
    return target
