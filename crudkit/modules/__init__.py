"""
Feature module descriptors.

Each feature packages what it contributes to the shell app (HTTP routers,
navigation entries, localization resources, GraphQL type definitions,
resolvers and request-context members) into a ``FeatureModule``. The shell
composes every enabled module into one descriptor at startup.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from importlib import resources
from typing import Any, Callable, Dict, List, Optional, Type

from fastapi import APIRouter
from sqlalchemy.orm import Session

from crudkit.db.crud import Crud
from crudkit.utils.settings import get_settings

logger = logging.getLogger(__name__)

ContextFactory = Callable[[Session], Dict[str, Any]]


@dataclass(frozen=True)
class NavItem:
    path: str
    # "namespace:key" lookup into the module's localization resources
    label_key: str


@dataclass(frozen=True)
class Localization:
    ns: str
    # {lang: {key: text}}
    resources: Dict[str, Dict[str, Any]]


@dataclass
class FeatureModule:
    name: str
    routers: List[APIRouter] = field(default_factory=list)
    nav_items: List[NavItem] = field(default_factory=list)
    localizations: List[Localization] = field(default_factory=list)
    type_defs: List[str] = field(default_factory=list)
    resolvers: List[Any] = field(default_factory=list)
    cruds: List[Type[Crud]] = field(default_factory=list)
    context_factories: List[ContextFactory] = field(default_factory=list)
    # Names of the modules merged into this descriptor
    members: Optional[List[str]] = None

    def __post_init__(self):
        if self.members is None:
            self.members = [self.name]

    def create_context(self, db: Session) -> Dict[str, Any]:
        extras: Dict[str, Any] = {}
        for factory in self.context_factories:
            extras.update(factory(db))
        return extras


def compose(*modules: FeatureModule, name: str = "app") -> FeatureModule:
    """Merge ``modules`` into one descriptor, keeping contribution order."""
    merged = FeatureModule(name=name, members=[])
    for module in modules:
        for member in module.members:
            if member in merged.members:
                raise ValueError(f"Feature module {member!r} registered twice")
            merged.members.append(member)
        merged.routers.extend(module.routers)
        merged.nav_items.extend(module.nav_items)
        merged.localizations.extend(module.localizations)
        merged.type_defs.extend(module.type_defs)
        merged.resolvers.extend(module.resolvers)
        merged.cruds.extend(module.cruds)
        merged.context_factories.extend(module.context_factories)
    logger.info("modules_composed: members=%s", merged.members)
    return merged


def load_localizations(package: str, ns: str) -> Localization:
    """Read ``locales/<lang>/translations.json`` files shipped in ``package``."""
    locales_dir = resources.files(package).joinpath("locales")
    bundle: Dict[str, Dict[str, Any]] = {}
    for lang_dir in locales_dir.iterdir():
        if not lang_dir.is_dir():
            continue
        resource = lang_dir.joinpath("translations.json")
        if resource.is_file():
            bundle[lang_dir.name] = json.loads(resource.read_text(encoding="utf-8"))
    return Localization(ns=ns, resources=bundle)


def find_resource(localizations: List[Localization], lang: str, ns: str) -> Optional[Dict[str, Any]]:
    for localization in localizations:
        if localization.ns == ns and lang in localization.resources:
            return localization.resources[lang]
    return None


def translate(localizations: List[Localization], lang: str, key: str) -> str:
    """Resolve ``"ns:path.to.key"``, falling back to the default locale, then the key."""
    ns, _, path = key.partition(":")
    if not path:
        return key
    for candidate in (lang, get_settings().default_locale):
        value: Any = find_resource(localizations, candidate, ns)
        for part in path.split("."):
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(part)
        if isinstance(value, str):
            return value
    return key
