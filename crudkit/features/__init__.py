"""
Registered feature modules.

New modules generated with ``python -m crudkit.scaffold addmodule <name>``
are enabled by adding them to ``FEATURES``.
"""
from typing import List

from crudkit.modules import FeatureModule
from crudkit.utils.settings import module_enabled

from . import post

FEATURES: List[FeatureModule] = [post.module]

for _feature in FEATURES:
    for _crud in _feature.cruds:
        _crud.define_table()


def enabled_modules() -> List[FeatureModule]:
    return [feature for feature in FEATURES if module_enabled(feature.name)]
