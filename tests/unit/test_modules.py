import pytest
from fastapi import APIRouter

from crudkit.features import enabled_modules
from crudkit.features.post import module as post_module
from crudkit.modules import FeatureModule, Localization, NavItem, compose, find_resource, translate
from crudkit.utils.settings import refresh_settings_cache


def _module(name, **kwargs):
    return FeatureModule(
        name=name,
        nav_items=[NavItem(path=f"/{name}", label_key=f"{name}:navLink")],
        localizations=[Localization(ns=name, resources={"en": {"navLink": name.title()}})],
        **kwargs,
    )


def test_compose_merges_contributions_in_order():
    r1, r2 = APIRouter(), APIRouter()
    merged = compose(_module("a", routers=[r1], type_defs=["A"]), _module("b", routers=[r2], type_defs=["B"]))

    assert merged.members == ["a", "b"]
    assert merged.routers == [r1, r2]
    assert merged.type_defs == ["A", "B"]
    assert [item.path for item in merged.nav_items] == ["/a", "/b"]


def test_compose_nested_descriptors_keep_member_names():
    inner = compose(_module("a"), _module("b"), name="group")

    assert compose(inner, _module("c")).members == ["a", "b", "c"]


def test_compose_does_not_list_group_name_as_member():
    assert compose(_module("a")).members == ["a"]
    assert compose(_module("app")).members == ["app"]
    assert compose(name="empty").members == []


def test_compose_rejects_duplicates():
    with pytest.raises(ValueError):
        compose(_module("a"), _module("a"))


def test_create_context_merges_factories(db):
    module = _module("a", context_factories=[lambda s: {"x": 1}, lambda s: {"session": s}])

    assert module.create_context(db) == {"x": 1, "session": db}


def test_translate_falls_back_to_default_locale_then_key():
    localizations = [
        Localization(ns="post", resources={"en": {"navLink": "Posts", "list": {"title": "All posts"}}, "ru": {}})
    ]

    assert translate(localizations, "en", "post:list.title") == "All posts"
    assert translate(localizations, "ru", "post:navLink") == "Posts"
    assert translate(localizations, "en", "post:missing") == "post:missing"
    assert translate(localizations, "en", "plain") == "plain"


def test_post_module_ships_localizations():
    resources = post_module.localizations[0]

    assert resources.ns == "post"
    assert set(resources.resources) >= {"en", "ru"}
    assert find_resource(post_module.localizations, "en", "post")["navLink"] == "Posts"
    assert find_resource(post_module.localizations, "de", "post") is None


def test_enabled_modules_respects_settings(monkeypatch):
    monkeypatch.setenv("CRUDKIT_MODULES", "other")
    refresh_settings_cache()
    assert enabled_modules() == []

    monkeypatch.delenv("CRUDKIT_MODULES")
    refresh_settings_cache()
    assert [m.name for m in enabled_modules()] == ["post"]
