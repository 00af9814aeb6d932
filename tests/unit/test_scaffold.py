import importlib

import pytest
from fastapi.testclient import TestClient

from crudkit.db.tables import metadata
from crudkit.db import database
from crudkit.scaffold import add_module, delete_module, template_names
from crudkit.scaffold.__main__ import main


def test_template_names():
    assert template_names("gadget") == {"$module$": "gadget", "$Module$": "Gadget"}
    assert template_names("blogEntry") == {"$module$": "blog_entry", "$Module$": "BlogEntry"}
    with pytest.raises(ValueError):
        template_names("9lives")
    with pytest.raises(ValueError):
        template_names("bad-name")


def test_add_module_renders_template(tmp_path):
    created = add_module("widget", tmp_path)

    names = {p.relative_to(tmp_path / "widget").as_posix() for p in created}
    assert names == {
        "__init__.py",
        "domain.py",
        "sql.py",
        "resolvers.py",
        "type_defs.py",
        "locales/en/translations.json",
    }
    sql = (tmp_path / "widget" / "sql.py").read_text()
    assert "class WidgetCrud(Crud):" in sql
    for path in created:
        text = path.read_text()
        assert "$module$" not in text and "$Module$" not in text
        if path.suffix == ".py":
            compile(text, str(path), "exec")


def test_add_module_refuses_to_overwrite(tmp_path):
    add_module("widget", tmp_path)

    with pytest.raises(FileExistsError):
        add_module("widget", tmp_path)


def test_delete_module(tmp_path):
    add_module("widget", tmp_path)

    removed = delete_module("widget", tmp_path)

    assert removed == tmp_path / "widget"
    assert not removed.exists()
    with pytest.raises(FileNotFoundError):
        delete_module("widget", tmp_path)


def test_cli_add_and_delete(tmp_path, capsys):
    assert main(["addmodule", "gizmo", "--dest", str(tmp_path)]) == 0
    assert (tmp_path / "gizmo" / "__init__.py").is_file()
    assert main(["addmodule", "gizmo", "--dest", str(tmp_path)]) == 1
    assert "already exists" in capsys.readouterr().err

    assert main(["deletemodule", "gizmo", "--dest", str(tmp_path)]) == 0
    assert main(["deletemodule", "gizmo", "--dest", str(tmp_path)]) == 1


def test_generated_module_serves_graphql(tmp_path, monkeypatch, db):
    add_module("gadget", tmp_path)
    monkeypatch.syspath_prepend(str(tmp_path))
    gadget = importlib.import_module("gadget")

    from crudkit.api.main import create_app
    from crudkit.features.post import module as post_module

    gadget.module.cruds[0].define_table()
    metadata.create_all(bind=database.engine)
    client = TestClient(create_app([post_module, gadget.module]))

    r = client.post(
        "/graphql",
        json={"query": 'mutation { addGadget(data: {name: "knob"}) { node { id name } errors { field } } }'},
    )
    assert r.status_code == 200, r.text
    assert r.json()["data"]["addGadget"] == {"node": {"id": 1, "name": "knob"}, "errors": None}

    r = client.post("/graphql", json={"query": "{ gadgets(limit: 5) { edges { name } pageInfo { totalCount } } }"})
    assert r.json()["data"]["gadgets"] == {"edges": [{"name": "knob"}], "pageInfo": {"totalCount": 1}}
    assert {"path": "/gadget", "label": "Gadget"} in client.get("/navigation").json()
