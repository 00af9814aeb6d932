import pytest
from sqlalchemy import Integer, String

from crudkit.db.crud import Crud
from crudkit.db.schema import Field, Schema
from crudkit.db.tables import table_for


def test_schema_defaults_and_relations(catalog):
    product = catalog.product.schema

    assert product.keys() == ["id", "title", "description", "category", "variants"]
    assert product.table_name == "product"
    assert product.foreign_key == "productId"
    assert list(product.nested_fields()) == ["variants"]
    assert list(product.search_fields()) == ["title", "description"]
    assert product["category"].is_schema
    assert product["variants"].is_schema_list
    assert product["variants"].schema is catalog.variant.schema
    assert catalog.variant.schema.parents == [product]


def test_schema_sort_key_falls_back_to_name():
    assert Schema("Tag", {"label": Field(str)}).sort_key() == "name"
    assert Schema("Label", {"text": Field(str, sort_by=True)}).sort_key() == "text"


def test_schema_requires_name():
    with pytest.raises(ValueError):
        Schema("", {})


def test_multiword_schema_names_are_decamelized():
    schema = Schema("BlogEntry", {})

    assert schema.table_name == "blog_entry"
    assert schema.foreign_key == "blogEntryId"


def test_table_columns_follow_schema(catalog):
    product = table_for(catalog.product.schema)
    variant = table_for(catalog.variant.schema)

    assert set(product.c.keys()) == {"id", "title", "description", "category_id", "rank"}
    assert isinstance(product.c.title.type, String)
    assert product.c.title.nullable is False
    assert product.c.description.nullable is True
    assert isinstance(variant.c.product_id.type, Integer)
    assert {fk.target_fullname for fk in variant.c.product_id.foreign_keys} == {"product.id"}


def test_table_for_is_cached_per_prefix(catalog):
    schema = catalog.category.schema

    assert table_for(schema) is table_for(schema)
    assert table_for(schema, "tenant_").name == "tenant_category"


def test_crud_requires_schema(db):
    class Broken(Crud):
        pass

    with pytest.raises(TypeError):
        Broken(db)
