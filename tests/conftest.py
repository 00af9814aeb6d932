import pytest
from fastapi.testclient import TestClient

from crudkit.db import database
from crudkit.db.crud import Crud
from crudkit.db.schema import Field, Schema
from crudkit.db.tables import metadata
from crudkit.utils.settings import refresh_settings_cache
import crudkit.features  # noqa: F401 - registers feature tables

# Catalog schemas exercising to-one joins, nested collections and prefixes
Category = Schema("Category", {"name": Field(str, sort_by=True)})
Variant = Schema(
    "Variant",
    {
        "sku": Field(str, search_text=True),
        "price": Field(float, optional=True),
    },
)
Product = Schema(
    "Product",
    {
        "title": Field(str, search_text=True),
        "description": Field(str, search_text=True, optional=True),
        "category": Field(Category, optional=True),
        "variants": Field([Variant], optional=True),
    },
)


class CategoryCrud(Crud):
    schema = Category


class VariantCrud(Crud):
    schema = Variant


class ProductCrud(Crud):
    schema = Product


class TenantCategoryCrud(Crud):
    schema = Category
    prefix = "tenant_"


for _crud in (CategoryCrud, VariantCrud, ProductCrud, TenantCategoryCrud):
    _crud.define_table()


class Catalog:
    category = CategoryCrud
    variant = VariantCrud
    product = ProductCrud
    tenant_category = TenantCategoryCrud


@pytest.fixture(autouse=True)
def _fresh_settings():
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest.fixture
def db():
    metadata.create_all(bind=database.engine)
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        metadata.drop_all(bind=database.engine)


@pytest.fixture
def catalog():
    return Catalog


@pytest.fixture
def client(db):
    from crudkit.api.main import create_app

    return TestClient(create_app())
