"""
FastAPI shell app: composes feature modules into routers, a GraphQL endpoint,
navigation and localization resources.
"""
import logging
import os
from typing import Iterable, List, Optional

from ariadne import gql, graphql_sync, make_executable_schema
from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)

from crudkit.db.context import CrudContext
from crudkit.db.database import get_db
from crudkit.features import enabled_modules
from crudkit.modules import FeatureModule, compose, find_resource, translate
from crudkit.utils.settings import get_settings

BASE_TYPE_DEFS = gql("""
    type Query {
        _empty: String
    }

    type Mutation {
        _empty: String
    }

    type FieldError {
        field: String!
        message: String!
    }

    type PageInfo {
        totalCount: Int
        hasNextPage: Boolean
    }

    type CountPayload {
        count: Int
        errors: [FieldError]
    }

    input WhereInput {
        id: Int!
    }

    input WhereManyInput {
        id_in: [Int!]!
    }

    input OrderByInput {
        column: String
        order: String
    }

    input FilterInput {
        searchText: String
    }
""")

origins = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
]


def build_schema(module: FeatureModule):
    return make_executable_schema([BASE_TYPE_DEFS, *module.type_defs], *module.resolvers)


def _graphql_router(module: FeatureModule) -> APIRouter:
    router = APIRouter(tags=["graphql"])
    schema = build_schema(module)

    @router.post("/graphql")
    def graphql_endpoint(payload: dict = Body(...), db: Session = Depends(get_db)):
        context = CrudContext(db, module.cruds, module.create_context(db))
        success, result = graphql_sync(
            schema,
            payload,
            context_value=context,
            debug=get_settings().graphql_debug,
        )
        return JSONResponse(result, status_code=200 if success else 400)

    return router


def _shell_router(module: FeatureModule) -> APIRouter:
    router = APIRouter(tags=["shell"])

    @router.get("/navigation")
    def navigation_endpoint(lang: Optional[str] = None) -> List[dict]:
        lang = lang or get_settings().default_locale
        return [
            {"path": item.path, "label": translate(module.localizations, lang, item.label_key)}
            for item in module.nav_items
        ]

    @router.get("/locales/{lang}/{ns}")
    def locale_endpoint(lang: str, ns: str) -> dict:
        resource = find_resource(module.localizations, lang, ns)
        if resource is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Locale resource not found")
        return resource

    return router


def create_app(modules: Optional[Iterable[FeatureModule]] = None) -> FastAPI:
    """Build the shell app from ``modules`` (the enabled features by default)."""
    module = compose(*(enabled_modules() if modules is None else modules))

    app = FastAPI(
        title="crudkit",
        description="Modular GraphQL/REST application shell backed by generic CRUD data access.",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in module.routers:
        app.include_router(router)
    app.include_router(_graphql_router(module))
    app.include_router(_shell_router(module))
    app.state.module = module
    logger.info("app_startup: log_level=%s modules=%s", LOG_LEVEL_NAME, module.members)
    return app


app = create_app()
