"""Posts with nested comments."""
from crudkit.modules import FeatureModule, NavItem, load_localizations

from .resolvers import resolvers
from .routes import router
from .sql import CommentCrud, PostCrud
from .type_defs import type_defs

module = FeatureModule(
    name="post",
    routers=[router],
    nav_items=[NavItem(path="/posts", label_key="post:navLink")],
    localizations=[load_localizations(__name__, "post")],
    type_defs=[type_defs],
    resolvers=resolvers,
    cruds=[PostCrud, CommentCrud],
)
