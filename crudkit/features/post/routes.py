"""
Posts REST endpoints.

Read-only views over the same CRUD layer the GraphQL resolvers use.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from crudkit.db.database import get_db

from .schemas import PostOut
from .sql import CommentCrud, PostCrud

router = APIRouter(prefix="/posts", tags=["posts"])

_POST_FIELDS = {"id": True, "title": True, "content": True}
_COMMENT_FIELDS = {"id": True, "content": True}


@router.get("/", response_model=List[PostOut])
def list_posts_endpoint(
    limit: int = 20,
    offset: int = 0,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    posts = PostCrud(db)
    args = {"limit": limit, "offset": offset}
    if search:
        args["filter"] = {"searchText": search}
    return posts.get_list(args, _POST_FIELDS)


@router.get("/{post_id}", response_model=PostOut)
def get_post_endpoint(post_id: int, db: Session = Depends(get_db)):
    posts = PostCrud(db)
    node = posts.get({"where": {"id": post_id}}, {"node": _POST_FIELDS})["node"]
    if node is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    node["comments"] = posts.get_by_ids([post_id], "post", CommentCrud(db), _COMMENT_FIELDS)[0]
    return node
