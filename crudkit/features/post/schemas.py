from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CommentOut(BaseModel):
    id: int
    content: Optional[str] = None
    post_id: Optional[int] = Field(default=None, alias="postId")
    model_config = ConfigDict(populate_by_name=True)


class PostOut(BaseModel):
    id: int
    title: Optional[str] = None
    content: Optional[str] = None
    comments: List[CommentOut] = Field(default_factory=list)
