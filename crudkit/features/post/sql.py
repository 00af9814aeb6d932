"""Data access for posts and their comments."""
from crudkit.db.crud import Crud

from .domain import Comment, Post


class PostCrud(Crud):
    schema = Post


class CommentCrud(Crud):
    schema = Comment
