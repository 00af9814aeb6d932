"""GraphQL resolvers for posts and comments."""
from ariadne import MutationType, ObjectType, QueryType

from crudkit.db.fields import parse_fields, sub_selection

query = QueryType()
mutation = MutationType()
post_type = ObjectType("Post")


@query.field("posts")
def resolve_posts(_, info, **args):
    ctx = info.context
    result = ctx["Post"].get_paginated(args, info)
    comment_fields = sub_selection(sub_selection(parse_fields(info), "edges"), "comments")
    if comment_fields and result["edges"]:
        # One query for the comments of every post on the page
        ids = [edge["id"] for edge in result["edges"]]
        batches = ctx["Post"].get_by_ids(ids, "post", ctx["Comment"], comment_fields)
        for edge, comments in zip(result["edges"], batches):
            edge["comments"] = comments
    return result


@query.field("post")
def resolve_post(_, info, **args):
    return info.context["Post"].get(args, info)


@post_type.field("comments")
def resolve_post_comments(post, info):
    if "comments" in post:
        return post["comments"]
    ctx = info.context
    return ctx["Post"].get_by_ids([post["id"]], "post", ctx["Comment"], info)[0]


@mutation.field("addPost")
def resolve_add_post(_, info, **args):
    ctx = info.context
    return ctx["Post"].create(args, ctx, info)


@mutation.field("editPost")
def resolve_edit_post(_, info, **args):
    ctx = info.context
    return ctx["Post"].update(args, ctx, info)


@mutation.field("deletePost")
def resolve_delete_post(_, info, **args):
    return info.context["Post"].delete(args, info)


@mutation.field("sortPosts")
def resolve_sort_posts(_, info, **args):
    return info.context["Post"].sort(args)


@mutation.field("deletePosts")
def resolve_delete_posts(_, info, **args):
    return info.context["Post"].delete_many(args)


@mutation.field("updatePosts")
def resolve_update_posts(_, info, **args):
    return info.context["Post"].update_many(args)


@mutation.field("addComment")
def resolve_add_comment(_, info, **args):
    ctx = info.context
    return ctx["Comment"].create(args, ctx, info)


@mutation.field("deleteComment")
def resolve_delete_comment(_, info, **args):
    return info.context["Comment"].delete(args, info)


resolvers = [query, mutation, post_type]
