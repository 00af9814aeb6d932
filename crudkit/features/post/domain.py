from crudkit.db.schema import Field, Schema

Comment = Schema(
    "Comment",
    {
        "content": Field(str, search_text=True),
    },
)

Post = Schema(
    "Post",
    {
        "title": Field(str, search_text=True, sort_by=True),
        "content": Field(str, search_text=True),
        "comments": Field([Comment], optional=True),
    },
)
