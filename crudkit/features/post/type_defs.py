from ariadne import gql

type_defs = gql("""
    type Post {
        id: Int!
        title: String
        content: String
        comments: [Comment]
    }

    type Comment {
        id: Int!
        content: String
        postId: Int
    }

    type Posts {
        edges: [Post]
        pageInfo: PageInfo
    }

    type PostPayload {
        node: Post
        errors: [FieldError]
    }

    type CommentPayload {
        node: Comment
        errors: [FieldError]
    }

    input CommentCreateInput {
        content: String!
        postId: Int
    }

    input CommentDataInput {
        content: String
    }

    input CommentUpdateInput {
        data: CommentDataInput!
        where: WhereInput!
    }

    input CommentsNestedInput {
        create: [CommentCreateInput!]
        update: [CommentUpdateInput!]
        delete: [WhereInput!]
    }

    input PostCreateInput {
        title: String!
        content: String!
        comments: CommentsNestedInput
    }

    input PostUpdateInput {
        title: String
        content: String
        comments: CommentsNestedInput
    }

    extend type Query {
        posts(limit: Int, offset: Int, orderBy: OrderByInput, filter: FilterInput): Posts
        post(where: WhereInput!): PostPayload
    }

    extend type Mutation {
        addPost(data: PostCreateInput!): PostPayload
        editPost(data: PostUpdateInput!, where: WhereInput!): PostPayload
        deletePost(where: WhereInput!): PostPayload
        sortPosts(data: [Int!]!): CountPayload
        deletePosts(where: WhereManyInput!): CountPayload
        updatePosts(data: PostUpdateInput!, where: WhereManyInput!): CountPayload
        addComment(data: CommentCreateInput!): CommentPayload
        deleteComment(where: WhereInput!): CommentPayload
    }
""")
