from coffeelog.domains.feed.entities import Author, Comment, Post, extract_hashtags, merge_hashtags
from coffeelog.domains.feed.schemas import (
    PostCreate, PostUpdate, PostResponse, PostPage,
    CommentCreate, CommentUpdate, CommentResponse, CommentPage, LikeResponse
)
from coffeelog.domains.feed.services import FeedService

__all__ = [
    "Author", "Comment", "Post", "extract_hashtags", "merge_hashtags",
    "PostCreate", "PostUpdate", "PostResponse", "PostPage",
    "CommentCreate", "CommentUpdate", "CommentResponse", "CommentPage", "LikeResponse",
    "FeedService"
]
