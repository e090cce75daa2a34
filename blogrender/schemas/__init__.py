from blogrender.schemas.schemas import (
    BlogPost, BlogPostBody, Reply,
    RenderOptions, LanguageOption, RenderedPost,
    RenderRequest, PreviewResponse, RequestLogResponse,
)

__all__ = [
    "BlogPost", "BlogPostBody", "Reply",
    "RenderOptions", "LanguageOption", "RenderedPost",
    "RenderRequest", "PreviewResponse", "RequestLogResponse",
]
