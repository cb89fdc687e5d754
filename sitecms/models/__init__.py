from .user import User
from .article import Article, News
from .doc import Doc
from .contact import Contact
from .setting import Setting

__all__ = [
    "User",
    "Article",
    "News",
    "Doc",
    "Contact",
    "Setting"
]
