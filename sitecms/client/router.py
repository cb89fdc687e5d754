"""
客户端路由表与导航守卫
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlencode, urlsplit

from sitecms.client.storage import TOKEN_KEY, LocalStorage

SITE_SUFFIX = " - 墨云科技"


@dataclass
class Route:
    """路由记录，path 支持 :param、:param? 和 :pathMatch(.*)*"""
    path: str
    name: str
    title: Optional[str] = None
    description: Optional[str] = None
    require_auth: bool = False
    children: List["Route"] = field(default_factory=list)


@dataclass
class RouteMatch:
    route: Route
    params: Dict[str, str]
    full_path: str
    require_auth: bool


@dataclass
class NavigationResult:
    """守卫结果：redirect 为空表示放行"""
    match: RouteMatch
    title: Optional[str] = None
    redirect: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.redirect is None


PUBLIC_ROUTES = [
    Route("/", "Home", "首页" + SITE_SUFFIX, "墨云科技官方网站，人工智能技术前沿开发者"),
    Route("/about", "About", "关于我们" + SITE_SUFFIX, "了解墨云科技的发展历程、企业文化和团队"),
    Route("/services", "Services", "服务与产品" + SITE_SUFFIX, "墨云科技提供的软件开发与人工智能服务"),
    Route("/dream-builder", "DreamBuilder", "筑梦计划" + SITE_SUFFIX, "帮助小团队使用人工智能技术快速开发产品"),
    Route("/news", "News", "新闻动态" + SITE_SUFFIX, "墨云科技最新动态与行业资讯"),
    Route("/news/:id", "NewsDetail", "新闻详情" + SITE_SUFFIX),
    Route("/docs", "Docs", "技术文档" + SITE_SUFFIX, "墨云科技技术文档与开发指南", children=[
        Route(":id", "DocDetail", "文档详情" + SITE_SUFFIX),
    ]),
    Route("/contact", "Contact", "联系我们" + SITE_SUFFIX, "与墨云科技取得联系"),
    Route("/charity", "Charity", "公益项目" + SITE_SUFFIX, "墨云科技公益项目与社会责任"),
]

ADMIN_ROUTES = [
    Route("/admin", "Admin", "后台管理" + SITE_SUFFIX, require_auth=True, children=[
        Route("", "AdminDashboard", "仪表盘 - 后台管理"),
        Route("articles", "AdminArticles", "文章管理 - 后台管理"),
        Route("articles/edit/:id?", "AdminArticleEdit", "编辑文章 - 后台管理"),
        Route("docs", "AdminDocs", "文档管理 - 后台管理"),
        Route("contacts", "AdminContacts", "联系记录 - 后台管理"),
        Route("settings", "AdminSettings", "网站设置 - 后台管理"),
    ]),
    Route("/admin/login", "AdminLogin", "管理员登录" + SITE_SUFFIX),
]

ERROR_ROUTES = [
    Route("/:pathMatch(.*)*", "NotFound", "页面未找到" + SITE_SUFFIX),
]

ROUTES = PUBLIC_ROUTES + ADMIN_ROUTES + ERROR_ROUTES

_PARAM = re.compile(r":(\w+)(\(\.\*\)\*|\?)?")


def _join(parent: str, child: str) -> str:
    if not child:
        return parent
    if child.startswith("/"):
        return child
    return parent.rstrip("/") + "/" + child


def compile_path(path: str) -> re.Pattern:
    """把路由路径编译为正则"""
    pattern = ""
    pos = 0
    for m in _PARAM.finditer(path):
        pattern += re.escape(path[pos:m.start()])
        name, modifier = m.group(1), m.group(2)
        if modifier == "?":
            # 可选参数连同前面的斜杠一起可省略
            if pattern.endswith("/"):
                pattern = pattern[:-1]
            pattern += f"(?:/(?P<{name}>[^/]+))?"
        elif modifier:
            pattern += f"(?P<{name}>.*)"
        else:
            pattern += f"(?P<{name}>[^/]+)"
        pos = m.end()
    pattern += re.escape(path[pos:])
    return re.compile(f"^{pattern}/?$")


class Router:
    """按声明顺序匹配路由，父路由的 require_auth 由子路由继承"""

    def __init__(self, routes: List[Route] = None, storage: Optional[LocalStorage] = None):
        self.storage = storage or LocalStorage()
        self._table: List[Tuple[re.Pattern, Route, bool]] = []
        for route in routes if routes is not None else ROUTES:
            self._register(route, "", False)

    def _register(self, route: Route, parent_path: str, parent_auth: bool) -> None:
        full = _join(parent_path, route.path) if parent_path else route.path
        require_auth = parent_auth or route.require_auth
        # 有空路径子路由时，父路径由子路由承接
        if not any(child.path == "" for child in route.children):
            self._table.append((compile_path(full), route, require_auth))
        for child in route.children:
            self._register(child, full, require_auth)

    def resolve(self, path: str) -> Optional[RouteMatch]:
        """匹配路径，返回路由和参数"""
        pure_path = urlsplit(path).path or "/"
        for pattern, route, require_auth in self._table:
            m = pattern.match(pure_path)
            if m:
                params = {k: v for k, v in m.groupdict().items() if v is not None}
                return RouteMatch(route=route, params=params, full_path=path, require_auth=require_auth)
        return None

    def before_each(self, path: str) -> NavigationResult:
        """
        导航守卫

        需要登录的路由在本地没有令牌时重定向到登录页，并带上原始地址。
        """
        match = self.resolve(path)
        if match is None:
            raise LookupError(f"no route matches {path}")

        if match.require_auth and not self.storage.get_item(TOKEN_KEY):
            redirect = "/admin/login?" + urlencode({"redirect": path})
            return NavigationResult(match=match, title=match.route.title, redirect=redirect)

        return NavigationResult(match=match, title=match.route.title)
