"""
客户端状态

UserStore 保存登录身份与令牌，AppStore 保存界面状态（主题、语言、加载中等）。
两者都通过 subscribe 通知状态变化，并把需要跨进程保留的字段写入 LocalStorage。
"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from sitecms.client.api import AuthApi
from sitecms.client.request import ApiRequestError
from sitecms.client.storage import LOCALE_KEY, THEME_KEY, TOKEN_KEY, USER_KEY, LocalStorage

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]

ROLE_LEVELS = {"admin": 3, "editor": 2, "user": 1}
THEMES = ("dark", "light")
LOCALES = ("zh-CN", "en-US")


class Store:
    """可订阅的状态容器"""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """注册监听器，返回取消订阅函数"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, field: str, value: Any) -> None:
        if getattr(self, field, None) == value:
            return
        setattr(self, field, value)
        for listener in list(self._listeners):
            listener(field, value)


class UserStore(Store):
    """用户登录状态"""

    def __init__(self, auth_api: AuthApi, storage: LocalStorage):
        super().__init__()
        self.auth_api = auth_api
        self.storage = storage
        self.current_user: Optional[Dict[str, Any]] = None
        self.token: Optional[str] = None
        self.is_logged_in = False
        self.login_loading = False

    # Getters

    @property
    def role(self) -> Optional[str]:
        return (self.current_user or {}).get("role")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_editor(self) -> bool:
        return self.role in ("admin", "editor")

    @property
    def username(self) -> str:
        return (self.current_user or {}).get("username") or "未登录"

    @property
    def avatar(self) -> str:
        return (self.current_user or {}).get("avatar") or "/default-avatar.png"

    # Actions

    async def login(self, username: str, password: str) -> bool:
        """登录成功后保存令牌与用户信息并持久化"""
        self._set("login_loading", True)
        try:
            response = await self.auth_api.login(username, password)
            if not response.ok or not response.data:
                return False

            self._set("current_user", response.data["user"])
            self._set("token", response.data["token"])
            self._set("is_logged_in", True)

            self.storage.set_item(TOKEN_KEY, self.token)
            self.storage.set_item(USER_KEY, json.dumps(self.current_user, ensure_ascii=False))
            return True
        except ApiRequestError as e:
            logger.error("登录失败: %s", e)
            return False
        finally:
            self._set("login_loading", False)

    async def logout(self) -> None:
        """通知服务端后清除本地状态；服务端失败不影响本地退出"""
        try:
            if self.token:
                await self.auth_api.logout()
        except ApiRequestError as e:
            logger.warning("登出请求失败: %s", e)
        finally:
            self.clear_user_state()

    def clear_user_state(self) -> None:
        self._set("current_user", None)
        self._set("token", None)
        self._set("is_logged_in", False)
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)

    async def fetch_user_info(self) -> Optional[Dict[str, Any]]:
        """用当前令牌拉取用户信息，令牌失效时清除登录态"""
        if not self.token:
            return None

        try:
            response = await self.auth_api.get_user_info()
        except ApiRequestError as e:
            logger.error("获取用户信息失败: %s", e)
            return None

        if response.ok:
            self._set("current_user", response.data)
            self.storage.set_item(USER_KEY, json.dumps(response.data, ensure_ascii=False))
            return response.data

        if response.code == 401:
            self.clear_user_state()
        return None

    async def change_password(self, old_password: str, new_password: str) -> bool:
        try:
            response = await self.auth_api.change_password(old_password, new_password)
        except ApiRequestError as e:
            logger.error("修改密码失败: %s", e)
            return False
        return response.ok

    def has_permission(self, required_role: str) -> bool:
        """角色层级：admin > editor > user"""
        if not self.current_user:
            return False
        return ROLE_LEVELS.get(self.role, 0) >= ROLE_LEVELS.get(required_role, 0)

    async def init_user_state(self) -> None:
        """从本地存储恢复登录态，再向服务端验证令牌"""
        saved_token = self.storage.get_item(TOKEN_KEY)
        saved_user = self.storage.get_item(USER_KEY)
        if not saved_token or not saved_user:
            return

        try:
            user = json.loads(saved_user)
        except ValueError:
            self.clear_user_state()
            return

        self._set("token", saved_token)
        self._set("current_user", user)
        self._set("is_logged_in", True)

        await self.fetch_user_info()


class AppStore(Store):
    """界面状态"""

    def __init__(self, storage: LocalStorage):
        super().__init__()
        self.storage = storage
        self.is_loading = False
        self.loading_count = 0
        self.theme = "dark"
        self.locale = "zh-CN"
        self.sidebar_collapsed = False
        self.mobile_menu_open = False
        self.scroll_y = 0

    # Getters

    @property
    def is_dark_theme(self) -> bool:
        return self.theme == "dark"

    @property
    def is_chinese(self) -> bool:
        return self.locale == "zh-CN"

    @property
    def loading(self) -> bool:
        return self.loading_count > 0 or self.is_loading

    @property
    def show_back_to_top(self) -> bool:
        return self.scroll_y > 300

    # Actions

    def set_loading(self, status: bool) -> None:
        self._set("is_loading", status)

    def start_loading(self) -> None:
        self._set("loading_count", self.loading_count + 1)

    def end_loading(self) -> None:
        if self.loading_count > 0:
            self._set("loading_count", self.loading_count - 1)

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"unsupported theme: {theme}")
        self._set("theme", theme)
        self.storage.set_item(THEME_KEY, theme)

    def toggle_theme(self) -> None:
        self.set_theme("light" if self.theme == "dark" else "dark")

    def set_locale(self, locale: str) -> None:
        if locale not in LOCALES:
            raise ValueError(f"unsupported locale: {locale}")
        self._set("locale", locale)
        self.storage.set_item(LOCALE_KEY, locale)

    def toggle_locale(self) -> None:
        self.set_locale("en-US" if self.locale == "zh-CN" else "zh-CN")

    def toggle_sidebar(self) -> None:
        self._set("sidebar_collapsed", not self.sidebar_collapsed)

    def set_sidebar_collapsed(self, collapsed: bool) -> None:
        self._set("sidebar_collapsed", collapsed)

    def toggle_mobile_menu(self) -> None:
        self._set("mobile_menu_open", not self.mobile_menu_open)

    def close_mobile_menu(self) -> None:
        self._set("mobile_menu_open", False)

    def update_scroll_y(self, y: int) -> None:
        self._set("scroll_y", y)

    def init_app(self) -> None:
        """恢复主题与语言设置，存储中的非法值忽略"""
        saved_theme = self.storage.get_item(THEME_KEY)
        if saved_theme in THEMES:
            self.set_theme(saved_theme)

        saved_locale = self.storage.get_item(LOCALE_KEY)
        if saved_locale in LOCALES:
            self.set_locale(saved_locale)
