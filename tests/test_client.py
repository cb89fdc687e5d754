"""
测试客户端：请求封装、资源API、状态存储与路由守卫
"""
import json

import httpx
import pytest
import pytest_asyncio

from conftest import TEST_PASSWORD
from sitecms.client import ApiClient, ApiRequestError, AppStore, LocalStorage, Route, Router, SiteApi, UserStore
from sitecms.client.storage import LOCALE_KEY, THEME_KEY, TOKEN_KEY, USER_KEY


@pytest.fixture
def storage():
    return LocalStorage()


@pytest_asyncio.fixture
async def api_client(app, storage):
    redirected = []
    client = ApiClient(
        base_url="http://test/api",
        storage=storage,
        transport=httpx.ASGITransport(app=app),
        on_unauthorized=lambda: redirected.append(True)
    )
    client.redirected = redirected
    async with client:
        yield client


@pytest.fixture
def site(api_client):
    return SiteApi(api_client)


@pytest.fixture
def user_store(site, storage):
    return UserStore(site.auth, storage)


# ----------------------------------------------------------------------
# LocalStorage
# ----------------------------------------------------------------------

def test_storage_persists_to_file(tmp_path):
    path = str(tmp_path / "storage.json")
    first = LocalStorage(path)
    first.set_item(TOKEN_KEY, "abc")
    first.set_item(THEME_KEY, "light")
    first.remove_item(THEME_KEY)

    second = LocalStorage(path)
    assert second.get_item(TOKEN_KEY) == "abc"
    assert THEME_KEY not in second

    second.clear()
    assert LocalStorage(path).get_item(TOKEN_KEY) is None


def test_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{broken", encoding="utf-8")
    assert LocalStorage(str(path)).get_item(TOKEN_KEY) is None


# ----------------------------------------------------------------------
# ApiClient / SiteApi
# ----------------------------------------------------------------------

async def test_login_and_authorized_calls(site, storage, make_user):
    await make_user("alice", role="admin")

    resp = await site.auth.login("alice", TEST_PASSWORD)
    assert resp.ok
    storage.set_item(TOKEN_KEY, resp.data["token"])

    me = await site.auth.get_user_info()
    assert me.ok
    assert me.data["username"] == "alice"

    created = await site.articles.create({"title": "Client", "content": "body", "status": "published"})
    assert created.code == 201

    listing = await site.articles.list(page_size=5)
    assert listing.data["pageSize"] == 5
    assert [item["title"] for item in listing.data["items"]] == ["Client"]

    fetched = await site.articles.get(created.data["slug"])
    assert fetched.data["viewCount"] == 1


async def test_unauthorized_response_clears_login_state(api_client, site, storage):
    storage.set_item(TOKEN_KEY, "expired-token")
    storage.set_item(USER_KEY, "{}")

    resp = await site.auth.get_user_info()

    assert resp.code == 401
    assert not resp.ok
    assert storage.get_item(TOKEN_KEY) is None
    assert storage.get_item(USER_KEY) is None
    assert api_client.redirected == [True]


async def test_error_envelope_is_returned_not_raised(site):
    resp = await site.contact.submit({"name": "x"})
    assert resp.code == 400
    assert resp.message


async def test_network_error_raises(storage):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with ApiClient(base_url="http://test/api", storage=storage, transport=httpx.MockTransport(refuse)) as client:
        with pytest.raises(ApiRequestError):
            await client.get("/settings")


async def test_get_adds_cache_buster_and_drops_none_params(storage):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"code": 200, "message": "ok", "data": None, "timestamp": 1})

    async with ApiClient(base_url="http://test/api", storage=storage, transport=httpx.MockTransport(handler)) as client:
        storage.set_item(TOKEN_KEY, "tok")
        await client.get("/articles", {"page": 1, "keyword": None})
        await client.post("/contact", {"name": "n"})

    get_request, post_request = seen
    assert get_request.url.path == "/api/articles"
    assert "_t" in get_request.url.params
    assert "keyword" not in get_request.url.params
    assert get_request.headers["Authorization"] == "Bearer tok"
    assert "_t" not in post_request.url.params


async def test_non_envelope_response(storage):
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
    async with ApiClient(base_url="http://test/api", storage=storage, transport=transport) as client:
        resp = await client.get("/settings")
    assert resp.code == 502
    assert resp.data is None


# ----------------------------------------------------------------------
# UserStore
# ----------------------------------------------------------------------

async def test_user_store_login_logout(user_store, storage, make_user):
    await make_user("editor1", role="editor")
    changes = []
    user_store.subscribe(lambda field, value: changes.append(field))

    assert user_store.username == "未登录"
    assert await user_store.login("editor1", "wrong") is False
    assert not user_store.is_logged_in

    assert await user_store.login("editor1", TEST_PASSWORD) is True
    assert user_store.is_logged_in
    assert user_store.is_editor and not user_store.is_admin
    assert user_store.has_permission("user")
    assert user_store.has_permission("editor")
    assert not user_store.has_permission("admin")
    assert storage.get_item(TOKEN_KEY) == user_store.token
    assert json.loads(storage.get_item(USER_KEY))["username"] == "editor1"
    assert "is_logged_in" in changes

    await user_store.logout()
    assert not user_store.is_logged_in
    assert user_store.token is None
    assert storage.get_item(TOKEN_KEY) is None


async def test_user_store_restores_and_verifies(site, storage, make_user):
    await make_user("alice", role="admin")
    first = UserStore(site.auth, storage)
    await first.login("alice", TEST_PASSWORD)

    restored = UserStore(site.auth, storage)
    await restored.init_user_state()
    assert restored.is_logged_in
    assert restored.is_admin
    assert restored.current_user["email"] == "alice@example.com"


async def test_user_store_drops_invalid_saved_token(site, storage):
    storage.set_item(TOKEN_KEY, "forged")
    storage.set_item(USER_KEY, json.dumps({"username": "eve", "role": "admin"}))

    store = UserStore(site.auth, storage)
    await store.init_user_state()

    assert not store.is_logged_in
    assert store.current_user is None
    assert storage.get_item(TOKEN_KEY) is None


async def test_user_store_change_password(user_store, make_user):
    await make_user("alice")
    await user_store.login("alice", TEST_PASSWORD)

    assert await user_store.change_password("wrong", "newpass1") is False
    assert await user_store.change_password(TEST_PASSWORD, "newpass1") is True


# ----------------------------------------------------------------------
# AppStore
# ----------------------------------------------------------------------

def test_app_store_loading_counter(storage):
    app_store = AppStore(storage)
    app_store.start_loading()
    app_store.start_loading()
    app_store.end_loading()
    assert app_store.loading
    app_store.end_loading()
    app_store.end_loading()
    assert app_store.loading_count == 0
    assert not app_store.loading

    app_store.set_loading(True)
    assert app_store.loading


def test_app_store_theme_and_locale_persist(storage):
    app_store = AppStore(storage)
    assert app_store.is_dark_theme and app_store.is_chinese

    app_store.toggle_theme()
    app_store.toggle_locale()
    assert storage.get_item(THEME_KEY) == "light"
    assert storage.get_item(LOCALE_KEY) == "en-US"

    with pytest.raises(ValueError):
        app_store.set_theme("pink")

    restored = AppStore(storage)
    restored.init_app()
    assert restored.theme == "light"
    assert restored.locale == "en-US"


def test_app_store_ignores_invalid_saved_values(storage):
    storage.set_item(THEME_KEY, "neon")
    app_store = AppStore(storage)
    app_store.init_app()
    assert app_store.theme == "dark"


def test_app_store_notifies_only_on_change(storage):
    app_store = AppStore(storage)
    events = []
    unsubscribe = app_store.subscribe(lambda field, value: events.append((field, value)))

    app_store.update_scroll_y(500)
    app_store.update_scroll_y(500)
    assert app_store.show_back_to_top
    app_store.toggle_sidebar()
    assert events == [("scroll_y", 500), ("sidebar_collapsed", True)]

    unsubscribe()
    app_store.toggle_mobile_menu()
    assert len(events) == 2
    assert app_store.mobile_menu_open
    app_store.close_mobile_menu()
    assert not app_store.mobile_menu_open


# ----------------------------------------------------------------------
# Router
# ----------------------------------------------------------------------

def test_router_resolves_params_and_catch_all(storage):
    router = Router(storage=storage)

    assert router.resolve("/").route.name == "Home"
    assert router.resolve("/news/abc").params == {"id": "abc"}
    assert router.resolve("/docs/getting-started?tab=1").route.name == "DocDetail"
    assert router.resolve("/admin").route.name == "AdminDashboard"
    assert router.resolve("/admin/articles/edit").route.name == "AdminArticleEdit"
    assert router.resolve("/admin/articles/edit/42").params == {"id": "42"}
    assert router.resolve("/no/such/page").route.name == "NotFound"


def test_guard_redirects_to_login_without_token(storage):
    router = Router(storage=storage)

    result = router.before_each("/admin/articles")
    assert not result.allowed
    assert result.redirect == "/admin/login?redirect=%2Fadmin%2Farticles"

    login = router.before_each("/admin/login")
    assert login.allowed
    assert "管理员登录" in login.title

    storage.set_item(TOKEN_KEY, "tok")
    assert router.before_each("/admin/articles").allowed


def test_guard_public_pages_and_unknown(storage):
    router = Router([Route("/", "Home", "首页")], storage=storage)
    assert router.before_each("/").allowed
    with pytest.raises(LookupError):
        router.before_each("/missing")
