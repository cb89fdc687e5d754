"""
按资源分组的API调用
"""
from typing import Any, Dict, List, Optional

from sitecms.client.request import ApiClient, ApiResponse


class AuthApi:
    """认证相关API"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def login(self, username: str, password: str) -> ApiResponse:
        return await self.client.post("/auth/login", {"username": username, "password": password})

    async def logout(self) -> ApiResponse:
        return await self.client.post("/auth/logout")

    async def get_user_info(self) -> ApiResponse:
        return await self.client.get("/auth/me")

    async def change_password(self, old_password: str, new_password: str) -> ApiResponse:
        return await self.client.put(
            "/auth/password",
            {"oldPassword": old_password, "newPassword": new_password}
        )


class ContentApi:
    """文章/新闻/文档API，resource 为 articles、news 或 docs"""

    def __init__(self, client: ApiClient, resource: str):
        self.client = client
        self.resource = resource

    async def list(
        self,
        page: int = 1,
        page_size: int = 10,
        category: Optional[str] = None,
        keyword: Optional[str] = None
    ) -> ApiResponse:
        return await self.client.get(
            f"/{self.resource}",
            {"page": page, "pageSize": page_size, "category": category, "keyword": keyword}
        )

    async def get(self, id_or_slug: str) -> ApiResponse:
        return await self.client.get(f"/{self.resource}/{id_or_slug}")

    async def admin_list(
        self,
        page: int = 1,
        page_size: int = 10,
        category: Optional[str] = None,
        status: Optional[str] = None,
        keyword: Optional[str] = None
    ) -> ApiResponse:
        return await self.client.get(
            f"/admin/{self.resource}",
            {
                "page": page,
                "pageSize": page_size,
                "category": category,
                "status": status,
                "keyword": keyword
            }
        )

    async def admin_get(self, record_id: str) -> ApiResponse:
        return await self.client.get(f"/admin/{self.resource}/{record_id}")

    async def create(self, data: Dict[str, Any]) -> ApiResponse:
        return await self.client.post(f"/admin/{self.resource}", data)

    async def update(self, record_id: str, data: Dict[str, Any]) -> ApiResponse:
        return await self.client.put(f"/admin/{self.resource}/{record_id}", data)

    async def delete(self, record_id: str) -> ApiResponse:
        return await self.client.delete(f"/admin/{self.resource}/{record_id}")


class ContactApi:
    """联系表单API"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def submit(self, data: Dict[str, Any]) -> ApiResponse:
        return await self.client.post("/contact", data)

    async def list(self, page: int = 1, page_size: int = 10, status: Optional[str] = None) -> ApiResponse:
        return await self.client.get(
            "/admin/contacts",
            {"page": page, "pageSize": page_size, "status": status}
        )

    async def get(self, contact_id: str) -> ApiResponse:
        return await self.client.get(f"/admin/contacts/{contact_id}")

    async def update_status(self, contact_id: str, status: str) -> ApiResponse:
        return await self.client.put(f"/admin/contacts/{contact_id}", {"status": status})

    async def delete(self, contact_id: str) -> ApiResponse:
        return await self.client.delete(f"/admin/contacts/{contact_id}")


class SettingApi:
    """站点设置API"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_public(self) -> ApiResponse:
        return await self.client.get("/settings")

    async def get_all(self, group: Optional[str] = None) -> ApiResponse:
        return await self.client.get("/admin/settings", {"group": group})

    async def update(self, items: List[Dict[str, Any]]) -> ApiResponse:
        return await self.client.put("/admin/settings", items)

    async def delete(self, key: str) -> ApiResponse:
        return await self.client.delete(f"/admin/settings/{key}")


class SiteApi:
    """全部API的入口"""

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthApi(client)
        self.articles = ContentApi(client, "articles")
        self.news = ContentApi(client, "news")
        self.docs = ContentApi(client, "docs")
        self.contact = ContactApi(client)
        self.settings = SettingApi(client)
