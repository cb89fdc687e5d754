"""
测试联系表单API
"""

CONTACT = {
    "name": "张三",
    "email": "zhangsan@example.com",
    "company": "示例公司",
    "phone": "13800000000",
    "subject": "合作咨询",
    "message": "希望了解AI解决方案",
}


async def submit(client, **overrides):
    payload = dict(CONTACT, **overrides)
    return await client.post("/api/contact", json=payload)


async def test_submit_then_read_as_editor(client, editor_headers):
    resp = await submit(client)
    assert resp.status_code == 201
    assert resp.json()["code"] == 201
    contact_id = resp.json()["data"]["id"]

    detail = await client.get(f"/api/admin/contacts/{contact_id}", headers=editor_headers)
    assert detail.status_code == 200
    data = detail.json()["data"]
    assert data["status"] == "pending"
    assert data["repliedAt"] is None
    assert data["company"] == "示例公司"


async def test_submit_requires_fields(client):
    for field in ("name", "email", "subject", "message"):
        resp = await submit(client, **{field: ""})
        assert resp.status_code == 400, field

    resp = await client.post("/api/contact", json={"name": "only"})
    assert resp.status_code == 400


async def test_submit_rejects_bad_email(client):
    for email in ("plainaddress", "a@b", "a b@c.com", "@example.com"):
        resp = await submit(client, email=email)
        assert resp.status_code == 400, email


async def test_admin_contacts_require_login(client, user_headers):
    assert (await client.get("/api/admin/contacts")).status_code == 401
    assert (await client.get("/api/admin/contacts", headers=user_headers)).status_code == 403


async def test_replied_at_is_set_once(client, admin_headers):
    contact_id = (await submit(client)).json()["data"]["id"]
    url = f"/api/admin/contacts/{contact_id}"

    processing = (await client.put(url, json={"status": "processing"}, headers=admin_headers)).json()["data"]
    assert processing["status"] == "processing"
    assert processing["repliedAt"] is None

    replied = (await client.put(url, json={"status": "replied"}, headers=admin_headers)).json()["data"]
    first_replied_at = replied["repliedAt"]
    assert first_replied_at is not None

    closed = (await client.put(url, json={"status": "closed"}, headers=admin_headers)).json()["data"]
    assert closed["repliedAt"] == first_replied_at

    again = (await client.put(url, json={"status": "replied"}, headers=admin_headers)).json()["data"]
    assert again["repliedAt"] == first_replied_at


async def test_invalid_status(client, admin_headers):
    contact_id = (await submit(client)).json()["data"]["id"]
    for body in ({"status": "done"}, {}):
        resp = await client.put(f"/api/admin/contacts/{contact_id}", json=body, headers=admin_headers)
        assert resp.status_code == 400

    resp = await client.put("/api/admin/contacts/missing", json={"status": "processing"}, headers=admin_headers)
    assert resp.status_code == 404


async def test_list_with_status_filter(client, admin_headers):
    ids = [(await submit(client, subject=f"主题{i}")).json()["data"]["id"] for i in range(3)]
    await client.put(f"/api/admin/contacts/{ids[0]}", json={"status": "processing"}, headers=admin_headers)

    everything = (await client.get("/api/admin/contacts", headers=admin_headers)).json()["data"]
    assert everything["total"] == 3

    pending = (await client.get("/api/admin/contacts?status=pending", headers=admin_headers)).json()["data"]
    assert pending["total"] == 2
    assert ids[0] not in [item["id"] for item in pending["items"]]

    paged = (await client.get("/api/admin/contacts?pageSize=2&page=2", headers=admin_headers)).json()["data"]
    assert len(paged["items"]) == 1
    assert paged["totalPages"] == 2


async def test_delete_contact(client, admin_headers):
    contact_id = (await submit(client)).json()["data"]["id"]
    url = f"/api/admin/contacts/{contact_id}"

    assert (await client.delete(url, headers=admin_headers)).status_code == 200
    assert (await client.get(url, headers=admin_headers)).status_code == 404
    assert (await client.delete(url, headers=admin_headers)).status_code == 404
