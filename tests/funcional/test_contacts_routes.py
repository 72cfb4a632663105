import pytest
from httpx import AsyncClient
from fastapi import status


ADA = {"name": "Ada", "email": "ada@x.com", "phone": "555-0100"}


async def create(test_client: AsyncClient, headers: dict, data: dict = ADA) -> dict:
    response = await test_client.post("/api/contacts/", json=data, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


@pytest.mark.asyncio
async def test_create_contact_then_list(test_client: AsyncClient, auth_headers: dict, test_user):
    created = await create(test_client, auth_headers)

    assert created["name"] == "Ada"
    assert created["email"] == "ada@x.com"
    assert created["phone"] == "555-0100"
    assert created["user_id"] == test_user.id
    assert len(created["_id"]) == 24
    assert created["createdAt"].endswith("Z")
    assert created["updatedAt"].endswith("Z")
    assert "id" not in created

    response = await test_client.get("/api/contacts/", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    contacts = response.json()
    assert len(contacts) == 1
    assert [c["_id"] for c in contacts].count(created["_id"]) == 1
    assert contacts[0]["name"] == "Ada"


@pytest.mark.asyncio
async def test_list_keeps_creation_order(test_client: AsyncClient, auth_headers: dict):
    for name in ("Charlie", "Lucy", "Linus"):
        await create(test_client, auth_headers, {"name": name, "email": f"{name.lower()}@example.com",
                                                 "phone": "1111111111"})

    response = await test_client.get("/api/contacts/", headers=auth_headers)
    assert [c["name"] for c in response.json()] == ["Charlie", "Lucy", "Linus"]


@pytest.mark.asyncio
async def test_get_contact_by_id(test_client: AsyncClient, auth_headers: dict):
    created = await create(test_client, auth_headers)

    response = await test_client.get(f"/api/contacts/{created['_id']}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == created


@pytest.mark.asyncio
async def test_update_contact_changes_only_sent_fields(test_client: AsyncClient, auth_headers: dict):
    created = await create(test_client, auth_headers)

    response = await test_client.put(f"/api/contacts/{created['_id']}", json={"phone": "555-0200"},
                                     headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["phone"] == "555-0200"

    contacts = (await test_client.get("/api/contacts/", headers=auth_headers)).json()
    assert len(contacts) == 1
    assert contacts[0]["phone"] == "555-0200"
    assert contacts[0]["name"] == "Ada"
    assert contacts[0]["email"] == "ada@x.com"
    assert contacts[0]["_id"] == created["_id"]
    assert contacts[0]["createdAt"] == created["createdAt"]


@pytest.mark.asyncio
async def test_update_contact_with_full_body(test_client: AsyncClient, auth_headers: dict):
    created = await create(test_client, auth_headers)
    body = {"name": "Ada Lovelace", "email": "lovelace@x.com", "phone": "555-0300"}

    response = await test_client.put(f"/api/contacts/{created['_id']}", json=body, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    updated = response.json()
    assert {key: updated[key] for key in body} == body


@pytest.mark.asyncio
async def test_delete_contact(test_client: AsyncClient, auth_headers: dict):
    created = await create(test_client, auth_headers)

    response = await test_client.delete(f"/api/contacts/{created['_id']}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["_id"] == created["_id"]

    contacts = (await test_client.get("/api/contacts/", headers=auth_headers)).json()
    assert contacts == []

    again = await test_client.delete(f"/api/contacts/{created['_id']}", headers=auth_headers)
    assert again.status_code == status.HTTP_404_NOT_FOUND
    assert again.json()["detail"] == "Contact not found"

    update = await test_client.put(f"/api/contacts/{created['_id']}", json={"phone": "1"}, headers=auth_headers)
    assert update.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_contacts_are_scoped_to_their_owner(test_client: AsyncClient, auth_headers: dict,
                                                   other_auth_headers: dict):
    created = await create(test_client, auth_headers)
    url = f"/api/contacts/{created['_id']}"

    listing = await test_client.get("/api/contacts/", headers=other_auth_headers)
    assert listing.json() == []

    read = await test_client.get(url, headers=other_auth_headers)
    assert read.status_code == status.HTTP_403_FORBIDDEN

    update = await test_client.put(url, json={"name": "Mallory"}, headers=other_auth_headers)
    assert update.status_code == status.HTTP_403_FORBIDDEN

    delete = await test_client.delete(url, headers=other_auth_headers)
    assert delete.status_code == status.HTTP_403_FORBIDDEN

    owner_view = (await test_client.get(url, headers=auth_headers)).json()
    assert owner_view["name"] == "Ada"


@pytest.mark.asyncio
async def test_create_contact_validation_error(test_client: AsyncClient, auth_headers: dict):
    response = await test_client.post("/api/contacts/", json={"name": "Invalid", "email": "invalid-email",
                                                              "phone": "1234567890"}, headers=auth_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert any("valid email address" in error["msg"] for error in response.json()["detail"])


@pytest.mark.asyncio
async def test_create_contact_missing_field(test_client: AsyncClient, auth_headers: dict):
    response = await test_client.post("/api/contacts/", json={"name": "No Phone", "email": "nophone@x.com"},
                                      headers=auth_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_get_contact_not_found(test_client: AsyncClient, auth_headers: dict):
    response = await test_client.get("/api/contacts/ffffffffffffffffffffffff", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Contact not found"


@pytest.mark.asyncio
async def test_contacts_unauthorized_access(test_client: AsyncClient):
    response = await test_client.post("/api/contacts/", json=ADA)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = await test_client.get("/api/contacts/")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["www-authenticate"] == "Bearer"

    response = await test_client.get("/api/contacts/abc")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = await test_client.put("/api/contacts/abc", json=ADA)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = await test_client.delete("/api/contacts/abc")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_contacts_invalid_token(test_client: AsyncClient):
    response = await test_client.get("/api/contacts/", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Could not validate credentials"
