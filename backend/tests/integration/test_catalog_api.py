"""Folder and tag routes over HTTP."""

import pytest


@pytest.mark.parametrize("collection", ["folders", "tags"])
async def test_catalog_crud(async_client, auth_headers, collection):
    resp = await async_client.post(f"/api/{collection}", json={"name": "Work"}, headers=auth_headers)
    assert resp.status_code == 201
    entry = resp.json()
    assert resp.headers["Location"] == f"/api/{collection}/{entry['id']}"

    resp = await async_client.post(f"/api/{collection}", json={"name": "Work"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["reason"] == "DuplicateName"

    resp = await async_client.post(f"/api/{collection}", json={}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["location"] == "name"

    resp = await async_client.put(
        f"/api/{collection}/{entry['id']}", json={"name": "Play"}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Play"

    resp = await async_client.get(f"/api/{collection}", headers=auth_headers)
    assert [e["name"] for e in resp.json()] == ["Play"]

    resp = await async_client.delete(f"/api/{collection}/{entry['id']}", headers=auth_headers)
    assert resp.status_code == 204

    resp = await async_client.get(f"/api/{collection}/{entry['id']}", headers=auth_headers)
    assert resp.status_code == 404


async def test_deleting_folder_unfiles_its_notes(
    async_client, auth_headers, test_user, make_folder, make_note
):
    folder = await make_folder(test_user)
    note = await make_note(test_user, folder=folder)

    resp = await async_client.delete(f"/api/folders/{folder.id}", headers=auth_headers)
    assert resp.status_code == 204

    resp = await async_client.get(f"/api/notes/{note.id}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["folder_id"] is None


async def test_other_owners_entries_are_hidden(async_client, other_headers, test_user, make_tag):
    tag = await make_tag(test_user, "secret")

    assert (await async_client.get("/api/tags", headers=other_headers)).json() == []
    resp = await async_client.get(f"/api/tags/{tag.id}", headers=other_headers)
    assert resp.status_code == 404
