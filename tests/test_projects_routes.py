"""
ProjectHub Backend — Project Endpoint Tests
============================================

What:  HTTP-level tests for /projects through the full app (middleware,
       dependencies, exception handlers) with a mock database.

What we test:
    ✅ Create returns 201 with camelCase fields and the caller as owner
    ✅ Invalid technology lists and unparseable links → 400 invalid_input, nothing persisted
    ✅ `?technologies=Rust` filters with `$all`
    ✅ Owner-only update/delete (403 for others)
    ✅ Comments, likes and bookmarks envelopes
    ✅ Unknown routes → 404 with the standard error body
"""

from types import SimpleNamespace

import pytest
from bson import ObjectId


def auth(token):
    return {"Authorization": f"Bearer {token}"}


DEMO_PROJECT = {
    "name": "Rusty CLI",
    "description": "A command line tool",
    "github": "https://github.com/alice/rusty-cli",
    "technologies": ["Rust"],
    "deploymentLink": "https://rusty.example.com",
}


class TestCreateProject:

    @pytest.mark.asyncio
    async def test_create_project(self, test_client, mock_db, alice, alice_token):
        response = await test_client.post("/projects", json=DEMO_PROJECT, headers=auth(alice_token))

        assert response.status_code == 201
        project = response.json()["project"]
        assert project["name"] == "Rusty CLI"
        assert project["technologies"] == ["Rust"]
        assert project["deploymentLink"] == "https://rusty.example.com"
        assert project["owner"] == {"id": alice.id, "username": "alice"}
        assert project["likes"] == [] and project["savedBy"] == [] and project["comments"] == []
        assert ObjectId.is_valid(project["id"])
        assert "X-Request-ID" in response.headers
        mock_db["projects"].insert_one.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_minimal_project_defaults_optional_fields_to_null(self, test_client, alice_token):
        response = await test_client.post(
            "/projects",
            json={"name": "demo", "technologies": ["JavaScript"]},
            headers=auth(alice_token),
        )

        assert response.status_code == 201
        project = response.json()["project"]
        assert project["name"] == "demo"
        assert project["technologies"] == ["JavaScript"]
        assert project["description"] is None
        assert project["github"] is None
        assert project["deploymentLink"] is None

    @pytest.mark.asyncio
    async def test_technologies_are_canonicalized(self, test_client, alice_token):
        payload = dict(DEMO_PROJECT, technologies=["rust", "javascript"])
        response = await test_client.post("/projects", json=payload, headers=auth(alice_token))

        assert response.status_code == 201
        assert response.json()["project"]["technologies"] == ["Rust", "JavaScript"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("technologies", [[], ["Cobol"], ["Rust", "Rust"]])
    async def test_invalid_technologies_are_rejected(self, test_client, mock_db, alice_token, technologies):
        payload = dict(DEMO_PROJECT, technologies=technologies)
        response = await test_client.post("/projects", json=payload, headers=auth(alice_token))

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid_input"
        assert body["details"]["field"] == "technologies"
        mock_db["projects"].insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value, label",
        [
            ("deploymentLink", "http://[oops", "project deployment link"),
            ("github", "https://[github.com/alice", "github link"),
        ],
    )
    async def test_unparseable_links_are_rejected(self, test_client, mock_db, alice_token, field, value, label):
        payload = dict(DEMO_PROJECT, **{field: value})
        response = await test_client.post("/projects", json=payload, headers=auth(alice_token))

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "invalid_input"
        assert body["details"]["field"] == label
        mock_db["projects"].insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_name_is_rejected(self, test_client, alice_token):
        payload = {key: value for key, value in DEMO_PROJECT.items() if key != "name"}
        response = await test_client.post("/projects", json=payload, headers=auth(alice_token))

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid project name: is required"

    @pytest.mark.asyncio
    async def test_wrong_json_type_is_a_400(self, test_client, alice_token):
        payload = dict(DEMO_PROJECT, technologies="Rust")
        response = await test_client.post("/projects", json=payload, headers=auth(alice_token))

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    @pytest.mark.asyncio
    async def test_create_requires_token(self, test_client, mock_db):
        response = await test_client.post("/projects", json=DEMO_PROJECT)

        assert response.status_code == 401
        mock_db["projects"].insert_one.assert_not_awaited()


class TestListAndGetProjects:

    @pytest.mark.asyncio
    async def test_filter_by_technology(self, test_client, mock_db, project_doc):
        mock_db["projects"].cursor.to_list.return_value = [project_doc]

        response = await test_client.get("/projects", params={"technologies": "Rust"})

        assert response.status_code == 200
        assert [p["name"] for p in response.json()["projects"]] == ["Rusty CLI"]
        query = mock_db["projects"].find.call_args.args[0]
        assert query == {"technologies": {"$all": ["Rust"]}}

    @pytest.mark.asyncio
    async def test_unknown_technology_filter_is_a_400(self, test_client, mock_db):
        response = await test_client.get("/projects", params={"technologies": "Cobol"})

        assert response.status_code == 400
        mock_db["projects"].find.assert_not_called()

    @pytest.mark.asyncio
    async def test_technology_vocabulary(self, test_client):
        response = await test_client.get("/projects/technologies")

        assert response.status_code == 200
        assert "Rust" in response.json()["technologies"]

    @pytest.mark.asyncio
    async def test_get_project(self, test_client, mock_db, project_doc):
        mock_db["projects"].find_one.return_value = project_doc

        response = await test_client.get(f"/projects/{project_doc['_id']}")

        assert response.status_code == 200
        assert response.json()["project"]["id"] == str(project_doc["_id"])

    @pytest.mark.asyncio
    async def test_get_missing_project(self, test_client, mock_db):
        mock_db["projects"].find_one.return_value = None

        response = await test_client.get(f"/projects/{ObjectId()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_malformed_project_id(self, test_client):
        response = await test_client.get("/projects/not-an-id")

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "project id"


class TestUpdateAndDeleteProject:

    @pytest.mark.asyncio
    async def test_owner_updates(self, test_client, mock_db, project_doc, alice_token):
        mock_db["projects"].find_one.return_value = project_doc
        mock_db["projects"].find_one_and_update.return_value = dict(project_doc, name="Renamed")

        response = await test_client.put(
            f"/projects/{project_doc['_id']}",
            json=dict(DEMO_PROJECT, name="Renamed"),
            headers=auth(alice_token),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["project"]["name"] == "Renamed"
        assert body["message"] == "Project updated successfully"

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, test_client, mock_db, project_doc, bob_token):
        mock_db["projects"].find_one.return_value = project_doc

        response = await test_client.put(
            f"/projects/{project_doc['_id']}", json=DEMO_PROJECT, headers=auth(bob_token)
        )

        assert response.status_code == 403
        mock_db["projects"].find_one_and_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_deletes(self, test_client, mock_db, project_doc, alice_token):
        mock_db["projects"].find_one.return_value = project_doc
        mock_db["projects"].delete_one.return_value = SimpleNamespace(deleted_count=1)
        mock_db["comments"].delete_many.return_value = SimpleNamespace(deleted_count=2)

        response = await test_client.delete(f"/projects/{project_doc['_id']}", headers=auth(alice_token))

        assert response.status_code == 200
        assert response.json() == {
            "status": {"id": str(project_doc["_id"]), "deleted": True, "commentsDeleted": 2}
        }

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, test_client, mock_db, project_doc, bob_token):
        mock_db["projects"].find_one.return_value = project_doc

        response = await test_client.delete(f"/projects/{project_doc['_id']}", headers=auth(bob_token))

        assert response.status_code == 403
        mock_db["projects"].delete_one.assert_not_awaited()


class TestCommentsLikesBookmarks:

    @pytest.mark.asyncio
    async def test_add_comment(self, test_client, mock_db, project_doc, bob, bob_token):
        mock_db["projects"].find_one.return_value = {"_id": project_doc["_id"]}
        mock_db["projects"].update_one.return_value = SimpleNamespace(matched_count=1)

        response = await test_client.post(
            f"/projects/{project_doc['_id']}/comments",
            json={"comment": "  Nice work  "},
            headers=auth(bob_token),
        )

        assert response.status_code == 201
        comment = response.json()["comment"]
        assert comment["comment"] == "Nice work"
        assert comment["projectId"] == str(project_doc["_id"])
        assert comment["owner"]["id"] == bob.id

    @pytest.mark.asyncio
    async def test_empty_comment_is_rejected(self, test_client, mock_db, project_doc, bob_token):
        response = await test_client.post(
            f"/projects/{project_doc['_id']}/comments", json={"comment": "   "}, headers=auth(bob_token)
        )

        assert response.status_code == 400
        mock_db["comments"].insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_comments(self, test_client, mock_db, project_doc):
        mock_db["projects"].find_one.return_value = {"_id": project_doc["_id"]}

        response = await test_client.get(f"/projects/{project_doc['_id']}/comments")

        assert response.status_code == 200
        assert response.json() == {"comments": []}

    @pytest.mark.asyncio
    async def test_like_and_unlike(self, test_client, mock_db, project_doc, alice, alice_token):
        url = f"/projects/{project_doc['_id']}/likes"
        mock_db["projects"].find_one_and_update.return_value = {"_id": project_doc["_id"], "likes": [alice.id]}
        liked = await test_client.post(url, headers=auth(alice_token))

        mock_db["projects"].find_one_and_update.return_value = {"_id": project_doc["_id"], "likes": []}
        unliked = await test_client.delete(url, headers=auth(alice_token))

        assert liked.status_code == 201 and liked.json() == {"likes": [alice.id]}
        assert unliked.status_code == 200 and unliked.json() == {"likes": []}

    @pytest.mark.asyncio
    async def test_like_without_header_is_401(self, test_client, project_doc):
        response = await test_client.post(f"/projects/{project_doc['_id']}/likes")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_bookmark(self, test_client, mock_db, project_doc, bob, bob_token):
        mock_db["projects"].find_one_and_update.return_value = {"_id": project_doc["_id"], "savedBy": [bob.id]}

        response = await test_client.post(f"/projects/{project_doc['_id']}/bookmark", headers=auth(bob_token))

        assert response.status_code == 201
        assert response.json() == {"savedBy": [bob.id]}


class TestUnmatchedRoutes:

    @pytest.mark.asyncio
    async def test_unknown_path_is_404(self, test_client):
        response = await test_client.get("/nowhere")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "Not found"
