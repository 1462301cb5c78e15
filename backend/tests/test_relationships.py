import pytest
from httpx import AsyncClient


@pytest.fixture
async def board_with_components(create_board, create_component):
    """An ARM board with two applications and an interface"""
    board = await create_board("ARM")
    app_a = await create_component(board["id"], "APPLICATION", name="Case management")
    app_b = await create_component(board["id"], "APPLICATION", name="Payments")
    api = await create_component(board["id"], "INTERFACE", name="Payments API")
    return board, app_a, app_b, api


def _relationships_url(board_id: str) -> str:
    return f"/api/v1/boards/{board_id}/relationships"


@pytest.mark.asyncio
async def test_create_relationship(client: AsyncClient, auth_headers, board_with_components):
    """Test relationship creation"""
    board, app_a, app_b, _ = board_with_components

    response = await client.post(
        _relationships_url(board["id"]),
        json={
            "sourceComponentId": app_a["id"],
            "targetComponentId": app_b["id"],
            "type": "COMMUNICATES_WITH",
            "description": "Nightly settlement feed"
        },
        headers=auth_headers
    )

    assert response.status_code == 201
    data = response.json()
    assert data["boardId"] == board["id"]
    assert data["sourceComponentId"] == app_a["id"]
    assert data["targetComponentId"] == app_b["id"]
    assert data["type"] == "COMMUNICATES_WITH"
    assert data["description"] == "Nightly settlement feed"


@pytest.mark.asyncio
async def test_create_relationship_duplicate(client: AsyncClient, auth_headers, board_with_components):
    board, app_a, app_b, _ = board_with_components
    payload = {"sourceComponentId": app_a["id"], "targetComponentId": app_b["id"], "type": "DEPENDS_ON"}

    first = await client.post(_relationships_url(board["id"]), json=payload, headers=auth_headers)
    assert first.status_code == 201

    second = await client.post(
        _relationships_url(board["id"]),
        json={**payload, "type": "SUPPORTS"},
        headers=auth_headers
    )
    assert second.status_code == 400
    assert second.json()["detail"] == "Relationship already exists between these components"

    reverse = await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_b["id"], "targetComponentId": app_a["id"], "type": "DEPENDS_ON"},
        headers=auth_headers
    )
    assert reverse.status_code == 201


@pytest.mark.asyncio
async def test_create_relationship_self_loop(client: AsyncClient, auth_headers, board_with_components):
    board, app_a, _, _ = board_with_components

    response = await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": app_a["id"], "type": "CONTAINS"},
        headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "A component cannot have a relationship with itself"


@pytest.mark.asyncio
async def test_create_relationship_across_boards(
    client: AsyncClient, auth_headers, board_with_components, create_board, create_component
):
    board, app_a, _, _ = board_with_components
    other = await create_board("IRM")
    platform = await create_component(other["id"], "PLATFORM")

    response = await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": platform["id"], "type": "DEPENDS_ON"},
        headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Both components must belong to the same board"


@pytest.mark.asyncio
async def test_create_relationship_unknown_components(client: AsyncClient, auth_headers, board_with_components):
    board, app_a, _, _ = board_with_components
    missing = "22222222-2222-2222-2222-222222222222"

    no_source = await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": missing, "targetComponentId": app_a["id"], "type": "DEPENDS_ON"},
        headers=auth_headers
    )
    assert no_source.status_code == 404
    assert no_source.json()["detail"] == f"Source component with ID {missing} not found"

    no_target = await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": missing, "type": "DEPENDS_ON"},
        headers=auth_headers
    )
    assert no_target.status_code == 404
    assert no_target.json()["detail"] == f"Target component with ID {missing} not found"


@pytest.mark.asyncio
async def test_create_relationship_invalid_type(client: AsyncClient, auth_headers, board_with_components):
    board, app_a, app_b, _ = board_with_components

    response = await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": app_b["id"], "type": "OWNS"},
        headers=auth_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_relationship_on_other_users_board(
    client: AsyncClient, other_auth_headers, board_with_components
):
    board, app_a, app_b, _ = board_with_components

    response = await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": app_b["id"], "type": "DEPENDS_ON"},
        headers=other_auth_headers
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_relationships(client: AsyncClient, auth_headers, board_with_components):
    board, app_a, app_b, api = board_with_components
    await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": app_b["id"], "type": "DEPENDS_ON"},
        headers=auth_headers
    )
    await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_b["id"], "targetComponentId": api["id"], "type": "IMPLEMENTS"},
        headers=auth_headers
    )

    response = await client.get(_relationships_url(board["id"]), headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    newest = data["data"][0]
    assert newest["type"] == "IMPLEMENTS"
    assert newest["sourceComponent"]["name"] == "Payments"
    assert newest["targetComponent"]["name"] == "Payments API"

    filtered = await client.get(
        _relationships_url(board["id"]),
        params={"type": "DEPENDS_ON"},
        headers=auth_headers
    )
    assert filtered.json()["total"] == 1


@pytest.mark.asyncio
async def test_get_update_delete_relationship(client: AsyncClient, auth_headers, board_with_components):
    board, app_a, app_b, _ = board_with_components
    created = (await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": app_b["id"], "type": "DEPENDS_ON"},
        headers=auth_headers
    )).json()
    url = f"{_relationships_url(board['id'])}/{created['id']}"

    fetched = await client.get(url, headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["sourceComponent"]["id"] == app_a["id"]

    updated = await client.patch(
        url,
        json={"type": "SUPPORTS", "description": "Payments supports case work"},
        headers=auth_headers
    )
    assert updated.status_code == 200
    assert updated.json()["type"] == "SUPPORTS"
    assert updated.json()["description"] == "Payments supports case work"
    assert updated.json()["sourceComponentId"] == app_a["id"]

    deleted = await client.delete(url, headers=auth_headers)
    assert deleted.status_code == 204

    gone = await client.get(url, headers=auth_headers)
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_update_relationship_cannot_move_endpoints(client: AsyncClient, auth_headers, board_with_components):
    board, app_a, app_b, api = board_with_components
    created = (await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": app_b["id"], "type": "DEPENDS_ON"},
        headers=auth_headers
    )).json()

    response = await client.patch(
        f"{_relationships_url(board['id'])}/{created['id']}",
        json={"targetComponentId": api["id"]},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["targetComponentId"] == app_b["id"]


@pytest.mark.asyncio
async def test_relationship_of_other_user(
    client: AsyncClient, auth_headers, other_auth_headers, board_with_components
):
    board, app_a, app_b, _ = board_with_components
    created = (await client.post(
        _relationships_url(board["id"]),
        json={"sourceComponentId": app_a["id"], "targetComponentId": app_b["id"], "type": "DEPENDS_ON"},
        headers=auth_headers
    )).json()
    url = f"{_relationships_url(board['id'])}/{created['id']}"

    assert (await client.get(url, headers=other_auth_headers)).status_code == 403
    assert (await client.patch(url, json={"type": "SUPPORTS"}, headers=other_auth_headers)).status_code == 403
    assert (await client.delete(url, headers=other_auth_headers)).status_code == 403


@pytest.mark.asyncio
async def test_list_relationships_by_component(client: AsyncClient, auth_headers, board_with_components):
    board, app_a, app_b, api = board_with_components
    for source, target in ((app_a, app_b), (api, app_a), (app_b, api)):
        await client.post(
            _relationships_url(board["id"]),
            json={"sourceComponentId": source["id"], "targetComponentId": target["id"], "type": "DEPENDS_ON"},
            headers=auth_headers
        )

    response = await client.get(
        f"/api/v1/boards/component/{app_a['id']}/relationships",
        headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    for relationship in data:
        assert app_a["id"] in (relationship["sourceComponentId"], relationship["targetComponentId"])


@pytest.mark.asyncio
async def test_list_relationships_by_component_other_user(
    client: AsyncClient, other_auth_headers, board_with_components
):
    _, app_a, _, _ = board_with_components

    response = await client.get(
        f"/api/v1/boards/component/{app_a['id']}/relationships",
        headers=other_auth_headers
    )

    assert response.status_code == 403
