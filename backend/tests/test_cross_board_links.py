import pytest
from httpx import AsyncClient


LINKS_URL = "/api/v1/cross-board-links"


@pytest.fixture
async def layered(create_board, create_component):
    """One component on each of a PRM, BRM, ARM and SRM board"""
    elements = {}
    for model, component_type in (
        ("PRM", "KPI"),
        ("BRM", "SERVICE"),
        ("ARM", "APPLICATION"),
        ("SRM", "SECURITY_CONTROL"),
    ):
        board = await create_board(model)
        elements[model] = await create_component(board["id"], component_type, name=f"{model}-1")
    return elements


async def _link(client: AsyncClient, headers: dict, source: dict, target: dict, **extra):
    return await client.post(
        LINKS_URL,
        json={"sourceComponentId": source["id"], "targetComponentId": target["id"], **extra},
        headers=headers
    )


@pytest.mark.asyncio
async def test_create_link(client: AsyncClient, auth_headers, layered):
    """Test cross-board link creation along an allowed transition"""
    response = await _link(
        client, auth_headers, layered["PRM"], layered["BRM"],
        description="KPI measures the service"
    )

    assert response.status_code == 201
    data = response.json()
    assert data["sourceComponentId"] == layered["PRM"]["id"]
    assert data["targetComponentId"] == layered["BRM"]["id"]
    assert data["sourceBoardRef"] == "PRM"
    assert data["targetBoardRef"] == "BRM"
    assert data["linkType"] == "manual"
    assert data["description"] == "KPI measures the service"


@pytest.mark.asyncio
async def test_create_link_with_link_type(client: AsyncClient, auth_headers, layered):
    response = await _link(client, auth_headers, layered["ARM"], layered["SRM"], linkType="inferred")

    assert response.status_code == 201
    assert response.json()["linkType"] == "inferred"


@pytest.mark.asyncio
async def test_create_link_invalid_transition(client: AsyncClient, auth_headers, layered):
    response = await _link(client, auth_headers, layered["PRM"], layered["ARM"])

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid transition from PRM to ARM. Valid targets for PRM are: BRM, DRM"
    assert body["error"]["code"] == "INVALID_TRANSITION"


@pytest.mark.asyncio
async def test_create_link_transitions_are_directed(client: AsyncClient, auth_headers, layered):
    response = await _link(client, auth_headers, layered["BRM"], layered["PRM"])

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_link_from_srm_always_fails(client: AsyncClient, auth_headers, layered):
    for target in ("PRM", "BRM", "ARM"):
        response = await _link(client, auth_headers, layered["SRM"], layered[target])
        assert response.status_code == 400
        assert response.json()["detail"].endswith("Valid targets for SRM are: none")


@pytest.mark.asyncio
async def test_create_link_same_board(client: AsyncClient, auth_headers, create_board, create_component):
    board = await create_board("PRM")
    kpi = await create_component(board["id"], "KPI")
    metric = await create_component(board["id"], "METRIC")

    response = await _link(client, auth_headers, kpi, metric)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "SAME_BOARD_LINK"


@pytest.mark.asyncio
async def test_create_link_duplicate(client: AsyncClient, auth_headers, layered):
    first = await _link(client, auth_headers, layered["PRM"], layered["BRM"])
    assert first.status_code == 201

    second = await _link(client, auth_headers, layered["PRM"], layered["BRM"])

    assert second.status_code == 400
    assert second.json()["detail"] == "Cross-board link already exists between these components"


@pytest.mark.asyncio
async def test_create_link_unknown_component(client: AsyncClient, auth_headers, layered):
    missing = {"id": "33333333-3333-3333-3333-333333333333"}

    response = await _link(client, auth_headers, layered["PRM"], missing)

    assert response.status_code == 404
    assert response.json()["detail"] == f"Target component with ID {missing['id']} not found"


@pytest.mark.asyncio
async def test_create_link_requires_both_boards_owned(
    client: AsyncClient, auth_headers, other_auth_headers, layered, create_board, create_component
):
    foreign_board = await create_board("BRM", headers=other_auth_headers)
    foreign = await create_component(foreign_board["id"], "SERVICE", headers=other_auth_headers)

    response = await _link(client, auth_headers, layered["PRM"], foreign)

    assert response.status_code == 403
    assert response.json()["detail"] == "You do not have permission to link components from these boards"


@pytest.mark.asyncio
async def test_list_links(client: AsyncClient, auth_headers, other_auth_headers, layered):
    await _link(client, auth_headers, layered["PRM"], layered["BRM"])
    await _link(client, auth_headers, layered["ARM"], layered["SRM"], linkType="automated")

    response = await client.get(LINKS_URL, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    newest = data["data"][0]
    assert newest["sourceComponent"]["board"]["referenceModel"] == "ARM"
    assert newest["targetComponent"]["board"]["referenceModel"] == "SRM"

    filtered = await client.get(LINKS_URL, params={"linkType": "automated"}, headers=auth_headers)
    assert filtered.json()["total"] == 1

    others = await client.get(LINKS_URL, headers=other_auth_headers)
    assert others.json() == {"data": [], "total": 0}


@pytest.mark.asyncio
async def test_get_update_delete_link(client: AsyncClient, auth_headers, layered):
    created = (await _link(client, auth_headers, layered["PRM"], layered["BRM"])).json()
    url = f"{LINKS_URL}/{created['id']}"

    fetched = await client.get(url, headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["sourceComponent"]["name"] == "PRM-1"
    assert fetched.json()["targetComponent"]["board"]["referenceModel"] == "BRM"

    updated = await client.patch(url, json={"description": "Revised"}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["description"] == "Revised"
    assert updated.json()["sourceBoardRef"] == "PRM"

    deleted = await client.delete(url, headers=auth_headers)
    assert deleted.status_code == 204
    assert (await client.get(url, headers=auth_headers)).status_code == 404


@pytest.mark.asyncio
async def test_link_of_other_user(client: AsyncClient, auth_headers, other_auth_headers, layered):
    created = (await _link(client, auth_headers, layered["PRM"], layered["BRM"])).json()
    url = f"{LINKS_URL}/{created['id']}"

    assert (await client.get(url, headers=other_auth_headers)).status_code == 403
    assert (await client.patch(url, json={"description": "x"}, headers=other_auth_headers)).status_code == 403
    assert (await client.delete(url, headers=other_auth_headers)).status_code == 403


@pytest.mark.asyncio
async def test_get_link_not_found(client: AsyncClient, auth_headers):
    response = await client.get(f"{LINKS_URL}/44444444-4444-4444-4444-444444444444", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_links_by_component(client: AsyncClient, auth_headers, layered):
    await _link(client, auth_headers, layered["PRM"], layered["BRM"])
    await _link(client, auth_headers, layered["BRM"], layered["ARM"])
    await _link(client, auth_headers, layered["ARM"], layered["SRM"])

    response = await client.get(f"{LINKS_URL}/component/{layered['BRM']['id']}", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    for link in data:
        assert layered["BRM"]["id"] in (link["sourceComponentId"], link["targetComponentId"])


@pytest.mark.asyncio
async def test_list_links_by_component_other_user(client: AsyncClient, other_auth_headers, layered):
    response = await client.get(f"{LINKS_URL}/component/{layered['PRM']['id']}", headers=other_auth_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_valid_transitions(client: AsyncClient, auth_headers):
    response = await client.get(f"{LINKS_URL}/valid-transitions", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == [
        {"from": "PRM", "to": ["BRM", "DRM"]},
        {"from": "BRM", "to": ["ARM", "IRM"]},
        {"from": "DRM", "to": ["ARM", "IRM"]},
        {"from": "ARM", "to": ["IRM", "SRM"]},
        {"from": "IRM", "to": ["SRM"]},
        {"from": "SRM", "to": []},
    ]


@pytest.mark.asyncio
async def test_valid_transitions_requires_auth(client: AsyncClient):
    response = await client.get(f"{LINKS_URL}/valid-transitions")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_deleting_component_removes_its_links(client: AsyncClient, auth_headers, layered):
    created = (await _link(client, auth_headers, layered["PRM"], layered["BRM"])).json()
    brm = layered["BRM"]

    response = await client.delete(
        f"/api/v1/boards/{brm['boardId']}/components/{brm['id']}",
        headers=auth_headers
    )
    assert response.status_code == 204

    assert (await client.get(f"{LINKS_URL}/{created['id']}", headers=auth_headers)).status_code == 404
