import pytest

from backend.domain.models.plan import Plan
from tests.conftest import auth_headers, seed_chatbot, seed_tenant


@pytest.mark.asyncio
async def test_list_returns_only_own_chatbots(client, tenant_repo, chatbot_repo):
    owner = await seed_tenant(tenant_repo)
    other = await seed_tenant(tenant_repo)
    mine = await seed_chatbot(chatbot_repo, owner.tenant_id, name="Mine")
    await seed_chatbot(chatbot_repo, other.tenant_id, name="Theirs")

    response = await client.get("/api/chatbots", headers=auth_headers(owner))

    assert response.status_code == 200
    body = response.json()
    assert [b["id"] for b in body] == [mine.chatbot_id]
    assert body[0]["apiKey"] == mine.api_key
    assert body[0]["userId"] == owner.tenant_id


@pytest.mark.asyncio
async def test_create_chatbot_within_plan_ceiling(client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo, plan=Plan.pro())
    await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await client.post(
        "/api/chatbots", json={"name": "Sales Bot"}, headers=auth_headers(tenant)
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Sales Bot"
    assert body["instructions"] == "You are a helpful assistant named Sales Bot."
    assert body["apiKey"].startswith("cfai_")
    assert await chatbot_repo.count_by_tenant(tenant.tenant_id) == 2


@pytest.mark.asyncio
async def test_create_chatbot_at_ceiling_is_forbidden(client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await client.post(
        "/api/chatbots", json={"name": "Second Bot"}, headers=auth_headers(tenant)
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "You have reached your chatbot limit for this plan."
    assert await chatbot_repo.count_by_tenant(tenant.tenant_id) == 1


@pytest.mark.asyncio
async def test_create_chatbot_requires_authentication(client):
    response = await client.post("/api/chatbots", json={"name": "Bot"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_patch_updates_only_sent_fields(client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id, instructions="Be brief.")

    response = await client.patch(
        f"/api/chatbots/{bot.chatbot_id}",
        json={
            "welcomeMessage": "Welcome!",
            "color": "#FF0000",
            "authorizedDomains": [" acme.com ", ""],
            "qa": [{"question": "Price?", "answer": "Free."}],
        },
        headers=auth_headers(tenant),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["welcomeMessage"] == "Welcome!"
    assert body["color"] == "#FF0000"
    assert body["authorizedDomains"] == ["acme.com"]
    assert body["qa"] == [{"question": "Price?", "answer": "Free."}]
    assert body["instructions"] == "Be brief."
    assert body["apiKey"] == bot.api_key


@pytest.mark.asyncio
async def test_empty_patch_returns_current_state(client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id, name="Support Bot")

    response = await client.patch(
        f"/api/chatbots/{bot.chatbot_id}", json={}, headers=auth_headers(tenant)
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Support Bot"


@pytest.mark.asyncio
async def test_patch_of_another_tenants_chatbot_is_not_found(client, tenant_repo, chatbot_repo):
    owner = await seed_tenant(tenant_repo)
    intruder = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, owner.tenant_id, name="Support Bot")

    response = await client.patch(
        f"/api/chatbots/{bot.chatbot_id}",
        json={"name": "Hijacked"},
        headers=auth_headers(intruder),
    )

    assert response.status_code == 404
    assert (await chatbot_repo.get_by_id(bot.chatbot_id)).name == "Support Bot"


@pytest.mark.asyncio
async def test_delete_chatbot(client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await client.delete(f"/api/chatbots/{bot.chatbot_id}", headers=auth_headers(tenant))

    assert response.status_code == 200
    assert await chatbot_repo.get_by_id(bot.chatbot_id) is None


@pytest.mark.asyncio
async def test_delete_of_another_tenants_chatbot_is_not_found(client, tenant_repo, chatbot_repo):
    owner = await seed_tenant(tenant_repo)
    intruder = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, owner.tenant_id)

    response = await client.delete(f"/api/chatbots/{bot.chatbot_id}", headers=auth_headers(intruder))

    assert response.status_code == 404
    assert await chatbot_repo.get_by_id(bot.chatbot_id) is not None


@pytest.mark.asyncio
async def test_embed_code_contains_api_key(client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo)
    bot = await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await client.get(
        f"/api/chatbots/{bot.chatbot_id}/embed", headers=auth_headers(tenant)
    )

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"html", "react", "nextjs"}
    for snippet in body.values():
        assert bot.api_key in snippet


@pytest.mark.asyncio
async def test_usage_reports_counters_and_cycle(client, tenant_repo, chatbot_repo):
    tenant = await seed_tenant(tenant_repo, messages_sent=42)
    await seed_chatbot(chatbot_repo, tenant.tenant_id)

    response = await client.get("/api/usage", headers=auth_headers(tenant))

    assert response.status_code == 200
    body = response.json()
    assert body["plan"] == "Free"
    assert body["messagesSent"] == 42
    assert body["messageLimit"] == 1000
    assert body["chatbotCount"] == 1
    assert body["chatbotLimit"] == 1
    assert body["cycleEnd"] > body["cycleStart"]
