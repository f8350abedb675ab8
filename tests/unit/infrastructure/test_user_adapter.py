"""UserAdapter: role_ids folded in, secrets never selected."""

from audit_trail.infrastructure.adapters.user_adapter import UserAdapter


async def test_fetch_one_excludes_secrets(seeded, query_counter):
    user = await UserAdapter(seeded).fetch_one("u-1")

    assert user["username"] == "alice"
    assert user["role_ids"] == [1, 2]
    assert "password" not in user
    assert "refresh_token" not in user
    assert not any("password" in s or "refresh_token" in s for s in query_counter.statements)


async def test_fetch_one_missing(seeded):
    adapter = UserAdapter(seeded)
    assert await adapter.fetch_one("u-404") is None
    assert await adapter.fetch_one(None) is None


async def test_fetch_many(seeded, query_counter):
    users = await UserAdapter(seeded).fetch_many(["u-2", "u-1", "u-1", "u-404"])

    assert query_counter.selects == 2
    by_id = {u["id"]: u for u in users}
    assert set(by_id) == {"u-1", "u-2"}
    assert by_id["u-1"]["role_ids"] == [1, 2]
    assert by_id["u-2"]["role_ids"] == []
    assert all("password" not in u for u in users)
