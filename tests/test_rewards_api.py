"""Wallet, task and referral endpoints, end to end."""
import pytest

from conftest import VALID_WALLET, signup


async def _me(client):
    return (await client.get("/api/auth/me")).json()["user"]


async def _task_id_worth(client, points):
    tasks = (await client.get("/api/tasks")).json()
    return next(ut["taskId"] for ut in tasks if ut["task"]["points"] == points)


@pytest.mark.asyncio
async def test_referral_wallet_and_task_flow(make_client):
    alice, bob = make_client(), make_client()

    resp = await signup(alice, "alice")
    code = resp.json()["user"]["referralCode"]
    assert resp.json()["user"]["points"] == 500

    resp = await signup(bob, "bob", referred_by=code)
    assert resp.json()["user"]["points"] == 500
    assert resp.json()["user"]["referredBy"] == code
    assert (await _me(alice))["points"] == 750

    referrals = (await alice.get("/api/referrals")).json()
    assert referrals["referralCount"] == 1
    assert referrals["totalEarnings"] == 250
    assert referrals["referrals"][0]["referredUser"]["username"] == "bob"
    assert referrals["referrals"][0]["pointsEarned"] == 250

    resp = await bob.post("/api/user/connect-wallet", json={"walletAddress": VALID_WALLET})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Wallet connected successfully"
    assert resp.json()["user"]["points"] == 600
    assert resp.json()["user"]["walletConnected"] is True

    task_id = await _task_id_worth(bob, 100)
    resp = await bob.post(f"/api/tasks/{task_id}/complete")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Task completed successfully"
    assert body["user"]["points"] == 700
    assert body["userTask"]["completed"] is True
    assert body["userTask"]["completedAt"] is not None

    # points stay with the referrer
    assert (await _me(alice))["points"] == 750


@pytest.mark.asyncio
async def test_task_list_for_new_user(client, tasks):
    await signup(client, "alice")

    resp = await client.get("/api/tasks")

    assert resp.status_code == 200
    listed = resp.json()
    assert [ut["taskId"] for ut in listed] == [t.id for t in tasks]
    assert all(ut["completed"] is False for ut in listed)
    assert {ut["task"]["taskType"] for ut in listed} == {
        "referral",
        "telegram",
        "twitter",
        "youtube",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path,method",
    [
        ("/api/tasks", "get"),
        ("/api/tasks/1/complete", "post"),
        ("/api/referrals", "get"),
        ("/api/user/connect-wallet", "post"),
    ],
)
async def test_user_routes_require_session(client, path, method):
    resp = await getattr(client, method)(path)

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_connect_wallet_rejects_wrong_length(client):
    await signup(client, "alice")

    resp = await client.post("/api/user/connect-wallet", json={"walletAddress": "0x1234"})

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid wallet address"
    assert (await _me(client))["points"] == 500


@pytest.mark.asyncio
async def test_reconnecting_wallet_pays_no_bonus(client):
    await signup(client, "alice")
    await client.post("/api/user/connect-wallet", json={"walletAddress": VALID_WALLET})

    other = "0x" + "c3" * 20
    resp = await client.post("/api/user/connect-wallet", json={"walletAddress": other})

    assert resp.status_code == 200
    assert resp.json()["user"]["points"] == 600
    assert resp.json()["user"]["walletAddress"] == other


@pytest.mark.asyncio
async def test_complete_task_without_wallet(client):
    await signup(client, "alice")
    task_id = await _task_id_worth(client, 100)

    resp = await client.post(f"/api/tasks/{task_id}/complete")

    assert resp.status_code == 400
    assert resp.json() == {"message": "Wallet must be connected to complete tasks"}
    assert (await _me(client))["points"] == 500


@pytest.mark.asyncio
async def test_complete_task_twice(client):
    await signup(client, "alice")
    await client.post("/api/user/connect-wallet", json={"walletAddress": VALID_WALLET})
    task_id = await _task_id_worth(client, 200)

    first = await client.post(f"/api/tasks/{task_id}/complete")
    second = await client.post(f"/api/tasks/{task_id}/complete")

    assert first.json()["user"]["points"] == 800
    assert second.status_code == 200
    assert second.json()["message"] == "Task already completed"
    assert second.json()["user"]["points"] == 800


@pytest.mark.asyncio
async def test_complete_unknown_task(client):
    await signup(client, "alice")
    await client.post("/api/user/connect-wallet", json={"walletAddress": VALID_WALLET})

    resp = await client.post("/api/tasks/9999/complete")

    assert resp.status_code == 404
    assert resp.json() == {"message": "Task not found"}


@pytest.mark.asyncio
async def test_referrals_empty(client):
    resp = await signup(client, "alice")

    body = (await client.get("/api/referrals")).json()

    assert body == {
        "referrals": [],
        "referralCount": 0,
        "referralCode": resp.json()["user"]["referralCode"],
        "totalEarnings": 0,
    }


@pytest.mark.asyncio
async def test_signup_with_unknown_code(make_client):
    alice, bob = make_client(), make_client()
    await signup(alice, "alice")

    resp = await signup(bob, "bob", referred_by="ZZZZZZZZZZ")

    assert resp.status_code == 200
    assert resp.json()["user"]["points"] == 500
    assert (await _me(alice))["points"] == 500
