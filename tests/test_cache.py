"""
Conversation list caching tests
"""
import redis

from marketplace.services import CacheService, cache_service


def send(client, sender_id, receiver_id, listing_id, content):
    return client.post("/api/messages", json={
        "senderId": sender_id,
        "receiverId": receiver_id,
        "listingId": listing_id,
        "content": content,
    })


def test_conversation_list_is_cached(client, fake_redis):
    send(client, "u2", "u1", "l1", "hello")

    first = client.get("/api/messages/conversations/u1").json()

    assert "conversations:u1" in fake_redis.store
    assert client.get("/api/messages/conversations/u1").json() == first


def test_send_invalidates_both_participants(client, fake_redis):
    send(client, "u2", "u1", "l1", "hello")
    client.get("/api/messages/conversations/u1")
    client.get("/api/messages/conversations/u2")

    send(client, "u1", "u2", "l1", "reply")

    assert "conversations:u1" not in fake_redis.store
    assert "conversations:u2" not in fake_redis.store
    [conversation] = client.get("/api/messages/conversations/u1").json()
    assert conversation["lastMessage"] == "reply"


def test_opening_thread_invalidates_reader(client, fake_redis):
    send(client, "u2", "u1", "l1", "hello")
    [before] = client.get("/api/messages/conversations/u1").json()
    assert before["unreadCount"] == 1

    client.get("/api/messages/u1/l1/u2")

    [after] = client.get("/api/messages/conversations/u1").json()
    assert after["unreadCount"] == 0


class BrokenRedis:
    def get(self, key):
        raise redis.ConnectionError("down")

    def setex(self, key, ttl, value):
        raise redis.ConnectionError("down")

    def delete(self, *keys):
        raise redis.ConnectionError("down")

    def ping(self):
        raise redis.ConnectionError("down")


def test_redis_errors_are_cache_misses():
    cache = CacheService(client=BrokenRedis(), enabled=True)

    assert cache.get_conversations("u1") is None
    assert cache.set_conversations("u1", []) is False
    assert cache.invalidate_conversations("u1", "u2") == 0
    assert cache.ping() is False


def test_requests_survive_redis_outage(client, monkeypatch):
    monkeypatch.setattr(cache_service, "_client", BrokenRedis())
    monkeypatch.setattr(cache_service, "enabled", True)

    assert send(client, "u2", "u1", "l1", "hello").status_code == 201
    response = client.get("/api/messages/conversations/u1")

    assert response.status_code == 200
    assert response.json()[0]["unreadCount"] == 1
    assert client.get("/health").json()["cache"] == "down"


def test_disabled_cache_never_touches_redis():
    cache = CacheService(client=BrokenRedis(), enabled=False)

    assert cache.get("anything") is None
    assert cache.set("anything", 1) is False
    assert cache.delete("anything") == 0


def test_deleting_listing_refreshes_cached_conversations(client, fake_redis):
    seller = client.post("/api/users", json={"username": "seller"}).json()["id"]
    listing = client.post("/api/listings", json={
        "title": "Arch",
        "eventType": "birthday",
        "images": ["https://img.example/arch.jpg"],
        "latitude": 1.0,
        "longitude": 2.0,
        "creatorId": seller,
        "creatorName": "seller",
    }).json()["id"]
    send(client, "buyer", seller, listing, "Still available?")

    [before] = client.get("/api/messages/conversations/buyer").json()
    client.get(f"/api/messages/conversations/{seller}")
    assert before["listingTitle"] == "Arch"

    assert client.delete(f"/api/listings/{listing}").status_code == 204

    assert "conversations:buyer" not in fake_redis.store
    assert f"conversations:{seller}" not in fake_redis.store
    [after] = client.get("/api/messages/conversations/buyer").json()
    assert after["listingTitle"] == "Unknown Listing"
    assert after["listingImage"] is None
