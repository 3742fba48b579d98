"""Tests for follow edges and follower/following lists."""

import pytest

from mementogram import crud
from mementogram.crud import crud_follow
from mementogram.core.exceptions import BadRequestError, ConflictError, NotFoundError


def test_follow_and_is_following(db, alice, bob):
    crud.follow_user(db, alice.id, bob.id)

    assert crud.is_following(db, alice.id, bob.id)
    assert not crud.is_following(db, bob.id, alice.id)


def test_follow_twice_conflicts(db, alice, bob):
    crud.follow_user(db, alice.id, bob.id)
    with pytest.raises(ConflictError):
        crud.follow_user(db, alice.id, bob.id)


def test_concurrent_duplicate_follow_is_conflict(db, session_factory, monkeypatch, alice, bob):
    alice_id, bob_id = alice.id, bob.id

    # Another request creates the edge after this one checked for it
    other = session_factory()
    crud.follow_user(other, alice_id, bob_id)
    other.close()
    monkeypatch.setattr(crud_follow, "is_following", lambda db, follower_id, following_id: False)

    with pytest.raises(ConflictError):
        crud.follow_user(db, alice_id, bob_id)


def test_self_follow_rejected(db, alice):
    with pytest.raises(BadRequestError):
        crud.follow_user(db, alice.id, alice.id)


def test_follow_missing_user(db, alice):
    with pytest.raises(NotFoundError):
        crud.follow_user(db, alice.id, 8080)


def test_unfollow_without_follow_is_not_found(db, alice, bob):
    with pytest.raises(NotFoundError):
        crud.unfollow_user(db, alice.id, bob.id)


def test_unfollow_removes_edge(db, alice, bob):
    crud.follow_user(db, alice.id, bob.id)
    crud.unfollow_user(db, alice.id, bob.id)

    assert not crud.is_following(db, alice.id, bob.id)


def test_following_and_followers_lists(db, alice, bob, carol):
    crud.follow_user(db, alice.id, bob.id)
    crud.follow_user(db, alice.id, carol.id)
    crud.follow_user(db, carol.id, bob.id)

    following = crud.get_following(db, alice.id)
    assert {u.username for u in following} == {"bob", "carol"}

    followers = crud.get_followers(db, bob.id)
    assert {u.username for u in followers} == {"alice", "carol"}

    assert crud.get_follow_counts(db, bob.id) == {"follower_count": 2, "following_count": 0}
    assert crud.get_follow_counts(db, alice.id) == {"follower_count": 0, "following_count": 2}


def test_following_pagination(db, make_user):
    me = make_user("reader")
    others = [make_user(f"other{i}") for i in range(4)]
    for other in others:
        crud.follow_user(db, me.id, other.id)

    assert len(crud.get_following(db, me.id, skip=0, limit=3)) == 3
    assert len(crud.get_following(db, me.id, skip=3, limit=3)) == 1


# =============================================================================
# API
# =============================================================================


def test_follow_api_flow(client, alice, bob, auth_headers):
    headers = auth_headers(alice)

    response = client.post(f"/api/v1/users/{bob.id}/follow", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "User followed successfully."

    again = client.post(f"/api/v1/users/{bob.id}/follow", headers=headers)
    assert again.status_code == 409

    status = client.get(f"/api/v1/users/{bob.id}/follow-status", headers=headers)
    assert status.json() == {"user_id": bob.id, "is_following": True}

    followers = client.get(f"/api/v1/users/{bob.id}/followers")
    assert [u["username"] for u in followers.json()] == ["alice"]
    assert "email" not in followers.json()[0]

    following = client.get(f"/api/v1/users/{alice.id}/following")
    assert [u["username"] for u in following.json()] == ["bob"]

    assert client.delete(f"/api/v1/users/{bob.id}/follow", headers=headers).status_code == 204
    assert client.delete(f"/api/v1/users/{bob.id}/follow", headers=headers).status_code == 404


def test_self_follow_api(client, alice, auth_headers):
    response = client.post(f"/api/v1/users/{alice.id}/follow", headers=auth_headers(alice))
    assert response.status_code == 400


def test_follow_api_requires_auth(client, bob):
    assert client.post(f"/api/v1/users/{bob.id}/follow").status_code == 401
