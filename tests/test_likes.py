"""Tests for the vote (like/dislike) state machine and counts."""

import pytest

from mementogram import crud
from mementogram.core.exceptions import ConflictError, NotFoundError
from mementogram.models import Like


# =============================================================================
# Vote state machine
# =============================================================================


def test_like_sets_status_to_like(db, alice, bob, make_post):
    post = make_post(bob)

    assert crud.like_post(db, alice.id, post.id) == 1
    assert crud.get_user_vote_on_post(db, alice.id, post.id) == 1


def test_double_like_toggles_vote_off(db, alice, bob, make_post):
    post = make_post(bob)

    crud.like_post(db, alice.id, post.id)
    assert crud.like_post(db, alice.id, post.id) == 0
    assert db.query(Like).filter_by(user_id=alice.id, post_id=post.id).first() is None
    assert crud.get_user_vote_on_post(db, alice.id, post.id) == 0


def test_like_then_dislike_switches_in_place(db, alice, bob, make_post):
    post = make_post(bob)

    crud.like_post(db, alice.id, post.id)
    assert crud.dislike_post(db, alice.id, post.id) == -1

    rows = db.query(Like).filter_by(user_id=alice.id, post_id=post.id).all()
    assert len(rows) == 1
    assert rows[0].vote_type == -1


def test_double_dislike_toggles_vote_off(db, alice, bob, make_post):
    post = make_post(bob)

    crud.dislike_post(db, alice.id, post.id)
    assert crud.dislike_post(db, alice.id, post.id) == 0


def test_vote_on_missing_post_raises_not_found(db, alice):
    with pytest.raises(NotFoundError):
        crud.like_post(db, alice.id, 9999)


def test_invalid_vote_type_rejected(db, alice, bob, make_post):
    post = make_post(bob)
    with pytest.raises(ValueError):
        crud.cast_vote(db, alice.id, post.id, 2)


def test_anonymous_user_has_no_vote(db, alice, bob, make_post):
    post = make_post(bob)
    crud.like_post(db, alice.id, post.id)

    assert crud.get_user_vote_on_post(db, None, post.id) == 0


# =============================================================================
# Counts
# =============================================================================


def test_vote_counts_match_distinct_voters(db, make_user, make_post):
    author = make_user("author")
    post = make_post(author)
    likers = [make_user(f"liker{i}") for i in range(3)]
    dislikers = [make_user(f"disliker{i}") for i in range(2)]

    for user in likers:
        crud.like_post(db, user.id, post.id)
    for user in dislikers:
        crud.dislike_post(db, user.id, post.id)

    assert crud.get_vote_counts(db, post.id) == {"like_count": 3, "dislike_count": 2}


def test_vote_counts_for_post_without_votes(db, bob, make_post):
    post = make_post(bob)
    assert crud.get_vote_counts(db, post.id) == {"like_count": 0, "dislike_count": 0}


def test_batch_vote_helpers(db, alice, bob, make_post):
    from mementogram.crud import crud_like

    first = make_post(bob, "first")
    second = make_post(bob, "second")
    crud.like_post(db, alice.id, first.id)
    crud.dislike_post(db, bob.id, first.id)
    crud.dislike_post(db, alice.id, second.id)

    counts = crud_like.get_vote_counts_for_posts(db, [first.id, second.id])
    assert counts == {first.id: (1, 1), second.id: (0, 1)}

    votes = crud_like.get_user_votes_for_posts(db, alice.id, [first.id, second.id])
    assert votes == {first.id: 1, second.id: -1}

    assert crud_like.get_vote_counts_for_posts(db, []) == {}
    assert crud_like.get_user_votes_for_posts(db, None, [first.id]) == {}


def test_concurrent_duplicate_vote_is_conflict(db, session_factory, monkeypatch, alice, bob, make_post):
    from mementogram.crud import crud_like

    post = make_post(bob)
    alice_id, post_id = alice.id, post.id

    # Another request records the same vote after this one looked
    other = session_factory()
    other.add(Like(user_id=alice_id, post_id=post_id, vote_type=1))
    other.commit()
    other.close()
    monkeypatch.setattr(crud_like, "get_vote", lambda db, user_id, post_id: None)

    with pytest.raises(ConflictError):
        crud_like.cast_vote(db, alice_id, post_id, 1)


# =============================================================================
# API
# =============================================================================


def test_like_endpoint_toggles(client, alice, bob, make_post, auth_headers):
    post = make_post(bob)
    headers = auth_headers(alice)

    response = client.post(f"/api/v1/posts/{post.id}/like", headers=headers)
    assert response.status_code == 200
    assert response.json()["vote_status"] == 1
    assert response.json()["message"] == "Post liked successfully."

    response = client.post(f"/api/v1/posts/{post.id}/like", headers=headers)
    assert response.json()["vote_status"] == 0
    assert response.json()["message"] == "Post like removed."


def test_dislike_endpoint_after_like(client, alice, bob, make_post, auth_headers):
    post = make_post(bob)
    headers = auth_headers(alice)

    client.post(f"/api/v1/posts/{post.id}/like", headers=headers)
    response = client.post(f"/api/v1/posts/{post.id}/dislike", headers=headers)

    assert response.status_code == 200
    assert response.json()["vote_status"] == -1


def test_like_requires_auth(client, bob, make_post):
    post = make_post(bob)
    response = client.post(f"/api/v1/posts/{post.id}/like")
    assert response.status_code == 401


def test_like_missing_post_returns_404(client, alice, auth_headers):
    response = client.post("/api/v1/posts/424242/like", headers=auth_headers(alice))
    assert response.status_code == 404


def test_votes_endpoint(client, alice, bob, carol, make_post, auth_headers):
    post = make_post(bob)
    client.post(f"/api/v1/posts/{post.id}/like", headers=auth_headers(alice))
    client.post(f"/api/v1/posts/{post.id}/dislike", headers=auth_headers(carol))

    response = client.get(f"/api/v1/posts/{post.id}/votes", headers=auth_headers(alice))
    assert response.status_code == 200
    assert response.json() == {
        "post_id": post.id,
        "like_count": 1,
        "dislike_count": 1,
        "current_user_vote": 1,
    }

    anonymous = client.get(f"/api/v1/posts/{post.id}/votes")
    assert anonymous.json()["current_user_vote"] == 0
