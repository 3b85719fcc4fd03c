"""Tests for guest wishlist votes."""

from __future__ import annotations

import pytest

from gamehaven.database import WishlistVote
from gamehaven.errors import GameNotFound
from gamehaven.services import wishlist


class TestSanitizeName:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("  Sam  ", "Sam"),
            ("<b>Sam</b>", "Sam"),
            ("<script>alert(1)</script>", "alert(1)"),
            ("   ", None),
            ("<img src=x>", None),
            (None, None),
            ("x" * 80, "x" * 50),
        ],
    )
    def test_sanitize(self, raw, expected) -> None:
        assert wishlist.sanitize_name(raw) == expected


class TestVotes:
    def test_first_vote_then_repeat(self, db_session, game) -> None:
        created, vote = wishlist.add_vote(db_session, game.id, "guest-1")
        assert created is True
        assert vote.guest_name is None

        created, vote = wishlist.add_vote(db_session, game.id, "guest-1", "  Sam ")
        assert created is False
        assert vote.guest_name == "Sam"
        assert db_session.query(WishlistVote).count() == 1

    def test_repeat_without_name_keeps_existing_name(self, db_session, game) -> None:
        wishlist.add_vote(db_session, game.id, "guest-1", "Sam")
        _, vote = wishlist.add_vote(db_session, game.id, "guest-1")
        assert vote.guest_name == "Sam"

    def test_unknown_game(self, db_session) -> None:
        with pytest.raises(GameNotFound):
            wishlist.add_vote(db_session, "missing", "guest-1")

    def test_summary_counts_named_votes(self, db_session, game) -> None:
        wishlist.add_vote(db_session, game.id, "guest-1", "Sam")
        wishlist.add_vote(db_session, game.id, "guest-2")
        wishlist.add_vote(db_session, game.id, "guest-3", "<i></i>")

        (summary,) = wishlist.summary(db_session)
        assert summary.vote_count == 3
        assert summary.named_votes == 1

    def test_votes_for_guest_and_removal(self, db_session, game) -> None:
        wishlist.add_vote(db_session, game.id, "guest-1")
        assert [v.game_id for v in wishlist.votes_for_guest(db_session, "guest-1")] == [game.id]
        assert wishlist.remove_vote(db_session, game.id, "guest-1") is True
        assert wishlist.votes_for_guest(db_session, "guest-1") == []


class TestWishlistRoutes:
    def test_vote_created_then_already_voted(self, client, game) -> None:
        body = {"gameId": game.id, "guestIdentifier": "guest-1", "guestName": "<b>Sam</b>"}

        first = client.post("/api/wishlist", json=body)
        assert first.status_code == 201
        assert first.json()["success"] is True

        again = client.post("/api/wishlist", json=body)
        assert again.status_code == 200
        assert again.json()["message"] == "Already voted"

        votes = client.get("/api/wishlist", params={"guestIdentifier": "guest-1"}).json()
        assert votes == {"votes": [{"game_id": game.id, "guest_name": "Sam"}]}

        summary = client.get("/api/wishlist/summary").json()
        assert summary == [{"game_id": game.id, "vote_count": 1, "named_votes": 1}]

    def test_remove_vote(self, client, game) -> None:
        client.post("/api/wishlist", json={"gameId": game.id, "guestIdentifier": "guest-1"})
        response = client.delete(f"/api/wishlist/{game.id}", params={"guestIdentifier": "guest-1"})
        assert response.status_code == 200
        assert response.json()["message"] == "Vote removed"

    def test_unknown_game(self, client) -> None:
        response = client.post("/api/wishlist", json={"gameId": "missing", "guestIdentifier": "guest-1"})
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Game not found"}

    def test_name_too_long_is_rejected(self, client, game) -> None:
        response = client.post(
            "/api/wishlist", json={"gameId": game.id, "guestIdentifier": "g", "guestName": "x" * 101}
        )
        assert response.status_code == 400
