"""Tests for meeting response assembly."""

import pytest

from coemotion.models.meeting import Meeting
from coemotion.models.mixins import utcnow
from coemotion.services.response_assembler import (
    MeetingAssembler,
    is_absolute_url,
    normalize_profile_image,
    resolve_many,
)
from coemotion.errors import NotFoundError


def make_meeting(db, created_by, participants=(), all_members=False, **fields):
    meeting = Meeting(
        title=fields.get("title", "Planning"),
        description=fields.get("description", ""),
        date=fields.get("date", "2024-03-10"),
        time=fields.get("time", "10:00"),
        duration=fields.get("duration", 30),
        created_by=created_by,
        created_at=utcnow(),
        all_members=all_members,
        participants=list(participants),
    )
    db.add(meeting)
    db.commit()
    db.refresh(meeting)
    return meeting


class TestProfileImage:
    @pytest.mark.parametrize(
        ("stored", "expected"),
        [
            ("avatar.png", "/uploads/avatar.png"),
            ("/uploads/123_avatar.png", "/uploads/123_avatar.png"),
            ("./uploads/123_avatar.png", "/uploads/123_avatar.png"),
            ("uploads/avatar.png", "/uploads/avatar.png"),
            ("http://cdn.example.com/a.png", "http://cdn.example.com/a.png"),
            ("https://cdn.example.com/a.png", "https://cdn.example.com/a.png"),
            ("images/http://x.png", "/uploads/x.png"),
            ("ftp://files.example.com/a.png", "/uploads/a.png"),
            ("avatars/", "avatars/"),
            ("/uploads/", "/uploads/"),
            ("", ""),
            (None, None),
        ],
    )
    def test_normalize(self, stored, expected):
        assert normalize_profile_image(stored) == expected

    @pytest.mark.parametrize(
        "stored",
        [
            "avatar.png",
            "/uploads/a.png",
            "/uploads/uploads/a.png",
            "dir/sub/a.png",
            "https://x/y",
            "avatars/",
        ],
    )
    def test_normalize_is_idempotent(self, stored):
        once = normalize_profile_image(stored)
        assert normalize_profile_image(once) == once

    def test_absolute_url_is_a_prefix_check(self):
        assert is_absolute_url("https://example.com")
        assert not is_absolute_url("HTTP://example.com")
        assert not is_absolute_url("/static/http://example.com")


def test_resolve_many_keeps_order_and_collects_failures():
    known = {"a": 1, "c": 3}

    def resolver(key):
        if key not in known:
            raise NotFoundError(f"{key} missing")
        return known[key]

    resolution = resolve_many(["c", "b", "a", "d"], resolver)

    assert resolution.found == [3, 1]
    assert [key for key, _ in resolution.failed] == ["b", "d"]


class TestAssemble:
    def test_embeds_creator_and_participants_in_order(self, db, make_user):
        alice = make_user("Alice", profile_image="alice.png")
        bob = make_user("Bob", profile_image="https://cdn.example.com/bob.png")
        carol = make_user("Carol")
        meeting = make_meeting(db, alice.id, participants=[carol.id, alice.id, bob.id])

        response = MeetingAssembler(db).assemble(meeting)

        assert response.created_by.id == alice.id
        assert response.created_by.profile_image == "/uploads/alice.png"
        assert [p.id for p in response.participants] == [carol.id, alice.id, bob.id]
        assert response.participants[2].profile_image == "https://cdn.example.com/bob.png"
        assert "password_hash" not in response.model_dump()
        assert "password_hash" not in response.created_by.model_dump()

    def test_unresolvable_participants_are_dropped(self, db, make_user):
        alice = make_user("Alice")
        bob = make_user("Bob")
        meeting = make_meeting(
            db,
            alice.id,
            participants=[bob.id, "65f0c1a2b3c4d5e6f7a8b9c0", "ghost", alice.id],
        )

        response = MeetingAssembler(db).assemble(meeting)

        assert [p.id for p in response.participants] == [bob.id, alice.id]

    def test_legacy_string_identifiers_resolve(self, db, make_user):
        legacy = make_user("Legacy", user_id="legacy-user-0001")
        mixed_case = make_user("Upper", user_id="65F0C1A2B3C4D5E6F7A8B9C0")
        meeting = make_meeting(db, legacy.id, participants=[mixed_case.id])

        response = MeetingAssembler(db).assemble(meeting)

        assert response.created_by.name == "Legacy"
        assert [p.name for p in response.participants] == ["Upper"]

    def test_missing_creator_becomes_placeholder(self, db, make_user):
        bob = make_user("Bob")
        meeting = make_meeting(db, "65f0c1a2b3c4d5e6f7a8b9c0", participants=[bob.id])

        response = MeetingAssembler(db).assemble(meeting)

        assert response.created_by.name == "Unknown User"
        assert response.created_by.id == ""
        assert [p.id for p in response.participants] == [bob.id]

    def test_all_members_lists_whole_directory(self, db, make_user):
        alice = make_user("Alice", profile_image="/uploads/alice.png")
        bob = make_user("Bob")
        meeting = make_meeting(db, alice.id, participants=[bob.id, "ghost"], all_members=True)
        carol = make_user("Carol")

        response = MeetingAssembler(db).assemble(meeting)

        assert [p.id for p in response.participants] == [alice.id, bob.id, carol.id]
        assert response.participants[0].profile_image == "/uploads/alice.png"

    def test_empty_role_reads_as_team_member(self, db, make_user):
        alice = make_user("Alice", role="")
        meeting = make_meeting(db, alice.id)

        response = MeetingAssembler(db).assemble(meeting)

        assert response.created_by.role == "Team Member"

    def test_assemble_many(self, db, make_user):
        alice = make_user("Alice")
        first = make_meeting(db, alice.id, title="First", all_members=True)
        second = make_meeting(db, alice.id, title="Second", participants=[alice.id])

        responses = MeetingAssembler(db).assemble_many([first, second])

        assert [r.title for r in responses] == ["First", "Second"]
        assert [p.id for p in responses[0].participants] == [alice.id]
