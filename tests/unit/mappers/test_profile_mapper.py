"""
Test suite for ProfileMapper conversions.

Covers table -> domain conversion, skill formatting and grouping, and
pgvector value normalisation.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from hypothesis import given, strategies as st

from app.infrastructure.persistence.mappers.profile_mapper import ProfileMapper
from app.infrastructure.persistence.models.profile_table import ProfileTable


def _table(**overrides) -> ProfileTable:
    fields = {
        "id": uuid4(),
        "full_name": "Jane Doe",
        "bio": "Precision driver",
        "location": "Atlanta",
        "union_status": "SAG-AFTRA",
        "experience_years": 12,
        "is_public": True,
    }
    fields.update(overrides)
    return ProfileTable(**fields)


class TestToDomain:
    def test_copies_columns_and_skills(self):
        table = _table()

        profile = ProfileMapper.to_domain(table, ["Car Chases (expert)"])

        assert profile.id == str(table.id)
        assert profile.full_name == "Jane Doe"
        assert profile.bio == "Precision driver"
        assert profile.skills == ["Car Chases (expert)"]
        assert profile.experience_years == 12
        assert profile.location == "Atlanta"
        assert profile.union_status == "SAG-AFTRA"
        assert profile.is_public is True
        assert profile.embedding is None
        assert not profile.has_embedding

    def test_embedding_metadata_is_carried_over(self):
        generated_at = datetime(2025, 3, 1, tzinfo=timezone.utc)
        table = _table(
            content_embedding=[0.25, 0.5],
            embedding_content_hash="a" * 64,
            embedding_generated_at=generated_at,
        )

        profile = ProfileMapper.to_domain(table)

        assert profile.embedding == [0.25, 0.5]
        assert profile.embedding_content_hash == "a" * 64
        assert profile.embedding_generated_at == generated_at
        assert profile.skills == []


class TestSkills:
    def test_format_with_proficiency(self):
        assert ProfileMapper.format_skill("High Falls", "expert") == "High Falls (expert)"

    def test_format_without_proficiency(self):
        assert ProfileMapper.format_skill("High Falls", None) == "High Falls"
        assert ProfileMapper.format_skill("High Falls", "  ") == "High Falls"

    def test_group_by_profile(self):
        first, second = uuid4(), uuid4()
        rows = [
            (first, "Fire Burns", "advanced"),
            (second, "Wire Work", None),
            (first, "Stair Falls", "expert"),
            (second, "", "expert"),
        ]

        grouped = ProfileMapper.group_skills(rows)

        assert grouped == {
            str(first): ["Fire Burns (advanced)", "Stair Falls (expert)"],
            str(second): ["Wire Work"],
        }


class TestVectorToList:
    def test_none_stays_none(self):
        assert ProfileMapper.vector_to_list(None) is None

    @given(st.lists(st.floats(allow_nan=False, allow_infinity=False), max_size=32))
    def test_returns_plain_floats(self, values):
        result = ProfileMapper.vector_to_list(tuple(values))

        assert result == [float(v) for v in values]
        assert isinstance(result, list)
