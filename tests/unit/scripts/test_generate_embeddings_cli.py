"""Tests for the stuntpitch-embeddings command-line script."""

from unittest.mock import AsyncMock, patch

import pytest

from app.application.embedding_service import ProfileEmbeddingService
from app.domain.entities.embedding import EmbeddingJobRequest
from app.domain.exceptions import PersistenceError
from app.scripts.generate_embeddings import build_parser, main
from tests.fixtures.profile_fixtures import ProfileTestBuilder, make_profile


@pytest.fixture
def service(profile_store, embedding_provider, settings):
    return ProfileEmbeddingService(profile_store, embedding_provider, settings)


@pytest.fixture
def cli(service, settings):
    """Run ``main`` against in-memory collaborators."""
    with patch("app.scripts.generate_embeddings.get_settings", return_value=settings), patch(
        "app.scripts.generate_embeddings.get_embedding_service",
        new=AsyncMock(return_value=service),
    ):
        yield main


class TestArguments:
    def test_defaults(self):
        args = build_parser(5).parse_args([])

        assert args.profile is None
        assert args.batch == 5
        assert args.limit is None

    def test_equals_form(self):
        args = build_parser(5).parse_args(["--profile=abc", "--batch=7", "--limit=20"])

        assert args.profile == "abc"
        assert args.batch == 7
        assert args.limit == 20


class TestMain:
    def test_default_batch_embeds_five_profiles(self, cli, profile_store, capsys):
        for i in range(8):
            profile_store.add(make_profile(f"p{i}"))

        exit_code = cli([])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert len(profile_store.writes) == 5
        assert "Starting embedding generation..." in out
        assert "batch size: 5" in out
        assert "All embeddings generated successfully!" in out

    def test_limit_processes_several_chunks(self, cli, profile_store):
        for i in range(8):
            profile_store.add(make_profile(f"p{i}"))

        exit_code = cli(["--batch=3", "--limit=8"])

        assert exit_code == 0
        assert len(profile_store.writes) == 8

    def test_single_profile(self, cli, profile_store, capsys):
        profile_store.add(make_profile("p1"))

        exit_code = cli(["--profile=p1"])

        assert exit_code == 0
        assert profile_store.written_ids() == ["p1"]
        assert "Embedding generated successfully!" in capsys.readouterr().out

    def test_single_profile_without_content(self, cli, profile_store, capsys):
        profile_store.add(ProfileTestBuilder("p1").empty().build())

        exit_code = cli(["--profile=p1"])

        assert exit_code == 0
        assert profile_store.writes == []
        assert "no content to embed" in capsys.readouterr().out

    def test_unknown_profile_exits_with_error(self, cli, capsys):
        exit_code = cli(["--profile=ghost"])

        assert exit_code == 1
        assert "Error: Profile ghost not found" in capsys.readouterr().err

    def test_contained_failures_exit_zero(self, cli, profile_store, embedding_provider, capsys):
        for i in range(1, 4):
            profile_store.add(make_profile(f"p{i}"))
        embedding_provider.fail_on_text_containing.add("Performer p2")

        exit_code = cli(["--batch=3"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "2 succeeded, 1 failed" in out
        assert "p2: Mock provider failure" in out

    def test_selection_failure_exits_with_error(self, cli, profile_store, capsys):
        profile_store.should_fail_on_list = True

        assert cli([]) == 1
        assert "Error: Mock list failure" in capsys.readouterr().err

    def test_invalid_batch_exits_with_error(self, cli, capsys):
        assert cli(["--batch=0"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_wiring_failure_exits_with_error(self, settings, capsys):
        with patch("app.scripts.generate_embeddings.get_settings", return_value=settings), patch(
            "app.scripts.generate_embeddings.get_embedding_service",
            new=AsyncMock(side_effect=PersistenceError("Database unavailable: refused")),
        ):
            exit_code = main([])

        assert exit_code == 1
        assert "Error: Database unavailable: refused" in capsys.readouterr().err

    def test_arguments_become_a_job_request(self, cli, service, profile_store):
        profile_store.add(make_profile("p1"))

        with patch.object(service, "run", wraps=service.run) as run:
            assert cli(["--batch=2", "--limit=4"]) == 0

        run.assert_awaited_once_with(EmbeddingJobRequest(batch_size=2, max_profiles=4))

    def test_profile_argument_becomes_a_single_job(self, cli, service, profile_store):
        profile_store.add(make_profile("p1"))

        with patch.object(service, "run", wraps=service.run) as run:
            assert cli(["--profile=p1"]) == 0

        run.assert_awaited_once_with(EmbeddingJobRequest(profile_id="p1", batch_size=5))
