"""Tests for the prohelper command-line interface."""

import json
from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from conftest import invitation_payload
from prohelper import __version__
from prohelper.cli import cli
from prohelper.core.config import Settings
from prohelper.infrastructure.api import HttpInvitationGateway
from prohelper.infrastructure.auth import StaticCredentialProvider

BASE_URL = "https://api.test/api/v1/landing"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        environment="testing",
        log_format="json",
        log_level="ERROR",
        credential_file=tmp_path / "token",
    )


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, settings, args, handler=None):
    """Run the CLI with settings and an optional MockTransport handler."""

    def build_gateway(_settings):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
        return HttpInvitationGateway(BASE_URL, StaticCredentialProvider("t"), client=client)

    with patch("prohelper.cli.get_settings", return_value=settings), \
         patch("prohelper.cli.build_gateway", side_effect=build_gateway):
        return runner.invoke(cli, args)


def test_login_and_logout(runner, settings):
    result = invoke(runner, settings, ["login", "my-token"])

    assert result.exit_code == 0
    assert settings.credential_file.read_text(encoding="utf-8") == "my-token"

    result = invoke(runner, settings, ["logout"])

    assert result.exit_code == 0
    assert not settings.credential_file.exists()


def test_list_loads_all_pages(runner, settings):
    def handler(request):
        page = int(request.url.params.get("page", "1"))
        return httpx.Response(
            200,
            json={
                "data": {
                    "data": [invitation_payload(page)],
                    "pagination": {
                        "current_page": page,
                        "last_page": 2,
                        "per_page": 1,
                        "total": 2,
                        "has_more_pages": page < 2,
                    },
                }
            },
        )

    result = invoke(runner, settings, ["list", "--status", "pending", "--per-page", "1", "--all"], handler)

    assert result.exit_code == 0, result.output
    assert "token-1" in result.output
    assert "token-2" in result.output
    assert "Showing 2 of 2 invitations" in result.output


def test_list_failure_exits_with_error(runner, settings):
    result = invoke(runner, settings, ["list"], lambda request: httpx.Response(500))

    assert result.exit_code == 1
    assert "Error: An error occurred while processing the invitation" in result.output


def test_show(runner, settings):
    def handler(request):
        return httpx.Response(200, json={"data": invitation_payload(3)})

    result = invoke(runner, settings, ["show", "token-3"], handler)

    assert result.exit_code == 0, result.output
    assert "Invitation #3" in result.output
    assert "StroyGroup (verified), Moscow" in result.output
    assert "Project type: residential" in result.output


def test_accept(runner, settings):
    def handler(request):
        return httpx.Response(
            200,
            json={
                "data": {
                    "contractor": {"id": 8, "name": "StroyGroup", "connected_at": "2025-03-10T12:00:00Z"},
                    "message": "Invitation accepted",
                }
            },
        )

    result = invoke(runner, settings, ["accept", "token-1"], handler)

    assert result.exit_code == 0, result.output
    assert "Connected to StroyGroup (contractor #8)" in result.output


def test_accept_expired(runner, settings):
    result = invoke(runner, settings, ["accept", "token-1"], lambda request: httpx.Response(410))

    assert result.exit_code == 1
    assert "Error: The invitation has expired" in result.output


def test_decline_with_reason(runner, settings):
    bodies = []

    def handler(request):
        bodies.append(request.content)
        return httpx.Response(200, json={"message": "Declined"})

    result = invoke(runner, settings, ["decline", "token-1", "--reason", "Busy"], handler)

    assert result.exit_code == 0, result.output
    assert [json.loads(body) for body in bodies] == [{"reason": "Busy"}]


def test_stats(runner, settings):
    def handler(request):
        return httpx.Response(
            200,
            json={
                "data": {
                    "received_invitations": {"total": 10, "pending": 3, "accepted": 6, "declined": 1},
                    "sent_invitations": {"total": 0, "pending": 0, "accepted": 0, "declined": 0},
                }
            },
        )

    result = invoke(runner, settings, ["stats"], handler)

    assert result.exit_code == 0, result.output
    assert "Accepted: 6 (60% success)" in result.output
    assert "Pending:  3 (30%)" in result.output
    assert "Overall success rate: 60%" in result.output


def test_notifications(runner, settings):
    def handler(request):
        assert request.url.params["status"] == "pending"
        assert request.url.params["per_page"] == "10"
        return httpx.Response(
            200,
            json={
                "data": {
                    "data": [
                        invitation_payload(1),
                        invitation_payload(2, can_be_accepted=False, is_expired=True),
                    ],
                    "pagination": {"current_page": 1, "last_page": 1, "total": 2},
                }
            },
        )

    result = invoke(runner, settings, ["notifications"], handler)

    assert result.exit_code == 0, result.output
    assert "1 new invitations" in result.output
    assert "token-1" in result.output
    assert "token-2" not in result.output


def test_show_pending_includes_countdown(runner, settings):
    def handler(request):
        return httpx.Response(200, json={"data": invitation_payload(3)})

    result = invoke(runner, settings, ["show", "token-3"], handler)

    assert result.exit_code == 0, result.output
    assert "Expires:      2025-03-17T12:00:00+00:00 (" in result.output


def test_show_accepted_has_no_countdown(runner, settings):
    payload = invitation_payload(
        3, status="accepted", accepted_at="2025-03-10T09:00:00Z", can_be_accepted=False
    )

    def handler(request):
        return httpx.Response(200, json={"data": payload})

    result = invoke(runner, settings, ["show", "token-3"], handler)

    assert result.exit_code == 0, result.output
    assert "Status:       Accepted" in result.output
    assert "Expires:      2025-03-17T12:00:00+00:00\n" in result.output


def test_version_option(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert f"ProHelper, version {__version__}" in result.output
