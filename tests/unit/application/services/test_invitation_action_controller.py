"""Unit tests for InvitationActionController."""

import asyncio

import pytest

from conftest import NOW, make_invitation
from prohelper.application.services import InvitationActionController
from prohelper.domain.entities import (
    AcceptResult,
    ConnectedContractor,
    InvitationStatus,
    mark_declined,
)
from prohelper.domain.exceptions import (
    ErrorKind,
    InvitationAlreadyProcessedError,
    InvitationExpiredError,
    TransportFailureError,
)

ACCEPT_RESULT = AcceptResult(
    contractor=ConnectedContractor(id=42, name="StroyGroup", connected_at=NOW),
    message="Invitation accepted",
)


@pytest.fixture
def actions(mock_gateway):
    return InvitationActionController(mock_gateway)


class TestAccept:
    """Accept lane."""

    @pytest.mark.asyncio
    async def test_accept_success(self, actions, mock_gateway):
        mock_gateway.accept.return_value = ACCEPT_RESULT

        result = await actions.accept("token-1")

        assert result == ACCEPT_RESULT
        assert actions.accepting is False
        assert actions.accept_error is None
        mock_gateway.accept.assert_awaited_once_with("token-1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, ""])
    async def test_missing_token_is_noop(self, actions, mock_gateway, token):
        assert await actions.accept(token) is None
        assert actions.accept_error is None
        mock_gateway.accept.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_sets_lane_error(self, actions, mock_gateway):
        mock_gateway.accept.side_effect = InvitationExpiredError()

        result = await actions.accept("token-1")

        assert result is None
        assert actions.accept_error == "The invitation has expired"
        assert actions.accept_lane.error_kind is ErrorKind.EXPIRED
        assert actions.accepting is False
        assert actions.decline_error is None

    @pytest.mark.asyncio
    async def test_next_attempt_clears_own_error(self, actions, mock_gateway):
        mock_gateway.accept.side_effect = [TransportFailureError(), ACCEPT_RESULT]

        await actions.accept("token-1")
        assert actions.accept_error is not None

        assert await actions.accept("token-1") == ACCEPT_RESULT
        assert actions.accept_error is None

    @pytest.mark.asyncio
    async def test_second_call_while_busy_is_ignored(self, actions, mock_gateway):
        release = asyncio.Event()

        async def accept(token):
            await release.wait()
            return ACCEPT_RESULT

        mock_gateway.accept.side_effect = accept

        first = asyncio.create_task(actions.accept("token-1"))
        await asyncio.sleep(0)
        assert actions.accepting is True

        assert await actions.accept("token-1") is None
        release.set()
        assert await first == ACCEPT_RESULT
        assert mock_gateway.accept.await_count == 1


class TestDecline:
    """Decline lane."""

    @pytest.mark.asyncio
    async def test_decline_success(self, actions, mock_gateway):
        mock_gateway.decline.return_value = "Invitation declined"

        assert await actions.decline("token-1", "No capacity") is True
        mock_gateway.decline.assert_awaited_once_with("token-1", "No capacity")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reason", ["", None])
    async def test_reason_is_optional(self, actions, mock_gateway, reason):
        mock_gateway.decline.return_value = "Invitation declined"

        assert await actions.decline("token-1", reason) is True
        assert actions.decline_error is None

    @pytest.mark.asyncio
    async def test_missing_token_is_noop(self, actions, mock_gateway):
        assert await actions.decline(None) is None
        mock_gateway.decline.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_returns_false(self, actions, mock_gateway):
        mock_gateway.decline.side_effect = InvitationAlreadyProcessedError()

        assert await actions.decline("token-1") is False
        assert actions.decline_lane.error_kind is ErrorKind.ALREADY_PROCESSED
        assert actions.declining is False


class TestLaneIndependence:
    """Errors in one lane don't affect the other."""

    @pytest.mark.asyncio
    async def test_decline_attempt_does_not_clear_accept_error(self, actions, mock_gateway):
        mock_gateway.accept.side_effect = TransportFailureError()
        mock_gateway.decline.return_value = "ok"

        await actions.accept("token-1")
        await actions.decline("token-1")

        assert actions.accept_error == TransportFailureError.default_message
        assert actions.decline_error is None

    @pytest.mark.asyncio
    async def test_accept_in_progress_does_not_block_decline(self, actions, mock_gateway):
        release = asyncio.Event()

        async def accept(token):
            await release.wait()
            return ACCEPT_RESULT

        mock_gateway.accept.side_effect = accept
        mock_gateway.decline.side_effect = TransportFailureError()

        accepting = asyncio.create_task(actions.accept("token-1"))
        await asyncio.sleep(0)

        assert await actions.decline("token-2") is False
        assert actions.accepting is True
        assert actions.accept_error is None

        release.set()
        await accepting
        assert actions.decline_error == TransportFailureError.default_message


class TestInvitationPatches:
    """accept_invitation / decline_invitation helpers."""

    @pytest.mark.asyncio
    async def test_accept_invitation_patches_snapshot(self, actions, mock_gateway):
        mock_gateway.accept.return_value = ACCEPT_RESULT
        invitation = make_invitation(1)

        patched = await actions.accept_invitation(invitation, NOW)

        assert patched.status is InvitationStatus.ACCEPTED
        assert patched.accepted_at == NOW
        assert patched.declined_at is None
        assert patched.decline_reason is None
        mock_gateway.accept.assert_awaited_once_with("token-1")

    @pytest.mark.asyncio
    async def test_accept_invitation_failure_leaves_invitation(self, actions, mock_gateway):
        mock_gateway.accept.side_effect = TransportFailureError()
        invitation = make_invitation(1)

        assert await actions.accept_invitation(invitation, NOW) is None
        assert invitation.status is InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_accept_terminal_invitation_is_rejected_locally(self, actions, mock_gateway):
        declined = mark_declined(make_invitation(1), NOW)

        assert await actions.accept_invitation(declined, NOW) is None
        assert actions.accept_lane.error_kind is ErrorKind.ALREADY_PROCESSED
        mock_gateway.accept.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_accept_unacceptable_pending_invitation_is_rejected(self, actions, mock_gateway):
        invitation = make_invitation(1, can_be_accepted=False)

        assert await actions.accept_invitation(invitation, NOW) is None
        mock_gateway.accept.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_decline_invitation_patches_snapshot(self, actions, mock_gateway):
        mock_gateway.decline.return_value = "ok"

        patched = await actions.decline_invitation(make_invitation(1), NOW, "Too far")

        assert patched.status is InvitationStatus.DECLINED
        assert patched.declined_at == NOW
        assert patched.decline_reason == "Too far"
        assert patched.accepted_at is None

    @pytest.mark.asyncio
    async def test_decline_invitation_without_token(self, actions, mock_gateway):
        invitation = make_invitation(1, token=None)

        assert await actions.decline_invitation(invitation, NOW) is None
        mock_gateway.decline.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejected_patch_keeps_error_slot_of_busy_lane(self, actions, mock_gateway):
        release = asyncio.Event()

        async def decline(token, reason=None):
            await release.wait()
            return "ok"

        mock_gateway.decline.side_effect = decline
        in_flight = asyncio.create_task(actions.decline("token-1"))
        await asyncio.sleep(0)
        assert actions.declining is True

        declined = mark_declined(make_invitation(2), NOW)
        assert await actions.decline_invitation(declined, NOW) is None
        assert actions.decline_error is None

        release.set()
        assert await in_flight is True
        assert actions.decline_error is None
