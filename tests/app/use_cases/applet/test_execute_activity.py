"""Testes do ActivityExecutor: retry, overlay, alertas e despacho do resultado."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from app.domain.actions import ExecuteAction, InvocationContext
from app.infra.render import InMemoryRenderHost
from app.services.hooks import CallbackHooks, DefaultAppletHooks
from app.use_cases.applet import (
    ActivityExecutor,
    AuthChallengeHandler,
    CardResult,
    MessageResult,
)
from fsm import ActivityState
from tests.fakes.cards import card_payload
from tests.fakes.fake_channel import RecordingSleep, ScriptedChannel, failure, success
from utils.errors import (
    ChannelNotConfiguredError,
    TransportError,
    UnsupportedActionError,
    UnsupportedResultTypeError,
    ValidationError,
)

LOGIN_URL = "https://login.example.com/auth"


class EventHost(InMemoryRenderHost):
    """Host que registra a ordem de overlays e alertas."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[str] = []

    def attach_overlay(self, overlay: Any) -> None:
        super().attach_overlay(overlay)
        self.events.append("attach")

    def detach_overlay(self, overlay: Any) -> None:
        super().detach_overlay(overlay)
        self.events.append("detach")

    def alert(self, message: str) -> None:
        super().alert(message)
        self.events.append(f"alert:{message}")


class Harness:
    def __init__(
        self,
        *script: Any,
        hooks: Any = None,
        maximum_request_attempts: int = 3,
        channel: Any = ...,
    ) -> None:
        self.host = EventHost()
        self.channel = ScriptedChannel(*script) if channel is ... else channel
        self.sleep = RecordingSleep()
        self.cards: list[dict[str, Any]] = []
        self.executor = ActivityExecutor(
            channel=self.channel,
            host=self.host,
            hooks=hooks or DefaultAppletHooks(),
            auth_handler=AuthChallengeHandler(self.host),
            on_card=self.cards.append,
            maximum_request_attempts=maximum_request_attempts,
            sleep=self.sleep,
        )

    async def run(
        self,
        action: Any = None,
        context: InvocationContext = InvocationContext.USER_INTERACTION,
    ):
        return await self.executor.execute(
            "app-1",
            action if action is not None else ExecuteAction(id="approve", verb="approve"),
            context,
        )

    def assert_overlay_released_once(self) -> None:
        assert self.host.overlay_attach_count == 1
        assert self.host.overlay_detach_count == 1
        assert self.host.overlays == []


class TestSuccess:
    @pytest.mark.asyncio
    async def test_message_is_alerted(self) -> None:
        harness = Harness(success("hello"))

        outcome = await harness.run()

        assert outcome.state == ActivityState.SUCCEEDED
        assert outcome.attempts == 1
        assert outcome.result == MessageResult(text="hello")
        assert harness.host.alerts == ["hello"]
        assert harness.channel.send_count == 1
        harness.assert_overlay_released_once()

    @pytest.mark.asyncio
    async def test_card_is_handed_over_without_alert(self) -> None:
        payload = card_payload(app_id="app-2")
        harness = Harness(success(payload))

        outcome = await harness.run()

        assert isinstance(outcome.result, CardResult)
        assert harness.cards == [payload]
        assert harness.host.alerts == []
        harness.assert_overlay_released_once()

    @pytest.mark.asyncio
    async def test_succeeds_after_failures(self) -> None:
        harness = Harness(failure(), failure(), success("done"))

        outcome = await harness.run()

        assert outcome.state == ActivityState.SUCCEEDED
        assert outcome.attempts == 3
        assert harness.channel.attempt_numbers == [0, 1, 2]
        assert harness.host.alerts == ["done"]
        harness.assert_overlay_released_once()

    @pytest.mark.asyncio
    async def test_wire_payload_carries_attempt_number(self) -> None:
        harness = Harness(failure(), success("ok"))

        await harness.run(context=InvocationContext.AUTO_REFRESH)

        assert [p["attemptNumber"] for p in harness.channel.wire_payloads] == [0, 1]
        assert harness.channel.wire_payloads[0]["context"] == "AutoRefresh"
        assert harness.channel.wire_payloads[0]["activity"]["appId"] == "app-1"


class TestRetry:
    @pytest.mark.asyncio
    async def test_gives_up_after_maximum_attempts(self) -> None:
        harness = Harness(failure("still down"))

        outcome = await harness.run()

        assert outcome.state == ActivityState.GIVEN_UP
        assert outcome.attempts == 3
        assert harness.channel.attempt_numbers == [0, 1, 2]
        assert harness.sleep.delays == [3.0, 3.0]
        assert harness.host.alerts == ["still down"]
        harness.assert_overlay_released_once()

    @pytest.mark.asyncio
    async def test_failure_alert_comes_after_overlay_release(self) -> None:
        harness = Harness(failure("still down"))

        await harness.run()

        assert harness.host.events == ["attach", "detach", "alert:still down"]

    @pytest.mark.asyncio
    async def test_hook_delay_is_used(self) -> None:
        harness = Harness(
            failure(),
            hooks=CallbackHooks(on_activity_request_completed=lambda response: 250),
        )

        await harness.run()

        assert harness.sleep.delays == [0.25, 0.25]

    @pytest.mark.asyncio
    async def test_negative_delay_stops_after_one_send(self) -> None:
        responses: list[Any] = []

        def _completed(response) -> int:
            responses.append(response)
            return -1

        harness = Harness(
            failure("nope"),
            hooks=CallbackHooks(on_activity_request_completed=_completed),
        )

        outcome = await harness.run()

        assert outcome.state == ActivityState.GIVEN_UP
        assert harness.channel.send_count == 1
        assert harness.sleep.delays == []
        assert [r.content for r in responses] == ["nope"]
        assert harness.host.alerts == ["nope"]
        harness.assert_overlay_released_once()

    @pytest.mark.asyncio
    async def test_single_attempt_budget(self) -> None:
        harness = Harness(failure(), maximum_request_attempts=1)

        outcome = await harness.run()

        assert outcome.state == ActivityState.GIVEN_UP
        assert harness.channel.send_count == 1

    @pytest.mark.asyncio
    async def test_unknown_status_is_treated_as_failure(self) -> None:
        from app.domain.activity import ActivityResponse

        harness = Harness(ActivityResponse(status="Pending", content="wait"), success("ok"))

        outcome = await harness.run()

        assert outcome.state == ActivityState.SUCCEEDED
        assert harness.channel.send_count == 2

    @pytest.mark.asyncio
    async def test_history_records_retry_loop(self) -> None:
        harness = Harness(failure(), success("ok"))

        outcome = await harness.run()

        assert [t.to_state for t in outcome.history] == [
            ActivityState.RETRYING,
            ActivityState.SENDING,
            ActivityState.SUCCEEDED,
        ]
        assert outcome.history[0].metadata == {"delay_ms": 3000}

    @pytest.mark.asyncio
    async def test_given_up_log_carries_transitions(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        harness = Harness(failure())

        with caplog.at_level(logging.WARNING):
            await harness.run()

        given_up = [r for r in caplog.records if r.message == "activity_given_up"]
        assert len(given_up) == 1
        assert [t["to_state"] for t in given_up[0].transitions] == [
            "RETRYING",
            "SENDING",
            "RETRYING",
            "SENDING",
            "GIVEN_UP",
        ]


class TestTransportError:
    @pytest.mark.asyncio
    async def test_aborts_with_alert(self) -> None:
        harness = Harness(ConnectionError("boom"))

        outcome = await harness.run()

        assert outcome.state == ActivityState.ABORTED
        assert isinstance(outcome.error, TransportError)
        assert isinstance(outcome.error.__cause__, ConnectionError)
        assert harness.channel.send_count == 1
        assert harness.sleep.delays == []
        assert harness.host.alerts == ["Something went wrong: boom"]
        assert harness.host.events == ["attach", "detach", "alert:Something went wrong: boom"]

    @pytest.mark.asyncio
    async def test_abort_after_a_retry(self) -> None:
        harness = Harness(failure(), TransportError("reset"))

        outcome = await harness.run()

        assert outcome.state == ActivityState.ABORTED
        assert outcome.attempts == 2
        assert outcome.error.__cause__ is None
        harness.assert_overlay_released_once()


class TestAuthChallenge:
    @pytest.mark.asyncio
    async def test_opens_login_without_retry(self) -> None:
        harness = Harness(
            success({"type": "Activity.InvocationError.Unauthorized", "loginUrl": LOGIN_URL})
        )

        outcome = await harness.run()

        assert outcome.state == ActivityState.SUCCEEDED
        assert harness.channel.send_count == 1
        assert [p.url for p in harness.host.popups] == [LOGIN_URL]
        assert harness.host.popups[0].geometry.width == 400
        assert harness.host.alerts == []
        harness.assert_overlay_released_once()

    @pytest.mark.asyncio
    async def test_invalid_login_url_opens_nothing(self) -> None:
        harness = Harness(
            success({"type": "Activity.InvocationError.Unauthorized", "loginUrl": "not a url"})
        )

        with pytest.raises(ValidationError):
            await harness.run()

        assert harness.host.popups == []
        assert harness.channel.send_count == 1
        harness.assert_overlay_released_once()


class TestRejectedInvocations:
    @pytest.mark.asyncio
    async def test_unsupported_result_releases_overlay(self) -> None:
        harness = Harness(success({"type": "Weird"}))

        with pytest.raises(UnsupportedResultTypeError):
            await harness.run()

        assert harness.channel.send_count == 1
        harness.assert_overlay_released_once()

    @pytest.mark.asyncio
    async def test_vetoed_request_sends_nothing(self) -> None:
        harness = Harness(
            success("unused"),
            hooks=CallbackHooks(on_prepare_activity_request=lambda action, request: False),
        )

        assert await harness.run() is None
        assert harness.channel.send_count == 0
        assert harness.host.overlay_attach_count == 0

    @pytest.mark.asyncio
    async def test_non_execute_action_is_rejected(self) -> None:
        harness = Harness(success("unused"))

        with pytest.raises(UnsupportedActionError):
            await harness.run(action={"type": "Action.Submit"})

        assert harness.channel.send_count == 0

    @pytest.mark.asyncio
    async def test_missing_channel(self) -> None:
        harness = Harness(channel=None)

        with pytest.raises(ChannelNotConfiguredError, match="No channel adapter set."):
            await harness.run()


class TestProgressOverlay:
    @pytest.mark.asyncio
    async def test_custom_overlay_receives_context(self) -> None:
        contexts: list[InvocationContext] = []
        overlay = object()

        def _create(context: InvocationContext) -> object:
            contexts.append(context)
            return overlay

        harness = Harness(
            failure(),
            success("ok"),
            hooks=CallbackHooks(on_create_progress_overlay=_create),
        )

        await harness.run(context=InvocationContext.AUTO_REFRESH)

        assert contexts == [InvocationContext.AUTO_REFRESH]
        harness.assert_overlay_released_once()

    @pytest.mark.asyncio
    async def test_default_spinner_when_hook_returns_none(self) -> None:
        attached: list[Any] = []
        harness = Harness(success("ok"))
        original_attach = harness.host.attach_overlay

        def _spy(overlay: Any) -> None:
            attached.append(overlay)
            original_attach(overlay)

        harness.host.attach_overlay = _spy

        await harness.run()

        assert type(attached[0]).__name__ == "DefaultSpinner"
