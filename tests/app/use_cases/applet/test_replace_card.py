"""Testes do CardReplacer."""

from __future__ import annotations

import copy
from typing import Any

from app.domain.actions import ExecuteAction, InvocationContext
from app.domain.session import EMPTY_SESSION, AppletSession
from app.infra.cards import PydanticCardParser
from app.infra.render import InMemoryRenderHost, RenderedCard
from app.services.hooks import CallbackHooks, DefaultAppletHooks
from app.use_cases.applet import CardReplacer
from tests.fakes.cards import auto_refresh_definition, card_payload
from utils.errors import CardParseError, TemplateExpansionError, ValidationError


class TextTemplateEngine:
    """Substitui `${text}` nos TextBlocks pelo valor em data["text"]."""

    def __init__(self) -> None:
        self.calls: list[tuple[dict[str, Any], Any]] = []

    def expand(self, payload: dict[str, Any], data: Any) -> dict[str, Any]:
        self.calls.append((payload, data))
        expanded = copy.deepcopy(payload)
        for element in expanded.get("body", []):
            if element.get("text") == "${text}":
                element["text"] = data["text"]
        return expanded


class Harness:
    def __init__(self, hooks=None, template_engine=None, host=None, start_invocation=None) -> None:
        self.host = host or InMemoryRenderHost()
        self.session: AppletSession = EMPTY_SESSION
        self.invocations: list[tuple[str, ExecuteAction, InvocationContext]] = []
        self.replacer = CardReplacer(
            host=self.host,
            parser=PydanticCardParser(),
            hooks=hooks or DefaultAppletHooks(),
            start_invocation=start_invocation or self._start,
            commit=self._commit,
            template_engine=template_engine,
        )

    def _start(self, app_id: str, action: ExecuteAction, context: InvocationContext) -> None:
        self.invocations.append((app_id, action, context))

    def _commit(self, session: AppletSession) -> None:
        self.session = session

    def replace(self, payload: Any):
        return self.replacer.replace(self.session, payload)


def test_replaces_displayed_card() -> None:
    harness = Harness()
    harness.host.append("stale element")

    result = harness.replace(card_payload())

    assert result.success
    assert result.session is harness.session
    assert harness.session.card.app_id == "app-1"
    assert harness.session.data is None
    assert len(harness.host.children) == 1
    assert isinstance(harness.host.children[0], RenderedCard)
    assert harness.invocations == []


def test_card_actions_start_user_invocations() -> None:
    harness = Harness()
    harness.replace(card_payload())

    harness.host.click("approve")

    assert len(harness.invocations) == 1
    app_id, action, context = harness.invocations[0]
    assert app_id == "app-1"
    assert action.verb == "approve"
    assert context == InvocationContext.USER_INTERACTION


def test_missing_app_id_keeps_previous_card() -> None:
    harness = Harness()
    harness.replace(card_payload(text="first"))
    previous = harness.session

    result = harness.replace(card_payload(app_id=None))

    assert result.success is False
    assert isinstance(result.error, ValidationError)
    assert str(result.error) == "Invalid card payload. The appId property is missing."
    assert harness.session is previous
    assert harness.host.displayed_card is previous.card


def test_parse_error_is_reported() -> None:
    harness = Harness()

    result = harness.replace({"type": "AdaptiveCard", "appId": "app-1", "body": "oops"})

    assert isinstance(result.error, CardParseError)
    assert harness.host.children == []


def test_non_object_payload_fails() -> None:
    result = Harness().replace("not a card")
    assert isinstance(result.error, ValidationError)


def test_card_changing_veto_cancels_silently() -> None:
    changed: list[bool] = []
    hooks = CallbackHooks(
        on_card_changing=lambda payload: False,
        on_card_changed=lambda: changed.append(True),
    )
    harness = Harness(hooks=hooks)

    result = harness.replace(card_payload())

    assert result.vetoed is True
    assert result.error is None
    assert harness.session is EMPTY_SESSION
    assert harness.host.render_count == 0
    assert changed == []


def test_card_changed_sees_new_session() -> None:
    seen: list[str] = []
    holder: dict[str, Harness] = {}
    hooks = CallbackHooks(
        on_card_changed=lambda: seen.append(holder["harness"].session.card.app_id),
    )
    harness = holder["harness"] = Harness(hooks=hooks)

    harness.replace(card_payload(app_id="app-2"))

    assert seen == ["app-2"]


def test_bound_data_is_expanded() -> None:
    engine = TextTemplateEngine()
    harness = Harness(template_engine=engine)
    payload = card_payload(text="${text}", **{"$data": {"text": "Bound"}})

    result = harness.replace(payload)

    assert result.success
    assert harness.session.data == {"text": "Bound"}
    assert "$data" not in harness.session.payload
    assert harness.session.card.body[0]["text"] == "Bound"
    assert "$data" in payload


def test_bound_data_without_engine_fails() -> None:
    harness = Harness()

    result = harness.replace(card_payload(**{"$data": {"text": "x"}}))

    assert isinstance(result.error, TemplateExpansionError)


def test_engine_failure_is_wrapped() -> None:
    class BrokenEngine:
        def expand(self, payload, data):
            raise KeyError("text")

    harness = Harness(template_engine=BrokenEngine())

    result = harness.replace(card_payload(**{"$data": {}}))

    assert isinstance(result.error, TemplateExpansionError)
    assert isinstance(result.error.__cause__, KeyError)


def test_plain_object_rebinds_current_template() -> None:
    engine = TextTemplateEngine()
    harness = Harness(template_engine=engine)
    harness.replace(card_payload(text="${text}", **{"$data": {"text": "First"}}))
    template = harness.session.payload

    result = harness.replace({"text": "Second"})

    assert result.success
    assert harness.session.payload is template
    assert harness.session.data == {"text": "Second"}
    assert harness.host.displayed_card.body[0]["text"] == "Second"


def test_plain_object_without_current_card_fails() -> None:
    result = Harness().replace({"text": "orphan"})
    assert isinstance(result.error, ValidationError)


def test_auto_refresh_starts_exactly_once() -> None:
    harness = Harness()

    harness.replace(card_payload(auto_refresh=auto_refresh_definition("refresh")))

    assert len(harness.invocations) == 1
    app_id, action, context = harness.invocations[0]
    assert app_id == "app-1"
    assert action.verb == "refresh"
    assert context == InvocationContext.AUTO_REFRESH


def test_empty_render_keeps_session_without_auto_refresh() -> None:
    class BlankHost(InMemoryRenderHost):
        def render_card(self, card):
            return None

    harness = Harness(host=BlankHost())
    harness.host.append("stale element")

    result = harness.replace(card_payload(auto_refresh=auto_refresh_definition()))

    assert result.success
    assert harness.host.children == []
    assert harness.invocations == []


def test_hook_exception_is_reported() -> None:
    hook_error = RuntimeError("boom")

    def _raise(payload):
        raise hook_error

    harness = Harness(hooks=CallbackHooks(on_card_changing=_raise))

    result = harness.replace(card_payload())

    assert result.error is hook_error


class TestFailuresAfterSwap:
    def test_raising_card_changed_keeps_new_card(self) -> None:
        hook_error = RuntimeError("changed hook failed")

        def _raise() -> None:
            raise hook_error

        harness = Harness(hooks=CallbackHooks(on_card_changed=_raise))
        harness.replace(card_payload(app_id="old"))

        result = harness.replace(card_payload(app_id="new"))

        assert result.success is True
        assert result.error is None
        assert result.post_swap_errors == (hook_error,)
        assert harness.session.card.app_id == "new"
        assert harness.host.displayed_card is harness.session.card

    def test_failed_auto_refresh_still_notifies_card_changed(self) -> None:
        changed: list[str] = []
        start_error = RuntimeError("no running event loop")

        def _start(app_id, action, context) -> None:
            raise start_error

        harness = Harness(
            hooks=CallbackHooks(on_card_changed=lambda: changed.append("changed")),
            start_invocation=_start,
        )

        result = harness.replace(card_payload(auto_refresh=auto_refresh_definition()))

        assert result.success is True
        assert result.post_swap_errors == (start_error,)
        assert changed == ["changed"]
        assert harness.host.displayed_card is harness.session.card

    def test_failed_append_is_reported_on_committed_swap(self) -> None:
        append_error = OSError("display detached")

        class BrokenAppendHost(InMemoryRenderHost):
            def append(self, element):
                raise append_error

        changed: list[str] = []
        harness = Harness(
            hooks=CallbackHooks(on_card_changed=lambda: changed.append("changed")),
            host=BrokenAppendHost(),
        )

        result = harness.replace(card_payload(auto_refresh=auto_refresh_definition()))

        assert result.success is True
        assert result.post_swap_errors == (append_error,)
        assert harness.session.card.app_id == "app-1"
        assert harness.invocations == []
        assert changed == []

    def test_render_failure_keeps_previous_card(self) -> None:
        class FlakyRenderHost(InMemoryRenderHost):
            fail = False

            def render_card(self, card):
                if self.fail:
                    raise RuntimeError("render failed")
                return super().render_card(card)

        harness = Harness(host=FlakyRenderHost())
        harness.replace(card_payload(app_id="old"))
        previous = harness.session
        harness.host.fail = True

        result = harness.replace(card_payload(app_id="new"))

        assert result.success is False
        assert harness.session is previous
        assert harness.host.displayed_card is previous.card
