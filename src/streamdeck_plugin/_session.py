from __future__ import annotations

from typing import Any, Dict, Optional, Type

from . import infra
from ._exceptions import NotRegistered
from ._messages import (
    Event,
    FeedbackLayoutPayload,
    GetGlobalSettings,
    GetSettings,
    ImagePayload,
    LogMessage,
    LogMessagePayload,
    OpenUrl,
    ProfilePayload,
    SendToPropertyInspector,
    SetFeedback,
    SetFeedbackLayout,
    SetGlobalSettings,
    SetImage,
    SetSettings,
    SetState,
    SetTitle,
    SetTriggerDescription,
    ShowAlert,
    ShowOk,
    StatePayload,
    SwitchToProfile,
    Target,
    TitlePayload,
    TriggerDescriptionPayload,
    UrlPayload,
)
from ._registration import RegistrationParams


class PluginSession(infra.Session[Event]):
    """Session for a plugin process. Adds shorthands for the common commands on top
    of `send()`.

    Most plugins should create one with `connect()`:

        params = RegistrationParams.from_argv()
        async with await connect(params) as session:
            async for message in session:
                ...
    """

    def __init__(
        self,
        channel: infra.Channel,
        message_class: Type[Event] = Event,
        verbose: bool = False,
    ) -> None:
        super().__init__(channel, message_class, verbose=verbose)
        self._plugin_uuid: Optional[str] = None

    @property
    def plugin_uuid(self) -> Optional[str]:
        """UUID we registered with. None before `register()`."""
        return self._plugin_uuid

    async def register(self, register_event: str, plugin_uuid: str) -> None:
        self._plugin_uuid = plugin_uuid
        await super().register(register_event, plugin_uuid)

    async def set_title(
        self,
        context: str,
        title: Optional[str],
        target: Target = Target.BOTH,
        state: Optional[int] = None,
    ) -> None:
        """Set the title of an action instance. None restores the user's title."""
        await self.send(SetTitle(context, TitlePayload(title, target, state)))

    async def set_image(
        self,
        context: str,
        image: Optional[str],
        target: Target = Target.BOTH,
        state: Optional[int] = None,
    ) -> None:
        """Set the image of an action instance, as a data URL or SVG string."""
        await self.send(SetImage(context, ImagePayload(image, target, state)))

    async def set_state(self, context: str, state: int) -> None:
        await self.send(SetState(context, StatePayload(state)))

    async def show_alert(self, context: str) -> None:
        await self.send(ShowAlert(context))

    async def show_ok(self, context: str) -> None:
        await self.send(ShowOk(context))

    async def get_settings(self, context: str) -> None:
        """Request settings. They arrive later as a `DidReceiveSettings` event."""
        await self.send(GetSettings(context))

    async def set_settings(self, context: str, settings: Dict[str, Any]) -> None:
        await self.send(SetSettings(context, settings))

    async def get_global_settings(self) -> None:
        """Request global settings. They arrive later as a
        `DidReceiveGlobalSettings` event."""
        await self.send(GetGlobalSettings(self._require_uuid()))

    async def set_global_settings(self, settings: Dict[str, Any]) -> None:
        await self.send(SetGlobalSettings(self._require_uuid(), settings))

    async def send_to_property_inspector(
        self, action: str, context: str, payload: Dict[str, Any]
    ) -> None:
        await self.send(SendToPropertyInspector(action, context, payload))

    async def switch_to_profile(
        self, device: str, profile: str, page: Optional[int] = None
    ) -> None:
        await self.send(
            SwitchToProfile(self._require_uuid(), device, ProfilePayload(profile, page))
        )

    async def open_url(self, url: str) -> None:
        await self.send(OpenUrl(UrlPayload(url)))

    async def log_message(self, message: str) -> None:
        """Write a line to the application's log file for this plugin."""
        await self.send(LogMessage(LogMessagePayload(message)))

    async def set_feedback(self, context: str, feedback: Dict[str, Any]) -> None:
        """Update items of the touch screen layout of a dial action."""
        await self.send(SetFeedback(context, feedback))

    async def set_feedback_layout(self, context: str, layout: str) -> None:
        await self.send(SetFeedbackLayout(context, FeedbackLayoutPayload(layout)))

    async def set_trigger_description(
        self,
        context: str,
        long_touch: Optional[str] = None,
        push: Optional[str] = None,
        rotate: Optional[str] = None,
        touch: Optional[str] = None,
    ) -> None:
        await self.send(
            SetTriggerDescription(
                context, TriggerDescriptionPayload(long_touch, push, rotate, touch)
            )
        )

    def _require_uuid(self) -> str:
        if self._plugin_uuid is None:
            raise NotRegistered("session has not been registered")
        return self._plugin_uuid

    @classmethod
    async def connect(
        cls,
        params: RegistrationParams,
        host: str = "127.0.0.1",
        verbose: bool = False,
    ) -> PluginSession:
        """Connect to the Stream Deck application with the parameters it launched
        us with, and register.

        Raises:
            ConnectError: the websocket couldn't be opened.
        """
        session = await cls.open(
            params.port,
            params.register_event,
            params.plugin_uuid,
            Event,
            host=host,
            verbose=verbose,
        )
        assert isinstance(session, PluginSession)
        return session


async def connect(
    params: RegistrationParams,
    host: str = "127.0.0.1",
    verbose: bool = False,
) -> PluginSession:
    """Shorthand for `PluginSession.connect()`."""
    return await PluginSession.connect(params, host=host, verbose=verbose)
