"""Client library for the Stream Deck plugin protocol.

A plugin is launched by the Stream Deck application with its connection
parameters on the command line. It then registers over a local websocket and
exchanges JSON messages with the application:

    params = RegistrationParams.from_argv()
    async with await connect(params) as session:
        async for message in session:
            if isinstance(message, KeyDown):
                await session.show_ok(message.context)
"""

# `streamdeck_plugin.infra`, `streamdeck_plugin.property_inspector` and
# `streamdeck_plugin.testing` should be imported explicitly.
from ._exceptions import ArgumentError as ArgumentError
from ._exceptions import ChannelClosed as ChannelClosed
from ._exceptions import ConnectError as ConnectError
from ._exceptions import InvalidValue as InvalidValue
from ._exceptions import MissingArgument as MissingArgument
from ._exceptions import NotRegistered as NotRegistered
from ._exceptions import ProtocolError as ProtocolError
from ._exceptions import StreamDeckError as StreamDeckError
from ._logging import KeyValueFormatter as KeyValueFormatter
from ._logging import StreamDeckLogHandler as StreamDeckLogHandler
from ._messages import Alignment as Alignment
from ._messages import ApplicationDidLaunch as ApplicationDidLaunch
from ._messages import ApplicationDidTerminate as ApplicationDidTerminate
from ._messages import ApplicationPayload as ApplicationPayload
from ._messages import Color as Color
from ._messages import Command as Command
from ._messages import Coordinates as Coordinates
from ._messages import DeviceDidConnect as DeviceDidConnect
from ._messages import DeviceDidDisconnect as DeviceDidDisconnect
from ._messages import DeviceInfo as DeviceInfo
from ._messages import DeviceSize as DeviceSize
from ._messages import DeviceType as DeviceType
from ._messages import DialDown as DialDown
from ._messages import DialPayload as DialPayload
from ._messages import DialRotate as DialRotate
from ._messages import DialRotatePayload as DialRotatePayload
from ._messages import DialUp as DialUp
from ._messages import DidReceiveGlobalSettings as DidReceiveGlobalSettings
from ._messages import DidReceiveSettings as DidReceiveSettings
from ._messages import Event as Event
from ._messages import FeedbackLayoutPayload as FeedbackLayoutPayload
from ._messages import GetGlobalSettings as GetGlobalSettings
from ._messages import GetSettings as GetSettings
from ._messages import GlobalSettingsPayload as GlobalSettingsPayload
from ._messages import ImagePayload as ImagePayload
from ._messages import KeyDown as KeyDown
from ._messages import KeyPayload as KeyPayload
from ._messages import KeyUp as KeyUp
from ._messages import LogMessage as LogMessage
from ._messages import LogMessagePayload as LogMessagePayload
from ._messages import OpenUrl as OpenUrl
from ._messages import ProfilePayload as ProfilePayload
from ._messages import PropertyInspectorDidAppear as PropertyInspectorDidAppear
from ._messages import PropertyInspectorDidDisappear as PropertyInspectorDidDisappear
from ._messages import SendToPlugin as SendToPlugin
from ._messages import SendToPropertyInspector as SendToPropertyInspector
from ._messages import SetFeedback as SetFeedback
from ._messages import SetFeedbackLayout as SetFeedbackLayout
from ._messages import SetGlobalSettings as SetGlobalSettings
from ._messages import SetImage as SetImage
from ._messages import SetSettings as SetSettings
from ._messages import SetState as SetState
from ._messages import SetTitle as SetTitle
from ._messages import SetTriggerDescription as SetTriggerDescription
from ._messages import ShowAlert as ShowAlert
from ._messages import ShowOk as ShowOk
from ._messages import StatePayload as StatePayload
from ._messages import SwitchToProfile as SwitchToProfile
from ._messages import SystemDidWakeUp as SystemDidWakeUp
from ._messages import Target as Target
from ._messages import TitleParameters as TitleParameters
from ._messages import TitleParametersDidChange as TitleParametersDidChange
from ._messages import TitleParametersPayload as TitleParametersPayload
from ._messages import TitlePayload as TitlePayload
from ._messages import TouchTap as TouchTap
from ._messages import TouchTapPayload as TouchTapPayload
from ._messages import TriggerDescriptionPayload as TriggerDescriptionPayload
from ._messages import Unknown as Unknown
from ._messages import UrlPayload as UrlPayload
from ._messages import VisibilityPayload as VisibilityPayload
from ._messages import WillAppear as WillAppear
from ._messages import WillDisappear as WillDisappear
from ._messages import decode as decode
from ._registration import ApplicationInfo as ApplicationInfo
from ._registration import DeviceRecord as DeviceRecord
from ._registration import Language as Language
from ._registration import Platform as Platform
from ._registration import PluginInfo as PluginInfo
from ._registration import RegistrationInfo as RegistrationInfo
from ._registration import RegistrationParams as RegistrationParams
from ._registration import UserColors as UserColors
from ._session import PluginSession as PluginSession
from ._session import connect as connect
from .infra import MalformedMessage as MalformedMessage
from .infra import SessionState as SessionState
from .infra import encode as encode

__version__ = "0.3.0"
