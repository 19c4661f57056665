from .config import PulseDeckConfig
from .discovery import InMemoryDiscoverySource
from .entitlement import CallableEntitlementGate, StaticEntitlementGate
from .event_pusher import LoggingEventPusher, NullEventPusher, QueueEventPusher
from .feedback import LoggingFeedbackSink, NullFeedbackSink, RecordingFeedbackSink

__all__ = [
    "PulseDeckConfig",
    "InMemoryDiscoverySource",
    "CallableEntitlementGate", "StaticEntitlementGate",
    "LoggingEventPusher", "NullEventPusher", "QueueEventPusher",
    "LoggingFeedbackSink", "NullFeedbackSink", "RecordingFeedbackSink",
]
