"""
All configuration flags, options, settings to fine-tune the mocks.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

The settings object is created once per client mock (or per standalone
operation mock) and is shared by all the mocks spawned from it:
the narrowed operations, the editors, and the delegates of all of them.
Changing the settings after the mocks are created affects all of them,
but only for the calls made after the change.

Some of the settings are flags, some are scalars, some are optional,
some are not (but all of them have reasonable defaults).
"""
import dataclasses
import logging


@dataclasses.dataclass
class RecordingSettings:

    strict: bool = False
    """
    Should the calls be replayed in the same order as they were recorded?

    In the non-strict mode (the default), every call is matched against
    all the recorded expectations regardless of their order.

    In the strict mode, a call cannot skip over the expectations that were
    recorded before the matching one and are not yet satisfied.
    The order is checked per delegate (i.e. per individual mock), not across
    the narrowed operations, since these are different objects.
    """

    check_signatures: bool = True
    """
    Should the calls be checked against the signatures of the client's DSL?

    If enabled (the default), calling a non-existent DSL method fails
    with ``AttributeError``, and calling a method with wrong arguments fails
    with ``TypeError`` -- both when recording and when replaying.
    """


@dataclasses.dataclass
class ReplayingSettings:

    fail_fast: bool = True
    """
    Should the unexpected calls fail immediately when they are made?

    If enabled (the default), the unexpected calls raise
    `UnexpectedCallError` at the point of the call, i.e. in the code under test.

    If disabled, the unexpected calls are logged as warnings, return ``None``,
    and are raised later on verification. This is useful when the code under
    test swallows the errors, so the failures would be otherwise invisible.
    """


@dataclasses.dataclass
class LoggingSettings:

    level: int = logging.DEBUG
    """
    The level of the messages about recording, replaying & verifying the mocks.

    The failures are logged regardless of this level, with their own levels:
    errors for immediate failures, warnings for the deferred ones.
    """


@dataclasses.dataclass
class MockSettings:
    recording: RecordingSettings = dataclasses.field(default_factory=RecordingSettings)
    replaying: ReplayingSettings = dataclasses.field(default_factory=ReplayingSettings)
    logging: LoggingSettings = dataclasses.field(default_factory=LoggingSettings)
