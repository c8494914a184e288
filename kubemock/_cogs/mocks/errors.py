"""
Errors of the record/replay mocks.

The verification errors are also assertion errors, so that the test
frameworks report them as test failures rather than as test errors.
All other errors indicate a misuse of the mocks by the tests themselves.

The original errors (e.g. of failed instantiation of the mocks)
are chained as the causes of our own errors -- for better explainability
of errors in the stack traces.
"""


class MockError(Exception):
    """ A base class for all errors of the mocks. """


class LifecycleError(MockError):
    """ An operation is not possible in the current state of the mock. """


class MockInstantiationError(MockError):
    """ A nested mock could not be created. """


class UnsupportedOperationError(MockError, NotImplementedError):
    """ The DSL operation cannot be mocked. """


class VerificationError(MockError, AssertionError):
    """ The actual calls do not match the recorded expectations. """


class UnexpectedCallError(VerificationError):
    """ A call was made that was not expected, or was expected fewer times. """


class UnfulfilledExpectationError(VerificationError):
    """ An expected call was not made, or was made fewer times than expected. """
