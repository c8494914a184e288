"""
The record/replay mocking engine, unaware of the client's DSL.

The mocks first record the expected calls with their results,
then are switched into the replay mode where the actual calls are checked
against the recorded expectations, and finally are verified to ensure
that all the expected calls were actually made.

As a rule of thumb, this engine MUST be abstracted from the DSL mocks
to such an extent that it could be extracted as a reusable library.
"""
