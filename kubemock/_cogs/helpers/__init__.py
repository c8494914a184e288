"""
General-purpose helpers not related to the mocks themselves
(neither to the record/replay engine nor to the DSL mocks),
which are used to prepare and describe the runtime environment.

Helpers do not depend on anything in the package. They implement
no entities or behaviours of the domain of Kubernetes client mocks,
but rather some unrelated low-level patterns.
"""
