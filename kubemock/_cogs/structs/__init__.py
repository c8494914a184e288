"""
All the structures describing what is mocked: resource kinds, raw bodies,
and the shapes (protocols) of the client's fluent DSL.

All of them are purely declarative or computational.
No expectations are recorded and no mocks are created here.
"""
