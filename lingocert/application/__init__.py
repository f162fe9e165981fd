"""
Application layer.

The application layer orchestrates domain objects. It contains one use
case per operation the API exposes (start, answer, submit, abandon,
recompute, issue, verify) and the ports those use cases depend on.

This layer contains:
- Use Cases: Orchestrate domain logic inside explicit transactions
- DTOs: Data transfer objects for query results
- Ports: Repository and unit-of-work protocols implemented by infrastructure
"""
