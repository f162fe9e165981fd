"""
Domain layer.

The domain layer contains the assessment rules of the application.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities: Attempts, course standings and certificates
- Value Objects: Quiz snapshots, scores, proficiency scales
- Aggregate Roots: Consistency boundaries that record domain events
- Domain Services: Answer evaluation, scoring and progress aggregation
"""
