"""Domain layer package.

This package contains the synthesis engine:
- extraction: Raw declaration to interface model
- naming: Override-slot identifiers and closure signatures
- visibility: Visibility tiers and their propagation
- container: Record vs reference semantics
- synthesizer: Assembly of the mock model
- directive: The annotation that requests a mock
- expansion: One annotated declaration in, mocks or a diagnostic out
"""
