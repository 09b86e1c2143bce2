"""Core mathematics for the Kelly Edge calculator.

This package contains pure building blocks:

- ``odds_math``: probability and odds text parsing
- ``kelly``: Kelly fraction and expected log growth
- ``calculator``: input/result structs, validation, ``compute`` and presets
- ``breakdown``: step-by-step text and display strings for a result

Nothing in this package imports from ``backend.main``, ``backend.schemas``
or ``dashboard``.  All modules are side-effect-free and unit-testable in
isolation.
"""
