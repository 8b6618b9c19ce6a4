"""Pure query functions: filtering, sorting and pagination over in-memory collections.

Rules:

1. No I/O and no logging side effects
2. Inputs are never mutated; every call returns a new tuple
"""
