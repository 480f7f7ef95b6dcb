"""
This __init__.py file is kept in the root tests directory while other __init__.py files
in the test structure are left out for simplicity.

It makes pytest treat tests/ as a package, so test modules can import shared helpers
with `from tests.helpers...`. Subdirectories work as namespace packages (PEP 420).
"""
