"""Shared pytest configuration.

Environment fixtures are created per module with
``tests.harness.create_env_fixture``; object builders live in
``tests.factories``.
"""
