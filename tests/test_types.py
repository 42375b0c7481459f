# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for type definitions.

These tests verify the type aliases defined in genro_muster.types module.
Tests cover:
- Import availability
- __all__ exports
- ASGI callable compatibility
"""

import pytest

from genro_muster.types import ASGIApp, Message, Receive, Scope, Send


class TestTypeImports:
    """Test that all types are importable and correctly defined."""

    def test_all_exports(self):
        """Verify __all__ contains exactly the expected exports."""
        from genro_muster import types

        expected = {
            "Scope",
            "Message",
            "Receive",
            "Send",
            "ASGIApp",
            "RawValue",
            "QueryMapping",
            "ResultValue",
            "FieldNames",
        }
        assert set(types.__all__) == expected

    def test_asgi_types_importable_from_package(self):
        """Verify ASGI types can be imported from main package."""
        from genro_muster import ASGIApp, Message, Receive, Scope, Send

        assert Scope is not None
        assert Message is not None
        assert Receive is not None
        assert Send is not None
        assert ASGIApp is not None


class TestASGICallables:
    """Test ASGI callables against the aliases."""

    @pytest.mark.asyncio
    async def test_app_signature(self):
        """A plain async function works as ASGIApp."""
        sent: list[Message] = []

        async def receive() -> Message:
            return {"type": "http.request", "body": b""}

        async def send(message: Message) -> None:
            sent.append(message)

        async def app(scope: Scope, receive: Receive, send: Send) -> None:
            await receive()
            await send({"type": "http.response.start", "status": 200})

        typed_app: ASGIApp = app
        await typed_app({"type": "http"}, receive, send)
        assert sent == [{"type": "http.response.start", "status": 200}]
